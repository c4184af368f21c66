"""Client side of the UDP link: login, key codes out, entity states in."""

from __future__ import annotations

import logging
import socket
from typing import Any

from rtype.protocol import EntityState, encode_key
from rtype.world import World

logger = logging.getLogger(__name__)

_BUFFER_SIZE = 1024


def parse_address(ip_port: str) -> tuple[str, int]:
    """Split ``"host:port"`` into a host and a port number."""
    host, sep, port = ip_port.partition(":")
    if not sep:
        raise ValueError(f"address {ip_port!r} has no port")
    try:
        number = int(port)
    except ValueError:
        raise ValueError(f"invalid port {port!r}") from None
    if not 0 < number <= 0xFFFF:
        raise ValueError(f"port {number} out of range")
    return host, number


class ClientConnection:
    """A datagram socket talking to one game server and feeding a world."""

    def __init__(self, sock: Any, server: tuple[str, int], world: World) -> None:
        self.sock = sock
        self.server = server
        self.world = world
        self._closed = False

    def __enter__(self) -> ClientConnection:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def send_key(self, key_code: int) -> None:
        """Send a two-byte key code to the server."""
        self.sock.sendto(encode_key(int(key_code)), self.server)

    def handle_packet(self, data: bytes) -> bool:
        """Apply a received entity state to the world; False if ``data`` is not one."""
        if len(data) != EntityState.SIZE:
            return False
        self.world.apply(EntityState.unpack(data))
        return True

    def receive_forever(self) -> None:
        """Read datagrams until the connection is closed or the socket fails."""
        while not self._closed:
            try:
                data, _ = self.sock.recvfrom(_BUFFER_SIZE)
            except ConnectionResetError:
                continue
            except OSError as exc:
                if not self._closed:
                    logger.error("receive failed: %s", exc)
                return
            self.handle_packet(data)

    def close(self) -> None:
        """Stop receiving and close the socket."""
        self._closed = True
        self.sock.close()


def connect(ip_port: str, pseudo: str, world: World) -> ClientConnection:
    """Open a socket, send the player name to the server and return the connection."""
    host, port = parse_address(ip_port)
    logger.info("ip: %s", host)
    logger.info("port: %d", port)
    info = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_DGRAM)
    server = info[0][4]
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", 0))
        sock.sendto(pseudo.encode(), server)
    except OSError:
        sock.close()
        raise
    return ClientConnection(sock, (server[0], server[1]), world)