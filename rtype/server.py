"""UDP game server: logs players in, applies their commands and streams entity states."""

from __future__ import annotations

import argparse
import logging
import socket
import threading
import time
from typing import Any, Callable, Hashable

from rtype.collision import CollisionSystem
from rtype.components import SpriteComponent
from rtype.ecs import Entity
from rtype.game import GameStruct
from rtype.levels import level_one, level_two
from rtype.projectiles import ProjectileSystem
from rtype.protocol import decode_key, entity_state
from rtype.rules import (
    check_if_alive,
    check_if_level,
    create_player_projectile_safely,
    kill_every_entities,
    revive_players,
)
from rtype.entities import create_player
from rtype.settings import DEFAULT_PORT, FPS, MAX_PLAYERS, KeyCode
from rtype.vec import Vec2

logger = logging.getLogger(__name__)

_BUFFER_SIZE = 1024
_FRAME_SECONDS = (1000 // FPS) / 1000
_RECEIVE_TIMEOUT = 0.2
_PLAYER_STEP = 5.0
_DEBUG_DAMAGE = 1
_DISCONNECT_DAMAGE = 3

_MOVES = {
    KeyCode.LEFT: Vec2(-_PLAYER_STEP, 0.0),
    KeyCode.RIGHT: Vec2(_PLAYER_STEP, 0.0),
    KeyCode.UP: Vec2(0.0, -_PLAYER_STEP),
    KeyCode.DOWN: Vec2(0.0, _PLAYER_STEP),
}

Spawner = Callable[..., Any]


def _start_daemon(target: Callable[..., Any], *args: Any) -> None:
    threading.Thread(target=target, args=args, daemon=True).start()


class GameServer:
    """Owns the game state and talks to clients through a datagram socket.

    ``spawn`` is called as ``spawn(target, *args)`` to run a level in the
    background; by default it starts a daemon thread.
    """

    def __init__(
        self, sock: Any, game: GameStruct | None = None, spawn: Spawner | None = None
    ) -> None:
        self.sock = sock
        self.game = game or GameStruct(
            projectile_system=ProjectileSystem(), collision_system=CollisionSystem()
        )
        self.spawn = spawn or _start_daemon
        self.did_kill = True
        self._stopped = threading.Event()

    # Incoming datagrams

    def handle_datagram(self, data: bytes, endpoint: Hashable) -> None:
        """Apply a key code (two bytes) or treat anything else as a login name."""
        if len(data) == 2:
            self._handle_key(decode_key(data), endpoint)
        else:
            self._handle_login(data.decode("utf-8", errors="replace"), endpoint)

    def _player(self, endpoint: Hashable) -> Entity | None:
        with self.game.client_lock:
            return self.game.players.get(endpoint)

    def _handle_key(self, code: int, endpoint: Hashable) -> None:
        game = self.game
        logger.info("received key %d from %s", code, endpoint)
        if code in _MOVES:
            player = self._player(endpoint)
            if player is not None:
                game.movement_system.move(_MOVES[KeyCode(code)], player)
        elif code == KeyCode.DEBUG_DAMAGE:
            player = self._player(endpoint)
            if player is not None:
                game.damage_system.take_damage(_DEBUG_DAMAGE, player)
        elif code == KeyCode.SHOOT:
            if self._player(endpoint) is not None:
                create_player_projectile_safely(game, endpoint)
        elif code == KeyCode.LEVEL_ONE:
            self._start_level(level_one, "start_level_one")
        elif code == KeyCode.LEVEL_TWO:
            self._start_level(level_two, "start_level_two")
        elif code == KeyCode.DISCONNECT:
            with game.client_lock:
                player = game.players.pop(endpoint, None)
                if player is not None:
                    logger.info("client %s disconnected", endpoint)
                    game.damage_system.take_damage(_DISCONNECT_DAMAGE, player)

    def _start_level(self, level: Callable[..., None], flag: str) -> None:
        game = self.game
        with game.level_one_lock, game.level_two_lock:
            if getattr(game, flag) or check_if_level(game):
                return
            logger.info("%s", flag.replace("start_", "starting "))
            revive_players(game)
            setattr(game, flag, True)
            self.did_kill = False
            self.spawn(level, game)

    def _handle_login(self, name: str, endpoint: Hashable) -> None:
        game = self.game
        with game.client_lock:
            if endpoint in game.players:
                return
            if len(game.players) >= MAX_PLAYERS:
                logger.info("maximum number of clients reached, refusing %s", endpoint)
                return
            create_player(game, name, endpoint)
        logger.info("client %r logged in from %s", name, endpoint)

    # Outgoing states

    def send_entity(self, entity: Entity) -> bool:
        """Send an entity's state to every client; return whether it is alive."""
        state = entity_state(self.game.coordinator, entity)
        payload = state.pack()
        with self.game.client_lock:
            endpoints = list(self.game.players)
        for endpoint in endpoints:
            self.sock.sendto(payload, endpoint)
        return state.is_alive

    def send_frame(self) -> list[Entity]:
        """Send every player and non-player entity; destroy and return the dead ones."""
        game = self.game
        with game.client_lock:
            for player in list(game.players.values()):
                self.send_entity(player)

        destroyed: list[Entity] = []
        for lock, entities in (
            (game.mosquito_lock, game.enemies_mosquito),
            (game.plane_lock, game.enemies_plane),
            (game.alien_boss_lock, game.enemies_alien_boss),
            (game.plane_projectiles_lock, game.projectiles_plane),
            (game.straight_projectiles_lock, game.projectiles_straight),
            (game.player_projectiles_lock, game.projectiles_player),
        ):
            with lock:
                survivors = []
                for entity in entities:
                    if self.send_entity(entity):
                        survivors.append(entity)
                    else:
                        game.coordinator.destroy_entity(entity)
                        destroyed.append(entity)
                entities[:] = survivors
        return destroyed

    # Simulation

    def update(self) -> None:
        """Advance the simulation one frame and apply the level rules."""
        game = self.game
        if game.projectile_system is not None:
            game.projectile_system.projectile_routine(game)
        game.movement_system.update_enemies(game)
        if game.collision_system is not None:
            game.collision_system.update(game)

        with game.level_one_lock, game.level_two_lock:
            if not check_if_level(game):
                if not self.did_kill:
                    self.did_kill = True
                    kill_every_entities(game)
            elif not check_if_alive(game):
                game.start_level_one = False
                game.start_level_two = False
                logger.info("players died - level ends")

    def player_alive(self, endpoint: Hashable) -> bool:
        """Whether the player logged in from ``endpoint`` is alive."""
        player = self._player(endpoint)
        if player is None:
            return False
        return self.game.coordinator.get_component(player, SpriteComponent).is_alive

    # Running

    def _every_frame(self, step: Callable[[], Any]) -> None:
        while not self._stopped.is_set():
            started = time.monotonic()
            try:
                step()
            except Exception:
                logger.exception("frame step failed")
            remaining = _FRAME_SECONDS - (time.monotonic() - started)
            if remaining > 0:
                self._stopped.wait(remaining)

    def stop(self) -> None:
        """Ask a running server to finish."""
        self._stopped.set()

    def run(self) -> None:
        """Serve until stopped: stream states, simulate and receive datagrams."""
        workers = [
            threading.Thread(target=self._every_frame, args=(self.send_frame,), daemon=True),
            threading.Thread(target=self._every_frame, args=(self.update,), daemon=True),
        ]
        for worker in workers:
            worker.start()
        self.sock.settimeout(_RECEIVE_TIMEOUT)
        try:
            while not self._stopped.is_set():
                try:
                    data, endpoint = self.sock.recvfrom(_BUFFER_SIZE)
                except socket.timeout:
                    continue
                except OSError as exc:
                    if self._stopped.is_set():
                        break
                    logger.error("receive failed: %s", exc)
                    continue
                self.handle_datagram(data, endpoint)
        finally:
            self._stopped.set()
            for worker in workers:
                worker.join()


def main(argv: list[str] | None = None) -> int:
    """Start the game server on a UDP port."""
    parser = argparse.ArgumentParser(description="Run the game server.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="UDP port")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((args.host, args.port))
        logger.info("listening on %s:%d", args.host, args.port)
        server = GameServer(sock)
        try:
            server.run()
        except KeyboardInterrupt:
            server.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())