"""Game client entry point: menu, connection and game screen."""

from __future__ import annotations

import argparse
import logging
import threading
from typing import Any, Callable

import pygame

from rtype.client_game import run_game
from rtype.client_network import connect, parse_address
from rtype.menu import run_menu
from rtype.settings import DEFAULT_ADDRESS, SCREEN_HEIGHT, SCREEN_WIDTH, GameState
from rtype.world import World

logger = logging.getLogger(__name__)

DEFAULT_NAME = "leo"
_RECEIVER_JOIN_TIMEOUT = 1.0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Read the server address and player name from the command line."""
    parser = argparse.ArgumentParser(description="Play the game.")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="server host:port")
    parser.add_argument("--name", default=DEFAULT_NAME, help="player name")
    args = parser.parse_args(argv)
    try:
        parse_address(args.address)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def run_states(
    screen: Any,
    address: str,
    name: str,
    *,
    menu: Callable[[Any], Any] = run_menu,
    game: Callable[[Any, World, Any], GameState] = run_game,
    connector: Callable[[str, str, World], Any] = connect,
) -> GameState:
    """Go from the menu to the game until a screen asks to exit."""
    world = World()
    connection = None
    state = GameState.MENU
    while state != GameState.EXIT:
        if state == GameState.MENU:
            state = menu(screen).state
            if state == GameState.GAME:
                connection = connector(address, name, world)
        elif state == GameState.GAME:
            receiver = threading.Thread(target=connection.receive_forever, daemon=True)
            receiver.start()
            try:
                state = game(screen, world, connection)
            finally:
                connection.close()
                receiver.join(_RECEIVER_JOIN_TIMEOUT)
        else:
            state = GameState.MENU
    return state


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run the client."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("R-Type")
        run_states(screen, args.address, args.name)
    except OSError as exc:
        logger.error("network error: %s", exc)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())