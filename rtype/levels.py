"""Scripted enemy waves of the two levels."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from rtype.rules import create_alien_boss_safely, create_mosquito_safely, create_plane_safely

if TYPE_CHECKING:
    from rtype.game import GameStruct

logger = logging.getLogger(__name__)

MOSQUITO = 1
PLANE = 2

LEVEL_ONE_DURATION_MS = 90_000
LEVEL_TWO_MIN_SECONDS = 5
_BOSS_DELAY_SECONDS = 1
_WAVE_LENGTH = 14
_POLL_INTERVAL = 0.001


@dataclass(frozen=True)
class Action:
    """One scheduled spawn: its time in the wave, its index and the enemy kind."""

    time_ms: int
    action: int
    enemy_code: int


LEVEL_ONE_ACTIONS: tuple[Action, ...] = (
    Action(1000, 0, MOSQUITO),
    Action(1150, 1, MOSQUITO),
    Action(1300, 2, MOSQUITO),
    Action(1450, 3, MOSQUITO),
    Action(2000, 4, PLANE),
    Action(2200, 5, MOSQUITO),
    Action(2400, 6, MOSQUITO),
    Action(2500, 7, PLANE),
    Action(3000, 8, MOSQUITO),
    Action(3300, 9, MOSQUITO),
    Action(3600, 10, MOSQUITO),
    Action(3500, 11, PLANE),
    Action(3900, 12, MOSQUITO),
    Action(4000, 13, PLANE),
    Action(4100, 14, MOSQUITO),
)


def level_one(game: GameStruct, clock: Callable[[], float] = time.monotonic) -> None:
    """Spawn repeating waves until the level is stopped or 90 seconds pass.

    ``clock`` returns the current time in seconds.
    """
    start = clock()
    initial_start = start
    index = 0

    while True:
        now = clock()
        elapsed_ms = int((now - start) * 1000)
        total_ms = int((now - initial_start) * 1000)

        if index < len(LEVEL_ONE_ACTIONS) and elapsed_ms >= LEVEL_ONE_ACTIONS[index].time_ms:
            enemy_code = LEVEL_ONE_ACTIONS[index].enemy_code
            if enemy_code == MOSQUITO:
                create_mosquito_safely(game)
            elif enemy_code == PLANE:
                create_plane_safely(game)
            index += 1

        if index == _WAVE_LENGTH:
            start = now
            index = 0

        with game.level_one_lock:
            if not game.start_level_one:
                return

        if total_ms >= LEVEL_ONE_DURATION_MS:
            with game.level_one_lock:
                game.start_level_one = False
            logger.info("Level One ends - Win!")
            return

        time.sleep(_POLL_INTERVAL)


def level_two(game: GameStruct, clock: Callable[[], float] = time.monotonic) -> None:
    """Spawn the alien boss after a second and end once it is gone.

    The level lasts at least five seconds. ``clock`` returns seconds.
    """
    start = clock()
    boss_spawned = False

    while True:
        now = clock()
        elapsed_seconds = int(now - start)

        if elapsed_seconds >= _BOSS_DELAY_SECONDS and not boss_spawned:
            boss_spawned = True
            create_alien_boss_safely(game)

        with game.alien_boss_lock:
            boss_gone = not game.enemies_alien_boss
        if boss_gone and elapsed_seconds >= LEVEL_TWO_MIN_SECONDS:
            with game.level_two_lock:
                game.start_level_two = False
            logger.info("Level Two ends - Win!")
            return

        time.sleep(_POLL_INTERVAL)