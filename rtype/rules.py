"""Game-wide rules: level state, player revival and thread-safe spawning."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Hashable

from rtype.components import SpriteComponent
from rtype.ecs import Entity
from rtype.entities import (
    create_alien_boss,
    create_mosquito,
    create_plane,
    create_player_projectile,
)
from rtype.settings import SCREEN_HEIGHT, SCREEN_WIDTH
from rtype.vec import Vec2

if TYPE_CHECKING:
    from rtype.game import GameStruct

_REVIVE_HEAL = 3
_KILL_DAMAGE = 100


def check_if_level(game: GameStruct) -> bool:
    """True while either level is running."""
    return game.start_level_one or game.start_level_two


def check_if_alive(game: GameStruct) -> bool:
    """True when at least one connected player is alive."""
    with game.client_lock:
        return any(
            game.coordinator.get_component(entity, SpriteComponent).is_alive
            for entity in game.players.values()
        )


def random_color(rng: random.Random) -> tuple[int, int, int]:
    """A random RGB colour."""
    return rng.randrange(256), rng.randrange(256), rng.randrange(256)


def create_mosquito_safely(game: GameStruct) -> Entity:
    """Spawn a mosquito while holding the mosquito lock."""
    with game.mosquito_lock:
        return create_mosquito(game)


def create_plane_safely(game: GameStruct) -> Entity:
    """Spawn a plane while holding the plane lock."""
    with game.plane_lock:
        return create_plane(game)


def create_alien_boss_safely(game: GameStruct) -> Entity:
    """Spawn the alien boss while holding the boss lock."""
    with game.alien_boss_lock:
        return create_alien_boss(game)


def create_player_projectile_safely(game: GameStruct, endpoint: Hashable) -> Entity | None:
    """Fire a player's projectile while holding the player-projectile lock."""
    with game.player_projectiles_lock:
        return create_player_projectile(game, endpoint)


def revive_players(game: GameStruct) -> bool:
    """Put every player back at the start point with 3 more hit points.

    Returns False when no player is connected.
    """
    with game.client_lock:
        if not game.players:
            return False
        start = Vec2(SCREEN_WIDTH // 4, SCREEN_HEIGHT // 2)
        for entity in game.players.values():
            game.movement_system.set(start, entity)
            game.damage_system.heal_damage(_REVIVE_HEAL, entity)
        return True


def kill_every_entities(game: GameStruct) -> None:
    """Deal lethal damage to every enemy and projectile."""
    groups = (
        (game.mosquito_lock, game.enemies_mosquito),
        (game.plane_lock, game.enemies_plane),
        (game.alien_boss_lock, game.enemies_alien_boss),
        (game.plane_projectiles_lock, game.projectiles_plane),
        (game.straight_projectiles_lock, game.projectiles_straight),
        (game.player_projectiles_lock, game.projectiles_player),
    )
    for lock, entities in groups:
        with lock:
            for entity in entities:
                game.damage_system.take_damage(_KILL_DAMAGE, entity)