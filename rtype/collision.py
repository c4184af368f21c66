"""Axis-aligned collision detection between players, enemies and projectiles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import chain
from typing import TYPE_CHECKING

from rtype.components import PositionComponent, SpriteComponent
from rtype.ecs import Entity, System

if TYPE_CHECKING:
    from rtype.game import GameStruct

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """A rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    def intersects(self, other: Bounds) -> bool:
        """True when the two rectangles overlap with a non-empty area."""
        own_min_x = min(self.left, self.left + self.width)
        own_max_x = max(self.left, self.left + self.width)
        own_min_y = min(self.top, self.top + self.height)
        own_max_y = max(self.top, self.top + self.height)
        other_min_x = min(other.left, other.left + other.width)
        other_max_x = max(other.left, other.left + other.width)
        other_min_y = min(other.top, other.top + other.height)
        other_max_y = max(other.top, other.top + other.height)

        left = max(own_min_x, other_min_x)
        right = min(own_max_x, other_max_x)
        top = max(own_min_y, other_min_y)
        bottom = min(own_max_y, other_max_y)
        return left < right and top < bottom


def calculate_bounds(position: PositionComponent, sprite: SpriteComponent) -> Bounds:
    """The rectangle an entity occupies."""
    return Bounds(position.position.x, position.position.y, sprite.size.x, sprite.size.y)


def _bounds_of(game: GameStruct, entity: Entity) -> Bounds:
    coordinator = game.coordinator
    return calculate_bounds(
        coordinator.get_component(entity, PositionComponent),
        coordinator.get_component(entity, SpriteComponent),
    )


def handle_collision(game: GameStruct, first: Entity, second: Entity) -> None:
    """Ordinary hit: the first entity takes 10 damage, the second 1."""
    logger.debug("collision between %s and %s", first, second)
    game.damage_system.take_damage(10, first)
    game.damage_system.take_damage(1, second)


def handle_boss_collision(game: GameStruct, first: Entity, second: Entity) -> None:
    """Boss contact: both entities take 1 damage."""
    logger.debug("boss collision between %s and %s", first, second)
    game.damage_system.take_damage(1, first)
    game.damage_system.take_damage(1, second)


def check_collision(game: GameStruct, first: Entity, second: Entity, is_boss: bool) -> bool:
    """Apply collision damage if the two entities overlap; return whether they did."""
    if not _bounds_of(game, first).intersects(_bounds_of(game, second)):
        return False
    if is_boss:
        handle_boss_collision(game, first, second)
    else:
        handle_collision(game, first, second)
    return True


class CollisionSystem(System):
    """Checks every frame for hits between the game's entity groups."""

    def update(self, game: GameStruct) -> None:
        """Run player-shot, enemy-on-player and boss-contact checks."""
        with (
            game.player_projectiles_lock
        ), game.mosquito_lock, game.plane_lock, game.alien_boss_lock:
            for projectile in game.projectiles_player:
                for enemy in chain(
                    game.enemies_mosquito, game.enemies_plane, game.enemies_alien_boss
                ):
                    check_collision(game, projectile, enemy, False)

        with (
            game.client_lock
        ), game.plane_projectiles_lock, game.mosquito_lock, game.plane_lock, (
            game.alien_boss_lock
        ), game.straight_projectiles_lock:
            for player in game.players.values():
                if not self._alive(game, player):
                    continue
                for attacker in chain(
                    game.projectiles_plane,
                    game.projectiles_straight,
                    game.enemies_mosquito,
                    game.enemies_plane,
                    game.enemies_alien_boss,
                ):
                    check_collision(game, attacker, player, False)

        with game.client_lock, game.alien_boss_lock:
            for player in game.players.values():
                if not self._alive(game, player):
                    continue
                for boss in game.enemies_alien_boss:
                    check_collision(game, boss, player, True)

    @staticmethod
    def _alive(game: GameStruct, entity: Entity) -> bool:
        return game.coordinator.get_component(entity, SpriteComponent).is_alive