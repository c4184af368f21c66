"""Per-frame flight of every projectile kind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rtype.components import PositionComponent, ProjectileVectorComponent
from rtype.ecs import System
from rtype.settings import SCREEN_HEIGHT, SCREEN_WIDTH
from rtype.vec import Vec2

if TYPE_CHECKING:
    from rtype.game import GameStruct

_PLAYER_PROJECTILE_SPEED = 5.0
_STRAIGHT_PROJECTILE_SPEED = 5.0
_PLANE_PROJECTILE_FACTOR = 0.01
_OFF_SCREEN_DAMAGE = 10


class ProjectileSystem(System):
    """Moves projectiles and kills those that leave the play area."""

    def projectile_routine(self, game: GameStruct) -> None:
        """Advance player, straight and aimed plane projectiles by one frame."""
        coordinator = game.coordinator

        with game.player_projectiles_lock:
            for entity in list(game.projectiles_player):
                game.movement_system.move(Vec2(_PLAYER_PROJECTILE_SPEED, 0.0), entity)
                position = coordinator.get_component(entity, PositionComponent).position
                if position.x > SCREEN_WIDTH + 30:
                    game.damage_system.take_damage(_OFF_SCREEN_DAMAGE, entity)

        with game.straight_projectiles_lock:
            for entity in list(game.projectiles_straight):
                game.movement_system.move(Vec2(-_STRAIGHT_PROJECTILE_SPEED, 0.0), entity)
                position = coordinator.get_component(entity, PositionComponent).position
                if position.x < -30:
                    game.damage_system.take_damage(_OFF_SCREEN_DAMAGE, entity)

        with game.plane_projectiles_lock:
            for entity in list(game.projectiles_plane):
                position = coordinator.get_component(entity, PositionComponent).position
                direction = coordinator.get_component(entity, ProjectileVectorComponent).vector
                position.x += direction.x * _PLANE_PROJECTILE_FACTOR
                position.y += direction.y * _PLANE_PROJECTILE_FACTOR
                if (
                    position.x < -50
                    or position.y < -50
                    or position.x > SCREEN_WIDTH + 50
                    or position.y > SCREEN_HEIGHT + 50
                ):
                    game.damage_system.take_damage(_OFF_SCREEN_DAMAGE, entity)