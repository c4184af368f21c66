"""Movement of players and the scripted motion of enemies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rtype.components import InitialPositionComponent, PositionComponent, SpriteComponent
from rtype.ecs import Coordinator, Entity, System
from rtype.entities import PLAYER_SPRITE, create_plane_projectile, create_straight_projectile
from rtype.settings import SCREEN_HEIGHT, SCREEN_WIDTH
from rtype.vec import Vec2

if TYPE_CHECKING:
    from rtype.game import GameStruct

_PLAYER_WIDTH = 66
_PLAYER_HEIGHT = 34


class MovementSystem(System):
    """Moves entities and drives enemy behaviour each frame."""

    def __init__(self, coordinator: Coordinator) -> None:
        super().__init__()
        self._coordinator = coordinator
        # Alien boss firing cycle.
        self.pause = 0
        self.shooting = 0
        self.straight_offset = 0

    def move(self, delta: Vec2, entity: Entity) -> None:
        """Shift a living entity; players are kept on screen axis by axis."""
        sprite = self._coordinator.get_component(entity, SpriteComponent)
        if not sprite.is_alive:
            return
        position = self._coordinator.get_component(entity, PositionComponent).position
        if sprite.sprite_code == PLAYER_SPRITE:
            new_x = position.x + delta.x
            if 0 <= new_x <= SCREEN_WIDTH - _PLAYER_WIDTH:
                position.x = new_x
            new_y = position.y + delta.y
            if 0 <= new_y <= SCREEN_HEIGHT - _PLAYER_HEIGHT:
                position.y = new_y
        else:
            position += delta

    def set(self, position: Vec2, entity: Entity) -> None:
        """Place an entity at ``position``."""
        current = self._coordinator.get_component(entity, PositionComponent).position
        current.x = position.x
        current.y = position.y

    def update_enemies(self, game: GameStruct) -> None:
        """Advance every mosquito, plane and alien boss by one frame."""
        with game.mosquito_lock:
            for enemy in list(game.enemies_mosquito):
                self._update_mosquito(game, enemy)
        with game.plane_lock:
            for enemy in list(game.enemies_plane):
                self._update_plane(game, enemy)
        with game.alien_boss_lock:
            for enemy in list(game.enemies_alien_boss):
                self._update_alien_boss(game, enemy)

    def _update_mosquito(self, game: GameStruct, enemy: Entity) -> None:
        position = self._coordinator.get_component(enemy, PositionComponent).position
        initial = self._coordinator.get_component(enemy, InitialPositionComponent)
        self.move(Vec2(-5.0, 0.0), enemy)
        if initial.move == 0:
            self.move(Vec2(-1.0, -4.0), enemy)
        elif initial.move == 1:
            self.move(Vec2(-1.0, 4.0), enemy)

        if position.y <= initial.position.y - 50 and initial.move == 0:
            initial.move = 1
        elif position.y >= initial.position.y + 50 and initial.move == 1:
            initial.move = 0

        if position.x < -60:
            game.damage_system.take_damage(10, enemy)

    def _update_plane(self, game: GameStruct, enemy: Entity) -> None:
        position = self._coordinator.get_component(enemy, PositionComponent).position
        initial = self._coordinator.get_component(enemy, InitialPositionComponent)
        self.move(Vec2(-3.0, 0.0), enemy)

        if position.x <= SCREEN_WIDTH * 0.75 and initial.move == 0:
            with game.plane_projectiles_lock:
                initial.move = 1
                create_plane_projectile(game, position)

        if position.x <= SCREEN_WIDTH * 0.25 and initial.move == 1:
            with game.plane_projectiles_lock:
                create_plane_projectile(game, position)
                initial.move = 2

        if position.x < -110:
            game.damage_system.take_damage(10, enemy)

    def _update_alien_boss(self, game: GameStruct, enemy: Entity) -> None:
        position = self._coordinator.get_component(enemy, PositionComponent).position
        if position.x > SCREEN_WIDTH - 100:
            self.move(Vec2(-2.0, 0.0), enemy)
            return

        if self.pause > 0:
            self.pause -= 1
        elif self.shooting > 0:
            self.shooting -= 1
            offset = game.rng.randrange(SCREEN_HEIGHT)
            with game.plane_projectiles_lock:
                create_plane_projectile(game, Vec2(position.x, position.y + offset))
        else:
            self.shooting = 20
            self.pause = 60
            self.straight_offset = game.rng.randrange(SCREEN_HEIGHT)

        if self.pause > 0 and self.pause % 2 == 0 and game.rng.randrange(5) == 1:
            with game.straight_projectiles_lock:
                create_straight_projectile(
                    game, Vec2(position.x, position.y + self.straight_offset)
                )