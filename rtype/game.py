"""Shared server game state: entity coordinator, systems, entity lists and locks."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from typing import Any, Hashable

from rtype.components import (
    InitialPositionComponent,
    LifeComponent,
    PlayerComponent,
    PositionComponent,
    ProjectileVectorComponent,
    SpriteComponent,
)
from rtype.damage import DamageSystem
from rtype.ecs import Coordinator, Entity, System
from rtype.movement import MovementSystem


def _lock_field() -> Any:
    return field(default_factory=threading.RLock, init=False, repr=False, compare=False)


@dataclass(eq=False)
class GameStruct:
    """Everything the server threads share about the running game.

    Component types and the movement and damage systems are registered with
    the coordinator on creation; projectile and collision systems, when
    given, are registered too.
    """

    coordinator: Coordinator = field(default_factory=Coordinator)
    rng: random.Random = field(default_factory=random.Random)
    projectile_system: System | None = None
    collision_system: System | None = None

    players: dict[Hashable, Entity] = field(default_factory=dict)
    projectiles_player: list[Entity] = field(default_factory=list)
    enemies_mosquito: list[Entity] = field(default_factory=list)
    enemies_plane: list[Entity] = field(default_factory=list)
    enemies_alien_boss: list[Entity] = field(default_factory=list)
    projectiles_plane: list[Entity] = field(default_factory=list)
    projectiles_straight: list[Entity] = field(default_factory=list)

    entity_id: int = 0
    start_level_one: bool = False
    start_level_two: bool = False

    movement_system: MovementSystem = field(init=False)
    damage_system: DamageSystem = field(init=False)

    client_lock: Any = _lock_field()
    mosquito_lock: Any = _lock_field()
    plane_lock: Any = _lock_field()
    alien_boss_lock: Any = _lock_field()
    player_projectiles_lock: Any = _lock_field()
    straight_projectiles_lock: Any = _lock_field()
    plane_projectiles_lock: Any = _lock_field()
    level_one_lock: Any = _lock_field()
    level_two_lock: Any = _lock_field()

    def __post_init__(self) -> None:
        for component_type in (
            PositionComponent,
            PlayerComponent,
            SpriteComponent,
            LifeComponent,
            InitialPositionComponent,
            ProjectileVectorComponent,
        ):
            self.coordinator.register_component(component_type)

        self.movement_system = MovementSystem(self.coordinator)
        self.coordinator.register_system(self.movement_system)
        if self.projectile_system is not None:
            self.coordinator.register_system(self.projectile_system)
        if self.collision_system is not None:
            self.coordinator.register_system(self.collision_system)
        self.damage_system = DamageSystem(self.coordinator)
        self.coordinator.register_system(self.damage_system)

    def next_entity_id(self) -> int:
        """Return the next network id and advance the counter."""
        current = self.entity_id
        self.entity_id += 1
        return current