"""Hit-point bookkeeping for entities."""

from __future__ import annotations

from rtype.components import LifeComponent, SpriteComponent
from rtype.ecs import Coordinator, Entity, System


class DamageSystem(System):
    """Takes and restores hit points, marking entities dead or alive."""

    def __init__(self, coordinator: Coordinator) -> None:
        super().__init__()
        self._coordinator = coordinator

    def take_damage(self, damage: int, entity: Entity) -> None:
        """Remove ``damage`` hit points; the entity dies at zero or below."""
        life = self._coordinator.get_component(entity, LifeComponent)
        life.remaining_life -= damage
        if life.remaining_life <= 0:
            self._coordinator.get_component(entity, SpriteComponent).is_alive = False

    def heal_damage(self, heal: int, entity: Entity) -> None:
        """Add ``heal`` hit points and bring the entity back to life."""
        life = self._coordinator.get_component(entity, LifeComponent)
        life.remaining_life += heal
        self._coordinator.get_component(entity, SpriteComponent).is_alive = True