"""A small entity-component-system core: entities, component storage and systems."""

from __future__ import annotations

from collections import deque
from typing import Any, Generic, TypeVar

from rtype.settings import MAX_COMPONENTS, MAX_ENTITIES

T = TypeVar("T")

Entity = int
Signature = int

_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619


class EcsError(Exception):
    """Raised when the entity-component-system is used inconsistently."""


def fnv1a_32(data: str | bytes) -> int:
    """32-bit FNV-1a hash of ``data`` followed by its terminating NUL byte."""
    if isinstance(data, str):
        data = data.encode()
    value = _FNV_OFFSET_BASIS
    for byte in (*data, 0):
        value = ((value ^ byte) * _FNV_PRIME) & 0xFFFFFFFF
    return value


class ComponentArray(Generic[T]):
    """Densely packed storage of one component type, indexed by entity."""

    def __init__(self, capacity: int = MAX_ENTITIES) -> None:
        self._capacity = capacity
        self._components: list[T] = []
        self._entities: list[Entity] = []
        self._entity_to_index: dict[Entity, int] = {}

    def insert_data(self, entity: Entity, component: T) -> None:
        if entity in self._entity_to_index:
            raise EcsError(f"component added to entity {entity} more than once")
        if len(self._components) >= self._capacity:
            raise EcsError("component array is full")
        self._entity_to_index[entity] = len(self._components)
        self._components.append(component)
        self._entities.append(entity)

    def remove_data(self, entity: Entity) -> None:
        try:
            index = self._entity_to_index.pop(entity)
        except KeyError:
            raise EcsError(f"removing non-existent component of entity {entity}") from None
        # Move the last element into the hole to keep storage dense.
        last_component = self._components.pop()
        last_entity = self._entities.pop()
        if index < len(self._components):
            self._components[index] = last_component
            self._entities[index] = last_entity
            self._entity_to_index[last_entity] = index

    def get_data(self, entity: Entity) -> T:
        try:
            return self._components[self._entity_to_index[entity]]
        except KeyError:
            raise EcsError(f"retrieving non-existent component of entity {entity}") from None

    def entity_destroyed(self, entity: Entity) -> None:
        if entity in self._entity_to_index:
            self.remove_data(entity)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entity_to_index

    def __len__(self) -> int:
        return len(self._components)


class EntityManager:
    """Hands out entity ids and keeps each entity's component signature."""

    def __init__(self, max_entities: int = MAX_ENTITIES) -> None:
        self._max_entities = max_entities
        self._available: deque[Entity] = deque(range(max_entities))
        self._signatures: list[Signature] = [0] * max_entities
        self._living = 0

    def _check_range(self, entity: Entity) -> None:
        if not 0 <= entity < self._max_entities:
            raise EcsError(f"entity {entity} out of range")

    def create_entity(self) -> Entity:
        if self._living >= self._max_entities:
            raise EcsError("too many entities in existence")
        entity = self._available.popleft()
        self._living += 1
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        self._check_range(entity)
        self._signatures[entity] = 0
        self._available.append(entity)
        self._living -= 1

    def set_signature(self, entity: Entity, signature: Signature) -> None:
        self._check_range(entity)
        self._signatures[entity] = signature

    def get_signature(self, entity: Entity) -> Signature:
        self._check_range(entity)
        return self._signatures[entity]


class ComponentManager:
    """Keeps one component array per registered component type."""

    def __init__(self, capacity: int = MAX_ENTITIES) -> None:
        self._capacity = capacity
        self._component_types: dict[type, int] = {}
        self._component_arrays: dict[type, ComponentArray[Any]] = {}

    def register_component(self, component_type: type) -> None:
        if component_type in self._component_types:
            raise EcsError(f"component type {component_type.__name__} registered more than once")
        if len(self._component_types) >= MAX_COMPONENTS:
            raise EcsError("too many component types")
        self._component_types[component_type] = len(self._component_types)
        self._component_arrays[component_type] = ComponentArray(self._capacity)

    def get_component_type(self, component_type: type) -> int:
        try:
            return self._component_types[component_type]
        except KeyError:
            raise EcsError(
                f"component type {component_type.__name__} not registered before use"
            ) from None

    def _array(self, component_type: type) -> ComponentArray[Any]:
        try:
            return self._component_arrays[component_type]
        except KeyError:
            raise EcsError(
                f"component type {component_type.__name__} not registered before use"
            ) from None

    def add_component(self, entity: Entity, component: Any) -> None:
        self._array(type(component)).insert_data(entity, component)

    def remove_component(self, entity: Entity, component_type: type) -> None:
        self._array(component_type).remove_data(entity)

    def get_component(self, entity: Entity, component_type: type[T]) -> T:
        return self._array(component_type).get_data(entity)

    def entity_destroyed(self, entity: Entity) -> None:
        for array in self._component_arrays.values():
            array.entity_destroyed(entity)


class System:
    """Base for systems; ``entities`` holds the entities matching its signature."""

    def __init__(self) -> None:
        self.entities: set[Entity] = set()


class SystemManager:
    """Keeps registered systems and their entity sets up to date."""

    def __init__(self) -> None:
        self._signatures: dict[type, Signature] = {}
        self._systems: dict[type, System] = {}

    def register_system(self, system: System) -> System:
        system_type = type(system)
        if system_type in self._systems:
            raise EcsError(f"system {system_type.__name__} registered more than once")
        self._systems[system_type] = system
        return system

    def set_signature(self, system_type: type, signature: Signature) -> None:
        if system_type not in self._systems:
            raise EcsError(f"system {system_type.__name__} used before registered")
        # The first signature given to a system stays in effect.
        self._signatures.setdefault(system_type, signature)

    def entity_destroyed(self, entity: Entity) -> None:
        for system in self._systems.values():
            system.entities.discard(entity)

    def entity_signature_changed(self, entity: Entity, signature: Signature) -> None:
        for system_type, system in self._systems.items():
            system_signature = self._signatures.get(system_type, 0)
            if signature & system_signature == system_signature:
                system.entities.add(entity)
            else:
                system.entities.discard(entity)


class Coordinator:
    """Front door to entities, components and systems."""

    def __init__(self, max_entities: int = MAX_ENTITIES) -> None:
        self._components = ComponentManager(max_entities)
        self._entities = EntityManager(max_entities)
        self._systems = SystemManager()

    def create_entity(self) -> Entity:
        return self._entities.create_entity()

    def destroy_entity(self, entity: Entity) -> None:
        self._entities.destroy_entity(entity)
        self._components.entity_destroyed(entity)
        self._systems.entity_destroyed(entity)

    def register_component(self, component_type: type) -> None:
        self._components.register_component(component_type)

    def _update_signature(self, entity: Entity, component_type: type, present: bool) -> None:
        bit = 1 << self._components.get_component_type(component_type)
        signature = self._entities.get_signature(entity)
        signature = signature | bit if present else signature & ~bit
        self._entities.set_signature(entity, signature)
        self._systems.entity_signature_changed(entity, signature)

    def add_component(self, entity: Entity, component: Any) -> None:
        self._components.add_component(entity, component)
        self._update_signature(entity, type(component), True)

    def remove_component(self, entity: Entity, component_type: type) -> None:
        self._components.remove_component(entity, component_type)
        self._update_signature(entity, component_type, False)

    def get_component(self, entity: Entity, component_type: type[T]) -> T:
        return self._components.get_component(entity, component_type)

    def get_component_type(self, component_type: type) -> int:
        return self._components.get_component_type(component_type)

    def register_system(self, system: System) -> System:
        return self._systems.register_system(system)

    def set_system_signature(self, system_type: type, signature: Signature) -> None:
        self._systems.set_signature(system_type, signature)