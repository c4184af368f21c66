from dataclasses import dataclass

import pytest

from rtype.ecs import (
    ComponentArray,
    ComponentManager,
    Coordinator,
    EcsError,
    EntityManager,
    System,
    SystemManager,
    fnv1a_32,
)
from rtype.settings import MAX_COMPONENTS, MAX_ENTITIES


@dataclass
class Health:
    value: int = 0


@dataclass
class Tag:
    label: str = ""


class Tracker(System):
    pass


class Watcher(System):
    pass


def make_coordinator(max_entities=MAX_ENTITIES):
    coordinator = Coordinator(max_entities=max_entities)
    coordinator.register_component(Health)
    coordinator.register_component(Tag)
    return coordinator


# --- fnv1a_32 ---------------------------------------------------------------

def test_fnv_is_deterministic_and_32_bit():
    assert fnv1a_32(b"player") == fnv1a_32(b"player")
    assert 0 <= fnv1a_32(b"player") < 2**32


def test_fnv_accepts_text_and_bytes_alike():
    assert fnv1a_32("mosquito") == fnv1a_32(b"mosquito")


def test_fnv_distinguishes_inputs():
    assert fnv1a_32(b"a") != fnv1a_32(b"b")
    assert fnv1a_32(b"") != fnv1a_32(b"\0")


# --- EntityManager ----------------------------------------------------------

def test_entities_are_handed_out_in_order():
    manager = EntityManager()
    assert [manager.create_entity() for _ in range(3)] == [0, 1, 2]


def test_destroyed_entity_goes_to_back_of_queue():
    manager = EntityManager(max_entities=3)
    for _ in range(3):
        manager.create_entity()
    manager.destroy_entity(1)
    assert manager.create_entity() == 1


def test_destroyed_entity_reused_after_free_ones():
    manager = EntityManager(max_entities=4)
    first = manager.create_entity()
    manager.destroy_entity(first)
    assert [manager.create_entity() for _ in range(4)] == [1, 2, 3, first]


def test_default_capacity_is_enforced():
    manager = EntityManager()
    created = {manager.create_entity() for _ in range(MAX_ENTITIES)}
    assert len(created) == MAX_ENTITIES
    with pytest.raises(EcsError):
        manager.create_entity()


def test_out_of_range_entities_rejected():
    manager = EntityManager(max_entities=2)
    with pytest.raises(EcsError):
        manager.destroy_entity(2)
    with pytest.raises(EcsError):
        manager.get_signature(5)
    with pytest.raises(EcsError):
        manager.set_signature(-1, 1)


def test_signature_round_trip_and_reset_on_destroy():
    manager = EntityManager()
    entity = manager.create_entity()
    manager.set_signature(entity, 0b101)
    assert manager.get_signature(entity) == 0b101
    manager.destroy_entity(entity)
    assert manager.get_signature(entity) == 0


# --- ComponentArray ---------------------------------------------------------

def test_component_array_insert_and_get():
    array = ComponentArray()
    component = Health(3)
    array.insert_data(7, component)
    assert array.get_data(7) is component
    assert len(array) == 1
    assert 7 in array


def test_component_array_rejects_duplicates():
    array = ComponentArray()
    array.insert_data(1, Health(1))
    with pytest.raises(EcsError):
        array.insert_data(1, Health(2))


def test_component_array_remove_keeps_others_reachable():
    array = ComponentArray()
    components = {entity: Health(entity) for entity in (10, 20, 30)}
    for entity, component in components.items():
        array.insert_data(entity, component)
    array.remove_data(20)
    assert len(array) == 2
    assert 20 not in array
    assert array.get_data(10) is components[10]
    assert array.get_data(30) is components[30]


def test_component_array_missing_entity_errors():
    array = ComponentArray()
    with pytest.raises(EcsError):
        array.get_data(4)
    with pytest.raises(EcsError):
        array.remove_data(4)


def test_component_array_entity_destroyed():
    array = ComponentArray()
    array.insert_data(2, Health(1))
    array.entity_destroyed(99)
    assert len(array) == 1
    array.entity_destroyed(2)
    assert len(array) == 0


def test_component_array_capacity():
    array = ComponentArray(capacity=2)
    array.insert_data(0, Health())
    array.insert_data(1, Health())
    with pytest.raises(EcsError):
        array.insert_data(2, Health())


# --- ComponentManager -------------------------------------------------------

def test_component_types_numbered_in_registration_order():
    manager = ComponentManager()
    manager.register_component(Health)
    manager.register_component(Tag)
    assert manager.get_component_type(Health) == 0
    assert manager.get_component_type(Tag) == 1


def test_component_registered_twice_rejected():
    manager = ComponentManager()
    manager.register_component(Health)
    with pytest.raises(EcsError):
        manager.register_component(Health)


def test_unregistered_component_rejected():
    manager = ComponentManager()
    with pytest.raises(EcsError):
        manager.get_component_type(Health)
    with pytest.raises(EcsError):
        manager.add_component(0, Health())


def test_component_type_limit():
    manager = ComponentManager()
    for index in range(MAX_COMPONENTS):
        manager.register_component(type(f"Kind{index}", (), {}))
    with pytest.raises(EcsError):
        manager.register_component(Health)


def test_component_manager_entity_destroyed_clears_all_arrays():
    manager = ComponentManager()
    manager.register_component(Health)
    manager.register_component(Tag)
    manager.add_component(3, Health(1))
    manager.add_component(3, Tag("x"))
    manager.entity_destroyed(3)
    with pytest.raises(EcsError):
        manager.get_component(3, Health)
    with pytest.raises(EcsError):
        manager.get_component(3, Tag)


# --- SystemManager ----------------------------------------------------------

def test_system_registered_twice_rejected():
    manager = SystemManager()
    manager.register_system(Tracker())
    with pytest.raises(EcsError):
        manager.register_system(Tracker())


def test_signature_for_unregistered_system_rejected():
    manager = SystemManager()
    with pytest.raises(EcsError):
        manager.set_signature(Tracker, 1)


def test_system_signature_matching():
    manager = SystemManager()
    tracker = manager.register_system(Tracker())
    manager.set_signature(Tracker, 0b11)
    manager.entity_signature_changed(1, 0b01)
    manager.entity_signature_changed(2, 0b111)
    assert tracker.entities == {2}
    manager.entity_destroyed(2)
    assert tracker.entities == set()


# --- Coordinator ------------------------------------------------------------

def test_register_system_returns_instance():
    coordinator = make_coordinator()
    tracker = Tracker()
    assert coordinator.register_system(tracker) is tracker


def test_system_tracks_entities_with_matching_components():
    coordinator = make_coordinator()
    tracker = coordinator.register_system(Tracker())
    coordinator.set_system_signature(
        Tracker,
        (1 << coordinator.get_component_type(Health)) | (1 << coordinator.get_component_type(Tag)),
    )
    full = coordinator.create_entity()
    partial = coordinator.create_entity()
    coordinator.add_component(full, Health(1))
    coordinator.add_component(full, Tag("hero"))
    coordinator.add_component(partial, Health(2))
    assert tracker.entities == {full}

    coordinator.remove_component(full, Tag)
    assert tracker.entities == set()


def test_system_without_signature_takes_every_changed_entity():
    coordinator = make_coordinator()
    watcher = coordinator.register_system(Watcher())
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Tag("any"))
    assert watcher.entities == {entity}


def test_first_system_signature_stays():
    coordinator = make_coordinator()
    tracker = coordinator.register_system(Tracker())
    coordinator.set_system_signature(Tracker, 1 << coordinator.get_component_type(Health))
    coordinator.set_system_signature(Tracker, 1 << coordinator.get_component_type(Tag))
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Health())
    assert tracker.entities == {entity}


def test_get_component_returns_live_object():
    coordinator = make_coordinator()
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Health(3))
    coordinator.get_component(entity, Health).value -= 1
    assert coordinator.get_component(entity, Health).value == 2


def test_destroy_entity_removes_components_and_system_membership():
    coordinator = make_coordinator()
    tracker = coordinator.register_system(Tracker())
    coordinator.set_system_signature(Tracker, 1 << coordinator.get_component_type(Health))
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Health(5))
    coordinator.destroy_entity(entity)
    assert entity not in tracker.entities
    with pytest.raises(EcsError):
        coordinator.get_component(entity, Health)


def test_destroyed_entity_starts_clean_when_reused():
    coordinator = make_coordinator(max_entities=1)
    tracker = coordinator.register_system(Tracker())
    coordinator.set_system_signature(Tracker, 1 << coordinator.get_component_type(Health))
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Health(1))
    coordinator.add_component(entity, Tag("old"))
    coordinator.destroy_entity(entity)
    reused = coordinator.create_entity()
    assert reused == entity
    coordinator.add_component(reused, Tag("new"))
    assert tracker.entities == set()


def test_coordinator_capacity():
    coordinator = make_coordinator(max_entities=2)
    coordinator.create_entity()
    coordinator.create_entity()
    with pytest.raises(EcsError):
        coordinator.create_entity()