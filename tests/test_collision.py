import random

import pytest

from rtype.collision import (
    Bounds,
    CollisionSystem,
    calculate_bounds,
    check_collision,
    handle_boss_collision,
    handle_collision,
)
from rtype.components import LifeComponent, PositionComponent, SpriteComponent
from rtype.entities import (
    create_alien_boss,
    create_mosquito,
    create_player,
    create_player_projectile,
    create_straight_projectile,
)
from rtype.game import GameStruct
from rtype.vec import Vec2

ENDPOINT = ("127.0.0.1", 40001)


@pytest.fixture
def game():
    return GameStruct(rng=random.Random(2), collision_system=CollisionSystem())


@pytest.fixture
def player(game):
    entity = create_player(game, "ace", ENDPOINT)
    game.movement_system.set(Vec2(100, 100), entity)
    return entity


def _life(game, entity):
    return game.coordinator.get_component(entity, LifeComponent).remaining_life


def _alive(game, entity):
    return game.coordinator.get_component(entity, SpriteComponent).is_alive


def test_overlapping_bounds_intersect():
    assert Bounds(0, 0, 10, 10).intersects(Bounds(5, 5, 10, 10))
    assert Bounds(5, 5, 10, 10).intersects(Bounds(0, 0, 10, 10))


def test_touching_bounds_do_not_intersect():
    assert not Bounds(0, 0, 10, 10).intersects(Bounds(10, 0, 10, 10))
    assert not Bounds(0, 0, 10, 10).intersects(Bounds(0, 10, 10, 10))


def test_disjoint_bounds_do_not_intersect():
    assert not Bounds(0, 0, 10, 10).intersects(Bounds(50, 50, 5, 5))


def test_negative_size_is_normalised():
    assert Bounds(10, 10, -10, -10).intersects(Bounds(5, 5, 2, 2))


def test_calculate_bounds_uses_position_and_size():
    bounds = calculate_bounds(
        PositionComponent(Vec2(3, 4)), SpriteComponent(Vec2(66, 34), 1, 0, True)
    )
    assert bounds == Bounds(3.0, 4.0, 66.0, 34.0)


def test_check_collision_damages_both(game, player):
    projectile = create_straight_projectile(game, Vec2(110, 110))
    assert check_collision(game, projectile, player, False)
    assert _life(game, player) == 2
    assert not _alive(game, projectile)


def test_check_collision_misses(game, player):
    projectile = create_straight_projectile(game, Vec2(800, 500))
    assert not check_collision(game, projectile, player, False)
    assert _life(game, player) == 3
    assert _alive(game, projectile)


def test_boss_collision_deals_one_each(game, player):
    boss = create_alien_boss(game)
    boss_life = _life(game, boss)
    handle_boss_collision(game, boss, player)
    assert _life(game, boss) == boss_life - 1
    assert _life(game, player) == 3 - 1


def test_handle_collision_kills_first_entity(game, player):
    projectile = create_straight_projectile(game, Vec2(0, 0))
    handle_collision(game, projectile, player)
    assert not _alive(game, projectile)
    assert _alive(game, player)


def test_update_player_shot_hits_mosquito(game, player):
    mosquito = create_mosquito(game)
    before = _life(game, mosquito)
    shot = create_player_projectile(game, ENDPOINT)
    target = game.coordinator.get_component(mosquito, PositionComponent).position
    game.movement_system.set(Vec2(target.x + 1, target.y + 1), shot)
    game.collision_system.update(game)
    assert _life(game, mosquito) == before - 1
    assert not _alive(game, shot)


def test_update_skips_dead_players(game, player):
    game.coordinator.get_component(player, SpriteComponent).is_alive = False
    create_straight_projectile(game, Vec2(110, 110))
    game.collision_system.update(game)
    assert _life(game, player) == 3


def test_update_boss_contact_hits_player_twice(game, player):
    boss = create_alien_boss(game)
    boss_life = _life(game, boss)
    game.movement_system.set(Vec2(1020, 100), player)
    game.collision_system.update(game)
    assert _life(game, player) == 1
    assert _life(game, boss) < boss_life