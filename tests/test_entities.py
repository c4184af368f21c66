import random

import pytest

from rtype.components import (
    InitialPositionComponent,
    LifeComponent,
    PlayerComponent,
    PositionComponent,
    ProjectileVectorComponent,
    SpriteComponent,
)
from rtype.entities import (
    create_alien_boss,
    create_mosquito,
    create_plane,
    create_plane_projectile,
    create_player,
    create_player_projectile,
    create_straight_projectile,
    random_position,
)
from rtype.game import GameStruct
from rtype.settings import SCREEN_HEIGHT, SCREEN_WIDTH
from rtype.vec import Vec2


@pytest.fixture
def game():
    return GameStruct(rng=random.Random(1234))


def _component(game, entity, kind):
    return game.coordinator.get_component(entity, kind)


def test_random_position_in_range_and_deterministic():
    first = [random_position(random.Random(7)) for _ in range(3)]
    second = [random_position(random.Random(7)) for _ in range(3)]
    assert first == second
    rng = random.Random(3)
    for _ in range(200):
        pos = random_position(rng)
        assert 0 <= pos.x < 700
        assert 0 <= pos.y < 500


def test_create_player_registers_endpoint(game):
    endpoint = ("127.0.0.1", 5000)
    entity = create_player(game, "leo", endpoint)
    assert game.players[endpoint] == entity
    sprite = _component(game, entity, SpriteComponent)
    assert sprite.sprite_code == 1
    assert sprite.is_alive is True
    assert sprite.size == Vec2(66, 34)
    assert _component(game, entity, LifeComponent).remaining_life == 3
    assert _component(game, entity, PlayerComponent) == PlayerComponent("leo", endpoint)


def test_entity_ids_increase(game):
    a = create_player(game, "a", ("h", 1))
    b = create_player(game, "b", ("h", 2))
    assert _component(game, b, SpriteComponent).id == _component(game, a, SpriteComponent).id + 1
    assert game.entity_id == 2


def test_mosquito_without_players_raises(game):
    with pytest.raises(ValueError):
        create_mosquito(game)
    assert game.enemies_mosquito == []


def test_mosquito_spawns_level_with_player(game):
    player = create_player(game, "p", ("h", 1))
    mosquito = create_mosquito(game)
    assert game.enemies_mosquito == [mosquito]
    player_pos = _component(game, player, PositionComponent).position
    player_size = _component(game, player, SpriteComponent).size
    pos = _component(game, mosquito, PositionComponent).position
    assert pos == Vec2(SCREEN_WIDTH + 100, player_pos.y + player_size.y / 2)
    assert _component(game, mosquito, InitialPositionComponent).position == pos
    assert _component(game, mosquito, SpriteComponent).sprite_code == 2


@pytest.mark.parametrize("players,life", [(1, 2), (2, 2), (3, 3), (4, 4)])
def test_enemy_life_scales_with_players(game, players, life):
    for index in range(players):
        create_player(game, "p", ("h", index))
    mosquito = create_mosquito(game)
    plane = create_plane(game)
    assert _component(game, mosquito, LifeComponent).remaining_life == life
    assert _component(game, plane, LifeComponent).remaining_life == life


def test_plane_spawn(game):
    plane = create_plane(game)
    assert game.enemies_plane == [plane]
    assert _component(game, plane, PositionComponent).position == Vec2(SCREEN_WIDTH + 50, SCREEN_HEIGHT * 0.1)
    assert _component(game, plane, SpriteComponent).sprite_code == 3


def test_alien_boss_spawn(game):
    create_player(game, "a", ("h", 1))
    create_player(game, "b", ("h", 2))
    boss = create_alien_boss(game)
    assert game.enemies_alien_boss == [boss]
    assert _component(game, boss, LifeComponent).remaining_life == 200
    sprite = _component(game, boss, SpriteComponent)
    assert sprite.size == Vec2(100, SCREEN_HEIGHT)
    assert sprite.sprite_code == 21
    assert _component(game, boss, PositionComponent).position == Vec2(SCREEN_WIDTH + 10, 0)


def test_player_projectile_starts_at_player_front(game):
    endpoint = ("h", 1)
    player = create_player(game, "p", endpoint)
    game.movement_system.set(Vec2(100, 200), player)
    shot = create_player_projectile(game, endpoint)
    assert game.projectiles_player == [shot]
    size = _component(game, player, SpriteComponent).size
    assert _component(game, shot, PositionComponent).position == Vec2(100 + size.x, 200 + size.y / 2)
    assert _component(game, shot, SpriteComponent).sprite_code == 11


def test_dead_player_cannot_shoot(game):
    endpoint = ("h", 1)
    player = create_player(game, "p", endpoint)
    game.damage_system.take_damage(3, player)
    assert create_player_projectile(game, endpoint) is None
    assert game.projectiles_player == []


def test_unknown_endpoint_cannot_shoot(game):
    with pytest.raises(KeyError):
        create_player_projectile(game, ("nowhere", 0))


def test_plane_projectile_aims_at_player_middle(game):
    player = create_player(game, "p", ("h", 1))
    shot = create_plane_projectile(game, Vec2(800, 60))
    start = _component(game, shot, PositionComponent).position
    assert start == Vec2(840, 110)
    vector = _component(game, shot, ProjectileVectorComponent).vector
    player_pos = _component(game, player, PositionComponent).position
    size = _component(game, player, SpriteComponent).size
    assert start + vector == Vec2(player_pos.x + size.x / 2, player_pos.y + size.y / 2)
    assert game.projectiles_plane == [shot]


def test_plane_projectile_without_players_raises(game):
    with pytest.raises(ValueError):
        create_plane_projectile(game, Vec2(0, 0))


def test_straight_projectile(game):
    shot = create_straight_projectile(game, Vec2(300, 40))
    assert game.projectiles_straight == [shot]
    assert _component(game, shot, PositionComponent).position == Vec2(300, 40)
    assert _component(game, shot, SpriteComponent).sprite_code == 13
    assert _component(game, shot, LifeComponent).remaining_life == 1