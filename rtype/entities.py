"""Factories that spawn players, enemies and projectiles into a game."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Hashable

from rtype.components import (
    InitialPositionComponent,
    LifeComponent,
    PlayerComponent,
    PositionComponent,
    ProjectileVectorComponent,
    SpriteComponent,
)
from rtype.ecs import Entity
from rtype.settings import SCREEN_HEIGHT, SCREEN_WIDTH
from rtype.vec import Vec2

if TYPE_CHECKING:
    from rtype.game import GameStruct

PLAYER_SPRITE = 1
MOSQUITO_SPRITE = 2
PLANE_SPRITE = 3
PLAYER_PROJECTILE_SPRITE = 11
PLANE_PROJECTILE_SPRITE = 12
STRAIGHT_PROJECTILE_SPRITE = 13
ALIEN_BOSS_SPRITE = 21


def random_position(rng: random.Random) -> Vec2:
    """A random spawn point inside the left part of the screen."""
    return Vec2(rng.randrange(700), rng.randrange(500))


def _random_player(game: GameStruct) -> Entity:
    players = list(game.players.values())
    if not players:
        raise ValueError("no player is connected")
    return players[game.rng.randrange(len(players))]


def _enemy_life(player_count: int) -> int:
    return 2 if player_count == 1 else player_count


def _spawn(game: GameStruct, *components: object) -> Entity:
    entity = game.coordinator.create_entity()
    for component in components:
        game.coordinator.add_component(entity, component)
    return entity


def create_player(game: GameStruct, name: str, endpoint: Hashable) -> Entity:
    """Spawn a player entity for the client at ``endpoint``."""
    entity = _spawn(
        game,
        PositionComponent(random_position(game.rng)),
        SpriteComponent(Vec2(66.0, 34.0), PLAYER_SPRITE, game.next_entity_id(), True),
        PlayerComponent(name, endpoint),
        LifeComponent(3),
    )
    game.players[endpoint] = entity
    return entity


def create_mosquito(game: GameStruct) -> Entity:
    """Spawn a mosquito off the right edge, level with a random player."""
    player = _random_player(game)
    coordinator = game.coordinator
    player_position = coordinator.get_component(player, PositionComponent).position
    player_size = coordinator.get_component(player, SpriteComponent).size
    position = Vec2(SCREEN_WIDTH + 100, player_position.y + player_size.y / 2.0)
    entity = _spawn(
        game,
        PositionComponent(position),
        InitialPositionComponent(position),
        SpriteComponent(Vec2(66.0, 66.0), MOSQUITO_SPRITE, game.next_entity_id(), True),
        LifeComponent(_enemy_life(len(game.players))),
    )
    game.enemies_mosquito.append(entity)
    return entity


def create_plane(game: GameStruct) -> Entity:
    """Spawn a plane off the right edge near the top of the screen."""
    position = Vec2(SCREEN_WIDTH + 50, SCREEN_HEIGHT * 0.1)
    entity = _spawn(
        game,
        PositionComponent(position),
        InitialPositionComponent(position),
        SpriteComponent(Vec2(66.0, 66.0), PLANE_SPRITE, game.next_entity_id(), True),
        LifeComponent(_enemy_life(len(game.players))),
    )
    game.enemies_plane.append(entity)
    return entity


def create_alien_boss(game: GameStruct) -> Entity:
    """Spawn the screen-high alien boss; its life scales with the player count."""
    position = Vec2(SCREEN_WIDTH + 10, 0.0)
    entity = _spawn(
        game,
        PositionComponent(position),
        InitialPositionComponent(position),
        SpriteComponent(Vec2(100.0, SCREEN_HEIGHT), ALIEN_BOSS_SPRITE, game.next_entity_id(), True),
        LifeComponent(len(game.players) * 100),
    )
    game.enemies_alien_boss.append(entity)
    return entity


def create_player_projectile(game: GameStruct, endpoint: Hashable) -> Entity | None:
    """Fire a projectile from the front of the player at ``endpoint``.

    Returns ``None`` when that player is dead.
    """
    coordinator = game.coordinator
    player = game.players[endpoint]
    sprite = coordinator.get_component(player, SpriteComponent)
    if not sprite.is_alive:
        return None
    position = coordinator.get_component(player, PositionComponent).position
    entity = _spawn(
        game,
        PositionComponent(Vec2(position.x + sprite.size.x, position.y + sprite.size.y / 2.0)),
        SpriteComponent(Vec2(12.0, 12.0), PLAYER_PROJECTILE_SPRITE, game.next_entity_id(), True),
        LifeComponent(1),
    )
    game.projectiles_player.append(entity)
    return entity


def create_plane_projectile(game: GameStruct, position: Vec2) -> Entity:
    """Fire a projectile from ``position`` aimed at the middle of a random player."""
    player = _random_player(game)
    coordinator = game.coordinator
    start = Vec2(position.x + 40, position.y + 50)
    player_sprite = coordinator.get_component(player, SpriteComponent)
    player_position = coordinator.get_component(player, PositionComponent).position
    target = Vec2(
        player_position.x + player_sprite.size.x / 2,
        player_position.y + player_sprite.size.y / 2,
    )
    entity = _spawn(
        game,
        PositionComponent(start),
        ProjectileVectorComponent(target - start),
        SpriteComponent(Vec2(18.0, 18.0), PLANE_PROJECTILE_SPRITE, game.next_entity_id(), True),
        LifeComponent(1),
    )
    game.projectiles_plane.append(entity)
    return entity


def create_straight_projectile(game: GameStruct, position: Vec2) -> Entity:
    """Fire a projectile from ``position`` that travels straight left."""
    entity = _spawn(
        game,
        PositionComponent(Vec2(position.x, position.y)),
        SpriteComponent(Vec2(15.0, 15.0), STRAIGHT_PROJECTILE_SPRITE, game.next_entity_id(), True),
        LifeComponent(1),
    )
    game.projectiles_straight.append(entity)
    return entity