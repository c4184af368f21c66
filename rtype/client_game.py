"""Game screen: scrolling background, keyboard commands and entity drawing."""

from __future__ import annotations

from typing import AbstractSet, Iterable

import pygame

from rtype.client_network import ClientConnection
from rtype.entities import PLAYER_SPRITE
from rtype.protocol import EntityState
from rtype.settings import FPS, GameState, KeyCode
from rtype.sprites import (
    ENEMY_DIED_SOUND,
    LASER_SOUND,
    LEVEL_MUSIC,
    PLAYER_FRAME_HEIGHT,
    PLAYER_FRAME_WIDTH,
    PLAYER_TEXTURE,
    SpriteBank,
)
from rtype.world import World

BACKGROUND_PATH = "ressources/bgt.png"
BACKGROUND_SPEED = 0.01
MOVE_INTERVAL_MS = 20
SHOOT_INTERVAL_MS = 200

# Columns of the player's sprite sheet row.
FRAME_DOWN = 0
FRAME_IDLE = 1
FRAME_RIGHT = 2
FRAME_UP = 3
FRAME_LEFT = 4

_ACTION_KEYS: tuple[tuple[str, KeyCode], ...] = (
    ("escape", KeyCode.DISCONNECT),
    ("q", KeyCode.DEBUG_DAMAGE),
    ("s", KeyCode.LEVEL_ONE),
    ("t", KeyCode.LEVEL_ONE),
    ("d", KeyCode.LEVEL_TWO),
)

_MOVE_KEYS: tuple[tuple[str, KeyCode, int], ...] = (
    ("up", KeyCode.UP, FRAME_UP),
    ("down", KeyCode.DOWN, FRAME_DOWN),
    ("right", KeyCode.RIGHT, FRAME_RIGHT),
    ("left", KeyCode.LEFT, FRAME_LEFT),
)

_PYGAME_KEYS = {
    pygame.K_ESCAPE: "escape",
    pygame.K_q: "q",
    pygame.K_s: "s",
    pygame.K_t: "t",
    pygame.K_d: "d",
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_RIGHT: "right",
    pygame.K_LEFT: "left",
    pygame.K_SPACE: "space",
}


def scroll_background(
    first_x: float,
    second_x: float,
    first_width: float,
    second_width: float,
    speed: float,
) -> tuple[float, float]:
    """Move two background copies left; one that leaves the screen goes behind the other.

    A wrapped copy is placed after the other copy's previous position.
    """
    new_first = first_x - speed
    new_second = second_x - speed
    if new_first + first_width < 0:
        new_first = second_x + second_width
    if new_second + second_width < 0:
        new_second = first_x + first_width
    return new_first, new_second


def select_action_key(pressed: AbstractSet[str]) -> KeyCode | None:
    """The command key held down, by priority: escape, q, s, t, d."""
    return next((code for name, code in _ACTION_KEYS if name in pressed), None)


def select_move_key(pressed: AbstractSet[str]) -> tuple[KeyCode | None, int]:
    """The movement command held down and the player frame to show.

    Up, down, right and left are tried in that order; with none held the
    command is None and the idle frame is shown.
    """
    for name, code, frame in _MOVE_KEYS:
        if name in pressed:
            return code, frame
    return None, FRAME_IDLE


def _pressed_keys() -> set[str]:
    state = pygame.key.get_pressed()
    return {name for key, name in _PYGAME_KEYS.items() if state[key]}


def _load_background(size: tuple[int, int]) -> pygame.Surface:
    try:
        image = pygame.image.load(BACKGROUND_PATH)
    except (pygame.error, OSError):
        return pygame.Surface(size)
    return pygame.transform.scale(image, size)


def _draw_entities(
    screen: pygame.Surface, bank: SpriteBank, entities: Iterable[EntityState], frame: int
) -> None:
    for state in entities:
        if not bank.is_stored(state.id):
            bank.create_entity(state.id, state.sprite_code, state.pos_x, state.pos_y)
        if not state.is_alive:
            bank.destroy_entity(state.id)
            bank.play_sound(ENEMY_DIED_SOUND)
            continue
        sprite = bank.sprites.get(state.id)
        if sprite is None:
            continue
        if state.sprite_code == PLAYER_SPRITE:
            sprite.area = pygame.Rect(
                PLAYER_FRAME_WIDTH * frame,
                sprite.area.top,
                PLAYER_FRAME_WIDTH,
                PLAYER_FRAME_HEIGHT,
            )
            sprite.texture = bank.textures.get(PLAYER_TEXTURE, sprite.texture)
        sprite.position = (state.pos_x, state.pos_y)
        screen.blit(sprite.image(), sprite.position)


def run_game(screen: pygame.Surface, world: World, connection: ClientConnection) -> GameState:
    """Play until the window closes or escape is pressed; return the next state."""
    bank = SpriteBank()
    bank.play_sound(LEVEL_MUSIC)

    background = _load_background(screen.get_size())
    width = float(background.get_width())
    first_x, second_x = 0.0, width

    clock = pygame.time.Clock()
    started = pygame.time.get_ticks()
    last_move = 0
    last_shoot = 0
    frame = FRAME_DOWN

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return GameState.EXIT

        first_x, second_x = scroll_background(first_x, second_x, width, width, BACKGROUND_SPEED)

        now = pygame.time.get_ticks() - started
        pressed = _pressed_keys()

        action = select_action_key(pressed)
        if action is not None:
            connection.send_key(action)
            if action == KeyCode.DISCONNECT:
                return GameState.EXIT

        if now > last_move + MOVE_INTERVAL_MS:
            move, frame = select_move_key(pressed)
            if move is not None:
                connection.send_key(move)
                last_move = now

        if now > last_shoot + SHOOT_INTERVAL_MS and "space" in pressed:
            bank.play_sound(LASER_SOUND)
            connection.send_key(KeyCode.SHOOT)
            last_shoot = now

        screen.fill((0, 0, 0))
        screen.blit(background, (int(second_x), 0))
        screen.blit(background, (int(first_x), 0))
        with world:
            _draw_entities(screen, bank, world.entities, frame)
        pygame.display.flip()
        clock.tick(FPS)