"""Textures, sounds and per-entity sprites used by the game screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import pygame

from rtype.entities import (
    ALIEN_BOSS_SPRITE,
    MOSQUITO_SPRITE,
    PLANE_PROJECTILE_SPRITE,
    PLANE_SPRITE,
    PLAYER_PROJECTILE_SPRITE,
    PLAYER_SPRITE,
    STRAIGHT_PROJECTILE_SPRITE,
)

logger = logging.getLogger(__name__)

PLAYER_TEXTURE = 1
PLAYER_FRAME_WIDTH = 33
PLAYER_FRAME_HEIGHT = 17

LASER_SOUND = 1
LEVEL_MUSIC = 2
ENEMY_DIED_SOUND = 3

DEFAULT_TEXTURES: dict[int, str] = {
    1: "ressources/img/r-typesheet42.gif",
    2: "ressources/img/r-typesheet1.gif",
    3: "ressources/img/r-typesheet8.gif",
    4: "ressources/img/r-typesheet5.gif",
    5: "ressources/img/r-typesheet30.gif",
    6: "ressources/img/floor.png",
    7: "ressources/img/floor.png",
}

DEFAULT_SOUNDS: dict[int, str] = {
    LASER_SOUND: "ressources/sounds/laser.ogg",
    LEVEL_MUSIC: "ressources/sounds/level1.ogg",
    ENEMY_DIED_SOUND: "ressources/sounds/enemy_died.ogg",
}


@dataclass(frozen=True)
class SpriteLayout:
    """Which texture a sprite code uses, the area cut from it and its scale."""

    texture_key: int
    area: tuple[int, int, int, int]
    scale: int = 1


_LAYOUTS: dict[int, SpriteLayout] = {
    MOSQUITO_SPRITE: SpriteLayout(3, (0, 0, 33, 33), 2),
    PLANE_SPRITE: SpriteLayout(4, (0, 0, 33, 33), 2),
    PLAYER_PROJECTILE_SPRITE: SpriteLayout(2, (250, 100, 15, 17)),
    PLANE_PROJECTILE_SPRITE: SpriteLayout(2, (255, 275, 20, 20)),
    STRAIGHT_PROJECTILE_SPRITE: SpriteLayout(2, (255, 275, 20, 20), 2),
    ALIEN_BOSS_SPRITE: SpriteLayout(5, (10, 0, 100, 800)),
}


def sprite_layout(sprite_code: int, player_count: int) -> SpriteLayout | None:
    """Layout for a sprite code, or None for an unknown code.

    A player's row in the sprite sheet follows the number of players seen.
    """
    if sprite_code == PLAYER_SPRITE:
        return SpriteLayout(
            PLAYER_TEXTURE,
            (0, player_count * PLAYER_FRAME_HEIGHT, PLAYER_FRAME_WIDTH, PLAYER_FRAME_HEIGHT),
            2,
        )
    return _LAYOUTS.get(sprite_code)


@dataclass
class Sprite:
    """An area of a texture drawn scaled at a position."""

    texture: pygame.Surface
    area: pygame.Rect
    scale: int
    position: tuple[float, float]

    def image(self) -> pygame.Surface:
        """The texture area, scaled, as its own surface."""
        frame = pygame.Surface(self.area.size, pygame.SRCALPHA)
        frame.blit(self.texture, (0, 0), self.area)
        if self.scale != 1:
            frame = pygame.transform.scale(
                frame, (self.area.width * self.scale, self.area.height * self.scale)
            )
        return frame


class SpriteBank:
    """Loaded textures and sounds plus one sprite per known entity id."""

    def __init__(
        self,
        resource_dir: str | Path = ".",
        textures: Mapping[int, str] | None = None,
        sounds: Mapping[int, str] | None = None,
    ) -> None:
        self.resource_dir = Path(resource_dir)
        self.textures: dict[int, pygame.Surface] = {}
        self.sounds: dict[int, pygame.mixer.Sound | None] = {}
        self.sprites: dict[int, Sprite] = {}
        self.players: list[int] = []
        for key, path in (DEFAULT_TEXTURES if textures is None else textures).items():
            self.load_texture(self.resource_dir / path, key)
        for key, path in (DEFAULT_SOUNDS if sounds is None else sounds).items():
            self.load_sound(self.resource_dir / path, key)

    def load_texture(self, path: str | Path, key: int) -> pygame.Surface:
        """Load an image under ``key``; an empty texture is kept if it fails."""
        try:
            texture = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            logger.error("error loading texture %d: %s", key, exc)
            texture = pygame.Surface((0, 0))
        self.textures[key] = texture
        return texture

    def load_sound(self, path: str | Path, key: int) -> pygame.mixer.Sound | None:
        """Load a sound under ``key``; None is kept if it fails."""
        try:
            sound: pygame.mixer.Sound | None = pygame.mixer.Sound(str(path))
        except (pygame.error, OSError) as exc:
            logger.error("error loading music %s: %s", path, exc)
            sound = None
        self.sounds[key] = sound
        return sound

    def play_sound(self, key: int) -> bool:
        """Play a loaded sound; False when it is missing."""
        sound = self.sounds.get(key)
        if sound is None:
            return False
        sound.play()
        return True

    def create_entity(self, entity_id: int, sprite_code: int, x: float, y: float) -> Sprite | None:
        """Create and store the sprite of an entity; None for unknown sprite codes."""
        if sprite_code == PLAYER_SPRITE:
            self.is_new_player(entity_id)
        layout = sprite_layout(sprite_code, len(self.players))
        if layout is None:
            return None
        texture = self.textures.get(layout.texture_key)
        if texture is None:
            texture = pygame.Surface((0, 0))
        sprite = Sprite(texture, pygame.Rect(layout.area), layout.scale, (x, y))
        self.sprites[entity_id] = sprite
        return sprite

    def destroy_entity(self, entity_id: int) -> None:
        """Forget an entity's sprite."""
        self.sprites.pop(entity_id, None)

    def is_stored(self, entity_id: int) -> bool:
        """Whether an entity already has a sprite."""
        return entity_id in self.sprites

    def is_new_player(self, entity_id: int) -> bool:
        """Register a player id; False if it was already known."""
        if entity_id in self.players:
            return False
        self.players.append(entity_id)
        return True