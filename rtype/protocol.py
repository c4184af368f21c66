"""Wire formats exchanged between the game server and its clients.

The server sends one fixed-size record per entity and frame. A client sends
two-byte key codes, or any datagram of another length as its player name.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from rtype.components import PositionComponent, SpriteComponent
from rtype.ecs import Coordinator, Entity

_STATE_FORMAT = struct.Struct("<4i?3x")
_KEY_FORMAT = struct.Struct("<H")


@dataclass(frozen=True)
class EntityState:
    """Position, sprite code, network id and liveness of one entity."""

    SIZE: ClassVar[int] = _STATE_FORMAT.size

    pos_x: int
    pos_y: int
    sprite_code: int
    id: int
    is_alive: bool

    def pack(self) -> bytes:
        """The record as sent on the wire."""
        return _STATE_FORMAT.pack(
            self.pos_x, self.pos_y, self.sprite_code, self.id, self.is_alive
        )

    @classmethod
    def unpack(cls, data: bytes) -> EntityState:
        """Read a record; raises ValueError when ``data`` has the wrong size."""
        if len(data) != cls.SIZE:
            raise ValueError(f"entity state needs {cls.SIZE} bytes, got {len(data)}")
        pos_x, pos_y, sprite_code, entity_id, is_alive = _STATE_FORMAT.unpack(data)
        return cls(pos_x, pos_y, sprite_code, entity_id, is_alive)


def entity_state(coordinator: Coordinator, entity: Entity) -> EntityState:
    """Snapshot of an entity's position and sprite, coordinates truncated to ints."""
    position = coordinator.get_component(entity, PositionComponent).position
    sprite = coordinator.get_component(entity, SpriteComponent)
    return EntityState(
        int(position.x), int(position.y), sprite.sprite_code, sprite.id, sprite.is_alive
    )


def encode_key(code: int) -> bytes:
    """Two little-endian bytes carrying a key code."""
    if not 0 <= code <= 0xFFFF:
        raise ValueError(f"key code {code} does not fit in two bytes")
    return _KEY_FORMAT.pack(code)


def decode_key(data: bytes) -> int:
    """The key code carried by a two-byte datagram."""
    if len(data) != _KEY_FORMAT.size:
        raise ValueError(f"key code needs {_KEY_FORMAT.size} bytes, got {len(data)}")
    return _KEY_FORMAT.unpack(data)[0]