"""Component records attached to game entities."""

from __future__ import annotations

from dataclasses import dataclass, field

from rtype.vec import Vec2


def _copy(vector: Vec2) -> Vec2:
    return Vec2(vector.x, vector.y)


@dataclass
class PositionComponent:
    """Where an entity currently is."""

    position: Vec2 = field(default_factory=Vec2)

    def __post_init__(self) -> None:
        self.position = _copy(self.position)


@dataclass
class InitialPositionComponent:
    """Where an entity spawned, plus its movement phase."""

    position: Vec2 = field(default_factory=Vec2)
    move: int = 0

    def __post_init__(self) -> None:
        self.position = _copy(self.position)


@dataclass
class LifeComponent:
    """Hit points left to an entity."""

    remaining_life: int = 0


@dataclass
class PlayerComponent:
    """Name and network address of the client controlling an entity."""

    name: str = "none"
    endpoint: tuple[str, int] | None = None


@dataclass
class SpriteComponent:
    """Size, sprite code, network id and liveness of an entity."""

    size: Vec2 = field(default_factory=Vec2)
    sprite_code: int = 0
    id: int = -1
    is_alive: bool = False

    def __post_init__(self) -> None:
        self.size = _copy(self.size)


@dataclass
class ProjectileVectorComponent:
    """Direction a projectile travels in."""

    vector: Vec2 = field(default_factory=Vec2)

    def __post_init__(self) -> None:
        self.vector = _copy(self.vector)