"""Client-side view of the entities the server streams to it."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any

from rtype.entities import PLAYER_SPRITE
from rtype.protocol import EntityState

logger = logging.getLogger(__name__)


class World:
    """Thread-safe list of the latest known state of every entity.

    The receiving thread writes into it while the game loop reads it; use
    the world as a context manager to hold its lock across several calls.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.entities: list[EntityState] = []

    def __enter__(self) -> World:
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._lock.release()

    def find_index(self, entity_id: int) -> int | None:
        """Position of the entity with ``entity_id`` in the list, or None."""
        with self._lock:
            return next(
                (index for index, state in enumerate(self.entities) if state.id == entity_id),
                None,
            )

    def add(self, state: EntityState) -> None:
        """Append a state to the list."""
        with self._lock:
            self.entities.append(state)
        logger.debug("added entity %d", state.id)

    def update_position(self, index: int, x: int, y: int) -> None:
        """Move the entity stored at ``index``."""
        with self._lock:
            self.entities[index] = replace(self.entities[index], pos_x=x, pos_y=y)

    def remove_at(self, index: int) -> None:
        """Drop the entity stored at ``index``."""
        with self._lock:
            del self.entities[index]

    def apply(self, state: EntityState) -> None:
        """Record a state received from the server.

        Known entities are replaced, new ones appended. A dead entity that is
        not a player is dropped from the list instead; dead players stay so
        that the game can show them as destroyed.
        """
        with self._lock:
            index = self.find_index(state.id)
            if not state.is_alive and state.sprite_code != PLAYER_SPRITE:
                if index is not None:
                    self.remove_at(index)
                return
            if index is None:
                self.add(state)
            else:
                self.entities[index] = state

    def snapshot(self) -> list[EntityState]:
        """A copy of the current entity list."""
        with self._lock:
            return list(self.entities)