"""Control events and the channel that carries them to the game loop."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional

MAX_SPEED = 255


class ControlKind(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    DROP_BLOCK = "drop_block"
    SPEED_CHANGE = "speed_change"
    EXIT_GAME = "exit_game"


@dataclass(frozen=True)
class ControlEvent:
    """A single player command.

    ``level`` is only meaningful for ``SPEED_CHANGE`` and must be ``None`` for
    every other kind.
    """

    kind: ControlKind
    level: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is ControlKind.SPEED_CHANGE:
            if self.level is None or not 0 <= self.level <= MAX_SPEED:
                raise ValueError(f"Speed level must be within 0..{MAX_SPEED}, got {self.level!r}")
        elif self.level is not None:
            raise ValueError(f"{self.kind.name} does not take a level")

    @classmethod
    def move_left(cls) -> "ControlEvent":
        return cls(ControlKind.MOVE_LEFT)

    @classmethod
    def move_right(cls) -> "ControlEvent":
        return cls(ControlKind.MOVE_RIGHT)

    @classmethod
    def rotate_left(cls) -> "ControlEvent":
        return cls(ControlKind.ROTATE_LEFT)

    @classmethod
    def rotate_right(cls) -> "ControlEvent":
        return cls(ControlKind.ROTATE_RIGHT)

    @classmethod
    def drop_block(cls) -> "ControlEvent":
        return cls(ControlKind.DROP_BLOCK)

    @classmethod
    def speed_change(cls, level: int) -> "ControlEvent":
        return cls(ControlKind.SPEED_CHANGE, level)

    @classmethod
    def exit_game(cls) -> "ControlEvent":
        return cls(ControlKind.EXIT_GAME)


class EventChannel:
    """Single-producer/single-consumer FIFO of :class:`ControlEvent`.

    Neither side ever blocks.  The channel is unbounded unless ``maxsize`` is
    given, in which case the oldest pending events are discarded to make room
    and counted in :attr:`dropped`.  A bounded ``deque`` evicts its oldest item
    inside the same atomic append, so a producer running on another thread
    needs no extra locking.
    """

    def __init__(self, maxsize: Optional[int] = None) -> None:
        if maxsize is not None and maxsize < 1:
            raise ValueError("maxsize must be positive")
        self.maxsize = maxsize
        self._events: Deque[ControlEvent] = deque(maxlen=maxsize)
        self.dropped = 0
        self.closed = False

    def put(self, event: ControlEvent) -> None:
        if self.closed:
            return
        if self.maxsize is not None and len(self._events) == self.maxsize:
            self.dropped += 1
        self._events.append(event)

    def poll(self) -> Optional[ControlEvent]:
        """Return the oldest pending event, or ``None`` if there is none."""

        try:
            return self._events.popleft()
        except IndexError:
            return None

    def close(self) -> None:
        """Mark the producer as gone.  Pending events can still be polled."""

        self.closed = True

    def __len__(self) -> int:
        return len(self._events)


__all__ = ["ControlEvent", "ControlKind", "EventChannel", "MAX_SPEED"]
