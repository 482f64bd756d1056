"""Tick-driven game session."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

import numpy as np

from .board import Board, CollisionResult
from .controls import MAX_SPEED, ControlEvent, ControlKind, EventChannel
from .tetromino import Piece, TetrominoType
from .utils import GRAVITY_BASE, gravity_interval


LOGGER = logging.getLogger(__name__)


class FrameSink(Protocol):
    """Render target receiving one full 8×8 frame per tick."""

    def send_matrix(self, grid: np.ndarray) -> None: ...

    def clear(self) -> None: ...


class SessionState(Enum):
    FALLING = "falling"
    OVER = "over"
    STOPPED = "stopped"


@dataclass
class SessionConfig:
    spawn_x: int = 3
    spawn_y: int = 7
    gravity_base: int = GRAVITY_BASE
    speed: int = 1
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 <= self.speed <= MAX_SPEED:
            raise ValueError(f"Speed level must be within 0..{MAX_SPEED}, got {self.speed!r}")


class Session:
    """Own the board and the falling piece and advance them frame by frame."""

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = config or SessionConfig()
        self.rng = random.Random(self.config.seed)
        self.board = Board()
        self.piece: Piece = self._random_piece()
        self.x = self.config.spawn_x
        self.y = self.config.spawn_y
        self.tick = 0
        self.speed = self.config.speed
        self.drop = False
        self.state = SessionState.FALLING

    @property
    def running(self) -> bool:
        return self.state is SessionState.FALLING

    def reset(self) -> None:
        """Start a new game on an empty board."""

        self.board.reset()
        self.tick = 0
        self.speed = self.config.speed
        self.drop = False
        self.state = SessionState.FALLING
        self.spawn()

    def _random_piece(self) -> Piece:
        return Piece(self.rng.choice(list(TetrominoType)))

    def spawn(self) -> Piece:
        """Replace the falling piece with a random one at the spawn anchor."""

        self.piece = self._random_piece()
        self.x = self.config.spawn_x
        self.y = self.config.spawn_y
        LOGGER.debug("Spawned %s at (%d, %d)", self.piece.shape.value, self.x, self.y)
        return self.piece

    def shadow(self) -> np.ndarray:
        return self.board.shadow(self.piece, self.x, self.y)

    # Frame ------------------------------------------------------------
    def frame(self, sink: FrameSink, events: Optional[EventChannel] = None) -> bool:
        """Advance the game by one frame.

        The current overlay is sent to ``sink`` first, then gravity is applied
        when due, and finally at most one pending event from ``events`` is
        handled.  Returns ``False`` once the session has ended.
        """

        if not self.running:
            return False
        self.tick += 1
        sink.send_matrix(self.shadow())

        if self.drop or self.tick % gravity_interval(self.speed, self.config.gravity_base) == 0:
            self.gravity_step()
            if not self.running:
                return False

        if events is not None:
            event = events.poll()
            if event is not None:
                self.handle(event)
        return self.running

    def gravity_step(self) -> None:
        """Move the piece down one row, locking it if it cannot descend."""

        if self.y <= 0:
            self.lock()
        elif self.board.collides(self.piece, self.x, self.y - 1) is CollisionResult.UNOBSTRUCTED:
            self.y -= 1
        else:
            self.lock()

    def lock(self) -> None:
        """Write the piece into the board, clear rows and spawn the next one."""

        LOGGER.debug("Locking %s at (%d, %d)", self.piece.shape.value, self.x, self.y)
        self.board.place(self.piece, self.x, self.y)
        cleared = self.board.clear_rows()
        if cleared:
            LOGGER.info("Cleared %d row(s)", cleared)
        self.drop = False
        if self.board.finished():
            LOGGER.info("Game over after %d ticks", self.tick)
            self.state = SessionState.OVER
            return
        self.spawn()

    # Input ------------------------------------------------------------
    def handle(self, event: ControlEvent) -> None:
        """Apply a single control event to the falling piece."""

        kind = event.kind
        if kind is ControlKind.MOVE_LEFT:
            self._shift(-1)
        elif kind is ControlKind.MOVE_RIGHT:
            self._shift(1)
        elif kind is ControlKind.ROTATE_LEFT:
            self._rotate(left=True)
        elif kind is ControlKind.ROTATE_RIGHT:
            self._rotate(left=False)
        elif kind is ControlKind.DROP_BLOCK:
            self.drop = True
        elif kind is ControlKind.SPEED_CHANGE:
            self.speed = int(event.level)
            LOGGER.debug("Speed set to %d", self.speed)
        elif kind is ControlKind.EXIT_GAME:
            self.stop()
        else:
            raise ValueError(f"Unknown control event: {event!r}")

    def _shift(self, dx: int) -> None:
        target = self.x + dx
        if self.board.collides(self.piece, target, self.y) is CollisionResult.UNOBSTRUCTED:
            self.x = target
        else:
            LOGGER.debug("Move to column %d rejected", target)

    def _rotate(self, left: bool) -> None:
        if left:
            self.piece.rotate_left()
        else:
            self.piece.rotate_right()
        anchor = self.board.try_rotation(self.piece, self.x, self.y)
        if anchor is None:
            # undo
            if left:
                self.piece.rotate_right()
            else:
                self.piece.rotate_left()
            LOGGER.debug("Rotation rejected at (%d, %d)", self.x, self.y)
            return
        self.x, self.y = anchor

    def stop(self) -> None:
        """End the session on request.  This is not a game over."""

        if self.running:
            LOGGER.info("Session stopped after %d ticks", self.tick)
            self.state = SessionState.STOPPED
