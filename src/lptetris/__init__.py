"""Falling-block puzzle engine for an 8×8 LED grid."""

from .board import Board, CollisionResult
from .controls import ControlEvent, ControlKind, EventChannel
from .session import FrameSink, Session, SessionConfig, SessionState
from .tetromino import Orientation, Piece, TetrominoType, render_layout
from .utils import TextDisplay, gravity_interval, render_text

__all__ = [
    "Board",
    "CollisionResult",
    "ControlEvent",
    "ControlKind",
    "EventChannel",
    "FrameSink",
    "Orientation",
    "Piece",
    "Session",
    "SessionConfig",
    "SessionState",
    "TetrominoType",
    "TextDisplay",
    "gravity_interval",
    "render_layout",
    "render_text",
]
