"""Play on a pygame window, or watch a headless game as text.

Run with: `python -m lptetris`
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .controls import MAX_SPEED
from .runner import FRAME_DELAY, GameRunner
from .session import Session, SessionConfig
from .utils import GRAVITY_BASE, TextDisplay


def _speed_level(value: str) -> int:
    level = int(value)
    if not 0 <= level <= MAX_SPEED:
        raise argparse.ArgumentTypeError(f"speed level must be within 0..{MAX_SPEED}, got {level}")
    return level


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lptetris", description=__doc__)
    parser.add_argument("--speed", type=_speed_level, default=1, help="initial speed level (0-255)")
    parser.add_argument(
        "--gravity-base",
        type=int,
        default=GRAVITY_BASE,
        help="frames per row at speed 0; the speed level is subtracted from it",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for piece selection")
    parser.add_argument("--frame-delay", type=float, default=FRAME_DELAY, help="seconds between frames")
    parser.add_argument("--cell-size", type=int, default=60, help="pad size in pixels")
    parser.add_argument(
        "--text",
        action="store_true",
        help="print frames as text instead of opening a window (no input)",
    )
    parser.add_argument("--log-level", default="INFO", help="logging level")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = SessionConfig(speed=args.speed, gravity_base=args.gravity_base, seed=args.seed)
    session = Session(config)

    if args.text:
        runner = GameRunner(session, TextDisplay(every=config.gravity_base), frame_delay=args.frame_delay)
        runner.run()
        return

    from .run_pygame import PygameDisplay, PygameInput

    display = PygameDisplay(cell_size=args.cell_size)
    try:
        GameRunner(session, display, PygameInput(), frame_delay=args.frame_delay).run()
    finally:
        display.close()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
