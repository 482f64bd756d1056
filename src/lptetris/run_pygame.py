"""pygame front-end standing in for the 8×8 LED grid.

:class:`PygameDisplay` implements the frame sink and paints each frame into a
small window, ceiling at the top.  :class:`PygameInput` is the input source: a
cooperative task that pumps the pygame event queue and publishes control
events for the session.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from .board import HEIGHT, WIDTH
from .controls import ControlEvent, EventChannel


LOGGER = logging.getLogger(__name__)

# Size of a single pad in pixels
CELL_SIZE = 60
# Seconds between polls of the pygame event queue
POLL_INTERVAL = 0.002

Color = Tuple[int, int, int]


def _build_palette() -> List[Color]:
    """Approximate the 64 colour palette of the LED grid.

    ``0`` is off and ``1..3`` are greys.  The rest are fifteen hues with four
    shades each, the second shade of every group being the brightest.
    """

    palette: List[Color] = [(0, 0, 0), (80, 80, 80), (170, 170, 170), (255, 255, 255)]
    brightness = (60, 100, 45, 25)
    for value in range(4, 64):
        hue, shade = divmod(value - 4, 4)
        color = pygame.Color(0, 0, 0)
        color.hsva = (hue * 24 % 360, 100, brightness[shade], 100)
        palette.append((color.r, color.g, color.b))
    return palette


PALETTE: List[Color] = _build_palette()

# Key bindings.  Digits select speed levels in steps of 25.
KEY_BINDINGS: Dict[int, ControlEvent] = {
    pygame.K_a: ControlEvent.rotate_left(),
    pygame.K_d: ControlEvent.rotate_right(),
    pygame.K_LEFT: ControlEvent.move_left(),
    pygame.K_RIGHT: ControlEvent.move_right(),
    pygame.K_SPACE: ControlEvent.drop_block(),
    pygame.K_BACKSPACE: ControlEvent.exit_game(),
    pygame.K_ESCAPE: ControlEvent.exit_game(),
}
for _digit, _key in enumerate(
    (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5,
     pygame.K_6, pygame.K_7, pygame.K_8, pygame.K_9)
):
    KEY_BINDINGS[_key] = ControlEvent.speed_change(_digit * 25)


def input_map(event: pygame.event.Event) -> Optional[ControlEvent]:
    """Translate a raw pygame event into a control event.

    This is the place to change or add input mappings.
    """

    if event.type == pygame.QUIT:
        return ControlEvent.exit_game()
    if event.type == pygame.KEYDOWN:
        return KEY_BINDINGS.get(event.key)
    return None


class PygameDisplay:
    """Frame sink painting the grid into a pygame window."""

    def __init__(self, cell_size: int = CELL_SIZE, caption: str = "lptetris") -> None:
        self.cell_size = cell_size
        self.caption = caption
        self._screen: Optional[pygame.Surface] = None

    def open(self) -> pygame.Surface:
        if self._screen is None:
            pygame.init()
            self._screen = pygame.display.set_mode((WIDTH * self.cell_size, HEIGHT * self.cell_size))
            pygame.display.set_caption(self.caption)
            LOGGER.debug("Opened %dx%d window", WIDTH * self.cell_size, HEIGHT * self.cell_size)
        return self._screen

    def close(self) -> None:
        if self._screen is not None:
            pygame.quit()
            self._screen = None

    def send_matrix(self, grid: np.ndarray) -> None:
        """Overwrite the whole window with ``grid``."""

        screen = self.open()
        size = self.cell_size
        for row in range(HEIGHT):
            # Row 0 is the floor, so draw it at the bottom of the window.
            top = (HEIGHT - 1 - row) * size
            for col in range(WIDTH):
                rect = pygame.Rect(col * size, top, size, size)
                pygame.draw.rect(screen, PALETTE[int(grid[row][col]) % len(PALETTE)], rect)
                pygame.draw.rect(screen, (40, 40, 40), rect, 1)
        pygame.display.flip()

    def clear(self) -> None:
        self.send_matrix(np.zeros((HEIGHT, WIDTH), dtype=np.uint8))


class PygameInput:
    """Input source pumping pygame events into an :class:`EventChannel`."""

    def __init__(self, poll_interval: float = POLL_INTERVAL) -> None:
        self.poll_interval = poll_interval

    async def capture(self, channel: EventChannel) -> None:
        while True:
            for event in pygame.event.get():
                control = input_map(event)
                if control is not None:
                    channel.put(control)
            await asyncio.sleep(self.poll_interval)


__all__ = ["CELL_SIZE", "KEY_BINDINGS", "PALETTE", "PygameDisplay", "PygameInput", "input_map"]
