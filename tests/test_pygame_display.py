from __future__ import annotations

import asyncio

import numpy as np
import pygame
import pytest

from lptetris.board import HEIGHT, WIDTH
from lptetris.controls import ControlEvent, EventChannel
from lptetris.run_pygame import PALETTE, PygameDisplay, PygameInput

CELL = 10


@pytest.fixture
def display(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    display = PygameDisplay(cell_size=CELL)
    display.open()
    yield display
    display.close()


def _pixel(display: PygameDisplay, row_from_top: int, col: int):
    screen = pygame.display.get_surface()
    color = screen.get_at((col * CELL + CELL // 2, row_from_top * CELL + CELL // 2))
    return (color.r, color.g, color.b)


def test_floor_row_drawn_at_bottom(display) -> None:
    grid = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    grid[0, 0] = 5
    display.send_matrix(grid)
    assert _pixel(display, HEIGHT - 1, 0) == PALETTE[5]
    assert _pixel(display, 0, 0) == (0, 0, 0)
    for col in range(WIDTH):
        assert _pixel(display, 0, col) == (0, 0, 0)


def test_ceiling_row_drawn_at_top(display) -> None:
    grid = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    grid[HEIGHT - 1, WIDTH - 1] = 53
    display.send_matrix(grid)
    assert _pixel(display, 0, WIDTH - 1) == PALETTE[53]
    assert _pixel(display, HEIGHT - 1, WIDTH - 1) == (0, 0, 0)


def test_clear_paints_every_cell_black(display) -> None:
    display.send_matrix(np.full((HEIGHT, WIDTH), 21, dtype=np.uint8))
    display.clear()
    for row in range(HEIGHT):
        for col in range(WIDTH):
            assert _pixel(display, row, col) == (0, 0, 0)


def test_capture_publishes_pygame_events(display) -> None:
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT))
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    channel = EventChannel()

    async def one_poll() -> None:
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(PygameInput(poll_interval=0.01).capture(channel), timeout=0.05)

    asyncio.run(one_poll())
    assert channel.poll() == ControlEvent.move_left()
    assert channel.poll() == ControlEvent.exit_game()
    assert channel.poll() is None
