import pygame

from lptetris.controls import ControlEvent
from lptetris.run_pygame import KEY_BINDINGS, PALETTE, input_map


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def test_keys_map_to_controls():
    assert input_map(_key(pygame.K_LEFT)) == ControlEvent.move_left()
    assert input_map(_key(pygame.K_RIGHT)) == ControlEvent.move_right()
    assert input_map(_key(pygame.K_a)) == ControlEvent.rotate_left()
    assert input_map(_key(pygame.K_d)) == ControlEvent.rotate_right()
    assert input_map(_key(pygame.K_SPACE)) == ControlEvent.drop_block()
    assert input_map(_key(pygame.K_BACKSPACE)) == ControlEvent.exit_game()


def test_digits_select_speed():
    assert input_map(_key(pygame.K_1)) == ControlEvent.speed_change(0)
    assert input_map(_key(pygame.K_3)) == ControlEvent.speed_change(50)
    assert input_map(_key(pygame.K_9)) == ControlEvent.speed_change(200)


def test_window_close_exits():
    assert input_map(pygame.event.Event(pygame.QUIT)) == ControlEvent.exit_game()


def test_unmapped_events_ignored():
    assert input_map(_key(pygame.K_q)) is None
    assert input_map(pygame.event.Event(pygame.KEYUP, key=pygame.K_LEFT)) is None
    assert pygame.K_q not in KEY_BINDINGS


def test_palette_covers_all_colour_ids():
    assert len(PALETTE) == 64
    assert PALETTE[0] == (0, 0, 0)
    assert all(color != (0, 0, 0) for color in PALETTE[1:])
