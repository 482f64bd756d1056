import pytest

from lptetris.controls import ControlEvent, ControlKind, EventChannel


def test_channel_is_fifo_and_non_blocking():
    channel = EventChannel()
    assert channel.poll() is None
    channel.put(ControlEvent.rotate_left())
    channel.put(ControlEvent.drop_block())
    assert channel.poll() == ControlEvent.rotate_left()
    assert channel.poll() == ControlEvent.drop_block()
    assert channel.poll() is None


def test_unbounded_channel_keeps_everything():
    channel = EventChannel()
    for _ in range(1000):
        channel.put(ControlEvent.move_left())
    assert len(channel) == 1000
    assert channel.dropped == 0


def test_bounded_channel_drops_oldest():
    channel = EventChannel(maxsize=2)
    channel.put(ControlEvent.move_left())
    channel.put(ControlEvent.move_right())
    channel.put(ControlEvent.exit_game())
    assert channel.dropped == 1
    assert channel.poll() == ControlEvent.move_right()
    assert channel.poll() == ControlEvent.exit_game()
    assert channel.poll() is None


def test_closed_channel_drains_then_reports_nothing():
    channel = EventChannel()
    channel.put(ControlEvent.move_left())
    channel.close()
    channel.put(ControlEvent.move_right())
    assert channel.poll() == ControlEvent.move_left()
    assert channel.poll() is None


def test_invalid_maxsize():
    with pytest.raises(ValueError):
        EventChannel(maxsize=0)


def test_speed_change_carries_level():
    event = ControlEvent.speed_change(42)
    assert event.kind is ControlKind.SPEED_CHANGE
    assert event.level == 42


@pytest.mark.parametrize("level", [-1, 256, None])
def test_speed_change_level_validated(level):
    with pytest.raises(ValueError):
        ControlEvent(ControlKind.SPEED_CHANGE, level)


def test_level_rejected_for_other_kinds():
    with pytest.raises(ValueError):
        ControlEvent(ControlKind.MOVE_LEFT, 3)


def test_events_are_immutable_values():
    event = ControlEvent.rotate_right()
    assert event == ControlEvent(ControlKind.ROTATE_RIGHT)
    with pytest.raises(AttributeError):
        event.kind = ControlKind.ROTATE_LEFT


def test_bounded_channel_evicts_inside_append():
    channel = EventChannel(maxsize=1)
    channel.put(ControlEvent.move_left())
    assert channel.poll() == ControlEvent.move_left()
    channel.put(ControlEvent.move_right())
    channel.put(ControlEvent.drop_block())
    assert channel.dropped == 1
    assert channel._events.maxlen == 1
    assert channel.poll() == ControlEvent.drop_block()
    assert channel.poll() is None
