import pytest

from lptetris.__main__ import main, parse_args
from lptetris.utils import GRAVITY_BASE


def test_defaults():
    args = parse_args([])
    assert args.speed == 1
    assert args.gravity_base == GRAVITY_BASE
    assert args.seed is None
    assert not args.text


def test_text_mode_plays_headless_game(capsys):
    main(["--text", "--seed", "0", "--gravity-base", "2", "--frame-delay", "0", "--log-level", "warning"])
    out = capsys.readouterr().out
    assert "#" in out
    assert "........" in out


@pytest.mark.parametrize("speed", ["-1", "256"])
def test_speed_out_of_range_rejected(speed):
    with pytest.raises(SystemExit):
        parse_args(["--speed", speed])


def test_speed_bounds_accepted():
    assert parse_args(["--speed", "0"]).speed == 0
    assert parse_args(["--speed", "255"]).speed == 255
