import re

import pytest

from space_replay.utils.color import FALLBACK_COLOR, hex_to_rgb, player_color


def test_player_color_is_deterministic_hex() -> None:
    color = player_color("alice")
    assert re.fullmatch(r"#[0-9A-F]{6}", color)
    assert player_color("alice") == color


def test_player_color_trims_name() -> None:
    assert player_color("  alice ") == player_color("alice")


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name_is_gray(name: str) -> None:
    assert player_color(name) == FALLBACK_COLOR


def test_different_names_usually_differ() -> None:
    colors = {player_color(name) for name in ["alice", "bob", "carol", "dave"]}
    assert len(colors) > 1


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#FF8000", (255, 128, 0)),
        ("00ff00", (0, 255, 0)),
        ("#abc", (255, 255, 255)),
        ("#zzzzzz", (255, 255, 255)),
    ],
)
def test_hex_to_rgb(value: str, expected: tuple[int, int, int]) -> None:
    assert hex_to_rgb(value) == expected
