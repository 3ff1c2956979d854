import pytest

from space_replay.entities import Asteroid, Player, Vec2
from space_replay.utils.math import round_half_up
from space_replay.utils.summary import (
    DEFAULT_PLAYER_COLOR,
    describe_entity,
    frame_label,
    player_color,
    player_summaries,
)
from tests.test_utils import make_ship, make_snapshot, make_wormhole


def test_player_summaries_count_owned_ships() -> None:
    snapshot = make_snapshot(
        players=[
            Player(id=0, name="alice", color="#FF0000", rock=10, fuel=5.0),
            Player(id=1, name="bob", color="#00FF00"),
        ],
        ships=[make_ship(1, player=0), make_ship(2, player=0), make_ship(3, player=1)],
    )
    rows = player_summaries(snapshot)
    assert [(r.name, r.ships) for r in rows] == [("alice", 2), ("bob", 1)]
    assert rows[0].rock == 10
    assert rows[0].fuel == 5.0


def test_player_summaries_without_snapshot() -> None:
    assert player_summaries(None) == []


def test_player_color_lookup() -> None:
    snapshot = make_snapshot(players=[Player(id=3, name="c", color="#123456")])
    assert player_color(snapshot, 3) == "#123456"
    assert player_color(snapshot, 4) == DEFAULT_PLAYER_COLOR
    assert player_color(None, 3) == DEFAULT_PLAYER_COLOR


@pytest.mark.parametrize(
    "index, total, expected",
    [(0, 0, "0 / 0"), (0, 10, "1 / 10"), (9, 10, "10 / 10")],
)
def test_frame_label(index: int, total: int, expected: str) -> None:
    assert frame_label(index, total) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (-0.5, 0), (-1.5, -1), (2.4, 2)],
)
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_describe_ship() -> None:
    lines = describe_entity(make_ship(7, x=10.5, y=-3.2, player=1, cargo=4))
    assert lines[0] == "Ship ID: 7"
    assert "P2" in lines
    assert "Pos: (11, -3)" in lines
    assert "Type: Drill" in lines
    assert "Cargo: 4" in lines


def test_describe_asteroid() -> None:
    asteroid = Asteroid(
        id=2, position=Vec2(0, 0), size=80.0, type=1, owner_id=0, surface=3.5
    )
    lines = describe_entity(asteroid)
    assert lines[0] == "Asteroid ID: 2"
    assert "Size: 80.00" in lines
    assert "Owner: P1" in lines
    assert "Surface: 3.5" in lines


def test_describe_wormhole() -> None:
    lines = describe_entity(make_wormhole(3, target_id=4))
    assert lines == ["Wormhole ID: 3", "Pos: (0, 0)", "Target: 4"]


def test_describe_missing_entity() -> None:
    assert describe_entity(None) == ["Selected entity not found in current frame"]
