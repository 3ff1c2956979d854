from typing import List

import pytest

from space_replay.entities import Player, Ship, Vec2
from space_replay.systems.interpolation import (
    index_by_id,
    interpolate_entities,
    interpolate_entity,
    interpolate_snapshot,
)
from tests.test_utils import make_asteroid, make_ship, make_snapshot, make_wormhole


def test_t_zero_returns_source() -> None:
    source = make_snapshot(ships=[make_ship(1, x=0)])
    target = make_snapshot(ships=[make_ship(1, x=100)])
    assert interpolate_snapshot(source, target, 0.0) is source
    assert interpolate_snapshot(source, target, -0.5) is source


def test_t_one_takes_target_entities() -> None:
    players = [Player(id=0, name="a", color="#112233", rock=5)]
    source = make_snapshot(
        ships=[make_ship(1, x=0), make_ship(2, x=50)],
        asteroids=[make_asteroid(10, x=0)],
        players=players,
    )
    target = make_snapshot(
        ships=[make_ship(1, x=100), make_ship(3, x=300)],
        asteroids=[make_asteroid(11, x=900)],
        players=[Player(id=0, name="a", color="#112233", rock=99)],
    )
    result = interpolate_snapshot(source, target, 1.0)
    assert result is not None
    assert list(result.ships) == list(target.ships)
    assert list(result.asteroids) == list(target.asteroids)
    assert list(result.players) == players


@pytest.mark.parametrize("missing", ["source", "target"])
def test_missing_frame_returns_source(missing: str) -> None:
    snapshot = make_snapshot(ships=[make_ship(1)])
    if missing == "source":
        assert interpolate_snapshot(None, snapshot, 0.5) is None
    else:
        assert interpolate_snapshot(snapshot, None, 0.5) is snapshot


def test_midpoint_blends_position_and_rounds_stats() -> None:
    source = make_ship(1, x=0, y=0, health=10, fuel=0.0, cargo=0)
    target = make_ship(1, x=100, y=-50, health=15, fuel=3.0, cargo=7)
    blended = interpolate_entity(source, target, 0.5)
    assert blended.position == Vec2(50.0, -25.0)
    assert blended.health == 13
    assert blended.fuel == 2
    assert blended.cargo == 4
    assert blended.fade is None


def test_discrete_fields_come_from_source() -> None:
    source = make_ship(1, player=0)
    target = make_ship(1, player=1)
    assert interpolate_entity(source, target, 0.9).player == 0

    asteroid_source = make_asteroid(5, owner_id=None, size=100)
    asteroid_target = make_asteroid(5, owner_id=2, x=40, size=80)
    blended = interpolate_entity(asteroid_source, asteroid_target, 0.5)
    assert blended.owner_id is None
    assert blended.size == 100
    assert blended.position == Vec2(20.0, 0.0)


def test_vector_blends() -> None:
    source = Ship(id=1, player=0, position=Vec2(0, 0), vector=Vec2(10, 0))
    target = Ship(id=1, player=0, position=Vec2(0, 0), vector=Vec2(0, 10))
    assert interpolate_entity(source, target, 0.25).vector == Vec2(7.5, 2.5)


@pytest.mark.parametrize(
    "t, expected_fade",
    [(0.1, 0.8), (0.25, 0.5), (0.4, 0.2)],
)
def test_disappearing_entity_fades_out_in_first_half(
    t: float, expected_fade: float
) -> None:
    blended = interpolate_entities([make_ship(1)], [], t)
    assert len(blended) == 1
    assert blended[0].fade == pytest.approx(expected_fade)


@pytest.mark.parametrize(
    "t, expected_fade",
    [(0.5, 0.0), (0.75, 0.5), (0.9, 0.8)],
)
def test_appearing_entity_fades_in_in_second_half(
    t: float, expected_fade: float
) -> None:
    blended = interpolate_entities([], [make_ship(1)], t)
    assert len(blended) == 1
    assert blended[0].fade == pytest.approx(expected_fade)


def test_disappearing_entity_hidden_in_second_half() -> None:
    assert interpolate_entities([make_ship(1)], [], 0.5) == []
    assert interpolate_entities([make_ship(1)], [], 0.9) == []


def test_appearing_entity_hidden_in_first_half() -> None:
    assert interpolate_entities([], [make_ship(1)], 0.0) == []
    assert interpolate_entities([], [make_ship(1)], 0.49) == []


def test_fade_is_monotonic_over_the_blend() -> None:
    steps = [i / 20 for i in range(1, 20)]
    fade_out: List[float] = [
        e.fade for t in steps for e in interpolate_entities([make_ship(1)], [], t)
    ]
    fade_in: List[float] = [
        e.fade for t in steps for e in interpolate_entities([], [make_ship(2)], t)
    ]
    assert fade_out == sorted(fade_out, reverse=True)
    assert fade_in == sorted(fade_in)


def test_replaced_entity_does_not_cross_fade() -> None:
    source = [make_ship(1)]
    target = [make_ship(2)]
    assert [e.id for e in interpolate_entities(source, target, 0.3)] == [1]
    assert [e.id for e in interpolate_entities(source, target, 0.7)] == [2]


def test_output_order_source_then_new_target_ids() -> None:
    source = [make_ship(3), make_ship(1)]
    target = [make_ship(5), make_ship(1), make_ship(3), make_ship(4)]
    result = interpolate_entities(source, target, 0.6)
    assert [e.id for e in result] == [3, 1, 5, 4]


def test_none_placeholders_are_skipped() -> None:
    assert index_by_id([None, make_ship(2), None]) == {2: make_ship(2)}
    result = interpolate_entities([None, make_ship(1)], [make_ship(1), None], 0.5)
    assert [e.id for e in result] == [1]


def test_wormholes_and_radius_come_from_source() -> None:
    source = make_snapshot(wormholes=[make_wormhole(1, target_id=2)], radius=1000)
    target = make_snapshot(wormholes=[make_wormhole(9, target_id=8)], radius=2000)
    result = interpolate_snapshot(source, target, 0.5)
    assert result is not None
    assert result.wormholes == source.wormholes
    assert result.radius == 1000


def test_inputs_are_not_mutated() -> None:
    ship = make_ship(1, x=0)
    source = make_snapshot(ships=[ship])
    target = make_snapshot(ships=[make_ship(1, x=100)])
    interpolate_snapshot(source, target, 0.5)
    assert source.ships[0] is ship
    assert ship.position == Vec2(0.0, 0.0)
