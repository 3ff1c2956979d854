import logging

import pytest
from pyrsistent import pvector

from space_replay.entities import Asteroid, Player, Ship, Vec2, Wormhole
from space_replay.errors import MalformedSnapshotError
from space_replay.state import ViewerState
from space_replay.systems.frames import load_frames
from space_replay.validation import validate_frames, validate_snapshot
from tests.test_utils import make_asteroid, make_ship, make_snapshot, make_wormhole


def test_valid_snapshot_passes() -> None:
    snapshot = make_snapshot(
        ships=[make_ship(1), make_ship(2)],
        asteroids=[make_asteroid(1)],
        wormholes=[make_wormhole(1, target_id=2), make_wormhole(2, target_id=1)],
    )
    validate_snapshot(snapshot, 0)


@pytest.mark.parametrize(
    "snapshot, message",
    [
        (
            make_snapshot(asteroids=[make_asteroid(3), make_asteroid(3)]),
            "asteroid id 3",
        ),
        (
            make_snapshot(wormholes=[make_wormhole(4), make_wormhole(4)]),
            "wormhole id 4",
        ),
        (make_snapshot(ships=[make_asteroid(1)]), "ships contains Asteroid"),
        (
            make_snapshot(players=[Player(id=0, name="a"), Player(id=0, name="b")]),
            "duplicate player id 0",
        ),
    ],
)
def test_invalid_snapshot(snapshot: object, message: str) -> None:
    with pytest.raises(MalformedSnapshotError, match=message):
        validate_snapshot(snapshot, 2)  # type: ignore[arg-type]


def test_non_snapshot_is_rejected() -> None:
    with pytest.raises(MalformedSnapshotError, match="expected Snapshot"):
        validate_snapshot({"ships": []}, 0)  # type: ignore[arg-type]


def test_frame_index_is_reported() -> None:
    frames = pvector(
        [make_snapshot(), make_snapshot(ships=[make_ship(1), make_ship(1)])]
    )
    with pytest.raises(MalformedSnapshotError) as excinfo:
        validate_frames(frames)
    assert excinfo.value.frame_index == 1


def test_dangling_wormhole_target_only_warns(caplog: pytest.LogCaptureFixture) -> None:
    frames = pvector([make_snapshot(wormholes=[make_wormhole(1, target_id=99)])])
    with caplog.at_level(logging.WARNING, logger="space_replay.validation"):
        validate_frames(frames)
    assert "[99]" in caplog.text


def test_partner_in_another_frame_is_not_dangling(
    caplog: pytest.LogCaptureFixture,
) -> None:
    frames = pvector(
        [
            make_snapshot(wormholes=[make_wormhole(1, target_id=2)]),
            make_snapshot(wormholes=[make_wormhole(2, target_id=1)]),
        ]
    )
    with caplog.at_level(logging.WARNING, logger="space_replay.validation"):
        validate_frames(frames)
    assert caplog.text == ""


@pytest.mark.parametrize(
    "snapshot, message",
    [
        (
            make_snapshot(ships=[Ship(id="7", player=0, position=Vec2(0, 0))]),
            "'id' must be an integer",
        ),
        (
            make_snapshot(ships=[Ship(id=7, player=None, position=Vec2(0, 0))]),
            "'player' must be an integer",
        ),
        (
            make_snapshot(
                ships=[Ship(id=7, player=0, position=Vec2(0, 0), health=None)]
            ),
            "'health' must be a number",
        ),
        (
            make_snapshot(ships=[Ship(id=7, player=0, position=Vec2(0, 0), fuel="x")]),
            "'fuel' must be a number",
        ),
        (
            make_snapshot(
                ships=[Ship(id=7, player=0, position=Vec2(0, 0), cargo=None)]
            ),
            "'cargo' must be a number",
        ),
        (
            make_snapshot(ships=[Ship(id=7, player=0, position=Vec2(None, 0))]),
            "'position' must be a vector of numbers",
        ),
        (
            make_snapshot(
                ships=[Ship(id=7, player=0, position=Vec2(0, 0), vector=None)]
            ),
            "'vector' must be a vector of numbers",
        ),
        (
            make_snapshot(asteroids=[Asteroid(id=1, position=Vec2(0, 0), size=None)]),
            "'size' must be a number",
        ),
        (
            make_snapshot(asteroids=[Asteroid(id=1, position=None, size=10.0)]),
            "'position' must be a vector of numbers",
        ),
        (
            make_snapshot(
                wormholes=[Wormhole(id=1, position=Vec2(0, 0), target_id=None)]
            ),
            "'target_id' must be an integer",
        ),
        (
            make_snapshot(
                wormholes=[Wormhole(id=1.5, position=Vec2(0, 0), target_id=2)]
            ),
            "'id' must be an integer",
        ),
    ],
)
def test_mistyped_fields_are_rejected(snapshot: object, message: str) -> None:
    with pytest.raises(MalformedSnapshotError, match=message):
        validate_snapshot(snapshot, 0)  # type: ignore[arg-type]


def test_mistyped_field_fails_the_load_not_playback() -> None:
    frames = [
        make_snapshot(ships=[Ship(id=7, player=0, position=Vec2(0, 0), health=None)]),
        make_snapshot(ships=[make_ship(7, x=100)]),
    ]
    with pytest.raises(MalformedSnapshotError) as excinfo:
        load_frames(ViewerState(), frames)
    assert excinfo.value.frame_index == 0
