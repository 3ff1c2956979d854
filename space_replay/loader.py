"""Replay file loading.

Converts the JSON game states written by the game server into
:class:`Snapshot` records. Accepted documents:

* a JSON array of states;
* an object holding the array under ``states`` or ``frames``;
* a single state object;
* JSON Lines, one state per line.

Key conventions follow the server: a ship's cargo is ``rock``
(``cargo`` is accepted too), an asteroid's ``owner_id`` of ``-1`` means
unowned, and ``null`` entries in entity arrays (removed entities) are
skipped. Players without a ``color`` get :func:`player_color` of their name.

Every structural problem raises :class:`MalformedSnapshotError` naming the
frame. Id uniqueness is checked when the frames are loaded into the store
(:func:`space_replay.validation.validate_frames`).
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from pyrsistent import PVector, pvector

from space_replay.entities import Asteroid, Player, Ship, Vec2, Wormhole
from space_replay.errors import MalformedSnapshotError
from space_replay.snapshot import Snapshot
from space_replay.types import ShipType
from space_replay.utils.color import player_color

logger = logging.getLogger(__name__)

T = TypeVar("T")
Record = Dict[str, Any]


def _number(record: Record, key: str, where: str, frame: int) -> float:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSnapshotError(f"{where}: '{key}' must be a number", frame)
    return value


def _optional_number(
    record: Record, key: str, where: str, frame: int, default: Optional[float]
) -> Optional[float]:
    if record.get(key) is None:
        return default
    return _number(record, key, where, frame)


def _int(record: Record, key: str, where: str, frame: int) -> int:
    value = _number(record, key, where, frame)
    if value != int(value):
        raise MalformedSnapshotError(f"{where}: '{key}' must be an integer", frame)
    return int(value)


def _vec(record: Record, key: str, where: str, frame: int) -> Vec2:
    value = record.get(key)
    if not isinstance(value, dict):
        raise MalformedSnapshotError(f"{where}: missing '{key}'", frame)
    return Vec2(
        float(_number(value, "x", f"{where}.{key}", frame)),
        float(_number(value, "y", f"{where}.{key}", frame)),
    )


def ship_from_dict(record: Record, frame: int) -> Ship:
    where = f"ship {record.get('id')}"
    cargo_key = "cargo" if "cargo" in record else "rock"
    raw_type = _int(record, "type", where, frame) if "type" in record else 0
    try:
        ship_type = ShipType(raw_type)
    except ValueError as e:
        raise MalformedSnapshotError(
            f"{where}: unknown ship type {raw_type}", frame
        ) from e
    return Ship(
        id=_int(record, "id", "ship", frame),
        player=_int(record, "player", where, frame),
        position=_vec(record, "position", where, frame),
        vector=_vec(record, "vector", where, frame)
        if "vector" in record
        else Vec2(0.0, 0.0),
        health=_int(record, "health", where, frame) if "health" in record else 0,
        fuel=float(_optional_number(record, "fuel", where, frame, 0.0) or 0.0),
        cargo=_int(record, cargo_key, where, frame) if cargo_key in record else 0,
        type=ship_type,
    )


def asteroid_from_dict(record: Record, frame: int) -> Asteroid:
    where = f"asteroid {record.get('id')}"
    owner_id: Optional[int] = None
    if record.get("owner_id") is not None:
        owner_id = _int(record, "owner_id", where, frame)
        if owner_id < 0:
            owner_id = None
    return Asteroid(
        id=_int(record, "id", "asteroid", frame),
        position=_vec(record, "position", where, frame),
        size=float(_number(record, "size", where, frame)),
        type=_int(record, "type", where, frame) if "type" in record else 0,
        owner_id=owner_id,
        surface=_optional_number(record, "surface", where, frame, None),
    )


def wormhole_from_dict(record: Record, frame: int) -> Wormhole:
    where = f"wormhole {record.get('id')}"
    return Wormhole(
        id=_int(record, "id", "wormhole", frame),
        position=_vec(record, "position", where, frame),
        target_id=_int(record, "target_id", where, frame),
    )


def player_from_dict(record: Record, frame: int) -> Player:
    where = f"player {record.get('id')}"
    name = record.get("name")
    if not isinstance(name, str):
        raise MalformedSnapshotError(f"{where}: 'name' must be a string", frame)
    color = record.get("color")
    return Player(
        id=_int(record, "id", "player", frame),
        name=name,
        color=color if isinstance(color, str) and color else player_color(name),
        rock=_int(record, "rock", where, frame) if "rock" in record else 0,
        fuel=float(_optional_number(record, "fuel", where, frame, 0.0) or 0.0),
        alive=bool(record.get("alive", True)),
        score=_int(record, "score", where, frame) if "score" in record else 0,
    )


def _collection(
    data: Record, key: str, frame: int, convert: Callable[[Record, int], T]
) -> PVector[T]:
    items = data.get(key)
    if items is None:
        return pvector()
    if not isinstance(items, list):
        raise MalformedSnapshotError(f"'{key}' must be a list", frame)
    converted: List[T] = []
    for item in items:
        if item is None:
            continue
        if not isinstance(item, dict):
            raise MalformedSnapshotError(f"'{key}' holds a non-object entry", frame)
        converted.append(convert(item, frame))
    return pvector(converted)


def snapshot_from_dict(data: Record, frame: int = 0) -> Snapshot:
    """Convert one server game state into a :class:`Snapshot`."""
    if not isinstance(data, dict):
        raise MalformedSnapshotError("game state must be an object", frame)
    return Snapshot(
        players=_collection(data, "players", frame, player_from_dict),
        ships=_collection(data, "ships", frame, ship_from_dict),
        asteroids=_collection(data, "asteroids", frame, asteroid_from_dict),
        wormholes=_collection(data, "wormholes", frame, wormhole_from_dict),
        radius=float(_optional_number(data, "radius", "state", frame, 0.0) or 0.0),
    )


def _states_from_document(document: Any) -> List[Any]:
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        for key in ("states", "frames"):
            if isinstance(document.get(key), list):
                return document[key]
        return [document]
    raise MalformedSnapshotError("replay must be a list of game states")


def snapshots_from_json(text: str) -> PVector[Snapshot]:
    """Parse a replay document (JSON or JSON Lines) into snapshots."""
    try:
        states = _states_from_document(json.loads(text))
    except json.JSONDecodeError:
        states = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                states.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise MalformedSnapshotError(
                    f"invalid JSON on line {line_number}: {e.msg}"
                ) from e
    return pvector(snapshot_from_dict(state, i) for i, state in enumerate(states))


def load_replay(path: Union[str, "os.PathLike[str]"]) -> PVector[Snapshot]:
    """Read a replay file from disk.

    Raises:
        MalformedSnapshotError: If the file content is not a valid replay.
        OSError: If the file cannot be read.
    """
    with open(path, encoding="utf-8") as f:
        snapshots = snapshots_from_json(f.read())
    logger.info(f"Read {len(snapshots)} game states from {path}")
    return snapshots
