"""Load-time checks for frame sequences.

Structural problems raise :class:`MalformedSnapshotError` so the loading
collaborator hears about them before playback starts. ``None`` entries in an
entity collection are tolerated (they are placeholders the server leaves for
removed entities) and skipped by every system.
"""

import logging
from typing import Dict, Set, Tuple, Type

from pyrsistent import PVector

from space_replay.entities import Asteroid, Entity, Ship, Vec2, Wormhole
from space_replay.errors import MalformedSnapshotError
from space_replay.snapshot import Snapshot
from space_replay.types import EntityID, EntityKind

logger = logging.getLogger(__name__)

ENTITY_CLASSES: Dict[EntityKind, Type[Entity]] = {
    EntityKind.SHIP: Ship,
    EntityKind.ASTEROID: Asteroid,
    EntityKind.WORMHOLE: Wormhole,
}

INTEGER_FIELDS: Dict[EntityKind, Tuple[str, ...]] = {
    EntityKind.SHIP: ("id", "player"),
    EntityKind.ASTEROID: ("id",),
    EntityKind.WORMHOLE: ("id", "target_id"),
}
NUMBER_FIELDS: Dict[EntityKind, Tuple[str, ...]] = {
    EntityKind.SHIP: ("health", "fuel", "cargo"),
    EntityKind.ASTEROID: ("size",),
    EntityKind.WORMHOLE: (),
}
VECTOR_FIELDS: Dict[EntityKind, Tuple[str, ...]] = {
    EntityKind.SHIP: ("position", "vector"),
    EntityKind.ASTEROID: ("position",),
    EntityKind.WORMHOLE: ("position",),
}


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_fields(entity: Entity, kind: EntityKind, frame_index: int) -> None:
    """Raise if a field that systems compute with is missing or mistyped."""
    where = f"{kind} {entity.id!r}"
    for field in INTEGER_FIELDS[kind]:
        if not is_integer(getattr(entity, field)):
            raise MalformedSnapshotError(
                f"{where}: '{field}' must be an integer", frame_index
            )
    for field in NUMBER_FIELDS[kind]:
        if not is_number(getattr(entity, field)):
            raise MalformedSnapshotError(
                f"{where}: '{field}' must be a number", frame_index
            )
    for field in VECTOR_FIELDS[kind]:
        value = getattr(entity, field)
        if not isinstance(value, Vec2) or not (
            is_number(value.x) and is_number(value.y)
        ):
            raise MalformedSnapshotError(
                f"{where}: '{field}' must be a vector of numbers", frame_index
            )


def validate_snapshot(snapshot: Snapshot, frame_index: int) -> None:
    """Check one snapshot: entity types, field types and id uniqueness per kind."""
    if not isinstance(snapshot, Snapshot):
        raise MalformedSnapshotError(
            f"expected Snapshot, got {type(snapshot).__name__}", frame_index
        )
    for kind, cls in ENTITY_CLASSES.items():
        seen: Set[EntityID] = set()
        for entity in snapshot.entities(kind):
            if entity is None:
                continue
            if not isinstance(entity, cls):
                raise MalformedSnapshotError(
                    f"{kind.collection} contains {type(entity).__name__}", frame_index
                )
            check_fields(entity, kind, frame_index)
            if entity.id in seen:
                raise MalformedSnapshotError(
                    f"duplicate {kind} id {entity.id}", frame_index
                )
            seen.add(entity.id)
    player_ids: Set[int] = set()
    for player in snapshot.players:
        if player.id in player_ids:
            raise MalformedSnapshotError(
                f"duplicate player id {player.id}", frame_index
            )
        player_ids.add(player.id)


def validate_frames(frames: PVector[Snapshot]) -> None:
    """Validate every snapshot and report wormholes whose partner never appears."""
    wormhole_ids: Set[EntityID] = set()
    for frame_index, snapshot in enumerate(frames):
        validate_snapshot(snapshot, frame_index)
        wormhole_ids.update(w.id for w in snapshot.wormholes if w is not None)

    dangling = {
        w.target_id
        for snapshot in frames
        for w in snapshot.wormholes
        if w is not None and w.target_id not in wormhole_ids
    }
    if dangling:
        logger.warning(f"Wormhole targets never present in replay: {sorted(dangling)}")
