"""Snapshot interpolation.

Builds a synthetic snapshot between a source and a target frame at ratio
``t``. Only continuous fields blend; discrete fields (ownership, type,
player resources) come from the source.

Entities are matched by id within each kind:

* present in both frames: ``position`` and ``vector`` blend linearly,
  ``health``, ``fuel`` and ``cargo`` blend and round to integers;
* present only in the source: shown while ``t < 0.5`` with
  ``fade = 1 - 2t``;
* present only in the target: shown once ``t >= 0.5`` with
  ``fade = 2(t - 0.5)``;
* otherwise left out for that half of the blend.

An entity replaced by a different id therefore disappears in the first half
and appears in the second; there is no cross-fade between the two.
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, TypeVar

from pyrsistent import pvector

from space_replay.entities import Asteroid, Ship
from space_replay.snapshot import Snapshot
from space_replay.types import EntityID
from space_replay.utils.math import lerp, lerp_vec, round_half_up

BlendableEntity = TypeVar("BlendableEntity", Ship, Asteroid)

ROUNDED_FIELDS = ("health", "fuel", "cargo")


def index_by_id(
    entities: Iterable[Optional[BlendableEntity]],
) -> Dict[EntityID, BlendableEntity]:
    """Map id to entity, skipping ``None`` placeholders. Insertion order is kept."""
    return {e.id: e for e in entities if e is not None}


def interpolate_entity(
    source: BlendableEntity, target: BlendableEntity, t: float
) -> BlendableEntity:
    """Blend the continuous fields of one entity present in both frames."""
    changes: Dict[str, object] = {
        "position": lerp_vec(source.position, target.position, t)
    }
    if isinstance(source, Ship) and isinstance(target, Ship):
        changes["vector"] = lerp_vec(source.vector, target.vector, t)
        for field in ROUNDED_FIELDS:
            changes[field] = round_half_up(
                lerp(getattr(source, field), getattr(target, field), t)
            )
    return replace(source, **changes)


def interpolate_entities(
    source_entities: Iterable[Optional[BlendableEntity]],
    target_entities: Iterable[Optional[BlendableEntity]],
    t: float,
) -> List[BlendableEntity]:
    """Blend one entity collection.

    Output order: ids of the source in source order, then ids only present in
    the target in target order.
    """
    source_map = index_by_id(source_entities)
    target_map = index_by_id(target_entities)
    all_ids = list(source_map) + [eid for eid in target_map if eid not in source_map]

    result: List[BlendableEntity] = []
    for eid in all_ids:
        source = source_map.get(eid)
        target = target_map.get(eid)
        if source is not None and target is not None:
            result.append(interpolate_entity(source, target, t))
        elif source is not None and t < 0.5:
            result.append(replace(source, fade=1 - t * 2))
        elif target is not None and t >= 0.5:
            result.append(replace(target, fade=(t - 0.5) * 2))
    return result


def interpolate_snapshot(
    source: Optional[Snapshot], target: Optional[Snapshot], t: float
) -> Optional[Snapshot]:
    """Return the blended snapshot between ``source`` and ``target`` at ratio ``t``.

    Args:
        source (Snapshot | None): Frame the blend starts from.
        target (Snapshot | None): Frame the blend heads to.
        t (float): Blend ratio.

    Returns:
        Snapshot | None: ``source`` itself when ``t <= 0`` or either frame is
        missing; the target's ships and asteroids when ``t >= 1``; otherwise a
        new snapshot with blended ships and asteroids. Players, wormholes and
        radius always come from the source.
    """
    if source is None or target is None or t <= 0:
        return source
    if t >= 1:
        return replace(source, ships=target.ships, asteroids=target.asteroids)
    return replace(
        source,
        ships=pvector(interpolate_entities(source.ships, target.ships, t)),
        asteroids=pvector(interpolate_entities(source.asteroids, target.asteroids, t)),
    )
