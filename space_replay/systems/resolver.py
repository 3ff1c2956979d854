"""Entity picking and selection resolution.

``pick`` turns a world-space click into an :class:`EntityRef`; ``resolve``
turns a reference back into an entity of a given snapshot. Both return
``None`` on a miss, which is a normal state (nothing under the cursor, or the
selected entity is not present this frame).
"""

from typing import List, Optional

import numpy as np
import numpy.typing as npt

from space_replay.config import HitRadii
from space_replay.entities import Asteroid, Entity
from space_replay.snapshot import Snapshot
from space_replay.state import EntityRef
from space_replay.types import PICK_ORDER, EntityKind

FloatArray = npt.NDArray[np.float64]


def hit_radius(entity: Entity, radii: HitRadii) -> float:
    """Pick radius of ``entity`` in world units."""
    if entity.kind == EntityKind.SHIP:
        return radii.ship
    if entity.kind == EntityKind.ASTEROID:
        assert isinstance(entity, Asteroid)
        return entity.size + radii.asteroid_margin
    return radii.wormhole


def first_hit(
    entities: List[Entity], x: float, y: float, radii: HitRadii
) -> Optional[Entity]:
    """First entity in list order whose hit circle strictly contains ``(x, y)``."""
    if not entities:
        return None
    positions: FloatArray = np.array(
        [(e.position.x, e.position.y) for e in entities], dtype=np.float64
    )
    limits: FloatArray = np.array(
        [hit_radius(e, radii) for e in entities], dtype=np.float64
    )
    distances: FloatArray = np.hypot(positions[:, 0] - x, positions[:, 1] - y)
    hits = np.flatnonzero(distances < limits)
    if hits.size == 0:
        return None
    return entities[int(hits[0])]


def pick(
    snapshot: Optional[Snapshot],
    x: float,
    y: float,
    radii: HitRadii = HitRadii(),
) -> Optional[EntityRef]:
    """Return a reference to the entity under world point ``(x, y)``.

    Kinds are tested in priority order (ships, asteroids, wormholes); within a
    kind the first entity in snapshot order wins, even if a later one is
    nearer.
    """
    if snapshot is None:
        return None
    for kind in PICK_ORDER:
        entities = [e for e in snapshot.entities(kind) if e is not None]
        entity = first_hit(entities, x, y, radii)
        if entity is not None:
            return EntityRef(kind=kind, id=entity.id)
    return None


def resolve(
    snapshot: Optional[Snapshot], ref: Optional[EntityRef]
) -> Optional[Entity]:
    """Look ``ref`` up in ``snapshot``; ``None`` when anything is missing."""
    if snapshot is None or ref is None:
        return None
    for entity in snapshot.entities(ref.kind):
        if entity is not None and entity.id == ref.id:
            return entity
    return None
