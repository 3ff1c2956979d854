from dataclasses import dataclass
from typing import Optional

from space_replay.entities.position import Vec2
from space_replay.types import EntityID, EntityKind


@dataclass(frozen=True)
class Wormhole:
    """One end of a teleportation pair.

    Attributes:
        id:
            Stable identifier, unique among wormholes of one snapshot.
        position:
            World position.
        target_id:
            Id of the partner wormhole. The partner may be missing from a
            particular snapshot.
        fade:
            Kept for symmetry with the other kinds; wormholes are never
            blended so this stays ``None``.
    """

    id: EntityID
    position: Vec2
    target_id: EntityID
    fade: Optional[float] = None

    @property
    def kind(self) -> EntityKind:
        return EntityKind.WORMHOLE
