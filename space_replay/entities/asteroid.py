from dataclasses import dataclass
from typing import Optional

from space_replay.entities.position import Vec2
from space_replay.types import EntityID, EntityKind


@dataclass(frozen=True)
class Asteroid:
    """A minable asteroid.

    Attributes:
        id:
            Stable identifier, unique among asteroids of one snapshot.
        position:
            World position of the asteroid's center.
        size:
            Radius in world units; also drives the pick radius.
        type:
            Resource category as reported by the server (``0`` is rock).
        owner_id:
            Player currently owning the asteroid, ``None`` when unowned.
        surface:
            Remaining minable surface, when the server reports it.
        fade:
            Fade-placeholder alpha, ``None`` when fully visible.
    """

    id: EntityID
    position: Vec2
    size: float
    type: int = 0
    owner_id: Optional[int] = None
    surface: Optional[float] = None
    fade: Optional[float] = None

    @property
    def kind(self) -> EntityKind:
        return EntityKind.ASTEROID
