from dataclasses import dataclass
from typing import Optional

from space_replay.entities.position import Vec2
from space_replay.types import EntityID, EntityKind, ShipType


@dataclass(frozen=True)
class Ship:
    """A player-owned ship.

    Attributes:
        id:
            Stable identifier, unique among ships of one snapshot.
        player:
            Owning player id.
        position:
            World position of the ship's center.
        vector:
            Current velocity; the renderer orients the hull along it.
        health:
            Hit points; ``0`` once destroyed.
        fuel:
            Remaining fuel.
        cargo:
            Rock carried (``rock`` in the server's JSON).
        type:
            Ship class.
        fade:
            ``None`` for a fully visible ship; an alpha in ``[0, 1]`` when the
            ship is a fade placeholder produced by interpolation.
    """

    id: EntityID
    player: int
    position: Vec2
    vector: Vec2 = Vec2(0.0, 0.0)
    health: int = 0
    fuel: float = 0.0
    cargo: int = 0
    type: ShipType = ShipType.MOTHER
    fade: Optional[float] = None

    @property
    def kind(self) -> EntityKind:
        return EntityKind.SHIP
