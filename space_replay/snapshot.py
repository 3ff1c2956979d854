"""Immutable ``Snapshot`` dataclass.

A snapshot is one captured instant of a game: the players' resources plus
every ship, asteroid and wormhole on the map. Snapshots are created once when
a replay is loaded and never mutated; interpolation builds new ones with
``dataclasses.replace``.

Design notes:

* Entity collections are persistent vectors (``pyrsistent.PVector``) kept in
    the order the server emitted them. Picking relies on that order (first
    match wins).
* Ids are unique per kind within a snapshot. The same id in two snapshots
    denotes the same logical entity, which is how interpolation and the
    selection reference match entities across frames.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pyrsistent import PMap, PVector, pmap, pvector

from space_replay.entities import Asteroid, Entity, Player, Ship, Wormhole
from space_replay.types import EntityKind


@dataclass(frozen=True)
class Snapshot:
    """One frame of a replay.

    Attributes:
        players (PVector[Player]): Player records, never interpolated.
        ships (PVector[Ship]): Ships in server order.
        asteroids (PVector[Asteroid]): Asteroids in server order.
        wormholes (PVector[Wormhole]): Wormholes in server order.
        radius (float): Half-size of the square play area centered on the origin.
    """

    players: PVector[Player] = pvector()
    ships: PVector[Ship] = pvector()
    asteroids: PVector[Asteroid] = pvector()
    wormholes: PVector[Wormhole] = pvector()
    radius: float = 0.0

    def entities(self, kind: EntityKind) -> PVector[Entity]:
        """Return the collection holding entities of ``kind``."""
        return getattr(self, kind.collection)

    def player(self, player_id: int) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def description(self) -> PMap[str, Any]:
        """Entity counts per collection, for diagnostics and the status panel."""
        return pmap(
            {
                "players": len(self.players),
                "ships": len(self.ships),
                "asteroids": len(self.asteroids),
                "wormholes": len(self.wormholes),
                "radius": self.radius,
            }
        )
