"""space_replay.entities
=========================

Immutable records that make up a :class:`space_replay.snapshot.Snapshot`.

Ships, asteroids and wormholes form a tagged variant: each record exposes a
``kind`` (:class:`space_replay.types.EntityKind`) and a stable ``id`` that is
unique within its kind for one snapshot. Players are plain records carried
alongside and are never interpolated.

All classes are frozen ``@dataclass`` value objects; interpolation produces new
instances with ``dataclasses.replace``.
"""

from typing import Union

from .asteroid import Asteroid
from .player import Player
from .position import Vec2
from .ship import Ship
from .wormhole import Wormhole

Entity = Union[Ship, Asteroid, Wormhole]

__all__ = [
    "Asteroid",
    "Entity",
    "Player",
    "Ship",
    "Vec2",
    "Wormhole",
]
