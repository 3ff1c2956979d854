"""Common type aliases and enumerations.

``EntityKind`` is the discriminant of the entity tagged variant: every ship,
asteroid and wormhole record carries one, and systems dispatch on it instead
of on class hierarchy.
"""

from enum import IntEnum, StrEnum, auto


EntityID = int
FrameIndex = int
Milliseconds = float


class EntityKind(StrEnum):
    """Entity categories present in a snapshot."""

    SHIP = auto()
    ASTEROID = auto()
    WORMHOLE = auto()

    @property
    def collection(self) -> str:
        """Name of the snapshot field holding entities of this kind."""
        return f"{self.value}s"


PICK_ORDER = [EntityKind.SHIP, EntityKind.ASTEROID, EntityKind.WORMHOLE]


class ShipType(IntEnum):
    """Ship classes as numbered by the game server."""

    MOTHER = 0
    SUCKER = auto()
    DRILL = auto()
    TANKER = auto()
    TRUCK = auto()
    BATTLE = auto()


class PlaybackMode(StrEnum):
    """Playback timeline states."""

    STOPPED = auto()
    PLAYING = auto()
