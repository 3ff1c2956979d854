"""Vec2 component.

Immutable 2D world coordinates. Used both for entity positions and for ship
velocity vectors; world units match the game server's.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """World-space point or vector.

    Attributes:
        x: Horizontal coordinate (grows to the right).
        y: Vertical coordinate (grows downward, screen convention).
    """

    x: float
    y: float

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0
