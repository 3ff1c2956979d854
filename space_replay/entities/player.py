from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    """Per-player resources and display metadata. Never interpolated.

    Attributes:
        id:
            Player id (0-based); ships reference it through ``Ship.player``.
        name:
            Display name.
        color:
            Hex color string (``#RRGGBB``) used for the player's ships.
        rock:
            Rock stored in the mothership.
        fuel:
            Fuel stored in the mothership.
        alive:
            False once the player's mothership is gone.
        score:
            Server-side score.
    """

    id: int
    name: str
    color: str = "#ffffff"
    rock: int = 0
    fuel: float = 0.0
    alive: bool = True
    score: int = 0
