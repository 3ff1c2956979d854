"""Viewer configuration.

``ViewerConfig`` is a frozen dataclass with the defaults the observer page
ships with. Build a variant with ``dataclasses.replace``::

    config = replace(DEFAULT_CONFIG, speed_ms=250, interpolation_enabled=False)
"""

from dataclasses import dataclass
from typing import Tuple

from space_replay.state import DEFAULT_SPEED_MS, DEFAULT_TRANSITION_MS


SPEED_OPTIONS_MS: Tuple[int, ...] = (2000, 1000, 500, 250, 100)


@dataclass(frozen=True)
class HitRadii:
    """Pick radii in world units.

    Attributes:
        ship: Fixed radius around a ship's position.
        asteroid_margin: Added to an asteroid's ``size``.
        wormhole: Fixed radius around a wormhole's position.
    """

    ship: float = 50.0
    asteroid_margin: float = 10.0
    wormhole: float = 30.0


@dataclass(frozen=True)
class ViewerConfig:
    """Timing and interaction settings for :class:`ReplayObserver`.

    Attributes:
        speed_ms: Initial playback interval between frames.
        transition_ms: Duration of a navigation blend.
        poll_hz: Playback timer cadence, independent of the display refresh rate.
        interpolation_enabled: Whether navigation blends between frames.
        hit_radii: Radii used by picking.
    """

    speed_ms: int = DEFAULT_SPEED_MS
    transition_ms: float = DEFAULT_TRANSITION_MS
    poll_hz: int = 60
    interpolation_enabled: bool = True
    hit_radii: HitRadii = HitRadii()

    @property
    def poll_interval_ms(self) -> float:
        return 1000.0 / self.poll_hz

    def __post_init__(self) -> None:
        if self.speed_ms <= 0:
            raise ValueError(f"speed_ms must be positive: {self.speed_ms}")
        if self.transition_ms <= 0:
            raise ValueError(f"transition_ms must be positive: {self.transition_ms}")
        if self.poll_hz <= 0:
            raise ValueError(f"poll_hz must be positive: {self.poll_hz}")


DEFAULT_CONFIG = ViewerConfig()
