"""Immutable viewer state.

Everything the replay viewer knows lives in one frozen :class:`ViewerState`.
Systems in :mod:`space_replay.systems` are pure functions that take a previous
``ViewerState`` plus inputs (a target index, a timestamp, a time delta) and
return a *new* ``ViewerState``. A command that does not apply (out-of-range
index, empty store, playing with a single frame) returns the input object
unchanged, so callers can detect a no-op with ``is``.

Design notes:

* The two clocks are separate structs. :class:`PlaybackClock` is only advanced
    by :func:`space_replay.systems.playback.playback_tick`; :class:`Transition`
    is only advanced by
    :func:`space_replay.systems.transition.advance_transition`. Neither update
    touches the other's fields.
* ``selection`` is an :class:`EntityRef`, not an entity: it is resolved
    against whichever snapshot is displayed, so it survives frame changes.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import PVector, pvector

from space_replay.snapshot import Snapshot
from space_replay.types import (
    EntityID,
    EntityKind,
    FrameIndex,
    Milliseconds,
    PlaybackMode,
)


DEFAULT_SPEED_MS = 1000
DEFAULT_TRANSITION_MS = 500.0


@dataclass(frozen=True)
class EntityRef:
    """Selection reference independent of the displayed snapshot.

    Attributes:
        kind: Entity kind, selects the snapshot collection.
        id: Entity id within that collection.
    """

    kind: EntityKind
    id: EntityID


@dataclass(frozen=True)
class FrameStore:
    """Loaded frame sequence and the discrete current index.

    Attributes:
        frames (PVector[Snapshot]): Ordered snapshots, replaced wholesale on load.
        index (int): Current frame; ``0`` for an empty store.
    """

    frames: PVector[Snapshot] = pvector()
    index: FrameIndex = 0

    def __len__(self) -> int:
        return len(self.frames)

    def in_range(self, index: FrameIndex) -> bool:
        return 0 <= index < len(self.frames)

    def current(self) -> Optional[Snapshot]:
        if not self.in_range(self.index):
            return None
        return self.frames[self.index]

    def get(self, index: FrameIndex) -> Optional[Snapshot]:
        if not self.in_range(index):
            return None
        return self.frames[index]

    @property
    def last_index(self) -> FrameIndex:
        return max(0, len(self.frames) - 1)


@dataclass(frozen=True)
class Transition:
    """Smooth blend from the current frame toward a requested one.

    Attributes:
        source (int): Frame the blend starts from (the store index when started).
        target (int): Frame the store snaps to when the blend completes.
        progress (float): Blend ratio in ``[0, 1]``; reset to ``0`` on start and
            on completion.
        active (bool): True while a blend is in flight.
        enabled (bool): Global interpolation switch; when False navigation is
            applied immediately.
        duration_ms (float): Time for ``progress`` to go from 0 to 1.
        last_update_ms (float): Wall-clock timestamp of the last progress update.
    """

    source: FrameIndex = 0
    target: FrameIndex = 0
    progress: float = 0.0
    active: bool = False
    enabled: bool = True
    duration_ms: Milliseconds = DEFAULT_TRANSITION_MS
    last_update_ms: Milliseconds = 0.0


@dataclass(frozen=True)
class PlaybackClock:
    """Autonomous playback timer.

    Attributes:
        mode (PlaybackMode): ``STOPPED`` (initial, also after pause) or ``PLAYING``.
        speed_ms (int): Interval between frame advances; always positive.
        accumulated_ms (float): Time accumulated since the last advance.
        last_poll_ms (float): Wall-clock timestamp of the last timer poll.
    """

    mode: PlaybackMode = PlaybackMode.STOPPED
    speed_ms: int = DEFAULT_SPEED_MS
    accumulated_ms: Milliseconds = 0.0
    last_poll_ms: Milliseconds = 0.0

    @property
    def playing(self) -> bool:
        return self.mode == PlaybackMode.PLAYING


@dataclass(frozen=True)
class ViewerState:
    """Complete replay viewer state.

    Attributes:
        frames (FrameStore): Frame sequence and discrete index.
        transition (Transition): Interpolation state, owned by the transition system.
        playback (PlaybackClock): Playback state, owned by the playback system.
        selection (EntityRef | None): Selected entity reference, if any.
    """

    frames: FrameStore = FrameStore()
    transition: Transition = Transition()
    playback: PlaybackClock = PlaybackClock()
    selection: Optional[EntityRef] = None

    @property
    def pending_index(self) -> FrameIndex:
        """Index the viewer is heading to: the transition target while one is active."""
        if self.transition.active:
            return self.transition.target
        return self.frames.index
