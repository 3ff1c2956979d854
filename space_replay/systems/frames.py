"""Frame store system.

Loading a sequence and moving the discrete index. Out-of-range requests are
ignored: the input state is returned unchanged (same object), never an
exception.
"""

import logging
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from pyrsistent import pvector

from space_replay.snapshot import Snapshot
from space_replay.state import FrameStore, PlaybackClock, Transition, ViewerState
from space_replay.types import FrameIndex
from space_replay.validation import validate_frames

logger = logging.getLogger(__name__)


def load_frames(state: ViewerState, snapshots: Iterable[Snapshot]) -> ViewerState:
    """Replace the frame sequence.

    The index goes back to 0, the selection is cleared, any transition is
    dropped and playback stops. Speed and the interpolation switch survive a
    reload. An empty input yields an empty store.

    Raises:
        MalformedSnapshotError: If any snapshot breaks the id invariants.
    """
    frames = pvector(snapshots)
    validate_frames(frames)
    logger.info(f"Loaded {len(frames)} frames")
    return ViewerState(
        frames=FrameStore(frames=frames, index=0),
        transition=Transition(
            enabled=state.transition.enabled,
            duration_ms=state.transition.duration_ms,
        ),
        playback=PlaybackClock(speed_ms=state.playback.speed_ms),
        selection=None,
    )


def set_index(state: ViewerState, index: FrameIndex) -> ViewerState:
    """Move the discrete index to ``index`` if it is within ``[0, length)``."""
    if not state.frames.in_range(index) or index == state.frames.index:
        return state
    return replace(state, frames=replace(state.frames, index=index))


def step_index(state: ViewerState, direction: int) -> Tuple[ViewerState, bool]:
    """Move one frame forward (``+1``) or backward (``-1``).

    Returns:
        Tuple[ViewerState, bool]: New state and whether the index moved.
    """
    if direction not in (-1, 1):
        raise ValueError(f"Invalid step direction: {direction}")
    next_state = set_index(state, state.frames.index + direction)
    return next_state, next_state is not state


def current_index(state: ViewerState) -> FrameIndex:
    return state.frames.index


def frame_count(state: ViewerState) -> int:
    return len(state.frames)


def current_snapshot(state: ViewerState) -> Optional[Snapshot]:
    return state.frames.current()


def is_last_frame(state: ViewerState) -> bool:
    return state.frames.index >= state.frames.last_index
