"""Navigation transitions.

User navigation (seek, step, first/last) does not jump straight to the
requested frame when interpolation is enabled: it starts a :class:`Transition`
whose ``progress`` grows with wall-clock time over ``duration_ms``. While it is
in flight the frame store index stays on the source frame and the displayed
snapshot is the blend of source and target. On completion the index snaps to
the target and progress resets to 0.

Starting a new transition while one is in flight completes the previous one
first, so the new blend starts from the frame nearest to what is on screen.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

from space_replay.entities import Entity
from space_replay.snapshot import Snapshot
from space_replay.state import ViewerState
from space_replay.systems.frames import set_index
from space_replay.systems.interpolation import interpolate_snapshot
from space_replay.systems.resolver import resolve
from space_replay.types import FrameIndex, Milliseconds

logger = logging.getLogger(__name__)


def start_transition(
    state: ViewerState, target: FrameIndex, now_ms: Milliseconds
) -> ViewerState:
    """Head toward ``target``.

    Out-of-range targets are ignored. With interpolation disabled the index
    changes immediately. An in-flight blend is finished first, and the new one
    starts from its target; requesting that frame again leaves it there.
    """
    if not state.frames.in_range(target):
        return state

    transition = state.transition
    if not transition.enabled:
        return set_index(state, target)

    state = finish_transition(state)
    transition = state.transition
    current = state.frames.index
    if target == current:
        return state

    logger.debug(f"Transition {current} -> {target}")
    return replace(
        state,
        transition=replace(
            transition,
            source=current,
            target=target,
            progress=0.0,
            active=True,
            last_update_ms=now_ms,
        ),
    )


def step_transition(
    state: ViewerState, direction: int, now_ms: Milliseconds
) -> Tuple[ViewerState, bool]:
    """Navigate one frame from where the viewer is heading.

    Consecutive steps during a blend build on the pending target rather than
    the source frame.

    Returns:
        Tuple[ViewerState, bool]: New state and whether a move was started.
    """
    if direction not in (-1, 1):
        raise ValueError(f"Invalid step direction: {direction}")
    target = state.pending_index + direction
    if not state.frames.in_range(target):
        return state, False
    return start_transition(state, target, now_ms), True


def advance_transition(state: ViewerState, now_ms: Milliseconds) -> ViewerState:
    """Advance blend progress by the wall-clock time since the last update."""
    transition = state.transition
    if not transition.active:
        return state

    delta = max(0.0, now_ms - transition.last_update_ms)
    progress = transition.progress + delta / transition.duration_ms
    if progress >= 1:
        return finish_transition(state)
    return replace(
        state,
        transition=replace(transition, progress=progress, last_update_ms=now_ms),
    )


def finish_transition(state: ViewerState) -> ViewerState:
    """Complete an in-flight blend at once: index becomes the target, progress 0."""
    transition = state.transition
    if not transition.active:
        return state
    logger.debug(f"Transition finished at {transition.target}")
    state = set_index(state, transition.target)
    return replace(
        state,
        transition=replace(
            transition, source=transition.target, progress=0.0, active=False
        ),
    )


def cancel_transition(state: ViewerState) -> ViewerState:
    """Drop an in-flight blend, leaving the index on the source frame."""
    transition = state.transition
    if not transition.active:
        return state
    return replace(
        state,
        transition=replace(
            transition, target=state.frames.index, progress=0.0, active=False
        ),
    )


def set_interpolation_enabled(state: ViewerState, enabled: bool) -> ViewerState:
    """Toggle blending. Disabling snaps an in-flight blend to its target."""
    if state.transition.enabled == enabled:
        return state
    if not enabled:
        state = finish_transition(state)
    return replace(state, transition=replace(state.transition, enabled=enabled))


def is_interpolating(state: ViewerState) -> bool:
    transition = state.transition
    return transition.enabled and transition.active and 0 < transition.progress < 1


def displayed_snapshot(state: ViewerState) -> Optional[Snapshot]:
    """Snapshot to draw: the blend while interpolating, else the current frame."""
    current = state.frames.current()
    if not is_interpolating(state):
        return current
    transition = state.transition
    return interpolate_snapshot(
        state.frames.get(transition.source),
        state.frames.get(transition.target),
        transition.progress,
    )


def displayed_selection(state: ViewerState) -> Optional[Entity]:
    """The selected entity as it appears in :func:`displayed_snapshot`, or ``None``."""
    return resolve(displayed_snapshot(state), state.selection)
