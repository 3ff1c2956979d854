"""Playback timeline state machine.

Two modes: ``STOPPED`` (initial, and after pause or reaching the last frame)
and ``PLAYING``. While playing, a fixed-cadence timer polls
:func:`poll_playback`; each poll feeds the wall-clock time since the previous
poll into :func:`playback_tick`, which advances the frame store by one index
every ``speed_ms``. Playback never loops.

Autonomous advances are discrete (no blending). If a navigation transition is
in flight when an advance is due, it is completed first and playback carries
on from its target.
"""

import logging
from dataclasses import replace

from space_replay.state import ViewerState
from space_replay.systems.frames import is_last_frame, set_index
from space_replay.systems.transition import finish_transition
from space_replay.types import Milliseconds, PlaybackMode

logger = logging.getLogger(__name__)


def play(state: ViewerState, now_ms: Milliseconds) -> ViewerState:
    """Start playing.

    No-op with one frame or fewer, when already playing, or when the viewer
    is already at (or heading to) the last frame.
    """
    playback = state.playback
    if len(state.frames) <= 1 or playback.playing:
        return state
    if state.pending_index >= state.frames.last_index:
        return state
    logger.debug(f"Playback started at frame {state.frames.index}")
    return replace(
        state,
        playback=replace(
            playback,
            mode=PlaybackMode.PLAYING,
            accumulated_ms=0.0,
            last_poll_ms=now_ms,
        ),
    )


def pause(state: ViewerState) -> ViewerState:
    """Stop playing and complete any in-flight transition before returning."""
    state = finish_transition(state)
    if not state.playback.playing:
        return state
    logger.debug(f"Playback stopped at frame {state.frames.index}")
    return replace(
        state,
        playback=replace(
            state.playback, mode=PlaybackMode.STOPPED, accumulated_ms=0.0
        ),
    )


def toggle_play(state: ViewerState, now_ms: Milliseconds) -> ViewerState:
    if state.playback.playing:
        return pause(state)
    return play(state, now_ms)


def playback_tick(state: ViewerState, delta_ms: Milliseconds) -> ViewerState:
    """Accumulate ``delta_ms``; advance one frame once ``speed_ms`` is reached."""
    playback = state.playback
    if not playback.playing:
        return state

    accumulated = playback.accumulated_ms + delta_ms
    if accumulated < playback.speed_ms:
        return replace(state, playback=replace(playback, accumulated_ms=accumulated))

    state = finish_transition(state)
    if is_last_frame(state):
        return pause(state)
    state = set_index(state, state.frames.index + 1)
    return replace(state, playback=replace(state.playback, accumulated_ms=0.0))


def poll_playback(
    state: ViewerState, now_ms: Milliseconds, interval_ms: Milliseconds
) -> ViewerState:
    """Run one timer poll if at least ``interval_ms`` passed since the previous one."""
    playback = state.playback
    if not playback.playing:
        return state
    delta = now_ms - playback.last_poll_ms
    if delta < interval_ms:
        return state
    state = replace(state, playback=replace(playback, last_poll_ms=now_ms))
    return playback_tick(state, delta)


def set_speed(
    state: ViewerState, speed_ms: int, now_ms: Milliseconds
) -> ViewerState:
    """Change the playback interval; a running timer restarts its cycle."""
    if speed_ms <= 0:
        return state
    playback = replace(state.playback, speed_ms=int(speed_ms))
    if playback.playing:
        playback = replace(playback, accumulated_ms=0.0, last_poll_ms=now_ms)
    return replace(state, playback=playback)
