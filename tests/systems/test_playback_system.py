import pytest

from space_replay.state import ViewerState
from space_replay.systems.frames import load_frames, set_index
from space_replay.systems.playback import (
    pause,
    play,
    playback_tick,
    poll_playback,
    set_speed,
    toggle_play,
)
from space_replay.systems.transition import start_transition
from space_replay.types import PlaybackMode
from tests.test_utils import make_moving_ship_frames


def loaded_state(count: int = 3) -> ViewerState:
    return load_frames(ViewerState(), make_moving_ship_frames(xs=range(count)))


def test_play_starts_timer() -> None:
    state = play(loaded_state(), now_ms=500)
    assert state.playback.mode == PlaybackMode.PLAYING
    assert state.playback.accumulated_ms == 0.0
    assert state.playback.last_poll_ms == 500


@pytest.mark.parametrize("count", [0, 1])
def test_play_needs_two_frames(count: int) -> None:
    state = loaded_state(count)
    assert play(state, now_ms=0) is state


def test_play_at_last_frame_is_noop() -> None:
    state = set_index(loaded_state(), 2)
    assert play(state, now_ms=0) is state


def test_play_while_heading_to_last_frame_is_noop() -> None:
    state = start_transition(loaded_state(), 2, now_ms=0)
    assert play(state, now_ms=0) is state


def test_tick_accumulates_until_speed() -> None:
    state = play(loaded_state(), now_ms=0)
    state = playback_tick(state, 999)
    assert state.frames.index == 0
    assert state.playback.accumulated_ms == 999
    state = playback_tick(state, 1)
    assert state.frames.index == 1
    assert state.playback.accumulated_ms == 0.0


def test_tick_when_stopped_is_noop() -> None:
    state = loaded_state()
    assert playback_tick(state, 5000) is state


def test_playback_stops_at_last_frame() -> None:
    state = play(loaded_state(), now_ms=0)
    state = playback_tick(state, 1000)
    state = playback_tick(state, 1000)
    assert state.frames.index == 2
    assert state.playback.playing
    state = playback_tick(state, 1000)
    assert state.frames.index == 2
    assert state.playback.mode == PlaybackMode.STOPPED


def test_playback_finishes_in_flight_transition_first() -> None:
    state = play(loaded_state(4), now_ms=0)
    state = start_transition(state, 2, now_ms=0)
    state = playback_tick(state, 1000)
    assert state.frames.index == 3
    assert not state.transition.active


def test_pause_snaps_in_flight_transition() -> None:
    state = play(loaded_state(), now_ms=0)
    state = start_transition(state, 1, now_ms=0)
    state = pause(state)
    assert state.frames.index == 1
    assert not state.transition.active
    assert state.playback.mode == PlaybackMode.STOPPED


def test_toggle_play() -> None:
    state = toggle_play(loaded_state(), now_ms=0)
    assert state.playback.playing
    state = toggle_play(state, now_ms=10)
    assert not state.playback.playing


def test_poll_respects_interval() -> None:
    state = play(loaded_state(), now_ms=0)
    assert poll_playback(state, now_ms=10, interval_ms=16) is state
    polled = poll_playback(state, now_ms=20, interval_ms=16)
    assert polled.playback.last_poll_ms == 20
    assert polled.playback.accumulated_ms == 20


def test_poll_advances_by_elapsed_time() -> None:
    state = play(loaded_state(), now_ms=0)
    state = poll_playback(state, now_ms=1200, interval_ms=16)
    assert state.frames.index == 1


def test_set_speed_restarts_cycle_while_playing() -> None:
    state = play(loaded_state(), now_ms=0)
    state = playback_tick(state, 400)
    state = set_speed(state, 250, now_ms=400)
    assert state.playback.speed_ms == 250
    assert state.playback.accumulated_ms == 0.0
    assert state.playback.last_poll_ms == 400
    state = playback_tick(state, 250)
    assert state.frames.index == 1


def test_set_speed_when_stopped_keeps_mode() -> None:
    state = set_speed(loaded_state(), 100, now_ms=0)
    assert state.playback.speed_ms == 100
    assert not state.playback.playing


@pytest.mark.parametrize("speed", [0, -100])
def test_set_speed_rejects_non_positive(speed: int) -> None:
    state = loaded_state()
    assert set_speed(state, speed, now_ms=0) is state


def test_speed_survives_reload() -> None:
    state = set_speed(loaded_state(), 250, now_ms=0)
    state = load_frames(state, make_moving_ship_frames())
    assert state.playback.speed_ms == 250
