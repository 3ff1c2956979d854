"""Replay observer facade.

:class:`ReplayObserver` owns the current :class:`ViewerState` and exposes the
operations the UI collaborators call: loading, navigation, playback, picking
and the per-render-tick :meth:`ReplayObserver.update`. Each method delegates
to a pure system function and swaps the resulting state in.

Typical host loop::

    observer = ReplayObserver()
    observer.load(load_replay("game.json"))
    observer.play()
    while running:
        snapshot = observer.update()
        draw(snapshot, observer.displayed_selection())

Time comes from ``clock`` (milliseconds, monotonic). Tests inject a fake
clock or pass ``now_ms`` explicitly.
"""

import time
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from space_replay.actions import KEY_BINDINGS, TimelineAction
from space_replay.config import DEFAULT_CONFIG, ViewerConfig
from space_replay.entities import Entity
from space_replay.snapshot import Snapshot
from space_replay.state import EntityRef, PlaybackClock, Transition, ViewerState
from space_replay.systems import frames, playback, transition
from space_replay.systems.resolver import pick
from space_replay.types import FrameIndex, Milliseconds

Clock = Callable[[], Milliseconds]
FrameListener = Callable[[FrameIndex], None]


def monotonic_ms() -> Milliseconds:
    return time.monotonic() * 1000.0


class ReplayObserver:
    """Stateful wrapper around the replay viewer systems.

    Attributes:
        config (ViewerConfig): Timing and picking settings.
        clock (Clock): Millisecond time source.
        state (ViewerState): Current immutable state; replaced on every change.
    """

    def __init__(
        self,
        config: ViewerConfig = DEFAULT_CONFIG,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.clock = clock or monotonic_ms
        self.state = ViewerState(
            transition=Transition(
                enabled=config.interpolation_enabled,
                duration_ms=config.transition_ms,
            ),
            playback=PlaybackClock(speed_ms=config.speed_ms),
        )
        self._frame_listeners: List[FrameListener] = []

    # --- State plumbing ---

    def on_frame_change(self, listener: FrameListener) -> None:
        """Register ``listener(index)``, called when the index or sequence changes."""
        self._frame_listeners.append(listener)

    def _apply(self, next_state: ViewerState) -> bool:
        previous = self.state
        self.state = next_state
        if (
            next_state.frames.index != previous.frames.index
            or next_state.frames.frames is not previous.frames.frames
        ):
            for listener in list(self._frame_listeners):
                listener(next_state.frames.index)
        return next_state is not previous

    def _now(self, now_ms: Optional[Milliseconds]) -> Milliseconds:
        return self.clock() if now_ms is None else now_ms

    # --- Loading ---

    def load(self, snapshots: Iterable[Snapshot]) -> None:
        """Replace the frame sequence (see :func:`~systems.frames.load_frames`).

        Raises:
            MalformedSnapshotError: If the snapshots break the id invariants.
        """
        self._apply(frames.load_frames(self.state, snapshots))

    # --- Queries ---

    def current_index(self) -> FrameIndex:
        return frames.current_index(self.state)

    def total_frames(self) -> int:
        return frames.frame_count(self.state)

    def current_snapshot(self) -> Optional[Snapshot]:
        return frames.current_snapshot(self.state)

    def is_playing(self) -> bool:
        return self.state.playback.playing

    def is_interpolating(self) -> bool:
        return transition.is_interpolating(self.state)

    def speed_ms(self) -> int:
        return self.state.playback.speed_ms

    def interpolation_enabled(self) -> bool:
        return self.state.transition.enabled

    def selection(self) -> Optional[EntityRef]:
        return self.state.selection

    def displayed_snapshot(self) -> Optional[Snapshot]:
        return transition.displayed_snapshot(self.state)

    def displayed_selection(self) -> Optional[Entity]:
        return transition.displayed_selection(self.state)

    # --- Navigation ---

    def set_index(self, index: FrameIndex) -> bool:
        """Jump straight to ``index`` (slider drag), dropping any in-flight blend."""
        if not self.state.frames.in_range(index):
            return False
        state = transition.cancel_transition(self.state)
        return self._apply(frames.set_index(state, index))

    def seek(self, index: FrameIndex, now_ms: Optional[Milliseconds] = None) -> bool:
        """Navigate to ``index``, blending when interpolation is enabled."""
        return self._apply(
            transition.start_transition(self.state, index, self._now(now_ms))
        )

    def step(self, direction: int, now_ms: Optional[Milliseconds] = None) -> bool:
        state, moved = transition.step_transition(
            self.state, direction, self._now(now_ms)
        )
        self._apply(state)
        return moved

    def next_frame(self, now_ms: Optional[Milliseconds] = None) -> bool:
        return self.step(1, now_ms)

    def previous_frame(self, now_ms: Optional[Milliseconds] = None) -> bool:
        return self.step(-1, now_ms)

    def first_frame(self, now_ms: Optional[Milliseconds] = None) -> bool:
        return self.seek(0, now_ms)

    def last_frame(self, now_ms: Optional[Milliseconds] = None) -> bool:
        return self.seek(self.state.frames.last_index, now_ms)

    def set_interpolation_enabled(self, enabled: bool) -> None:
        self._apply(transition.set_interpolation_enabled(self.state, enabled))

    # --- Playback ---

    def play(self, now_ms: Optional[Milliseconds] = None) -> bool:
        return self._apply(playback.play(self.state, self._now(now_ms)))

    def pause(self) -> None:
        self._apply(playback.pause(self.state))

    def toggle_play(self, now_ms: Optional[Milliseconds] = None) -> None:
        self._apply(playback.toggle_play(self.state, self._now(now_ms)))

    def set_speed(self, speed_ms: int, now_ms: Optional[Milliseconds] = None) -> None:
        self._apply(playback.set_speed(self.state, speed_ms, self._now(now_ms)))

    def update(self, now_ms: Optional[Milliseconds] = None) -> Optional[Snapshot]:
        """Advance both clocks to ``now_ms`` and return the snapshot to draw.

        Call once per display refresh. The transition advances by the elapsed
        render time; the playback timer polls at ``config.poll_hz`` at most.
        """
        now = self._now(now_ms)
        state = transition.advance_transition(self.state, now)
        state = playback.poll_playback(state, now, self.config.poll_interval_ms)
        self._apply(state)
        return self.displayed_snapshot()

    # --- Selection ---

    def pick_at(self, x: float, y: float) -> Optional[EntityRef]:
        """Select the entity under world point ``(x, y)`` in the displayed snapshot.

        A miss clears the selection.
        """
        ref = pick(self.displayed_snapshot(), x, y, self.config.hit_radii)
        self.select(ref)
        return ref

    def select(self, ref: Optional[EntityRef]) -> None:
        if ref == self.state.selection:
            return
        self._apply(replace(self.state, selection=ref))

    def clear_selection(self) -> None:
        self.select(None)

    # --- Input ---

    def handle_key(self, key: str, now_ms: Optional[Milliseconds] = None) -> bool:
        """Run the timeline command bound to ``key``; False for unbound keys."""
        action = KEY_BINDINGS.get(key)
        if action is None:
            return False
        if action == TimelineAction.TOGGLE_PLAY:
            self.toggle_play(now_ms)
        elif action == TimelineAction.PREVIOUS:
            self.previous_frame(now_ms)
        elif action == TimelineAction.NEXT:
            self.next_frame(now_ms)
        elif action == TimelineAction.FIRST:
            self.first_frame(now_ms)
        elif action == TimelineAction.LAST:
            self.last_frame(now_ms)
        return True
