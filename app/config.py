from dataclasses import dataclass, replace

import streamlit as st

from space_replay.config import DEFAULT_CONFIG, SPEED_OPTIONS_MS, ViewerConfig
from space_replay.observer import ReplayObserver
from space_replay.renderer.canvas import Camera, SnapshotRenderer

CANVAS_SIZES = [400, 600, 800, 1000]


@dataclass(frozen=True)
class AppConfig:
    """Page settings kept in ``st.session_state["config"]``."""

    speed_ms: int
    interpolation_enabled: bool
    transition_ms: float
    poll_hz: int
    canvas_size: int
    show_grid: bool

    def viewer_config(self) -> ViewerConfig:
        return replace(
            DEFAULT_CONFIG,
            speed_ms=self.speed_ms,
            interpolation_enabled=self.interpolation_enabled,
            transition_ms=self.transition_ms,
            poll_hz=self.poll_hz,
        )


def set_default_config() -> None:
    if "config" not in st.session_state:
        st.session_state["config"] = AppConfig(
            speed_ms=DEFAULT_CONFIG.speed_ms,
            interpolation_enabled=DEFAULT_CONFIG.interpolation_enabled,
            transition_ms=DEFAULT_CONFIG.transition_ms,
            poll_hz=DEFAULT_CONFIG.poll_hz,
            canvas_size=800,
            show_grid=False,
        )


def get_config_from_widgets() -> AppConfig:
    config: AppConfig = st.session_state["config"]

    st.subheader("Playback")
    speed_ms: int = st.selectbox(
        "Frame interval (ms)",
        SPEED_OPTIONS_MS,
        index=SPEED_OPTIONS_MS.index(config.speed_ms)
        if config.speed_ms in SPEED_OPTIONS_MS
        else 1,
        key="config_speed_ms",
    )
    poll_hz: int = st.slider(
        "Timer rate (Hz)", 10, 60, config.poll_hz, key="config_poll_hz"
    )

    st.subheader("Interpolation")
    interpolation_enabled: bool = st.checkbox(
        "Blend between frames",
        value=config.interpolation_enabled,
        key="config_interpolation",
    )
    transition_ms: float = st.slider(
        "Blend duration (ms)",
        100.0,
        2000.0,
        float(config.transition_ms),
        step=50.0,
        key="config_transition_ms",
    )

    st.subheader("Display")
    canvas_size: int = st.selectbox(
        "Canvas size (px)",
        CANVAS_SIZES,
        index=CANVAS_SIZES.index(config.canvas_size),
        key="config_canvas_size",
    )
    show_grid: bool = st.checkbox(
        "Show grid", value=config.show_grid, key="config_show_grid"
    )

    return AppConfig(
        speed_ms=speed_ms,
        interpolation_enabled=interpolation_enabled,
        transition_ms=transition_ms,
        poll_hz=poll_hz,
        canvas_size=canvas_size,
        show_grid=show_grid,
    )


def make_observer(config: AppConfig) -> ReplayObserver:
    """Create a fresh observer and renderer, reloading the current replay if any."""
    observer = ReplayObserver(config=config.viewer_config())
    frames = st.session_state.get("frames")
    if frames is not None:
        observer.load(frames)
    renderer = SnapshotRenderer(
        camera=Camera(width=config.canvas_size, height=config.canvas_size),
        show_grid=config.show_grid,
    )
    renderer.reset_view(observer.current_snapshot())
    st.session_state["observer"] = observer
    st.session_state["renderer"] = renderer
    return observer
