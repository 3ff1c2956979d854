import logging
import time

import streamlit as st
from pyrsistent import thaw

from config import (
    AppConfig,
    get_config_from_widgets,
    make_observer,
    set_default_config,
)
from components import (
    display_entity_info,
    display_pick_form,
    display_players,
    get_keyboard_key,
    load_uploaded_replay,
)
from space_replay.config import SPEED_OPTIONS_MS
from space_replay.observer import ReplayObserver
from space_replay.renderer.canvas import SnapshotRenderer
from space_replay.utils.summary import frame_label

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

st.set_page_config(layout="wide", page_title="Space Replay")
st.markdown(
    """
    <style>
        header, footer, #MainMenu { visibility: hidden; }
        .stMainBlockContainer {
            padding-top: 0;
            padding-bottom: 0;
        }
    </style>
""",
    unsafe_allow_html=True,
)


# --------- Main App ---------

set_default_config()
tab_replay, tab_config, tab_state = st.tabs(["Replay", "Config", "State"])

with tab_config:
    config: AppConfig = get_config_from_widgets()
    if st.button("Save", key="save_config_btn", use_container_width=True):
        st.session_state["config"] = config
        make_observer(config)
    st.divider()

with tab_replay:
    if "observer" not in st.session_state:
        make_observer(st.session_state["config"])
    observer: ReplayObserver = st.session_state["observer"]
    renderer: SnapshotRenderer = st.session_state["renderer"]

    left_col, middle_col, right_col = st.columns([0.25, 0.5, 0.25])

    with right_col:
        load_uploaded_replay(observer, renderer)
        st.divider()

        first_btn, prev_btn, play_btn, next_btn, last_btn = st.columns(5)
        with first_btn:
            if st.button("⏮️", key="first_btn", use_container_width=True):
                observer.first_frame()
        with prev_btn:
            if st.button("⏪", key="prev_btn", use_container_width=True):
                observer.previous_frame()
        with play_btn:
            label = "⏸️" if observer.is_playing() else "▶️"
            if st.button(label, key="play_btn", use_container_width=True):
                observer.toggle_play()
        with next_btn:
            if st.button("⏩", key="next_btn", use_container_width=True):
                observer.next_frame()
        with last_btn:
            if st.button("⏭️", key="last_btn", use_container_width=True):
                observer.last_frame()

        speed_ms: int = st.selectbox(
            "Speed (ms per frame)",
            SPEED_OPTIONS_MS,
            index=SPEED_OPTIONS_MS.index(observer.speed_ms())
            if observer.speed_ms() in SPEED_OPTIONS_MS
            else 1,
            key="speed_select",
        )
        if speed_ms != observer.speed_ms():
            observer.set_speed(speed_ms)

        interpolate: bool = st.toggle(
            "Interpolation",
            value=observer.interpolation_enabled(),
            key="interpolation_toggle",
        )
        if interpolate != observer.interpolation_enabled():
            observer.set_interpolation_enabled(interpolate)

        zoom_out, zoom_fit, zoom_in = st.columns(3)
        with zoom_out:
            if st.button("➖", key="zoom_out_btn", use_container_width=True):
                renderer.camera = renderer.camera.zoom_by(1 / 1.25)
        with zoom_fit:
            if st.button("Fit", key="zoom_fit_btn", use_container_width=True):
                renderer.reset_view(observer.current_snapshot())
        with zoom_in:
            if st.button("➕", key="zoom_in_btn", use_container_width=True):
                renderer.camera = renderer.camera.zoom_by(1.25)

        key = get_keyboard_key()
        if key is not None:
            observer.handle_key(key)

        st.divider()
        display_pick_form(observer)

    with middle_col:
        total = observer.total_frames()
        if total > 1:
            index = st.slider("Frame", 0, total - 1, observer.current_index())
            if index != observer.current_index():
                observer.set_index(index)
        snapshot = observer.update()
        st.caption(f"Frame {frame_label(observer.current_index(), total)}")
        img = renderer.render(snapshot, observer.displayed_selection())
        st.image(img, use_container_width=True)

    with left_col:
        status = "▶️ Playing" if observer.is_playing() else "⏸️ Paused"
        st.info(f"**{status}** · {observer.speed_ms()} ms/frame", icon="📼")
        display_entity_info(observer)
        display_players(snapshot)

with tab_state:
    if snapshot is not None:
        st.json(thaw(snapshot.description), expanded=1)

if observer.is_playing() or observer.state.transition.active:
    time.sleep(observer.config.poll_interval_ms / 1000.0)
    st.rerun()
