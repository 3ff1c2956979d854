import logging
from collections import Counter
from typing import Dict, List, Optional

import streamlit as st
from st_keyup import st_keyup  # type: ignore

from space_replay.errors import MalformedSnapshotError
from space_replay.loader import snapshots_from_json
from space_replay.observer import ReplayObserver
from space_replay.renderer.canvas import SnapshotRenderer
from space_replay.snapshot import Snapshot
from space_replay.types import EntityKind
from space_replay.utils.summary import describe_entity, player_summaries

logger = logging.getLogger(__name__)

# Typed characters standing in for the browser key names of KEY_BINDINGS.
TYPED_KEYS: Dict[str, str] = {
    " ": " ",
    "k": " ",
    "a": "ArrowLeft",
    "d": "ArrowRight",
    "q": "Home",
    "e": "End",
}

KIND_ICONS: Dict[EntityKind, str] = {
    EntityKind.SHIP: "🚀",
    EntityKind.ASTEROID: "🪨",
    EntityKind.WORMHOLE: "🌀",
}


def load_uploaded_replay(
    observer: ReplayObserver, renderer: SnapshotRenderer
) -> None:
    uploaded = st.file_uploader(
        "Replay file", type=["json", "jsonl"], key="replay_upload"
    )
    if uploaded is None or uploaded.file_id == st.session_state.get("replay_file_id"):
        return
    st.session_state["replay_file_id"] = uploaded.file_id
    try:
        frames = snapshots_from_json(uploaded.getvalue().decode("utf-8"))
        observer.load(frames)
    except (MalformedSnapshotError, UnicodeDecodeError) as e:
        logger.warning(f"Rejected replay {uploaded.name}: {e}")
        st.error(f"Could not load {uploaded.name}: {e}")
        return
    st.session_state["frames"] = frames
    renderer.reset_view(observer.current_snapshot())
    st.toast(f"Loaded {len(frames)} frames", icon="📼")


def get_keyboard_key() -> Optional[str]:
    value: str = (
        st_keyup(
            "control",
            label_visibility="collapsed",
            key="replay_key_input",
            placeholder="Type: space/k play, a/d step, q/e first/last",
        )
        or ""
    )
    prev_value: str = st.session_state.get("replay_key_input_prev", "")
    st.session_state["replay_key_input_prev"] = value
    if value == prev_value:
        return None
    new_values: List[str] = list((Counter(value) - Counter(prev_value)).elements())
    if not new_values:
        return None
    return TYPED_KEYS.get(new_values[-1].lower())


def display_pick_form(observer: ReplayObserver) -> None:
    with st.form("pick_form", border=False):
        x_col, y_col = st.columns(2)
        with x_col:
            x = st.number_input("World X", value=0.0, step=50.0, key="pick_x")
        with y_col:
            y = st.number_input("World Y", value=0.0, step=50.0, key="pick_y")
        if st.form_submit_button("🎯 Select at point", use_container_width=True):
            if observer.pick_at(x, y) is None:
                st.toast("Nothing at that point", icon="🫥")
    if observer.selection() is not None:
        if st.button("Clear selection", key="clear_selection_btn"):
            observer.clear_selection()


def display_entity_info(observer: ReplayObserver) -> None:
    ref = observer.selection()
    st.text("Selection")
    with st.container(height=220):
        if ref is None:
            st.error("Nothing selected")
            return
        lines = describe_entity(observer.displayed_selection())
        st.success("  \n".join(lines), icon=KIND_ICONS[ref.kind])


def display_players(snapshot: Optional[Snapshot]) -> None:
    st.text("Players")
    with st.container(height=300):
        rows = player_summaries(snapshot)
        if not rows:
            st.error("No players")
        for row in rows:
            st.markdown(
                f"<span style='color:{row.color}'>■</span> **{row.name}** "
                f"(#{row.id})  \nRock: {row.rock} · Fuel: {row.fuel:g} · "
                f"Ships: {row.ships}",
                unsafe_allow_html=True,
            )
