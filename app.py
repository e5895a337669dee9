"""
app.py
======
Streamlit web UI for Detective Quest: Mansion Investigation.

Responsibilities:
  - Configure and render the Streamlit page (layout, dark-noir theme).
  - Manage session state initialisation and reset.
  - Render sidebar components (collected clues, progress).
  - Render main-panel components (current room, navigation buttons,
    exploration log, accusation form, verdict).

This file contains only UI logic. All game logic lives in game_engine.py,
all catalog data in case_data.py, and all shared text helpers in
ui_helpers.py.

Resource lifetime:
  The DetectiveQuestGame stored in st.session_state is closed explicitly
  when the player starts a new case. Streamlit exposes no hook for a browser
  session ending, so a game abandoned mid-walk is never close()d; its
  structures are reclaimed with the session state by the garbage collector.

Run with:
    streamlit run app.py
"""

from __future__ import annotations

import logging

import streamlit as st
from dotenv import load_dotenv

# Load .env before any game code runs so DETECTIVE_QUEST_* overrides apply.
load_dotenv()

from config import load_config  # noqa: E402

CONFIG = load_config()

# ---------------------------------------------------------------------------
# Logging configuration
#
# basicConfig is called here, at the Streamlit entry point, so it runs exactly
# once per process regardless of how many times Streamlit reruns the script.
# All modules under "detective_quest.*" emit to this handler automatically via
# Python's hierarchical logger namespace.
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=CONFIG.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("detective_quest.app")

from case_data import CASE_FILE  # noqa: E402
from game_engine import DetectiveQuestGame  # noqa: E402
from ui_helpers import (  # noqa: E402
    build_css,
    describe_end,
    describe_verdict,
    describe_visit,
)


# ============================================================
# PAGE CONFIGURATION
# ============================================================

st.set_page_config(
    page_title="Detective Quest",
    page_icon="🔍",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(f"<style>{build_css()}</style>", unsafe_allow_html=True)


# ============================================================
# SESSION STATE
# ============================================================

def _new_game() -> DetectiveQuestGame:
    game = DetectiveQuestGame(config=CONFIG)
    st.session_state.journal = [describe_visit(game.start())]
    return game


def init_session_state() -> None:
    """
    Initialise all Streamlit session state variables on first run.

    Uses a defaults dict so new keys can be added in one place without
    multiple scattered `if key not in st.session_state` guards.
    """
    defaults: dict = {
        "journal":           [],     # list of line-lists, one per visit
        "notice":            None,   # last refused-command message
        "accusation_result": None,
        "accusation_done":   False,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
    if "game" not in st.session_state:
        st.session_state.game = _new_game()


def reset_game() -> None:
    """
    Release the current session's structures and start a new investigation.
    """
    old = st.session_state.get("game")
    if old is not None:
        old.close()
    st.session_state.game              = _new_game()
    st.session_state.notice            = None
    st.session_state.accusation_result = None
    st.session_state.accusation_done   = False
    logger.info("New case started from the UI.")


# ============================================================
# SIDEBAR COMPONENTS
# ============================================================

def render_clue_sidebar() -> None:
    """Render the collected clues (ascending) and walk statistics."""
    game  = st.session_state.game
    state = game.state

    st.sidebar.markdown(
        '<div class="sidebar-header">🧾 EVIDENCE</div>', unsafe_allow_html=True
    )
    clues = game.collected_clues()
    if not clues:
        st.sidebar.markdown("*No clues collected yet.*")
    for clue in clues:
        st.sidebar.markdown(
            f"<div class='clue-item'>🔎 {clue}</div>", unsafe_allow_html=True
        )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        '<div class="sidebar-header">📊 INVESTIGATION</div>', unsafe_allow_html=True
    )
    height = max(1, game.graph.height())
    st.sidebar.progress(min(state.moves / height, 1.0))
    st.sidebar.markdown(f"**Moves:** {state.moves}")
    st.sidebar.markdown(f"**Path:** {' → '.join(state.path)}")

    st.sidebar.markdown("---")
    if st.sidebar.button("🔄 NEW CASE", use_container_width=True):
        reset_game()
        st.rerun()


# ============================================================
# MAIN-PANEL COMPONENTS
# ============================================================

def render_room() -> None:
    """Render the current room card and the navigation buttons."""
    game = st.session_state.game
    room = game.engine.current

    st.markdown(f"""
    <div class="room-card">
        <h3>🚪 {room.id}</h3>
    </div>
    """, unsafe_allow_html=True)

    if st.session_state.notice:
        st.warning(st.session_state.notice)

    options = game.menu()
    if not options:
        st.info(describe_end(game.state.end_reason))
        return

    cols = st.columns(len(options))
    for col, (key, label, room_id) in zip(cols, options):
        caption = f"{label}\n({room_id})" if room_id else label
        if col.button(caption, key=f"nav_{key}", use_container_width=True):
            _submit_command(key)
            st.rerun()


def _submit_command(key: str) -> None:
    game   = st.session_state.game
    result = game.handle(key)
    st.session_state.notice = result.error
    if result.report is not None:
        st.session_state.journal.append(describe_visit(result.report))
    elif result.ended:
        st.session_state.journal.append([describe_end(game.state.end_reason)])


def render_journal() -> None:
    """Render every visit report so far, most recent last."""
    st.markdown("---")
    st.markdown("### 📜 Exploration log")
    for lines in st.session_state.journal:
        st.markdown("  \n".join(lines))


def render_accusation_form() -> None:
    """
    Render the accusation form once the exploration has ended.

    An empty name skips the judgment; the form disables itself after use.
    """
    game = st.session_state.game
    if not game.ended or st.session_state.accusation_done:
        return

    st.markdown("---")
    st.markdown("### ⚖️ Who is the culprit?")
    suspects = game.index.suspects()
    st.caption(f"Known suspects: {', '.join(suspects)}")

    with st.form("accusation"):
        name = st.text_input("Name the culprit (leave empty to skip):")
        submitted = st.form_submit_button("🔨 I ACCUSE…", type="primary")

    if submitted:
        st.session_state.accusation_result = game.accuse(name)
        st.session_state.accusation_done   = True
        st.rerun()


def render_verdict() -> None:
    if not st.session_state.accusation_done:
        return
    game   = st.session_state.game
    result = st.session_state.accusation_result

    st.markdown("---")
    if result is None:
        st.info("No accusation made. The case stays open.")
        return

    colour = "#228B22" if result.sustained else "#8B0000"
    banner = "CASE CLOSED" if result.sustained else "INSUFFICIENT EVIDENCE"
    st.markdown(
        f"<div class='verdict-display' style='color:{colour};'>{banner}</div>",
        unsafe_allow_html=True,
    )
    st.markdown("  \n".join(describe_verdict(result, game.suspect_tally())))


# ============================================================
# ENTRY POINT
# ============================================================

def main() -> None:
    """
    Entry point, called by Streamlit on every render pass.

    Flow:
      1. Initialise session state on first run.
      2. Render the page header and case briefing.
      3. Render sidebar (evidence list, progress).
      4. Render main panel (room + navigation, log, accusation, verdict).
    """
    init_session_state()

    st.markdown(f"""
    <h1 class='main-header'>🔍 DETECTIVE QUEST</h1>
    <h3 class='sub-header'>{CASE_FILE['title']}</h3>
    """, unsafe_allow_html=True)
    st.markdown(f"*{CASE_FILE['summary']}*")

    render_clue_sidebar()
    render_room()
    render_journal()
    render_accusation_form()
    render_verdict()


if __name__ == "__main__":
    main()
