"""Main Streamlit entrypoint for the Drugs.ng chat bot demo."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root is on path when running: streamlit run medbot/routes/app.py
_root = Path(__file__).resolve().parents[2]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import streamlit as st

from medbot.config import configure_logging, get_settings, load_env
from medbot.services.conversation_engine import AgentTurn, Catalog, ConversationSession

CHAT_KEY = "chat_history"
SESSION_KEY = "conversation_session"
LAST_TURN_KEY = "last_turn"
SENDER_ID = "streamlit-demo"


def _init_session(settings) -> ConversationSession:
    if SESSION_KEY not in st.session_state:
        catalog = Catalog.load(Path(settings.catalog_path)) if settings.catalog_configured() else Catalog.load()
        st.session_state[SESSION_KEY] = ConversationSession(
            SENDER_ID, catalog=catalog, page_size=settings.page_size
        )
    return st.session_state[SESSION_KEY]


def _init_history() -> None:
    if CHAT_KEY not in st.session_state:
        st.session_state[CHAT_KEY] = []  # list[tuple[role, text]]


def main() -> None:
    load_env()
    settings = get_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title=f"{settings.bot_name} Chat Bot", page_icon="💊")
    st.title(f"{settings.bot_name} Chat Bot")
    st.caption('Search medicines, find doctors, track orders. Type "help" or a number (1-8) to start.')

    # Start over: clear conversation and session markers
    if st.button("Start over", type="secondary"):
        for key in (CHAT_KEY, SESSION_KEY, LAST_TURN_KEY):
            if key in st.session_state:
                del st.session_state[key]
        st.rerun()

    _init_history()
    session = _init_session(settings)

    for role, text in st.session_state[CHAT_KEY]:
        if role == "user":
            st.markdown(f"**You:** {text}")
        else:
            st.markdown(f"**Bot:** {text}")

    with st.form("chat_form", clear_on_submit=True):
        msg = st.text_input(
            "Type your message",
            key="chat_form_text_input",
            placeholder="e.g., login john@example.com secret, then find paracetamol",
        )
        submitted = st.form_submit_button("Send")

    if submitted and (msg or "").strip():
        with st.spinner("Bot is thinking..."):
            user_text = (msg or "").strip()
            st.session_state[CHAT_KEY].append(("user", user_text))
            with session.lock:
                turn: AgentTurn = session.step(user_text)
            st.session_state[CHAT_KEY].append(("bot", turn.text))
            st.session_state[LAST_TURN_KEY] = turn
        st.rerun()

    with st.expander("Debug: session state", expanded=False):
        last_turn = st.session_state.get(LAST_TURN_KEY)
        st.write(
            {
                "logged_in": session.logged_in,
                "active_markers": session.view().pagination.active(),
                "cart": [item.label() for item in session.cart],
                "last_result": last_turn.intent_result.to_dict() if last_turn else None,
            }
        )


if __name__ == "__main__":
    main()
