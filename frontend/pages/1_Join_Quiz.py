"""1_Join_Quiz.py — Enter a session PIN and follow the server's answer."""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth
from components.navigation import Intent, dispatch, dispatch_outcome, nav_payload
from components.session_pointer import SessionPointer

st.set_page_config(page_title="Join Quiz", page_icon="🎮", layout="centered")
apply_theme()
require_auth("student")

api = client()


def _follow(outcome: dict, pin: str) -> None:
    """Remember the session when the student is in, then route."""
    if outcome["intent"] == Intent.LIVE_QUIZ.value:
        SessionPointer().save(outcome["session_id"], {"pin": pin, "teamId": outcome.get("team_id")})
    outcome["pin"] = pin
    dispatch_outcome(outcome)


def _join(pin: str, team_id: str | None = None, confirm: bool = False) -> None:
    try:
        outcome = api.join_session(pin, team_id=team_id, confirm=confirm)
    except APIError as e:
        if e.code == "no_team":
            session = api.lookup_session(pin)
            dispatch(Intent.CREATE_TEAM, session_id=session["id"], pin=pin, message=str(e))
        st.error(str(e))
        return
    _follow(outcome, pin)


# ── Pending answer from a previous join ───────────────────────────────────────
pending = nav_payload(st.session_state, Intent.CONFIRM_REJOIN, Intent.PICK_TEAM)

if pending.get("intent") == Intent.CONFIRM_REJOIN.value:
    team = pending["candidates"][0] if pending.get("candidates") else {}
    st.markdown("## 🔁 Rejoin your team?")
    st.write(
        f"Your team **{team.get('name', '')}** is already playing this quiz. "
        "Rejoin it, or set up a different team."
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Rejoin team", key="rejoin"):
            _join(pending["pin"], confirm=True)
    with col2:
        if st.button("Use another team", key="other-team"):
            dispatch(Intent.CREATE_TEAM, session_id=pending["session_id"], pin=pending["pin"])
    st.stop()

if pending.get("intent") == Intent.PICK_TEAM.value:
    st.markdown("## 👥 Pick your team")
    candidates = pending.get("candidates") or []
    labels = {
        c["team_id"]: f"{c['name']} ({c['team_code']})" + (" · playing" if c["active"] else "")
        for c in candidates
    }
    choice = st.radio("Teams", list(labels), format_func=labels.get)
    if st.button("Play with this team", key="pick"):
        _join(pending["pin"], team_id=choice)
    if st.button("Create a new team", key="new-team"):
        dispatch(Intent.CREATE_TEAM, session_id=pending["session_id"], pin=pending["pin"])
    st.stop()

# ── PIN entry ─────────────────────────────────────────────────────────────────
st.markdown("## 🎮 Join a Quiz")
with st.form("pin_form"):
    pin = st.text_input("Game PIN", max_chars=6, placeholder="123456")
    submitted = st.form_submit_button("Join")

if submitted:
    pin = pin.strip()
    if not (len(pin) == 6 and pin.isdigit()):
        st.error("The PIN is 6 digits.")
    else:
        _join(pin)
