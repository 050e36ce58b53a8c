"""2_Team.py — Create a team for a team-mode quiz, or join one by its code."""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth
from components.navigation import Intent, dispatch, dispatch_outcome, nav_payload
from components.session_pointer import SessionPointer

st.set_page_config(page_title="Teams", page_icon="👥", layout="centered")
apply_theme()
require_auth("student")

api = client()
nav = nav_payload(st.session_state, Intent.CREATE_TEAM, Intent.JOIN_TEAM, Intent.SHOW_TEAM_CODE)


def _enter(outcome: dict, pin: str | None) -> None:
    if outcome["intent"] == Intent.LIVE_QUIZ.value:
        SessionPointer().save(outcome["session_id"], {"pin": pin, "teamId": outcome.get("team_id")})
    outcome["pin"] = pin
    dispatch_outcome(outcome)


# ── Team code screen ──────────────────────────────────────────────────────────
if nav.get("intent") == Intent.SHOW_TEAM_CODE.value:
    st.markdown("## 👥 Your team is ready")
    st.write("Teammates join from their own device with this code:")
    st.markdown(f'<div class="big-code">{nav["team_code"]}</div>', unsafe_allow_html=True)
    if st.button("Start playing", key="start"):
        SessionPointer().save(nav["session_id"], {"pin": nav.get("pin"), "teamId": nav.get("team_id")})
        dispatch(Intent.LIVE_QUIZ, session_id=nav["session_id"], team_id=nav.get("team_id"))
    st.stop()

# ── Which session? ────────────────────────────────────────────────────────────
session_id = nav.get("session_id")
pin = nav.get("pin")
if not session_id:
    st.markdown("## 👥 Teams")
    pin = st.text_input("Game PIN of the team quiz", max_chars=6).strip()
    if not pin:
        st.stop()
    try:
        session = api.lookup_session(pin)
    except APIError as e:
        st.error(str(e))
        st.stop()
    if session["mode"] != "team":
        st.info("That quiz is not played in teams.")
        st.page_link("pages/1_Join_Quiz.py", label="Join it here →")
        st.stop()
    session_id = session["id"]

if nav.get("message"):
    st.info(nav["message"])

tab_join, tab_create = st.tabs(["Join with a code", "Create a team"])

# ── JOIN ──────────────────────────────────────────────────────────────────────
with tab_join:
    code = st.text_input("Team code", max_chars=8, placeholder="AB2C").strip()
    if code:
        try:
            team = api.lookup_team(session_id, code)
            members = ", ".join(m["name"] or "?" for m in team.get("members", []))
            st.write(f"**{team['name']}** · {members}")
            if st.button("Join this team", key="join-team"):
                _enter(api.join_team(session_id, code), pin)
        except APIError as e:
            st.error(str(e))

# ── CREATE ────────────────────────────────────────────────────────────────────
with tab_create:
    try:
        classmates = api.classmates()
    except APIError as e:
        classmates = []
        st.error(str(e))

    names = {c["id"]: c["name"] or c["email"] for c in classmates}
    with st.form("create_team_form"):
        name = st.text_input("Team name", max_chars=100)
        member_ids = st.multiselect("Teammates", list(names), format_func=names.get)
        shared = st.checkbox("We are all playing on this device")
        submitted = st.form_submit_button("Create team")

    if submitted:
        if not name.strip():
            st.error("Give your team a name.")
        elif not member_ids:
            st.error("Pick at least one teammate.")
        else:
            try:
                _enter(api.create_team(session_id, name.strip(), member_ids, shared), pin)
            except APIError as e:
                st.error(str(e))
