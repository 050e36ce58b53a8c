"""6_Host_Session.py — Teacher hosts a live session and drives it."""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth

st.set_page_config(page_title="Host Session", page_icon="📡", layout="wide")
apply_theme()
require_auth("teacher")

api = client()
st.title("📡 Live Sessions")

try:
    quizzes = api.get("/api/quizzes")
    sessions = api.get("/api/sessions")
except APIError as e:
    st.error(str(e))
    st.stop()

# ── Host ──────────────────────────────────────────────────────────────────────
titles = {q["id"]: q["title"] for q in quizzes}
with st.form("host_form"):
    quiz_id = st.selectbox("Quiz", list(titles), format_func=titles.get)
    mode = st.radio("Mode", ["classic", "team"], horizontal=True)
    submitted = st.form_submit_button("Create session")
if submitted and quiz_id:
    try:
        created = api.post("/api/sessions", {"quiz_id": quiz_id, "mode": mode})
        st.success(f"Session ready. PIN **{created['pin']}**")
        st.rerun()
    except APIError as e:
        st.error(str(e))

st.divider()

# ── Sessions ──────────────────────────────────────────────────────────────────
live = [s for s in sessions if s["status"] in ("pending", "active")]
if not live:
    st.info("No open sessions.")

for s in live:
    st.markdown(f"### {s['quiz_title']} · {s['mode']}")
    st.markdown(f'<div class="big-code">{s["pin"]}</div>', unsafe_allow_html=True)
    st.caption(f"Status: {s['status']} · question {s['current_question_index'] + 1}")

    c1, c2, c3, c4 = st.columns(4)
    try:
        if s["status"] == "pending" and c1.button("Start", key=f"start-{s['id']}"):
            api.patch(f"/api/sessions/{s['id']}/status", {"status": "active"})
            st.rerun()
        if s["status"] == "active" and c2.button("Next question", key=f"next-{s['id']}"):
            api.post(f"/api/sessions/{s['id']}/next")
            st.rerun()
        if s["status"] == "active" and c3.button("Finish", key=f"end-{s['id']}"):
            api.patch(f"/api/sessions/{s['id']}/status", {"status": "completed"})
            st.rerun()
        if c4.button("Cancel", key=f"cancel-{s['id']}"):
            api.patch(f"/api/sessions/{s['id']}/status", {"status": "cancelled"})
            st.rerun()

        board = api.leaderboard(s["id"])
    except APIError as e:
        st.error(str(e))
        continue

    left, right = st.columns(2)
    with left:
        st.markdown("**Players**")
        if board["players"]:
            st.table([{"Player": p["name"], "Score": p["score"]} for p in board["players"]])
        else:
            st.caption("Nobody has joined yet.")
    if board["teams"]:
        with right:
            st.markdown("**Teams**")
            st.table([{"Team": t["name"], "Score": t["score"]} for t in board["teams"]])
    if st.button("Refresh", key=f"refresh-{s['id']}"):
        st.rerun()
    st.divider()
