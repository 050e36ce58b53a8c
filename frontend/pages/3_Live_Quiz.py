"""3_Live_Quiz.py — Play the current question of a running session."""
import time

import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth
from components.navigation import Intent, dispatch, nav_payload
from components.session_pointer import SessionPointer

st.set_page_config(page_title="Live Quiz", page_icon="⚡", layout="centered")
apply_theme()
require_auth("student")

POLL_SECONDS = 2

api = client()
pointer = SessionPointer()

session_id = nav_payload(st.session_state, Intent.LIVE_QUIZ).get("session_id")
if not session_id:
    stored = pointer.get()
    session_id = stored.get("sessionId") if stored else None
if not session_id:
    st.info("You are not in a quiz right now.")
    st.page_link("pages/1_Join_Quiz.py", label="Join a quiz →")
    st.stop()

try:
    state = api.session_state(session_id)
except APIError as e:
    if e.status_code in (403, 404):
        pointer.clear()
    st.error(str(e))
    st.page_link("Home.py", label="← Back to Dashboard")
    st.stop()

session = state["session"]
st.markdown(f"## ⚡ {session.get('quiz_title') or 'Quiz'}")
st.caption(f"Score: **{state['participant']['score']}**")

# ── Finished ──────────────────────────────────────────────────────────────────
if session["status"] in ("completed", "cancelled"):
    pointer.clear()
    if session["status"] == "cancelled":
        st.warning("Your teacher cancelled this quiz.")
    else:
        st.success("Quiz over!")
        board = api.leaderboard(session_id)
        st.table([
            {"Player": p["name"], "Score": p["score"]} for p in board["players"]
        ])
        if board["teams"]:
            st.table([{"Team": t["name"], "Score": t["score"]} for t in board["teams"]])
    if st.button("See my results", key="results"):
        dispatch(Intent.RESULTS)
    st.stop()

question = state["question"]

# ── Waiting ───────────────────────────────────────────────────────────────────
if question is None or state["already_answered"]:
    last = st.session_state.get("last_answer")
    if last and question and last["question_id"] == question["id"]:
        if last["is_correct"]:
            st.success(f"Correct! +{last['points_earned']}")
        else:
            st.error("Not this time.")
    st.info("Waiting for the next question…")
    time.sleep(POLL_SECONDS)
    st.rerun()

# ── Question ──────────────────────────────────────────────────────────────────
started = st.session_state.setdefault("question_started", {})
started_at = started.setdefault(question["id"], time.time())
time_remaining = max(0.0, question["time_limit"] - (time.time() - started_at))

st.markdown(
    f"**Question {question['order_index'] + 1} of {state['question_count']}**  "
    f"· {int(time_remaining)}s left"
)
st.markdown(f"### {question['question_text']}")
if question.get("image_url"):
    st.image(question["image_url"])
if question.get("video_url"):
    st.video(question["video_url"])

cols = st.columns(2)
for i, option in enumerate(question["options"]):
    with cols[i % 2]:
        if st.button(option["text"], key=f"opt-{question['id']}-{i}", use_container_width=True):
            remaining = max(0.0, question["time_limit"] - (time.time() - started_at))
            try:
                st.session_state["last_answer"] = api.submit_answer(
                    session_id, question["id"], i, remaining
                )
            except APIError as e:
                st.error(str(e))
            st.rerun()
