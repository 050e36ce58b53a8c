"""8_Assignments.py — Take the quizzes a teacher assigned, at your own pace."""
import time

import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth

st.set_page_config(page_title="Assignments", page_icon="📝", layout="centered")
apply_theme()
require_auth("student")

api = client()
open_id = st.session_state.get("open_assignment")

# ── Assignment list ───────────────────────────────────────────────────────────
if not open_id:
    st.title("📝 My Assignments")
    try:
        assignments = api.my_assignments()
    except APIError as e:
        st.error(str(e))
        st.stop()

    if not assignments:
        st.info("No quizzes have been assigned to you.")

    for a in assignments:
        c1, c2 = st.columns([4, 1])
        c1.markdown(f"**{a['quiz_title']}** · due {a['deadline'][:16].replace('T', ' ')}")
        if a["status"] == "completed":
            c1.caption(f"Done: {a['score']} points, {a['correct_answers']}/{a['question_count']} correct")
        elif a["overdue"]:
            c1.caption("The deadline has passed.")
        else:
            label = "Resume" if a["status"] == "in_progress" else "Start"
            if c2.button(label, key=f"open-{a['id']}"):
                st.session_state["open_assignment"] = a["id"]
                st.rerun()
    st.stop()

# ── Taking one ────────────────────────────────────────────────────────────────
try:
    opened = api.start_assignment(open_id)
except APIError as e:
    st.session_state.pop("open_assignment", None)
    st.error(str(e))
    st.page_link("pages/8_Assignments.py", label="← Back to assignments")
    st.stop()

assignment, questions, answers = opened["assignment"], opened["questions"], opened["answers"]
st.markdown(f"## 📝 {assignment['quiz_title']}")


def _back() -> None:
    st.session_state.pop("open_assignment", None)
    st.rerun()


if assignment["status"] == "completed":
    st.success(
        f"You scored {assignment['score']} points with "
        f"{assignment['correct_answers']}/{assignment['question_count']} correct answers."
    )
    if st.button("Back to assignments", key="back"):
        _back()
    st.stop()

pending = [q for q in questions if q["id"] not in answers]
st.caption(f"{len(answers)} of {len(questions)} answered")

if not pending:
    st.info("All questions answered.")
else:
    question = pending[0]
    started = st.session_state.setdefault("assignment_started", {})
    started_at = started.setdefault(question["id"], time.time())
    time_remaining = max(0.0, question["time_limit"] - (time.time() - started_at))

    st.markdown(
        f"**Question {question['order_index'] + 1} of {len(questions)}**  "
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
                    result = api.answer_assignment(open_id, question["id"], i, remaining)
                    if result["is_correct"]:
                        st.toast(f"Correct! +{result['points_earned']}")
                    else:
                        st.toast("Not this time.")
                except APIError as e:
                    st.error(str(e))
                st.rerun()

st.divider()
if pending:
    st.caption(f"Unanswered questions count as wrong if you submit now ({len(pending)} left).")
if st.button("Submit quiz", key="submit", type="primary"):
    try:
        api.complete_assignment(open_id)
    except APIError as e:
        st.error(str(e))
    st.rerun()
