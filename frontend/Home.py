"""
Home.py — Entry point of the Quizroom Streamlit app.
Checks for a valid JWT; redirects to login if missing.
Shows the student or teacher dashboard when authenticated.
"""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth, sidebar
from components.navigation import Intent, dispatch
from components.session_pointer import SessionPointer, revalidate

st.set_page_config(
    page_title="Quizroom",
    page_icon="🎓",
    layout="wide",
)
apply_theme()

user = require_auth()
sidebar(user)
display_name = user.get("name") or user["email"]

# ── Dashboard header ──────────────────────────────────────────────────────────
st.markdown(f"## 👋 Welcome back, **{display_name}**")
st.divider()


def _card(title: str, body: str, page: str, label: str) -> None:
    st.markdown(
        f'<div class="dash-card"><h3>{title}</h3><p>{body}</p></div>',
        unsafe_allow_html=True,
    )
    st.page_link(page, label=label)


# ── Teacher dashboard ─────────────────────────────────────────────────────────
if user["role"] == "teacher":
    if user.get("teacher_code"):
        st.info(f"Your class code is **{user['teacher_code']}**. Share it with your students.")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        _card("🧠 Quizzes", "Write quizzes, import CSVs and assign homework.",
              "pages/5_Quizzes.py", "Manage Quizzes →")
    with col2:
        _card("📡 Live Sessions", "Host a quiz, start it and watch the leaderboard.",
              "pages/6_Host_Session.py", "Host →")
    with col3:
        _card("👩‍🎓 Students", "Approve new sign-ups and preview roster imports.",
              "pages/7_Students.py", "Open Class →")
    with col4:
        _card("📈 Reports", "Each student's results and assignment progress.",
              "pages/9_Reports.py", "Open Reports →")
    st.stop()

# ── Student dashboard ─────────────────────────────────────────────────────────
if not user.get("approved"):
    st.warning("Your teacher has not approved your account yet. You can join quizzes once they do.")

pointer = SessionPointer()
try:
    active = revalidate(pointer, client().participation)
except APIError as e:
    active = None
    st.caption(f"Could not check your last quiz: {e}")

if active:
    st.success("You are still in a running quiz.")
    if st.button("▶ Rejoin quiz", key="resume"):
        dispatch(Intent.LIVE_QUIZ, session_id=active["sessionId"])

col1, col2, col3, col4 = st.columns(4)
with col1:
    _card("🎮 Join a Quiz", "Enter the 6-digit PIN on your teacher's screen.",
          "pages/1_Join_Quiz.py", "Join →")
with col2:
    _card("👥 Teams", "Join a team with the code your captain shows you.",
          "pages/2_Team.py", "Teams →")
with col3:
    _card("📊 Results", "Your scores and accuracy across finished quizzes.",
          "pages/4_Results.py", "View Results →")
with col4:
    _card("📝 Assignments", "Quizzes your teacher set for you to take before a deadline.",
          "pages/8_Assignments.py", "Open →")
