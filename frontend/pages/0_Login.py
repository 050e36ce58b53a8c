"""
0_Login.py — Login & Register page.
This is page 0 in the Streamlit sidebar so it always appears first.
"""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Quizroom — Login",
    page_icon="🎓",
    layout="centered",
)
apply_theme()

# ── Redirect if already logged in ────────────────────────────────────────────
if st.session_state.get("access_token"):
    st.success("You are already logged in.")
    st.page_link("Home.py", label="Go to Dashboard →")
    st.stop()


def _signed_in(data: dict) -> None:
    st.session_state["access_token"] = data["access_token"]
    st.session_state["refresh_token"] = data["refresh_token"]
    st.session_state["user"] = data["user"]


st.markdown("## 🎓 Quizroom")
st.caption("Live classroom quizzes")

tab_login, tab_register = st.tabs(["Sign In", "Create Account"])

# ── LOGIN ─────────────────────────────────────────────────────────────────────
with tab_login:
    with st.form("login_form"):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In")

    if submitted:
        if not email or not password:
            st.error("Please fill in both fields.")
        else:
            try:
                data = client().login(email.strip().lower(), password)
                _signed_in(data)
                st.rerun()
            except APIError as e:
                st.error(str(e))

# ── REGISTER ──────────────────────────────────────────────────────────────────
with tab_register:
    r_role = st.radio("I am a", ["student", "teacher"], horizontal=True, key="r_role")
    with st.form("register_form"):
        r_email = st.text_input("Email", placeholder="you@example.com", key="r_email")
        r_name = st.text_input("Name", placeholder="Ada Lovelace", key="r_name")
        r_code = ""
        if r_role == "student":
            r_code = st.text_input("Teacher code", placeholder="ABCD-EFGH", key="r_code")
        r_password = st.text_input("Password (min 8 chars)", type="password", key="r_pass")
        r_confirm = st.text_input("Confirm Password", type="password", key="r_confirm")
        r_submitted = st.form_submit_button("Create Account")

    if r_submitted:
        if not r_email or not r_password:
            st.error("Email and password are required.")
        elif r_password != r_confirm:
            st.error("Passwords do not match.")
        elif len(r_password) < 8:
            st.error("Password must be at least 8 characters.")
        elif r_role == "student" and not r_code.strip():
            st.error("Ask your teacher for their class code.")
        else:
            try:
                data = client().register(
                    r_email.strip().lower(),
                    r_password,
                    r_name.strip() or None,
                    role=r_role,
                    teacher_code=r_code.strip() or None,
                )
                _signed_in(data)
                st.success("Account created! Redirecting…")
                st.rerun()
            except APIError as e:
                st.error(str(e))
