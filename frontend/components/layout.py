"""
layout.py — shared page chrome: palette CSS, auth guard and sidebar.
"""
import streamlit as st

from components.api_client import get_client

_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

html, body, [class*="css"] {
    font-family: 'Inter', system-ui, sans-serif;
    background-color: #0B1220;
    color: #E6EAF2;
}
.stApp { background-color: #0B1220; }

.dash-card {
    background: #111B2E;
    border: 1px solid #22304A;
    border-radius: 12px;
    padding: 1.4rem 1.6rem;
}
.dash-card h3 { color: #E6EAF2; margin-bottom: 0.4rem; }
.dash-card p  { color: #A7B0C0; margin: 0; font-size: 0.9rem; }

.big-code {
    font-size: 3rem;
    font-weight: 700;
    letter-spacing: 0.4rem;
    color: #6D5EF7;
    text-align: center;
}
div.stButton > button {
    background: #6D5EF7;
    color: #E6EAF2;
    border: none;
    border-radius: 8px;
    padding: 0.45rem 1.1rem;
    font-weight: 600;
    transition: background 0.2s;
}
div.stButton > button:hover { background: #5a4dd6; }
</style>
"""


def apply_theme() -> None:
    st.markdown(_CSS, unsafe_allow_html=True)


def require_auth(role: str | None = None) -> dict:
    """Stop the page unless signed in (with *role*, if given); returns the user dict."""
    if not st.session_state.get("access_token"):
        st.warning("Please sign in first.")
        st.page_link("pages/0_Login.py", label="👉 Go to Login")
        st.stop()

    user = st.session_state["user"]
    if role and user.get("role") != role:
        st.error(f"This page is for {role} accounts.")
        st.page_link("Home.py", label="← Back to Dashboard")
        st.stop()
    return user


def sign_out() -> None:
    for k in ["access_token", "refresh_token", "user", "api_client", "nav"]:
        st.session_state.pop(k, None)


def sidebar(user: dict) -> None:
    with st.sidebar:
        st.markdown(
            f"<div style='color:#A7B0C0;font-size:0.8rem;margin-bottom:0.3rem'>Signed in as</div>"
            f"<div style='color:#E6EAF2;font-weight:600'>{user.get('name') or user['email']}</div>"
            f"<div style='color:#A7B0C0;font-size:0.75rem'>{user['email']} · {user['role']}</div>",
            unsafe_allow_html=True,
        )
        st.divider()
        if st.button("Sign Out", key="sidebar-logout"):
            sign_out()
            st.rerun()


def client():
    return get_client(st.session_state)
