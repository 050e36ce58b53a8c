"""7_Students.py — Teacher's class: approvals and roster preview."""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth

st.set_page_config(page_title="Students", page_icon="👩‍🎓", layout="wide")
apply_theme()
user = require_auth("teacher")

api = client()
st.title("👩‍🎓 Students")
if user.get("teacher_code"):
    st.caption(f"Students sign up with your class code **{user['teacher_code']}**.")

try:
    students = api.get("/api/students")
except APIError as e:
    st.error(str(e))
    st.stop()

if not students:
    st.info("Nobody has signed up with your code yet.")

for s in students:
    c1, c2 = st.columns([4, 1])
    c1.markdown(f"**{s['name'] or s['email']}** · {s['email']}")
    if s["approved"]:
        if c2.button("Revoke", key=f"revoke-{s['id']}"):
            api.post(f"/api/students/{s['id']}/revoke")
            st.rerun()
    elif c2.button("Approve", key=f"approve-{s['id']}"):
        api.post(f"/api/students/{s['id']}/approve")
        st.rerun()

st.divider()

# ── Roster preview ────────────────────────────────────────────────────────────
st.markdown("#### Roster import preview")
roster = st.file_uploader("CSV with name,email,role,student_id", type=["csv"])
if roster is not None:
    try:
        preview = api.upload("/api/students/import/preview", roster.name, roster.getvalue(), "text/csv")
        st.dataframe(preview["rows"], use_container_width=True)
        st.caption(f"{preview['count']} rows")
    except APIError as e:
        st.error(str(e))
