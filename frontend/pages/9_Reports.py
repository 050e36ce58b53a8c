"""9_Reports.py — Teacher's view of one student's results and assignments."""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth

st.set_page_config(page_title="Reports", page_icon="📈", layout="wide")
apply_theme()
require_auth("teacher")

api = client()
st.title("📈 Student Reports")

try:
    students = api.get("/api/students")
except APIError as e:
    st.error(str(e))
    st.stop()

if not students:
    st.info("Nobody has signed up with your code yet.")
    st.stop()

labels = {s["id"]: s["name"] or s["email"] for s in students}
student_id = st.selectbox("Student", list(labels), format_func=labels.get)

try:
    report = api.student_report(student_id)
except APIError as e:
    st.error(str(e))
    st.stop()

overall = report["overall"]
c1, c2, c3, c4 = st.columns(4)
c1.metric("Quizzes", overall["total_quizzes"])
c2.metric("Avg score", overall["average_score"])
c3.metric("Avg accuracy", f"{overall['average_accuracy']}%")
c4.metric("Total points", overall["total_points"])

st.markdown("#### Live quizzes")
if not report["history"]:
    st.caption("No finished quizzes yet.")
else:
    st.dataframe(
        [
            {
                "Quiz":     h["quiz_title"],
                "Date":     h["date_taken"][:10],
                "Score":    h["score"],
                "Accuracy": f"{round(h['accuracy'])}%",
            }
            for h in report["history"]
        ],
        use_container_width=True,
    )

st.markdown("#### Assignments")
if not report["assignments"]:
    st.caption("Nothing assigned.")
else:
    st.dataframe(
        [
            {
                "Quiz":     a["quiz_title"],
                "Deadline": a["deadline"][:10],
                "Status":   "overdue" if a["overdue"] else a["status"],
                "Score":    a["score"],
                "Correct":  f"{a['correct_answers']}/{a['question_count']}" if a["completed_at"] else "",
            }
            for a in report["assignments"]
        ],
        use_container_width=True,
    )
