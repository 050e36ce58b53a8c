"""4_Results.py — Student's finished quizzes and averages."""
import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth

st.set_page_config(page_title="Results", page_icon="📊", layout="wide")
apply_theme()
require_auth("student")

st.title("📊 My Results")

try:
    report = client().my_results()
except APIError as e:
    st.error(str(e))
    st.stop()


def _stats(label: str, stats: dict) -> None:
    st.markdown(f"#### {label}")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Quizzes", stats["total_quizzes"])
    c2.metric("Avg score", stats["average_score"])
    c3.metric("Avg accuracy", f"{stats['average_accuracy']}%")
    c4.metric("Total points", stats["total_points"])


_stats("Overall", report["overall"])
col1, col2 = st.columns(2)
with col1:
    _stats("Course material", report["course"])
with col2:
    _stats("Other quizzes", report["non_course"])

st.divider()
if not report["history"]:
    st.info("No finished quizzes yet.")
else:
    st.dataframe(
        [
            {
                "Quiz":     h["quiz_title"],
                "Date":     h["date_taken"][:10],
                "Score":    h["score"],
                "Correct":  f"{h['correct_answers']}/{h['total_questions']}",
                "Accuracy": f"{round(h['accuracy'])}%",
            }
            for h in report["history"]
        ],
        use_container_width=True,
    )
