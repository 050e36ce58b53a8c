"""5_Quizzes.py — Teacher quiz library: write, import and assign quizzes."""
from datetime import datetime, time as dtime, timezone

import streamlit as st

from components.api_client import APIError
from components.layout import apply_theme, client, require_auth

st.set_page_config(page_title="Quizzes", page_icon="🧠", layout="wide")
apply_theme()
require_auth("teacher")

api = client()
st.title("🧠 Quizzes")

tab_list, tab_new, tab_import = st.tabs(["My quizzes", "New quiz", "Import CSV"])

# ── LIBRARY ───────────────────────────────────────────────────────────────────
with tab_list:
    try:
        quizzes = api.get("/api/quizzes")
        students = [s for s in api.get("/api/students") if s["approved"]]
    except APIError as e:
        st.error(str(e))
        st.stop()

    if not quizzes:
        st.info("No quizzes yet. Write one or import a CSV.")

    for quiz in quizzes:
        with st.expander(f"{quiz['title']} · {quiz['question_count']} questions"):
            if quiz.get("description"):
                st.write(quiz["description"])

            names = {s["id"]: s["name"] or s["email"] for s in students}
            with st.form(f"assign-{quiz['id']}"):
                picked = st.multiselect("Assign to", list(names), format_func=names.get)
                day = st.date_input("Deadline")
                submitted = st.form_submit_button("Assign")
            if submitted:
                deadline = datetime.combine(day, dtime(23, 59), tzinfo=timezone.utc)
                try:
                    res = api.post(f"/api/quizzes/{quiz['id']}/assignments", {
                        "student_ids": picked,
                        "deadline":    deadline.isoformat(),
                    })
                    st.success(f"Assigned to {len(res['assignments'])} students, {res['emails_sent']} e-mails sent.")
                except APIError as e:
                    st.error(str(e))

            if st.button("Delete", key=f"del-{quiz['id']}"):
                api.delete(f"/api/quizzes/{quiz['id']}")
                st.rerun()

# ── NEW QUIZ ──────────────────────────────────────────────────────────────────
with tab_new:
    title = st.text_input("Title", max_chars=200)
    course = st.checkbox("Course material", value=True)
    count = st.number_input("Questions", min_value=1, max_value=50, value=1)

    questions = []
    images = []
    for i in range(int(count)):
        st.markdown(f"**Question {i + 1}**")
        text = st.text_input("Question", key=f"q-{i}", max_chars=500)
        options = [st.text_input(f"Option {j + 1}", key=f"q-{i}-o-{j}") for j in range(4)]
        correct = st.selectbox("Correct option", [1, 2, 3, 4], key=f"q-{i}-c")
        limit = st.number_input("Time limit (s)", 5, 240, 30, key=f"q-{i}-t")
        image = st.file_uploader("Image (optional)", type=["png", "jpg", "jpeg", "gif", "webp"], key=f"q-{i}-img")
        images.append(image)
        questions.append({
            "question_text": text,
            "question_type": "multiple_choice",
            "time_limit":    int(limit),
            "points":        100,
            "options": [
                {"text": o, "is_correct": j + 1 == correct}
                for j, o in enumerate(options) if o.strip()
            ],
        })

    if st.button("Save quiz", key="save-quiz"):
        try:
            for question, image in zip(questions, images):
                if image is not None:
                    stored = api.upload("/api/media", image.name, image.getvalue(), image.type)
                    question["image_url"] = stored["url"]
            api.post("/api/quizzes", {
                "title":              title,
                "is_course_material": course,
                "questions":          questions,
            })
            st.success("Quiz saved.")
        except APIError as e:
            st.error(str(e))

# ── IMPORT ────────────────────────────────────────────────────────────────────
with tab_import:
    fmt = st.radio("Format", ["kahoot", "simple"], horizontal=True)
    uploaded = st.file_uploader("CSV file", type=["csv"])
    override = st.text_input("Title (optional)")
    if uploaded and st.button("Import", key="import"):
        try:
            quiz = api.upload(
                "/api/quizzes/import",
                uploaded.name,
                uploaded.getvalue(),
                "text/csv",
                fields={"format": fmt, "title": override},
            )
            st.success(f"Imported “{quiz['title']}” with {len(quiz['questions'])} questions.")
        except APIError as e:
            st.error(str(e))
