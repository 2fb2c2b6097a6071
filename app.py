import logging

import streamlit as st

from sgpa_calculator.backend_logic import GRADE_SCALE, MAX_CREDITS, MIN_CREDITS, compute_sgpa
from sgpa_calculator.course_list import CourseList
from sgpa_calculator.io_csv import (
    ID_COLUMN,
    courses_to_frame,
    grade_scale_frame,
    load_courses_upload,
    parse_courses,
)

logging.basicConfig(level=logging.INFO)

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="SGPA Calculator | Semester Grade Point Average",
    page_icon="🧮",
    layout="centered",
)

st.title("🧮 SGPA Calculator")
st.write("Easily calculate your semester grade point average.")

st.markdown(
    "Add your courses with their **credits** (0–10) and **grade**, then click "
    "**Calculate SGPA**. Rows with a blank name, zero credits or no grade are "
    "left out of the calculation."
)

if "course_list" not in st.session_state:
    st.session_state["course_list"] = CourseList()
    st.session_state["editor_version"] = 0

course_list: CourseList = st.session_state["course_list"]


def _reseed_editor():
    st.session_state["editor_version"] += 1


# ------------------------
# Optional CSV upload
# ------------------------

courses_csv = st.file_uploader(
    "Optionally upload a courses CSV (Course, Credits, Grade)",
    type=["csv"],
    key="courses_csv",
)

if courses_csv is None:
    # the same file can be uploaded again once the uploader is cleared
    st.session_state.pop("upload_key", None)
else:
    upload_key = (courses_csv.name, courses_csv.size)
    if st.session_state.get("upload_key") != upload_key:
        upload_error = load_courses_upload(course_list, courses_csv)
        if upload_error:
            st.error(f"Courses CSV error: {upload_error}")
        else:
            st.session_state["upload_key"] = upload_key
            st.session_state.pop("result", None)
            _reseed_editor()

# ------------------------
# Input form
# ------------------------

with st.form("sgpa_form"):
    st.subheader("Course details")

    edited_df = st.data_editor(
        courses_to_frame(course_list),
        key=f"courses_df_{st.session_state['editor_version']}",
        num_rows="dynamic",
        hide_index=True,
        use_container_width=True,
        column_config={
            ID_COLUMN: None,
            "Course": st.column_config.TextColumn("Course", help="e.g., Mathematics"),
            "Credits": st.column_config.NumberColumn(
                "Credits", min_value=MIN_CREDITS, max_value=MAX_CREDITS, step=1, format="%d"
            ),
            "Grade": st.column_config.SelectboxColumn(
                "Grade", options=list(GRADE_SCALE.keys())
            ),
        },
    )

    col_calc, col_reset = st.columns([3, 1])
    with col_calc:
        calculate = st.form_submit_button("Calculate SGPA", type="primary", use_container_width=True)
    with col_reset:
        reset = st.form_submit_button("Reset", use_container_width=True)


if reset:
    course_list.reset()
    st.session_state.pop("result", None)
    _reseed_editor()
    st.rerun()

if calculate:
    course_list.replace(parse_courses(edited_df))
    st.session_state["result"] = compute_sgpa(course_list.snapshot())
    # the list is now the source of truth, including the blank row it falls
    # back to when every row was deleted
    _reseed_editor()
    st.rerun()


# ------------------------
# Result
# ------------------------

if "result" in st.session_state:
    result = st.session_state["result"]

    st.markdown("---")
    st.subheader("Your SGPA result")

    if result.value is None:
        st.info(
            "No complete courses to calculate from. Each course needs a name, "
            "credits above zero and a grade."
        )
    else:
        c1, c2, c3 = st.columns(3)
        with c1:
            st.metric("SGPA", f"{result.value:.2f}")
        with c2:
            st.metric("Grade", result.band)
        with c3:
            st.metric("Credits counted", f"{result.total_credits:g}")
        st.caption(
            "Your Semester Grade Point Average is calculated based on the credit "
            "hours and grades of your courses."
        )
else:
    st.info("Fill in your courses and click **Calculate SGPA** to get started.")


st.subheader("Grading scale")
st.dataframe(grade_scale_frame(), hide_index=True, use_container_width=True)
