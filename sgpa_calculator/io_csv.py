import logging
from typing import Iterable, List, Optional

import pandas as pd

from .backend_logic import GRADE_SCALE, CourseEntry, new_course_id
from .course_list import CourseList

logger = logging.getLogger(__name__)

# ------------------------
# CSV / table helpers (UI-side)
# ------------------------

COLUMN_ALIASES = {
    "course": "name",
    "course name": "name",
    "credit": "credits",
}
ID_COLUMN = "id"
DISPLAY_COLUMNS = {"name": "Course", "credits": "Credits", "grade": "Grade"}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {
        alias: target
        for alias, target in COLUMN_ALIASES.items()
        if alias in df.columns and target not in df.columns
    }
    if renames:
        df = df.rename(columns=renames)
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    logger.info("Read %d row(s) from uploaded CSV", len(df))
    return _normalise_cols(df)


def validate_courses_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"name", "credits", "grade"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Course, Credits, Grade.")
    out = df[["name", "credits", "grade"]].copy()
    out = out.rename(columns=DISPLAY_COLUMNS)
    return out


def _clean_name(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value)


def _clean_credits(value) -> float:
    if value is None or isinstance(value, bool):
        return 0
    try:
        credits = float(value)
    except (TypeError, ValueError):
        return 0
    if pd.isna(credits):
        return 0
    return credits


def _clean_grade(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip().upper()


def parse_courses(df: pd.DataFrame) -> List[CourseEntry]:
    """
    Turn a Course/Credits/Grade table into CourseEntry rows.

    Incomplete rows are kept; they stay editable and are only left out when
    the SGPA is computed. Rows without a usable id (rows added in the table
    editor, or an uploaded CSV) get a fresh one.
    """
    entries = []
    seen = set()
    for _, row in df.iterrows():
        course_id = row.get(ID_COLUMN)
        if not isinstance(course_id, str) or not course_id or course_id in seen:
            course_id = new_course_id()
        seen.add(course_id)
        entries.append(
            CourseEntry(
                name=_clean_name(row.get("Course")),
                credits=_clean_credits(row.get("Credits")),
                grade=_clean_grade(row.get("Grade")),
                id=course_id,
            )
        )
    return entries


def courses_to_frame(entries: Iterable[CourseEntry]) -> pd.DataFrame:
    """
    Editor table for the course list. The id rides along in a column the page
    hides, so the index stays a RangeIndex and rows can be added freely.
    """
    entries = list(entries)
    return pd.DataFrame(
        {
            ID_COLUMN: [entry.id for entry in entries],
            "Course": [entry.name for entry in entries],
            "Credits": [entry.credits for entry in entries],
            "Grade": [entry.grade or None for entry in entries],
        }
    )


def grade_scale_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {"Grade": list(GRADE_SCALE.keys()), "Points": list(GRADE_SCALE.values())}
    )


def load_courses_upload(course_list: CourseList, uploaded_file) -> Optional[str]:
    """
    Replace the course list with the rows of an uploaded CSV.

    Returns the error message for the page to show, or None on success; the
    list is left untouched when the upload is rejected.
    """
    try:
        seed = validate_courses_csv(read_csv_upload(uploaded_file))
    except ValueError as e:
        logger.warning("Rejected courses CSV %r: %s", getattr(uploaded_file, "name", None), e)
        return str(e)
    course_list.replace(parse_courses(seed))
    return None
