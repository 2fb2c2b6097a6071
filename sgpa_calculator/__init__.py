from .backend_logic import (
    BAND_ORDER,
    GRADE_SCALE,
    ComputationResult,
    CourseEntry,
    classify,
    compute_sgpa,
)
from .course_list import CourseList

__all__ = [
    "BAND_ORDER",
    "GRADE_SCALE",
    "ComputationResult",
    "CourseEntry",
    "CourseList",
    "classify",
    "compute_sgpa",
]
