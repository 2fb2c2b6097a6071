import logging
import math
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# ------------------------
# Grading scale and bands
# ------------------------
GRADE_SCALE = MappingProxyType({
    "A+": 10,
    "A": 9,
    "B+": 8,
    "B": 7,
    "C+": 6,
    "C": 5,
    "D": 4,
    "F": 0,
})

MIN_CREDITS = 0
MAX_CREDITS = 10

# (lower bound, band), checked top-down
BANDS: Tuple[Tuple[float, str], ...] = (
    (9.0, "Outstanding"),
    (8.0, "Excellent"),
    (7.0, "Very Good"),
    (6.0, "Good"),
    (5.0, "Average"),
    (4.0, "Below Average"),
)
LOWEST_BAND = "Poor"

BAND_ORDER = {
    "Outstanding": 1,
    "Excellent": 2,
    "Very Good": 3,
    "Good": 4,
    "Average": 5,
    "Below Average": 6,
    "Poor": 7,
}


def new_course_id() -> str:
    return uuid.uuid4().hex


@dataclass
class CourseEntry:
    name: str = ""
    credits: float = 0
    grade: str = ""
    id: str = field(default_factory=new_course_id)


@dataclass(frozen=True)
class ComputationResult:
    value: Optional[float] = None
    total_credits: float = 0.0
    total_points: float = 0.0
    counted: int = 0

    @property
    def band(self) -> Optional[str]:
        if self.value is None:
            return None
        return classify(self.value)


# ------------------------
# Core logic
# ------------------------
def round_2dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def is_complete(entry: CourseEntry) -> bool:
    """
    An entry counts towards the SGPA only when it has a non-blank name,
    positive credits and a grade from GRADE_SCALE.
    """
    if not isinstance(entry.name, str) or entry.name.strip() == "":
        return False
    credits = entry.credits
    if isinstance(credits, bool) or not isinstance(credits, Real):
        return False
    # NaN and inf are left out like any other malformed credits
    if not math.isfinite(credits) or not credits > 0:
        return False
    return isinstance(entry.grade, str) and entry.grade in GRADE_SCALE


def complete_entries(entries: Iterable[CourseEntry]) -> List[CourseEntry]:
    return [entry for entry in entries if is_complete(entry)]


def weighted_mean(pc: np.ndarray) -> Tuple[float, float, float]:
    """
    pc: Nx2 numpy array -> [grade_point, credits]
    returns: (unrounded credit-weighted mean, total credits, total points)
    """
    if pc.size == 0:
        return np.nan, 0.0, 0.0

    points = pc[:, 0].astype(float)
    credits = pc[:, 1].astype(float)
    total_credits = float(credits.sum())
    total_points = float(np.dot(points, credits))
    if total_credits == 0:
        return np.nan, 0.0, total_points

    return total_points / total_credits, total_credits, total_points


def compute_sgpa(entries: Iterable[CourseEntry]) -> ComputationResult:
    """
    Credit-weighted grade point average over the complete entries.

    Incomplete entries are skipped without complaint. If nothing is complete
    the result has no value; callers render that as "no result", not 0.00.
    The mean is rounded once, half-up to two decimals.
    """
    counted = complete_entries(entries)
    if not counted:
        logger.debug("No complete course entries; SGPA has no value")
        return ComputationResult()

    pc = np.array(
        [(GRADE_SCALE[entry.grade], float(entry.credits)) for entry in counted],
        dtype=float,
    )
    mean, total_credits, total_points = weighted_mean(pc)

    logger.debug("SGPA over %d course(s), %.2f credits", len(counted), total_credits)
    return ComputationResult(
        value=round_2dp_half_up(mean),
        total_credits=total_credits,
        total_points=total_points,
        counted=len(counted),
    )


def classify(value: float) -> str:
    for lower_bound, band in BANDS:
        if value >= lower_bound:
            return band
    return LOWEST_BAND
