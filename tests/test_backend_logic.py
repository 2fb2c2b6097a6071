import math

import numpy as np
import pytest

from sgpa_calculator.backend_logic import (
    BAND_ORDER,
    GRADE_SCALE,
    ComputationResult,
    CourseEntry,
    classify,
    complete_entries,
    compute_sgpa,
    is_complete,
    round_2dp_half_up,
    weighted_mean,
)


def course(credits, grade, name="Course"):
    return CourseEntry(name=name, credits=credits, grade=grade)


def test_grade_scale_values():
    assert list(GRADE_SCALE.items()) == [
        ("A+", 10), ("A", 9), ("B+", 8), ("B", 7),
        ("C+", 6), ("C", 5), ("D", 4), ("F", 0),
    ]


def test_grade_scale_is_read_only():
    with pytest.raises(TypeError):
        GRADE_SCALE["A"] = 1


def test_new_entries_are_blank_with_unique_ids():
    a, b = CourseEntry(), CourseEntry()
    assert (a.name, a.credits, a.grade) == ("", 0, "")
    assert a.id != b.id


# ------------------------
# Scenarios
# ------------------------

def test_scenario_a_weighted_average():
    result = compute_sgpa([course(4, "A"), course(3, "B+")])
    assert result.value == 8.57
    assert result.total_points == 60
    assert result.total_credits == 7
    assert result.counted == 2
    assert result.band == "Excellent"


def test_scenario_b_blank_name_is_excluded():
    result = compute_sgpa([course(4, "A", name="")])
    assert result.value is None
    assert result.band is None


def test_scenario_c_zero_credits_is_excluded():
    assert compute_sgpa([course(0, "A+")]).value is None


def test_scenario_d_all_fail():
    result = compute_sgpa([course(5, "F")])
    assert result.value == 0.0
    assert result.band == "Poor"


def test_scenario_e_only_complete_entries_count():
    result = compute_sgpa([course(3, "A+"), course(0, "C")])
    assert result.value == 10.0
    assert result.counted == 1
    assert result.band == "Outstanding"


# ------------------------
# Filtering
# ------------------------

@pytest.mark.parametrize(
    "entry",
    [
        CourseEntry(name="   ", credits=3, grade="A"),
        CourseEntry(name="Maths", credits=-2, grade="A"),
        CourseEntry(name="Maths", credits=float("nan"), grade="A"),
        CourseEntry(name="Maths", credits=float("inf"), grade="A"),
        CourseEntry(name="Maths", credits=np.inf, grade="A"),
        CourseEntry(name="Maths", credits=3, grade=""),
        CourseEntry(name="Maths", credits=3, grade="E"),
        CourseEntry(name="Maths", credits=3, grade="a"),
        CourseEntry(name="Maths", credits="3", grade="A"),
        CourseEntry(name=None, credits=3, grade="A"),
    ],
)
def test_incomplete_entries(entry):
    assert not is_complete(entry)
    assert compute_sgpa([entry]) == ComputationResult()


def test_name_with_surrounding_whitespace_is_complete():
    assert is_complete(course(3, "B", name="  Physics "))


def test_numpy_credits_are_accepted():
    assert is_complete(course(np.int64(3), "B"))
    assert is_complete(course(np.float64(2.5), "B"))


def test_empty_list_has_no_value():
    result = compute_sgpa([])
    assert result.value is None
    assert result.counted == 0
    assert result.total_credits == 0


def test_complete_entries_keeps_order():
    first, blank, second = course(3, "A"), course(0, "A"), course(2, "C")
    assert complete_entries([first, blank, second]) == [first, second]


# ------------------------
# Properties
# ------------------------

def test_order_independent():
    entries = [course(4, "A"), course(3, "B+"), course(2, "D"), course(1, "F")]
    forward = compute_sgpa(entries)
    backward = compute_sgpa(list(reversed(entries)))
    assert forward.value == backward.value


def test_idempotent():
    entries = [course(4, "A"), course(3, "B+")]
    assert compute_sgpa(entries) == compute_sgpa(entries)


def test_does_not_mutate_input():
    entries = [course(4, "A"), course(0, "B")]
    before = [(e.id, e.name, e.credits, e.grade) for e in entries]
    compute_sgpa(entries)
    assert [(e.id, e.name, e.credits, e.grade) for e in entries] == before


def test_accepts_a_generator():
    assert compute_sgpa(course(c, "B") for c in (1, 2, 3)).value == 7.0


def test_rounds_once_at_the_end():
    # 9*1 + 8*1 + 8*1 = 25 over 3 credits = 8.333...
    assert compute_sgpa([course(1, "A"), course(1, "B+"), course(1, "B+")]).value == 8.33
    # 10*2 + 4*1 = 24 over 3 credits = 8.0
    assert compute_sgpa([course(2, "A+"), course(1, "D")]).value == 8.0


def test_round_2dp_half_up():
    assert round_2dp_half_up(8.575) == 8.58
    assert round_2dp_half_up(8.565) == 8.57
    assert round_2dp_half_up(8.5749) == 8.57
    assert round_2dp_half_up(10.0) == 10.0


def test_weighted_mean():
    mean, total, points = weighted_mean(np.array([[9.0, 4.0], [8.0, 3.0]]))
    assert mean == pytest.approx(60 / 7)
    assert total == 7.0
    assert points == 60.0


def test_weighted_mean_empty():
    mean, total, points = weighted_mean(np.zeros((0, 2)))
    assert math.isnan(mean)
    assert total == 0.0
    assert points == 0.0


def test_weighted_mean_zero_credits():
    mean, total, _ = weighted_mean(np.array([[9.0, 0.0]]))
    assert math.isnan(mean)
    assert total == 0.0


def test_infinite_credits_do_not_poison_the_result():
    result = compute_sgpa([course(float("inf"), "A"), course(4, "A"), course(3, "B+")])
    assert result.value == 8.57
    assert result.counted == 2


# ------------------------
# Bands
# ------------------------

@pytest.mark.parametrize(
    "value, band",
    [
        (10.0, "Outstanding"),
        (9.0, "Outstanding"),
        (8.99, "Excellent"),
        (8.0, "Excellent"),
        (7.5, "Very Good"),
        (6.0, "Good"),
        (5.01, "Average"),
        (4.0, "Below Average"),
        (3.99, "Poor"),
        (0.0, "Poor"),
        (-1.0, "Poor"),
        (12.0, "Outstanding"),
    ],
)
def test_classify(value, band):
    assert classify(value) == band


def test_classify_is_monotonic():
    values = [x / 100 for x in range(0, 1001)]
    ranks = [BAND_ORDER[classify(v)] for v in values]
    assert all(a >= b for a, b in zip(ranks, ranks[1:]))
