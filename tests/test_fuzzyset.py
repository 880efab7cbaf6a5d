"""Tests for FuzzySet construction, algebra, alpha-cuts and defuzzification."""

import random

import pytest

from fuzzykit.fuzzy.core import mfs
from fuzzykit.fuzzy.core.fuzzyset import FuzzySet, FuzzySetBuilder
from fuzzykit.fuzzy.core.interval import Interval
from fuzzykit.fuzzy.io.plot import plot_fuzzy_set
from fuzzykit.fuzzy.core.types import (
    STRONG, WEAK, InvalidDefuzzifyError, NoXValueForMembershipError, XValuesOutOfOrderError,
    YValueOutOfRangeError,
)

SAMPLES = [-5.0, 0.0, 2.5, 5.0, 7.5, 10.0, 12.5, 15.0, 20.0]


@pytest.fixture
def a() -> FuzzySet:
    return mfs.triangle(0, 5, 10)


@pytest.fixture
def b() -> FuzzySet:
    return mfs.triangle(5, 10, 15)


def test_points_are_validated() -> None:
    with pytest.raises(XValuesOutOfOrderError):
        FuzzySet([(1, 0), (0, 1)])
    with pytest.raises(YValueOutOfRangeError):
        FuzzySet([(0, 0), (1, 1.5)])


def test_vertical_segment_takes_largest_membership() -> None:
    step = FuzzySet([(0, 0), (0, 1), (1, 1)])

    assert step.points == ((0.0, 0.0), (0.0, 1.0))
    assert step.membership(0) == 1.0
    assert step.membership(0.5) == 1.0
    assert step.membership(-1) == 0.0


def test_redundant_points_are_dropped() -> None:
    assert len(FuzzySet([(0, 0), (1, 0.5), (2, 1)])) == 2
    assert FuzzySet([(0, 0), (1, 0), (2, 1)]).points == ((1.0, 0.0), (2.0, 1.0))
    assert len(FuzzySet([(0, 0.3), (0, 0.3), (4, 0.3)])) == 1


def test_membership_interpolates_and_extends_flat(a: FuzzySet) -> None:
    assert a.membership(2.5) == pytest.approx(0.5)
    assert a.membership(5) == 1.0
    assert a.membership(-100) == 0.0
    assert mfs.left_linear(0, 10).membership(50) == 1.0


def test_is_empty() -> None:
    assert FuzzySet().is_empty()
    assert FuzzySet([(0, 0), (1, 0)]).is_empty()
    assert not mfs.triangle(0, 1, 2).is_empty()


def test_complement_is_an_involution(a: FuzzySet) -> None:
    assert a.complement().complement() == a
    assert a.complement().membership(2.5) == pytest.approx(0.5)


def test_union_and_intersection_are_pointwise(a: FuzzySet, b: FuzzySet) -> None:
    union = a.union(b)
    inter = a.intersection(b)

    for x in SAMPLES:
        assert union.membership(x) == pytest.approx(max(a.membership(x), b.membership(x)))
        assert inter.membership(x) == pytest.approx(min(a.membership(x), b.membership(x)))
    assert union == b.union(a)
    assert inter == b.intersection(a)
    assert inter.max_y == pytest.approx(0.5)


def test_fuzzy_sum_at_aligned_breakpoints(a: FuzzySet) -> None:
    half = FuzzySet.constant(0.5)
    total = a.fuzzy_sum(half)

    assert total.membership(0) == pytest.approx(0.5)
    assert total.membership(2.5) == pytest.approx(0.75)
    assert total.membership(5) == pytest.approx(1.0)
    assert total == half.fuzzy_sum(a)


def test_horizontal_operations() -> None:
    tri = mfs.triangle(0, 10, 20)
    clipped = tri.horizontal_intersection(0.5)
    raised = tri.horizontal_union(0.3)

    assert clipped.max_y == pytest.approx(0.5)
    assert clipped.membership(2.5) == pytest.approx(0.25)
    assert clipped.membership(10) == pytest.approx(0.5)
    assert raised.membership(0) == pytest.approx(0.3)
    assert raised.membership(10) == 1.0
    assert tri.horizontal_union(0) == tri


def test_scale_multiply_and_normalize() -> None:
    tri = mfs.triangle(0, 10, 20)

    assert tri.scale(0.5).membership(5) == pytest.approx(0.25)
    assert tri.scale(1.0) == tri
    assert tri.scale(0.0).is_empty()
    assert tri.multiply(0.5) == tri.scale(0.5)
    assert FuzzySet([(0, 0), (1, 0.5), (2, 0)]).normalize().max_y == 1.0


def test_confine_to_bounds_drops_to_zero_at_cut() -> None:
    cut = mfs.triangle(0, 10, 20).confine_to_bounds(5, 15)

    assert cut.membership(5) == pytest.approx(0.5)
    assert cut.membership(10) == 1.0
    assert cut.membership(4) == 0.0
    assert cut.membership(16) == 0.0
    assert cut.xs[0] == 5 and cut.xs[-1] == 15


def test_alpha_cuts() -> None:
    tri = mfs.triangle(0, 10, 20)

    weak = tri.alpha_cut(WEAK, 0.5)
    strong = tri.alpha_cut(STRONG, 0.5)

    assert len(weak) == 1
    assert weak[0] == Interval(5, 15)
    assert str(weak) == "[5, 15]"
    assert strong[0] == Interval(5, 15, True, True)
    assert tri.support()[0] == Interval(0, 20, True, True)


def test_alpha_cut_of_two_peaks() -> None:
    twin = mfs.triangle(0, 2, 4).union(mfs.triangle(6, 8, 10))
    cut = twin.alpha_cut(WEAK, 0.5, 0, 10)

    assert [(iv.low, iv.high) for iv in cut] == [
        (pytest.approx(1), pytest.approx(3)), (pytest.approx(7), pytest.approx(9))]


def test_alpha_cut_at_subnormal_peak_height() -> None:
    fs = FuzzySet([(2.045098885474434, 0), (6.357732303347258, 0.30331272607892745), (7.619736549801657, 0)])

    cut = fs.alpha_cut(WEAK, fs.max_y, 0, 10)

    assert len(cut) == 1
    assert cut[0].low == cut[0].high == 6.357732303347258


def test_alpha_cut_of_random_triangles_at_their_peak() -> None:
    rng = random.Random(7)
    for _ in range(500):
        a = rng.uniform(0, 4)
        b = rng.uniform(a + 0.01, 8)
        c = rng.uniform(b + 0.01, 10)
        fs = FuzzySet([(a, 0.0), (b, rng.uniform(0.05, 0.95)), (c, 0.0)])

        cut = fs.alpha_cut(WEAK, fs.max_y, 0, 10)

        assert len(cut) == 1
        assert cut[0].low <= b <= cut[0].high


def test_x_for_membership() -> None:
    tri = mfs.triangle(0, 10, 20)

    assert tri.x_for_membership(0.5) == pytest.approx(5)
    assert tri.x_for_membership(1.0) == pytest.approx(10)
    with pytest.raises(NoXValueForMembershipError):
        tri.horizontal_intersection(0.5).x_for_membership(0.8)


def test_shape_predicates() -> None:
    tri = mfs.triangle(0, 2, 4)
    twin = tri.union(mfs.triangle(6, 8, 10))

    assert tri.is_normal() and tri.is_convex()
    assert not twin.is_convex()
    assert not tri.horizontal_intersection(0.5).is_normal()
    assert mfs.left_linear(1, 2).is_monotonic()
    assert not tri.is_monotonic()


def test_intersection_tests_are_distinct() -> None:
    left = mfs.triangle(0, 1, 2)
    touching = mfs.triangle(2, 3, 4)
    apart = mfs.triangle(3, 4, 5)

    assert left.non_intersection_test(touching)
    assert not left.no_intersection_test(touching)
    assert left.non_intersection_test(apart)
    assert left.no_intersection_test(apart)
    assert not left.non_intersection_test(mfs.triangle(1, 2, 3))


def test_defuzzification_of_symmetric_triangle(a: FuzzySet) -> None:
    assert a.moment_defuzzify(0, 10) == pytest.approx(5.0)
    assert a.center_of_area_defuzzify(0, 10) == pytest.approx(5.0)
    assert a.maximum_defuzzify(0, 10) == pytest.approx(5.0)
    assert a.weighted_average_defuzzify(0, 10) == pytest.approx(5.0)
    assert a.area(0, 10) == pytest.approx(5.0)


def test_defuzzification_of_ramp() -> None:
    ramp = mfs.left_linear(0, 10)

    assert ramp.moment_defuzzify(0, 10) == pytest.approx(20.0 / 3.0)
    assert ramp.center_of_area_defuzzify(0, 10) == pytest.approx(50 ** 0.5)
    assert mfs.trapezoid(0, 2, 4, 10).maximum_defuzzify(0, 10) == pytest.approx(3.0)


def test_zero_area_cannot_be_defuzzified() -> None:
    with pytest.raises(InvalidDefuzzifyError):
        FuzzySet().moment_defuzzify(0, 10)
    with pytest.raises(InvalidDefuzzifyError):
        FuzzySet.constant(0.0).center_of_area_defuzzify(0, 10)
    with pytest.raises(InvalidDefuzzifyError):
        FuzzySet.constant(0.0).maximum_defuzzify(0, 10)


def test_builder() -> None:
    builder = FuzzySetBuilder([(0, 0), (10, 0)])
    builder.insert_point(5, 1)

    assert len(builder) == 3
    assert builder.build() == mfs.triangle(0, 5, 10)
    with pytest.raises(XValuesOutOfOrderError):
        builder.append_point(1, 0)


def test_text_form() -> None:
    assert str(FuzzySet([(0, 0), (1, 1)])) == "{ 0.00/0.00 1.00/1.00 }"


def test_plot_of_a_single_set() -> None:
    lines = plot_fuzzy_set(mfs.triangle(0, 10, 20), 0, 20, "tri").splitlines()

    assert lines[0] == "tri"
    assert lines[2].startswith("1.00 |") and "*" in lines[2]
    assert lines[-2] == "     +" + "-" * 51
