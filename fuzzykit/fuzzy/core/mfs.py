"""Shape factories returning canonical FuzzySet instances."""
from __future__ import annotations
import math
from typing import Callable

from .fuzzyset import FuzzySet, FuzzySetBuilder
from .types import Float, FuzzyConstructionError, XValuesOutOfOrderError

# domyślna liczba próbek krzywych S/Z/Gauss
DEFAULT_CURVE_POINTS = 10

SampleFn = Callable[[Float], Float]   # t in [0, 1] -> y in [0, 1]


def _check_order(*xs: Float) -> None:
    for a, b in zip(xs, xs[1:]):
        if a > b:
            raise XValuesOutOfOrderError(a, b)


def _sampled(left: Float, right: Float, fn: SampleFn, n: int) -> FuzzySet:
    _check_order(left, right)
    if n < 2:
        raise FuzzyConstructionError("a sampled curve needs at least 2 points")
    if left == right:
        return FuzzySet([(left, fn(0.0)), (right, fn(1.0))])
    b = FuzzySetBuilder()
    for i in range(n):
        t = i / (n - 1)
        b.append_point(left + t * (right - left), fn(t))
    return b.build()


def _s_curve(t: Float) -> Float:
    if t <= 0.5: return 2.0 * t * t
    return 1.0 - 2.0 * (1.0 - t) ** 2


def _z_curve(t: Float) -> Float:
    return 1.0 - _s_curve(t)


def _gauss_rise(t: Float) -> Float:
    # t=0 -> 4 sd od środka, t=1 -> środek
    z = 4.0 * (1.0 - t)
    return math.exp(-0.5 * z * z)


def _gauss_fall(t: Float) -> Float:
    return _gauss_rise(1.0 - t)


# ---------- linear shapes ----------

def trapezoid(a: Float, b: Float, c: Float, d: Float) -> FuzzySet:
    _check_order(a, b, c, d)
    return FuzzySet([(a, 0.0), (b, 1.0), (c, 1.0), (d, 0.0)])


def triangle(a: Float, b: Float, c: Float) -> FuzzySet:
    return trapezoid(a, b, b, c)


def triangle_centered(middle: Float, base_width: Float) -> FuzzySet:
    half = base_width / 2.0
    return trapezoid(middle - half, middle, middle, middle + half)


def rectangle(left: Float, right: Float) -> FuzzySet:
    return trapezoid(left, left, right, right)


def singleton(x: Float, height: Float = 1.0) -> FuzzySet:
    return FuzzySet([(x, 0.0), (x, height), (x, 0.0)])


def left_linear(left: Float, right: Float) -> FuzzySet:
    """Rises from 0 at left to 1 at right."""
    _check_order(left, right)
    return FuzzySet([(left, 0.0), (right, 1.0)])


def right_linear(left: Float, right: Float) -> FuzzySet:
    """Falls from 1 at left to 0 at right."""
    _check_order(left, right)
    return FuzzySet([(left, 1.0), (right, 0.0)])


# ---------- sampled curves ----------

def l_shape(left: Float, right: Float, fn: SampleFn, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    return _sampled(left, right, fn, n)


def r_shape(left: Float, right: Float, fn: SampleFn, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    return _sampled(left, right, fn, n)


def lr_shape(a: Float, b: Float, c: Float, d: Float, left_fn: SampleFn, right_fn: SampleFn,
             n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    _check_order(a, b, c, d)
    pts = list(_sampled(a, b, left_fn, n)) + list(_sampled(c, d, right_fn, n))
    return FuzzySet(pts)


def s_shape(left: Float, right: Float, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    return l_shape(left, right, _s_curve, n)


def z_shape(left: Float, right: Float, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    return r_shape(left, right, _z_curve, n)


def pi_shape(center: Float, width: Float, n: int = 5) -> FuzzySet:
    if width < 0:
        raise FuzzyConstructionError("PI shape width must be non-negative")
    return lr_shape(center - width, center, center, center + width, _s_curve, _z_curve, n)


def _check_sd(sd: Float) -> None:
    if sd <= 0:
        raise FuzzyConstructionError(f"standard deviation must be positive, got {sd}")


def gaussian(center: Float, sd: Float, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    _check_sd(sd)
    s = 4.0 * sd
    return lr_shape(center - s, center, center, center + s, _gauss_rise, _gauss_fall, n)


def gaussian_lr(left_center: Float, left_sd: Float, right_center: Float, right_sd: Float,
                n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    _check_sd(left_sd); _check_sd(right_sd)
    return lr_shape(left_center - 4.0 * left_sd, left_center, right_center, right_center + 4.0 * right_sd,
                    _gauss_rise, _gauss_fall, n)


def left_gaussian(center: Float, sd: Float, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    """Rising half of a Gaussian, 1 from the center on."""
    _check_sd(sd)
    return l_shape(center - 4.0 * sd, center, _gauss_rise, n)


def right_gaussian(center: Float, sd: Float, n: int = DEFAULT_CURVE_POINTS) -> FuzzySet:
    """Falling half of a Gaussian, 1 up to the center."""
    _check_sd(sd)
    return r_shape(center, center + 4.0 * sd, _gauss_fall, n)


SHAPES = {
    "singleton": singleton,
    "tri": triangle,
    "trap": trapezoid,
    "rect": rectangle,
    "left": left_linear,
    "right": right_linear,
    "s": s_shape,
    "z": z_shape,
    "pi": pi_shape,
    "gauss": gaussian,
    "lgauss": left_gaussian,
    "rgauss": right_gaussian,
}
