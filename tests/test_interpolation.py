"""Test the interpolator constructors."""

import math

import numpy as np
import pytest
from uniinterp.processing import (
    MINIMUM_POINTS,
    DimensionMismatchError,
    InsufficientPointsError,
    InterpolationMethod,
    InvalidValueError,
    OrderError,
    compute_cubic_coefficients,
    create_akima_spline_interpolator,
    create_cubic_spline_interpolator,
    create_interpolator,
    create_linear_interpolator,
    create_nearest_neighbor_interpolator,
    get_interpolation_method,
    interpolate_hermite_sorted,
    supports_derivative,
)

CONSTRUCTORS = (
    create_nearest_neighbor_interpolator,
    create_linear_interpolator,
    create_cubic_spline_interpolator,
    create_akima_spline_interpolator,
)


def random_samples(n: int, seed: int = 0):
    """Sorted random sample positions with random values."""
    rng = np.random.default_rng(seed)
    x = np.cumsum(rng.uniform(0.1, 1.0, n)) - 2.0
    y = rng.uniform(-5.0, 5.0, n)
    return x, y


@pytest.mark.parametrize("constructor", CONSTRUCTORS)
def test_order_violation(constructor):
    """Check repeated x values are refused by every constructor."""
    with pytest.raises(OrderError):
        constructor([1.0, 1.0, 2.0, 3.0, 4.0], [0.0, 1.0, 2.0, 3.0, 4.0])


@pytest.mark.parametrize("constructor", CONSTRUCTORS)
def test_order_violation_three_points(constructor):
    """Check x = [1, 1, 2] is refused before the point count is considered."""
    with pytest.raises(OrderError):
        constructor([1.0, 1.0, 2.0], [0.0, 1.0, 2.0])


@pytest.mark.parametrize("constructor", CONSTRUCTORS)
def test_dimension_mismatch(constructor):
    """Check x and y of different lengths are refused."""
    with pytest.raises(DimensionMismatchError):
        constructor([0.0, 1.0, 2.0], [0.0, 1.0, 2.0, 3.0])


@pytest.mark.parametrize(
    "constructor,minimum",
    (
        (create_linear_interpolator, 2),
        (create_cubic_spline_interpolator, 3),
        (create_akima_spline_interpolator, 5),
    ),
)
def test_insufficient_points(constructor, minimum: int):
    """Check each method's minimum number of points."""
    x = np.arange(minimum - 1, dtype=np.float64)
    with pytest.raises(InsufficientPointsError) as excinfo:
        constructor(x, x)
    assert excinfo.value.minimum == minimum
    constructor(np.arange(minimum, dtype=np.float64), np.arange(minimum, dtype=np.float64))


@pytest.mark.parametrize("constructor", CONSTRUCTORS)
@pytest.mark.parametrize("n", (5, 8, 50))
def test_reproduces_samples(constructor, n: int):
    """Check every interpolator passes through the sample points."""
    x, y = random_samples(n, seed=n)
    f = constructor(x, y)
    for xi, yi in zip(x, y):
        assert f(xi) == pytest.approx(yi, abs=1e-12)


@pytest.mark.parametrize("constructor", CONSTRUCTORS)
def test_inputs_are_copied(constructor):
    """Check changing the caller's arrays does not change the interpolator."""
    x, y = random_samples(6)
    f = constructor(x, y)
    q = 0.5 * (x[2] + x[3]) + 0.01
    before = f(q)
    x[:] = np.arange(6.0)
    y[:] = 0.0
    assert f(q) == before


def test_nearest_empty():
    """Check an empty sample set gives NaN everywhere."""
    f = create_nearest_neighbor_interpolator([], [])
    assert math.isnan(f(0.0))
    assert math.isnan(f(-1e9))


def test_nearest_single():
    """Check a single sample gives its value everywhere."""
    f = create_nearest_neighbor_interpolator([2.0], [7.5])
    assert f(-100.0) == 7.5
    assert f(2.0) == 7.5
    assert f(1e6) == 7.5


def test_nearest_values():
    """Check closest sample selection, range ends and the midpoint tie."""
    f = create_nearest_neighbor_interpolator([0.0, 1.0, 3.0], [10.0, 20.0, 30.0])
    assert f(-1.0) == 10.0
    assert f(0.49) == 10.0
    assert f(0.5) == 20.0  # midpoint goes right
    assert f(1.0) == 20.0
    assert f(1.99) == 20.0
    assert f(2.0) == 30.0  # midpoint goes right
    assert f(9.0) == 30.0


def test_nearest_nan_query():
    """Check a NaN query is reported."""
    f = create_nearest_neighbor_interpolator([0.0, 1.0], [1.0, 2.0])
    with pytest.raises(InvalidValueError):
        f(float("nan"))


def test_linear_example():
    """Check the midpoint of a single segment."""
    assert create_linear_interpolator([0.0, 2.0], [0.0, 10.0])(1.0) == 5.0


def test_linear_blend():
    """Check linear interpolation equals the exact blend on every interval."""
    x, y = random_samples(12, seed=3)
    f = create_linear_interpolator(x, y)
    for i in range(len(x) - 1):
        for q in np.linspace(x[i], x[i + 1], 7):
            expected = y[i] + (q - x[i]) * (y[i + 1] - y[i]) / (x[i + 1] - x[i])
            assert f(q) == pytest.approx(expected)
    assert f(x[-1] + 1.0) == pytest.approx(np.interp(x[-1], x, y) + (y[-1] - y[-2]) / (x[-1] - x[-2]))


def test_linear_extrapolates():
    """Check queries outside the samples continue the boundary lines."""
    f = create_linear_interpolator([0.0, 1.0, 2.0], [0.0, 1.0, 3.0])
    assert f(-1.0) == -1.0
    assert f(3.0) == 5.0


def test_cubic_coefficients_shape():
    """Check the solver returns one entry per interval."""
    x, y = random_samples(9)
    b, c, d = compute_cubic_coefficients(x, y)
    assert b.shape == c.shape == d.shape == (8,)
    # Natural boundary: zero second derivative at the first knot
    assert c[0] == 0.0


def test_cubic_natural_end():
    """Check the second derivative vanishes at the last knot."""
    x, y = random_samples(10, seed=5)
    second = create_cubic_spline_interpolator(x, y).derivative().derivative()
    assert second(x[0]) == pytest.approx(0.0, abs=1e-10)
    assert second(x[-1]) == pytest.approx(0.0, abs=1e-9)


def test_cubic_exact_for_lines():
    """Check a natural cubic spline reproduces a straight line."""
    x = np.array([0.0, 0.3, 1.1, 2.0, 3.7])
    f = create_cubic_spline_interpolator(x, 2.0 * x - 1.0)
    for q in np.linspace(-1.0, 5.0, 25):
        assert f(q) == pytest.approx(2.0 * q - 1.0, abs=1e-9)


@pytest.mark.parametrize("n", (3, 6, 20))
def test_cubic_c2_continuity(n: int):
    """Check value, slope and curvature agree across every interior knot."""
    x, y = random_samples(n, seed=11 * n)
    f = create_cubic_spline_interpolator(x, y)
    polys = f.polynomials
    for i in range(1, n - 1):
        left = polys[i - 1]
        right = polys[i]
        h = x[i] - x[i - 1]
        assert left(h) == pytest.approx(right(0.0), abs=1e-9)
        assert left.derivative()(h) == pytest.approx(right.derivative()(0.0), abs=1e-8)
        assert left.derivative().derivative()(h) == pytest.approx(
            right.derivative().derivative()(0.0), abs=1e-7
        )


@pytest.mark.parametrize("n", (4, 10))
def test_cubic_finite_difference_derivatives(n: int):
    """Check one-sided finite differences agree on both sides of each knot."""
    x = np.linspace(0.0, 2 * np.pi, n)
    f = create_cubic_spline_interpolator(x, np.sin(x))
    eps = 1e-6
    for xi in x[1:-1]:
        d_left = (f(xi) - f(xi - eps)) / eps
        d_right = (f(xi + eps) - f(xi)) / eps
        assert d_left == pytest.approx(d_right, abs=1e-4)
    eps = 1e-4
    for xi in x[1:-1]:
        dd_left = (f(xi) - 2 * f(xi - eps) + f(xi - 2 * eps)) / eps**2
        dd_right = (f(xi + 2 * eps) - 2 * f(xi + eps) + f(xi)) / eps**2
        assert dd_left == pytest.approx(dd_right, abs=1e-2)


def test_akima_example():
    """Check the alternating example is exact at both ends."""
    x = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    y = [0.0, 1.0, 0.0, 1.0, 0.0, 1.0, 0.0]
    f = create_akima_spline_interpolator(x, y)
    assert f(0.0) == 0.0
    assert f(6.0) == 0.0


@pytest.mark.parametrize("n", (5, 9, 30))
def test_akima_continuity(n: int):
    """Check value and slope agree across every interior knot."""
    x, y = random_samples(n, seed=n + 1)
    f = create_akima_spline_interpolator(x, y)
    polys = f.polynomials
    for i in range(1, n - 1):
        h = x[i] - x[i - 1]
        assert polys[i - 1](h) == pytest.approx(polys[i](0.0), abs=1e-9)
        assert polys[i - 1].derivative()(h) == pytest.approx(polys[i].derivative()(0.0), abs=1e-7)


def test_akima_flat_regions():
    """Check flat data with zero weights stays flat and finite."""
    x = np.arange(8, dtype=np.float64)
    f = create_akima_spline_interpolator(x, np.full(8, 3.0))
    for q in np.linspace(-1.0, 8.0, 19):
        assert f(q) == pytest.approx(3.0)


def test_akima_exact_for_lines():
    """Check Akima reproduces a straight line."""
    x = np.array([0.0, 0.5, 1.5, 2.0, 3.5, 4.0])
    f = create_akima_spline_interpolator(x, 3.0 * x + 2.0)
    for q in np.linspace(0.0, 4.0, 17):
        assert f(q) == pytest.approx(3.0 * q + 2.0)


def test_akima_no_overshoot_near_step():
    """Check a step does not ring on the flat parts, unlike the cubic spline."""
    x = np.arange(10, dtype=np.float64)
    y = np.where(x < 5, 0.0, 1.0)
    akima = create_akima_spline_interpolator(x, y)
    cubic = create_cubic_spline_interpolator(x, y)
    flat = np.linspace(1.0, 3.0, 21)
    assert max(abs(akima(q)) for q in flat) == pytest.approx(0.0, abs=1e-12)
    assert max(abs(cubic(q)) for q in flat) > 1e-3


def test_hermite_matches_derivatives():
    """Check a Hermite spline honours the given values and slopes."""
    x = np.array([0.0, 1.0, 2.5])
    y = np.array([1.0, -1.0, 2.0])
    fd = np.array([0.5, 0.0, -2.0])
    spl = interpolate_hermite_sorted(x, y, fd)
    deriv = spl.derivative()
    for xi, yi, di in zip(x, y, fd):
        assert spl(xi) == pytest.approx(yi)
        assert deriv(xi) == pytest.approx(di)
    with pytest.raises(DimensionMismatchError):
        interpolate_hermite_sorted(x, y, fd[:2])


def test_create_interpolator_dispatch():
    """Check the registry builds the same interpolator as the direct constructor."""
    x, y = random_samples(7)
    q = np.linspace(x[0] - 1, x[-1] + 1, 15)
    pairs = (
        ("nearest", create_nearest_neighbor_interpolator),
        (InterpolationMethod.LINEAR, create_linear_interpolator),
        ("cubic_spline", create_cubic_spline_interpolator),
        (InterpolationMethod.AKIMA, create_akima_spline_interpolator),
    )
    for method, constructor in pairs:
        f = create_interpolator(x, y, method)
        g = constructor(x, y)
        assert [f(v) for v in q] == [g(v) for v in q]
    with pytest.raises(ValueError):
        create_interpolator(x, y, "quintic")


def test_method_lookup():
    """Check lenient lookup and method properties."""
    assert get_interpolation_method("akima") is InterpolationMethod.AKIMA
    assert get_interpolation_method("unknown") is InterpolationMethod.CUBIC_SPLINE
    assert MINIMUM_POINTS[InterpolationMethod.AKIMA] == 5
    assert not supports_derivative("nearest")
    assert supports_derivative(InterpolationMethod.LINEAR)
