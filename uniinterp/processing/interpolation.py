"""
Univariate Interpolation Module

Provides nearest-neighbor, linear, natural cubic spline and Akima spline
interpolation of sampled data, plus a batch evaluator for cubic splines that
works on many query points at once.

Every constructor copies its input arrays, so the returned function does not
depend on buffers owned by the caller.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple, Union

import numpy as np

from .arrays import as_sample_array, binary_search, check_strictly_increasing, find_segment
from .errors import DimensionMismatchError, InsufficientPointsError
from .polynomial import PolynomialFunction, PolynomialSplineFunction

logger = logging.getLogger(__name__)

EPSILON = np.finfo(np.float64).eps


class InterpolationMethod(Enum):
    """Available interpolation methods"""
    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC_SPLINE = "cubic_spline"
    AKIMA = "akima"  # Akima spline (reduces oscillation)


MINIMUM_POINTS: Dict[InterpolationMethod, int] = {
    InterpolationMethod.NEAREST: 0,
    InterpolationMethod.LINEAR: 2,
    InterpolationMethod.CUBIC_SPLINE: 3,
    InterpolationMethod.AKIMA: 5,
}


def _validate_samples(x: Sequence[float], y: Sequence[float], minimum: int) -> Tuple[np.ndarray, np.ndarray]:
    """Copy x and y, then check lengths, ordering and point count."""
    x = as_sample_array(x)
    y = as_sample_array(y)
    if len(x) != len(y):
        raise DimensionMismatchError(len(x), len(y), f"Dimension mismatch for x ({len(x)}) and y ({len(y)})")
    check_strictly_increasing(x)
    if len(x) < minimum:
        raise InsufficientPointsError(minimum, len(x))
    return x, y


# ============================================================================
# Nearest Neighbor
# ============================================================================

class NearestNeighborFunction:
    """
    Step function returning the y value of the closest sample.

    A query exactly halfway between two samples takes the right sample.
    With no samples every query gives NaN; with one sample every query
    gives that sample's value.
    """

    def __init__(self, x: np.ndarray, y: np.ndarray):
        self._x = x
        self._y = y

    def __call__(self, x: float) -> float:
        xs, ys = self._x, self._y
        n = len(xs)
        if n == 0:
            return float("nan")
        if n == 1:
            return float(ys[0])

        i = binary_search(xs, x)
        if i >= 0:
            return float(ys[i])
        i = -i - 1
        if i == 0:
            return float(ys[0])
        if i >= n:
            return float(ys[n - 1])

        d = x - xs[i - 1]  # distance from left sample
        w = xs[i] - xs[i - 1]
        return float(ys[i - 1] if d + d < w else ys[i])


def create_nearest_neighbor_interpolator(x: Sequence[float], y: Sequence[float]) -> NearestNeighborFunction:
    """
    Create a nearest neighbor interpolator.

    Args:
        x: Strictly increasing sample positions
        y: Sample values

    Returns:
        Function mapping a query position to the nearest sample's value
    """
    x = as_sample_array(x)
    y = as_sample_array(y)
    if len(x) != len(y):
        raise DimensionMismatchError(len(x), len(y), f"Dimension mismatch for x ({len(x)}) and y ({len(y)})")
    if len(x) >= 2:
        check_strictly_increasing(x)
    return NearestNeighborFunction(x, y)


# ============================================================================
# Linear
# ============================================================================

def create_linear_interpolator(x: Sequence[float], y: Sequence[float]) -> PolynomialSplineFunction:
    """
    Create a piecewise linear interpolator.

    Args:
        x: Strictly increasing sample positions (at least 2)
        y: Sample values

    Returns:
        Spline of degree-1 polynomials, one per interval
    """
    x, y = _validate_samples(x, y, MINIMUM_POINTS[InterpolationMethod.LINEAR])

    # Slope of the lines between the data points
    m = np.diff(y) / np.diff(x)

    polynomials = [PolynomialFunction([y[i], m[i]]) for i in range(len(m))]
    return PolynomialSplineFunction(x, polynomials)


# ============================================================================
# Natural Cubic Spline
# ============================================================================

def compute_cubic_coefficients(x: Sequence[float], y: Sequence[float]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute natural cubic spline coefficients.

    For each interval [x_i, x_{i+1}], the spline is:
    S_i(x) = y_i + b_i(x-x_i) + c_i(x-x_i)^2 + d_i(x-x_i)^3

    The second derivative is zero at both ends (natural boundary). The
    tridiagonal system is solved with a forward sweep and back substitution
    (R.L. Burden, J.D. Faires, Numerical Analysis, 4th Ed., pp 126-131).

    Args:
        x: Strictly increasing sample positions (at least 3)
        y: Sample values

    Returns:
        Tuple (b, c, d) of coefficient arrays, one entry per interval
    """
    x, y = _validate_samples(x, y, MINIMUM_POINTS[InterpolationMethod.CUBIC_SPLINE])

    # Number of intervals
    n = len(x) - 1
    h = np.diff(x)

    # Forward sweep, natural spline: mu[0] = z[0] = 0
    mu = np.zeros(n)
    z = np.zeros(n + 1)
    for i in range(1, n):
        g = 2 * (x[i+1] - x[i-1]) - h[i-1] * mu[i-1]
        mu[i] = h[i] / g
        z[i] = (3 * (y[i+1] * h[i-1] - y[i] * (x[i+1] - x[i-1]) + y[i-1] * h[i]) /
                (h[i-1] * h[i]) - h[i-1] * z[i-1]) / g

    # Back substitution, natural spline: c[n] = z[n] = 0
    b = np.zeros(n)
    c = np.zeros(n + 1)
    d = np.zeros(n)
    for j in range(n - 1, -1, -1):
        c[j] = z[j] - mu[j] * c[j+1]
        b[j] = (y[j+1] - y[j]) / h[j] - h[j] * (c[j+1] + 2 * c[j]) / 3
        d[j] = (c[j+1] - c[j]) / (3 * h[j])

    return b, c[:n], d


def create_cubic_spline_interpolator(x: Sequence[float], y: Sequence[float]) -> PolynomialSplineFunction:
    """
    Create a natural cubic spline interpolator.

    Adjacent polynomials match in value, first and second derivative at the
    knots (C2 continuity), and the second derivative is zero at both ends.

    Args:
        x: Strictly increasing sample positions (at least 3)
        y: Sample values

    Returns:
        Spline of cubic polynomials, one per interval
    """
    x = as_sample_array(x)
    y = as_sample_array(y)
    b, c, d = compute_cubic_coefficients(x, y)

    polynomials = [
        PolynomialFunction([y[i], b[i], c[i], d[i]])
        for i in range(len(b))
    ]
    return PolynomialSplineFunction(x, polynomials)


def cubic_spline_interpolate(x: Sequence[float], y: Sequence[float], xq: Sequence[float]) -> np.ndarray:
    """
    Evaluate a natural cubic spline at many query points.

    Gives the same values as create_cubic_spline_interpolator(x, y) applied
    to each query, but groups the queries by segment and evaluates each
    segment's polynomial once over all of its queries.

    Args:
        x: Strictly increasing sample positions (at least 3)
        y: Sample values
        xq: Query positions, in any order, duplicates allowed

    Returns:
        Interpolated values, aligned with xq
    """
    x = as_sample_array(x)
    y = as_sample_array(y)
    b, c, d = compute_cubic_coefficients(x, y)
    xq = as_sample_array(xq)

    # segment index -> [(query index, query value), ...]
    buckets: Dict[int, List[Tuple[int, float]]] = {}
    for k, q in enumerate(xq):
        buckets.setdefault(find_segment(x, q), []).append((k, q))

    logger.debug(f"Evaluating {len(xq)} query points in {len(buckets)} of {len(b)} segments")

    result = np.empty(len(xq))
    for i, members in buckets.items():
        poly = PolynomialFunction([y[i], b[i], c[i], d[i]])
        indices = np.array([k for k, _ in members], dtype=np.intp)
        values = np.array([q for _, q in members])
        result[indices] = poly(values - x[i])
    return result


# ============================================================================
# Akima Spline
# ============================================================================

def differentiate_three_point(
    x: np.ndarray,
    y: np.ndarray,
    index: int,
    first: int,
    second: int,
    third: int,
) -> float:
    """
    Estimate the derivative at x[index] from the parabola through three samples.

    Args:
        x: Sample positions
        y: Sample values
        index: Index of the point to differentiate at
        first, second, third: Indices of the samples defining the parabola

    Returns:
        Derivative of the parabola at x[index]
    """
    y0 = y[first]
    y1 = y[second]
    y2 = y[third]

    t = x[index] - x[first]
    t1 = x[second] - x[first]
    t2 = x[third] - x[first]

    a = (y2 - y0 - (t2 / t1 * (y1 - y0))) / (t2 * t2 - t1 * t2)
    b = (y1 - y0 - a * t1 * t1) / t1

    return float(2 * a * t + b)


def interpolate_hermite_sorted(
    x: Sequence[float],
    y: Sequence[float],
    first_derivatives: Sequence[float],
) -> PolynomialSplineFunction:
    """
    Build a cubic Hermite spline from values and first derivatives.

    Args:
        x: Strictly increasing sample positions (at least 2)
        y: Sample values
        first_derivatives: First derivative at each sample

    Returns:
        Spline of cubic polynomials matching y and first_derivatives at x
    """
    x, y = _validate_samples(x, y, 2)
    fd = as_sample_array(first_derivatives)
    if len(fd) != len(x):
        raise DimensionMismatchError(
            len(x), len(fd), f"Dimension mismatch for x ({len(x)}) and derivatives ({len(fd)})"
        )

    w = np.diff(x)
    dy = np.diff(y)

    polynomials = []
    for i in range(len(w)):
        polynomials.append(PolynomialFunction([
            y[i],
            fd[i],
            (3 * dy[i] / w[i] - 2 * fd[i] - fd[i+1]) / w[i],
            (2 * -dy[i] / w[i] + fd[i] + fd[i+1]) / (w[i] * w[i]),
        ]))

    return PolynomialSplineFunction(x, polynomials)


def create_akima_spline_interpolator(x: Sequence[float], y: Sequence[float]) -> PolynomialSplineFunction:
    """
    Create an Akima cubic spline interpolator.

    H. Akima, "A New Method of Interpolation and Smooth Curve Fitting Based
    on Local Procedures", J. ACM 17, 4 (1970), 589-602. Derivatives at the
    samples are weighted averages of the neighbouring secant slopes, which
    avoids the overshoot of a global cubic spline near outliers.

    Args:
        x: Strictly increasing sample positions (at least 5)
        y: Sample values

    Returns:
        Spline of cubic polynomials, one per interval
    """
    x, y = _validate_samples(x, y, MINIMUM_POINTS[InterpolationMethod.AKIMA])
    n = len(x)

    differences = np.diff(y) / np.diff(x)
    # weights[k] compares differences[k+1] with differences[k]
    weights = np.abs(np.diff(differences))

    first_derivatives = np.zeros(n)
    for i in range(2, n - 2):
        w_p = weights[i]
        w_m = weights[i - 2]
        if abs(w_p) < EPSILON and abs(w_m) < EPSILON:
            xv = x[i]
            xv_p = x[i + 1]
            xv_m = x[i - 1]
            first_derivatives[i] = ((xv_p - xv) * differences[i - 1] + (xv - xv_m) * differences[i]) / (xv_p - xv_m)
        else:
            first_derivatives[i] = (w_p * differences[i - 1] + w_m * differences[i]) / (w_p + w_m)

    first_derivatives[0] = differentiate_three_point(x, y, 0, 0, 1, 2)
    first_derivatives[1] = differentiate_three_point(x, y, 1, 0, 1, 2)
    first_derivatives[n - 2] = differentiate_three_point(x, y, n - 2, n - 3, n - 2, n - 1)
    first_derivatives[n - 1] = differentiate_three_point(x, y, n - 1, n - 3, n - 2, n - 1)

    return interpolate_hermite_sorted(x, y, first_derivatives)


# ============================================================================
# Method Registry
# ============================================================================

_CONSTRUCTORS: Dict[InterpolationMethod, Callable] = {
    InterpolationMethod.NEAREST: create_nearest_neighbor_interpolator,
    InterpolationMethod.LINEAR: create_linear_interpolator,
    InterpolationMethod.CUBIC_SPLINE: create_cubic_spline_interpolator,
    InterpolationMethod.AKIMA: create_akima_spline_interpolator,
}


def create_interpolator(
    x: Sequence[float],
    y: Sequence[float],
    method: Union[InterpolationMethod, str] = InterpolationMethod.CUBIC_SPLINE,
) -> Callable[[float], float]:
    """
    Create an interpolator for the given method.

    Args:
        x: Strictly increasing sample positions
        y: Sample values
        method: Interpolation method or its name

    Returns:
        Function mapping a query position to an interpolated value

    Raises:
        ValueError: if method is not a known method name
    """
    method = InterpolationMethod(method)
    logger.debug(f"Creating {method.value} interpolator over {len(x)} points")
    return _CONSTRUCTORS[method](x, y)


def supports_derivative(method: Union[InterpolationMethod, str]) -> bool:
    """Whether interpolators of this method expose derivative()."""
    return InterpolationMethod(method) is not InterpolationMethod.NEAREST


def get_interpolation_method(name: str) -> InterpolationMethod:
    """
    Get interpolation method enum from string name.

    Args:
        name: Method name (nearest, linear, cubic_spline, akima)

    Returns:
        InterpolationMethod enum value, cubic spline if the name is unknown
    """
    try:
        return InterpolationMethod(name)
    except ValueError:
        return InterpolationMethod.CUBIC_SPLINE
