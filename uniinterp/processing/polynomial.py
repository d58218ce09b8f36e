"""
Polynomial and Piecewise Polynomial Functions

Building blocks for the spline interpolators. A spline is a sorted array of
knots together with one polynomial per segment; each polynomial is expressed
relative to the left knot of its segment.
"""

from typing import List, Sequence, Union

import numpy as np

from .arrays import as_sample_array, check_strictly_increasing, find_segment
from .errors import DimensionMismatchError, EmptyCoefficientsError, InsufficientKnotsError

ArrayOrFloat = Union[float, np.ndarray]


class PolynomialFunction:
    """
    Polynomial c[n-1] * x^(n-1) + ... + c[1] * x + c[0].

    Trailing zero coefficients are dropped, so the degree is the index of
    the last non-zero coefficient, or 0 if all are zero.
    """

    def __init__(self, coefficients: Sequence[float]):
        """
        Args:
            coefficients: Coefficients ordered by degree, constant term first
        """
        c = as_sample_array(coefficients)
        n = len(c)
        if n == 0:
            raise EmptyCoefficientsError()
        while n > 1 and c[n - 1] == 0:
            n -= 1
        self._c = c[:n]

    @property
    def degree(self) -> int:
        return len(self._c) - 1

    @property
    def coefficients(self) -> np.ndarray:
        return self._c.copy()

    def __call__(self, x: ArrayOrFloat) -> ArrayOrFloat:
        """Evaluate with Horner's method. Accepts scalars or numpy arrays."""
        c = self._c
        v = c[-1]
        for i in range(len(c) - 2, -1, -1):
            v = x * v + c[i]
        if np.ndim(x) and np.ndim(v) == 0:
            # constant polynomial evaluated over an array
            v = np.full(np.shape(x), v)
        return v

    def derivative(self) -> "PolynomialFunction":
        """Return the first derivative as a new polynomial."""
        if len(self._c) == 1:
            return PolynomialFunction([0.0])
        return PolynomialFunction(self._c[1:] * np.arange(1, len(self._c)))

    def __repr__(self) -> str:
        return f"PolynomialFunction({self._c.tolist()})"


class PolynomialSplineFunction:
    """
    Piecewise polynomial function over a sorted set of knots.

    The value at x is polynomials[i](x - knots[i]) where i is the segment
    containing x. Queries below the first knot or above the last knot use
    the first or last segment.
    """

    def __init__(self, knots: Sequence[float], polynomials: Sequence[PolynomialFunction]):
        """
        Args:
            knots: Strictly increasing segment delimiters (copied)
            polynomials: One polynomial per segment, len(knots) - 1 in total
        """
        knots = as_sample_array(knots)
        if len(knots) < 2:
            raise InsufficientKnotsError(len(knots))
        if len(knots) - 1 != len(polynomials):
            raise DimensionMismatchError(
                len(knots) - 1,
                len(polynomials),
                f"Dimension mismatch: {len(knots)} knots need {len(knots) - 1} polynomials, got {len(polynomials)}",
            )
        check_strictly_increasing(knots)
        self._knots = knots
        self._polynomials = tuple(polynomials)

    @property
    def knots(self) -> np.ndarray:
        return self._knots.copy()

    @property
    def polynomials(self) -> List[PolynomialFunction]:
        return list(self._polynomials)

    @property
    def segment_count(self) -> int:
        return len(self._polynomials)

    def segment_index(self, x: float) -> int:
        """Index of the segment used to evaluate x."""
        return find_segment(self._knots, x)

    def __call__(self, x: float) -> float:
        i = find_segment(self._knots, x)
        return float(self._polynomials[i](x - self._knots[i]))

    def derivative(self) -> "PolynomialSplineFunction":
        """Return the spline made of the segment derivatives."""
        return PolynomialSplineFunction(
            self._knots, [p.derivative() for p in self._polynomials]
        )
