"""
Interpolation Errors

Exceptions raised when sample data or queries break the contract of the
interpolators. All of them are ValueErrors so callers that already handle
bad input keep working.
"""

from typing import Optional


class InterpolationError(ValueError):
    """Base class for invalid interpolation input"""


class DimensionMismatchError(InterpolationError):
    """Paired sequences differ in length"""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Dimension mismatch: expected {expected} values, got {actual}")


class InsufficientPointsError(InterpolationError):
    """Fewer samples than the interpolation method needs"""

    def __init__(self, minimum: int, actual: int, message: Optional[str] = None):
        self.minimum = minimum
        self.actual = actual
        super().__init__(message or f"Number of points is too small: need at least {minimum}, got {actual}")


class InsufficientKnotsError(InsufficientPointsError):
    """A piecewise spline was given fewer than two knots"""

    def __init__(self, actual: int):
        super().__init__(2, actual, f"Not enough knots: need at least 2, got {actual}")


class OrderError(InterpolationError):
    """Sequence is not strictly increasing"""

    def __init__(self, index: int, previous: float, value: float):
        self.index = index
        self.previous = previous
        self.value = value
        super().__init__(
            f"Non-monotonic sequence: element {index} ({value}) is not greater than element {index - 1} ({previous})"
        )


class EmptyCoefficientsError(InterpolationError):
    """Polynomial constructed without coefficients"""

    def __init__(self):
        super().__init__("Empty polynomial coefficients array")


class InvalidValueError(InterpolationError):
    """A NaN was met while searching a sequence"""

    def __init__(self, key: float):
        self.key = key
        super().__init__(f"Invalid number encountered in binary search: {key}")
