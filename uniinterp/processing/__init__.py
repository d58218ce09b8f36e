"""
Interpolation Processing Module

Contains the univariate interpolators and the polynomial machinery they share.
"""

from .errors import (
    DimensionMismatchError,
    EmptyCoefficientsError,
    InsufficientKnotsError,
    InsufficientPointsError,
    InterpolationError,
    InvalidValueError,
    OrderError,
)
from .interpolation import (
    MINIMUM_POINTS,
    InterpolationMethod,
    NearestNeighborFunction,
    compute_cubic_coefficients,
    create_akima_spline_interpolator,
    create_cubic_spline_interpolator,
    create_interpolator,
    create_linear_interpolator,
    create_nearest_neighbor_interpolator,
    cubic_spline_interpolate,
    get_interpolation_method,
    interpolate_hermite_sorted,
    supports_derivative,
)
from .polynomial import PolynomialFunction, PolynomialSplineFunction

__all__ = [
    "DimensionMismatchError",
    "EmptyCoefficientsError",
    "InsufficientKnotsError",
    "InsufficientPointsError",
    "InterpolationError",
    "InvalidValueError",
    "OrderError",
    "MINIMUM_POINTS",
    "InterpolationMethod",
    "NearestNeighborFunction",
    "PolynomialFunction",
    "PolynomialSplineFunction",
    "compute_cubic_coefficients",
    "create_akima_spline_interpolator",
    "create_cubic_spline_interpolator",
    "create_interpolator",
    "create_linear_interpolator",
    "create_nearest_neighbor_interpolator",
    "cubic_spline_interpolate",
    "get_interpolation_method",
    "interpolate_hermite_sorted",
    "supports_derivative",
]
