"""
uniinterp - Univariate Interpolation

Nearest-neighbor, linear, natural cubic spline and Akima spline
interpolators. The HTTP service lives in uniinterp.api.
"""

from .processing import (
    InterpolationError,
    InterpolationMethod,
    create_akima_spline_interpolator,
    create_cubic_spline_interpolator,
    create_interpolator,
    create_linear_interpolator,
    create_nearest_neighbor_interpolator,
    cubic_spline_interpolate,
)

__version__ = "0.1.0"

__all__ = [
    "InterpolationError",
    "InterpolationMethod",
    "create_akima_spline_interpolator",
    "create_cubic_spline_interpolator",
    "create_interpolator",
    "create_linear_interpolator",
    "create_nearest_neighbor_interpolator",
    "cubic_spline_interpolate",
]
