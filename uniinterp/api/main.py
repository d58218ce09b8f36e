"""
uniinterp API
FastAPI service for evaluating univariate interpolators over HTTP

Features:
- Nearest-neighbor, linear, natural cubic spline and Akima interpolation
- Batch cubic spline evaluation for large query sets
- Derivatives of the spline interpolants
- Consistent error responses for invalid sample data
"""

import logging
import math
import os
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from .. import __version__
from ..processing import (
    MINIMUM_POINTS,
    InterpolationError,
    InterpolationMethod,
    create_interpolator,
    cubic_spline_interpolate,
    supports_derivative,
)

logging.basicConfig(level=os.getenv("UNIINTERP_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="uniinterp API",
    description="Univariate interpolation service: nearest-neighbor, linear, natural cubic spline and Akima spline",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Get allowed origins from environment, with safe defaults for development
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Limits
MAX_SAMPLE_POINTS = int(os.getenv("UNIINTERP_MAX_SAMPLE_POINTS", "100000"))
MAX_QUERY_POINTS = int(os.getenv("UNIINTERP_MAX_QUERY_POINTS", "100000"))


# ============================================================================
# Pydantic Models
# ============================================================================

class InterpolationMethodEnum(str, Enum):
    """Available interpolation methods"""
    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC_SPLINE = "cubic_spline"
    AKIMA = "akima"


class SampleQuery(BaseModel):
    """Sample points and query positions"""
    x: List[float] = Field(..., description="Strictly increasing sample positions")
    y: List[float] = Field(..., description="Sample values, same length as x")
    xq: List[float] = Field(..., description="Query positions, any order")

    @field_validator("x", "y")
    @classmethod
    def check_sample_size(cls, v: List[float]) -> List[float]:
        if len(v) > MAX_SAMPLE_POINTS:
            raise ValueError(f"At most {MAX_SAMPLE_POINTS} sample points are supported")
        return v

    @field_validator("xq")
    @classmethod
    def check_query_size(cls, v: List[float]) -> List[float]:
        if len(v) > MAX_QUERY_POINTS:
            raise ValueError(f"At most {MAX_QUERY_POINTS} query points are supported")
        return v


class InterpolationRequest(SampleQuery):
    """Interpolation request for a single method"""
    method: InterpolationMethodEnum = Field(
        InterpolationMethodEnum.CUBIC_SPLINE,
        description="Interpolation method to use"
    )


class InterpolationResult(BaseModel):
    """Interpolated values"""
    method: str
    points: int = Field(..., description="Number of query points")
    values: List[Optional[float]] = Field(..., description="Interpolated values, null where not finite")


class DerivativeResult(BaseModel):
    """First derivatives of the interpolant"""
    method: str
    points: int
    derivatives: List[Optional[float]]


class MethodInfo(BaseModel):
    """Interpolation method description"""
    method: str
    minimum_points: int
    supports_derivative: bool


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: str
    status_code: int


# ============================================================================
# Helpers
# ============================================================================

def to_json_values(values) -> List[Optional[float]]:
    """Convert floats to JSON-safe values, mapping NaN and infinities to None"""
    return [float(v) if math.isfinite(v) else None for v in values]


def evaluate(request: SampleQuery, method: InterpolationMethod) -> List[Optional[float]]:
    """Evaluate the interpolant of the request's samples at its query points"""
    if method is InterpolationMethod.CUBIC_SPLINE:
        return to_json_values(cubic_spline_interpolate(request.x, request.y, request.xq))

    interpolator = create_interpolator(request.x, request.y, method)
    return to_json_values(interpolator(q) for q in request.xq)


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Custom HTTP exception handler with consistent format"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "HTTPException",
            "detail": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(InterpolationError)
async def interpolation_error_handler(request, exc: InterpolationError):
    """Handle invalid sample data or queries"""
    logger.warning(f"Rejected interpolation input: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "error": type(exc).__name__,
            "detail": str(exc),
            "status_code": 400
        }
    )


@app.exception_handler(ValueError)
async def value_error_handler(request, exc: ValueError):
    """Handle value errors"""
    logger.warning(f"Value error: {str(exc)}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "ValueError",
            "detail": "Invalid input provided",
            "status_code": 400
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected errors"""
    logger.error(f"Unexpected error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "detail": "An unexpected error occurred. Please try again later.",
            "status_code": 500
        }
    )


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/", tags=["General"])
async def root():
    """API root endpoint"""
    return {
        "message": "uniinterp API - Univariate Interpolation",
        "version": __version__,
        "documentation": "/docs",
        "endpoints": {
            "health": "/api/health",
            "methods": "/api/methods",
            "interpolate": "/api/interpolate",
            "derivative": "/api/interpolate/derivative",
            "compare": "/api/interpolate/compare",
        }
    }


@app.get("/api/health", tags=["General"])
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": __version__,
        "interpolation_methods": [m.value for m in InterpolationMethodEnum],
    }


@app.get("/api/methods", response_model=Dict[str, List[MethodInfo]], tags=["General"])
async def get_methods():
    """List interpolation methods with their minimum number of sample points"""
    return {
        "methods": [
            MethodInfo(
                method=m.value,
                minimum_points=MINIMUM_POINTS[m],
                supports_derivative=supports_derivative(m),
            )
            for m in InterpolationMethod
        ]
    }


@app.post("/api/interpolate", response_model=InterpolationResult, responses={400: {"model": ErrorResponse}}, tags=["Interpolation"])
async def interpolate(request: InterpolationRequest):
    """
    Interpolate sample data at the query positions.

    **Interpolation Methods:**
    - `nearest`: Value of the closest sample (ties go to the right sample)
    - `linear`: Straight lines between samples (at least 2 points)
    - `cubic_spline`: Natural C2 cubic spline (at least 3 points, default)
    - `akima`: Akima spline, less overshoot near outliers (at least 5 points)

    Queries outside the sample range continue the nearest segment.
    """
    method = InterpolationMethod(request.method.value)
    values = evaluate(request, method)
    return InterpolationResult(method=method.value, points=len(values), values=values)


@app.post("/api/interpolate/derivative", response_model=DerivativeResult, responses={400: {"model": ErrorResponse}}, tags=["Interpolation"])
async def interpolate_derivative(request: InterpolationRequest):
    """
    First derivative of the interpolant at the query positions.

    Not available for `nearest`, which is piecewise constant.
    """
    method = InterpolationMethod(request.method.value)
    if not supports_derivative(method):
        raise HTTPException(
            status_code=400,
            detail=f"Method '{method.value}' does not support derivatives"
        )

    derivative = create_interpolator(request.x, request.y, method).derivative()
    derivatives = to_json_values(derivative(q) for q in request.xq)
    return DerivativeResult(method=method.value, points=len(derivatives), derivatives=derivatives)


@app.post("/api/interpolate/compare", responses={400: {"model": ErrorResponse}}, tags=["Interpolation"])
async def compare_methods(request: SampleQuery) -> Dict[str, Any]:
    """
    Evaluate every method with enough sample points at the query positions.

    Useful for visualizing the differences between interpolation methods.
    """
    methods = [m for m in InterpolationMethod if len(request.x) >= MINIMUM_POINTS[m]]

    comparison = {}
    for method in methods:
        comparison[method.value] = evaluate(request, method)

    return {
        "points": len(request.xq),
        "methods": [m.value for m in methods],
        "comparison": comparison,
    }


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
