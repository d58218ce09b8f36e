"""HTTP service exposing the interpolators."""
