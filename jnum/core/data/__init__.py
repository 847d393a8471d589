"""
Spline interpolation and Gaussian beam utilities for jnum.
"""

from .spline import (
    CubicSpline,
    SplineSet,
    BicubicSpline,
    interpolate_1d,
    interpolate_2d,
)
from .psf import (
    GaussianPSF,
    SIGMAS_IN_FWHM,
    AREA_FACTOR,
)

__all__ = [
    # Splines
    "CubicSpline",
    "SplineSet",
    "BicubicSpline",
    "interpolate_1d",
    "interpolate_2d",
    # Beams
    "GaussianPSF",
    "SIGMAS_IN_FWHM",
    "AREA_FACTOR",
]
