"""
Scalar, complex and vector value types for jnum.

This module provides the algebraic element contract consumed by the generic
matrix routines and the concrete value types that satisfy it.
"""

from .algebra import AlgebraElement
from .scalar import Real
from .complex import Complex
from .vector import Vector2D, Vector3D

__all__ = [
    # Contract
    "AlgebraElement",
    # Elements
    "Real",
    "Complex",
    # Vectors
    "Vector2D",
    "Vector3D",
]
