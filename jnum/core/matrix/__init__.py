"""
Generic linear algebra over algebraic elements.

This module provides vectors and matrices whose entries implement the
``AlgebraElement`` contract, with LU and Gauss-Jordan inversion and
linear solving.
"""

from .generic_vector import GenericVector, as_element, element_factory, vector_from
from .generic_matrix import GenericMatrix, MatrixIterator
from .lu import LUDecomposition, decompose_lu
from .square_matrix import GenericSquareMatrix

__all__ = [
    # Vectors
    "GenericVector",
    "as_element",
    "element_factory",
    "vector_from",
    # Matrices
    "GenericMatrix",
    "MatrixIterator",
    "GenericSquareMatrix",
    # Decomposition
    "LUDecomposition",
    "decompose_lu",
]
