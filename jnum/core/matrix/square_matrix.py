"""
Square matrices of algebraic elements.

``GenericSquareMatrix`` adds inversion (LU or Gauss-Jordan), linear
solving and LU decomposition to ``GenericMatrix``. It also implements the
``AlgebraElement`` contract itself, so square matrices can be the blocks
of a larger matrix.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..base.exceptions import ShapeError
from ..log_manager import PerformanceLogger
from ..math.algebra import AlgebraElement
from .generic_vector import GenericVector, ElementFactory
from .generic_matrix import GenericMatrix
from .lu import LUDecomposition, decompose_lu

logger = logging.getLogger(__name__)
performance = PerformanceLogger(logger)


class GenericSquareMatrix(GenericMatrix, AlgebraElement):
    """Square matrix of algebraic elements.

    Parameters
    ----------
    element_type : callable
        Zero-argument callable returning a new zero element, e.g. ``Real``
    size : int
        Number of rows and columns
    """

    def __init__(self, element_type: ElementFactory, size: int):
        super().__init__(element_type, size, size)

    @classmethod
    def _allocate(cls, element_type: ElementFactory, rows: int, cols: int) -> "GenericSquareMatrix":
        if rows != cols:
            raise ShapeError(f"Square matrix required, got {rows}x{cols}",
                             shape=(rows, cols), expected=(rows, rows))
        return cls(element_type, rows)

    @classmethod
    def from_matrix(cls, matrix: GenericMatrix) -> "GenericSquareMatrix":
        """Square copy of a square ``GenericMatrix``."""
        square = cls._allocate(matrix.element_type, matrix.rows, matrix.cols)
        square.entries = [[e.copy() for e in row] for row in matrix.entries]
        return square

    def create_matrix(self, rows: int, cols: int) -> GenericMatrix:
        if rows == cols:
            return GenericSquareMatrix(self.element_type, rows)
        return GenericMatrix(self.element_type, rows, cols)

    @property
    def size(self) -> int:
        return self.rows

    def check_shape(self) -> None:
        """Verify that the matrix is rectangular and square.

        Raises
        ------
        ShapeError
            If the rows are ragged or the matrix is not square
        """
        super().check_shape()
        if not self.is_square():
            raise ShapeError(f"Square matrix required, got {self.rows}x{self.cols}",
                             shape=self.shape, expected=(self.rows, self.rows))

    def add_rows(self, n: int) -> None:
        raise ShapeError("Cannot add rows to a square matrix", shape=self.shape)

    def add_columns(self, n: int) -> None:
        raise ShapeError("Cannot add columns to a square matrix", shape=self.shape)

    # Element contract

    def set_identity(self) -> None:
        for i, row in enumerate(self.entries):
            for j, e in enumerate(row):
                if i == j:
                    e.set_identity()
                else:
                    e.zero()

    def is_identity(self) -> bool:
        identity = self.create_element()
        identity.set_identity()
        for i, row in enumerate(self.entries):
            for j, e in enumerate(row):
                if i == j:
                    difference = e.copy()
                    difference.subtract(identity)
                    if not difference.is_null():
                        return False
                elif not e.is_null():
                    return False
        return True

    def multiply_by(self, other: "GenericSquareMatrix") -> None:
        """Right-multiply in place: ``self = self . other``."""
        self.entries = self._product_entries(other)

    def set_product(self, a: "GenericSquareMatrix", b: "GenericSquareMatrix") -> None:
        self.entries = a._product_entries(b)

    def add_identity(self, scaling: float = 1.0) -> None:
        increment = self.create_element()
        increment.set_identity()
        increment.scale(scaling)
        for i in range(self.size):
            self.entries[i][i].add(increment)

    def get_trace(self) -> AlgebraElement:
        trace = self.create_element()
        for i in range(self.size):
            trace.add(self.entries[i][i])
        return trace

    # Decomposition and inversion

    def decompose_lu(self, index: List[int], tiny_value: Optional[float] = None,
                     degraded_pivots: Optional[List[int]] = None) -> bool:
        """Overwrite this matrix with its packed LU factors.

        See ``jnum.core.matrix.lu.decompose_lu`` for the parameters.

        Returns
        -------
        bool
            True for an even number of row swaps
        """
        return decompose_lu(self, index, tiny_value, degraded_pivots)

    def get_lu_decomposition(self, tiny_value: Optional[float] = None) -> LUDecomposition:
        return LUDecomposition(self, tiny_value)

    def get_inverse(self) -> "GenericSquareMatrix":
        """Inverse via LU decomposition; the receiver is not modified."""
        return self.get_lu_inverse()

    def get_lu_inverse(self) -> "GenericSquareMatrix":
        with performance.time_operation(f"LU inverse {self.size}x{self.size}", logging.DEBUG):
            return self.get_lu_decomposition().get_inverse()

    def get_gauss_inverse(self) -> "GenericSquareMatrix":
        """Inverse via Gauss-Jordan elimination of ``[A | I]``."""
        n = self.size
        combo = GenericMatrix(self.element_type, n, 2 * n)
        combo.paste(self, 0, 0)
        for i in range(n):
            combo.entries[i][n + i].set_identity()

        with performance.time_operation(f"Gauss-Jordan inverse {n}x{n}", logging.DEBUG):
            combo.gauss_jordan()

        inverse = GenericSquareMatrix(self.element_type, n)
        inverse.entries = [row[n:] for row in combo.entries]
        return inverse

    def invert(self) -> None:
        self.entries = self.get_inverse().entries

    def get_determinant(self) -> AlgebraElement:
        return self.get_lu_decomposition().get_determinant()

    # Linear solve

    def _augmented(self, columns: Sequence[Sequence[AlgebraElement]]) -> GenericMatrix:
        n = self.size
        combo = GenericMatrix(self.element_type, n, n + len(columns))
        combo.paste(self, 0, 0)
        for c, column in enumerate(columns):
            if len(column) != n:
                raise ShapeError("Mismatched right-hand side size", shape=(len(column),), expected=(n,))
            for row in range(n):
                combo.entries[row][n + c] = column[row].copy()
        combo.gauss_jordan()
        return combo

    def solve(self, vectors: Sequence[GenericVector]) -> None:
        """Solve ``A x = v`` for each vector, replacing its components with ``x``.

        Raises
        ------
        ShapeError
            If a vector does not have ``size`` components
        SingularMatrixError
            If the matrix is singular
        """
        if not vectors:
            return
        combo = self._augmented([v.components for v in vectors])
        n = self.size
        for c, v in enumerate(vectors):
            v.components = [combo.entries[row][n + c] for row in range(n)]

    def get_solutions_to(self, rhs: GenericMatrix) -> GenericMatrix:
        """New matrix ``X`` with ``A X = rhs``.

        Raises
        ------
        ShapeError
            If ``rhs`` does not have ``size`` rows
        SingularMatrixError
            If the matrix is singular
        """
        if rhs.rows != self.size:
            raise ShapeError("Mismatched right-hand side size", shape=rhs.shape, expected=(self.size, "*"))
        combo = self._augmented(rhs.get_transpose().entries)
        solution = rhs.create_matrix(rhs.rows, rhs.cols)
        solution.entries = [row[self.size:] for row in combo.entries]
        return solution

    def solve_matrix(self, rhs: GenericMatrix) -> None:
        """Replace ``rhs`` with the solution ``X`` of ``A X = rhs``."""
        rhs.entries = self.get_solutions_to(rhs).entries

    # Python protocol

    def __eq__(self, other) -> bool:
        if not isinstance(other, GenericMatrix):
            return NotImplemented
        if other.shape != self.shape:
            return False
        return all(a == b for row, other_row in zip(self.entries, other.entries)
                   for a, b in zip(row, other_row))

    __hash__ = None
