"""
Rectangular matrices of algebraic elements.

``GenericMatrix`` stores its entries as a list of row lists and manipulates
them exclusively through the ``AlgebraElement`` contract, so the same code
serves real, complex and block (matrix-valued) entries. Products are always
formed with the left factor first; nothing here assumes commutativity.
"""

import logging
import math
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..base.exceptions import ShapeError, SingularMatrixError, validate_type
from ..base.validation import validate_matrix_data
from ..config.settings import get_config
from ..math.algebra import AlgebraElement
from ..math.scalar import Real
from ..math.complex import Complex
from .generic_vector import GenericVector, ElementFactory, as_element, element_factory

logger = logging.getLogger(__name__)


class MatrixIterator:
    """Row-major iterator over the entries of a matrix.

    After each step ``row`` and ``col`` hold the position of the element
    just returned.
    """

    def __init__(self, matrix: "GenericMatrix"):
        self.matrix = matrix
        self.row = 0
        self.col = -1

    def __iter__(self) -> "MatrixIterator":
        return self

    def __next__(self) -> AlgebraElement:
        col = self.col + 1
        row = self.row
        if col >= self.matrix.cols:
            col = 0
            row += 1
        if row >= self.matrix.rows:
            raise StopIteration
        self.row, self.col = row, col
        return self.matrix.entries[row][col]

    def has_next(self) -> bool:
        return self.row < self.matrix.rows - 1 or self.col < self.matrix.cols - 1

    def set_current(self, value: Any) -> None:
        """Replace the element last returned by ``__next__``."""
        if self.col < 0:
            raise RuntimeError("Iterator has not returned an element yet")
        self.matrix.set(self.row, self.col, value)


class GenericMatrix:
    """Rectangular matrix of algebraic elements.

    Parameters
    ----------
    element_type : callable
        Zero-argument callable returning a new zero element, e.g. ``Real``
    rows, cols : int
        Dimensions; the matrix is created zero-filled

    Raises
    ------
    ShapeError
        If a dimension is not positive
    """

    def __init__(self, element_type: ElementFactory, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ShapeError(f"Matrix dimensions must be positive, got {rows}x{cols}", shape=(rows, cols))
        self.element_type = element_type
        self.entries: List[List[AlgebraElement]] = [
            [element_type() for _ in range(cols)] for _ in range(rows)
        ]

    @classmethod
    def from_data(cls, data: Sequence[Sequence[Any]]) -> "GenericMatrix":
        """Create a matrix holding copies of nested elements or numbers.

        Raises
        ------
        ShapeError
            If the data is empty or ragged
        """
        rows, cols = validate_matrix_data(data)
        entries = [[as_element(v).copy() for v in row] for row in data]
        matrix = cls._allocate(element_factory(entries[0][0]), rows, cols)
        matrix.entries = entries
        return matrix

    @classmethod
    def from_array(cls, array: Any) -> "GenericMatrix":
        """Create a ``Real`` (or ``Complex``) matrix from a 2-D numpy array."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ShapeError(f"Expected a 2-dimensional array, got {array.ndim} dimensions",
                             shape=array.shape, expected="2D")
        if np.iscomplexobj(array):
            data = [[Complex(complex(v)) for v in row] for row in array]
        else:
            data = [[Real(float(v)) for v in row] for row in array.astype(float)]
        return cls.from_data(data)

    @classmethod
    def _allocate(cls, element_type: ElementFactory, rows: int, cols: int) -> "GenericMatrix":
        return cls(element_type, rows, cols)

    def create_element(self) -> AlgebraElement:
        return self.element_type()

    def create_matrix(self, rows: int, cols: int) -> "GenericMatrix":
        """New zero matrix of the same element kind."""
        return GenericMatrix(self.element_type, rows, cols)

    # Shape

    @property
    def rows(self) -> int:
        return len(self.entries)

    @property
    def cols(self) -> int:
        return len(self.entries[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def is_square(self) -> bool:
        return self.rows == self.cols

    def check_shape(self) -> None:
        """Verify that every row has the same number of columns.

        Raises
        ------
        ShapeError
            If the rows are ragged
        """
        validate_matrix_data(self.entries)

    def assert_size(self, rows: int, cols: int) -> None:
        if self.shape != (rows, cols):
            raise ShapeError(f"Expected a {rows}x{cols} matrix, got {self.rows}x{self.cols}",
                             shape=self.shape, expected=(rows, cols))

    def _check_conforming(self, other: "GenericMatrix") -> None:
        if other.shape != self.shape:
            raise ShapeError("Mismatched matrix sizes", shape=other.shape, expected=self.shape)

    def add_rows(self, n: int) -> None:
        """Append ``n`` zero rows."""
        for _ in range(n):
            self.entries.append([self.create_element() for _ in range(self.cols)])

    def add_columns(self, n: int) -> None:
        """Append ``n`` zero columns."""
        for row in self.entries:
            row.extend(self.create_element() for _ in range(n))

    # Element access

    def get(self, row: int, col: int) -> AlgebraElement:
        return self.entries[row][col]

    def set(self, row: int, col: int, value: Any) -> None:
        self.entries[row][col] = as_element(value)

    def __getitem__(self, index: Tuple[int, int]) -> AlgebraElement:
        row, col = index
        return self.entries[row][col]

    def __setitem__(self, index: Tuple[int, int], value: Any) -> None:
        row, col = index
        self.set(row, col, value)

    def get_row(self, i: int) -> List[AlgebraElement]:
        return list(self.entries[i])

    def get_column(self, j: int) -> List[AlgebraElement]:
        return [row[j] for row in self.entries]

    def __iter__(self) -> MatrixIterator:
        return MatrixIterator(self)

    # Linear algebra

    def copy(self) -> "GenericMatrix":
        clone = self._allocate(self.element_type, self.rows, self.cols)
        clone.entries = [[e.copy() for e in row] for row in self.entries]
        return clone

    def assign(self, other: "GenericMatrix") -> None:
        """Replace own entries with copies of ``other``'s entries."""
        self.entries = [[e.copy() for e in row] for row in other.entries]

    def zero(self) -> None:
        for row in self.entries:
            for e in row:
                e.zero()

    def is_null(self) -> bool:
        return all(e.is_null() for row in self.entries for e in row)

    def add(self, other: "GenericMatrix") -> None:
        self._check_conforming(other)
        for row, other_row in zip(self.entries, other.entries):
            for e, o in zip(row, other_row):
                e.add(o)

    def subtract(self, other: "GenericMatrix") -> None:
        self._check_conforming(other)
        for row, other_row in zip(self.entries, other.entries):
            for e, o in zip(row, other_row):
                e.subtract(o)

    def add_scaled(self, other: "GenericMatrix", factor: float) -> None:
        self._check_conforming(other)
        for row, other_row in zip(self.entries, other.entries):
            for e, o in zip(row, other_row):
                e.add_scaled(o, factor)

    def scale(self, factor: float) -> None:
        for row in self.entries:
            for e in row:
                e.scale(factor)

    def set_sum(self, a: "GenericMatrix", b: "GenericMatrix") -> None:
        a._check_conforming(b)
        result = a.copy()
        result.add(b)
        self.entries = result.entries

    def set_difference(self, a: "GenericMatrix", b: "GenericMatrix") -> None:
        a._check_conforming(b)
        result = a.copy()
        result.subtract(b)
        self.entries = result.entries

    def abs(self) -> float:
        """Frobenius norm of the entry magnitudes."""
        return math.sqrt(sum(e.abs() ** 2 for row in self.entries for e in row))

    def _product_entries(self, other: "GenericMatrix") -> List[List[AlgebraElement]]:
        if other.rows != self.cols:
            raise ShapeError("Mismatched matrix sizes for product",
                             shape=other.shape, expected=(self.cols, "*"))
        product = self.create_element()
        result = []
        for row in self.entries:
            out_row = []
            for j in range(other.cols):
                total = self.create_element()
                for k, a in enumerate(row):
                    b = other.entries[k][j]
                    if a.is_null() or b.is_null():
                        continue
                    product.set_product(a, b)
                    total.add(product)
                out_row.append(total)
            result.append(out_row)
        return result

    def dot(self, other: Union["GenericMatrix", GenericVector, Sequence[float]]
            ) -> Union["GenericMatrix", GenericVector]:
        """Matrix product with a matrix, a vector or a plain float sequence.

        Raises
        ------
        ShapeError
            If the operand does not conform
        """
        if isinstance(other, GenericMatrix):
            result = self.create_matrix(self.rows, other.cols)
            result.entries = self._product_entries(other)
            return result

        if isinstance(other, GenericVector):
            if other.size != self.cols:
                raise ShapeError("Mismatched matrix/input-vector sizes",
                                 shape=(other.size,), expected=(self.cols,))
            column = GenericMatrix(self.element_type, self.cols, 1)
            column.entries = [[c] for c in other.components]
            result = GenericVector(self.element_type, 0)
            result.components = [row[0] for row in self._product_entries(column)]
            return result

        values = [float(v) for v in other]
        if len(values) != self.cols:
            raise ShapeError("Mismatched matrix/input-vector sizes",
                             shape=(len(values),), expected=(self.cols,))
        result = GenericVector(self.element_type, self.rows)
        for to, row in zip(result.components, self.entries):
            for e, v in zip(row, values):
                if v != 0.0:
                    to.add_scaled(e, v)
        return result

    def get_transpose(self) -> "GenericMatrix":
        transpose = self.create_matrix(self.cols, self.rows)
        transpose.entries = [[self.entries[i][j].copy() for i in range(self.rows)]
                             for j in range(self.cols)]
        return transpose

    def paste(self, patch: "GenericMatrix", row: int, col: int) -> None:
        """Copy ``patch`` into this matrix with its corner at (row, col).

        Raises
        ------
        ShapeError
            If the patch does not fit
        """
        validate_type(patch, GenericMatrix, "patch")
        if row < 0 or col < 0 or row + patch.rows > self.rows or col + patch.cols > self.cols:
            raise ShapeError(f"Patch of {patch.rows}x{patch.cols} does not fit at ({row}, {col})",
                             shape=patch.shape, expected=self.shape)
        for i, patch_row in enumerate(patch.entries):
            for j, e in enumerate(patch_row):
                self.entries[row + i][col + j] = e.copy()

    def subspace(self, from_row: int, from_col: int, to_row: int, to_col: int) -> "GenericMatrix":
        """Copy of the block ``[from_row:to_row, from_col:to_col]``."""
        if not (0 <= from_row < to_row <= self.rows and 0 <= from_col < to_col <= self.cols):
            raise ShapeError(f"Invalid subspace [{from_row}:{to_row}, {from_col}:{to_col}]",
                             shape=self.shape)
        block = GenericMatrix(self.element_type, to_row - from_row, to_col - from_col)
        block.entries = [[e.copy() for e in row[from_col:to_col]]
                         for row in self.entries[from_row:to_row]]
        return block

    # Row operations

    def swap_rows(self, i: int, j: int) -> None:
        self.entries[i], self.entries[j] = self.entries[j], self.entries[i]

    def swap_elements(self, i1: int, j1: int, i2: int, j2: int) -> None:
        self.entries[i1][j1], self.entries[i2][j2] = self.entries[i2][j2], self.entries[i1][j1]

    def is_null_row(self, i: int) -> bool:
        return all(e.is_null() for e in self.entries[i])

    def scale_row(self, i: int, factor: AlgebraElement) -> None:
        """Left-multiply row ``i`` by ``factor``."""
        for e in self.entries[i]:
            e.set_product(factor, e)

    def add_multiple_of_row(self, row: int, to_row: int, factor: AlgebraElement) -> None:
        """Add ``factor * row`` to ``to_row``."""
        term = self.create_element()
        for source, target in zip(self.entries[row], self.entries[to_row]):
            if source.is_null():
                continue
            term.set_product(factor, source)
            target.add(term)

    def gauss_jordan(self) -> None:
        """Gauss-Jordan elimination with full pivoting, in place.

        The matrix is read as ``[A | B]`` with ``A`` the leading square
        block. On return the leading block holds ``A^-1`` and the trailing
        columns hold ``A^-1 B``.

        Raises
        ------
        ShapeError
            If there are fewer columns than rows
        SingularMatrixError
            If a pivot is reused or null
        """
        n = self.rows
        if self.cols < n:
            raise ShapeError("Gauss-Jordan elimination needs at least as many columns as rows",
                             shape=self.shape, expected=(n, f">={n}"))

        a = self.entries
        index_c = [0] * n
        index_r = [0] * n
        pivot_count = [-1] * n

        for i in reversed(range(n)):
            irow = icol = -1
            big = 0.0
            for j in reversed(range(n)):
                if pivot_count[j] == 0:
                    continue
                for k in reversed(range(n)):
                    if pivot_count[k] == -1:
                        magnitude = a[j][k].abs()
                        if magnitude >= big:
                            big = magnitude
                            irow, icol = j, k
                    elif pivot_count[k] > 0:
                        raise SingularMatrixError("Singular matrix during Gauss-Jordan elimination",
                                                  size=n, pivot=k)
            pivot_count[icol] += 1

            if irow != icol:
                self.swap_rows(irow, icol)
            index_r[i] = irow
            index_c[i] = icol

            pivot = a[icol][icol]
            if pivot.is_null():
                raise SingularMatrixError("Singular matrix during Gauss-Jordan elimination",
                                          size=n, pivot=icol)

            # The pivot slot is overwritten by the identity before the row is
            # scaled, so that slot ends up holding the inverse pivot.
            pivot_inverse = pivot.get_inverse()
            a[icol][icol] = pivot.new_identity()
            self.scale_row(icol, pivot_inverse)

            for ll in range(n):
                if ll == icol:
                    continue
                factor = a[ll][icol]
                factor.scale(-1.0)
                a[ll][icol] = factor.new_zero()
                self.add_multiple_of_row(icol, ll, factor)

        for l in range(n):
            if index_r[l] != index_c[l]:
                for row in a:
                    row[index_r[l]], row[index_c[l]] = row[index_c[l]], row[index_r[l]]

        logger.debug(f"Gauss-Jordan elimination completed on {self.rows}x{self.cols} matrix")

    def get_rank(self, tolerance: Optional[float] = None) -> int:
        """Number of linearly independent rows.

        Row echelon reduction of a copy with partial pivoting; an element
        whose magnitude is below ``tolerance`` times the largest entry
        magnitude counts as zero.

        Parameters
        ----------
        tolerance : float, optional
            Relative zero threshold; defaults to
            ``NumericsConfig.gauss_zero_tolerance``
        """
        if tolerance is None:
            tolerance = get_config().gauss_zero_tolerance

        work = self.copy()
        a = work.entries
        scale = max(e.abs() for row in a for e in row)
        if scale == 0.0:
            return 0
        threshold = tolerance * scale

        rank = 0
        for col in range(self.cols):
            if rank == self.rows:
                break
            pivot_row = max(range(rank, self.rows), key=lambda r: a[r][col].abs())
            if a[pivot_row][col].abs() <= threshold:
                continue
            work.swap_rows(rank, pivot_row)
            pivot_inverse = a[rank][col].get_inverse()
            for r in range(rank + 1, self.rows):
                if a[r][col].is_null():
                    continue
                factor = a[r][col].copy()
                factor.multiply_by(pivot_inverse)
                factor.scale(-1.0)
                work.add_multiple_of_row(rank, r, factor)
            rank += 1
        return rank

    # Conversions

    def to_array(self) -> np.ndarray:
        """Numpy array of real or complex entries.

        Raises
        ------
        TypeError
            If the entries are neither ``Real`` nor ``Complex``
        """
        flat = [e for row in self.entries for e in row]
        if all(isinstance(e, Real) for e in flat):
            return np.array([[e.value for e in row] for row in self.entries], dtype=float)
        if all(isinstance(e, (Real, Complex)) for e in flat):
            return np.array([[complex(e) for e in row] for row in self.entries], dtype=complex)
        raise TypeError("Only Real or Complex matrices convert to numpy arrays")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rows}x{self.cols})"

    def __str__(self) -> str:
        return "\n".join("\t".join(str(e) for e in row) for row in self.entries)
