"""
Crout LU decomposition of square matrices of algebraic elements.

The decomposition works in place on packed factors: after it completes,
the entries strictly below the diagonal hold ``L`` (unit diagonal implied)
and the remaining entries hold ``U``, for the row-permuted input.
"""

import logging
from typing import List, Optional, Sequence, Union, Any

from ..base.exceptions import ShapeError, SingularMatrixError
from ..config.settings import get_config
from ..math.algebra import AlgebraElement
from .generic_vector import GenericVector, vector_from
from .generic_matrix import GenericMatrix

logger = logging.getLogger(__name__)


def decompose_lu(matrix: GenericMatrix, index: List[int], tiny_value: Optional[float] = None,
                 degraded_pivots: Optional[List[int]] = None) -> bool:
    """Decompose ``matrix`` into packed LU factors, in place.

    Parameters
    ----------
    matrix : GenericMatrix
        Square matrix, overwritten with the packed factors
    index : list of int
        Filled with the row permutation: ``index[j]`` is the row swapped
        into position ``j``
    tiny_value : float, optional
        Scale of the identity substituted for a null pivot; defaults to
        ``NumericsConfig.lu_tiny_value``
    degraded_pivots : list of int, optional
        Receives the columns whose pivot had to be substituted

    Returns
    -------
    bool
        True if an even number of row swaps was performed

    Raises
    ------
    ShapeError
        If the matrix is not square
    SingularMatrixError
        If a row is entirely null, or a pivot is null while
        ``NumericsConfig.strict_pivoting`` is set
    """
    if not matrix.is_square():
        raise ShapeError("LU decomposition requires a square matrix", shape=matrix.shape)

    config = get_config()
    if tiny_value is None:
        tiny_value = config.lu_tiny_value

    n = matrix.rows
    a = matrix.entries
    index[:] = [0] * n
    even_changes = True
    product = matrix.create_element()

    row_scale = [0.0] * n
    for i in range(n):
        big = max(e.abs() for e in a[i])
        if big == 0.0:
            raise SingularMatrixError("Singular matrix in LU decomposition", size=n, pivot=i)
        row_scale[i] = 1.0 / big

    for j in range(n):
        for i in range(j):
            total = a[i][j]
            for k in range(i):
                product.set_product(a[i][k], a[k][j])
                total.subtract(product)

        big = 0.0
        imax = j
        for i in range(n - 1, j - 1, -1):
            total = a[i][j]
            for k in range(j):
                product.set_product(a[i][k], a[k][j])
                total.subtract(product)
            figure = row_scale[i] * total.abs()
            if figure >= big:
                big = figure
                imax = i

        if imax != j:
            matrix.swap_rows(imax, j)
            even_changes = not even_changes
            row_scale[imax] = row_scale[j]
        index[j] = imax

        diagonal = a[j][j]
        if diagonal.is_null():
            if config.strict_pivoting:
                raise SingularMatrixError("Null pivot in LU decomposition", size=n, pivot=j)
            logger.warning(f"Null pivot at column {j} of {n}x{n} LU decomposition; "
                           f"substituting {tiny_value:g} x identity")
            diagonal.set_identity()
            diagonal.scale(tiny_value)
            if degraded_pivots is not None:
                degraded_pivots.append(j)

        if j != n - 1:
            inverse = diagonal.get_inverse()
            for i in range(j + 1, n):
                a[i][j].multiply_by(inverse)

    return even_changes


class LUDecomposition:
    """LU decomposition of a square matrix, with solving and inversion.

    The input matrix is copied and left untouched.

    Parameters
    ----------
    matrix : GenericMatrix
        Square matrix to decompose
    tiny_value : float, optional
        Null pivot substitute scale, see ``decompose_lu``

    Raises
    ------
    ShapeError
        If the matrix is not square
    SingularMatrixError
        If the matrix has a null row (or a null pivot in strict mode)
    """

    def __init__(self, matrix: GenericMatrix, tiny_value: Optional[float] = None):
        if not matrix.is_square():
            raise ShapeError("LU decomposition requires a square matrix", shape=matrix.shape)
        self.lu = matrix.copy()
        self.index: List[int] = []
        self.degraded_pivots: List[int] = []
        self.even_changes = decompose_lu(self.lu, self.index, tiny_value, self.degraded_pivots)
        self._inverse: Optional[GenericMatrix] = None

    @property
    def size(self) -> int:
        return self.lu.rows

    @property
    def is_degraded(self) -> bool:
        """Whether any pivot was substituted during decomposition."""
        return len(self.degraded_pivots) > 0

    def get_lu(self) -> GenericMatrix:
        return self.lu.copy()

    def _solve_in_place(self, v: List[AlgebraElement]) -> None:
        n = self.size
        a = self.lu.entries
        term = self.lu.create_element()

        # Forward substitution, skipping the leading null components
        first = -1
        for i in range(n):
            ip = self.index[i]
            e = v[ip].copy()
            v[ip] = v[i]
            if first != -1:
                for j in range(first, i):
                    term.set_product(a[i][j], v[j])
                    e.subtract(term)
            elif not e.is_null():
                first = i
            v[i] = e

        for i in range(n - 1, -1, -1):
            e = v[i]
            for j in range(i + 1, n):
                term.set_product(a[i][j], v[j])
                e.subtract(term)
            e.set_product(a[i][i].get_inverse(), e)

    def solve_for(self, y: Union[GenericVector, Sequence[Any]]) -> GenericVector:
        """Solve ``A x = y`` and return ``x`` as a new vector.

        Raises
        ------
        ShapeError
            If ``y`` does not have ``size`` components
        """
        y = vector_from(y)
        if y.size != self.size:
            raise ShapeError("Mismatched right-hand side size", shape=(y.size,), expected=(self.size,))
        x = y.copy()
        self._solve_in_place(x.components)
        return x

    def get_inverse(self) -> GenericMatrix:
        """Inverse matrix, computed once and returned as a fresh copy."""
        if self._inverse is None:
            n = self.size
            inverse = self.lu.create_matrix(n, n)
            for i in range(n):
                column = [self.lu.create_element() for _ in range(n)]
                column[i].set_identity()
                self._solve_in_place(column)
                for j in range(n):
                    inverse.entries[j][i] = column[j]
            self._inverse = inverse
        return self._inverse.copy()

    def get_determinant(self) -> AlgebraElement:
        """Product of the ``U`` diagonal, negated for an odd permutation."""
        det = self.lu.entries[0][0].copy()
        for i in range(1, self.size):
            det.multiply_by(self.lu.entries[i][i])
        if not self.even_changes:
            det.scale(-1.0)
        return det
