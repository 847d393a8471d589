import pytest

import numpy as np

from jnum.core.base.exceptions import ShapeError, SingularMatrixError
from jnum.core.config.settings import update_config
from jnum.core.math import Real
from jnum.core.matrix import GenericMatrix, GenericSquareMatrix, LUDecomposition, decompose_lu


def unpack(lu, index):
    """Rebuild the row-permuted product L U and the permuted input order."""
    packed = lu.to_array()
    n = packed.shape[0]
    lower = np.tril(packed, -1) + np.eye(n)
    upper = np.triu(packed)
    order = list(range(n))
    for j, i in enumerate(index):
        order[j], order[i] = order[i], order[j]
    return lower @ upper, order


class TestDecomposeLU:
    def test_factors(self):
        array = np.array([[2.0, 1.0, 1.0], [4.0, -6.0, 0.0], [-2.0, 7.0, 2.0]])
        m = GenericSquareMatrix.from_array(array)
        index = []
        decompose_lu(m, index)
        product, order = unpack(m, index)
        np.testing.assert_allclose(product, array[order], atol=1e-12)

    def test_tie_keeps_lowest_row(self):
        m = GenericSquareMatrix.from_data([[1.0, 0.0], [1.0, 1.0]])
        index = []
        assert decompose_lu(m, index) is True
        assert index == [0, 1]

    def test_pivot_swap(self):
        m = GenericSquareMatrix.from_data([[1.0, 2.0], [3.0, 1.0]])
        index = []
        assert decompose_lu(m, index) is False
        assert index == [1, 1]

    def test_not_square(self):
        with pytest.raises(ShapeError):
            decompose_lu(GenericMatrix(Real, 2, 3), [])

    def test_null_row(self):
        m = GenericSquareMatrix.from_data([[1.0, 2.0], [0.0, 0.0]])
        with pytest.raises(SingularMatrixError) as excinfo:
            decompose_lu(m, [])
        assert excinfo.value.pivot == 1


class TestNullPivot:
    def test_substituted(self):
        lu = LUDecomposition(GenericSquareMatrix.from_data([[1.0, 1.0], [1.0, 1.0]]))
        assert lu.degraded_pivots == [1]
        assert lu.is_degraded
        assert float(lu.lu[1, 1]) == 1e-20

    def test_tiny_value(self):
        lu = LUDecomposition(GenericSquareMatrix.from_data([[1.0, 1.0], [1.0, 1.0]]), tiny_value=1e-8)
        assert float(lu.lu[1, 1]) == 1e-8

    def test_configured_tiny_value(self):
        update_config(lu_tiny_value=1e-10)
        lu = LUDecomposition(GenericSquareMatrix.from_data([[1.0, 1.0], [1.0, 1.0]]))
        assert float(lu.lu[1, 1]) == 1e-10

    def test_strict(self):
        update_config(strict_pivoting=True)
        with pytest.raises(SingularMatrixError) as excinfo:
            LUDecomposition(GenericSquareMatrix.from_data([[1.0, 1.0], [1.0, 1.0]]))
        assert excinfo.value.pivot == 1

    def test_regular_not_degraded(self):
        lu = LUDecomposition(GenericSquareMatrix.from_data([[2.0, 1.0], [1.0, 3.0]]))
        assert lu.degraded_pivots == []
        assert not lu.is_degraded


class TestLUDecomposition:
    @pytest.fixture
    def array(self):
        return np.array([[0.0, 2.0, 1.0], [1.0, 1.0, 0.0], [3.0, 0.0, 1.0]])

    @pytest.fixture
    def lu(self, array):
        return LUDecomposition(GenericSquareMatrix.from_array(array))

    def test_input_untouched(self, array):
        m = GenericSquareMatrix.from_array(array)
        LUDecomposition(m)
        np.testing.assert_array_equal(m.to_array(), array)

    def test_solve_for(self, lu, array):
        y = [1.0, 2.0, 3.0]
        x = lu.solve_for(y)
        np.testing.assert_allclose(x.to_array(), np.linalg.solve(array, y), atol=1e-12)

    def test_solve_for_leading_zeros(self, lu, array):
        y = [0.0, 0.0, 1.0]
        np.testing.assert_allclose(lu.solve_for(y).to_array(), np.linalg.solve(array, y), atol=1e-12)

    def test_solve_for_size(self, lu):
        with pytest.raises(ShapeError):
            lu.solve_for([1.0, 2.0])

    def test_inverse_cached_copy(self, lu, array):
        first = lu.get_inverse()
        first[0, 0] = 100.0
        second = lu.get_inverse()
        np.testing.assert_allclose(second.to_array(), np.linalg.inv(array), atol=1e-12)

    def test_determinant(self, lu, array):
        assert float(lu.get_determinant()) == pytest.approx(np.linalg.det(array))

    def test_get_lu_is_copy(self, lu):
        packed = lu.get_lu()
        packed.zero()
        assert not lu.lu.is_null()
        assert lu.size == 3
