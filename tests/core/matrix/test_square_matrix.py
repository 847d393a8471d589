import pytest

import numpy as np

from jnum.core.base.exceptions import ShapeError, SingularMatrixError
from jnum.core.config.settings import update_config
from jnum.core.math import Real, Complex
from jnum.core.matrix import GenericMatrix, GenericSquareMatrix, GenericVector


@pytest.fixture
def a_array():
    return np.array([[4.0, 1.0, 2.0], [1.0, 5.0, 3.0], [2.0, 3.0, 6.0]])


@pytest.fixture
def a(a_array):
    return GenericSquareMatrix.from_array(a_array)


def block_matrix(array, block):
    """Split a square array into a square matrix of square blocks."""
    n = array.shape[0] // block
    data = [[GenericSquareMatrix.from_array(array[i * block:(i + 1) * block, j * block:(j + 1) * block])
             for j in range(n)] for i in range(n)]
    return GenericSquareMatrix.from_data(data)


def assemble(matrix):
    return np.block([[e.to_array() for e in row] for row in matrix.entries])


class TestConstruction:
    def test_square_only(self):
        with pytest.raises(ShapeError):
            GenericSquareMatrix.from_data([[1.0, 2.0]])
        with pytest.raises(ShapeError):
            GenericSquareMatrix.from_matrix(GenericMatrix(Real, 2, 3))

    def test_from_matrix(self):
        square = GenericSquareMatrix.from_matrix(GenericMatrix.from_data([[1.0, 2.0], [3.0, 4.0]]))
        assert isinstance(square, GenericSquareMatrix)
        assert square.size == 2

    def test_cannot_grow(self, a):
        with pytest.raises(ShapeError):
            a.add_rows(1)
        with pytest.raises(ShapeError):
            a.add_columns(1)

    def test_copy_keeps_type(self, a):
        assert isinstance(a.copy(), GenericSquareMatrix)
        assert isinstance(a.get_transpose(), GenericSquareMatrix)

    def test_check_shape(self, a):
        a.check_shape()
        a.entries[0].append(Real())
        with pytest.raises(ShapeError):
            a.check_shape()


class TestElementContract:
    def test_identity(self):
        m = GenericSquareMatrix(Real, 3)
        m.set_identity()
        assert m.is_identity()
        np.testing.assert_array_equal(m.to_array(), np.eye(3))
        m[0, 1] = 1.0
        assert not m.is_identity()

    def test_products(self, a, a_array):
        b = a.copy()
        b.multiply_by(a)
        np.testing.assert_allclose(b.to_array(), a_array @ a_array)

        c = GenericSquareMatrix(Real, 3)
        c.set_product(a, b)
        np.testing.assert_allclose(c.to_array(), a_array @ a_array @ a_array)

    def test_add_identity_and_trace(self, a):
        a.add_identity(2.0)
        assert a.get_trace() == 21.0

    def test_equality(self, a, a_array):
        assert a == GenericSquareMatrix.from_array(a_array)
        assert a != GenericSquareMatrix.from_array(a_array + 1.0)
        assert a != GenericSquareMatrix(Real, 2)

    def test_new_zero_and_identity(self, a):
        zero = a.new_zero()
        assert zero.is_null()
        assert zero.size == 3
        assert a.new_identity().is_identity()


class TestInverse:
    def test_lu_inverse(self, a, a_array):
        inverse = a.get_inverse()
        np.testing.assert_allclose(inverse.to_array(), np.linalg.inv(a_array), atol=1e-12)

        product = a.copy()
        product.multiply_by(inverse)
        np.testing.assert_allclose(product.to_array(), np.eye(3), atol=1e-12)

    def test_gauss_inverse(self, a, a_array):
        inverse = a.get_gauss_inverse()
        product = inverse.copy()
        product.multiply_by(a)
        np.testing.assert_allclose(product.to_array(), np.eye(3), atol=1e-12)
        np.testing.assert_allclose(inverse.to_array(), a.get_lu_inverse().to_array(), atol=1e-12)

    def test_diagonal(self):
        m = GenericSquareMatrix.from_data([[2.0, 0.0], [0.0, 2.0]])
        np.testing.assert_array_equal(m.get_inverse().to_array(), [[0.5, 0.0], [0.0, 0.5]])
        np.testing.assert_array_equal(m.get_gauss_inverse().to_array(), [[0.5, 0.0], [0.0, 0.5]])

    def test_receiver_unchanged(self, a, a_array):
        a.get_inverse()
        a.get_gauss_inverse()
        np.testing.assert_array_equal(a.to_array(), a_array)

    def test_invert(self, a, a_array):
        a.invert()
        np.testing.assert_allclose(a.to_array(), np.linalg.inv(a_array), atol=1e-12)

    def test_complex(self):
        array = np.array([[1 + 1j, 2.0], [0.5j, 3 - 1j]])
        m = GenericSquareMatrix.from_array(array)
        np.testing.assert_allclose(m.get_inverse().to_array(), np.linalg.inv(array), atol=1e-12)
        np.testing.assert_allclose(m.get_gauss_inverse().to_array(), np.linalg.inv(array), atol=1e-12)

    def test_null_row(self):
        m = GenericSquareMatrix.from_data([[1.0, 2.0], [0.0, 0.0]])
        with pytest.raises(SingularMatrixError):
            m.get_inverse()
        with pytest.raises(SingularMatrixError):
            m.get_gauss_inverse()

    def test_determinant(self):
        m = GenericSquareMatrix.from_data([[1.0, 2.0], [3.0, 4.0]])
        assert float(m.get_determinant()) == pytest.approx(-2.0)

    def test_determinant_matches_numpy(self, a, a_array):
        assert float(a.get_determinant()) == pytest.approx(np.linalg.det(a_array))


class TestSolve:
    def test_solve_vectors(self, a, a_array):
        b1 = np.array([1.0, 2.0, 3.0])
        b2 = np.array([-1.0, 0.0, 4.0])
        v1 = GenericVector.from_data(b1)
        v2 = GenericVector.from_data(b2)
        a.solve([v1, v2])
        np.testing.assert_allclose(v1.to_array(), np.linalg.solve(a_array, b1), atol=1e-12)
        np.testing.assert_allclose(v2.to_array(), np.linalg.solve(a_array, b2), atol=1e-12)

    def test_solve_recovers_rhs(self, a, a_array):
        b = np.array([[1.0, 0.0], [2.0, 1.0], [3.0, -1.0]])
        rhs = GenericMatrix.from_array(b)
        x = a.get_solutions_to(rhs)
        np.testing.assert_allclose(a.dot(x).to_array(), b, atol=1e-12)

        a.solve_matrix(rhs)
        np.testing.assert_allclose(rhs.to_array(), x.to_array())

    def test_solve_shape_errors(self, a):
        with pytest.raises(ShapeError):
            a.solve([GenericVector.from_data([1.0, 2.0])])
        with pytest.raises(ShapeError):
            a.get_solutions_to(GenericMatrix(Real, 2, 1))

    def test_solve_nothing(self, a):
        a.solve([])


class TestBlockMatrix:
    @pytest.fixture
    def array(self):
        rng = np.random.default_rng(7)
        return rng.normal(size=(4, 4)) + 6.0 * np.eye(4)

    def test_block_product(self, array):
        m = block_matrix(array, 2)
        product = m.copy()
        product.multiply_by(m)
        np.testing.assert_allclose(assemble(product), array @ array, atol=1e-12)

    def test_block_lu_inverse(self, array):
        inverse = block_matrix(array, 2).get_inverse()
        np.testing.assert_allclose(assemble(inverse), np.linalg.inv(array), atol=1e-10)

    def test_block_gauss_inverse(self, array):
        inverse = block_matrix(array, 2).get_gauss_inverse()
        np.testing.assert_allclose(assemble(inverse), np.linalg.inv(array), atol=1e-10)

    def test_block_identity(self, array):
        m = block_matrix(array, 2)
        product = m.copy()
        product.multiply_by(m.get_inverse())
        assert np.allclose(assemble(product), np.eye(4), atol=1e-10)


def test_strict_pivoting_in_inverse():
    update_config(strict_pivoting=True)
    m = GenericSquareMatrix.from_data([[1.0, 1.0], [1.0, 1.0]])
    with pytest.raises(SingularMatrixError):
        m.get_inverse()
