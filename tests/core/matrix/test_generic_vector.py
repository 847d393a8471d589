import pytest

import numpy as np

from jnum.core.base.exceptions import ShapeError, ValidationError
from jnum.core.math import Real, Complex
from jnum.core.matrix import GenericVector, as_element, element_factory, vector_from


class TestAsElement:
    def test_numbers(self):
        assert isinstance(as_element(1), Real)
        assert isinstance(as_element(np.float32(1.5)), Real)
        assert isinstance(as_element(1 + 2j), Complex)

    def test_passthrough(self):
        r = Real(2.0)
        assert as_element(r) is r

    @pytest.mark.parametrize("value", [True, "1.0", None])
    def test_rejected(self, value):
        with pytest.raises(ValidationError):
            as_element(value)

    def test_factory(self):
        assert element_factory(Real(3.0)) is Real
        assert element_factory(Complex(1.0, 1.0)) is Complex


class TestGenericVector:
    def test_construction(self):
        v = GenericVector(Real, 3)
        assert v.size == 3
        assert v.is_null()
        with pytest.raises(ShapeError):
            GenericVector(Real, -1)

    def test_from_data_copies(self):
        r = Real(1.0)
        v = GenericVector.from_data([r, 2.0])
        r.add(5.0)
        assert v[0] == 1.0
        assert v[1] == 2.0
        with pytest.raises(ShapeError):
            GenericVector.from_data([])

    def test_arithmetic(self):
        v = GenericVector.from_data([1.0, 2.0, 3.0])
        w = GenericVector.from_data([1.0, 1.0, 1.0])
        v.add(w)
        v.scale(2.0)
        np.testing.assert_array_equal(v.to_array(), [4.0, 6.0, 8.0])
        v.subtract(w)
        np.testing.assert_array_equal(v.to_array(), [3.0, 5.0, 7.0])
        with pytest.raises(ShapeError):
            v.add(GenericVector(Real, 2))

    def test_dot_and_abs(self):
        v = GenericVector.from_data([3.0, 4.0])
        assert v.dot(v) == 25.0
        assert v.abs() == 5.0

    def test_complex(self):
        v = GenericVector.from_data([1 + 1j, 2.0])
        np.testing.assert_array_equal(v.to_array(), [1 + 1j, 2.0])

    def test_copy_and_access(self):
        v = GenericVector.from_data([1.0, 2.0])
        c = v.copy()
        c[0] = 10.0
        assert v[0] == 1.0
        assert [float(e) for e in c] == [10.0, 2.0]
        assert len(c) == 2
        assert str(v) == "{1.0, 2.0}"
        v.zero()
        assert v.is_null()

    def test_vector_from(self):
        v = GenericVector.from_data([1.0])
        assert vector_from(v) is v
        assert vector_from([1.0, 2.0]).size == 2
