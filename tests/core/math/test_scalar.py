import pytest
import math

from jnum.core.math import Real


class TestRealElement:
    def test_contract(self):
        r = Real(2.0)
        r.add(Real(3.0))
        assert r == 5.0
        r.subtract(1)
        assert r == 4.0
        r.scale(0.5)
        assert r == 2.0
        r.multiply_by(Real(3.0))
        assert r == 6.0
        assert r.get_inverse() == pytest.approx(1.0 / 6.0)
        assert r.abs() == 6.0

    def test_identity_and_zero(self):
        r = Real(7.0)
        r.set_identity()
        assert r == 1.0
        r.zero()
        assert r.is_null()

    def test_set_product_aliasing(self):
        r = Real(3.0)
        r.set_product(r, r)
        assert r == 9.0

    def test_copy_independent(self):
        r = Real(1.0)
        c = r.copy()
        c.add(1.0)
        assert r == 1.0
        assert c == 2.0

    def test_helpers(self):
        r = Real()
        r.set_sum(Real(1.0), Real(2.0))
        assert r == 3.0
        r.set_difference(Real(1.0), Real(2.0))
        assert r == -1.0
        r.add_scaled(Real(2.0), 3.0)
        assert r == 5.0
        assert r.new_zero().is_null()
        assert r.new_identity() == 1.0

    def test_division(self):
        r = Real(1.0)
        r.divide_by(4.0)
        assert r == 0.25
        r.set_ratio(3.0, 2.0)
        assert r == 1.5
        r.invert()
        assert r == pytest.approx(2.0 / 3.0)

    def test_zero_inverse(self):
        with pytest.raises(ZeroDivisionError):
            Real(0.0).get_inverse()


class TestRealFunctions:
    @pytest.mark.parametrize("name, x, expected", [
        ("sin", 0.5, math.sin(0.5)),
        ("cos", 0.5, math.cos(0.5)),
        ("tan", 0.5, math.tan(0.5)),
        ("asin", 0.5, math.asin(0.5)),
        ("acos", 0.5, math.acos(0.5)),
        ("atan", 0.5, math.atan(0.5)),
        ("sinh", 0.5, math.sinh(0.5)),
        ("cosh", 0.5, math.cosh(0.5)),
        ("tanh", 0.5, math.tanh(0.5)),
        ("asinh", 0.5, math.asinh(0.5)),
        ("acosh", 1.5, math.acosh(1.5)),
        ("atanh", 0.5, math.atanh(0.5)),
        ("exp", 0.5, math.exp(0.5)),
        ("expm1", 1e-10, math.expm1(1e-10)),
        ("log", 0.5, math.log(0.5)),
        ("log1p", 1e-10, math.log1p(1e-10)),
        ("sqrt", 2.0, math.sqrt(2.0)),
        ("square", 3.0, 9.0),
    ])
    def test_function(self, name, x, expected):
        r = Real(x)
        getattr(r, name)()
        assert r.value == pytest.approx(expected)

    def test_pow(self):
        r = Real(2.0)
        r.pow(10)
        assert r == 1024.0

    def test_nan(self):
        assert Real(math.nan).is_nan()
        assert not Real(1.0).is_nan()


class TestRealProtocol:
    def test_arithmetic(self):
        a, b = Real(6.0), Real(3.0)
        assert a + b == 9.0
        assert a - b == 3.0
        assert a * b == 18.0
        assert a / b == 2.0
        assert 1 + a == 7.0
        assert 10 - a == 4.0
        assert 2 * a == 12.0
        assert 12 / a == 2.0
        assert -a == -6.0
        assert abs(Real(-2.0)) == 2.0

    def test_ordering(self):
        assert Real(1.0) < Real(2.0)
        assert Real(3.0) >= 2
        assert sorted([Real(3.0), Real(1.0), Real(2.0)]) == [1.0, 2.0, 3.0]

    def test_conversions(self):
        assert float(Real(2.5)) == 2.5
        assert complex(Real(2.5)) == 2.5 + 0j
        assert str(Real(2.5)) == "2.5"
        assert repr(Real(2.5)) == "Real(2.5)"

    def test_hash(self):
        assert hash(Real(2.0)) == hash(Real(2.0))
        assert Real(1.0).distance_to(Real(-2.0)) == 3.0
