import pytest
import cmath
import math

from jnum.core.base.exceptions import ValidationError
from jnum.core.math import Complex, Real


def assert_close(z, expected, abs_tol=1e-12):
    assert z.re == pytest.approx(expected.real, abs=abs_tol)
    assert z.im == pytest.approx(expected.imag, abs=abs_tol)


class TestComplexElement:
    def test_construction(self):
        assert Complex(1.0, 2.0) == 1 + 2j
        assert Complex(3 - 4j) == Complex(3.0, -4.0)
        z = Complex.from_polar(2.0, math.pi / 2)
        assert_close(z, 2j)

    def test_polar_accessors(self):
        z = Complex(3.0, 4.0)
        assert z.length() == 5.0
        assert z.abs() == 5.0
        assert z.abs_squared() == 25.0
        assert z.angle() == pytest.approx(math.atan2(4.0, 3.0))
        assert Complex(2.0).is_real()
        assert Complex(0.0, 2.0).is_imaginary()

    def test_contract(self):
        z = Complex(1.0, 1.0)
        z.multiply_by(Complex(0.0, 1.0))
        assert z == Complex(-1.0, 1.0)
        z.add(Complex(1.0, -1.0))
        assert z.is_null()
        z.set_identity()
        assert z == 1.0
        z.add(Real(2.0))
        assert z == 3.0

    def test_set_product_aliasing(self):
        z = Complex(1.0, 2.0)
        z.set_product(z, z)
        assert z == (1 + 2j) ** 2

    def test_inverse(self):
        z = Complex(1.0, 2.0)
        inverse = z.get_inverse()
        assert_close(inverse, 1 / (1 + 2j))
        product = z.copy()
        product.multiply_by(inverse)
        assert_close(product, 1.0)

    def test_ratio(self):
        z = Complex()
        z.set_ratio(Complex(1.0, 2.0), Complex(3.0, -1.0))
        assert_close(z, (1 + 2j) / (3 - 1j))

    def test_i_multiplication(self):
        z = Complex(1.0, 2.0)
        z.multiply_by_i()
        assert z == 1j * (1 + 2j)
        z.divide_by_i()
        assert z == Complex(1.0, 2.0)


class TestComplexFunctions:
    @pytest.mark.parametrize("name, func", [
        ("exp", cmath.exp),
        ("log", cmath.log),
        ("sqrt", cmath.sqrt),
        ("sin", cmath.sin),
        ("cos", cmath.cos),
        ("tan", cmath.tan),
        ("sinh", cmath.sinh),
        ("cosh", cmath.cosh),
        ("tanh", cmath.tanh),
    ])
    def test_against_cmath(self, name, func):
        z = Complex(0.3, -0.7)
        getattr(z, name)()
        assert_close(z, func(0.3 - 0.7j))

    def test_expm1_log1p(self):
        # First-order terms dominate for tiny arguments
        z = Complex(1e-9, 1e-9)
        z.expm1()
        assert z.re == pytest.approx(1e-9, rel=1e-6)
        assert z.im == pytest.approx(1e-9, rel=1e-6)
        z = Complex(1e-9, 1e-9)
        z.log1p()
        assert z.re == pytest.approx(1e-9, rel=1e-6)
        assert z.im == pytest.approx(1e-9, rel=1e-6)

        z = Complex(0.5, 0.0)
        z.expm1()
        assert z == math.expm1(0.5)

    def test_cbrt(self):
        z = Complex(-8.0, 0.0)
        z.cbrt()
        assert_close(z, cmath.rect(2.0, math.pi / 3))

    def test_pow(self):
        z = Complex(1.0, 1.0)
        z.pow(3)
        assert_close(z, (1 + 1j) ** 3)
        z = Complex(1.0, 1.0)
        z.pow(Complex(0.5, 0.5))
        assert_close(z, (1 + 1j) ** (0.5 + 0.5j))

    def test_log_zero(self):
        z = Complex()
        z.log()
        assert z.re == -math.inf

    def test_conjugate_negate_square(self):
        z = Complex(1.0, 2.0)
        z.conjugate()
        assert z == 1 - 2j
        z.negate()
        assert z == -1 + 2j
        z.square()
        assert z == (-1 + 2j) ** 2


class TestComplexProtocol:
    def test_math_dispatch(self):
        z = Complex(1.0, 1.0)
        z.math('*', 2.0)
        assert z == 2 + 2j
        z.math('/', Complex(0.0, 2.0))
        assert_close(z, (2 + 2j) / 2j)
        with pytest.raises(ValidationError, match="Illegal operation"):
            z.math('%', 2.0)

    def test_operators(self):
        a, b = Complex(1.0, 2.0), Complex(3.0, -1.0)
        assert a + b == 4 + 1j
        assert a - b == -2 + 3j
        assert_close(a * b, (1 + 2j) * (3 - 1j))
        assert_close(a / b, (1 + 2j) / (3 - 1j))
        assert 1 + a == 2 + 2j
        assert 1 - a == -2j
        assert a * 1j == (1 + 2j) * 1j
        assert_close(2 / a, 2 / (1 + 2j))
        assert_close(a ** 2, (1 + 2j) ** 2)
        assert -a == -1 - 2j

    def test_str(self):
        assert str(Complex(1.0, -2.0)) == "1.0-2.0i"
        assert str(Complex(1.0, 2.0)) == "1.0+2.0i"
        assert complex(Complex(1.0, 2.0)) == 1 + 2j
        assert hash(Complex(1.0, 2.0)) == hash(1 + 2j)
