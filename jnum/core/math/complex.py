"""
Complex value type implementing the algebraic element contract.

Provides the mutable ``Complex`` number with in-place elementary functions
and a small operator dispatcher, so that complex matrices can be driven by
the generic linear algebra routines.
"""

import cmath
import math
from typing import Union

from ..base.exceptions import ValidationError
from .algebra import AlgebraElement


Number = Union[int, float]


class Complex(AlgebraElement):
    """Mutable complex number.

    Parameters
    ----------
    re : float
        Real part
    im : float
        Imaginary part
    """

    __slots__ = ('re', 'im')

    def __init__(self, re: Union[Number, complex] = 0.0, im: Number = 0.0):
        if isinstance(re, complex):
            re, im = re.real, re.imag
        self.re = float(re)
        self.im = float(im)

    @classmethod
    def from_polar(cls, r: float, angle: float) -> "Complex":
        z = cls()
        z.set_polar(r, angle)
        return z

    def set(self, re: float, im: float) -> None:
        self.re = re
        self.im = im

    def set_polar(self, r: float, angle: float) -> None:
        self.re = r * math.cos(angle)
        self.im = r * math.sin(angle)

    def to_complex(self) -> complex:
        return complex(self.re, self.im)

    def _set_from(self, z: complex) -> None:
        self.re = z.real
        self.im = z.imag

    # Polar accessors

    def length(self) -> float:
        return math.hypot(self.re, self.im)

    def abs_squared(self) -> float:
        return self.re * self.re + self.im * self.im

    def angle(self) -> float:
        return math.atan2(self.im, self.re)

    def is_real(self) -> bool:
        return self.im == 0.0

    def is_imaginary(self) -> bool:
        return self.re == 0.0

    # Element contract

    def copy(self) -> "Complex":
        return Complex(self.re, self.im)

    def zero(self) -> None:
        self.re = self.im = 0.0

    def set_identity(self) -> None:
        self.re, self.im = 1.0, 0.0

    def is_null(self) -> bool:
        return self.re == 0.0 and self.im == 0.0

    def add(self, other: Union["Complex", Number]) -> None:
        if isinstance(other, Complex):
            self.re += other.re
            self.im += other.im
        else:
            self.re += float(other)

    def subtract(self, other: Union["Complex", Number]) -> None:
        if isinstance(other, Complex):
            self.re -= other.re
            self.im -= other.im
        else:
            self.re -= float(other)

    def scale(self, factor: float) -> None:
        self.re *= factor
        self.im *= factor

    def multiply_by(self, other: "Complex") -> None:
        self.set_product(self, other)

    def set_product(self, a: "Complex", b: "Complex") -> None:
        self.set(a.re * b.re - a.im * b.im, a.re * b.im + a.im * b.re)

    def divide_by(self, other: "Complex") -> None:
        self.set_ratio(self, other)

    def set_ratio(self, a: "Complex", b: "Complex") -> None:
        norm = 1.0 / b.abs_squared()
        self.set((a.re * b.re + a.im * b.im) * norm, (a.im * b.re - a.re * b.im) * norm)

    def get_inverse(self) -> "Complex":
        z = self.copy()
        z.inverse()
        return z

    def inverse(self) -> None:
        self.conjugate()
        self.scale(1.0 / self.abs_squared())

    def abs(self) -> float:
        return self.length()

    def assign(self, other: "Complex") -> None:
        self.set(other.re, other.im)

    # Elementary functions, in place

    def conjugate(self) -> None:
        self.im = -self.im

    def negate(self) -> None:
        self.re, self.im = -self.re, -self.im

    def multiply_by_i(self) -> None:
        self.set(-self.im, self.re)

    def divide_by_i(self) -> None:
        self.set(self.im, -self.re)

    def square(self) -> None:
        self.set_product(self, self)

    def pow(self, exponent: Union["Complex", Number]) -> None:
        """Raise to a real or complex power (principal branch)."""
        if isinstance(exponent, Complex):
            self.log()
            self.multiply_by(exponent)
            self.exp()
        else:
            self.set_polar(math.pow(self.length(), exponent), exponent * self.angle())

    def sqrt(self) -> None:
        self.set_polar(math.sqrt(self.length()), 0.5 * self.angle())

    def cbrt(self) -> None:
        self.set_polar(math.pow(self.length(), 1.0 / 3.0), self.angle() / 3.0)

    def exp(self) -> None:
        self.set_polar(math.exp(self.re), self.im)

    def expm1(self) -> None:
        if self.im == 0.0:
            self.re = math.expm1(self.re)
        else:
            sin_half = math.sin(0.5 * self.im)
            self.set(math.expm1(self.re) * math.cos(self.im) - 2.0 * sin_half * sin_half,
                     math.exp(self.re) * math.sin(self.im))

    def log(self) -> None:
        r = self.length()
        self.set(math.log(r) if r > 0.0 else -math.inf, self.angle())

    def log1p(self) -> None:
        if self.im == 0.0:
            self.re = math.log1p(self.re)
        else:
            x, y = self.re, self.im
            self.set(0.5 * math.log1p(x * (x + 2.0) + y * y), math.atan2(y, 1.0 + x))

    def sin(self) -> None:
        self._set_from(cmath.sin(self.to_complex()))

    def cos(self) -> None:
        self._set_from(cmath.cos(self.to_complex()))

    def tan(self) -> None:
        self._set_from(cmath.tan(self.to_complex()))

    def sinh(self) -> None:
        self._set_from(cmath.sinh(self.to_complex()))

    def cosh(self) -> None:
        self._set_from(cmath.cosh(self.to_complex()))

    def tanh(self) -> None:
        self._set_from(cmath.tanh(self.to_complex()))

    def math(self, op: str, other: Union["Complex", Number]) -> None:
        """Apply a binary operator in place.

        Parameters
        ----------
        op : str
            One of '+', '-', '*', '/', '^'
        other : Complex or float
            Right-hand operand

        Raises
        ------
        ValidationError
            If the operator is not recognised
        """
        if op == '+':
            self.add(other)
        elif op == '-':
            self.subtract(other)
        elif op == '*':
            if isinstance(other, Complex):
                self.multiply_by(other)
            else:
                self.scale(other)
        elif op == '/':
            if isinstance(other, Complex):
                self.divide_by(other)
            else:
                self.scale(1.0 / other)
        elif op == '^':
            self.pow(other)
        else:
            raise ValidationError(f"Illegal operation: {op!r}", field="op", value=op)

    # Python numeric protocol

    def __complex__(self) -> complex:
        return self.to_complex()

    def __eq__(self, other) -> bool:
        if isinstance(other, Complex):
            return self.re == other.re and self.im == other.im
        if isinstance(other, (int, float, complex)):
            return self.to_complex() == other
        return NotImplemented

    def __hash__(self):
        return hash(self.to_complex())

    def __neg__(self) -> "Complex":
        return Complex(-self.re, -self.im)

    def _binary(self, other, op: str) -> "Complex":
        result = self.copy()
        if isinstance(other, complex):
            other = Complex(other)
        result.math(op, other)
        return result

    def __add__(self, other):
        if isinstance(other, (Complex, int, float, complex)):
            return self._binary(other, '+')
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (Complex, int, float, complex)):
            return self._binary(other, '-')
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, (int, float, complex)):
            return Complex(other) - self
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, (Complex, int, float, complex)):
            return self._binary(other, '*')
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, (Complex, int, float, complex)):
            return self._binary(other, '/')
        return NotImplemented

    def __rtruediv__(self, other):
        if isinstance(other, (int, float, complex)):
            return Complex(other) / self
        return NotImplemented

    def __pow__(self, exponent):
        if isinstance(exponent, (Complex, int, float, complex)):
            return self._binary(exponent, '^')
        return NotImplemented

    def __repr__(self) -> str:
        return f"Complex({self.re!r}, {self.im!r})"

    def __str__(self) -> str:
        return f"{self.re}{'' if self.im < 0 else '+'}{self.im}i"
