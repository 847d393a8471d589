"""
Real scalar value type implementing the algebraic element contract.
"""

import math
from functools import total_ordering
from typing import Union

from .algebra import AlgebraElement


Number = Union[int, float]


@total_ordering
class Real(AlgebraElement):
    """Mutable real scalar.

    The elementary functions (``sin``, ``log``, ``pow``, ...) replace the
    value in place, mirroring the other element types so that the same
    code can drive real and complex matrices.

    Parameters
    ----------
    value : float
        Initial value
    """

    __slots__ = ('value',)

    def __init__(self, value: Number = 0.0):
        self.value = float(value)

    # Element contract

    def copy(self) -> "Real":
        return Real(self.value)

    def zero(self) -> None:
        self.value = 0.0

    def set_identity(self) -> None:
        self.value = 1.0

    def is_null(self) -> bool:
        return self.value == 0.0

    def add(self, other: Union["Real", Number]) -> None:
        self.value += float(other)

    def subtract(self, other: Union["Real", Number]) -> None:
        self.value -= float(other)

    def scale(self, factor: float) -> None:
        self.value *= factor

    def multiply_by(self, other: Union["Real", Number]) -> None:
        self.value *= float(other)

    def set_product(self, a: Union["Real", Number], b: Union["Real", Number]) -> None:
        self.value = float(a) * float(b)

    def divide_by(self, other: Union["Real", Number]) -> None:
        self.value /= float(other)

    def set_ratio(self, a: Union["Real", Number], b: Union["Real", Number]) -> None:
        self.value = float(a) / float(b)

    def get_inverse(self) -> "Real":
        return Real(1.0 / self.value)

    def invert(self) -> None:
        self.value = 1.0 / self.value

    def abs(self) -> float:
        return abs(self.value)

    def assign(self, other: Union["Real", Number]) -> None:
        self.value = float(other)

    def is_nan(self) -> bool:
        return math.isnan(self.value)

    def distance_to(self, other: Union["Real", Number]) -> float:
        return abs(self.value - float(other))

    # Elementary functions, in place

    def acos(self) -> None:
        self.value = math.acos(self.value)

    def asin(self) -> None:
        self.value = math.asin(self.value)

    def atan(self) -> None:
        self.value = math.atan(self.value)

    def cos(self) -> None:
        self.value = math.cos(self.value)

    def sin(self) -> None:
        self.value = math.sin(self.value)

    def tan(self) -> None:
        self.value = math.tan(self.value)

    def cosh(self) -> None:
        self.value = math.cosh(self.value)

    def sinh(self) -> None:
        self.value = math.sinh(self.value)

    def tanh(self) -> None:
        self.value = math.tanh(self.value)

    def asinh(self) -> None:
        self.value = math.asinh(self.value)

    def acosh(self) -> None:
        self.value = math.acosh(self.value)

    def atanh(self) -> None:
        self.value = math.atanh(self.value)

    def exp(self) -> None:
        self.value = math.exp(self.value)

    def expm1(self) -> None:
        self.value = math.expm1(self.value)

    def log(self) -> None:
        self.value = math.log(self.value)

    def log1p(self) -> None:
        self.value = math.log1p(self.value)

    def pow(self, exponent: float) -> None:
        self.value = math.pow(self.value, exponent)

    def sqrt(self) -> None:
        self.value = math.sqrt(self.value)

    def square(self) -> None:
        self.value *= self.value

    # Python numeric protocol

    def __float__(self) -> float:
        return self.value

    def __complex__(self) -> complex:
        return complex(self.value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Real):
            return self.value == other.value
        if isinstance(other, (int, float)):
            return self.value == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, (Real, int, float)):
            return self.value < float(other)
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __neg__(self) -> "Real":
        return Real(-self.value)

    def __abs__(self) -> "Real":
        return Real(abs(self.value))

    def __add__(self, other) -> "Real":
        if isinstance(other, (Real, int, float)):
            return Real(self.value + float(other))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other) -> "Real":
        if isinstance(other, (Real, int, float)):
            return Real(self.value - float(other))
        return NotImplemented

    def __rsub__(self, other) -> "Real":
        if isinstance(other, (int, float)):
            return Real(float(other) - self.value)
        return NotImplemented

    def __mul__(self, other) -> "Real":
        if isinstance(other, (Real, int, float)):
            return Real(self.value * float(other))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Real":
        if isinstance(other, (Real, int, float)):
            return Real(self.value / float(other))
        return NotImplemented

    def __rtruediv__(self, other) -> "Real":
        if isinstance(other, (int, float)):
            return Real(float(other) / self.value)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Real({self.value!r})"

    def __str__(self) -> str:
        return str(self.value)
