"""
Algebraic element contract for generic linear algebra.

The generic matrix routines only ever touch their entries through the small
set of in-place operations declared here, so any type implementing them
(real scalars, complex numbers, square matrices as blocks) can populate a
``GenericMatrix``.
"""

from abc import ABC, abstractmethod


class AlgebraElement(ABC):
    """Abstract element of a (not necessarily commutative) ring.

    All mutators operate in place and return ``None``; ``copy`` and
    ``get_inverse`` return new, independent objects.
    """

    @abstractmethod
    def copy(self) -> "AlgebraElement":
        """Return an independent copy of this element."""

    @abstractmethod
    def zero(self) -> None:
        """Set this element to the additive identity."""

    @abstractmethod
    def set_identity(self) -> None:
        """Set this element to the multiplicative identity."""

    @abstractmethod
    def is_null(self) -> bool:
        """Whether this element equals the additive identity."""

    @abstractmethod
    def add(self, other: "AlgebraElement") -> None:
        pass

    @abstractmethod
    def subtract(self, other: "AlgebraElement") -> None:
        pass

    @abstractmethod
    def scale(self, factor: float) -> None:
        pass

    @abstractmethod
    def multiply_by(self, other: "AlgebraElement") -> None:
        """Right-multiply in place: ``self = self * other``."""

    @abstractmethod
    def set_product(self, a: "AlgebraElement", b: "AlgebraElement") -> None:
        """Set this element to ``a * b``. The operands may alias ``self``."""

    @abstractmethod
    def get_inverse(self) -> "AlgebraElement":
        """Return the multiplicative inverse as a new element."""

    @abstractmethod
    def abs(self) -> float:
        """Non-negative magnitude used for pivot selection."""

    def set_sum(self, a: "AlgebraElement", b: "AlgebraElement") -> None:
        result = a.copy()
        result.add(b)
        self.assign(result)

    def set_difference(self, a: "AlgebraElement", b: "AlgebraElement") -> None:
        result = a.copy()
        result.subtract(b)
        self.assign(result)

    def add_scaled(self, other: "AlgebraElement", factor: float) -> None:
        increment = other.copy()
        increment.scale(factor)
        self.add(increment)

    def assign(self, other: "AlgebraElement") -> None:
        """Copy the value of ``other`` into this element."""
        self.zero()
        self.add(other)

    def new_zero(self) -> "AlgebraElement":
        """Return a new zero element of the same kind as this one."""
        element = self.copy()
        element.zero()
        return element

    def new_identity(self) -> "AlgebraElement":
        """Return a new identity element of the same kind as this one."""
        element = self.copy()
        element.set_identity()
        return element
