"""
Fixed-size vectors of algebraic elements.
"""

import math
from typing import Any, Callable, Iterable, Iterator, List, Sequence, Union

import numpy as np

from ..base.exceptions import ShapeError, ValidationError
from ..math.algebra import AlgebraElement
from ..math.scalar import Real
from ..math.complex import Complex


ElementFactory = Callable[[], AlgebraElement]


def as_element(value: Any) -> AlgebraElement:
    """Wrap plain numbers as elements; pass elements through unchanged.

    Raises
    ------
    ValidationError
        If the value is neither a number nor an ``AlgebraElement``
    """
    if isinstance(value, AlgebraElement):
        return value
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"Booleans are not matrix elements: {value!r}", value=value)
    if isinstance(value, (complex, np.complexfloating)):
        return Complex(complex(value))
    if isinstance(value, (int, float, np.integer, np.floating)):
        return Real(float(value))
    raise ValidationError(f"Cannot use {type(value).__name__} as a matrix element", value=value)


def element_factory(template: AlgebraElement) -> ElementFactory:
    """Return a zero-argument callable creating zero elements like ``template``."""
    if type(template) in (Real, Complex):
        return type(template)
    return template.new_zero


class GenericVector:
    """Vector whose components are algebraic elements of one kind.

    Parameters
    ----------
    element_type : callable
        Zero-argument callable returning a new zero element, e.g. ``Real``
    size : int
        Number of components
    """

    def __init__(self, element_type: ElementFactory, size: int):
        if size < 0:
            raise ShapeError(f"Vector size must be non-negative, got {size}", shape=(size,))
        self.element_type = element_type
        self.components: List[AlgebraElement] = [element_type() for _ in range(size)]

    @classmethod
    def from_data(cls, values: Iterable[Any]) -> "GenericVector":
        """Create a vector holding copies of the given elements or numbers.

        Raises
        ------
        ShapeError
            If no values are given
        """
        elements = [as_element(v).copy() for v in values]
        if not elements:
            raise ShapeError("Cannot infer the element type of an empty vector", shape=(0,))
        vector = cls(element_factory(elements[0]), 0)
        vector.components = elements
        return vector

    @property
    def size(self) -> int:
        return len(self.components)

    def get_component(self, i: int) -> AlgebraElement:
        return self.components[i]

    def set_component(self, i: int, value: Any) -> None:
        self.components[i] = as_element(value)

    def copy(self) -> "GenericVector":
        vector = GenericVector(self.element_type, 0)
        vector.components = [c.copy() for c in self.components]
        return vector

    def zero(self) -> None:
        for c in self.components:
            c.zero()

    def is_null(self) -> bool:
        return all(c.is_null() for c in self.components)

    def _check_size(self, other: "GenericVector") -> None:
        if other.size != self.size:
            raise ShapeError("Mismatched vector sizes", shape=(other.size,), expected=(self.size,))

    def add(self, other: "GenericVector") -> None:
        self._check_size(other)
        for a, b in zip(self.components, other.components):
            a.add(b)

    def subtract(self, other: "GenericVector") -> None:
        self._check_size(other)
        for a, b in zip(self.components, other.components):
            a.subtract(b)

    def scale(self, factor: float) -> None:
        for c in self.components:
            c.scale(factor)

    def dot(self, other: "GenericVector") -> AlgebraElement:
        """Sum of component products ``a[i] * b[i]``."""
        self._check_size(other)
        result = self.element_type()
        product = self.element_type()
        for a, b in zip(self.components, other.components):
            product.set_product(a, b)
            result.add(product)
        return result

    def abs(self) -> float:
        """Euclidean norm of the component magnitudes."""
        return math.sqrt(sum(c.abs() ** 2 for c in self.components))

    def to_array(self) -> np.ndarray:
        """Numpy view of real or complex components.

        Raises
        ------
        TypeError
            If the components are neither ``Real`` nor ``Complex``
        """
        if all(isinstance(c, Real) for c in self.components):
            return np.array([c.value for c in self.components], dtype=float)
        if all(isinstance(c, (Real, Complex)) for c in self.components):
            return np.array([complex(c) for c in self.components], dtype=complex)
        raise TypeError("Only Real or Complex vectors convert to numpy arrays")

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[AlgebraElement]:
        return iter(self.components)

    def __getitem__(self, i: int) -> AlgebraElement:
        return self.components[i]

    def __setitem__(self, i: int, value: Union[AlgebraElement, float, complex]) -> None:
        self.set_component(i, value)

    def __repr__(self) -> str:
        return f"GenericVector({self.components!r})"

    def __str__(self) -> str:
        return "{" + ", ".join(str(c) for c in self.components) + "}"


def vector_from(values: Union[GenericVector, Sequence[Any]]) -> GenericVector:
    """Coerce a vector or a plain sequence into a ``GenericVector``."""
    if isinstance(values, GenericVector):
        return values
    return GenericVector.from_data(values)
