"""
Two- and three-dimensional real vectors.
"""

import math
from typing import Sequence, Union

import numpy as np

from ..base.exceptions import ShapeError, ValidationError


class Vector2D:
    """Mutable 2-D real vector.

    Parameters
    ----------
    x, y : float
        Components
    """

    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def from_polar(cls, r: float, angle: float) -> "Vector2D":
        v = cls()
        v.set_polar(r, angle)
        return v

    def copy(self) -> "Vector2D":
        return Vector2D(self.x, self.y)

    def set(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def zero(self) -> None:
        self.x = self.y = 0.0

    def is_null(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    abs = length

    def abs_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def angle(self) -> float:
        """Polar angle, or NaN for the null vector."""
        if self.is_null():
            return math.nan
        return math.atan2(self.y, self.x)

    def set_polar(self, r: float, angle: float) -> None:
        self.set(r * math.cos(angle), r * math.sin(angle))

    def set_unit_vector_at(self, angle: float) -> None:
        self.set_polar(1.0, angle)

    def add(self, v: "Vector2D") -> None:
        self.x += v.x
        self.y += v.y

    def subtract(self, v: "Vector2D") -> None:
        self.x -= v.x
        self.y -= v.y

    def add_scaled(self, v: "Vector2D", factor: float) -> None:
        self.x += factor * v.x
        self.y += factor * v.y

    def scale(self, factor: float) -> None:
        self.x *= factor
        self.y *= factor

    def flip(self) -> None:
        self.scale(-1.0)

    def rotate(self, alpha: float) -> None:
        """Rotate counter-clockwise by ``alpha`` radians."""
        s, c = math.sin(alpha), math.cos(alpha)
        self.set(self.x * c - self.y * s, self.x * s + self.y * c)

    def dot(self, v: Union["Vector2D", Sequence[float]]) -> float:
        if isinstance(v, Vector2D):
            return self.x * v.x + self.y * v.y
        if len(v) != 2:
            raise ShapeError(f"Expected 2 components, got {len(v)}", shape=(len(v),), expected=(2,))
        return self.x * v[0] + self.y * v[1]

    def normalize(self) -> float:
        """Scale to unit length and return the previous length.

        Raises
        ------
        ValidationError
            If the vector is null
        """
        if self.is_null():
            raise ValidationError("Cannot normalize a null vector")
        length = self.length()
        self.scale(1.0 / length)
        return length

    def project_on(self, v: "Vector2D") -> None:
        """Replace this vector by its projection onto ``v``."""
        scaling = self.dot(v) / v.abs_squared()
        self.set(scaling * v.x, scaling * v.y)

    def reflect_on(self, v: "Vector2D") -> None:
        """Mirror this vector across the line along ``v``."""
        projection = self.copy()
        projection.project_on(v)
        self.set(2.0 * projection.x - self.x, 2.0 * projection.y - self.y)

    def distance_to(self, v: "Vector2D") -> float:
        return math.hypot(v.x - self.x, v.y - self.y)

    def math(self, op: str, other: Union["Vector2D", float]) -> None:
        if isinstance(other, Vector2D):
            if op == '+':
                self.add(other)
            elif op == '-':
                self.subtract(other)
            else:
                raise ValidationError(f"Illegal operation: {op!r}", field="op", value=op)
        elif op == '*':
            self.scale(other)
        elif op == '/':
            self.scale(1.0 / other)
        else:
            raise ValidationError(f"Illegal operation: {op!r}", field="op", value=op)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vector2D":
        return Vector2D(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"Vector2D({self.x!r}, {self.y!r})"

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Vector3D:
    """Mutable 3-D real vector.

    Parameters
    ----------
    x, y, z : float
        Components
    """

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def copy(self) -> "Vector3D":
        return Vector3D(self.x, self.y, self.z)

    def set(self, x: float, y: float, z: float) -> None:
        self.x = x
        self.y = y
        self.z = z

    def zero(self) -> None:
        self.x = self.y = self.z = 0.0

    def is_null(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def length(self) -> float:
        return math.sqrt(self.abs_squared())

    abs = length

    def abs_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def theta(self) -> float:
        """Polar angle from the +z axis."""
        return math.atan2(math.hypot(self.x, self.y), self.z)

    def phi(self) -> float:
        """Azimuth in the x-y plane."""
        return math.atan2(self.y, self.x)

    def set_unit_vector_at(self, theta: float, phi: float) -> None:
        """Set to the unit vector at polar angle ``theta`` from +z and azimuth ``phi``."""
        self.set(math.sin(theta), 0.0, math.cos(theta))
        self.rotate_z(phi)

    def add(self, v: "Vector3D") -> None:
        self.x += v.x
        self.y += v.y
        self.z += v.z

    def subtract(self, v: "Vector3D") -> None:
        self.x -= v.x
        self.y -= v.y
        self.z -= v.z

    def add_scaled(self, v: "Vector3D", factor: float) -> None:
        self.x += factor * v.x
        self.y += factor * v.y
        self.z += factor * v.z

    def scale(self, factor: float) -> None:
        self.x *= factor
        self.y *= factor
        self.z *= factor

    def flip(self) -> None:
        self.scale(-1.0)

    def rotate_x(self, angle: float) -> None:
        s, c = math.sin(angle), math.cos(angle)
        self.set(self.x, c * self.y - s * self.z, s * self.y + c * self.z)

    def rotate_y(self, angle: float) -> None:
        s, c = math.sin(angle), math.cos(angle)
        self.set(c * self.x + s * self.z, self.y, c * self.z - s * self.x)

    def rotate_z(self, angle: float) -> None:
        s, c = math.sin(angle), math.cos(angle)
        self.set(c * self.x - s * self.y, s * self.x + c * self.y, self.z)

    def dot(self, v: Union["Vector3D", Sequence[float]]) -> float:
        if isinstance(v, Vector3D):
            return self.x * v.x + self.y * v.y + self.z * v.z
        if len(v) != 3:
            raise ShapeError(f"Expected 3 components, got {len(v)}", shape=(len(v),), expected=(3,))
        return self.x * v[0] + self.y * v[1] + self.z * v[2]

    def cross(self, v: "Vector3D") -> "Vector3D":
        return Vector3D(self.y * v.z - self.z * v.y,
                        self.z * v.x - self.x * v.z,
                        self.x * v.y - self.y * v.x)

    def normalize(self) -> float:
        """Scale to unit length and return the previous length.

        Raises
        ------
        ValidationError
            If the vector is null
        """
        if self.is_null():
            raise ValidationError("Cannot normalize a null vector")
        length = self.length()
        self.scale(1.0 / length)
        return length

    def project_on(self, v: "Vector3D") -> None:
        scaling = self.dot(v) / v.abs_squared()
        self.set(scaling * v.x, scaling * v.y, scaling * v.z)

    def reflect_on(self, v: "Vector3D") -> None:
        """Mirror this vector about the axis along ``v``."""
        projection = self.copy()
        projection.project_on(v)
        self.set(2.0 * projection.x - self.x, 2.0 * projection.y - self.y, 2.0 * projection.z - self.z)

    def distance_to(self, v: "Vector3D") -> float:
        return math.sqrt((v.x - self.x) ** 2 + (v.y - self.y) ** 2 + (v.z - self.z) ** 2)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __add__(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vector3D":
        return Vector3D(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3D":
        return Vector3D(-self.x, -self.y, -self.z)

    def __repr__(self) -> str:
        return f"Vector3D({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.z})"
