"""
Cubic convolution spline coefficients and spline interpolation.

``CubicSpline`` caches the four Keys cubic convolution weights (a = -0.5)
for one fractional sample position; repositioning to the same position, or
to another position with the same fractional offset, reuses the cached
weights. ``SplineSet`` and ``BicubicSpline`` hold one spline per axis, and
the ``interpolate_*`` helpers perform the weighted window sums over numpy
data.
"""

import math
from typing import List, Optional

import numpy as np

from ..base.exceptions import ShapeError, ValidationError


NCOEFFS = 4


class CubicSpline:
    """Cubic convolution weights centered on a fractional index.

    After ``center_on(i)`` the weights apply to the integer indices
    ``min_index <= k < max_index``, with ``min_index = floor(i - 1)``.
    """

    __slots__ = ('center_index', 'local_center', 'i0', 'coeffs')

    def __init__(self):
        self.center_index = math.nan
        self.local_center = math.nan
        self.i0 = 0
        self.coeffs = [0.0] * NCOEFFS

    @staticmethod
    def value_for(dx: float) -> float:
        """Cubic convolution kernel at offset ``dx``."""
        dx = abs(dx)
        if dx > 1.0:
            return ((-0.5 * dx + 2.5) * dx - 4.0) * dx + 2.0
        return (1.5 * dx - 2.5) * dx * dx + 1.0

    def center_on(self, i: float) -> None:
        if i == self.center_index:
            return
        self.center_index = i
        self.i0 = int(math.floor(i - 1.0))
        self._set_local_center(i - self.i0)

    def _set_local_center(self, delta: float) -> None:
        if delta != self.local_center:
            for k in range(NCOEFFS):
                self.coeffs[k] = self.value_for(k - delta)
            self.local_center = delta

    def coefficient_at(self, i: int) -> float:
        """Weight of integer index ``i``.

        Raises
        ------
        IndexError
            If ``i`` lies outside ``[min_index, max_index)``
        """
        offset = i - self.i0
        if not 0 <= offset < NCOEFFS:
            raise IndexError(f"Index {i} outside spline window [{self.min_index}, {self.max_index})")
        return self.coeffs[offset]

    @property
    def min_index(self) -> int:
        return self.i0

    @property
    def max_index(self) -> int:
        return self.i0 + NCOEFFS

    def copy(self) -> "CubicSpline":
        spline = CubicSpline()
        spline.center_index = self.center_index
        spline.local_center = self.local_center
        spline.i0 = self.i0
        spline.coeffs = list(self.coeffs)
        return spline

    def __eq__(self, other) -> bool:
        if not isinstance(other, CubicSpline):
            return NotImplemented
        if math.isnan(self.center_index) and math.isnan(other.center_index):
            return True
        return self.center_index == other.center_index

    def __hash__(self):
        return hash(self.center_index)

    def __repr__(self) -> str:
        return f"CubicSpline(center_index={self.center_index!r})"


class SplineSet:
    """One ``CubicSpline`` per dimension.

    Parameters
    ----------
    dimension : int
        Number of axes

    Raises
    ------
    ValidationError
        If the dimension is not positive
    """

    def __init__(self, dimension: int):
        if dimension <= 0:
            raise ValidationError(f"Spline set dimension must be positive, got {dimension}",
                                  field="dimension", value=dimension)
        self.splines: List[CubicSpline] = [CubicSpline() for _ in range(dimension)]

    @property
    def dimension(self) -> int:
        return len(self.splines)

    def center_on(self, *offsets: float) -> None:
        """Center each axis spline on its fractional index.

        Raises
        ------
        ShapeError
            If the number of offsets differs from the dimension
        """
        if len(offsets) != self.dimension:
            raise ShapeError(f"Expected {self.dimension} offsets, got {len(offsets)}",
                             shape=(len(offsets),), expected=(self.dimension,))
        for spline, offset in zip(self.splines, offsets):
            spline.center_on(offset)

    def get_spline(self, index: int) -> CubicSpline:
        return self.splines[index]


class BicubicSpline(SplineSet):
    """Two-dimensional spline set with product weights."""

    def __init__(self):
        super().__init__(2)

    def coefficient_at(self, i: int, j: int) -> float:
        return self.splines[0].coefficient_at(i) * self.splines[1].coefficient_at(j)


def interpolate_1d(data: np.ndarray, index: float, spline: Optional[CubicSpline] = None) -> float:
    """Cubic spline interpolation of 1-D samples at a fractional index.

    Samples outside the array, or NaN, are left out and the remaining
    weights renormalised.

    Parameters
    ----------
    data : np.ndarray
        1-D samples
    index : float
        Fractional sample index
    spline : CubicSpline, optional
        Spline to reuse across calls

    Returns
    -------
    float
        Interpolated value, or NaN if no valid sample is in range
    """
    data = np.asarray(data, dtype=float)
    if data.ndim != 1:
        raise ShapeError(f"Expected 1-dimensional data, got {data.ndim} dimensions",
                         shape=data.shape, expected="1D")
    if spline is None:
        spline = CubicSpline()
    spline.center_on(index)

    total = weight_sum = 0.0
    for i in range(max(0, spline.min_index), min(data.size, spline.max_index)):
        value = data[i]
        if np.isnan(value):
            continue
        w = spline.coefficient_at(i)
        total += w * value
        weight_sum += w

    return total / weight_sum if weight_sum != 0.0 else math.nan


def interpolate_2d(image: np.ndarray, x: float, y: float, spline: Optional[SplineSet] = None) -> float:
    """Bicubic spline interpolation of a 2-D array.

    Parameters
    ----------
    image : np.ndarray
        2-D samples
    x, y : float
        Fractional indices along the first and second array axes
    spline : SplineSet, optional
        Two-dimensional spline set to reuse across calls

    Returns
    -------
    float
        Interpolated value, or NaN if no valid sample is in range
    """
    image = np.asarray(image, dtype=float)
    if image.ndim != 2:
        raise ShapeError(f"Expected 2-dimensional data, got {image.ndim} dimensions",
                         shape=image.shape, expected="2D")
    if spline is None:
        spline = BicubicSpline()
    spline.center_on(x, y)

    spline_x = spline.get_spline(0)
    spline_y = spline.get_spline(1)

    from_i, to_i = max(0, spline_x.min_index), min(image.shape[0], spline_x.max_index)
    from_j, to_j = max(0, spline_y.min_index), min(image.shape[1], spline_y.max_index)

    total = weight_sum = 0.0
    for i in range(from_i, to_i):
        wx = spline_x.coefficient_at(i)
        for j in range(from_j, to_j):
            value = image[i, j]
            if np.isnan(value):
                continue
            w = wx * spline_y.coefficient_at(j)
            total += w * value
            weight_sum += w

    return total / weight_sum if weight_sum != 0.0 else math.nan
