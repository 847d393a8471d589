"""
Elliptical Gaussian point spread functions.

``GaussianPSF`` describes an elliptical Gaussian by its major and minor
full widths at half maximum and the position angle of its major axis.
Convolution and deconvolution of two such Gaussians are again Gaussian,
which is what ``combine_with`` computes in closed form. The class also
renders beam kernels, smooths images, and reads and writes the standard
``BMAJ``/``BMIN``/``BPA`` FITS header keywords.
"""

import logging
import math
from typing import Any, Optional, Union

import numpy as np
from astropy import units as u
from astropy.io import fits
from scipy.signal import fftconvolve

from ..base.exceptions import DeconvolutionError, FitsHeaderError, validate_positive, validate_type
from ..base.validation import validate_fwhm, validate_image
from ..config.settings import get_config
from ..log_manager import PerformanceLogger

logger = logging.getLogger(__name__)
performance = PerformanceLogger(logger)

RIGHT_ANGLE = 0.5 * math.pi
SIGMAS_IN_FWHM = 2.0 * math.sqrt(2.0 * math.log(2.0))
AREA_FACTOR = 2.0 * math.pi / (SIGMAS_IN_FWHM * SIGMAS_IN_FWHM)


class GaussianPSF:
    """Elliptical Gaussian point spread function.

    Parameters
    ----------
    major : float
        Major axis FWHM, in ``size_unit``
    minor : float, optional
        Minor axis FWHM; defaults to ``major`` (circular beam)
    position_angle : float
        Position angle of the major axis, in radians
    name : str, optional
        Beam name, written as ``BNAM`` to FITS headers
    fits_id : str
        Prefix of the FITS header keywords
    size_unit : astropy.units.Unit
        Unit of the FWHM values

    Notes
    -----
    If ``minor > major`` the axes are swapped and the position angle is
    turned by a right angle, so ``major_fwhm >= minor_fwhm`` always holds.
    Position angles are kept in [-pi/2, pi/2] by IEEE remainder.
    """

    def __init__(self, major: float = 0.0, minor: Optional[float] = None,
                 position_angle: float = 0.0, *, name: Optional[str] = None,
                 fits_id: str = "", size_unit: u.UnitBase = u.deg):
        self.major_fwhm = 0.0
        self.minor_fwhm = 0.0
        self.position_angle = 0.0
        self.name = name
        self.fits_id = fits_id
        self.size_unit = u.Unit(size_unit)
        self.set(major, major if minor is None else minor, position_angle)

    # Shape

    def set(self, major: float, minor: float, position_angle: float = 0.0) -> None:
        """Set both axes and the position angle.

        Raises
        ------
        ValidationError
            If an axis is negative or NaN
        """
        major = validate_fwhm(major, "major")
        minor = validate_fwhm(minor, "minor")
        if minor > major:
            self.major_fwhm, self.minor_fwhm = minor, major
            self.set_position_angle(position_angle + RIGHT_ANGLE)
        else:
            self.major_fwhm, self.minor_fwhm = major, minor
            self.set_position_angle(position_angle)

    def set_fwhm(self, fwhm: float) -> None:
        """Make the beam circular with the given FWHM."""
        self.major_fwhm = self.minor_fwhm = validate_fwhm(fwhm)

    def set_position_angle(self, value: float) -> None:
        self.position_angle = math.remainder(value, math.pi)

    def rotate(self, angle: float) -> None:
        self.set_position_angle(self.position_angle + angle)

    def scale(self, factor: float) -> None:
        factor = validate_fwhm(factor, "factor")
        self.major_fwhm *= factor
        self.minor_fwhm *= factor

    def copy(self) -> "GaussianPSF":
        psf = GaussianPSF(name=self.name, fits_id=self.fits_id, size_unit=self.size_unit)
        psf.assign(self)
        return psf

    def assign(self, psf: "GaussianPSF") -> None:
        """Copy the shape (not the metadata) of another PSF."""
        validate_type(psf, GaussianPSF, "psf")
        self.major_fwhm = psf.major_fwhm
        self.minor_fwhm = psf.minor_fwhm
        self.position_angle = psf.position_angle

    # Derived quantities

    @property
    def circular_equivalent_fwhm(self) -> float:
        return math.sqrt(self.major_fwhm * self.minor_fwhm)

    @property
    def axis_product(self) -> float:
        return self.major_fwhm * self.minor_fwhm

    @property
    def area(self) -> float:
        """Integral of the unit-peak beam."""
        return AREA_FACTOR * self.major_fwhm * self.minor_fwhm

    def set_area(self, area: float) -> None:
        """Make the beam circular with the given area."""
        self.set_fwhm(math.sqrt(area / AREA_FACTOR))

    def extent_in_x(self) -> float:
        return math.hypot(math.cos(self.position_angle) * self.major_fwhm,
                          math.sin(self.position_angle) * self.minor_fwhm)

    def extent_in_y(self) -> float:
        return math.hypot(math.cos(self.position_angle) * self.minor_fwhm,
                          math.sin(self.position_angle) * self.major_fwhm)

    def is_circular(self) -> bool:
        return math.isclose(self.major_fwhm, self.minor_fwhm, rel_tol=1e-6, abs_tol=0.0)

    def value_at(self, dx: float, dy: float) -> float:
        """Unit-peak beam value at offset (dx, dy) from the center."""
        return float(self._profile(np.asarray(dx, dtype=float), np.asarray(dy, dtype=float)))

    def _profile(self, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        s = math.sin(self.position_angle)
        c = math.cos(self.position_angle)
        along_major = c * dx + s * dy
        along_minor = c * dy - s * dx

        exponent = np.zeros(np.broadcast(dx, dy).shape)
        inside = np.ones(exponent.shape, dtype=bool)
        for offset, fwhm in ((along_major, self.major_fwhm), (along_minor, self.minor_fwhm)):
            if fwhm == 0.0:
                # A zero-width axis keeps only the samples on it
                inside &= offset == 0.0
            else:
                exponent += (offset * (SIGMAS_IN_FWHM / fwhm)) ** 2
        return np.where(inside, np.exp(-0.5 * exponent), 0.0)

    # Algebra

    def encompass(self, psf: Union["GaussianPSF", float]) -> None:
        """Grow the axes just enough to contain ``psf`` (or a circular FWHM)."""
        min_major, min_minor = self._encompassing_axes(psf)
        self.set(max(self.major_fwhm, min_major), max(self.minor_fwhm, min_minor), self.position_angle)

    def is_encompassing(self, psf: Union["GaussianPSF", float]) -> bool:
        min_major, min_minor = self._encompassing_axes(psf)
        return self.major_fwhm >= min_major and self.minor_fwhm >= min_minor

    def _encompassing_axes(self, psf: Union["GaussianPSF", float]):
        if not isinstance(psf, GaussianPSF):
            fwhm = validate_fwhm(psf)
            return fwhm, fwhm
        da = psf.position_angle - self.position_angle
        c = math.cos(da)
        s = math.sin(da)
        return (math.hypot(psf.major_fwhm * c, psf.minor_fwhm * s),
                math.hypot(psf.major_fwhm * s, psf.minor_fwhm * c))

    def combine_with(self, psf: "GaussianPSF", deconvolve: bool) -> bool:
        """Convolve with, or deconvolve by, another Gaussian in place.

        Parameters
        ----------
        psf : GaussianPSF
            The other beam
        deconvolve : bool
            Deconvolve instead of convolve

        Returns
        -------
        bool
            False if a deconvolution had no real solution and an axis was
            clamped to zero

        Raises
        ------
        DeconvolutionError
            Instead of clamping, when ``NumericsConfig.strict_deconvolution``
            is set
        """
        validate_type(psf, GaussianPSF, "psf")
        direction = -1.0 if deconvolve else 1.0

        a2x = self.major_fwhm * self.major_fwhm
        a2y = self.minor_fwhm * self.minor_fwhm
        b2x = psf.major_fwhm * psf.major_fwhm
        b2y = psf.minor_fwhm * psf.minor_fwhm

        a = a2x - a2y
        b = b2x - b2y
        delta = math.remainder(2.0 * (psf.position_angle - self.position_angle), 2.0 * math.pi)
        c = math.sqrt(max(0.0, a * a + b * b + 2.0 * direction * a * b * math.cos(delta)))
        total = a2x + a2y + direction * (b2x + b2y)

        major2 = 0.5 * (total + c)
        minor2 = 0.5 * (total - c)

        # Rounding can leave an exact zero slightly negative
        tolerance = 1e-12 * (a2x + a2y + b2x + b2y)

        valid = True
        if deconvolve and (major2 < -tolerance or minor2 < -tolerance):
            valid = False
            message = f"Cannot deconvolve {psf} from {self}: no real solution"
            if get_config().strict_deconvolution:
                raise DeconvolutionError(message, psf=str(self), kernel=str(psf))
            logger.warning(f"{message}; clamping to zero size")

        self.major_fwhm = math.sqrt(max(0.0, major2))
        self.minor_fwhm = math.sqrt(max(0.0, minor2))

        if c == 0.0:
            self.position_angle = 0.0
        else:
            turn = 0.5 * math.atan2(direction * b * math.sin(delta), a + direction * b * math.cos(delta))
            if self.minor_fwhm > self.major_fwhm:
                self.major_fwhm, self.minor_fwhm = self.minor_fwhm, self.major_fwhm
                turn += RIGHT_ANGLE
            self.set_position_angle(self.position_angle + turn)

        return valid

    def convolve_with(self, psf: "GaussianPSF") -> None:
        self.combine_with(psf, False)

    def deconvolve_with(self, psf: "GaussianPSF") -> bool:
        return self.combine_with(psf, True)

    def multiply_by(self, psf: "GaussianPSF") -> None:
        self.convolve_with(psf)

    def divide_by(self, psf: "GaussianPSF") -> bool:
        return self.deconvolve_with(psf)

    def set_product(self, a: "GaussianPSF", b: "GaussianPSF") -> None:
        self.assign(a)
        self.convolve_with(b)

    def set_ratio(self, numerator: "GaussianPSF", denominator: "GaussianPSF") -> bool:
        self.assign(numerator)
        return self.deconvolve_with(denominator)

    # Rendering

    def _to_size(self, value: Union[float, u.Quantity]) -> float:
        if isinstance(value, u.Quantity):
            return value.to_value(self.size_unit)
        return float(value)

    def get_beam(self, pixel_size_x: Union[float, u.Quantity], pixel_size_y: Union[float, u.Quantity],
                 sigmas: Optional[float] = None) -> np.ndarray:
        """Render the unit-peak beam on a rectilinear pixel grid.

        The kernel has odd dimensions along both axes, with the beam
        centered on the middle pixel. Axis 0 runs along x.

        Parameters
        ----------
        pixel_size_x, pixel_size_y : float or Quantity
            Pixel sizes, in ``size_unit`` unless given as quantities
        sigmas : float, optional
            Half-extent of the kernel in standard deviations; defaults to
            ``NumericsConfig.beam_extent_sigmas``

        Returns
        -------
        np.ndarray
            Kernel of shape (nx, ny)
        """
        if sigmas is None:
            sigmas = get_config().beam_extent_sigmas
        dx = validate_positive(self._to_size(pixel_size_x), "pixel_size_x")
        dy = validate_positive(self._to_size(pixel_size_y), "pixel_size_y")

        sigma_scale = sigmas / SIGMAS_IN_FWHM
        nx = 2 * int(math.ceil(sigma_scale * self.extent_in_x() / dx)) + 1
        ny = 2 * int(math.ceil(sigma_scale * self.extent_in_y() / dy)) + 1

        offsets_x = (np.arange(nx) - 0.5 * (nx - 1)) * dx
        offsets_y = (np.arange(ny) - 0.5 * (ny - 1)) * dy

        grid_x, grid_y = np.meshgrid(offsets_x, offsets_y, indexing="ij")
        return self._profile(grid_x, grid_y)

    def smooth(self, image: Any, pixel_size_x: Union[float, u.Quantity],
               pixel_size_y: Union[float, u.Quantity], sigmas: Optional[float] = None) -> np.ndarray:
        """Convolve an image with the unit-sum beam.

        NaN pixels are treated as missing: the result is normalised by the
        smoothed coverage, and pixels with no coverage are NaN.

        Parameters
        ----------
        image : array_like
            2-D image with axis 0 along x
        pixel_size_x, pixel_size_y : float or Quantity
            Pixel sizes
        sigmas : float, optional
            Kernel half-extent, see ``get_beam``

        Returns
        -------
        np.ndarray
            Smoothed image of the same shape
        """
        data = validate_image(image)
        beam = self.get_beam(pixel_size_x, pixel_size_y, sigmas)

        valid = np.isfinite(data)
        filled = np.where(valid, data, 0.0)

        with performance.time_operation(f"smooth {data.shape[0]}x{data.shape[1]} image", logging.DEBUG):
            smoothed = fftconvolve(filled, beam, mode='same')
            coverage = fftconvolve(valid.astype(float), beam, mode='same')

        threshold = 1e-12 * beam.sum()
        with np.errstate(invalid='ignore', divide='ignore'):
            result = np.where(coverage > threshold, smoothed / coverage, np.nan)
        return result

    def set_equivalent(self, beam: np.ndarray, pixel_size_x: Union[float, u.Quantity],
                       pixel_size_y: Union[float, u.Quantity]) -> None:
        """Circular beam with the same area as a sampled unit-peak kernel."""
        area = float(np.nansum(np.abs(beam))) * self._to_size(pixel_size_x) * self._to_size(pixel_size_y)
        self.set_area(area)

    @classmethod
    def get_equivalent(cls, beam: np.ndarray, pixel_size_x: Union[float, u.Quantity],
                       pixel_size_y: Union[float, u.Quantity], size_unit: u.UnitBase = u.deg) -> "GaussianPSF":
        psf = cls(size_unit=size_unit)
        psf.set_equivalent(beam, pixel_size_x, pixel_size_y)
        return psf

    # FITS header glue

    def parse_header(self, header: fits.Header, fits_id: Optional[str] = None,
                     size_unit: Optional[u.UnitBase] = None) -> None:
        """Read ``<id>BMAJ``, ``<id>BMIN`` and ``<id>BPA`` from a header.

        Parameters
        ----------
        header : astropy.io.fits.Header
            Header to read
        fits_id : str, optional
            Keyword prefix; defaults to ``self.fits_id``
        size_unit : astropy.units.Unit, optional
            Unit of the header axis values; defaults to ``self.size_unit``

        Raises
        ------
        FitsHeaderError
            If the header has no ``<id>BMAJ`` keyword
        """
        fits_id = self.fits_id if fits_id is None else fits_id
        header_unit = self.size_unit if size_unit is None else u.Unit(size_unit)

        major_key = f"{fits_id}BMAJ"
        if major_key not in header:
            raise FitsHeaderError(f"FITS header contains no beam description for type '{fits_id}'",
                                  keyword=major_key)

        major = float(header[major_key])
        minor = float(header.get(f"{fits_id}BMIN", major))
        angle = float(header.get(f"{fits_id}BPA", 0.0))

        self.set((major * header_unit).to_value(self.size_unit),
                 (minor * header_unit).to_value(self.size_unit),
                 math.radians(angle))

        name_key = f"{fits_id}BNAM"
        if name_key in header:
            self.name = str(header[name_key])
        logger.debug(f"Parsed beam {self} from FITS header keywords '{major_key}' etc.")

    def edit_header(self, header: fits.Header, name: Optional[str] = None, fits_id: Optional[str] = None,
                    size_unit: Optional[u.UnitBase] = None) -> None:
        """Write the beam keywords to a header.

        Parameters
        ----------
        header : astropy.io.fits.Header
            Header to update
        name : str, optional
            Beam name for ``<id>BNAM``; defaults to ``self.name``, and the
            keyword is omitted if neither is set
        fits_id : str, optional
            Keyword prefix; defaults to ``self.fits_id``
        size_unit : astropy.units.Unit, optional
            Unit for the written axis values; defaults to ``self.size_unit``
        """
        fits_id = self.fits_id if fits_id is None else fits_id
        header_unit = self.size_unit if size_unit is None else u.Unit(size_unit)
        name = self.name if name is None else name

        if name is not None:
            header[f"{fits_id}BNAM"] = (name, "Beam name.")
        header[f"{fits_id}BMAJ"] = ((self.major_fwhm * self.size_unit).to_value(header_unit),
                                    f"Beam major axis ({header_unit.to_string()}).")
        header[f"{fits_id}BMIN"] = ((self.minor_fwhm * self.size_unit).to_value(header_unit),
                                    f"Beam minor axis ({header_unit.to_string()}).")
        header[f"{fits_id}BPA"] = (math.degrees(self.position_angle), "Beam position angle (deg).")

    # Python protocol

    def __eq__(self, other) -> bool:
        if not isinstance(other, GaussianPSF):
            return NotImplemented
        return (self.major_fwhm == other.major_fwhm
                and self.minor_fwhm == other.minor_fwhm
                and self.position_angle == other.position_angle)

    def __hash__(self):
        return hash((self.major_fwhm, self.minor_fwhm, self.position_angle))

    def to_string(self, unit: Optional[u.UnitBase] = None) -> str:
        """Human-readable size, optionally converted to another unit."""
        factor = 1.0
        suffix = ""
        if unit is not None:
            unit = u.Unit(unit)
            factor = self.size_unit.to(unit)
            suffix = f" {unit.to_string()}"
        major = f"{self.major_fwhm * factor:.4g}"
        if self.is_circular():
            return major + suffix
        return (f"{major}x{self.minor_fwhm * factor:.4g}{suffix} "
                f"@ {math.degrees(self.position_angle):.1f} deg.")

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (f"GaussianPSF({self.major_fwhm!r}, {self.minor_fwhm!r}, {self.position_angle!r}, "
                f"size_unit={self.size_unit.to_string()!r})")
