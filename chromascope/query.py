"""
Request/response façade over the builder, smoother and locator.
"""

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Optional, Union

from .algorithms import ALIGNMENTS, SMOOTHING_METHODS, smooth_chromatogram
from .builder import ChromatogramBuilder, check_xic_parameters
from .chromatogram import ChromatogramMode, ChromatogramSeries
from .collection import SpectrumCollection
from .errors import InvalidRequest
from .locator import locate_spectrum
from .spectrum import Polarity, SpectrumRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChromatogramRequest:
    """
    Parameters of one chromatogram computation.

    Attributes:
        mode: TIC, BPC or XIC
        mass: Target m/z, required for XIC
        tolerance: m/z tolerance for XIC (None = exact match)
        polarity: Polarity filter (None = all spectra)
        smoothing_window: Moving average window (0 or 1 = none)
        ppm: Tolerance is in ppm rather than m/z units
    """
    mode: ChromatogramMode = ChromatogramMode.TIC
    mass: Optional[float] = None
    tolerance: Optional[float] = None
    polarity: Optional[Polarity] = None
    smoothing_window: int = 0
    ppm: bool = False

    @classmethod
    def create(
        cls,
        mode: Union[ChromatogramMode, str] = ChromatogramMode.TIC,
        mass: Optional[float] = None,
        tolerance: Optional[float] = None,
        polarity: Optional[Union[Polarity, str]] = None,
        smoothing_window: int = 0,
        ppm: bool = False,
    ) -> "ChromatogramRequest":
        """
        Build a validated request, parsing string modes and polarities.

        Raises:
            InvalidRequest: If any parameter is malformed
        """
        try:
            mode = ChromatogramMode.parse(mode)
            if polarity is not None:
                polarity = Polarity.parse(polarity)
            if mass is not None:
                mass = float(mass)
            if tolerance is not None:
                tolerance = float(tolerance)
        except (TypeError, ValueError) as e:
            raise InvalidRequest(str(e)) from e
        request = cls(
            mode=mode,
            mass=mass,
            tolerance=tolerance,
            polarity=polarity,
            smoothing_window=smoothing_window,
            ppm=ppm,
        )
        request.validate()
        return request

    def validate(self) -> None:
        """
        Check the request shape.

        Raises:
            InvalidRequest: If XIC lacks a mass, the tolerance is negative,
                or the smoothing window is negative
        """
        if not isinstance(self.mode, ChromatogramMode):
            raise InvalidRequest(f"Unknown chromatogram mode: {self.mode!r}")
        if self.polarity is not None and not isinstance(self.polarity, Polarity):
            raise InvalidRequest(f"Unknown polarity: {self.polarity!r}")
        if self.mode == ChromatogramMode.XIC:
            check_xic_parameters(self.mass, self.tolerance)
        if isinstance(self.smoothing_window, bool) or not isinstance(self.smoothing_window, Integral):
            raise InvalidRequest(
                f"Smoothing window must be an integer, got {self.smoothing_window!r}"
            )
        if self.smoothing_window < 0:
            raise InvalidRequest(
                f"Smoothing window must be non-negative, got {self.smoothing_window}"
            )

    def updated(self, **changes) -> "ChromatogramRequest":
        """Return a validated copy with some fields replaced."""
        fields = {
            "mode": self.mode,
            "mass": self.mass,
            "tolerance": self.tolerance,
            "polarity": self.polarity,
            "smoothing_window": self.smoothing_window,
            "ppm": self.ppm,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"Unknown request fields: {sorted(unknown)}")
        fields.update(changes)
        return ChromatogramRequest.create(**fields)


class ChromatogramQuery:
    """
    Compute chromatograms and resolve picked times to spectra.

    Every call is self-contained: nothing is cached between calls, so the
    result depends only on the collection and the request.

    Example:
        >>> query = ChromatogramQuery()
        >>> series = query.query(collection, "xic", mass=100.0, tolerance=0.5,
        ...                      smoothing_window=3)
        >>> index = query.locate(collection, 12.4)
        >>> mz, intensity = collection.spectrum_arrays(index)
    """

    def __init__(
        self,
        ms_level: int = 1,
        smoothing_method: str = "moving_average",
        alignment: str = "centered",
    ):
        """
        Initialize the query façade.

        Args:
            ms_level: MS level aggregated into chromatograms (0 for all)
            smoothing_method: Smoothing method passed to smooth_chromatogram
            alignment: Moving average window alignment
        """
        if smoothing_method not in SMOOTHING_METHODS:
            raise ValueError(f"Unknown smoothing method: {smoothing_method}")
        if alignment not in ALIGNMENTS:
            raise ValueError(f"Unknown window alignment: {alignment}")
        self.builder = ChromatogramBuilder(ms_level=ms_level)
        self.smoothing_method = smoothing_method
        self.alignment = alignment

    def query(
        self,
        collection: SpectrumCollection,
        mode: Union[ChromatogramMode, str] = ChromatogramMode.TIC,
        mass: Optional[float] = None,
        tolerance: Optional[float] = None,
        polarity: Optional[Union[Polarity, str]] = None,
        smoothing_window: int = 0,
        ppm: bool = False,
    ) -> ChromatogramSeries:
        """
        Build and smooth a chromatogram.

        Args:
            collection: Loaded spectra
            mode: TIC, BPC or XIC
            mass: Target m/z (XIC only)
            tolerance: m/z tolerance (XIC only)
            polarity: Polarity filter (None = all)
            smoothing_window: Moving average window (0 or 1 = none)
            ppm: Tolerance is in ppm

        Returns:
            Chromatogram series

        Raises:
            InvalidRequest: If the request is malformed
        """
        request = ChromatogramRequest.create(
            mode=mode,
            mass=mass,
            tolerance=tolerance,
            polarity=polarity,
            smoothing_window=smoothing_window,
            ppm=ppm,
        )
        return self.run(collection, request)

    def run(self, collection: SpectrumCollection, request: ChromatogramRequest) -> ChromatogramSeries:
        """Build and smooth a chromatogram from a request object."""
        request.validate()
        logger.debug("Running chromatogram request %s", request)
        series = self.builder.build(
            collection,
            request.mode,
            polarity=request.polarity,
            mass=request.mass,
            tolerance=request.tolerance,
            ppm=request.ppm,
        )
        return smooth_chromatogram(
            series,
            request.smoothing_window,
            method=self.smoothing_method,
            alignment=self.alignment,
        )

    def locate(self, collection: SpectrumCollection, query_time: float) -> int:
        """
        Find the index of the spectrum closest to query_time.

        Raises:
            EmptyCollection: If the collection has no spectra
        """
        return locate_spectrum(collection, query_time)

    def spectrum_at(self, collection: SpectrumCollection, query_time: float) -> SpectrumRecord:
        """Get the spectrum closest to query_time."""
        return collection[self.locate(collection, query_time)]

