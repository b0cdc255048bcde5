"""
Chromatogram derivation: TIC, BPC and XIC from a spectrum collection.
"""

import logging
from typing import Optional, Union

import numpy as np

from .chromatogram import ChromatogramMode, ChromatogramSeries
from .collection import SpectrumCollection
from .errors import InvalidRequest
from .spectrum import Polarity, SpectrumRecord

logger = logging.getLogger(__name__)


def total_ion_intensity(spectrum: SpectrumRecord) -> float:
    """Sum of all intensities, 0 for an empty scan."""
    return spectrum.tic


def base_peak_intensity(spectrum: SpectrumRecord) -> float:
    """Maximum intensity, 0 for an empty scan."""
    return spectrum.base_peak_intensity


def extracted_ion_intensity(spectrum: SpectrumRecord, mass: float, tolerance: float) -> float:
    """Sum of intensities with m/z in [mass - tolerance, mass + tolerance]."""
    return spectrum.extract_intensity(mass, tolerance)


def resolve_tolerance(mass: float, tolerance: float, ppm: bool = False) -> float:
    """
    Convert an XIC tolerance into an absolute m/z half-width.

    Args:
        mass: Target m/z
        tolerance: Tolerance in m/z units, or ppm of mass
        ppm: If True, tolerance is in ppm

    Returns:
        Absolute tolerance
    """
    if ppm:
        return mass * tolerance * 1e-6
    return tolerance


def check_xic_parameters(mass: Optional[float], tolerance: Optional[float]) -> None:
    """
    Validate the mass window of an extracted ion request.

    Raises:
        InvalidRequest: If mass is missing or not positive, or tolerance is negative
    """
    if mass is None:
        raise InvalidRequest("Extracted ion chromatogram requires a target mass")
    try:
        mass = float(mass)
        if tolerance is not None:
            tolerance = float(tolerance)
    except (TypeError, ValueError) as e:
        raise InvalidRequest(f"Mass and tolerance must be numbers: {e}") from e
    if not np.isfinite(mass) or mass <= 0:
        raise InvalidRequest(f"Target mass must be positive, got {mass}")
    if tolerance is not None and (not np.isfinite(tolerance) or tolerance < 0):
        raise InvalidRequest(f"Mass tolerance must be non-negative, got {tolerance}")


class ChromatogramBuilder:
    """
    Derive a chromatogram series from a spectrum collection.

    Only spectra at the configured MS level contribute (MS1 by default,
    0 for every level), and a polarity filter drops non-matching spectra
    from the output entirely. Each included spectrum yields one point, in
    collection order.

    Example:
        >>> builder = ChromatogramBuilder()
        >>> tic = builder.build(collection, ChromatogramMode.TIC)
        >>> xic = builder.build(collection, ChromatogramMode.XIC,
        ...                     mass=100.0, tolerance=0.5)
    """

    def __init__(self, ms_level: int = 1):
        """
        Initialize builder.

        Args:
            ms_level: MS level to aggregate (0 for all levels)
        """
        self.ms_level = ms_level

    def build(
        self,
        collection: SpectrumCollection,
        mode: Union[ChromatogramMode, str] = ChromatogramMode.TIC,
        polarity: Optional[Union[Polarity, str]] = None,
        mass: Optional[float] = None,
        tolerance: Optional[float] = None,
        ppm: bool = False,
    ) -> ChromatogramSeries:
        """
        Build a chromatogram.

        Args:
            collection: Loaded spectra
            mode: TIC, BPC or XIC
            polarity: Keep only spectra of this polarity (None = all)
            mass: Target m/z (XIC only)
            tolerance: m/z tolerance, 0 if omitted (XIC only)
            ppm: If True, tolerance is in ppm (XIC only)

        Returns:
            ChromatogramSeries with one point per included spectrum

        Raises:
            InvalidRequest: If the XIC mass window is malformed
        """
        mode = ChromatogramMode.parse(mode)
        if polarity is not None:
            polarity = Polarity.parse(polarity)
        target_mz = 0.0
        abs_tolerance = 0.0

        if mode == ChromatogramMode.XIC:
            check_xic_parameters(mass, tolerance)
            target_mz = float(mass)
            abs_tolerance = resolve_tolerance(
                target_mz, float(tolerance) if tolerance is not None else 0.0, ppm
            )

            def aggregate(spec: SpectrumRecord) -> float:
                return extracted_ion_intensity(spec, target_mz, abs_tolerance)
        elif mode == ChromatogramMode.BPC:
            aggregate = base_peak_intensity
        else:
            aggregate = total_ion_intensity

        rt_list = []
        intensity_list = []
        index_list = []

        for idx, spec in enumerate(collection):
            if self.ms_level and spec.ms_level != self.ms_level:
                continue
            if polarity is not None and spec.polarity != polarity:
                continue
            rt_list.append(spec.retention_time)
            intensity_list.append(aggregate(spec))
            index_list.append(idx)

        logger.debug(
            "Built %s chromatogram: %d of %d spectra (polarity=%s, ms_level=%s, "
            "mass=%s, tolerance=%s)",
            mode.name, len(rt_list), len(collection),
            polarity.name if polarity is not None else "any",
            self.ms_level, mass, abs_tolerance,
        )

        return ChromatogramSeries(
            rt=np.array(rt_list, dtype=np.float64),
            intensity=np.array(intensity_list, dtype=np.float64),
            spectrum_index=np.array(index_list, dtype=np.intp),
            mode=mode,
            polarity=polarity,
            target_mz=target_mz,
            mz_tolerance=abs_tolerance,
        )
