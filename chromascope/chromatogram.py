"""
Chromatogram series derived from a spectrum collection.
"""

from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from .locator import nearest_index
from .spectrum import Polarity


class ChromatogramMode(Enum):
    """Type of chromatogram."""
    TIC = "tic"  # Total Ion Current
    BPC = "bpc"  # Base Peak Chromatogram
    XIC = "xic"  # Extracted Ion Chromatogram

    @classmethod
    def parse(cls, value: Union["ChromatogramMode", str]) -> "ChromatogramMode":
        """
        Convert a mode name into a ChromatogramMode.

        Args:
            value: Mode or one of "tic", "total", "bpc", "base_peak",
                "xic", "extracted" (case insensitive)

        Returns:
            Matching ChromatogramMode
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        if key in _MODE_ALIASES:
            return _MODE_ALIASES[key]
        raise ValueError(f"Unknown chromatogram mode: {value!r}")


_MODE_ALIASES = {
    "tic": ChromatogramMode.TIC,
    "total": ChromatogramMode.TIC,
    "total_ion": ChromatogramMode.TIC,
    "bpc": ChromatogramMode.BPC,
    "base_peak": ChromatogramMode.BPC,
    "xic": ChromatogramMode.XIC,
    "eic": ChromatogramMode.XIC,
    "extracted": ChromatogramMode.XIC,
    "extracted_ion": ChromatogramMode.XIC,
}


def _frozen(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


class ChromatogramSeries:
    """
    Chromatogram (intensity vs retention time) derived from a run.

    A series holds one (time, intensity) point per contributing spectrum,
    in the order of the source collection, plus the collection index of
    each contributing spectrum so a point can be mapped back to its scan.
    Series are immutable and recomputed whenever the request changes.

    Attributes:
        rt: Retention times
        intensity: Intensity values
        spectrum_index: Collection index of the spectrum behind each point
        mode: TIC, BPC or XIC
        polarity: Polarity filter applied, None if all spectra were used
        target_mz: Target m/z for XIC
        mz_tolerance: Absolute m/z tolerance for XIC
        smoothing_window: Moving average window applied (0 = none)

    Example:
        >>> series = ChromatogramSeries([1.0, 2.0], [30.0, 40.0], [0, 1])
        >>> list(series)
        [(1.0, 30.0), (2.0, 40.0)]
    """

    def __init__(
        self,
        rt: Optional[Union[np.ndarray, List[float]]] = None,
        intensity: Optional[Union[np.ndarray, List[float]]] = None,
        spectrum_index: Optional[Union[np.ndarray, List[int]]] = None,
        mode: ChromatogramMode = ChromatogramMode.TIC,
        polarity: Optional[Polarity] = None,
        target_mz: float = 0.0,
        mz_tolerance: float = 0.0,
        smoothing_window: int = 0,
    ):
        """
        Create a new ChromatogramSeries.

        Args:
            rt: Retention time values
            intensity: Intensity values
            spectrum_index: Source collection indices (defaults to 0..n-1)
            mode: Chromatogram mode
            polarity: Polarity filter used to build the series
            target_mz: Target m/z for XIC
            mz_tolerance: m/z tolerance for XIC
            smoothing_window: Smoothing window applied
        """
        self._rt = _frozen(rt if rt is not None else [], np.float64)
        self._intensity = _frozen(intensity if intensity is not None else [], np.float64)
        if spectrum_index is None:
            spectrum_index = np.arange(len(self._rt))
        self._spectrum_index = _frozen(spectrum_index, np.intp)

        if not len(self._rt) == len(self._intensity) == len(self._spectrum_index):
            raise ValueError("RT, intensity and index arrays must have same length")

        self.mode = mode
        self.polarity = polarity
        self.target_mz = target_mz
        self.mz_tolerance = mz_tolerance
        self.smoothing_window = smoothing_window

    @property
    def rt(self) -> np.ndarray:
        """Get retention time array."""
        return self._rt

    @property
    def intensity(self) -> np.ndarray:
        """Get intensity array."""
        return self._intensity

    @property
    def spectrum_index(self) -> np.ndarray:
        """Get the collection index of each point."""
        return self._spectrum_index

    def __len__(self) -> int:
        """Return number of data points."""
        return len(self._rt)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        """Iterate over (time, intensity) pairs."""
        for t, i in zip(self._rt, self._intensity):
            yield float(t), float(i)

    def points(self) -> np.ndarray:
        """Get an (n, 2) array of [time, intensity] rows for plotting."""
        return np.column_stack((self._rt, self._intensity))

    @property
    def max_intensity(self) -> float:
        """Get maximum intensity."""
        if len(self._intensity) == 0:
            return 0.0
        return float(np.max(self._intensity))

    @property
    def apex_rt(self) -> float:
        """Get retention time at maximum intensity."""
        if len(self._intensity) == 0:
            return 0.0
        return float(self._rt[int(np.argmax(self._intensity))])

    @property
    def rt_range(self) -> Tuple[float, float]:
        """Get (min, max) retention time range."""
        if len(self._rt) == 0:
            return (0.0, 0.0)
        return (float(self._rt[0]), float(self._rt[-1]))

    def locate(self, query_time: float) -> int:
        """
        Find the spectrum behind the point closest to query_time.

        Args:
            query_time: Time picked on the plotted series

        Returns:
            Index into the source collection

        Raises:
            EmptyCollection: If the series has no points
        """
        return int(self._spectrum_index[nearest_index(self._rt, query_time)])

    def with_intensity(
        self,
        intensity: Union[np.ndarray, List[float]],
        smoothing_window: Optional[int] = None,
    ) -> "ChromatogramSeries":
        """
        Create a series with the same times and metadata but new intensities.

        Args:
            intensity: Replacement intensity values, same length
            smoothing_window: Smoothing window to record (default: keep)

        Returns:
            New ChromatogramSeries
        """
        return ChromatogramSeries(
            rt=self._rt,
            intensity=intensity,
            spectrum_index=self._spectrum_index,
            mode=self.mode,
            polarity=self.polarity,
            target_mz=self.target_mz,
            mz_tolerance=self.mz_tolerance,
            smoothing_window=(self.smoothing_window if smoothing_window is None
                              else smoothing_window),
        )

    def to_dataframe(self):
        """
        Convert to pandas DataFrame.

        Returns:
            DataFrame with 'rt', 'intensity' and 'spectrum_index' columns
        """
        import pandas as pd
        return pd.DataFrame({
            "rt": self._rt,
            "intensity": self._intensity,
            "spectrum_index": self._spectrum_index,
        })

    def __repr__(self) -> str:
        rt_min, rt_max = self.rt_range
        return (
            f"ChromatogramSeries(size={len(self)}, mode={self.mode.name}, "
            f"rt_range=({rt_min:.1f}, {rt_max:.1f}))"
        )
