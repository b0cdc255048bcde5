"""
Spectrum record for mass spectrometry runs.
"""

from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np


class Polarity(Enum):
    """Ion polarity mode."""
    UNKNOWN = 0
    POSITIVE = 1
    NEGATIVE = -1

    @classmethod
    def parse(cls, value: Union["Polarity", str, int]) -> "Polarity":
        """
        Convert a string, integer or Polarity into a Polarity.

        Args:
            value: "positive", "+", "negative", "-", "unknown", 1, -1, 0

        Returns:
            Matching Polarity
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _POLARITY_ALIASES:
                return _POLARITY_ALIASES[key]
            raise ValueError(f"Unknown polarity: {value!r}")
        return cls(value)


_POLARITY_ALIASES = {
    "positive": Polarity.POSITIVE,
    "pos": Polarity.POSITIVE,
    "+": Polarity.POSITIVE,
    "negative": Polarity.NEGATIVE,
    "neg": Polarity.NEGATIVE,
    "-": Polarity.NEGATIVE,
    "unknown": Polarity.UNKNOWN,
}


def _frozen_array(values: Optional[Union[np.ndarray, List[float]]]) -> np.ndarray:
    if values is None:
        arr = np.array([], dtype=np.float64)
    else:
        arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


class SpectrumRecord:
    """
    A single scan of a run: retention time, polarity, MS level and the
    paired m/z and intensity arrays.

    Records are immutable once constructed. The arrays are stored as
    read-only float64 copies and the per-scan aggregates used to build
    chromatograms are computed once.

    Attributes:
        retention_time: Acquisition time of the scan
        polarity: Positive, negative or unknown ion mode
        ms_level: MS level (1 for survey scans)
        mz: Ascending m/z values
        intensity: Non-negative intensities, aligned with mz
        native_id: Scan identifier assigned by the file parser

    Example:
        >>> spec = SpectrumRecord(60.0, mz=[100.0, 200.0], intensity=[10.0, 20.0])
        >>> spec.tic
        30.0
        >>> spec.base_peak_intensity
        20.0
    """

    __slots__ = (
        "_rt",
        "_polarity",
        "_ms_level",
        "_mz",
        "_intensity",
        "_native_id",
        "_tic",
        "_base_peak_intensity",
        "_base_peak_mz",
    )

    def __init__(
        self,
        retention_time: float,
        mz: Optional[Union[np.ndarray, List[float]]] = None,
        intensity: Optional[Union[np.ndarray, List[float]]] = None,
        polarity: Union[Polarity, str, int] = Polarity.UNKNOWN,
        ms_level: int = 1,
        native_id: str = "",
    ):
        """
        Create a new SpectrumRecord.

        Args:
            retention_time: Acquisition time, non-negative
            mz: m/z values in ascending order
            intensity: Intensity values
            polarity: Ion polarity mode
            ms_level: MS level (1 = MS1, 2 = MS/MS, etc.)
            native_id: Scan identifier from the source file
        """
        rt = float(retention_time)
        if not np.isfinite(rt) or rt < 0:
            raise ValueError(f"Retention time must be finite and non-negative, got {retention_time}")
        if int(ms_level) < 1:
            raise ValueError(f"MS level must be a positive integer, got {ms_level}")

        mz_arr = _frozen_array(mz)
        int_arr = _frozen_array(intensity)
        if mz_arr.ndim != 1 or int_arr.ndim != 1:
            raise ValueError("m/z and intensity must be one-dimensional")
        if len(mz_arr) != len(int_arr):
            raise ValueError(
                f"m/z and intensity arrays must have same length, "
                f"got {len(mz_arr)} and {len(int_arr)}"
            )

        self._rt = rt
        self._polarity = Polarity.parse(polarity)
        self._ms_level = int(ms_level)
        self._mz = mz_arr
        self._intensity = int_arr
        self._native_id = native_id

        if len(int_arr) > 0:
            max_idx = int(np.argmax(int_arr))
            self._tic = float(np.sum(int_arr))
            self._base_peak_intensity = float(int_arr[max_idx])
            self._base_peak_mz = float(mz_arr[max_idx])
        else:
            self._tic = 0.0
            self._base_peak_intensity = 0.0
            self._base_peak_mz = 0.0

    @property
    def retention_time(self) -> float:
        """Get retention time."""
        return self._rt

    @property
    def polarity(self) -> Polarity:
        """Get ion polarity."""
        return self._polarity

    @property
    def ms_level(self) -> int:
        """Get MS level."""
        return self._ms_level

    @property
    def mz(self) -> np.ndarray:
        """Get m/z array (read-only)."""
        return self._mz

    @property
    def intensity(self) -> np.ndarray:
        """Get intensity array (read-only)."""
        return self._intensity

    @property
    def native_id(self) -> str:
        return self._native_id

    def __len__(self) -> int:
        """Return number of data points."""
        return len(self._mz)

    @property
    def is_empty(self) -> bool:
        return len(self._mz) == 0

    @property
    def tic(self) -> float:
        """Get total ion current, 0 for an empty scan."""
        return self._tic

    @property
    def base_peak_intensity(self) -> float:
        """Get base peak intensity, 0 for an empty scan."""
        return self._base_peak_intensity

    @property
    def base_peak_mz(self) -> float:
        """Get base peak m/z, 0 for an empty scan."""
        return self._base_peak_mz

    @property
    def mz_range(self) -> Tuple[float, float]:
        """Get (min, max) m/z range."""
        if self.is_empty:
            return (0.0, 0.0)
        return (float(self._mz[0]), float(self._mz[-1]))

    def extract_intensity(self, mass: float, tolerance: float) -> float:
        """
        Sum intensities whose m/z lies in [mass - tolerance, mass + tolerance].

        The m/z array is sorted, so both window edges are found by binary
        search and only the matching slice is summed.

        Args:
            mass: Target m/z
            tolerance: Absolute half-width of the window

        Returns:
            Summed intensity, 0 if nothing matches
        """
        start = int(np.searchsorted(self._mz, mass - tolerance, side="left"))
        stop = int(np.searchsorted(self._mz, mass + tolerance, side="right"))
        if stop <= start:
            return 0.0
        return float(np.sum(self._intensity[start:stop]))

    def arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return the (mz, intensity) pair for display."""
        return self._mz, self._intensity

    def to_dataframe(self):
        """
        Convert to pandas DataFrame.

        Returns:
            DataFrame with 'mz' and 'intensity' columns
        """
        import pandas as pd
        return pd.DataFrame({
            "mz": self._mz,
            "intensity": self._intensity,
        })

    def __repr__(self) -> str:
        mz_min, mz_max = self.mz_range
        return (
            f"SpectrumRecord(size={len(self)}, ms_level={self._ms_level}, "
            f"rt={self._rt:.2f}, polarity={self._polarity.name}, "
            f"mz_range=({mz_min:.2f}, {mz_max:.2f}))"
        )
