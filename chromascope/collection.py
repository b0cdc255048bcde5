"""
SpectrumCollection container for a loaded run.
"""

from collections.abc import Sequence
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union

import numpy as np

from .spectrum import Polarity, SpectrumRecord


class SpectrumCollection(Sequence):
    """
    Read-only, retention-time-sorted collection of spectra from one run.

    The collection is built once from the records produced by a file parser
    and never modified afterwards; loading another file creates a new
    collection. Records are stable-sorted by retention time, so records
    sharing a time keep the order in which the parser produced them.

    Example:
        >>> coll = SpectrumCollection([
        ...     SpectrumRecord(2.0, mz=[100.0], intensity=[5.0]),
        ...     SpectrumRecord(1.0, mz=[100.0], intensity=[3.0]),
        ... ])
        >>> coll.retention_times
        array([1., 2.])
        >>> coll[0].tic
        3.0
    """

    def __init__(self, spectra: Optional[Iterable[SpectrumRecord]] = None):
        """
        Create a new SpectrumCollection.

        Args:
            spectra: Spectrum records in any order
        """
        records = list(spectra) if spectra is not None else []
        for record in records:
            if not isinstance(record, SpectrumRecord):
                raise TypeError(f"Expected SpectrumRecord, got {type(record).__name__}")
        # sorted() is stable: equal times keep producer order
        self._spectra: Tuple[SpectrumRecord, ...] = tuple(
            sorted(records, key=lambda s: s.retention_time)
        )
        rt = np.array([s.retention_time for s in self._spectra], dtype=np.float64)
        rt.setflags(write=False)
        self._rt = rt

    @classmethod
    def empty(cls) -> "SpectrumCollection":
        """Create a collection without spectra."""
        return cls()

    # =========================================================================
    # Sequence protocol
    # =========================================================================

    def __getitem__(self, index: Union[int, slice]) -> Union[SpectrumRecord, List[SpectrumRecord]]:
        """Get spectrum by index (retention time order)."""
        if isinstance(index, slice):
            return list(self._spectra[index])
        return self._spectra[index]

    def __len__(self) -> int:
        return len(self._spectra)

    def __iter__(self) -> Iterator[SpectrumRecord]:
        return iter(self._spectra)

    # =========================================================================
    # Access
    # =========================================================================

    @property
    def is_empty(self) -> bool:
        """Check if collection has no spectra."""
        return len(self._spectra) == 0

    @property
    def retention_times(self) -> np.ndarray:
        """Get the sorted retention times (read-only)."""
        return self._rt

    @property
    def rt_range(self) -> Tuple[float, float]:
        """Get overall RT range."""
        if self.is_empty:
            return (0.0, 0.0)
        return (float(self._rt[0]), float(self._rt[-1]))

    def spectrum_arrays(self, index: int) -> Tuple[np.ndarray, np.ndarray]:
        """Get (mz, intensity) of the spectrum at index."""
        return self._spectra[index].arrays()

    def count_by_level(self, level: int) -> int:
        """Count spectra at given MS level."""
        return sum(1 for s in self._spectra if s.ms_level == level)

    def polarities(self) -> Set[Polarity]:
        """Get the set of polarities present in the run."""
        return {s.polarity for s in self._spectra}

    def summary(self) -> Dict[str, object]:
        """Get summary statistics."""
        ms_levels: Dict[int, int] = {}
        for s in self._spectra:
            ms_levels[s.ms_level] = ms_levels.get(s.ms_level, 0) + 1

        return {
            "spectrum_count": len(self._spectra),
            "total_data_points": sum(len(s) for s in self._spectra),
            "rt_range": self.rt_range,
            "ms_levels": ms_levels,
            "polarities": sorted(p.name for p in self.polarities()),
        }

    def __repr__(self) -> str:
        rt_min, rt_max = self.rt_range
        return (
            f"SpectrumCollection(spectra={len(self._spectra)}, "
            f"rt_range=({rt_min:.2f}, {rt_max:.2f}))"
        )
