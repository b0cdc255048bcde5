"""
Chromascope - chromatogram derivation and retention time lookup for LC-MS runs

Builds Total Ion, Base Peak and Extracted Ion chromatograms from a run of
spectra, smooths them, and maps a time picked on the chromatogram back to
the spectrum acquired closest to it.

Example:
    >>> import chromascope
    >>> run = chromascope.SpectrumCollection(records)
    >>> query = chromascope.ChromatogramQuery()
    >>> tic = query.query(run, "tic", smoothing_window=5)
    >>> spectrum = run[query.locate(run, 12.4)]
"""

__version__ = "0.1.0"
__author__ = "Chromascope Contributors"

from .spectrum import SpectrumRecord, Polarity
from .collection import SpectrumCollection
from .chromatogram import ChromatogramSeries, ChromatogramMode
from .builder import ChromatogramBuilder
from .algorithms import moving_average, smooth_chromatogram
from .locator import nearest_index, locate_spectrum
from .query import ChromatogramQuery, ChromatogramRequest
from .session import (
    ViewerSession,
    FileValidity,
    ChangeMarker,
    NoFile,
    Loading,
    Loaded,
    Invalid,
)
from .errors import ChromascopeError, InvalidRequest, EmptyCollection

__all__ = [
    # Version
    "__version__",
    # Data structures
    "SpectrumRecord",
    "Polarity",
    "SpectrumCollection",
    "ChromatogramSeries",
    "ChromatogramMode",
    # Engine
    "ChromatogramBuilder",
    "moving_average",
    "smooth_chromatogram",
    "nearest_index",
    "locate_spectrum",
    "ChromatogramQuery",
    "ChromatogramRequest",
    # Session
    "ViewerSession",
    "FileValidity",
    "ChangeMarker",
    "NoFile",
    "Loading",
    "Loaded",
    "Invalid",
    # Errors
    "ChromascopeError",
    "InvalidRequest",
    "EmptyCollection",
]


def version_info():
    """Return detailed version information."""
    import sys
    import numpy as np
    import scipy
    return {
        "chromascope_version": __version__,
        "python_version": sys.version,
        "numpy_version": np.__version__,
        "scipy_version": scipy.__version__,
    }
