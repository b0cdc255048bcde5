"""
Exceptions raised by the chromatogram engine.
"""


class ChromascopeError(Exception):
    """Base class for engine errors."""


class InvalidRequest(ChromascopeError, ValueError):
    """
    A chromatogram request is malformed.

    Raised for an extracted ion request without a mass, a negative tolerance,
    a non-positive mass, a negative smoothing window, or an unknown mode or
    polarity. Callers should keep their previous valid series.
    """


class EmptyCollection(ChromascopeError, LookupError):
    """A retention time lookup was requested but no spectra are available."""

    def __init__(self, message: str = "No spectra available"):
        super().__init__(message)
