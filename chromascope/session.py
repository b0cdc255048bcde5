"""
Viewer session: the loaded run, the current request and the plotted series.

The session replaces ad-hoc "file valid" and "state changed" flags with an
explicit state machine:

    NoFile --open--> Loading --> Loaded(collection)
                             \\-> Invalid(reason)

Any state returns to NoFile on close(), and open() may be called from any
state to replace the run. The engine itself holds no session state; the
session only feeds its collection and request to a ChromatogramQuery.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from .chromatogram import ChromatogramSeries
from .collection import SpectrumCollection
from .errors import EmptyCollection
from .query import ChromatogramQuery, ChromatogramRequest
from .spectrum import SpectrumRecord

logger = logging.getLogger(__name__)

FILE_FORMAT = "mzML"

Loader = Callable[[Path], SpectrumCollection]


class FileValidity(Enum):
    VALID = "valid"
    INVALID = "invalid"


class ChangeMarker(Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class NoFile:
    """No run is open."""


@dataclass(frozen=True)
class Loading:
    """A run is being parsed."""
    path: Path


@dataclass(frozen=True)
class Loaded:
    """A run is open and its spectra are available."""
    path: Path
    collection: SpectrumCollection


@dataclass(frozen=True)
class Invalid:
    """The last open attempt failed."""
    reason: str
    path: Optional[Path] = None


SessionState = Union[NoFile, Loading, Loaded, Invalid]


class ViewerSession:
    """
    State of one chromatogram viewer.

    The session owns the current state, the current request and the last
    valid series. The spectrum collection inside a Loaded state is replaced
    as a whole under a lock, so a reader on another thread sees either the
    old or the new run, never a mix.

    Example:
        >>> session = ViewerSession(loader=my_mzml_parser)
        >>> session.open("run.mzML")
        >>> session.update(mode="xic", mass=722.43, tolerance=0.05)
        >>> series = session.refresh()
        >>> index, spectrum = session.select_time(10.9)
    """

    def __init__(
        self,
        loader: Loader,
        query: Optional[ChromatogramQuery] = None,
        request: Optional[ChromatogramRequest] = None,
    ):
        """
        Create a session.

        Args:
            loader: Callable parsing a file path into a SpectrumCollection
            query: Query façade (default: MS1, centered moving average)
            request: Initial request (default: unsmoothed TIC)
        """
        self._loader = loader
        self._query = query or ChromatogramQuery()
        self._request = request or ChromatogramRequest()
        self._state: SessionState = NoFile()
        self._series: Optional[ChromatogramSeries] = None
        self._changed = ChangeMarker.UNCHANGED
        self._lock = threading.Lock()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def validity(self) -> FileValidity:
        """VALID only while a run is loaded."""
        if isinstance(self._state, Loaded):
            return FileValidity.VALID
        return FileValidity.INVALID

    @property
    def changed(self) -> ChangeMarker:
        return self._changed

    @property
    def request(self) -> ChromatogramRequest:
        return self._request

    @property
    def series(self) -> Optional[ChromatogramSeries]:
        """Last successfully computed series."""
        return self._series

    @property
    def collection(self) -> Optional[SpectrumCollection]:
        state = self._state
        if isinstance(state, Loaded):
            return state.collection
        return None

    @property
    def interactive(self) -> bool:
        """Whether picking a time on the chromatogram can select a spectrum."""
        collection = self.collection
        return collection is not None and not collection.is_empty

    def _publish(self, state: SessionState) -> None:
        with self._lock:
            self._state = state
            self._series = None
            self._changed = ChangeMarker.CHANGED

    # =========================================================================
    # Transitions
    # =========================================================================

    def open(self, path: Union[str, Path]) -> SessionState:
        """
        Open a run through the loader.

        Files without the mzML extension are rejected without calling the
        loader. Loader failures (OSError, ValueError) leave the session
        Invalid with the failure message as reason.

        Args:
            path: File to open

        Returns:
            The new state (Loaded or Invalid)
        """
        path = Path(path)
        if not path.name.endswith(FILE_FORMAT):
            reason = f"Invalid file type. Please select an {FILE_FORMAT} file."
            logger.warning("Rejected %s: %s", path, reason)
            self._publish(Invalid(reason, path))
            return self._state

        self._publish(Loading(path))
        logger.info("Loading %s", path)
        try:
            collection = self._loader(path)
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", path, e)
            self._publish(Invalid(str(e), path))
            return self._state

        if not isinstance(collection, SpectrumCollection):
            collection = SpectrumCollection(collection)
        self._publish(Loaded(path, collection))
        logger.info("Loaded %s: %d spectra", path, len(collection))
        return self._state

    def close(self) -> None:
        """Close the current run."""
        logger.info("Closing %s", getattr(self._state, "path", None))
        self._publish(NoFile())

    def update(self, **changes) -> ChromatogramRequest:
        """
        Change request fields (mode, mass, tolerance, polarity,
        smoothing_window, ppm) and mark the session as changed.

        Raises:
            InvalidRequest: If the updated request is malformed; the current
                request and series are kept
        """
        request = self._request.updated(**changes)
        with self._lock:
            if request != self._request:
                self._request = request
                self._changed = ChangeMarker.CHANGED
        return request

    def refresh(self) -> Optional[ChromatogramSeries]:
        """
        Recompute the series if anything changed since the last refresh.

        The result is only stored if the run it was computed from is still
        the loaded one; a result computed while another file was opened is
        dropped and the series of the new run is returned instead.

        Returns:
            Current series, None when no run is loaded

        Raises:
            InvalidRequest: If the request is rejected; the previous series
                is kept
        """
        while True:
            with self._lock:
                state = self._state
                request = self._request
                current = self._series
                changed = self._changed
            if not isinstance(state, Loaded):
                return None
            if changed == ChangeMarker.UNCHANGED and current is not None:
                return current

            logger.info("State has changed, recomputing %s chromatogram",
                        request.mode.name)
            series = self._query.run(state.collection, request)
            with self._lock:
                if self._state is state:
                    self._series = series
                    if self._request == request:
                        self._changed = ChangeMarker.UNCHANGED
                    return series
            logger.info("Run replaced during recompute, discarding result for %s",
                        state.path)

    def select_time(self, query_time: float) -> Optional[Tuple[int, SpectrumRecord]]:
        """
        Resolve a time picked on the chromatogram to a spectrum.

        When a series has been computed the pick is resolved among the
        spectra plotted in it, so a polarity filter is respected; an empty
        series disables selection.

        Args:
            query_time: Picked retention time

        Returns:
            (collection index, spectrum), or None when no spectra are available
        """
        with self._lock:
            state = self._state
            series = self._series
        if not isinstance(state, Loaded):
            logger.warning("No run loaded, spectrum selection disabled")
            return None
        collection = state.collection
        try:
            if series is not None:
                index = series.locate(query_time)
            else:
                index = self._query.locate(collection, query_time)
        except EmptyCollection:
            logger.warning("No spectra available, spectrum selection disabled")
            return None
        logger.info("Selected spectrum %d at rt=%s for query %s",
                    index, collection[index].retention_time, query_time)
        return index, collection[index]
