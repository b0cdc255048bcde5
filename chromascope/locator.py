"""
Retention time lookup: map a time picked on a chromatogram to a spectrum.
"""

import logging

import numpy as np

from .collection import SpectrumCollection
from .errors import EmptyCollection, InvalidRequest

logger = logging.getLogger(__name__)


def nearest_index(times: np.ndarray, query_time: float) -> int:
    """
    Find the index of the time closest to query_time in a sorted array.

    Uses a binary search for the insertion point and compares the two
    neighbours. When both neighbours are equally distant the earlier one
    wins, and when a time is repeated the first index carrying it is
    returned. Queries before the first or after the last time clamp to
    the first or last index.

    Args:
        times: Retention times in ascending order
        query_time: Time to look up

    Returns:
        Index into times

    Raises:
        EmptyCollection: If times is empty
        InvalidRequest: If query_time is NaN

    Example:
        >>> nearest_index(np.array([1.0, 2.0, 3.0]), 1.6)
        1
        >>> nearest_index(np.array([1.0, 2.0, 3.0]), 1.5)
        0
    """
    n = len(times)
    if n == 0:
        raise EmptyCollection()

    query = float(query_time)
    if np.isnan(query):
        raise InvalidRequest("Query time must be a number, got NaN")

    if query <= times[0]:
        return 0
    if query > times[-1]:
        return n - 1

    # times[pos - 1] < query <= times[pos]
    pos = int(np.searchsorted(times, query, side="left"))
    before = times[pos - 1]
    after = times[pos]
    if query - before <= after - query:
        return int(np.searchsorted(times, before, side="left"))
    return pos


def locate_spectrum(collection: SpectrumCollection, query_time: float) -> int:
    """
    Find the spectrum whose retention time is closest to query_time.

    Args:
        collection: Loaded spectra
        query_time: Time picked by the user, may lie outside the run

    Returns:
        Index of the nearest spectrum in the collection

    Raises:
        EmptyCollection: If the collection has no spectra
    """
    if collection.is_empty:
        raise EmptyCollection("No spectra available for retention time lookup")
    index = nearest_index(collection.retention_times, query_time)
    logger.debug("Query time %s resolved to spectrum %d (rt=%s)",
                 query_time, index, collection.retention_times[index])
    return index
