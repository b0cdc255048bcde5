"""
Smoothing algorithms for chromatogram series.
"""

from typing import List, Union

import numpy as np
from scipy import ndimage, signal

from .chromatogram import ChromatogramSeries

SMOOTHING_METHODS = ("moving_average", "gaussian", "savgol")
ALIGNMENTS = ("centered", "trailing")


def moving_average(
    values: Union[np.ndarray, List[float]],
    window_size: int,
    alignment: str = "centered",
) -> np.ndarray:
    """
    Moving average with truncated edges.

    Each output value is the mean of the input values inside the window
    that exist in the array: near the edges the window shrinks instead of
    being padded, so edge values are averaged over fewer samples.

    A centered window covers [i - w//2, i + (w-1)//2], a trailing window
    covers [i - w + 1, i]. Window sums are direct float64 sums over at most
    window_size samples (numpy.convolve with a ones kernel), never
    differences of a running total, so precision does not degrade along
    long runs.

    Args:
        values: Input values
        window_size: Number of samples per window (<= 1 returns a copy)
        alignment: "centered" or "trailing"

    Returns:
        Smoothed values, same length as input

    Example:
        >>> moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        array([1.5, 2. , 3. , 4. , 4.5])
    """
    values = np.asarray(values, dtype=np.float64)
    n = len(values)
    if window_size <= 1 or n == 0:
        return values.copy()

    if alignment == "centered":
        ahead = (window_size - 1) // 2
    elif alignment == "trailing":
        ahead = 0
    else:
        raise ValueError(f"Unknown window alignment: {alignment}")

    # sums[k] is the sum of values[k - window_size + 1 : k + 1] clipped to the array
    sums = np.convolve(values, np.ones(window_size, dtype=np.float64), mode="full")
    end = np.arange(n) + ahead
    start = end - window_size + 1
    counts = np.minimum(end, n - 1) - np.maximum(start, 0) + 1
    return sums[end] / counts


def smooth_chromatogram(
    series: ChromatogramSeries,
    window_size: int,
    method: str = "moving_average",
    alignment: str = "centered",
    **kwargs,
) -> ChromatogramSeries:
    """
    Smooth a chromatogram series.

    Times, spectrum indices and length are preserved; only intensities
    change. A window of 0 or 1 returns the input series unchanged.

    Args:
        series: Input series
        window_size: Size of smoothing window
        method: Smoothing method:
            - "moving_average": Mean over a truncated window
            - "gaussian": Gaussian kernel smoothing
            - "savgol": Savitzky-Golay filter
        alignment: Window alignment for "moving_average"
        **kwargs: Method-specific parameters:
            - gaussian: sigma (default: window_size / 4)
            - savgol: polyorder (default: 2)

    Returns:
        Smoothed series

    Example:
        >>> smoothed = smooth_chromatogram(tic, 5)
        >>> len(smoothed) == len(tic)
        True
    """
    if window_size < 0:
        raise ValueError(f"Smoothing window must be non-negative, got {window_size}")
    if method not in SMOOTHING_METHODS:
        raise ValueError(f"Unknown smoothing method: {method}")
    if window_size <= 1:
        return series

    intensity = series.intensity

    if method == "moving_average":
        smoothed = moving_average(intensity, window_size, alignment)
        return series.with_intensity(smoothed, smoothing_window=window_size)

    if len(intensity) < window_size:
        return series

    if method == "gaussian":
        sigma = kwargs.get("sigma", window_size / 4.0)
        smoothed = ndimage.gaussian_filter1d(intensity, sigma, mode="nearest")
    else:
        polyorder = kwargs.get("polyorder", 2)
        # savgol needs an odd window; the requested width is still recorded
        filter_width = window_size + 1 if window_size % 2 == 0 else window_size
        if len(intensity) < filter_width:
            return series
        if polyorder >= filter_width:
            polyorder = filter_width - 1
        smoothed = signal.savgol_filter(intensity, filter_width, polyorder)

    # Ensure non-negative
    smoothed = np.maximum(smoothed, 0)
    return series.with_intensity(smoothed, smoothing_window=window_size)
