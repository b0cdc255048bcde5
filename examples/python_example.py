#!/usr/bin/env python3
"""
Example usage of the Chromascope engine.

This script demonstrates the main features of the library:
- Building a spectrum collection
- Deriving TIC, BPC and XIC chromatograms
- Smoothing
- Mapping a picked retention time back to its spectrum
"""

import numpy as np

from chromascope import (
    ChromatogramQuery,
    Polarity,
    SpectrumCollection,
    SpectrumRecord,
)


def create_synthetic_run(n_scans: int = 300) -> SpectrumCollection:
    """Create a synthetic run with two eluting compounds."""
    rng = np.random.default_rng(0)
    mz = np.arange(100, 1000, 0.5)
    compounds = [
        # (m/z, apex rt, peak width, height)
        (250.5, 120.0, 6.0, 5e5),
        (722.5, 200.0, 8.0, 2e5),
    ]

    records = []
    for scan in range(n_scans):
        rt = scan * 1.0
        intensity = rng.uniform(0, 500, len(mz))
        for peak_mz, apex, width, height in compounds:
            elution = height * np.exp(-0.5 * ((rt - apex) / width) ** 2)
            intensity += elution * np.exp(-0.5 * ((mz - peak_mz) / 0.2) ** 2)
        polarity = Polarity.POSITIVE if scan % 2 == 0 else Polarity.NEGATIVE
        records.append(SpectrumRecord(rt, mz=mz, intensity=intensity, polarity=polarity))

    return SpectrumCollection(records)


def example_chromatograms(run: SpectrumCollection) -> None:
    """Demonstrate chromatogram derivation."""
    print("=" * 60)
    print("Chromatograms")
    print("=" * 60)

    query = ChromatogramQuery()
    print(f"Run: {run}")

    tic = query.query(run, "tic", polarity="+")
    print(f"TIC:  {tic}, apex at {tic.apex_rt:.1f}")

    bpc = query.query(run, "bpc", polarity="+")
    print(f"BPC:  {bpc}, apex at {bpc.apex_rt:.1f}")

    xic = query.query(run, "xic", mass=722.5, tolerance=0.5, polarity="+")
    print(f"XIC 722.5:  {xic}, apex at {xic.apex_rt:.1f}")

    smoothed = query.query(run, "xic", mass=722.5, tolerance=0.5, polarity="+",
                           smoothing_window=7)
    print(f"Smoothed XIC apex at {smoothed.apex_rt:.1f}")


def example_locate(run: SpectrumCollection) -> None:
    """Demonstrate retention time lookup."""
    print("\n" + "=" * 60)
    print("Retention time lookup")
    print("=" * 60)

    query = ChromatogramQuery()
    series = query.query(run, "tic", polarity="-")
    for picked in (119.6, 120.5, -5.0, 1000.0):
        index = series.locate(picked)
        spectrum = run[index]
        print(f"Picked {picked:7.1f} -> spectrum {index} at rt {spectrum.retention_time:.1f} "
              f"({spectrum.polarity.name}, base peak m/z {spectrum.base_peak_mz:.2f})")


def main():
    run = create_synthetic_run()
    example_chromatograms(run)
    example_locate(run)


if __name__ == "__main__":
    main()
