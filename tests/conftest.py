import numpy as np
import pytest

from chromascope import Polarity, SpectrumCollection, SpectrumRecord


@pytest.fixture
def three_spectra():
    # three scans at 1, 2 and 3 with peaks (100, 10) and (200, 20)
    return SpectrumCollection([
        SpectrumRecord(rt, mz=[100.0, 200.0], intensity=[10.0, 20.0],
                       polarity=Polarity.POSITIVE)
        for rt in (1.0, 2.0, 3.0)
    ])


@pytest.fixture
def mixed_run():
    # alternating polarity MS1 scans with an MS2 scan after each positive scan
    records = []
    rng = np.random.default_rng(1234)
    rt = 0.0
    for k in range(20):
        polarity = Polarity.POSITIVE if k % 2 == 0 else Polarity.NEGATIVE
        mz = np.sort(rng.uniform(100, 1000, size=50))
        intensity = rng.uniform(0, 1000, size=50)
        records.append(SpectrumRecord(rt, mz=mz, intensity=intensity, polarity=polarity))
        rt += 0.5
        if polarity == Polarity.POSITIVE:
            records.append(SpectrumRecord(rt, mz=mz[:10], intensity=intensity[:10],
                                          polarity=polarity, ms_level=2))
            rt += 0.25
    return SpectrumCollection(records)


@pytest.fixture
def empty_run():
    return SpectrumCollection.empty()
