import numpy as np
import pytest

from chromascope import Polarity, SpectrumCollection, SpectrumRecord


def test_sorted_by_retention_time():
    coll = SpectrumCollection([
        SpectrumRecord(3.0, native_id="c"),
        SpectrumRecord(1.0, native_id="a"),
        SpectrumRecord(2.0, native_id="b"),
    ])
    assert [s.native_id for s in coll] == ["a", "b", "c"]
    assert np.array_equal(coll.retention_times, [1.0, 2.0, 3.0])


def test_equal_times_keep_producer_order():
    coll = SpectrumCollection([
        SpectrumRecord(2.0, native_id="late"),
        SpectrumRecord(1.0, native_id="first"),
        SpectrumRecord(1.0, native_id="second"),
    ])
    assert [s.native_id for s in coll] == ["first", "second", "late"]


def test_retention_times_read_only(three_spectra):
    with pytest.raises(ValueError):
        three_spectra.retention_times[0] = 10.0


def test_sequence_protocol(three_spectra):
    assert len(three_spectra) == 3
    assert three_spectra[-1].retention_time == 3.0
    assert [s.retention_time for s in three_spectra[1:]] == [2.0, 3.0]
    assert three_spectra[0] in three_spectra


def test_rejects_non_records():
    with pytest.raises(TypeError):
        SpectrumCollection([(1.0, [100.0], [1.0])])


def test_empty(empty_run):
    assert empty_run.is_empty
    assert len(empty_run) == 0
    assert empty_run.rt_range == (0.0, 0.0)


def test_spectrum_arrays(three_spectra):
    mz, intensity = three_spectra.spectrum_arrays(1)
    assert np.array_equal(mz, [100.0, 200.0])
    assert np.array_equal(intensity, [10.0, 20.0])


def test_summary(mixed_run):
    summary = mixed_run.summary()
    assert summary["spectrum_count"] == 30
    assert summary["ms_levels"] == {1: 20, 2: 10}
    assert summary["polarities"] == ["NEGATIVE", "POSITIVE"]
    assert mixed_run.count_by_level(2) == 10
    assert mixed_run.polarities() == {Polarity.POSITIVE, Polarity.NEGATIVE}
