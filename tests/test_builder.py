import numpy as np
import pytest

from chromascope import (
    ChromatogramBuilder,
    ChromatogramMode,
    InvalidRequest,
    Polarity,
    SpectrumCollection,
    SpectrumRecord,
)


@pytest.fixture
def builder():
    return ChromatogramBuilder()


def test_tic_scenario(builder, three_spectra):
    series = builder.build(three_spectra, ChromatogramMode.TIC)
    assert list(series) == [(1.0, 30.0), (2.0, 30.0), (3.0, 30.0)]
    assert series.mode == ChromatogramMode.TIC


def test_bpc_scenario(builder, three_spectra):
    series = builder.build(three_spectra, ChromatogramMode.BPC)
    assert list(series) == [(1.0, 20.0), (2.0, 20.0), (3.0, 20.0)]


def test_xic_scenario(builder, three_spectra):
    series = builder.build(three_spectra, ChromatogramMode.XIC, mass=100.0, tolerance=0.5)
    assert list(series) == [(1.0, 10.0), (2.0, 10.0), (3.0, 10.0)]
    assert series.target_mz == 100.0
    assert series.mz_tolerance == 0.5


def test_mode_from_string(builder, three_spectra):
    series = builder.build(three_spectra, "bpc")
    assert series.mode == ChromatogramMode.BPC


def test_empty_collection_gives_empty_series(builder, empty_run):
    for mode in ChromatogramMode:
        series = builder.build(empty_run, mode, mass=100.0, tolerance=0.1)
        assert len(series) == 0


def test_tic_length_matches_polarity_filter(builder, mixed_run):
    ms1 = [s for s in mixed_run if s.ms_level == 1]
    assert len(builder.build(mixed_run, "tic")) == len(ms1)
    for polarity in (Polarity.POSITIVE, Polarity.NEGATIVE):
        series = builder.build(mixed_run, "tic", polarity=polarity)
        expected = [s for s in ms1 if s.polarity == polarity]
        assert len(series) == len(expected)
        assert np.array_equal(series.rt, [s.retention_time for s in expected])


def test_polarity_filter_excludes_not_zeroes(builder):
    coll = SpectrumCollection([
        SpectrumRecord(1.0, mz=[100.0], intensity=[5.0], polarity="+"),
        SpectrumRecord(2.0, mz=[100.0], intensity=[7.0], polarity="-"),
        SpectrumRecord(3.0, mz=[100.0], intensity=[9.0], polarity="+"),
    ])
    series = builder.build(coll, "tic", polarity=Polarity.POSITIVE)
    assert list(series) == [(1.0, 5.0), (3.0, 9.0)]
    assert list(series.spectrum_index) == [0, 2]
    assert series.polarity == Polarity.POSITIVE


def test_polarity_filter_from_string(builder, mixed_run):
    a = builder.build(mixed_run, "tic", polarity="negative")
    b = builder.build(mixed_run, "tic", polarity=Polarity.NEGATIVE)
    assert np.array_equal(a.intensity, b.intensity)


def test_higher_ms_levels_excluded(builder, mixed_run):
    series = builder.build(mixed_run, "tic")
    for idx in series.spectrum_index:
        assert mixed_run[idx].ms_level == 1


def test_all_ms_levels(mixed_run):
    series = ChromatogramBuilder(ms_level=0).build(mixed_run, "tic")
    assert len(series) == len(mixed_run)


def test_bpc_not_above_tic(builder, mixed_run):
    tic = builder.build(mixed_run, "tic")
    bpc = builder.build(mixed_run, "bpc")
    assert np.all(bpc.intensity <= tic.intensity)


def test_empty_scan_contributes_zero(builder):
    coll = SpectrumCollection([
        SpectrumRecord(1.0),
        SpectrumRecord(2.0, mz=[100.0], intensity=[3.0]),
    ])
    assert list(builder.build(coll, "tic")) == [(1.0, 0.0), (2.0, 3.0)]
    assert list(builder.build(coll, "bpc")) == [(1.0, 0.0), (2.0, 3.0)]
    assert list(builder.build(coll, "xic", mass=100.0)) == [(1.0, 0.0), (2.0, 3.0)]


def test_xic_zero_tolerance_exact_mass(builder):
    coll = SpectrumCollection([
        SpectrumRecord(float(k), mz=[99.0, 150.25, 300.0], intensity=[1.0, 10.0 * k, 5.0])
        for k in range(1, 6)
    ])
    series = builder.build(coll, "xic", mass=150.25, tolerance=0.0)
    assert np.array_equal(series.intensity, [10.0, 20.0, 30.0, 40.0, 50.0])


def test_xic_mass_outside_range(builder, mixed_run):
    series = builder.build(mixed_run, "xic", mass=5000.0, tolerance=1.0)
    assert len(series) == 20
    assert np.all(series.intensity == 0)


def test_xic_matches_mask_sum(builder, mixed_run):
    mass, tolerance = 550.0, 25.0
    series = builder.build(mixed_run, "xic", mass=mass, tolerance=tolerance)
    for idx, value in zip(series.spectrum_index, series.intensity):
        sp = mixed_run[idx]
        mask = (sp.mz >= mass - tolerance) & (sp.mz <= mass + tolerance)
        assert np.isclose(value, sp.intensity[mask].sum())


def test_xic_ppm_tolerance(builder):
    coll = SpectrumCollection([
        SpectrumRecord(1.0, mz=[999.98, 1000.0, 1000.005, 1000.02], intensity=[1.0, 2.0, 4.0, 8.0]),
    ])
    # 10 ppm of 1000 is 0.01
    series = builder.build(coll, "xic", mass=1000.0, tolerance=10.0, ppm=True)
    assert series.intensity[0] == 6.0
    assert np.isclose(series.mz_tolerance, 0.01)


def test_xic_missing_tolerance_is_exact(builder, three_spectra):
    series = builder.build(three_spectra, "xic", mass=200.0)
    assert np.array_equal(series.intensity, [20.0, 20.0, 20.0])


def test_xic_without_mass(builder, three_spectra):
    with pytest.raises(InvalidRequest):
        builder.build(three_spectra, "xic", tolerance=0.5)


@pytest.mark.parametrize("mass", [0.0, -100.0])
def test_xic_non_positive_mass(builder, three_spectra, mass):
    with pytest.raises(InvalidRequest):
        builder.build(three_spectra, "xic", mass=mass, tolerance=0.5)


def test_xic_negative_tolerance(builder, three_spectra):
    with pytest.raises(InvalidRequest):
        builder.build(three_spectra, "xic", mass=100.0, tolerance=-0.1)


@pytest.mark.parametrize("mass, tolerance", [("abc", 0.5), ([100.0], 0.5), (100.0, "wide")])
def test_xic_non_numeric_window(builder, three_spectra, mass, tolerance):
    with pytest.raises(InvalidRequest):
        builder.build(three_spectra, "xic", mass=mass, tolerance=tolerance)


def test_xic_numeric_strings(builder, three_spectra):
    xic = builder.build(three_spectra, "xic", mass="100", tolerance="0.5")
    assert np.array_equal(xic.intensity, [10.0, 10.0, 10.0])


def test_output_keeps_duplicate_times(builder):
    coll = SpectrumCollection([
        SpectrumRecord(1.0, mz=[100.0], intensity=[1.0]),
        SpectrumRecord(1.0, mz=[100.0], intensity=[2.0]),
        SpectrumRecord(2.0, mz=[100.0], intensity=[3.0]),
    ])
    assert list(builder.build(coll, "tic")) == [(1.0, 1.0), (1.0, 2.0), (2.0, 3.0)]
