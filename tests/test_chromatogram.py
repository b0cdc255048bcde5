import numpy as np
import pytest

from chromascope import ChromatogramMode, ChromatogramSeries, EmptyCollection


@pytest.fixture
def series():
    return ChromatogramSeries(
        rt=[1.0, 2.0, 4.0],
        intensity=[10.0, 50.0, 20.0],
        spectrum_index=[0, 2, 5],
        mode=ChromatogramMode.BPC,
    )


def test_iteration_yields_pairs(series):
    assert list(series) == [(1.0, 10.0), (2.0, 50.0), (4.0, 20.0)]


def test_points(series):
    points = series.points()
    assert points.shape == (3, 2)
    assert np.array_equal(points[:, 0], series.rt)
    assert np.array_equal(points[:, 1], series.intensity)


def test_apex(series):
    assert series.max_intensity == 50.0
    assert series.apex_rt == 2.0
    assert series.rt_range == (1.0, 4.0)


def test_default_spectrum_index():
    s = ChromatogramSeries([1.0, 2.0], [3.0, 4.0])
    assert list(s.spectrum_index) == [0, 1]


def test_length_mismatch():
    with pytest.raises(ValueError):
        ChromatogramSeries([1.0, 2.0], [3.0])


def test_immutable(series):
    with pytest.raises(ValueError):
        series.intensity[0] = 0.0


def test_locate_returns_collection_index(series):
    assert series.locate(0.0) == 0
    assert series.locate(2.9) == 2
    assert series.locate(3.0) == 2
    assert series.locate(3.1) == 5
    assert series.locate(100.0) == 5


def test_locate_empty():
    with pytest.raises(EmptyCollection):
        ChromatogramSeries().locate(1.0)


def test_with_intensity(series):
    other = series.with_intensity([1.0, 2.0, 3.0], smoothing_window=3)
    assert np.array_equal(other.rt, series.rt)
    assert np.array_equal(other.spectrum_index, series.spectrum_index)
    assert other.mode == ChromatogramMode.BPC
    assert other.smoothing_window == 3
    assert series.smoothing_window == 0


def test_empty_series():
    s = ChromatogramSeries()
    assert len(s) == 0
    assert s.max_intensity == 0.0
    assert s.apex_rt == 0.0
    assert s.rt_range == (0.0, 0.0)


def test_to_dataframe(series):
    pd = pytest.importorskip("pandas")
    df = series.to_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["rt", "intensity", "spectrum_index"]
    assert df["spectrum_index"].tolist() == [0, 2, 5]


@pytest.mark.parametrize("name,mode", [
    ("tic", ChromatogramMode.TIC),
    ("Total", ChromatogramMode.TIC),
    ("base peak", ChromatogramMode.BPC),
    ("BPC", ChromatogramMode.BPC),
    ("xic", ChromatogramMode.XIC),
    ("extracted-ion", ChromatogramMode.XIC),
])
def test_mode_parse(name, mode):
    assert ChromatogramMode.parse(name) == mode


def test_mode_parse_unknown():
    with pytest.raises(ValueError):
        ChromatogramMode.parse("srm")
