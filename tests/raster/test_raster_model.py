import numpy as np
import pytest

from droughtindices.raster.model import (
    EmptyRasterError,
    Extent,
    Raster,
    ShapeMismatchError,
    add,
    cell_max,
    cell_min,
    check_aligned,
    clamp,
    divide,
    log,
    set_where,
    subtract,
    summarize,
)


def test_defaults_and_geometry(raster_factory):
    r = raster_factory(np.zeros((3, 4)), name="zeros")
    assert (r.width, r.height) == (4, 3)
    assert r.shape == (3, 4)
    assert r.resolution == pytest.approx((30.0, 30.0))
    assert r.crs == "EPSG:32633"

    bare = Raster(np.ones((2, 5)))
    assert bare.extent == Extent(0.0, 0.0, 5.0, 2.0)
    assert bare.name == "layer"


def test_non_finite_and_nodata_sentinel_are_masked():
    r = Raster.from_array([[1.0, np.nan], [np.inf, -9999.0]], nodata=-9999.0)
    assert r.mask.tolist() == [[False, True], [True, True]]
    assert r.valid_count == 1


def test_raster_is_immutable(raster_factory):
    r = raster_factory([[1.0, 2.0]])
    with pytest.raises(ValueError):
        r.data[0, 0] = 5.0
    with pytest.raises(AttributeError):
        r.name = "other"


def test_arithmetic_keeps_metadata_and_inputs(raster_factory):
    a = raster_factory([[1.0, 2.0], [3.0, 4.0]], name="a")
    b = raster_factory([[4.0, 3.0], [2.0, 1.0]], name="b")
    out = (a + b) * 2 - 1
    np.testing.assert_allclose(out.data, [[9.0, 9.0], [9.0, 9.0]])
    assert out.name == "a"
    assert out.extent == a.extent and out.crs == a.crs
    np.testing.assert_allclose(a.data, [[1.0, 2.0], [3.0, 4.0]])


def test_scalar_on_left(raster_factory):
    r = raster_factory([[1.0, 4.0]])
    np.testing.assert_allclose((10 - r).data, [[9.0, 6.0]])
    np.testing.assert_allclose((8 / r).data, [[8.0, 2.0]])
    np.testing.assert_allclose(subtract(10, r).data, (10 - r).data)
    np.testing.assert_allclose((-r).data, [[-1.0, -4.0]])


def test_nodata_propagates_through_binary_ops(raster_factory):
    a = raster_factory([[1.0, 2.0, 3.0]], mask=[[False, True, False]])
    b = raster_factory([[1.0, 1.0, 1.0]], mask=[[False, False, True]])
    out = add(a, b)
    assert out.mask.tolist() == [[False, True, True]]
    assert out.filled(0.0).tolist() == [[2.0, 0.0, 0.0]]


def test_division_by_zero_is_nodata_not_error(raster_factory):
    num = raster_factory([[1.0, 0.0, 2.0]])
    den = raster_factory([[0.0, 0.0, 4.0]])
    out = divide(num, den)
    assert out.mask.tolist() == [[True, True, False]]
    assert out.data[0, 2] == 0.5


def test_shape_mismatch_raises(raster_factory):
    a = raster_factory(np.ones((2, 2)))
    b = raster_factory(np.ones((2, 3)))
    with pytest.raises(ShapeMismatchError):
        a + b
    with pytest.raises(ShapeMismatchError):
        check_aligned(a, a, b)


def test_log_masks_non_positive_cells(raster_factory):
    r = raster_factory([[np.e, 0.0, -1.0, 1.0]])
    out = log(r)
    assert out.mask.tolist() == [[False, True, True, False]]
    assert out.data[0, 0] == pytest.approx(1.0)
    assert out.data[0, 3] == 0.0


def test_set_where_and_clamp(raster_factory):
    r = raster_factory([[-0.5, 0.2, 1.7, 9.0]], mask=[[False, False, False, True]])
    assert set_where(r, lambda a: a > 1, 1.0).filled(0).tolist() == [[-0.5, 0.2, 1.0, 0.0]]

    clamped = clamp(r, 0.0, 1.0)
    assert clamped.filled(-1).tolist() == [[0.0, 0.2, 1.0, -1.0]]
    assert clamped.mask[0, 3]

    with pytest.raises(ShapeMismatchError):
        set_where(r, np.array([True, False]), 0.0)


def test_global_reductions_skip_nodata(raster_factory):
    r = raster_factory([[5.0, -100.0, 2.0]], mask=[[False, True, False]])
    assert cell_min(r) == 2.0
    assert cell_max(r) == 5.0
    stats = summarize(r)
    assert stats["mean"] == pytest.approx(3.5)
    assert stats["valid_cells"] == 2
    assert stats["total_cells"] == 3


def test_reductions_on_empty_raster_raise(raster_factory):
    r = raster_factory([[1.0, 2.0]], mask=[[True, True]])
    with pytest.raises(EmptyRasterError):
        cell_min(r)
    with pytest.raises(EmptyRasterError):
        cell_max(r)
