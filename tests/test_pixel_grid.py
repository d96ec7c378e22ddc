import numpy as np
import pytest

from lane_edges.models.errors import BoundsError
from lane_edges.models.pixel_grid import PixelGrid
from lane_edges.services.raster_service import RasterService


def test_blank_grid_dimensions():
    grid = PixelGrid.blank(4, 3)
    assert (grid.width, grid.height) == (4, 3)
    assert grid.pixels.shape == (3, 4, 3)
    assert grid.get(3, 2) == (0, 0, 0)


@pytest.mark.parametrize("x,y", [(4, 0), (0, 3), (-1, 0), (0, -1), (4, 3)])
def test_get_and_put_out_of_range_raise_bounds_error(x, y):
    grid = PixelGrid.blank(4, 3)
    with pytest.raises(BoundsError):
        grid.get(x, y)
    with pytest.raises(BoundsError):
        grid.put(x, y, 1, 2, 3)


def test_last_corner_is_addressable():
    grid = PixelGrid.blank(4, 3)
    grid.put(3, 2, 10, 20, 30)
    assert grid.get(3, 2) == (10, 20, 30)


def test_put_overwrites_previous_value():
    grid = PixelGrid.blank(2, 2)
    grid.put(1, 0, 200, 200, 200)
    grid.put(1, 0, 5, 6, 7)
    assert grid.get(1, 0) == (5, 6, 7)
    # (x, y) maps to row y, column x
    assert tuple(grid.pixels[0, 1]) == (5, 6, 7)


def test_put_rejects_out_of_range_channel():
    grid = PixelGrid.blank(2, 2)
    with pytest.raises(ValueError):
        grid.put(0, 0, 256, 0, 0)
    assert grid.get(0, 0) == (0, 0, 0)


@pytest.mark.parametrize("channels", [(1.9, 2, 3), (1, 2.0, 3), (1, 2, "3")])
def test_put_rejects_non_integer_channel(channels):
    grid = PixelGrid.blank(2, 2)
    with pytest.raises(TypeError):
        grid.put(0, 0, *channels)
    assert grid.get(0, 0) == (0, 0, 0)


def test_put_accepts_numpy_integers():
    grid = PixelGrid.blank(1, 1)
    grid.put(0, 0, np.uint8(7), np.int64(8), 9)
    assert grid.get(0, 0) == (7, 8, 9)


def test_bounds_error_is_an_index_error():
    with pytest.raises(IndexError):
        PixelGrid.blank(1, 1).get(1, 0)


@pytest.mark.parametrize("pixels", [
    np.zeros((2, 2), dtype=np.uint8),
    np.zeros((2, 2, 4), dtype=np.uint8),
    np.zeros((2, 2, 3), dtype=np.float32),
    np.zeros((0, 2, 3), dtype=np.uint8),
])
def test_invalid_pixel_arrays_are_rejected(pixels):
    with pytest.raises(ValueError):
        PixelGrid(pixels)


def test_blank_rejects_empty_size():
    with pytest.raises(ValueError):
        PixelGrid.blank(0, 5)


def test_copy_is_independent():
    grid = PixelGrid.blank(2, 2)
    clone = grid.copy()
    clone.put(0, 0, 9, 9, 9)
    assert grid.get(0, 0) == (0, 0, 0)


def test_service_accessors_delegate_to_grid():
    service = RasterService()
    grid = service.create_grid(np.zeros((2, 3, 3), dtype=np.uint8))
    service.put_pixel(grid, 2, 1, 1, 2, 3)
    assert service.get_pixel(grid, 2, 1) == (1, 2, 3)
    assert service.get_dimensions(grid) == (3, 2)
    with pytest.raises(BoundsError):
        service.get_pixel(grid, 3, 1)
