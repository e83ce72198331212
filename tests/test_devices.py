"""Tests for output devices."""

import pytest
from matplotlib.figure import Figure
from plotbench import available_devices, get_device


@pytest.fixture
def figure():
    fig = Figure(figsize=(2, 2))
    ax = fig.add_subplot()
    ax.plot([0, 1, 2], [0, 1, 0])
    return fig


class TestDevices:
    """Each device paints a figure in memory."""

    def test_registry(self):
        assert available_devices() == ["agg", "png", "svg", "pdf", "void"]

    def test_agg_buffer_size(self, figure):
        """Agg returns the RGBA buffer size for the requested dpi."""
        nbytes = get_device("agg", dpi=50).render(figure)
        assert nbytes == 100 * 100 * 4

    @pytest.mark.parametrize("name", ["png", "svg", "pdf"])
    def test_encoders_produce_bytes(self, name, figure):
        assert get_device(name).render(figure) > 0

    def test_void_produces_nothing(self, figure):
        assert get_device("void").render(figure) == 0

    def test_kinds(self):
        kinds = {name: get_device(name).kind for name in available_devices()}
        assert kinds == {"agg": "raster", "png": "raster", "svg": "vector", "pdf": "vector", "void": "null"}

    def test_unknown_device(self):
        with pytest.raises(ValueError, match="Unknown device"):
            get_device("plotter")
