"""Output devices.

A device receives the drawing commands of an assembled figure. Raster and
vector devices encode into memory so that disk I/O never enters a timing.
"""

from __future__ import annotations

from io import BytesIO
from typing import Dict, List, Type

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.backends.backend_template import FigureCanvasTemplate
from matplotlib.figure import Figure


class Device:
    """Base device. Subclasses implement ``render``."""

    name: str = ""
    kind: str = ""  # "raster" | "vector" | "null"

    def __init__(self, dpi: float = 96.0):
        self.dpi = dpi

    def render(self, figure: Figure) -> int:
        """Paint ``figure``; return the number of bytes produced."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dpi={self.dpi})"


class AggDevice(Device):
    """Rasterize onto an in-memory Agg canvas without encoding."""

    name = "agg"
    kind = "raster"

    def render(self, figure: Figure) -> int:
        figure.set_dpi(self.dpi)
        canvas = FigureCanvasAgg(figure)
        canvas.draw()
        return canvas.buffer_rgba().nbytes


class _EncodingDevice(Device):
    """Save the figure into a memory buffer in ``format``."""

    format: str = ""

    def render(self, figure: Figure) -> int:
        buf = BytesIO()
        figure.savefig(buf, format=self.format, dpi=self.dpi)
        return buf.tell()


class PNGDevice(_EncodingDevice):
    name = "png"
    kind = "raster"
    format = "png"


class SVGDevice(_EncodingDevice):
    name = "svg"
    kind = "vector"
    format = "svg"


class PDFDevice(_EncodingDevice):
    name = "pdf"
    kind = "vector"
    format = "pdf"


class VoidDevice(Device):
    """Null sink: every draw call reaches a renderer that discards it.

    Isolates the cost of walking the artist tree from painting.
    """

    name = "void"
    kind = "null"

    def render(self, figure: Figure) -> int:
        figure.set_dpi(self.dpi)
        FigureCanvasTemplate(figure).draw()
        return 0


_DEVICES: Dict[str, Type[Device]] = {
    cls.name: cls for cls in (AggDevice, PNGDevice, SVGDevice, PDFDevice, VoidDevice)
}


def available_devices() -> List[str]:
    return list(_DEVICES)


def get_device(name: str, dpi: float = 96.0) -> Device:
    """Instantiate a device by name."""
    try:
        cls = _DEVICES[name]
    except KeyError:
        raise ValueError(f"Unknown device: {name}. Available: {available_devices()}") from None
    return cls(dpi=dpi)
