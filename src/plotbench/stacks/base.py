"""Base class for plotting stacks."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

from matplotlib.figure import Figure

from ..devices import Device
from ..scenarios import get_scenario


class BaseStack(ABC):
    """Abstract base for a plotting stack.

    A stack turns scenario data into a figure in two steps: ``specify``
    (untimed, once per benchmark case) and ``assemble`` (timed). The
    ``full`` and ``render`` stages are shared; subclasses list any further
    stages in ``stages`` and implement ``_prepare_stage`` for them.
    """

    name: str = ""
    stages: Tuple[str, ...] = ("full", "render")

    def __init__(self, width: float = 6.0, height: float = 4.0, dpi: float = 96.0):
        self.width = width
        self.height = height
        self.dpi = dpi

    def supports(self, stage: str) -> bool:
        return stage in self.stages

    @abstractmethod
    def specify(self, scenario: str, data) -> Any:
        """Translate scenario data into this stack's input (not timed)."""

    @abstractmethod
    def assemble(self, spec: Any) -> Figure:
        """Build a renderable figure from a spec."""

    def build(self, scenario: str, data) -> Figure:
        return self.assemble(self.specify(scenario, data))

    def draw(self, scenario: str, data, device: Device) -> int:
        """Build and render end to end."""
        return device.render(self.build(scenario, data))

    def prepare(
        self, stage: str, scenario: str, data, device: Device
    ) -> Tuple[Optional[Callable], Callable]:
        """Return ``(setup, func)`` for timing one stage.

        ``setup`` runs untimed before each timed call and its result is
        passed to ``func``; it is None when ``func`` takes no arguments.
        """
        if not self.supports(stage):
            raise ValueError(
                f"Stack '{self.name}' has no '{stage}' stage. Available: {list(self.stages)}"
            )
        get_scenario(scenario)

        spec = self.specify(scenario, data)

        if stage == "full":
            return None, lambda: device.render(self.assemble(spec))
        if stage == "render":
            return (lambda: self.assemble(spec)), device.render
        return self._prepare_stage(stage, spec)

    def _prepare_stage(self, stage: str, spec: Any) -> Tuple[Optional[Callable], Callable]:
        """Stack-specific stages. Override in subclasses."""
        raise ValueError(f"Stage '{stage}' not implemented for stack '{self.name}'")

    def _figsize(self) -> Tuple[float, float]:
        return (self.width, self.height)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height}, dpi={self.dpi})"
