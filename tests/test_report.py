"""Tests for figures and the markdown report."""

import matplotlib.pyplot as plt
import pytest
from plotbench.analysis import stage_breakdown
from plotbench.report import (
    _headline_cases,
    make_figures,
    plot_devices,
    plot_scaling,
    plot_stage_bars,
    plot_stage_shares,
    write_report,
)
from utils.plotting import palettes


class TestFigures:
    """Each plot writes a file."""

    def test_stage_bars(self, tmp_path, stage_summary):
        path = plot_stage_bars(stage_summary, tmp_path / "bars.pdf")
        assert path.exists() and path.stat().st_size > 0

    def test_scaling(self, tmp_path, stage_summary):
        assert plot_scaling(stage_summary, tmp_path / "scaling.png").exists()

    def test_scaling_needs_two_sizes(self, tmp_path, stage_summary):
        with pytest.raises(ValueError, match="two sizes"):
            plot_scaling(stage_summary[stage_summary["n"] == 100], tmp_path / "scaling.png")

    def test_stage_shares(self, tmp_path, stage_summary):
        path = plot_stage_shares(stage_breakdown(stage_summary), tmp_path / "shares.pdf")
        assert path.exists()

    def test_devices(self, tmp_path, device_summary):
        assert plot_devices(device_summary, tmp_path / "sub" / "devices.svg").exists()

    def test_devices_coloured_by_device(self, tmp_path, device_summary, monkeypatch):
        """One hue level per device, in the fixed device palette order."""
        monkeypatch.setattr(plt, "close", lambda fig: None)
        plot_devices(device_summary, tmp_path / "devices.pdf")

        (legend,) = plt.gcf().legends
        assert [t.get_text() for t in legend.get_texts()] == list(palettes.DEVICES)
        plt.close("all")

    def test_devices_need_render_rows(self, tmp_path, stage_summary):
        full_only = stage_summary[stage_summary["stage"] == "full"]
        with pytest.raises(ValueError, match="render"):
            plot_devices(full_only, tmp_path / "devices.pdf")

    def test_make_figures(self, tmp_path, stage_summary):
        """All four figures are possible for a multi-size, multi-stage summary."""
        paths = make_figures(stage_summary, tmp_path)
        assert sorted(p.name for p in paths) == [
            "devices.pdf", "scaling.pdf", "stage_bars.pdf", "stage_shares.pdf",
        ]

    def test_make_figures_skips_unsupported(self, tmp_path, device_summary):
        """A render-only, single-size summary gets no scaling or share plots."""
        names = [p.name for p in make_figures(device_summary, tmp_path)]
        assert names == ["stage_bars.pdf", "devices.pdf"]


class TestWriteReport:
    """Tests for the markdown report."""

    def test_sections(self, tmp_path, stage_summary):
        path = write_report(stage_summary, tmp_path / "report.md")
        text = path.read_text()

        assert text.startswith("# Rendering performance report")
        for section in ("## Findings", "## Results", "## Stage breakdown", "## Relative speed", "## Scaling exponents"):
            assert section in text
        assert "10.0x as long" in text
        assert "## Figures" not in text

    def test_figure_links_relative(self, tmp_path, stage_summary):
        figure = tmp_path / "figures" / "bars.pdf"
        text = write_report(stage_summary, tmp_path / "report.md", [figure]).read_text()
        assert "![bars](figures/bars.pdf)" in text

    def test_durations_formatted(self, tmp_path, stage_summary):
        text = write_report(stage_summary, tmp_path / "report.md").read_text()
        assert "100 ms" in text

    def test_empty_summary(self, tmp_path, stage_summary):
        with pytest.raises(ValueError):
            write_report(stage_summary.iloc[0:0], tmp_path / "report.md")


class TestHeadlineCases:
    """Tests for choosing the size shown in single-size figures."""

    def test_prefers_largest_staged_size(self, combined_summary):
        """End-to-end scaling runs at larger n do not hide the stage bars."""
        points = _headline_cases(combined_summary).query("scenario == 'points'")

        assert set(points["n"]) == {1000}
        assert {"full", "stat", "table", "render"} <= set(points["stage"])

    def test_full_only_scenario_uses_largest_size(self, combined_summary):
        lines = _headline_cases(combined_summary).query("scenario == 'lines'")
        assert set(lines["n"]) == {100_000}
        assert set(lines["stage"]) == {"full"}

    def test_combined_stage_bars(self, tmp_path, combined_summary):
        assert plot_stage_bars(combined_summary, tmp_path / "bars.pdf").exists()
