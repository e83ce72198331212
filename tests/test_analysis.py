"""Tests for result analysis."""

import numpy as np
import pandas as pd
import pytest
from plotbench.analysis import (
    dominant_stage,
    findings,
    flag_outliers,
    relative_speed,
    scaling_exponents,
    stage_breakdown,
    summarize_results,
)


def select(df, **filters):
    mask = np.ones(len(df), dtype=bool)
    for key, value in filters.items():
        mask &= (df[key] == value).to_numpy()
    return df[mask]


class TestStageBreakdown:
    """Tests for splitting the full draw into stages."""

    def test_shares_and_overhead(self, stage_summary):
        """Stage shares of the full median plus the unattributed remainder."""
        breakdown = stage_breakdown(stage_summary)
        case = select(breakdown, stack="declarative", n=100).set_index("stage")

        assert list(case.index) == ["stat", "table", "render", "overhead"]
        assert case.loc["stat", "share"] == pytest.approx(0.2)
        assert case.loc["render", "share"] == pytest.approx(0.4)
        assert case.loc["overhead", "median"] == pytest.approx(0.01)
        assert case["share"].sum() == pytest.approx(1.0)

    def test_missing_stage_not_reported(self, stage_summary):
        """Immediate mode has no stat row; its overhead covers full - table - render."""
        case = select(stage_breakdown(stage_summary), stack="immediate", n=100).set_index("stage")

        assert "stat" not in case.index
        assert case.loc["overhead", "median"] == pytest.approx(0.001)

    def test_requires_full(self, stage_summary):
        with pytest.raises(ValueError, match="full"):
            stage_breakdown(stage_summary[stage_summary["stage"] != "full"])

    def test_dominant_stage(self, stage_summary):
        top = dominant_stage(stage_breakdown(stage_summary))

        assert len(top) == 4
        assert set(top["stage"]) == {"render"}


class TestRelativeSpeed:
    """Tests for stack-to-stack ratios."""

    def test_ratios(self, stage_summary):
        ratios = relative_speed(stage_summary, baseline="immediate")
        full = select(ratios, stage="full", n=100).set_index("stack")

        assert full.loc["declarative", "ratio"] == pytest.approx(10.0)
        assert full.loc["immediate", "ratio"] == pytest.approx(1.0)

    def test_unmatched_cases_dropped(self, stage_summary):
        """Stat cases have no immediate-mode counterpart."""
        ratios = relative_speed(stage_summary)
        assert "stat" not in set(ratios["stage"])

    def test_missing_baseline(self, stage_summary):
        with pytest.raises(ValueError, match="baseline"):
            relative_speed(stage_summary, baseline="bokeh")


class TestScalingExponents:
    """Tests for log-log slopes."""

    def test_linear_scaling(self, stage_summary):
        """Medians grow 10x for 10x n: exponent 1."""
        exponents = scaling_exponents(stage_summary)

        assert len(exponents) == 7
        np.testing.assert_allclose(exponents["exponent"], 1.0)
        assert (exponents["n_sizes"] == 2).all()

    def test_single_size_dropped(self, stage_summary):
        exponents = scaling_exponents(stage_summary[stage_summary["n"] == 100])

        assert exponents.empty
        assert "exponent" in exponents.columns


class TestRawTables:
    """Tests for per-iteration tables."""

    @pytest.fixture
    def raw(self):
        times = [1.0, 1.1, 0.9, 1.0, 9.0]
        rows = [
            {"scenario": "points", "stack": stack, "stage": "full", "device": "agg", "n": 10,
             "iteration": i, "time": t * scale, "gc": 0}
            for stack, scale in (("declarative", 2.0), ("immediate", 1.0))
            for i, t in enumerate(times)
        ]
        return pd.DataFrame(rows)

    def test_summarize_results(self, raw):
        summary = summarize_results(raw).set_index("stack")

        assert summary.loc["declarative", "median"] == pytest.approx(2.0)
        assert summary.loc["immediate", "n_iter"] == 5
        assert summary.loc["immediate", "n_outliers"] == 1

    def test_flag_outliers(self, raw):
        flagged = flag_outliers(raw)

        assert flagged["outlier"].dtype == bool
        assert flagged["outlier"].sum() == 2
        assert flagged.loc[flagged["outlier"], "iteration"].tolist() == [4, 4]


class TestFindings:
    """Tests for the narrated findings."""

    def test_slowdown_and_dominant_stage(self, stage_summary):
        notes = findings(stage_summary)
        text = " ".join(notes)

        assert "10.0x as long" in text
        assert "render stage dominates" in text
        assert "n^1.00" in text

    def test_device_ranking(self, device_summary):
        (note,) = [n for n in findings(device_summary) if "device" in n]
        assert "void is the fastest" in note
        assert "pdf the slowest" in note

    def test_device_ranking_uses_matched_cases(self, uneven_device_summary):
        """Cases measured on a single device do not take part in the ranking."""
        (note,) = [n for n in findings(uneven_device_summary) if "device" in n]
        assert "Across 1 render-stage cases" in note
        assert "png is the fastest" in note
        assert "agg the slowest" in note

    def test_no_device_ranking_without_shared_cases(self, uneven_device_summary):
        only_agg = uneven_device_summary[uneven_device_summary["scenario"] != "points"]
        only_agg = pd.concat([only_agg, only_agg.assign(device="svg", scenario="other")])
        assert not [n for n in findings(only_agg) if "device" in n]

    def test_empty(self):
        assert findings(pd.DataFrame()) == []
