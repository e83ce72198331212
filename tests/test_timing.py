"""Tests for the timing harness."""

import gc

import numpy as np
import pytest
from plotbench import Stopwatch, mark, outlier_mask, summarize


class TestMark:
    """Tests for repeated timing."""

    def test_runs_minimum_iterations(self, fake_clock):
        """Without a time budget exactly ``iterations`` runs are timed."""
        calls = []
        series = mark(lambda: calls.append(1), iterations=5, warmup=2, clock=fake_clock)

        assert len(series.times) == 5
        assert len(series.warmup_times) == 2
        assert len(calls) == 7
        assert series.times == [1.0] * 5

    def test_min_time_extends_sampling(self, fake_clock):
        """Sampling continues until the measured total reaches min_time."""
        series = mark(lambda: None, iterations=3, max_iterations=50, warmup=0,
                      min_time=10.0, clock=fake_clock)
        assert len(series.times) == 10

    def test_max_iterations_caps_sampling(self, fake_clock):
        """max_iterations wins over an unreachable time budget."""
        series = mark(lambda: None, iterations=2, max_iterations=4, warmup=0,
                      min_time=1e9, clock=fake_clock)
        assert len(series.times) == 4

    def test_setup_result_passed_to_func(self):
        """setup runs before every call and its result is the argument."""
        seen = []
        counter = iter(range(100))
        mark(seen.append, setup=lambda: next(counter), iterations=3, warmup=1)

        assert seen == [0, 1, 2, 3]

    def test_setup_not_timed(self, fake_clock):
        """Only func sits between the two clock readings."""
        def setup():
            fake_clock.t += 100.0

        series = mark(lambda _: None, setup=setup, iterations=3, warmup=0, clock=fake_clock)
        assert series.times == [1.0, 1.0, 1.0]

    def test_gc_restored(self):
        """Disabling GC during the timed call leaves it enabled afterwards."""
        assert gc.isenabled()
        mark(lambda: None, iterations=2, warmup=0, disable_gc=True)
        assert gc.isenabled()

    def test_gc_disabled_during_call(self):
        """disable_gc turns the collector off for the timed call only."""
        states = []
        mark(lambda: states.append(gc.isenabled()), iterations=3, warmup=1, disable_gc=True)
        assert states == [False] * 4

        states.clear()
        mark(lambda: states.append(gc.isenabled()), iterations=2, warmup=0)
        assert states == [True, True]

    def test_gc_counts_recorded(self):
        """One GC count per timed run."""
        series = mark(lambda: [object() for _ in range(100)], iterations=4, warmup=0)
        assert len(series.gc_collections) == 4
        assert all(c >= 0 for c in series.gc_collections)

    @pytest.mark.parametrize("kwargs", [{"iterations": 0}, {"iterations": 5, "max_iterations": 2}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            mark(lambda: None, **kwargs)


class TestSummarize:
    """Tests for outlier-aware aggregation."""

    def test_basic_statistics(self):
        """Order statistics over all samples."""
        s = summarize([1.0, 2.0, 3.0, 4.0, 5.0])

        assert s.n_iter == 5
        assert s.median == 3.0
        assert s.min == 1.0 and s.max == 5.0
        assert s.q1 == 2.0 and s.q3 == 4.0
        assert s.iqr == 2.0
        assert s.n_outliers == 0
        assert s.total_time == 15.0
        assert s.itr_per_sec == pytest.approx(1 / 3)

    def test_outlier_excluded_from_mean(self):
        """A single slow run is flagged and does not move the mean."""
        times = [1.0] * 9 + [100.0]
        s = summarize(times)

        assert s.n_outliers == 1
        assert s.mean == pytest.approx(1.0)
        assert s.std == 0.0
        assert s.max == 100.0
        assert s.median == 1.0

    def test_fence_multiplier(self):
        """A wider fence keeps moderate samples."""
        times = [1.0, 1.1, 1.2, 1.3, 2.0]
        assert summarize(times, k=1.5).n_outliers == 1
        assert summarize(times, k=10.0).n_outliers == 0

    def test_single_sample(self):
        """One run has no spread and no outliers."""
        s = summarize([0.5])

        assert s.n_iter == 1
        assert s.median == s.mean == s.trimmed_mean == 0.5
        assert s.iqr == 0.0
        assert s.std == 0.0
        assert s.n_outliers == 0

    def test_trimmed_mean(self):
        """10% is cut from each end of the sorted samples."""
        s = summarize([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 14.0])

        assert s.n_outliers == 0
        assert s.mean == pytest.approx(5.9)
        assert s.trimmed_mean == pytest.approx(5.5)

    def test_mad(self):
        s = summarize([1.0, 2.0, 3.0, 4.0, 100.0])
        assert s.mad == 1.0

    def test_zero_median(self):
        """Zero durations give infinite throughput instead of dividing by zero."""
        assert summarize([0.0, 0.0, 0.0]).itr_per_sec == float("inf")

    def test_gc_total(self):
        assert summarize([1.0, 2.0], gc_collections=[1, 2]).n_gc == 3

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            summarize([])

    def test_outlier_mask(self):
        mask = outlier_mask([1.0, 1.0, 1.0, 1.0, 50.0])
        assert mask.tolist() == [False, False, False, False, True]
        assert outlier_mask([]).size == 0

    def test_mask_agrees_with_summary(self, rng):
        times = np.concatenate([rng.normal(1.0, 0.01, 50), [5.0, 6.0]])
        assert outlier_mask(times).sum() == summarize(times).n_outliers


def test_stopwatch(fake_clock):
    """Stopwatch measures the block with the given clock."""
    with Stopwatch(clock=fake_clock) as sw:
        pass
    assert sw.elapsed == 1.0
