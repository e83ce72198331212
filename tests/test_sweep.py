"""Tests for suite configuration."""

import pytest
import yaml
from plotbench import expand_sweep, list_experiments, load_suite, get_project_root


@pytest.fixture
def suite_file(tmp_path):
    cfg = {
        "quick": {
            "static": {"n": 10, "iterations": 2, "max_iterations": 2},
            "grid_sweep": {"scenario": ["points", "lines"], "stack": ["declarative", "immediate"]},
        },
        "explicit": {
            "static": {"stage": "render"},
            "matrix_sweep": [
                {"scenario": "points", "stack": "immediate", "device": "svg"},
                {"scenario": "lines", "stack": "declarative", "device": "pdf"},
            ],
        },
    }
    path = tmp_path / "suites.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return path


class TestExpandSweep:
    """Tests for static / grid / matrix expansion."""

    def test_static_only(self):
        assert expand_sweep({"static": {"n": 5}}) == [{"n": 5}]

    def test_grid_product(self):
        combos = expand_sweep({"grid_sweep": {"a": [1, 2], "b": ["x", "y", "z"]}})
        assert len(combos) == 6
        assert {"a": 2, "b": "z"} in combos

    def test_later_keys_win(self):
        """static < grid < matrix."""
        combos = expand_sweep(
            {"static": {"a": 0, "b": 0}, "grid_sweep": {"a": [1]}, "matrix_sweep": [{"b": 2}]}
        )
        assert combos == [{"a": 1, "b": 2}]

    def test_grid_times_matrix(self):
        combos = expand_sweep({"grid_sweep": {"a": [1, 2]}, "matrix_sweep": [{"b": 1}, {"b": 2}]})
        assert len(combos) == 4

    def test_empty(self):
        assert expand_sweep({}) == [{}]


class TestLoadSuite:
    """Tests for YAML suite files."""

    def test_cases(self, suite_file):
        cases = load_suite(suite_file, "quick")

        assert len(cases) == 4
        assert all(c.n == 10 and c.experiment_name == "quick" for c in cases)
        assert {(c.scenario, c.stack) for c in cases} == {
            ("points", "declarative"), ("points", "immediate"),
            ("lines", "declarative"), ("lines", "immediate"),
        }

    def test_matrix_cases(self, suite_file):
        cases = load_suite(suite_file, "explicit")
        assert [c.device for c in cases] == ["svg", "pdf"]
        assert all(c.stage == "render" for c in cases)

    def test_missing_experiment(self, suite_file):
        with pytest.raises(KeyError, match="Available"):
            load_suite(suite_file, "nope")

    def test_invalid_case_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"bad": {"static": {"scenario": "points", "stack": "immediate", "n": 0}}}))
        with pytest.raises(ValueError):
            load_suite(path, "bad")

    def test_list_experiments(self, suite_file):
        assert list_experiments(suite_file) == {"quick": 4, "explicit": 2}


def test_bundled_suites_are_valid():
    """Every experiment in the shipped suite file expands into valid cases."""
    path = get_project_root() / "Experiments" / "conf" / "suites.yaml"
    for name in list_experiments(path):
        cases = load_suite(path, name)
        assert cases, name
