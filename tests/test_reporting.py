"""Tests for configuration and diagnostic rendering."""

import logging

import pytest

from monorepo_graph.config import Config
from monorepo_graph.conflicts import resolve_conflict
from monorepo_graph.cycle_detector import CycleWarning
from monorepo_graph.models import Coordinate, ProjectName
from monorepo_graph.reporting import (
    configure_logging, conflict_lines, cycle_warning_lines, log_conflict, log_cycle_warning,
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("MONOREPO_LOG_LEVEL", "MONOREPO_LOG_PREFIX", "MONOREPO_SPEC_WIDTH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("monorepo_graph.config.load_dotenv", lambda: False)
    return monkeypatch


class TestConfig:
    def test_defaults(self, clean_env):
        assert Config.from_env() == Config()

    def test_from_env(self, clean_env):
        clean_env.setenv("MONOREPO_LOG_LEVEL", "debug")
        clean_env.setenv("MONOREPO_LOG_PREFIX", "[mono]")
        clean_env.setenv("MONOREPO_SPEC_WIDTH", "30")
        assert Config.from_env() == Config(log_level="DEBUG", log_prefix="[mono]", spec_width=30)

    def test_bad_width_falls_back(self, clean_env, caplog):
        clean_env.setenv("MONOREPO_SPEC_WIDTH", "wide")
        assert Config.from_env().spec_width == 50
        assert "MONOREPO_SPEC_WIDTH" in caplog.text


class TestCycleWarningLines:
    def test_normal_dependency_both_ways(self):
        lines = cycle_warning_lines(CycleWarning("a", "b", None, None, False))
        assert lines[1] == "- b is a normal dependency of a"
        assert lines[2] == "- a is a normal dependency of b"
        assert lines[3] == "Resolving the cycle by building b before a."

    def test_logged_with_prefix(self, caplog):
        log_cycle_warning(CycleWarning("a", "b", "test", "dev", True), Config(log_prefix="[x]"))
        messages = [r.getMessage() for r in caplog.records]
        assert all(m.startswith("[x] ") for m in messages)
        assert "[x] - b depends on a in its dev profile" in messages


class TestConflictLines:
    def _report(self):
        specs = [
            Coordinate.from_spec(["lib", "1.0"]).with_source(ProjectName.parse("ex/a")),
            Coordinate.from_spec(["lib", "2.0"]).with_source(ProjectName.parse("ex/b")),
        ]
        return resolve_conflict("lib", specs).conflict

    def test_column_width(self):
        lines = conflict_lines(self._report(), spec_width=12)
        assert lines[1] == '[lib "1.0"]  from ex/a'
        assert lines[2] == '[lib "2.0"]  from ex/b'

    def test_logged_at_warning(self, caplog):
        log_conflict(self._report(), Config())
        assert [r.levelno for r in caplog.records] == [logging.WARNING] * 3


class TestReportingConfig:
    def test_environment_read_once(self, clean_env, caplog):
        calls = []

        def from_env():
            calls.append(1)
            return Config(log_prefix="[env]")

        clean_env.setattr("monorepo_graph.reporting._config", None)
        clean_env.setattr("monorepo_graph.reporting.Config.from_env", from_env)
        warning = CycleWarning("a", "b", "test", "test", True)
        log_cycle_warning(warning)
        log_cycle_warning(warning)
        assert len(calls) == 1
        assert all(r.getMessage().startswith("[env] ") for r in caplog.records)

    def test_configure_logging_sets_config(self, clean_env, caplog):
        clean_env.setattr("monorepo_graph.reporting._config", None)
        configure_logging(Config(log_prefix="[set]"))
        log_cycle_warning(CycleWarning("a", "b", None, None, False))
        assert caplog.records[0].getMessage().startswith("[set] ")

    def test_unknown_source_in_summary(self):
        specs = [Coordinate.from_spec(["lib", "1"]), Coordinate.from_spec(["lib", "2"])]
        lines = conflict_lines(resolve_conflict("lib", specs).conflict)
        assert lines[0].endswith('using [lib "1"] from <unknown>')
