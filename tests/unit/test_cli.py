"""Test the command-line interface."""

import logging

import pytest
from click.testing import CliRunner

from axiomatic.cli import main


@pytest.fixture(autouse=True)
def restore_logging(restore_settings):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


class TestInfo:
    def test_info(self, runner):
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0, result.output
        assert "Boot time:" in result.output
        assert "Debug: False" in result.output
        assert "Divergence limit: 5" in result.output

    def test_debug_flag(self, runner):
        result = runner.invoke(main, ["--debug", "info"])
        assert result.exit_code == 0, result.output
        assert "Debug: True" in result.output

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "axiomatic.toml"
        path.write_text("[bindings]\ndivergence_limit = 9\n")
        result = runner.invoke(main, ["--config", str(path), "info"])
        assert result.exit_code == 0, result.output
        assert "Divergence limit: 9" in result.output


class TestClasses:
    def test_lists_each_class_once(self, runner):
        result = runner.invoke(main, ["classes"])
        assert result.exit_code == 0, result.output
        lines = [line.split()[0] for line in result.output.splitlines()]
        assert "axiomatic.core.Model" in lines
        assert "axiomatic.pattern.Singleton" in lines
        assert len(lines) == len(set(lines))

    def test_package_filter(self, runner):
        result = runner.invoke(main, ["classes", "--package", "axiomatic.pattern"])
        assert result.exit_code == 0, result.output
        assert "axiomatic.pattern.Singleton" in result.output
        assert "axiomatic.core.Model" not in result.output


class TestDescribe:
    def test_describe_core_class(self, runner):
        result = runner.invoke(main, ["describe", "Model"])
        assert result.exit_code == 0, result.output
        assert "axiomatic.core.Model (ModelClass)" in result.output
        assert "extends axiomatic.core.FObject" in result.output
        assert "build_class" in result.output
        assert "(inherited)" in result.output

    def test_describe_unknown_class(self, runner):
        result = runner.invoke(main, ["describe", "no.Such"])
        assert result.exit_code != 0
        assert "no.Such" in result.output
