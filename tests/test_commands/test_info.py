"""Tests for info command module."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from discocli.__main__ import main
from discocli.core.types import Distro


class TestInfoCommand:
    """Test info command functionality."""

    @pytest.fixture
    def runner(self):
        """Create CLI test runner."""
        return CliRunner()

    def test_info_json(self, runner):
        result = runner.invoke(main, ["--output", "json", "info"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert {"api_string": "zulu", "label": "Zulu", "maintained": True} in data["distributions"]
        assert len(data["distributions"]) == len(Distro)
        assert "linux" in data["operating_systems"]
        assert "aarch64" in data["architectures"]
        assert "tar.gz" in data["archive_types"]
        assert data["package_types"] == ["jdk", "jre"]

    def test_info_maintained_only(self, runner):
        result = runner.invoke(main, ["--output", "json", "info", "--maintained"])

        data = json.loads(result.output)
        assert all(d["maintained"] for d in data["distributions"])
        assert "aoj" not in [d["api_string"] for d in data["distributions"]]

    def test_info_plain(self, runner):
        result = runner.invoke(main, ["--output", "plain", "info"])

        assert result.exit_code == 0
        assert "temurin (Temurin)" in result.output
        assert "Operating systems:" in result.output

    def test_info_rich(self, runner):
        result = runner.invoke(main, ["info"])

        assert result.exit_code == 0
        assert "Distributions" in result.output
        assert "Supported values" in result.output
