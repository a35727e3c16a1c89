"""Tests for update command module."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from discocli.__main__ import main


class TestUpdateCommand:
    """Test update command functionality."""

    @pytest.fixture
    def runner(self):
        """Create CLI test runner."""
        return CliRunner()

    @pytest.fixture(autouse=True)
    def patched_client(self, client_factory):
        with patch("discocli.commands.update.DiscoClient", side_effect=client_factory):
            yield

    def test_update_available(self, runner, fake_catalog, make_entry):
        fake_catalog.packages = [make_entry(java_version="17.0.1+12", ephemeral_id="a"), make_entry()]

        result = runner.invoke(main, ["--output", "json", "update", "zulu,17.0.1+9,linux,x64,jdk"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["installed"] == "zulu,17.0.1+9,linux,x64,jdk"
        assert [u["java_version"] for u in data["updates"]] == ["17.0.2+8"]

        params = fake_catalog.search_requests()[0].url.params
        assert params["version"] == "17"
        assert params["latest"] == "all_of_version"

    def test_no_update(self, runner, fake_catalog):
        result = runner.invoke(main, ["update", "zulu,17.0.2+8,linux,x64,jdk"])

        assert result.exit_code == 0, result.output
        assert "No updates available" in result.output

    def test_plain_output_prints_commands(self, runner):
        result = runner.invoke(main, ["--output", "plain", "update", "*zulu,17.0.1+9,linux,x64,jdk (/usr/lib/jvm/zulu17)"])

        assert result.exit_code == 0, result.output
        assert "discocli download -d zulu -v 17.0.2 -os linux" in result.output

    def test_malformed_descriptor(self, runner, fake_catalog):
        result = runner.invoke(main, ["--output", "plain", "update", "zulu,17"])

        assert result.exit_code == 1
        assert "Malformed update descriptor" in result.output
        assert fake_catalog.requests == []

    def test_unknown_distribution(self, runner, fake_catalog):
        result = runner.invoke(main, ["--output", "plain", "update", "mystery,17.0.1,linux,x64,jdk"])

        assert result.exit_code == 1
        assert fake_catalog.requests == []
