"""Tests for the cursor CLI commands."""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from relay_pagination.cli.main import cli


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield CliRunner()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)


class TestEncode:
    def test_encodes_json_values(self, runner):
        result = runner.invoke(cli, ["cursor", "encode", "20", "2"])

        assert result.exit_code == 0
        assert result.output.strip() == "MjAvMg=="

    def test_plain_strings_fall_back(self, runner):
        result = runner.invoke(cli, ["cursor", "encode", "alice", "null"])

        decoded = runner.invoke(cli, ["cursor", "decode", result.output.strip()])
        assert json.loads(decoded.output) == ["alice", None]


class TestDecode:
    def test_decodes_values(self, runner):
        result = runner.invoke(cli, ["cursor", "decode", "MjAvMg==", "--fields", "2"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [20, 2]

    def test_field_count_mismatch(self, runner):
        result = runner.invoke(cli, ["cursor", "decode", "MjAvMg==", "--fields", "3"])

        assert result.exit_code == 1
        assert "expected 3 fields, got 2" in result.output

    def test_malformed(self, runner):
        result = runner.invoke(cli, ["cursor", "decode", "%%%"])

        assert result.exit_code == 1
        assert "Invalid cursor" in result.output


class TestExplain:
    def test_descending_after(self, runner):
        result = runner.invoke(
            cli,
            ["cursor", "explain", "MjAvMg==", "--order-by", "v", "--direction", "desc"],
        )

        assert result.exit_code == 0
        assert "ORDER BY v desc, id desc" in result.output
        assert "(v < 20 OR v IS NULL) OR (v = 20 AND (id < 2 OR id IS NULL))" in result.output

    def test_ascending_before(self, runner):
        result = runner.invoke(
            cli,
            ["cursor", "explain", "MjAvMg==", "--order-by", "v", "--traversal", "before"],
        )

        assert result.exit_code == 0
        assert "(v < 20 OR v IS NULL) OR (v = 20 AND (id < 2 OR id IS NULL))" in result.output

    def test_wrong_field_count(self, runner):
        result = runner.invoke(cli, ["cursor", "explain", "MjAvMg==", "--order-by", "v", "--order-by", "w"])

        assert result.exit_code == 1
