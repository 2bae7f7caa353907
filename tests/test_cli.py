"""
Tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from breachguard.cli import main
from breachguard.exceptions import UpstreamError, UpstreamNotFound
from breachguard.hibp.client import HIBPClient
from breachguard.hibp.matcher import parse_range_body

from tests.conftest import PASSWORD_PREFIX, RANGE_BODY


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_range(monkeypatch):
    prefixes = []

    async def range_query(self, prefix):
        prefixes.append(prefix)
        return parse_range_body(RANGE_BODY)

    monkeypatch.setattr(HIBPClient, "range_query", range_query)
    return prefixes


def test_password_json(runner, fake_range):
    result = runner.invoke(main, ["hibp", "password", "--password", "password", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["pwnedCount"] == 3
    assert data["strength"]["score"] == 0
    assert fake_range == [PASSWORD_PREFIX]


def test_password_prompt(runner, fake_range):
    result = runner.invoke(main, ["hibp", "password"], input="password\n")

    assert result.exit_code == 0, result.output
    assert "Warning!" in result.output


def test_password_hash(runner, fake_range):
    result = runner.invoke(
        main, ["hibp", "password", "--hash", "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8", "--json"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["pwnedCount"] == 3
    assert "strength" not in data


def test_password_bad_hash(runner, fake_range):
    result = runner.invoke(main, ["hibp", "password", "--hash", "nothex"])

    assert result.exit_code == 2
    assert fake_range == []


def test_password_upstream_failure(runner, monkeypatch):
    async def range_query(self, prefix):
        raise UpstreamError("Request timeout")

    monkeypatch.setattr(HIBPClient, "range_query", range_query)

    result = runner.invoke(main, ["hibp", "password", "--password", "password"])

    assert result.exit_code == 1
    assert "Could not check password exposure" in result.output


def test_email_requires_api_key(runner, monkeypatch):
    monkeypatch.delenv("HIBP_API_KEY", raising=False)

    result = runner.invoke(main, ["hibp", "email", "user@example.com"])

    assert result.exit_code == 1
    assert "API key required" in result.output


def test_email_breaches(runner, monkeypatch):
    async def breach_query(self, email):
        return [{"Name": "Adobe", "Title": "Adobe", "BreachDate": "2013-10-04",
                 "PwnCount": 152445165, "DataClasses": ["Email addresses", "Passwords"]}]

    monkeypatch.setattr(HIBPClient, "breach_query", breach_query)

    result = runner.invoke(main, ["hibp", "email", "user@example.com", "--api-key", "k"])

    assert result.exit_code == 0, result.output
    assert "Adobe" in result.output


def test_email_not_found(runner, monkeypatch):
    async def breach_query(self, email):
        raise UpstreamNotFound("none")

    monkeypatch.setattr(HIBPClient, "breach_query", breach_query)

    result = runner.invoke(main, ["hibp", "email", "user@example.com", "--api-key", "k", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == []


def test_serve_refuses_without_api_key(runner, monkeypatch, tmp_path):
    monkeypatch.delenv("HIBP_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(main, ["serve"])

    assert result.exit_code == 1
    assert "HIBP_API_KEY" in result.output


def test_config_masks_key(runner, monkeypatch, tmp_path):
    monkeypatch.setenv("HIBP_API_KEY", "super-secret")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(main, ["config"])

    assert result.exit_code == 0, result.output
    assert "super-secret" not in result.output
    assert "hibp_api_key_set" in result.output
