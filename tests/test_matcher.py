"""
Tests for range response parsing and suffix matching.
"""

import pytest

from breachguard.exceptions import UpstreamError
from breachguard.hibp.matcher import match, parse_range_body
from breachguard.hibp.models import RangeRow, RiskLevel

from tests.conftest import PASSWORD_PREFIX, PASSWORD_SUFFIX, RANGE_BODY


def test_parse_range_body_crlf():
    rows = parse_range_body("AAA:1\r\nBBB:22\r\n")

    assert rows == [RangeRow("AAA", 1), RangeRow("BBB", 22)]


def test_parse_range_body_uppercases_suffixes():
    assert parse_range_body("abc:5") == [RangeRow("ABC", 5)]


def test_parse_range_body_empty():
    assert parse_range_body("") == []


@pytest.mark.parametrize("body", ["NOCOLON", "AAA:many", ":3", "AAA:-1"])
def test_parse_range_body_malformed(body):
    with pytest.raises(UpstreamError):
        parse_range_body(body)


def test_match_returns_zero_for_no_rows():
    result = match([], PASSWORD_SUFFIX)

    assert result.occurrences == 0
    assert not result.is_pwned
    assert result.risk_level == RiskLevel.SAFE


def test_match_returns_zero_when_absent():
    rows = [RangeRow("003D68EB55068C33ACE09247EE4C639306B", 3)]
    assert match(rows, PASSWORD_SUFFIX).occurrences == 0


def test_match_known_vector():
    result = match(parse_range_body(RANGE_BODY), PASSWORD_SUFFIX, hash_prefix=PASSWORD_PREFIX)

    assert result.occurrences == 3
    assert result.hash_prefix == PASSWORD_PREFIX
    assert result.is_pwned


def test_match_is_case_insensitive():
    rows = [RangeRow(PASSWORD_SUFFIX.lower(), 42)]
    assert match(rows, PASSWORD_SUFFIX).occurrences == 42


def test_match_compares_whole_suffix():
    rows = [
        RangeRow(PASSWORD_SUFFIX[:-1], 7),
        RangeRow(PASSWORD_SUFFIX + "0", 8),
    ]
    assert match(rows, PASSWORD_SUFFIX).occurrences == 0


def test_match_takes_first_of_duplicates():
    rows = [RangeRow(PASSWORD_SUFFIX, 5), RangeRow(PASSWORD_SUFFIX, 9)]
    assert match(rows, PASSWORD_SUFFIX).occurrences == 5


def test_padding_rows_do_not_match():
    rows = parse_range_body(f"{'F' * 35}:0\r\n{PASSWORD_SUFFIX}:12\r\n")
    assert match(rows, PASSWORD_SUFFIX).occurrences == 12


@pytest.mark.parametrize("count,level", [
    (0, RiskLevel.SAFE),
    (9, RiskLevel.LOW),
    (99, RiskLevel.MEDIUM),
    (9999, RiskLevel.HIGH),
    (10000, RiskLevel.CRITICAL),
])
def test_risk_levels(count, level):
    assert match([RangeRow("A", count)], "a").risk_level == level
