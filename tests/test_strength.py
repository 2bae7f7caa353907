"""
Tests for the zxcvbn strength adapter.
"""

from breachguard.services.strength import score


def test_common_password_scores_zero():
    result = score("password")

    assert result.score == 0
    assert result.warning
    assert isinstance(result.suggestions, list)


def test_strong_password_has_no_warning():
    result = score("tV8#qL2!zR9$wX5^mN3&pK7")

    assert result.score == 4
    assert result.warning is None


def test_wire_format():
    data = score("hunter2").to_dict()

    assert set(data) == {"score", "suggestions", "warning"}
    assert 0 <= data["score"] <= 4
