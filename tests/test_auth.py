"""Tests for the domain authorization check."""

import pytest

from core.auth import is_authorized


@pytest.mark.parametrize(
    "email",
    ["dana@stage-design.co.il", "Dana.Levi@Stage-Design.CO.IL", "  ops@stage-design.co.il  "],
)
def test_domain_members_are_authorized(email):
    assert is_authorized(email) is True


@pytest.mark.parametrize(
    "email",
    [
        None,
        "",
        "dana@gmail.com",
        "stage-design.co.il",
        "dana@sub.stage-design.co.il",
        "dana@stage-design.co.il.attacker.com",
    ],
)
def test_others_are_not_authorized(email):
    assert is_authorized(email) is False


def test_custom_domain():
    assert is_authorized("a@example.org", domain="Example.org") is True


def test_unexpected_identity_type_is_not_authorized(caplog):
    assert is_authorized(12345) is False
    assert "Authorization check failed" in caplog.text
