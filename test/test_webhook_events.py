"""Tests for the Dizparos event code mapping."""

import pytest

from smsdash.leads.models import LeadStatus
from smsdash.webhooks.events import EventCategory, categorize, lead_status_for


@pytest.mark.parametrize(
    ("code", "status"),
    [
        (2000, LeadStatus.PENDING),
        (2001, LeadStatus.SENT),
        (2002, LeadStatus.DELIVERED),
        (2003, LeadStatus.FAILED),
        (2004, LeadStatus.FAILED),
    ],
)
def test_status_codes(code: int, status: LeadStatus) -> None:
    assert categorize(code) == EventCategory.STATUS
    assert lead_status_for(code) == status


@pytest.mark.parametrize("code", range(1000, 1007))
def test_invalid_codes_fail(code: int) -> None:
    assert categorize(code) == EventCategory.INVALID
    assert lead_status_for(code) == LeadStatus.FAILED


def test_reply_and_homologation() -> None:
    assert categorize(3000) == EventCategory.REPLY
    assert categorize(5000) == EventCategory.HOMOLOGATION


@pytest.mark.parametrize("code", [0, 999, 1007, 2005, 4000, 9999])
def test_unknown_codes(code: int) -> None:
    assert categorize(code) == EventCategory.UNKNOWN
