"""
Dizparos webhook status codes and their mapping onto lead statuses.
"""

from enum import Enum, IntEnum

from smsdash.leads.models import LeadStatus


class DizparosStatusCode(IntEnum):
    """Event type codes sent by Dizparos."""

    # delivery progress
    ATTEMPTING = 2000
    SENT = 2001
    DELIVERED = 2002
    NOT_DELIVERED = 2003
    REJECTED_BROKER = 2004
    # number/message rejected before sending
    INVALID_CODE = 1000
    INVALID_ANATEL = 1001
    DUPLICATE_PHONE = 1002
    DO_NOT_DISTURB = 1003
    BLACKLIST = 1004
    INVALID_MESSAGE = 1005
    REJECTED_PROVIDER = 1006
    # inbound
    REPLY = 3000
    # campaign level
    REJECTED_HOMOLOGATION = 5000


class EventCategory(str, Enum):
    """How a webhook type is processed."""

    STATUS = "status"
    INVALID = "invalid"
    REPLY = "reply"
    HOMOLOGATION = "homologation"
    UNKNOWN = "unknown"


STATUS_CODE_MAP: dict[int, LeadStatus] = {
    DizparosStatusCode.ATTEMPTING: LeadStatus.PENDING,
    DizparosStatusCode.SENT: LeadStatus.SENT,
    DizparosStatusCode.DELIVERED: LeadStatus.DELIVERED,
    DizparosStatusCode.NOT_DELIVERED: LeadStatus.FAILED,
    DizparosStatusCode.REJECTED_BROKER: LeadStatus.FAILED,
}

INVALID_CODES: frozenset[int] = frozenset(
    {
        DizparosStatusCode.INVALID_CODE,
        DizparosStatusCode.INVALID_ANATEL,
        DizparosStatusCode.DUPLICATE_PHONE,
        DizparosStatusCode.DO_NOT_DISTURB,
        DizparosStatusCode.BLACKLIST,
        DizparosStatusCode.INVALID_MESSAGE,
        DizparosStatusCode.REJECTED_PROVIDER,
    }
)


def categorize(code: int) -> EventCategory:
    if code in STATUS_CODE_MAP:
        return EventCategory.STATUS
    if code in INVALID_CODES:
        return EventCategory.INVALID
    if code == DizparosStatusCode.REPLY:
        return EventCategory.REPLY
    if code == DizparosStatusCode.REJECTED_HOMOLOGATION:
        return EventCategory.HOMOLOGATION
    return EventCategory.UNKNOWN


def lead_status_for(code: int) -> LeadStatus:
    """Lead status implied by a status or invalid code; anything unmapped counts as failed."""
    return STATUS_CODE_MAP.get(code, LeadStatus.FAILED)
