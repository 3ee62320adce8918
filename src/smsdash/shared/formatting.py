"""
Phone, status and counter helpers shared by the API and the dashboard.
"""

import random
import re
import string
import time

_NON_DIGITS = re.compile(r"\D")

BRAZIL_COUNTRY_CODE = "55"
# width of leads.fullphone
MAX_PHONE_LENGTH = 20

LEAD_STATUS_LABELS: dict[str, str] = {
    "pending": "Pendente",
    "sending": "Enviando",
    "sent": "Enviado",
    "delivered": "Entregue",
    "failed": "Falha",
    "replied": "Respondeu",
}


def normalize_brazilian_phone(phone: str) -> str:
    """Strip formatting and make sure the number carries the 55 country code."""
    cleaned = _NON_DIGITS.sub("", phone)
    if not cleaned.startswith(BRAZIL_COUNTRY_CODE):
        cleaned = BRAZIL_COUNTRY_CODE + cleaned
    return cleaned


def format_phone_number(phone: str) -> str:
    """Pretty-print an 11-digit number that starts with 55; anything else is returned as is."""
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 11 and digits.startswith(BRAZIL_COUNTRY_CODE):
        return f"+{digits[0:2]} {digits[2:4]} {digits[4:5]} {digits[5:9]}-{digits[9:]}"
    return phone


def calculate_delivery_rate(delivered: int, total_leads: int) -> int:
    """Delivered share of a campaign as a rounded percentage."""
    if not total_leads:
        return 0
    # half-up, matching what the dashboard has always shown
    return int(delivered * 100 / total_leads + 0.5)


def lead_status_label(status: str) -> str:
    return LEAD_STATUS_LABELS.get(status, status)


def generate_webhook_event_id(prefix: str = "evt") -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"
