"""
Card input helpers for the payment step.
"""

from datetime import date
from typing import Optional, Tuple
import calendar
import re

EXPIRY_PATTERN = re.compile(r'^([0-9]{2})/([0-9]{2})$')


def normalize_card_number(value: str) -> str:
    return re.sub(r'\s+', '', value or '')


def format_card_number(value: str) -> str:
    """Group digits in fours: "4111111111111111" -> "4111 1111 1111 1111"."""
    digits = re.sub(r'[^0-9]', '', value or '')[:16]
    return ' '.join(digits[i:i + 4] for i in range(0, len(digits), 4))


def format_expiry(value: str) -> str:
    digits = re.sub(r'[^0-9]', '', value or '')[:4]
    if len(digits) <= 2:
        return digits
    return f"{digits[:2]}/{digits[2:]}"


def format_cvv(value: str) -> str:
    return re.sub(r'[^0-9]', '', value or '')[:4]


def mask_card_number(value: str) -> str:
    digits = normalize_card_number(value)
    if len(digits) < 4:
        return digits
    return f"**** **** **** {digits[-4:]}"


def parse_expiry(value: str) -> Optional[Tuple[int, int]]:
    """Returns (month, year) for a valid "MM/YY" value, else None."""
    match = EXPIRY_PATTERN.match(value or '')
    if not match:
        return None
    month = int(match.group(1))
    year = 2000 + int(match.group(2))
    if month < 1 or month > 12:
        return None
    return month, year


def card_expired(month: int, year: int, today: date) -> bool:
    """A card stays valid until the end of the last day of its expiry month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, last_day) < today
