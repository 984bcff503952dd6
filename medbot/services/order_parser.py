"""Parse and validate order IDs from free text.

Supports captions ("rx 12345", "order #A12"), payment references
("drugsng-12345-1590000000"), "track 12345" / "status 12345", and bare numbers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

MAX_INPUT_LENGTH = 1000

_CAPTION = re.compile(r"(?:\brx\b|\border\b|\bprescription\b)\s*#?([A-Za-z0-9_-]{2,50})", re.IGNORECASE)
_TX_REF = re.compile(r"drugsng[-_]([0-9]+)(?:[-_][0-9]+)?", re.IGNORECASE)
_TRACK = re.compile(r"(?:\btrack\b|\bstatus\b)\s*#?([A-Za-z0-9_-]{2,50})", re.IGNORECASE)
_NUMBER = re.compile(r"\d{3,}")  # 3+ digits so quantities like "2" aren't taken as IDs
_TOKEN = re.compile(r"[A-Za-z0-9_-]{3,50}")

_NUMERIC_ID = re.compile(r"[0-9]{1,12}")
_EXTERNAL_ID = re.compile(r"[A-Za-z0-9_-]{3,50}")


@dataclass
class OrderIdParse:
    success: bool
    order_id: Optional[str] = None
    error: Optional[str] = None


def sanitize_input(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()[:MAX_INPUT_LENGTH]


def parse_order_id_from_text(text: object) -> Optional[str]:
    """Try each known pattern in turn; None when nothing looks like an ID."""
    if not text or not isinstance(text, str):
        return None
    s = text.strip()

    for pattern in (_CAPTION, _TX_REF, _TRACK):
        m = pattern.search(s)
        if m:
            return m.group(1)

    numbers = _NUMBER.findall(s)
    if numbers:
        # Longest wins; ties keep first occurrence
        return max(numbers, key=len)

    m = _TOKEN.search(s)
    return m.group(0) if m else None


def is_valid_order_id(order_id: object) -> bool:
    """Numeric DB ids (1-12 digits) or alphanumeric external ids."""
    if not order_id or not isinstance(order_id, str):
        return False
    clean = sanitize_input(order_id)
    return bool(_NUMERIC_ID.fullmatch(clean) or _EXTERNAL_ID.fullmatch(clean))


def extract_and_validate_order_id(text: object) -> OrderIdParse:
    order_id = parse_order_id_from_text(text)
    if not order_id:
        return OrderIdParse(success=False, error="Could not extract order ID from text")
    if not is_valid_order_id(order_id):
        return OrderIdParse(success=False, order_id=order_id, error=f"Invalid order ID format: {order_id}")
    return OrderIdParse(success=True, order_id=order_id)


__all__ = [
    "OrderIdParse",
    "extract_and_validate_order_id",
    "is_valid_order_id",
    "parse_order_id_from_text",
    "sanitize_input",
]
