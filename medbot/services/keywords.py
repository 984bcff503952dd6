"""Keyword extraction over the five fallback vocabularies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from medbot.config.settings import (
    APPOINTMENT_KEYWORDS,
    DOCTOR_KEYWORDS,
    KEYWORD_THRESHOLD,
    ORDER_KEYWORDS,
    PRODUCT_KEYWORDS,
    TRACKING_KEYWORDS,
)
from medbot.services.similarity import similarity


@dataclass
class KeywordHits:
    """Original tokens that fuzzily matched each vocabulary.

    A token is appended once per keyword it matches, so duplicates are expected.
    """

    products: List[str] = field(default_factory=list)
    doctors: List[str] = field(default_factory=list)
    orders: List[str] = field(default_factory=list)
    appointments: List[str] = field(default_factory=list)
    tracking: List[str] = field(default_factory=list)

    def any(self) -> bool:
        return bool(self.products or self.doctors or self.orders or self.appointments or self.tracking)


def _matches(token: str, vocabulary: Sequence[str]) -> List[str]:
    return [token for kw in vocabulary if similarity(token, kw, KEYWORD_THRESHOLD) > KEYWORD_THRESHOLD]


def extract_keywords(text: str) -> KeywordHits:
    hits = KeywordHits()
    for token in text.lower().split():
        hits.products.extend(_matches(token, PRODUCT_KEYWORDS))
        hits.doctors.extend(_matches(token, DOCTOR_KEYWORDS))
        hits.orders.extend(_matches(token, ORDER_KEYWORDS))
        hits.appointments.extend(_matches(token, APPOINTMENT_KEYWORDS))
        hits.tracking.extend(_matches(token, TRACKING_KEYWORDS))
    return hits


__all__ = ["KeywordHits", "extract_keywords"]
