"""Approximate string matching for short user messages.

Scores are in [0, 1]: exact match 1.0, substring containment 0.9 (so "para"
still hits "paracetamol"), otherwise normalized Levenshtein similarity.
Anything under the caller's threshold is reported as 0.
"""

from __future__ import annotations

from typing import Iterable

from rapidfuzz.distance import Levenshtein

CONTAINMENT_SCORE = 0.9


def similarity(a: str, b: str, min_threshold: float = 0.7) -> float:
    """Score how closely `a` matches `b`; 0 when below `min_threshold`."""
    left = a.lower().strip()
    right = b.lower().strip()

    if left == right:
        return 1.0
    if left in right or right in left:
        return CONTAINMENT_SCORE

    max_len = max(len(left), len(right))
    if max_len == 0:
        return 1.0

    distance = Levenshtein.distance(left, right)
    score = 1 - distance / max_len
    return score if score >= min_threshold else 0.0


def is_fuzzy_match(text: str, keywords: Iterable[str], threshold: float) -> bool:
    """True when `text` equals a keyword or scores strictly above `threshold` on one."""
    return any(
        text == kw or similarity(text, kw, threshold) > threshold
        for kw in keywords
    )


__all__ = ["CONTAINMENT_SCORE", "similarity", "is_fuzzy_match"]
