"""Levenshtein edit distance and the similarity ratio derived from it."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def distance(a: str, b: str) -> int:
    """Insert/delete/substitute each cost 1."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """1.0 for identical strings, 0.0 when nothing survives the edit."""
    # Single division so threshold comparisons (0.6, 0.45) are exact
    longest = max(len(a), len(b), 1)
    return (longest - distance(a, b)) / longest
