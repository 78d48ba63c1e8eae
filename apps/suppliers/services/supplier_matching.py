"""Supplier matching service using fuzzy matching."""

import re
from typing import List, Tuple

from fuzzywuzzy import fuzz

from apps.suppliers.models import Supplier


# Thresholds for fuzzy matching
MATCH_THRESHOLD = 85

# Legal-form suffixes that say nothing about who the supplier is
LEGAL_SUFFIXES = re.compile(r'\b(uab|mb|ab|ltd|llc|inc|gmbh|oy|sia|sro|as)\b')


def normalize_name(text: str) -> str:
    """
    Normalize a supplier name for comparison.

    Args:
        text: Name as printed on an invoice or entered by hand

    Returns:
        Lowercase name without punctuation or legal-form suffixes
    """
    text = (text or '').lower().strip()
    text = re.sub(r'[^\w\s-]', ' ', text)
    text = LEGAL_SUFFIXES.sub(' ', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def match_supplier_name(
    *,
    name: str,
    threshold: int = MATCH_THRESHOLD,
    limit: int = 5,
) -> List[Tuple[Supplier, int]]:
    """
    Find live suppliers whose display name resembles ``name``.

    Args:
        name: Supplier name to look up, e.g. from an extracted invoice
        threshold: Minimum similarity score (0-100)
        limit: Maximum number of candidates

    Returns:
        List of (supplier, similarity_score) tuples, best first
    """
    needle = normalize_name(name)
    if not needle:
        return []

    candidates = []
    for supplier in Supplier.objects.alive():
        score = fuzz.token_sort_ratio(needle, normalize_name(supplier.display_name))
        if score >= threshold:
            candidates.append((supplier, score))

    candidates.sort(key=lambda pair: pair[1], reverse=True)
    return candidates[:limit]
