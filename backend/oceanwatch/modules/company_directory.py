"""Company directory: selectable company names and free-text search.

Search strategy (in order):
1. Empty text → the "all companies" selector
2. Case-insensitive substring match, first option in display order
3. Fuzzy match via rapidfuzz above COMPANY_FUZZY_THRESHOLD
4. None if nothing matches
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from rapidfuzz import fuzz
from unidecode import unidecode

from oceanwatch.config import settings
from oceanwatch.models.vessel import Vessel
from oceanwatch.modules.filter_context import ALL_COMPANIES

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return unidecode(name).strip().casefold()


def company_options(vessels: Iterable[Vessel], baseline: Optional[str] = None) -> list[str]:
    """Distinct company names: the baseline first (when present), then alphabetical."""
    companies = {v.company for v in vessels if v.company}
    others = sorted((c for c in companies if c != baseline), key=_normalize)
    if baseline and baseline in companies:
        return [baseline, *others]
    return others


def search_company(
    options: list[str],
    text: str,
    threshold: Optional[int] = None,
) -> Optional[str]:
    """Resolve free text to one company option, ``ALL_COMPANIES`` or None."""
    needle = _normalize(text or "")
    if not needle:
        return ALL_COMPANIES

    for option in options:
        if needle in _normalize(option):
            return option

    threshold = settings.COMPANY_FUZZY_THRESHOLD if threshold is None else threshold
    best_match = None
    best_score = threshold
    for option in options:
        score = fuzz.partial_ratio(needle, _normalize(option))
        if score > best_score:
            best_score = score
            best_match = option
    if best_match is not None:
        logger.debug("Fuzzy company match %r -> %r (score %.0f)", text, best_match, best_score)
    return best_match
