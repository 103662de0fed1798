# src/pronouns/select.py
from __future__ import annotations

import logging
from collections.abc import Sequence

from src.pronouns.models import (
    CommentRecord,
    NoneRecord,
    PronounResult,
    PronounSet,
    PronounSetRecord,
    Record,
    WildcardRecord,
)
from src.pronouns.parser import parse_all

log = logging.getLogger(__name__)

# Used when the only thing published is "*"
DEFAULT_WILDCARD_SET = PronounSet(subject="they", object="them")


def select_preferred(sets: Sequence[PronounSet]) -> PronounSet | None:
    """
    Pick the preferred set. Deterministic, first occurrence wins:
      1) a single set is preferred
      2) else the first set tagged "preferred"
      3) else the first set
    """
    if not sets:
        return None
    if len(sets) == 1:
        return sets[0]
    for s in sets:
        if s.is_preferred:
            return s
    return sets[0]


def select_result(records: Sequence[Record] | None) -> PronounResult | None:
    """
    Reduce a validated batch of records to one PronounResult.

    Returns None when nothing but comments (or nothing at all) was published.
    Assumes validate_records() already ran on the batch.
    """
    effective = [r for r in (records or ()) if not isinstance(r, CommentRecord)]
    if not effective:
        return None

    if len(effective) == 1 and isinstance(effective[0], NoneRecord):
        return PronounResult.none()

    has_wildcard = False
    sets: list[PronounSet] = []
    for rec in effective:
        if isinstance(rec, WildcardRecord):
            has_wildcard = True
        elif isinstance(rec, PronounSetRecord):
            sets.append(rec.pronoun_set)
        elif isinstance(rec, NoneRecord):
            # Only reachable when validation was skipped; contributes no set
            continue
        else:
            raise TypeError(f"unsupported record type: {type(rec).__name__}")

    if has_wildcard and not sets:
        log.debug("wildcard only; defaulting to %s", DEFAULT_WILDCARD_SET)
        return PronounResult.wildcard(DEFAULT_WILDCARD_SET, (DEFAULT_WILDCARD_SET,))

    preferred = select_preferred(sets)
    all_sets = tuple(sets)
    if preferred is None:
        # Only NONE records survived without validation; nothing to pick from
        return None
    if has_wildcard:
        return PronounResult.wildcard(preferred, all_sets)
    return PronounResult.standard(preferred, all_sets)


def parse_and_select(raws: Sequence[str] | None) -> PronounResult | None:
    """
    Parse raw TXT values, enforce batch rules, and select a result.

    Any malformed value invalidates the whole batch; no partial result.
    """
    if not raws:
        return None
    return select_result(parse_all(raws))


__all__ = ["DEFAULT_WILDCARD_SET", "parse_and_select", "select_preferred", "select_result"]
