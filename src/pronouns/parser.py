# src/pronouns/parser.py
from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from src.exceptions import PronounParseError, StructuralConflictError
from src.pronouns.models import (
    CommentRecord,
    NoneRecord,
    PronounSet,
    PronounSetRecord,
    Record,
    Tag,
    WildcardRecord,
)

log = logging.getLogger(__name__)

VALUE_RE = re.compile(r"^[a-z]+$")

MIN_COMPONENTS = 2
MAX_COMPONENTS = 5

# Shorthand sets expanded before tokenizing; (prefix, expansion), first match wins
CONVERSIONS: tuple[tuple[str, str], ...] = (("it/its", "it/it/its/its/itself"),)


def _split_comment(raw: str) -> tuple[str, str | None]:
    base, sep, rest = raw.partition("#")
    if not sep:
        return raw, None
    return base, rest.strip()


def _apply_conversions(base: str) -> str:
    for prefix, expansion in CONVERSIONS:
        if not base.startswith(prefix):
            continue
        rest = base[len(prefix) :]
        # Whole pronoun part only: "it/its" converts, "it/itself" does not
        if rest and rest[0] != ";" and not rest[0].isspace():
            continue
        return expansion + rest
    return base


def _parse_tags(tokens: Sequence[str], raw: str) -> frozenset[Tag]:
    tags: set[Tag] = set()
    for tok in (t.strip() for t in tokens):
        # ";;" and trailing ";" leave empty segments; those are ignored
        if not tok:
            continue
        try:
            tags.add(Tag.from_token(tok))
        except PronounParseError:
            raise PronounParseError(f"unknown tag: {tok}", raw) from None
    return frozenset(tags)


def _parse_pronoun_set(base: str, raw: str) -> PronounSet:
    parts = base.split(";")
    pronoun_part = parts[0].strip()
    if not pronoun_part:
        raise PronounParseError("pronoun set cannot be empty", raw)

    tags = _parse_tags(parts[1:], raw)

    components = [c.strip() for c in pronoun_part.split("/")]
    if len(components) < MIN_COMPONENTS:
        raise PronounParseError("pronoun set must have at least subject and object", raw)
    if len(components) > MAX_COMPONENTS:
        raise PronounParseError(
            f"pronoun set has too many components, max {MAX_COMPONENTS}", raw
        )
    for comp in components:
        if not comp:
            raise PronounParseError("pronoun component cannot be empty", raw)
        if not VALUE_RE.match(comp):
            raise PronounParseError(
                f"invalid pronoun value (must be lowercase letters only): {comp}", raw
            )

    # Pad to five slots; absent forms stay None
    slots: list[str | None] = list(components) + [None] * (MAX_COMPONENTS - len(components))
    return PronounSet(
        subject=slots[0],
        object=slots[1],
        possessive_determiner=slots[2],
        possessive_pronoun=slots[3],
        reflexive=slots[4],
        tags=tags,
    )


def parse(raw: str) -> Record:
    """
    Parse one TXT record value into a Record.

    Grammar (after lowercasing):
      record       := [pronoun-part] (";" tag)* ["#" comment]
      pronoun-part := "*" | "!" | component ("/" component){1,4}
      tag          := "preferred" | "plural"

    Raises PronounParseError for any malformed input; never coerces beyond
    case folding, whitespace trimming and alias expansion.
    """
    if raw is None:
        raise PronounParseError("record cannot be null")
    if not isinstance(raw, str):
        raise PronounParseError(f"record must be a string, got {type(raw).__name__}")

    base, comment = _split_comment(raw)
    base = base.strip().lower()

    if not base:
        if comment:
            return CommentRecord(raw=raw, comment=comment)
        raise PronounParseError("record cannot be empty", raw)

    if base == "*":
        return WildcardRecord(raw=raw, comment=comment)
    if base == "!":
        return NoneRecord(raw=raw, comment=comment)

    converted = _apply_conversions(base)
    if converted != base:
        log.debug("expanded alias %r -> %r", base, converted)

    pronoun_set = _parse_pronoun_set(converted, raw)
    return PronounSetRecord(pronoun_set=pronoun_set, raw=raw, comment=comment)


def validate_records(records: Sequence[Record] | None) -> None:
    """
    Check cross-record rules on an already-parsed batch.

    A none record ("!") must be the only record when present.
    """
    if not records:
        return
    has_none = any(isinstance(r, NoneRecord) for r in records)
    if has_none and len(records) > 1:
        raise StructuralConflictError("a none record must be the only record if present")


def parse_all(raws: Sequence[str]) -> list[Record]:
    """Parse every value (first failure aborts the batch), then validate."""
    records = [parse(r) for r in raws]
    validate_records(records)
    return records


__all__ = [
    "CONVERSIONS",
    "MAX_COMPONENTS",
    "MIN_COMPONENTS",
    "parse",
    "parse_all",
    "validate_records",
]
