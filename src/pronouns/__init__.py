# src/pronouns/__init__.py
from __future__ import annotations

from .models import (
    CommentRecord,
    NoneRecord,
    PronounResult,
    PronounSet,
    PronounSetRecord,
    Record,
    RecordKind,
    Tag,
    WildcardRecord,
)
from .parser import CONVERSIONS, parse, parse_all, validate_records
from .select import DEFAULT_WILDCARD_SET, parse_and_select, select_preferred, select_result

# Single-record entry point
parse_one = parse

"""
Pronouns package

Pure, synchronous core for Pronouns-over-DNS records:
  - `parser` turns one TXT value into a Record and checks batch rules.
  - `select` reduces a batch of Records into one PronounResult.

DNS lives in src.resolve; nothing here performs I/O.
"""

__all__ = [
    # models
    "Tag",
    "RecordKind",
    "PronounSet",
    "PronounSetRecord",
    "WildcardRecord",
    "NoneRecord",
    "CommentRecord",
    "Record",
    "PronounResult",
    # parser
    "CONVERSIONS",
    "parse",
    "parse_one",
    "parse_all",
    "validate_records",
    # selector
    "DEFAULT_WILDCARD_SET",
    "select_preferred",
    "select_result",
    "parse_and_select",
]
