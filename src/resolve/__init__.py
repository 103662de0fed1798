# src/resolve/__init__.py
from __future__ import annotations

from .txt import (
    TxtResolver,
    TxtSource,
    lookup,
    norm_domain,
    pronouns_domain,
    resolve_records,
    unquote_txt,
)

"""
Resolve package

  - `txt` fetches TXT values from pronouns.<domain> via dnspython and feeds
    them through the pronoun parser and selector.

Public re-exports:
  - TxtResolver, TxtSource, lookup, resolve_records
  - pronouns_domain, norm_domain, unquote_txt
"""

__all__ = [
    "TxtResolver",
    "TxtSource",
    "lookup",
    "resolve_records",
    "pronouns_domain",
    "norm_domain",
    "unquote_txt",
]
