# src/resolve/txt.py
from __future__ import annotations

import logging
import unicodedata
from typing import Protocol

import dns.exception
import dns.resolver
import idna

from src.config import PRONOUNS_LABEL, ResolverConfig, load_resolver_config
from src.exceptions import ResolutionError
from src.pronouns.models import PronounResult, Record
from src.pronouns.parser import parse_all
from src.pronouns.select import select_result

log = logging.getLogger(__name__)


# -----------------------------
# Normalization helpers
# -----------------------------


def norm_domain(domain: str | None) -> str | None:
    """
    NFKC -> strip -> lower -> drop root dot -> IDNA ASCII if possible, else raw.
    """
    if not domain:
        return None
    s = unicodedata.normalize("NFKC", str(domain)).strip().lower().rstrip(".")
    if not s:
        return None
    try:
        return idna.encode(s, uts46=True).decode("ascii")
    except idna.IDNAError:
        return s


def pronouns_domain(domain: str | None) -> str:
    """
    Map a subject domain to the name its records are published under.
    example.com -> pronouns.example.com; pronouns.example.com is kept as-is.
    """
    canon = norm_domain(domain)
    if not canon:
        raise ValueError("domain cannot be empty")
    if canon.startswith(PRONOUNS_LABEL):
        return canon
    return PRONOUNS_LABEL + canon


def unquote_txt(value: str) -> str:
    """Strip exactly one surrounding pair of double quotes, if present."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


# -----------------------------
# DNS lookups (patch points)
# -----------------------------


def _txt_lookup_with_dnspython(hostname: str, config: ResolverConfig) -> list[str]:
    """
    Return TXT values for hostname, one string per RR, in answer order.
    Multi-string RRs are concatenated (RFC 7208 style). Missing name or
    missing TXT RRset -> [].
    """
    resolver = dns.resolver.Resolver(configure=not config.nameservers)
    if config.nameservers:
        resolver.nameservers = list(config.nameservers)
    resolver.timeout = config.timeout
    resolver.lifetime = config.lifetime

    try:
        answers = resolver.resolve(hostname, "TXT")
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
        return []

    values: list[str] = []
    for rdata in answers:
        chunks = getattr(rdata, "strings", ()) or ()
        values.append(b"".join(chunks).decode("utf-8", errors="replace"))
    return values


class TxtSource(Protocol):
    def query(self, hostname: str) -> list[str]: ...


class TxtResolver:
    """
    Resolve TXT values for a hostname via dnspython.

    Network failures surface as ResolutionError; an absent name or RRset is
    an empty list, not an error.
    """

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self.config = config or load_resolver_config()

    def query(self, hostname: str) -> list[str]:
        log.debug("TXT query %s", hostname)
        try:
            raw_values = _txt_lookup_with_dnspython(hostname, self.config)
        except dns.exception.Timeout as err:
            log.warning("TXT lookup timed out for %s", hostname)
            raise ResolutionError(hostname, "timeout") from err
        except dns.exception.DNSException as err:
            log.warning("TXT lookup failed for %s: %s", hostname, type(err).__name__)
            raise ResolutionError(hostname, f"{type(err).__name__}: {err}") from err
        return [unquote_txt(v) for v in raw_values]


# -----------------------------
# Public API
# -----------------------------


def resolve_records(domain: str, resolver: TxtSource | None = None) -> list[Record]:
    """
    Fetch, parse and validate the pronoun records published for domain.

    Raises ValueError for a blank domain, ResolutionError when DNS fails,
    PronounParseError / StructuralConflictError for malformed records.
    """
    hostname = pronouns_domain(domain)
    source = resolver or TxtResolver()
    raws = source.query(hostname)
    log.debug("got %d TXT value(s) for %s", len(raws), hostname)
    return parse_all(raws)


def lookup(domain: str, resolver: TxtSource | None = None) -> PronounResult | None:
    """
    Look up the preferred pronouns for domain.

    Returns None when nothing (or only comments) is published.
    """
    records = resolve_records(domain, resolver)
    if not records:
        return None
    return select_result(records)


__all__ = [
    "norm_domain",
    "pronouns_domain",
    "unquote_txt",
    "TxtSource",
    "TxtResolver",
    "resolve_records",
    "lookup",
]
