from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _getenv_float(name: str, default: float) -> float:
    v = os.getenv(name, str(default)).strip()
    try:
        return float(v)
    except ValueError as err:
        raise ValueError(f"Environment variable {name} must be a number; got {v!r}") from err


def _getenv_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _getenv_list_str(name: str, default_csv: str) -> list[str]:
    raw = os.getenv(name, default_csv).strip()
    out: list[str] = []
    for tok in (t.strip() for t in raw.split(",")):
        if tok:
            out.append(tok)
    return out


# Load .env from project root if present
ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env", override=False)

# Label every pronoun lookup is published under (pronouns.example.com)
PRONOUNS_LABEL = "pronouns."

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class ResolverConfig:
    """
    dnspython resolver knobs.

    nameservers empty -> use the system configuration (/etc/resolv.conf).
    """

    timeout: float
    lifetime: float
    nameservers: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    resolver: ResolverConfig
    log_level: str


def load_resolver_config() -> ResolverConfig:
    timeout = _getenv_float("PODNS_DNS_TIMEOUT", 2.0)
    lifetime = _getenv_float("PODNS_DNS_LIFETIME", 2.0)
    if timeout <= 0 or lifetime <= 0:
        raise ValueError("PODNS_DNS_TIMEOUT and PODNS_DNS_LIFETIME must be positive")
    return ResolverConfig(
        timeout=timeout,
        lifetime=lifetime,
        nameservers=tuple(_getenv_list_str("PODNS_NAMESERVERS", "")),
    )


def load_settings() -> AppConfig:
    level = _getenv_str("PODNS_LOG_LEVEL", "WARNING").upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"Environment variable PODNS_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}; "
            f"got {level!r}"
        )
    return AppConfig(resolver=load_resolver_config(), log_level=level)


__all__ = [
    "ROOT",
    "PRONOUNS_LABEL",
    "ResolverConfig",
    "AppConfig",
    "load_resolver_config",
    "load_settings",
]
