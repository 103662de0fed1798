# src/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from src.config import load_settings
from src.exceptions import PronounParseError, ResolutionError
from src.pronouns import PronounResult, Record, parse, parse_and_select
from src.resolve import TxtResolver, lookup

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RECORDS = 1
EXIT_PARSE_ERROR = 2
EXIT_RESOLUTION_ERROR = 3
EXIT_CONFIG_ERROR = 4


def _record_to_dict(record: Record) -> dict[str, Any]:
    out: dict[str, Any] = {
        "kind": record.kind.value,
        "raw": record.raw,
        "comment": record.comment,
        "canonical": str(record),
    }
    pronoun_set = getattr(record, "pronoun_set", None)
    if pronoun_set is not None:
        out["pronoun_set"] = pronoun_set.to_dict()
    return out


def _print_result_human(result: PronounResult, out: TextIO) -> None:
    if result.prefers_name:
        out.write("prefers name (no pronouns)\n")
        return
    out.write(f"preferred   : {result.preferred}\n")
    out.write(f"accepts any : {'yes' if result.accepts_any else 'no'}\n")
    if result.all_sets:
        out.write("all sets    : " + ", ".join(str(s) for s in result.all_sets) + "\n")


def _emit_result(result: PronounResult | None, as_json: bool, out: TextIO) -> int:
    if result is None:
        if as_json:
            out.write("null\n")
        else:
            out.write("(no pronoun records)\n")
        return EXIT_NO_RECORDS
    if as_json:
        out.write(json.dumps(result.to_dict(), indent=2) + "\n")
    else:
        _print_result_human(result, out)
    return EXIT_OK


def _cmd_parse(args: argparse.Namespace, out: TextIO) -> int:
    records = [parse(r) for r in args.records]
    if args.json:
        out.write(json.dumps([_record_to_dict(r) for r in records], indent=2) + "\n")
        return EXIT_OK
    for rec in records:
        out.write(f"{rec.kind.value:12} {rec}\n")
    return EXIT_OK


def _cmd_select(args: argparse.Namespace, out: TextIO) -> int:
    return _emit_result(parse_and_select(args.records), args.json, out)


def _cmd_lookup(args: argparse.Namespace, out: TextIO) -> int:
    result = lookup(args.domain, TxtResolver(args.settings.resolver))
    return _emit_result(result, args.json, out)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="podns", description="Pronouns over DNS")
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("parse", help="Parse one or more pronoun records")
    sp.add_argument("records", nargs="+", metavar="RECORD")
    sp.add_argument("--json", action="store_true", help="Emit JSON")
    sp.set_defaults(func=_cmd_parse)

    ss = sub.add_parser("select", help="Select the preferred set from records")
    ss.add_argument("records", nargs="+", metavar="RECORD")
    ss.add_argument("--json", action="store_true", help="Emit JSON")
    ss.set_defaults(func=_cmd_select)

    sl = sub.add_parser("lookup", help="Look up pronouns published for a domain")
    sl.add_argument("domain")
    sl.add_argument("--json", action="store_true", help="Emit JSON")
    sl.set_defaults(func=_cmd_lookup)

    return p


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.settings = load_settings()
    except ValueError as e:
        sys.stderr.write(f"config error: {e}\n")
        return EXIT_CONFIG_ERROR

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=args.settings.log_level, format="%(levelname)s %(name)s %(message)s"
        )

    try:
        return int(args.func(args, out))
    except PronounParseError as e:
        sys.stderr.write(f"error: {e}\n")
        return EXIT_PARSE_ERROR
    except ResolutionError as e:
        sys.stderr.write(f"error: {e}\n")
        return EXIT_RESOLUTION_ERROR
    except ValueError as e:
        # blank domain and similar argument problems
        sys.stderr.write(f"error: {e}\n")
        return EXIT_PARSE_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
