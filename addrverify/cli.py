"""
Compare two addresses from the terminal.

Usage:
    addrverify "456 Oak Avenue, Springfield, IL 62704" "456 Oak Ave, Springfield, Illinois 62704"
    addrverify A B --proxy-url https://host/api/verify   # no key needed locally
    addrverify A B --precompute-only                     # skip the oracle

Without --proxy-url the oracle mode comes from ORACLE_MODE / GEMINI_API_KEY
(environment or .env).
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .adapters.clients.factory import build_oracle
from .config import Settings
from .domain.address import is_blank
from .domain.prompt import precompute
from .domain.types import VerificationState
from .exceptions import ConfigurationError
from .logs import quiet_logging
from .service_layer.verification import VerificationSession

log = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="addrverify", description="Do two addresses denote the same place?")
    parser.add_argument("address1")
    parser.add_argument("address2")
    parser.add_argument("--proxy-url", default=None, help="Send the comparison to this proxy endpoint")
    parser.add_argument("--precompute-only", action="store_true", help="Print normalization and distance only")
    parser.add_argument("--json", action="store_true", help="Machine-readable output")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _print_session(session: VerificationSession, as_json: bool) -> None:
    if as_json:
        print(json.dumps(session.to_dict(), indent=2))
        return

    pre = session.precomputation
    if pre is not None:
        print(f"  normalized 1: {pre.normalized_address1}")
        print(f"  normalized 2: {pre.normalized_address2}")
        print(f"  distance:     {pre.distance}")
        print(f"  similarity:   {pre.similarity:.2f}%")

    if session.state == VerificationState.succeeded and session.result is not None:
        verdict = "SAME" if session.result.are_same else "DIFFERENT"
        print(f"  verdict:      {verdict}")
        print(f"  reasoning:    {session.result.reasoning}")
    elif session.state == VerificationState.failed:
        print(f"  error:        {session.error}", file=sys.stderr)


async def _run(args: argparse.Namespace) -> int:
    if args.precompute_only:
        if is_blank(args.address1) or is_blank(args.address2):
            print("Please enter both addresses to compare.", file=sys.stderr)
            return 1
        pre = precompute(args.address1, args.address2)
        out = {**pre.to_payload(), "similarity": round(pre.similarity, 2)}
        if args.json:
            print(json.dumps(out, indent=2))
        else:
            for key, val in out.items():
                print(f"{key:>20}: {val}")
        return 0

    settings = Settings()
    if args.proxy_url:
        settings = settings.model_copy(update={"ORACLE_MODE": "proxied", "PROXY_URL": args.proxy_url})

    try:
        oracle = build_oracle(settings)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    session = await VerificationSession().run(args.address1, args.address2, oracle)
    _print_session(session, args.json)
    return 0 if session.state == VerificationState.succeeded else 1


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    quiet_logging(logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
