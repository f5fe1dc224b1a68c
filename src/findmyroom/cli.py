"""
Find-My-Room CLI entrypoint.

This CLI is intended for quick local checks of the geocoding setup without the web client.
It delegates all lookup logic to `findmyroom.location.resolver.LocationResolver`.
"""

from __future__ import annotations

import argparse
import json
import random
from typing import Any

from pydantic import ValidationError

from findmyroom.config.settings import get_settings
from findmyroom.core.logging import configure_logging
from findmyroom.domain.models import GeoQuery
from findmyroom.location.resolver import LocationResolver, tier_queries


def _query_from_args(args: argparse.Namespace) -> GeoQuery | None:
    try:
        return GeoQuery(state=args.state, district=args.district, locality=args.locality)
    except ValidationError:
        print("error: --state and --district must not be blank")
        return None


def _cmd_resolve(args: argparse.Namespace) -> int:
    """Handle the `resolve` subcommand (exit code 1 when unresolved)."""
    settings = get_settings()
    query = _query_from_args(args)
    if query is None:
        return 2

    rng = random.Random(args.seed) if args.seed is not None else None
    resolver = LocationResolver(settings, rng=rng)
    resolution = resolver.resolve_detailed(query, scatter=not args.no_scatter)

    if args.json:
        result = resolution.result.to_lat_lng().model_dump() if resolution.result else None
        print(json.dumps({"result": result, "tier": resolution.tier}, ensure_ascii=False))
    elif resolution.result is None:
        print("unresolved")
    else:
        r = resolution.result
        print(f"{r.latitude:.6f},{r.longitude:.6f}  (tier={resolution.tier})")
    return 0 if resolution.result is not None else 1


def _cmd_queries(args: argparse.Namespace) -> int:
    """Print the tier queries that would be sent, without touching the network."""
    settings = get_settings()
    query = _query_from_args(args)
    if query is None:
        return 2
    for name, text in tier_queries(query, settings.geocoding.country):
        print(f"{name}: {text}")
    return 0


def _add_address_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--state", required=True)
    p.add_argument("--district", required=True)
    p.add_argument("--locality", default=None)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the Find-My-Room CLI."""
    parser = argparse.ArgumentParser(prog="findmyroom")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    res = sub.add_parser("resolve", help="Resolve state/district/locality to an approximate coordinate.")
    _add_address_args(res)
    res.add_argument("--no-scatter", action="store_true", help="Return the provider coordinate unmodified")
    res.add_argument("--seed", type=int, default=None, help="Seed the scatter RNG (reproducible output)")
    res.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    res.set_defaults(func=_cmd_resolve)

    q = sub.add_parser("queries", help="Show the fallback queries for an address (offline).")
    _add_address_args(q)
    q.set_defaults(func=_cmd_queries)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m findmyroom.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
