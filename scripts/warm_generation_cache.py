#!/usr/bin/env python3
"""
Warm the generation cache for one or more generations.

Runs the same fetch-and-normalize pipeline as the roster service, so a
developer workstation or CI job can pre-populate Redis before the service
takes traffic.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from shared.config import BaseConfig
from shared.errors import RosterException
from shared.logging import configure_logging, get_logger
from service_roster.app.cache import GenerationCache, MemoryStore
from service_roster.app.fetcher import GenerationDataFetcher, build_fetcher
from service_roster.app.generations import available_generations
from service_roster.app.sources import build_data_source

logger = get_logger("roster.cache_warm")


async def warm(*, config: BaseConfig, generations: List[str], dry_run: bool) -> Dict[str, Any]:
    """Execute cache warming and return the summary."""
    if dry_run:
        # Fetch through a throwaway in-memory cache so the real store stays untouched
        fetcher = GenerationDataFetcher(
            GenerationCache(MemoryStore(), prefix=config.cache_prefix),
            build_data_source(config),
            detail_concurrency=config.detail_concurrency,
        )
    else:
        fetcher = build_fetcher(config)

    summary: Dict[str, Any] = {
        "cache_backend": "dry-run" if dry_run else config.cache_backend,
        "data_source": config.data_source,
        "warmed": [],
        "items": {},
        "errors": {},
    }

    try:
        for key in generations:
            try:
                result = await fetcher.fetch_generation_data(key)
            except RosterException as exc:
                logger.error("Cache warm failed", generation=key, code=exc.code, error=exc.message)
                summary["errors"][key] = exc.message
                continue

            summary["warmed"].append(key)
            summary["items"][key] = len(result.items)
    finally:
        await fetcher.aclose()

    return summary


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Warm the generation roster cache.")
    parser.add_argument("generations", nargs="*", help="Generation keys to warm (e.g. kanto johto)")
    parser.add_argument("--all", action="store_true", help="Warm every configured generation")
    parser.add_argument("--cache-backend", choices=["memory", "redis"], default=None, help="Override ROSTER_CACHE_BACKEND")
    parser.add_argument("--redis-url", default=None, help="Override ROSTER_REDIS_URL")
    parser.add_argument("--data-source", choices=["api", "static"], default=None, help="Override ROSTER_DATA_SOURCE")
    parser.add_argument("--concurrency", type=int, default=None, help="Bound on concurrent detail fetches")
    parser.add_argument("--dry-run", action="store_true", help="Fetch and normalize without writing to the cache")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write JSON summary")
    return parser.parse_args()


def _build_config(args: argparse.Namespace) -> BaseConfig:
    overrides: Dict[str, Any] = {}
    if args.cache_backend:
        overrides["cache_backend"] = args.cache_backend
    if args.redis_url:
        overrides["redis_url"] = args.redis_url
    if args.data_source:
        overrides["data_source"] = args.data_source
    if args.concurrency:
        overrides["detail_concurrency"] = args.concurrency
    return BaseConfig(**overrides)


def main() -> int:
    args = _parse_args()
    generations = available_generations() if args.all else args.generations
    if not generations:
        print("[cache-warm] no generations given; pass keys or --all", file=sys.stderr)
        return 1

    config = _build_config(args)
    configure_logging("roster", config.log_level)

    try:
        summary = asyncio.run(warm(config=config, generations=generations, dry_run=args.dry_run))
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pragma: no cover - CLI surface
        print(f"[cache-warm] failed: {exc}", file=sys.stderr)
        return 1

    if args.dry_run:
        print("[cache-warm] DRY RUN - no cache writes executed")

    print(json.dumps(summary, indent=2))

    if args.output:
        args.output.write_text(json.dumps(summary, indent=2))

    return 1 if summary["errors"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
