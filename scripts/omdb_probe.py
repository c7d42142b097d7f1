#!/usr/bin/env python3
import argparse
import asyncio
import json
import os
import sys
import time
from typing import Any, Dict

from dotenv import load_dotenv


def _duration_ms(start: float) -> int:
    return int((time.time() - start) * 1000)


async def probe(query: str, deep: bool, repeat: int) -> Dict[str, Any]:
    from raz_app.cache import RequestCache  # pylint: disable=import-outside-toplevel
    from raz_app.omdb import DetailOrchestrator, OmdbClient, SearchOrchestrator, SearchStatus  # pylint: disable=import-outside-toplevel

    client = OmdbClient()
    cache = RequestCache()
    searcher = SearchOrchestrator(client, cache)

    result: Dict[str, Any] = {
        "query": query,
        "api_key_configured": client.has_api_key,
        "search": None,
        "search_ms": None,
        "detail": None,
        "detail_ms": None,
    }

    try:
        start = time.time()
        # Identical concurrent searches must collapse into one OMDb call
        outcomes = await asyncio.gather(*(searcher.search(query) for _ in range(max(1, repeat))))
        result["search_ms"] = _duration_ms(start)
        outcome = outcomes[0]
        result["search"] = outcome.to_dict() if outcome else {"status": "skipped"}
        result["cache"] = cache.stats()

        if not deep or outcome is None or outcome.status != SearchStatus.RESULTS:
            return result

        first = next(iter(outcome.buckets.movies + outcome.buckets.serieses + outcome.buckets.episodes), None)
        if first is None:
            return result

        loader = DetailOrchestrator(client, cache)
        start = time.time()
        loader.open(first.kind_value, first.external_id)
        state = await loader.wait()
        result["detail_ms"] = _duration_ms(start)
        result["detail"] = state.to_dict()
        return result
    finally:
        await client.close()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe the OMDb search and detail flow.")
    parser.add_argument("--query", default="batman", help="Search query to test.")
    parser.add_argument("--deep", action="store_true", help="Also fetch the first result's full record.")
    parser.add_argument("--repeat", type=int, default=1, help="Concurrent identical searches to fire.")
    parser.add_argument("--output", default="", help="Write the JSON report here instead of stdout.")
    parser.add_argument("--env", default=".env", help="Path to .env file with OMDB_API_KEY.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if args.env and os.path.exists(args.env):
        load_dotenv(args.env)

    sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

    report: Dict[str, Any] = asyncio.run(probe(args.query, args.deep, args.repeat))
    report["generated_at"] = time.strftime("%Y-%m-%dT%H:%M:%S%z")

    text = json.dumps(report, indent=2, sort_keys=True)
    if not args.output:
        print(text)
    else:
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(text)
        print(f"Wrote report to {args.output}")

    search = report.get("search") or {}
    return 1 if search.get("status") == "failure" else 0


if __name__ == "__main__":
    raise SystemExit(main())
