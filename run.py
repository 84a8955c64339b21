"""CLI entrypoint."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv as _load_dotenv

from location_search import config
from location_search.adaptive import search_with_expanding_radius
from location_search.categories import PLACE_TYPES, categories_for
from location_search.errors import LocationSearchError
from location_search.http import HttpClient, RequestMetrics
from location_search.models import Coordinate, SearchOrigin, SearchRequest
from location_search.places_client import PlacesClient
from location_search.reporting import (
    build_result_rows,
    build_summary,
    ensure_dir,
    render_summary,
    write_json_object,
    write_results_csv,
    write_results_json,
)
from location_search.searcher import LocationSearcher


def _repo_root() -> Path:
    return Path(__file__).resolve().parent


def load_env(path: str = ".env", root_dir: Optional[Path] = None) -> None:
    """Optionally load a repo-root .env file without overriding real env vars."""
    root = Path(root_dir) if root_dir else _repo_root()
    env_path = (root / path).resolve()
    if not env_path.exists():
        return
    _load_dotenv(dotenv_path=env_path, override=False)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    origin = config.ORIGIN or {}
    parser = argparse.ArgumentParser(description="Find and rank places near a location")
    parser.add_argument("--lat", type=float, default=origin.get("lat"))
    parser.add_argument("--lon", type=float, default=origin.get("lon"))
    parser.add_argument("--label", default=origin.get("label"), help="Origin label, e.g. home")
    parser.add_argument(
        "--category",
        action="append",
        default=None,
        help="Category name (repeatable): " + ", ".join(sorted(PLACE_TYPES)),
    )
    parser.add_argument("--radius", type=float, default=config.DEFAULT_RADIUS_MILES, help="Miles")
    parser.add_argument("--max-results", type=int, default=config.DEFAULT_MAX_RESULTS)
    parser.add_argument("--min-rating", type=float, default=config.DEFAULT_MIN_RATING)
    parser.add_argument(
        "--expand",
        action="store_true",
        help="Widen the radius until --min-results places are found",
    )
    parser.add_argument("--min-results", type=int, default=config.DEFAULT_MIN_RESULTS)
    parser.add_argument("--max-radius", type=float, default=config.DEFAULT_MAX_RADIUS_MILES)
    parser.add_argument("--details", metavar="PLACE_ID", help="Look up a single place and exit")
    parser.add_argument("--out", default=config.OUTPUT_DIR)
    parser.add_argument("--no-write", action="store_true", help="Print results only")
    return parser.parse_args(argv)


def build_places_client(api_key: str, metrics: Optional[RequestMetrics] = None) -> PlacesClient:
    http_client = HttpClient(
        api_key=api_key,
        timeout=config.HTTP_TIMEOUT_SECONDS,
        retry_max=config.HTTP_RETRY_MAX,
        backoff_base=config.HTTP_BACKOFF_BASE,
        backoff_max=config.HTTP_BACKOFF_MAX,
        metrics=metrics,
    )
    return PlacesClient(http_client)


def build_request(args: argparse.Namespace) -> SearchRequest:
    if args.lat is None or args.lon is None:
        raise LocationSearchError("Origin is required: pass --lat/--lon or set it in search_config.json")
    names = args.category or list(config.CATEGORIES)
    return SearchRequest(
        origin=SearchOrigin(Coordinate(args.lat, args.lon), label=args.label),
        radius_miles=args.radius,
        categories=categories_for(names),
        max_results=args.max_results,
        min_rating=args.min_rating,
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    config.load_search_config()
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    api_key = (os.environ.get("GOOGLE_MAPS_API_KEY") or "").strip()
    if not api_key:
        print("Missing GOOGLE_MAPS_API_KEY in environment", file=sys.stderr)
        return 1

    metrics = RequestMetrics()
    places_client = build_places_client(api_key, metrics)

    if args.details:
        try:
            place = places_client.fetch_details(args.details)
        except LocationSearchError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        if place is None:
            print(f"No details available for {args.details}", file=sys.stderr)
            return 1
        print(json.dumps(place.to_dict(), ensure_ascii=False, indent=2))
        return 0

    searcher = LocationSearcher(places_client)
    try:
        request = build_request(args)
        if args.expand:
            outcome = search_with_expanding_radius(
                searcher,
                request,
                min_results=args.min_results,
                max_radius_miles=args.max_radius,
            )
        else:
            outcome = searcher.search(request)
    except LocationSearchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for line in render_summary(outcome):
        print(line)

    if not args.no_write:
        ensure_dir(args.out)
        rows = build_result_rows(outcome)
        write_results_json(f"{args.out}/results.json", rows)
        write_results_csv(f"{args.out}/results.csv", rows)
        write_json_object(f"{args.out}/summary.json", build_summary(outcome, metrics.total_count))
        print(f"Done. Results written to {args.out}/results.csv and {args.out}/results.json")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
