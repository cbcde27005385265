"""CLI entry point."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
from jsonschema import ValidationError, validate

from .airports import AirportRecord, load_airports, records_from_airportsdata, write_reference_csv
from .config import Config
from .errors import AirportFinderError, EmptyIndexError
from .finders import FINDERS, AirportFinder, BruteForceAirportFinder, build_finder, validate_against_oracle
from .logging_config import configure_logging
from .security import SecurityError, validate_reference_file

QUERY_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "lat": {"type": "number"},
            "long": {"type": "number"},
        },
        "required": ["lat", "long"],
    },
}

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="airport-finder", description="Nearest airport lookup")
    parser.add_argument("--reference", help="Airport reference CSV (overrides AIRPORT_REFERENCE_PATH)")
    parser.add_argument("--strategy", choices=sorted(FINDERS), help="Finder strategy (overrides AIRPORT_FINDER)")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    lookup = commands.add_parser("lookup", help="Resolve coordinates to the nearest airport")
    lookup.add_argument("lat", type=float, nargs="?")
    lookup.add_argument("long", type=float, nargs="?")
    lookup.add_argument("--queries", help='JSON file with a list of {"lat": .., "long": ..} objects')

    check = commands.add_parser("validate", help="Check a finder against the brute-force finder")
    check.add_argument("--samples", type=int, help="Number of random queries")
    check.add_argument("--seed", type=int, default=0)

    export = commands.add_parser("export", help="Write a reference CSV from airportsdata")
    export.add_argument("output")
    export.add_argument("--code-type", default="IATA", choices=["IATA", "ICAO", "LID"])
    export.add_argument("--country", help="Two-letter country code filter")
    return parser


def load_queries(path: Path) -> List[Tuple[float, float]]:
    with open(path, 'r') as f:
        data = json.load(f)
    validate(instance=data, schema=QUERY_SCHEMA)
    return [(float(q["lat"]), float(q["long"])) for q in data]


def load_reference(config: Config) -> List[AirportRecord]:
    validate_reference_file(config.reference_path, config.allowed_base_dirs, config.max_file_size_bytes)
    return load_airports(config.reference_path)


def run_lookup(finder: AirportFinder, airports: Sequence[AirportRecord], queries: Sequence[Tuple[float, float]]) -> None:
    for lat, long in queries:
        ind = finder.closest_ind(lat, long)
        print(f"{lat}\t{long}\t{ind}\t{airports[ind].abbreviation}\t{airports[ind].name}")


def run_validate(finder: AirportFinder, airports: Sequence[AirportRecord], samples: int, seed: int) -> int:
    if finder.strategy == "hash":
        if not airports:
            raise EmptyIndexError(finder.strategy)
        wrong = [i for i, a in enumerate(airports) if finder.closest_ind(a.latitude, a.longitude) != i]
        logger.info("Checked %s exact round trips, %s wrong", len(airports), len(wrong))
        return len(wrong)

    rng = np.random.default_rng(seed)
    queries = [(a.latitude, a.longitude) for a in airports]
    queries += [
        (float(lat), float(long))
        for lat, long in zip(rng.uniform(-90, 90, samples), rng.uniform(-180, 180, samples))
    ]
    oracle = BruteForceAirportFinder.build(airports)
    mismatches = validate_against_oracle(finder, oracle, queries)
    logger.info("Checked %s queries against brute force, %s mismatches", len(queries), len(mismatches))
    return len(mismatches)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    config = Config.from_env()
    if args.reference:
        config = replace(config, reference_path=Path(args.reference))
    if args.strategy:
        config = replace(config, strategy=args.strategy)

    try:
        if args.command == "export":
            write_reference_csv(records_from_airportsdata(args.code_type, args.country), args.output)
            return 0

        if config.reference_path is None:
            parser.error("--reference or AIRPORT_REFERENCE_PATH is required")
        if args.command == "lookup":
            if args.queries:
                queries = load_queries(Path(args.queries))
            elif args.lat is not None and args.long is not None:
                queries = [(args.lat, args.long)]
            else:
                parser.error("lookup needs LAT LONG or --queries")

        airports = load_reference(config)
        finder = build_finder(config.strategy, airports)

        if args.command == "lookup":
            run_lookup(finder, airports, queries)
            return 0
        samples = args.samples if args.samples is not None else config.validation_samples
        return 1 if run_validate(finder, airports, samples, args.seed) else 0
    except (AirportFinderError, SecurityError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    except ValidationError as exc:
        logger.error("Query file contains invalid data: %s", exc.message)
        return 1
    except OSError as exc:
        logger.error("I/O error: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
