"""Command line interface for searching, seeding and serving reward flights."""
from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from typing import Iterable, List, Optional

from tabulate import tabulate

from .cabins import CABIN_TABLES, CabinClass, parse_cheapest_cabin
from .config import (
    CHEAPEST_SEARCH_PAGE_SIZE,
    RANGE_SEARCH_PAGE_SIZE,
    Settings,
    configure_logging,
    load_settings,
)
from .dataset import generate_sample_data
from .database import init_db
from .entities import AwardOffer, Page, RewardFlight
from .fixtures import FixtureRewardFlightRepository
from .repository import RewardFlightRepository, build_repository


def _iso_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _cabin(value: str) -> CabinClass:
    try:
        return parse_cheapest_cabin(value.upper())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _format_offer(offer: Optional[AwardOffer]) -> str:
    if offer is None:
        return "-"
    points = "?" if offer.cabin_points_value is None else f"{offer.cabin_points_value:,}"
    seats = offer.cabin_class_seat_count_string or offer.cabin_class_seat_count
    saver = " saver" if offer.is_saver_award else ""
    return f"{points} ({seats if seats is not None else '?'} seats){saver}"


def render_page(page: Page[RewardFlight]) -> str:
    headers = ["Departure", "Route", "Carrier"] + [
        table.slot.replace("award_", "").replace("_", " ").title() for table in CABIN_TABLES
    ]
    rows: List[List[str]] = []
    for flight in page.content:
        rows.append(
            [flight.departure, f"{flight.origin}-{flight.destination}", flight.carrier_code]
            + [_format_offer(getattr(flight, table.slot)) for table in CABIN_TABLES]
        )
    footer = (
        f"Page {page.page_number + 1} of {max(page.total_pages, 1)} "
        f"({page.total_elements} flights, {page.page_size} per page)"
    )
    return tabulate(rows, headers=headers, tablefmt="github") + "\n" + footer


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search cached reward flight availability.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    range_parser = subparsers.add_parser("range", help="Flights for a route within a date range.")
    range_parser.add_argument("origin", help="Origin airport code, e.g. LHR.")
    range_parser.add_argument("destination", help="Destination airport code, e.g. JFK.")
    range_parser.add_argument("--from", dest="from_date", type=_iso_date, required=True)
    range_parser.add_argument("--to", dest="to_date", type=_iso_date, required=True)
    range_parser.add_argument(
        "--carrier",
        default=None,
        help="Carrier code (default: REWARD_SEARCH_CARRIER_CODE or VS).",
    )
    range_parser.add_argument("--page-number", type=int, default=0)
    range_parser.add_argument("--page-size", type=int, default=RANGE_SEARCH_PAGE_SIZE)

    cheapest_parser = subparsers.add_parser("cheapest", help="Cheapest bookable flights in a cabin.")
    cheapest_parser.add_argument("origin")
    cheapest_parser.add_argument("destination")
    cheapest_parser.add_argument(
        "cabin", type=_cabin, help="ECONOMY, PREMIUM_ECONOMY or BUSINESS."
    )
    cheapest_parser.add_argument("--page-number", type=int, default=0)
    cheapest_parser.add_argument("--page-size", type=int, default=CHEAPEST_SEARCH_PAGE_SIZE)

    for search_parser in (range_parser, cheapest_parser):
        search_parser.add_argument(
            "--fixtures",
            action="store_true",
            help="Answer from generated fixture data instead of the database.",
        )

    seed_parser = subparsers.add_parser("seed", help="Populate the configured store with sample data.")
    seed_parser.add_argument("--routes", type=int, default=4)
    seed_parser.add_argument("--days", type=int, default=30)
    seed_parser.add_argument("--start", type=_iso_date, default=None)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8080)

    return parser.parse_args(list(argv))


def _repository(args: argparse.Namespace, settings: Settings) -> RewardFlightRepository:
    if args.fixtures:
        return FixtureRewardFlightRepository(carrier_code=settings.carrier_code)
    return build_repository(settings)


def _serve(args: argparse.Namespace, settings: Settings) -> int:  # pragma: no cover - runs a server
    import uvicorn

    from .web import create_app

    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    settings = load_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        return _serve(args, settings)

    try:
        if args.command == "seed":
            session_factory = init_db(settings.database_url, echo=settings.echo_sql)
            counts = generate_sample_data(
                session_factory, routes=args.routes, days=args.days, start=args.start
            )
            print(f"Seeded {counts['flights']} flights and {counts['awards']} awards")
            return 0

        repository = _repository(args, settings)
        if args.command == "range":
            page = repository.range_search(
                args.origin.upper(),
                args.destination.upper(),
                (args.carrier or settings.carrier_code).upper(),
                args.from_date,
                args.to_date,
                args.page_number,
                args.page_size,
            )
        else:
            page = repository.cheapest_search(
                args.origin.upper(),
                args.destination.upper(),
                args.cabin,
                args.page_number,
                args.page_size,
            )
    except Exception as exc:  # pragma: no cover - CLI entry point
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(render_page(page))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
