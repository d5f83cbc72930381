"""Command line entry point: propose rooms for a saved availability response."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from homestay_booking.config import configure_logging, get_logger, settings
from homestay_booking.services import BookingFlow
from homestay_booking.transformers import (
    AvailabilityResponseError,
    AvailabilityTransformer,
    GuestDistributionError,
    HomestayNotFoundError,
    SearchTransformer,
)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Propose a room selection and price it for one homestay"
    )
    parser.add_argument("response", type=Path, help="Availability search response (JSON file)")
    parser.add_argument("--slug", required=True, help="Homestay slug")
    parser.add_argument("--guests", required=True, help='Guest distribution, e.g. "2A0C,1A1C"')
    parser.add_argument("--rooms", help="Required room count (defaults to number of guest groups)")
    parser.add_argument("--check-in", dest="check_in", help="Check-in date (YYYY-MM-DD)")
    parser.add_argument("--check-out", dest="check_out", help="Check-out date (YYYY-MM-DD)")
    parser.add_argument(
        "--apply-proposal",
        action="store_true",
        help="Select one room for every proposed assignment before quoting",
    )
    return parser


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Load inputs, build the booking flow and return a JSON-ready result."""
    with open(args.response) as f:
        response = json.load(f)

    catalog = AvailabilityTransformer.transform(response, args.slug)
    search = SearchTransformer.transform(args.check_in, args.check_out, args.guests, args.rooms)
    flow = BookingFlow(catalog, search)

    rejections = []
    if args.apply_proposal:
        for assignment in flow.proposal.assignments:
            result = flow.set_quantity(assignment.room_id, 1)
            if not result.ok:
                rejections.append(result.model_dump(mode="json"))

    snapshot = flow.snapshot()
    return {
        "homestay": catalog.slug,
        "nights": search.nights,
        "proposal": flow.proposal.model_dump(mode="json"),
        "rooms": [card.model_dump(mode="json") for card in flow.room_cards()],
        "rejections": rejections,
        "snapshot": snapshot.model_dump(mode="json"),
    }


def main(argv: Optional[list[str]] = None) -> int:
    """Main function.

    Returns:
        Exit code: 0 on success, 1 on bad input
    """
    args = build_parser().parse_args(argv)
    logger.info("Starting room proposal", environment=settings.environment, homestay=args.slug)

    try:
        result = run(args)
    except (
        OSError,
        json.JSONDecodeError,
        AvailabilityResponseError,
        HomestayNotFoundError,
        GuestDistributionError,
    ) as e:
        logger.error("Room proposal failed", homestay=args.slug, error=str(e))
        print(json.dumps({"success": False, "error": str(e)}))
        return 1

    print(json.dumps({"success": True, **result}, indent=2, default=str))
    return 0


def cli() -> None:
    """Console script entry point."""
    configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    cli()
