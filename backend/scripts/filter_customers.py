#!/usr/bin/env python3
"""
Run the customer geofilter over a local JSON Lines file and print the result.

Each line must be a JSON object such as:
  {"user_id": 1, "name": "John Doe", "latitude": "19.0760", "longitude": "72.8777"}

The reference point and radius default to the values in settings (.env / environment).
Run: python scripts/filter_customers.py path/to/customers.txt [--radius-km 50]
"""
import argparse
import json
import sys
from pathlib import Path

# Add backend root to path
backend = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend))

from settings import get_settings
from src.geofilter import ParseFault, UnexpectedFault, filter_customers


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Filter customers within a radius of the office")
    parser.add_argument("path", type=Path, help="JSON Lines file (one customer object per line)")
    parser.add_argument("--lat", type=float, default=settings.office_latitude, help="Reference latitude")
    parser.add_argument("--lng", type=float, default=settings.office_longitude, help="Reference longitude")
    parser.add_argument("--radius-km", type=float, default=settings.radius_km, help="Inclusive radius in km")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON output")
    args = parser.parse_args(argv)

    if not args.path.is_file():
        print(f"Error: file not found: {args.path}", file=sys.stderr)
        return 1

    reference = settings.reference_point()._replace(
        latitude=args.lat,
        longitude=args.lng,
        radius_km=args.radius_km,
    )
    try:
        customers = filter_customers(args.path.open("rb"), reference)
    except ParseFault as e:
        print(f"Error: invalid JSON in {args.path} at {e}", file=sys.stderr)
        return 1
    except (OSError, UnexpectedFault) as e:
        print(f"Error: could not process {args.path}: {e}", file=sys.stderr)
        return 1

    print(json.dumps([c._asdict() for c in customers], indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
