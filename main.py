import argparse
import json
import sys
from datetime import date, datetime
from typing import Optional

import pytz
import requests
import yaml

from adapters.base import AvailabilityPoint, BaseAdapter, Campground, Campsite
from adapters.recreation_gov import RecreationGovAdapter
from adapters.reserve_california import ReserveCaliforniaAdapter
from itineraries import find_itineraries
from report import describe_search, format_itineraries

DAYS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]
APIS = ["recreation_gov", "reserve_ca"]
DEFAULT_SEARCH = {
    "api": "recreation_gov",
    "campground": None,
    "day": "fri",
    "nights": 2,
    "months": 6,
}
DEFAULT_TIMEZONE = "America/Los_Angeles"
FIXTURE_FILE = "fixtures/sample_availability.json"


def load_config(path: str = "config.yaml") -> dict:
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def day_to_weekday(day: str) -> int:
    """"fri" -> 5 (ISO weekday)."""
    return DAYS.index(day.lower()) + 1


def local_today(timezone_str: str) -> date:
    return datetime.now(pytz.timezone(timezone_str)).date()


def resolve_search(args: argparse.Namespace, config: dict) -> dict:
    """CLI flags win over the config file's `search` section, which wins over defaults."""
    search = {**DEFAULT_SEARCH, **(config.get("search") or {})}
    for name in DEFAULT_SEARCH:
        value = getattr(args, name, None)
        if value is not None:
            search[name] = value

    if search["campground"] is None:
        raise ValueError("a campground id is required (--campground or search.campground in config)")
    if search["api"] not in APIS:
        raise ValueError(f"unknown api {search['api']!r}, expected one of {', '.join(APIS)}")
    if str(search["day"]).lower() not in DAYS:
        raise ValueError(f"unknown day {search['day']!r}, expected one of {', '.join(DAYS)}")
    search["nights"] = int(search["nights"])
    search["months"] = int(search["months"])
    if search["nights"] < 1 or search["months"] < 1:
        raise ValueError("nights and months must both be at least 1")
    search["campground"] = str(search["campground"])
    return search


def make_adapter(api: str, today: date) -> BaseAdapter:
    if api == "reserve_ca":
        return ReserveCaliforniaAdapter(today=today)
    return RecreationGovAdapter()


def load_fixture(campground_id: str, path: str = FIXTURE_FILE) -> tuple:
    """Returns (Campground or None, campsites) from the dry-run fixture file."""
    with open(path) as f:
        fixture = json.load(f)
    entry = fixture.get(campground_id)
    if entry is None:
        return None, []
    campsites = [
        Campsite(
            site_id=s["site_id"],
            name=s["name"],
            url=s["url"],
            availabilities=[
                AvailabilityPoint(date=date.fromisoformat(day), is_available=available)
                for day, available in s["availabilities"].items()
            ],
        )
        for s in entry.get("campsites", [])
    ]
    return Campground(campground_id=campground_id, name=entry["name"]), campsites


def run(search: dict, adapter: Optional[BaseAdapter], today: date, dry_run: bool = False) -> int:
    """
    Core logic. Returns the process exit code.
    Separated from __main__ to allow unit testing without real HTTP or files.
    """
    campground_id = search["campground"]
    start_weekday = day_to_weekday(search["day"])
    nights = search["nights"]

    if dry_run:
        print(f"[DRY RUN] Using fixture data from {FIXTURE_FILE}")
        campground, campsites = load_fixture(campground_id)
    else:
        campground, campsites = adapter.get_campground(campground_id), []

    if campground is None:
        print(f"No campground with id {campground_id}", file=sys.stderr)
        return 1

    print(describe_search(campground.name, start_weekday, nights))
    print()

    if not dry_run:
        try:
            campsites = adapter.get_campsites(campground_id, today, search["months"])
        except (requests.RequestException, ValueError, KeyError) as e:
            print(f"ERROR fetching campsites for {campground_id}: {e}", file=sys.stderr)
            return 1

    itineraries = find_itineraries(campsites, start_weekday, nights)
    print(format_itineraries(itineraries, today))
    return 0


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find campsites free for a whole stay starting on a given weekday")
    parser.add_argument("--api", choices=APIS, help="Which reservation API to search (default: recreation_gov)")
    parser.add_argument("-c", "--campground", help="Campground's identifier")
    parser.add_argument("-d", "--day", choices=DAYS, help="Day of week to start on (default: fri)")
    parser.add_argument("-n", "--nights", type=int, help="Length of stay in nights (default: 2)")
    parser.add_argument("-m", "--months", type=int, help="Number of months to check (default: 6)")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML config file")
    parser.add_argument("--dry-run", action="store_true", help="Use fixture data instead of calling the API")
    return parser.parse_args(argv)


def cli(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        search = resolve_search(args, config)
        today = local_today(config.get("timezone") or DEFAULT_TIMEZONE)
    except (ValueError, yaml.YAMLError, pytz.UnknownTimeZoneError) as e:
        print(f"ERROR invalid configuration: {e}", file=sys.stderr)
        return 2

    adapter = None if args.dry_run else make_adapter(search["api"], today)
    return run(search=search, adapter=adapter, today=today, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(cli())
