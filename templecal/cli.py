"""
Command line for Tamil calendar lookups.

  python -m templecal.cli today
  python -m templecal.cli --strategy accurate date 2024-01-15
  python -m templecal.cli festivals 2024-01-15 --holidays
  python -m templecal.cli upcoming --days 30
  python -m templecal.cli year 68 --csv tamil_year_68.csv
  python -m templecal.cli serve
"""
import argparse
import logging
import sys
from datetime import date

from tamil_calendar import CalendarError, as_date, format_tamil_date
from templecal.config import LOG_FORMAT, LOG_LEVEL, STRATEGIES
from templecal.resolution import (
    resolve_festivals, resolve_tamil_date, tamil_year_calendar, upcoming_important_days,
)

log = logging.getLogger(__name__)


def _print_festivals(matches) -> None:
    if not matches:
        print("  (no festivals)")
    for m in matches:
        tag = f" [{m.importance}]" if m.importance else ""
        print(f"  • {m.name} / {m.tamil} ({m.record.type}){tag}")


def cmd_date(args) -> int:
    day = as_date(args.date) if args.date else date.today()
    tamil = resolve_tamil_date(day, args.strategy)
    if tamil is None:
        print("Calendar data unavailable", file=sys.stderr)
        return 1
    print(f"{day.isoformat()}  →  {format_tamil_date(tamil)}")
    if tamil.tithi:
        print(f"  Tithi: {tamil.tithi} ({tamil.tithi_tamil}), {tamil.paksha} paksha")
        for key in ("nakshatra", "yoga", "karana", "rashi", "season"):
            print(f"  {key.title()}: {tamil.element(key)}")
    _print_festivals(resolve_festivals(day, args.strategy))
    return 0


def cmd_festivals(args) -> int:
    day = as_date(args.date)
    matches = resolve_festivals(day, args.strategy, include_public_holidays=args.holidays)
    print(f"Festivals on {day.isoformat()}:")
    _print_festivals(matches)
    return 0


def cmd_upcoming(args) -> int:
    start = as_date(args.start) if args.start else date.today()
    entries = upcoming_important_days(start, args.days, args.strategy)
    print(f"Important days from {start.isoformat()} ({args.days} days):")
    for entry in entries:
        names = ", ".join(m.name for m in entry["festivals"])
        print(f"  {entry['date'].isoformat()}  {names}")
    if not entries:
        print("  (none)")
    return 0


def cmd_year(args) -> int:
    df = tamil_year_calendar(args.tamil_year, args.strategy)
    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"✅ {len(df)} rows written to {args.csv}")
        return 0
    for slot, group in df.groupby("month_slot", sort=False):
        print(f"\n{slot}")
        for row in group.itertuples(index=False):
            print(f"  {row.date:%Y-%m-%d}  {row.name} / {row.tamil}")
    return 0


def cmd_serve(args) -> int:
    from templecal.server import run
    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tamil calendar lookups")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None,
                        help="Conversion strategy (default from TEMPLECAL_STRATEGY)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("today", help="Tamil date and festivals for today")
    p.set_defaults(func=cmd_date, date=None)

    p = sub.add_parser("date", help="Tamil date and festivals for a date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.set_defaults(func=cmd_date)

    p = sub.add_parser("festivals", help="Festivals on a date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--holidays", action="store_true", help="Include public holidays")
    p.set_defaults(func=cmd_festivals)

    p = sub.add_parser("upcoming", help="Major/high-importance days ahead")
    p.add_argument("--start", default=None, help="YYYY-MM-DD, default today")
    p.add_argument("--days", type=int, default=30)
    p.set_defaults(func=cmd_upcoming)

    p = sub.add_parser("year", help="Festival calendar for a Tamil year")
    p.add_argument("tamil_year", type=int)
    p.add_argument("--csv", default=None, help="Write rows to a CSV file")
    p.set_defaults(func=cmd_year)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.set_defaults(func=cmd_serve)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    try:
        return args.func(args)
    except CalendarError as e:
        log.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
