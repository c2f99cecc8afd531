"""CLI entry: argument parsing and subcommand dispatch."""

import argparse
import sys

import yaml

from fiscal_config import calendar_config_from_mapping, load_calendar_config
from fiscal_kernel.domain.clock import DeterministicClock, SystemClock
from fiscal_kernel.domain.values import SubledgerName
from fiscal_kernel.exceptions import FiscalCalendarError
from fiscal_kernel.services import FiscalCalendarService, PeriodStatusStore
from scripts.cli import config as cli_config
from scripts.cli.util import iso_date, setup_logging
from scripts.cli.views import show_actions, show_calendar, show_result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m scripts.cli",
        description="Configure a fiscal calendar and open/close its periods.",
    )
    parser.add_argument(
        "--db", default=cli_config.DB_URL,
        help=f"SQLAlchemy database URL (default: {cli_config.DB_URL})",
    )
    parser.add_argument(
        "--today", type=iso_date, default=None,
        help="Evaluation date for initial statuses (ISO, default: today UTC)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Calendar YAML used when the store is empty (default: packaged set)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    p_configure = sub.add_parser("configure", help="Generate and store a new calendar")
    p_configure.add_argument("--start-month", default=None)
    p_configure.add_argument("--start-year", type=int, default=None)
    p_configure.add_argument("--frequency", default=None)

    p_show = sub.add_parser("show", help="Print fiscal years and statuses")
    p_show.add_argument("--fiscal-year", default=None)

    p_actions = sub.add_parser("actions", help="List available actions")
    p_actions.add_argument("period")
    p_actions.add_argument("--subledger", default=None)

    p_perform = sub.add_parser("perform", help="Perform an action")
    p_perform.add_argument("fiscal_year")
    p_perform.add_argument("period")
    p_perform.add_argument("action")
    p_perform.add_argument("--subledger", default=None)

    return parser


def _calendar_config(args):
    if args.command == "configure" and args.start_month is not None:
        return calendar_config_from_mapping({
            "startMonth": args.start_month,
            "startYear": args.start_year,
            "frequency": args.frequency,
        })
    return load_calendar_config(args.config)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    clock = DeterministicClock.on(args.today) if args.today else SystemClock()

    try:
        service = FiscalCalendarService(PeriodStatusStore(args.db), clock)
        if args.command == "configure" or not service.list_fiscal_years():
            service.configure(_calendar_config(args))

        if args.command in ("configure", "show"):
            show_calendar(service.list_fiscal_years(), getattr(args, "fiscal_year", None))
            return 0

        if args.command == "actions":
            subledger = SubledgerName.parse(args.subledger) if args.subledger else None
            actions = service.advisor.available_actions(args.period, subledger)
            show_actions(args.period, subledger, actions)
            return 0

        result = service.perform_action(
            args.fiscal_year, args.period, args.subledger, args.action
        )
        show_result(result)
        return 0 if result.success else 1

    except (FiscalCalendarError, ValueError, OSError, yaml.YAMLError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1
