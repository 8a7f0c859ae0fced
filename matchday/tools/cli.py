from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from matchday.api import MatchService, ServiceError, Settings


def _print_json(data: Any, pretty: bool = True) -> None:
    if pretty:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    else:
        json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def _settings(args: argparse.Namespace) -> Settings:
    # Flaggor på kommandoraden går före miljövariabler
    settings = Settings.from_env()
    if getattr(args, "language", None):
        settings.language = args.language.lower()
    if getattr(args, "seed", None) is not None:
        settings.seed = args.seed
    if getattr(args, "log_level", None):
        settings.log_level = args.log_level
    return settings


def _build_service(args: argparse.Namespace) -> MatchService:
    return MatchService(Path(args.file), _settings(args))


def cmd_schedule_build(args: argparse.Namespace) -> None:
    service = _build_service(args)
    double_round = False if args.single_round else None
    _print_json(service.build_schedule(double_round=double_round))


def cmd_match_simulate(args: argparse.Namespace) -> None:
    service = _build_service(args)
    _print_json(service.simulate_fixture(args.id))


def cmd_week_play(args: argparse.Namespace) -> None:
    service = _build_service(args)
    _print_json(service.play_week(args.week))


def cmd_table_get(args: argparse.Namespace) -> None:
    service = _build_service(args)
    _print_json(service.table(args.league))


def cmd_feed_show(args: argparse.Namespace) -> None:
    service = _build_service(args)
    sys.stdout.write(service.feed(args.id, report=args.report) + "\n")


def cmd_player_stats(args: argparse.Namespace) -> None:
    service = _build_service(args)
    _print_json(service.player_stats(args.id))


def cmd_league_dump(args: argparse.Namespace) -> None:
    service = _build_service(args)
    _print_json(service.dump())


def cmd_league_reset(args: argparse.Namespace) -> None:
    service = _build_service(args)
    _print_json(service.reset())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Matchday JSON CLI")
    parser.add_argument("--file", default="league.json", help="Sökväg till ligafilen")
    parser.add_argument("--language", help="Språk för matchtexter (en, tr)")
    parser.add_argument("--seed", type=int, help="Seed för reproducerbara matcher")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Loggnivå",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # schedule
    schedule = sub.add_parser("schedule")
    schedule_sub = schedule.add_subparsers(dest="action", required=True)
    schedule_build = schedule_sub.add_parser("build")
    schedule_build.add_argument("--single-round", action="store_true")
    schedule_build.set_defaults(func=cmd_schedule_build)

    # match
    match = sub.add_parser("match")
    match_sub = match.add_subparsers(dest="action", required=True)
    match_sim = match_sub.add_parser("simulate")
    match_sim.add_argument("--id", required=True)
    match_sim.set_defaults(func=cmd_match_simulate)

    # week
    week = sub.add_parser("week")
    week_sub = week.add_subparsers(dest="action", required=True)
    week_play = week_sub.add_parser("play")
    week_play.add_argument("--week", type=int)
    week_play.set_defaults(func=cmd_week_play)

    # table
    table = sub.add_parser("table")
    table_sub = table.add_subparsers(dest="action", required=True)
    table_get = table_sub.add_parser("get")
    table_get.add_argument("--league")
    table_get.set_defaults(func=cmd_table_get)

    # feed
    feed = sub.add_parser("feed")
    feed_sub = feed.add_subparsers(dest="action", required=True)
    feed_show = feed_sub.add_parser("show")
    feed_show.add_argument("--id", required=True)
    feed_show.add_argument("--report", action="store_true")
    feed_show.set_defaults(func=cmd_feed_show)

    # player
    player = sub.add_parser("player")
    player_sub = player.add_subparsers(dest="action", required=True)
    player_stats = player_sub.add_parser("stats")
    player_stats.add_argument("--id", required=True)
    player_stats.set_defaults(func=cmd_player_stats)

    # league
    league = sub.add_parser("league")
    league_sub = league.add_subparsers(dest="action", required=True)
    league_dump = league_sub.add_parser("dump")
    league_dump.set_defaults(func=cmd_league_dump)
    league_reset = league_sub.add_parser("reset")
    league_reset.set_defaults(func=cmd_league_reset)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=_settings(args).log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        args.func(args)
        return 0
    except ServiceError as exc:
        _print_json({"ok": False, "error": {"code": "SERVICE_ERROR", "message": str(exc)}})
        return 1
    except json.JSONDecodeError as exc:
        _print_json({"ok": False, "error": {"code": "INVALID_JSON", "message": str(exc)}})
        return 1
    except Exception as exc:  # pragma: no cover - unexpected failure
        logging.getLogger(__name__).exception("unexpected failure")
        _print_json({"ok": False, "error": {"code": "UNEXPECTED_ERROR", "message": str(exc)}})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
