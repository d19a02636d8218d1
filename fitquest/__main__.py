"""Allow running FitQuest as a module: python -m fitquest."""

from __future__ import annotations

import argparse
import sys

from .database.db import configure_engine, init_db
from .errors import FitQuestError
from .gamification.levels import (
    DEFAULT_CONFIG,
    level_progress,
    tier_for_level,
    unlocks_for_level,
    xp_for_level,
)
from .gamification.session import SELF_LOGGED, SessionRewards
from .gamification.stats import stat_labels, stat_modifiers
from .gamification.streaks import StreakTracker
from .gamification.unlockables import REGISTRY
from .gamification.xp import XPEngine
from .log import configure_logging
from .settings import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitquest", description="FitQuest progression tools")
    parser.add_argument("--db", help="database URL (overrides settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="create a character")
    p.add_argument("user")

    p = sub.add_parser("award", help="award XP")
    p.add_argument("user")
    p.add_argument("amount", type=int)
    p.add_argument("--source", default="admin_manual")
    p.add_argument("--ref", dest="reference_id")
    p.add_argument("--note")

    p = sub.add_parser("session", help="complete a training session")
    p.add_argument("user")
    p.add_argument("session_id")
    p.add_argument("--focus")
    p.add_argument("--self-logged", action="store_true")

    p = sub.add_parser("status", help="show a character sheet")
    p.add_argument("user")

    p = sub.add_parser("history", help="show recent XP awards")
    p.add_argument("user")
    p.add_argument("--limit", type=int)

    sub.add_parser("table", help="print the level table")
    return parser


def _print_status(xp_engine: XPEngine, user_id: str) -> None:
    character = xp_engine.get_character(user_id)
    progress = level_progress(character.xp)
    print(f"{character.user_id}: level {character.level} "
          f"({tier_for_level(character.level).value}), {character.xp} XP")
    if progress.required:
        print(f"  progress: {progress.current}/{progress.required} "
              f"({progress.percentage}%)")
    else:
        print("  progress: max level")
    labels = stat_labels(character.strength, character.endurance, character.discipline)
    mods = stat_modifiers(character.strength, character.endurance, character.discipline)
    print(f"  strength {character.strength} ({labels['strength']}), "
          f"endurance {character.endurance} ({labels['endurance']}), "
          f"discipline {character.discipline} ({labels['discipline']}), "
          f"power {mods['power_level']}")
    status = StreakTracker(xp_engine).streak_status(user_id)
    print(f"  streak {status['current_streak']} (best {status['longest_streak']})"
          + ("  at risk!" if status["is_at_risk"] else ""))
    for unlock in unlocks_for_level(character.level):
        print(f"  * {unlock}")
    upcoming = REGISTRY.next_upcoming(character.level)
    if upcoming is not None:
        print(f"  next: {upcoming.name} at level {upcoming.required_level}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    url = args.db or settings.database_url
    if url:
        configure_engine(url)
    init_db()

    xp_engine = XPEngine()
    try:
        if args.command == "init":
            character = xp_engine.initialize_character(args.user)
            print(f"{character.user_id}: level {character.level}, {character.xp} XP")
        elif args.command == "award":
            result = xp_engine.award_xp(
                args.user, args.amount, args.source, args.reference_id, args.note,
            )
            if result["duplicate"]:
                print("already awarded")
            else:
                print(f"{result['old_xp']} -> {result['new_xp']} XP, "
                      f"level {result['old_level']} -> {result['new_level']}")
                for unlock in result["unlocks"]:
                    print(f"  * {unlock}")
        elif args.command == "session":
            rewards = SessionRewards(xp_engine, settings=settings)
            result = rewards.on_session_complete(
                args.session_id, args.user, focus_type=args.focus,
                workout_type=SELF_LOGGED if args.self_logged else None,
            )
            if result["duplicate"]:
                print("session already counted")
            else:
                print(f"+{result['xp_awarded']} XP, stats {result['stats_updated']}, "
                      f"streak {result['streak_update']['current_streak']}")
                if result["level_up"]:
                    print(f"LEVEL UP! {result['level_up']['old_level']} -> "
                          f"{result['level_up']['new_level']}")
        elif args.command == "status":
            _print_status(xp_engine, args.user)
        elif args.command == "history":
            limit = args.limit if args.limit is not None else settings.history_limit
            for row in xp_engine.xp_history(args.user, limit=limit):
                print(f"{row.created_at:%Y-%m-%d %H:%M}  {row.amount:+6d}  "
                      f"{row.source}  {row.note or ''}".rstrip())
        elif args.command == "table":
            for level in range(1, DEFAULT_CONFIG.max_level + 1):
                print(f"{level:3d}  {xp_for_level(level):7d}  {tier_for_level(level).value}")
    except FitQuestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
