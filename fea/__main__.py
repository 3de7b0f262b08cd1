"""
Facial Emotion Analytics (FEA) Tool

This module serves as the command-line entry point for FEA. It loads a
recorded therapy session (the per-tick emotion samples produced by the
capture front end), runs the analytics engine over it, and prints or exports
the results.

Usage:
    The tool can be operated in two primary modes:
    1. Analysis mode: Analyzes a session JSON file and prints the report,
        optionally saving the session and exporting its timeline.
    2. Listing mode: Lists previously saved sessions.
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from fea.analytics.classifier import CryingRule, reclassify_crying
from fea.analytics.report import analyze_session
from fea.config import CRYING_RULES, get_settings
from fea.domain import Session
from fea.session.store import JsonlSessionStore, save_session
from fea.utils import configure_logging, get_logger
from fea.utils.timeline_utils import (
    display_elapsed_time,
    print_report,
    print_timeline,
    save_timeline_to_csv,
)


logger: logging.Logger = get_logger("fea")


def load_session_file(path: Path) -> Session:
    """Loads a session object, or a bare list of samples, from a JSON file."""
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as err:
            raise ValueError(f"Invalid JSON in session file {path}: {err}") from err
    if isinstance(payload, list):
        payload = {"emotions": payload}
    if not isinstance(payload, dict):
        raise ValueError(f"Session file {path} must hold a JSON object or list.")
    return Session.from_record(payload)


def main() -> None:
    """
    Main function to handle the command line interface logic.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Facial Emotion Analytics Tool"
    )
    parser.add_argument(
        "--file",
        type=str,
        help="Path to a recorded session JSON file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis as JSON instead of a formatted report",
    )
    parser.add_argument(
        "--timeline",
        action="store_true",
        help="Also print the per-sample emotion timeline",
    )
    parser.add_argument(
        "--timeline-csv",
        action="store_true",
        help="Export the per-sample timeline to the configured timeline folder",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Append the analyzed session to the saved-session store",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List saved sessions and exit",
    )
    parser.add_argument(
        "--crying-rule",
        choices=CRYING_RULES,
        help="Re-derive crying flags with the given rule before analysis (defaults to FEA_CRYING_RULE)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )
    args: argparse.Namespace = parser.parse_args()

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)
    store = JsonlSessionStore(settings.storage.sessions_file)

    if args.list:
        try:
            records = store.list_sessions()
        except ValueError as err:
            logger.error(msg=f"Failed to read saved sessions: {err}")
            sys.exit(1)
        if not records:
            print("No saved sessions.")
        for record in records:
            print(
                f"{record.id}  {record.iso_timestamp}  "
                f"{display_elapsed_time(record.duration / 1000, _format='short')}  "
                f"{record.emotion_count} samples  "
                f"{record.crying_episodes} crying episode(s)"
            )
        sys.exit(0)

    if not args.file:
        logger.error(msg="No session file provided for analysis.")
        sys.exit(1)

    start_time: float = time.time()
    try:
        session: Session = load_session_file(Path(args.file))
    except FileNotFoundError:
        logger.error(msg=f"Session file not found: {args.file}")
        sys.exit(1)
    except ValueError as err:
        logger.error(msg=f"Invalid session file {args.file}: {err}")
        sys.exit(1)

    analytics = settings.analytics
    rule_name = args.crying_rule or analytics.crying_rule
    if rule_name:
        rule = replace(CryingRule.from_config(analytics), name=rule_name)
        logger.info("Re-deriving crying flags with the %s rule.", rule_name)
        session = Session(
            start_time=session.start_time,
            duration=session.duration,
            emotions=reclassify_crying(session.emotions, rule=rule),
        )

    report = analyze_session(session.emotions, config=analytics)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(report)
        if args.timeline:
            print_timeline(report.timeline)

    if args.timeline_csv:
        csv_path: Path = save_timeline_to_csv(
            report.timeline, args.file, settings.storage.timeline_folder
        )
        logger.info(msg=f"Timeline saved to {csv_path}")

    if args.save:
        record = save_session(
            store, session, samples_per_second=analytics.samples_per_second
        )
        logger.info(msg=f"Session saved with id {record.id}")

    logger.info(
        msg=f"Session analysis completed in {time.time() - start_time:.2f} seconds"
    )


if __name__ == "__main__":
    main()
