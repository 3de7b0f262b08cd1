"""
Timeline and report rendering for Facial Emotion Analytics (FEA)

This module renders analysis results for the console and for CSV export.
It consumes already computed reports and never re-derives metrics itself.

Functions:
    - format_clock: Formats a timestamp as a UTC wall-clock time.
    - display_elapsed_time: Formats a duration in seconds.
    - save_timeline_to_csv: Saves per-sample timeline events to a CSV file.
    - print_timeline: Prints the ASCII timeline vertically.
    - print_report: Prints the session summary, highlights, and insights.
    - color_txt: Colorizes a string.
"""

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from colored import attr, bg, fg
from halo import Halo

from fea.analytics.classifier import emotion_emoji
from fea.analytics.report import SessionReport, TimelineEvent
from fea.utils.logger import get_logger


logger: logging.Logger = get_logger(__name__)


def format_clock(timestamp: int) -> str:
    """Formats an epoch-millisecond timestamp as UTC ``HH:MM:SS``."""
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).strftime(
        "%H:%M:%S"
    )


def display_elapsed_time(seconds: float, _format: str = "long") -> str:
    """Formats a duration as ``2 min 5 seconds`` (long) or ``2m5s`` (short)."""
    minutes, whole_seconds = divmod(int(seconds), 60)
    if _format == "long":
        if minutes:
            return f"{minutes} min {whole_seconds} seconds"
        return f"{seconds:.1f} seconds"
    return f"{minutes}m{whole_seconds}s" if minutes else f"{seconds:.2f}s"


def save_timeline_to_csv(
    timeline: List[TimelineEvent], file_name: str, folder: Path
) -> Path:
    """
    Saves the timeline to a CSV file.

    Arguments:
        timeline (List[TimelineEvent]): Per-sample events to be saved.
        file_name (str): Name (or path) whose stem names the CSV file.
        folder (Path): Destination folder, created when missing.

    Returns:
        Path: The path to the saved CSV file.
    """
    logger.info(msg="Starting to save timeline to CSV.")
    folder.mkdir(parents=True, exist_ok=True)
    csv_path: Path = folder / f"{Path(file_name).stem}.csv"

    with Halo(
        text=f"Saving timeline to {csv_path}",
        spinner="dots",
        text_color="green",
    ):
        with open(csv_path, mode="w", newline="", encoding="utf-8") as file:
            writer = csv.writer(file)
            writer.writerow(
                ["Timestamp", "Emotion", "Intensity", "Level", "Crying"]
            )
            logger.debug("Header written to CSV file.")

            for event in timeline:
                row = [
                    event.timestamp,
                    event.dominant_emotion,
                    round(event.intensity, 3),
                    event.intensity_label,
                    event.is_crying,
                ]
                writer.writerow(row)
                logger.debug(msg=f"Written row: {row}")

    logger.info(msg=f"Timeline successfully saved to {csv_path}")
    return csv_path


def color_txt(
    string: str, fg_color: str, bg_color: str, padding: int = 0
) -> str:
    """
    Colorizes a string.

    Arguments:
        string (str): String to be colorized.
        fg_color (str): Foreground color.
        bg_color (str): Background color.

    Returns:
        str: Colorized string.
    """
    if padding:
        string = string.ljust(padding)

    return f"{fg(fg_color)}{bg(bg_color)}{string}{attr('reset')}"


def print_timeline(timeline: List[TimelineEvent]) -> None:
    """
    Prints the ASCII timeline vertically.

    Arguments:
        timeline (List[TimelineEvent]): Per-sample events.
    """
    logger.info(msg=f"Printing timeline with {len(timeline)} entries.")
    if not timeline:
        print("No samples recorded.")
        return

    time_width: int = 9
    emotion_width: int = max(
        len(f"{event.dominant_emotion.capitalize()} {emotion_emoji(event.dominant_emotion)}")
        for event in timeline
    )
    emotion_width = max(emotion_width, len("Emotion"))

    print(color_txt("Time", "black", "green", time_width), end=" ")
    print(color_txt("Emotion", "black", "yellow", emotion_width), end=" ")
    print(color_txt("Intensity", "black", "blue"))

    for event in timeline:
        time_str: str = format_clock(event.timestamp).ljust(time_width)
        label: str = (
            "Crying 😢"
            if event.is_crying
            else f"{event.dominant_emotion.capitalize()} {emotion_emoji(event.dominant_emotion)}"
        )
        emotion_str: str = label.ljust(emotion_width)
        print(f"{time_str} {emotion_str} {event.intensity:.2f} ({event.intensity_label})")


def print_report(report: SessionReport) -> None:
    """
    Prints the session overview, wellness, phase highlights, insights,
    and recommendations.

    Arguments:
        report (SessionReport): Result of ``analyze_session``.
    """
    logger.info(msg="Printing session report.")
    print(color_txt("Session Overview", "black", "green"))
    print(f"Duration: {display_elapsed_time(report.duration_seconds)}")
    print(f"Samples: {report.sample_count}")
    print(f"Mood Detected: {report.overall_mood}")
    print(f"Emotional Shifts: {report.transition_count} transitions")
    print(
        f"Crying Episodes: {report.crying.count} "
        f"({report.crying.total_duration_seconds:.1f}s)"
    )
    if report.wellness is not None:
        percentage = round(report.normalized_wellness * 100)
        print(
            f"Emotional Wellness: {percentage}% "
            f"{report.wellness.label} {report.wellness.emoji}"
        )
        print(f"  {report.wellness.feedback}")

    if report.top_emotions:
        print(color_txt("Top Emotions", "black", "yellow"))
        for emotion, share in report.top_emotions:
            print(f"  {emotion.capitalize()} {emotion_emoji(emotion)}: {share:.1f}%")

    print(color_txt("Highlights", "black", "yellow"))
    for highlight in report.phase_highlights:
        print(f"  {highlight.name.capitalize()}: {highlight.description}")

    if report.insights:
        print(color_txt("Session Insights", "black", "blue"))
        for insight in report.insights:
            print(f"  {insight.emoji} {insight.title}: {insight.description}")

    if report.recommendations:
        print(color_txt("Recommendations", "black", "blue"))
        for recommendation in report.recommendations:
            print(f"  - {recommendation}")
