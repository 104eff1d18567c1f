"""Markdown assembly for resume sections."""

from typing import Sequence

from career_coach.modules.resume.interface import ResumeEntry


def format_entry(entry: ResumeEntry) -> str:
    end = "Present" if entry.current else entry.end_date
    return f"### {entry.title} @ {entry.organization}\n{entry.start_date} - {end}\n\n{entry.description}"


def entries_to_markdown(entries: Sequence[ResumeEntry] | None, section_title: str) -> str:
    """Render a resume section, e.g. "## Work Experience" followed by its entries.

    Entries are separated by a blank line. No entries gives an empty string.
    """
    if not entries:
        return ""

    return f"## {section_title}\n\n" + "\n\n".join(format_entry(e) for e in entries)
