"""Typing screen widgets: each one redraws itself from a ``Snapshot``."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from vegam.core.snapshot import LineView, Mark, Snapshot
from vegam.core.stats import format_wpm
from vegam.ui.colors import TypingColors

ATTRIBUTION = "Quotes provided by monkeytype.com"


def render_groups(snapshot: Snapshot) -> Text:
    text = Text("  Length: ", style=TypingColors.LABEL)
    for i, label in enumerate(snapshot.groups):
        style = TypingColors.SELECTED_GROUP if i == snapshot.selected_group else TypingColors.GROUP
        text.append(f" {label} ", style=style)
    return text


def render_committed(line: LineView) -> Text:
    text = Text()
    for chunk, mark in line.runs():
        style = TypingColors.COMMITTED_MISTAKE if mark is Mark.WRONG else TypingColors.COMMITTED
        text.append(chunk, style=style)
    return text


def render_active(line: LineView) -> Text:
    """Typed part of the active line, mistakes shown as the expected character."""
    text = Text()
    for chunk, mark in line.runs():
        if mark is Mark.CORRECT:
            text.append(chunk, style=TypingColors.TYPED)
        elif mark is Mark.WRONG:
            text.append(chunk, style=TypingColors.MISTAKE)
        else:
            text.append(chunk, style=TypingColors.PENDING)
    return text


def render_header(snapshot: Snapshot) -> Text:
    if snapshot.show_groups:
        return Text("\n").join([Text(""), render_groups(snapshot)])
    lines = [render_committed(line) for line in snapshot.previous]
    while len(lines) < 2:
        lines.insert(0, Text(""))
    return Text("\n").join(lines)


def render_quote(snapshot: Snapshot) -> Text:
    lines = []
    if snapshot.active is not None:
        lines.append(render_active(snapshot.active))
    lines.extend(Text(line, style=TypingColors.PENDING) for line in snapshot.upcoming)
    return Text("\n").join(lines)


def render_stats(snapshot: Snapshot) -> Text:
    text = Text()
    text.append("WPM: ", style=TypingColors.LABEL)
    text.append(format_wpm(snapshot.wpm))
    text.append("  |  ")
    text.append("Accuracy: ", style=TypingColors.LABEL)
    text.append(str(snapshot.correct), style=TypingColors.CORRECT_COUNT)
    text.append(" - ")
    text.append(str(snapshot.incorrect), style=TypingColors.INCORRECT_COUNT)
    text.append(f"  ({snapshot.accuracy:.1f}%)")
    text.append("\n\n")
    text.append("  Source: ", style=TypingColors.LABEL)
    text.append(snapshot.source or "unknown", style=TypingColors.SOURCE)
    text.append(f" - {ATTRIBUTION}")
    if snapshot.notice:
        text.append("\n")
        text.append(f"  {snapshot.notice}", style=TypingColors.NOTICE)
    return text


def render_report(snapshot: Snapshot) -> Text:
    report = snapshot.report
    if report is None:
        return Text("")
    text = Text(justify="center")
    text.append("Typing Test Completed\n\n", style=TypingColors.TITLE)
    text.append("WPM: ", style=TypingColors.LABEL)
    text.append(format_wpm(report.wpm), style=TypingColors.TITLE)
    text.append("\n\n")
    text.append("Time: ", style=TypingColors.LABEL)
    text.append(f"{report.elapsed_seconds:.1f}s\n")
    text.append("Words: ", style=TypingColors.LABEL)
    text.append(f"{report.words}\n\n")
    text.append("Accuracy: ", style=TypingColors.LABEL)
    text.append(f"{report.accuracy:.1f}%\n")
    text.append("Correct: ", style=TypingColors.CORRECT_COUNT)
    text.append(str(report.correct))
    text.append("  |  ")
    text.append("Incorrect: ", style=TypingColors.INCORRECT_COUNT)
    text.append(f"{report.incorrect}\n\n")
    text.append("Source: ", style=TypingColors.LABEL)
    text.append(report.source or "unknown", style=TypingColors.SOURCE)
    return text


class HeaderView(Static):
    """Length selection while idle, the last committed lines while typing."""

    def show(self, snapshot: Snapshot) -> None:
        self.update(render_header(snapshot))


class QuoteView(Static):
    def show(self, snapshot: Snapshot) -> None:
        self.update(render_quote(snapshot))


class StatsView(Static):
    def show(self, snapshot: Snapshot) -> None:
        self.update(render_stats(snapshot))


class ReportView(Static):
    def show(self, snapshot: Snapshot) -> None:
        self.update(render_report(snapshot))
