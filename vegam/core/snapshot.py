"""Read-only view of a session for the rendering layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from vegam.core.corpus import Corpus
from vegam.core.session import Session, SessionState
from vegam.core.stats import SpeedTier, accuracy, elapsed_seconds, preview_tally, speed_tier, wpm

PREVIOUS_LINES_SHOWN = 2


class Mark(Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    PENDING = "pending"


@dataclass(frozen=True)
class LineView:
    """Expected text of a line with one mark per character."""

    text: str
    marks: Tuple[Mark, ...]

    def runs(self) -> List[Tuple[str, Mark]]:
        """Consecutive characters sharing a mark, for span-based renderers."""
        out: List[Tuple[str, Mark]] = []
        for char, mark in zip(self.text, self.marks):
            if out and out[-1][1] is mark:
                out[-1] = (out[-1][0] + char, mark)
            else:
                out.append((char, mark))
        return out


@dataclass(frozen=True)
class Report:
    elapsed_seconds: float
    words: int
    accuracy: float
    correct: int
    incorrect: int
    wpm: float
    tier: SpeedTier
    source: str


@dataclass(frozen=True)
class Snapshot:
    language: str
    groups: Tuple[str, ...]
    selected_group: int
    state: SessionState
    previous: Tuple[LineView, ...]
    active: Optional[LineView]
    upcoming: Tuple[str, ...]
    words: int
    correct: int
    incorrect: int
    accuracy: float
    wpm: float
    tier: SpeedTier
    source: str
    notice: str = ""
    report: Optional[Report] = None

    @property
    def show_groups(self) -> bool:
        return self.state is SessionState.IDLE


def mark_line(expected: str, typed: str) -> LineView:
    marks = []
    for i, char in enumerate(expected):
        if i >= len(typed):
            marks.append(Mark.PENDING)
        elif typed[i] == char:
            marks.append(Mark.CORRECT)
        else:
            marks.append(Mark.WRONG)
    return LineView(text=expected, marks=tuple(marks))


def build_report(session: Session) -> Optional[Report]:
    if session.finished_at is None:
        return None
    speed = wpm(session.words, session.start_time, session.finished_at)
    return Report(
        elapsed_seconds=elapsed_seconds(session.start_time, session.finished_at),
        words=session.words,
        accuracy=accuracy(session.correct, session.incorrect),
        correct=session.correct,
        incorrect=session.incorrect,
        wpm=speed,
        tier=speed_tier(speed),
        source=session.source,
    )


def build_snapshot(session: Session, corpus: Corpus, now: float, notice: str = "") -> Snapshot:
    """Everything a renderer needs to draw ``session`` at clock reading ``now``.

    Live figures add a preview tally of the unfinished line to the committed
    counters without touching the session.
    """
    first = max(0, session.current_line - PREVIOUS_LINES_SHOWN)
    previous = tuple(
        mark_line(session.lines[i], session.committed[i])
        for i in range(first, session.current_line)
    )

    active = None
    live_correct, live_incorrect = 0, 0
    if not session.is_done:
        active = mark_line(session.current_text, session.buffer)
        live_correct, live_incorrect = preview_tally(session.buffer, session.current_text)

    correct = session.correct + live_correct
    incorrect = session.incorrect + live_incorrect
    end = session.finished_at if session.finished_at is not None else now
    if session.is_idle:
        speed = 0.0
    else:
        speed = wpm(session.words, session.start_time, end)

    return Snapshot(
        language=corpus.language,
        groups=tuple(group.label for group in corpus.groups),
        selected_group=session.selected_group,
        state=session.state,
        previous=previous,
        active=active,
        upcoming=session.lines[session.current_line + 1:],
        words=session.words,
        correct=correct,
        incorrect=incorrect,
        accuracy=accuracy(correct, incorrect),
        wpm=speed,
        tier=speed_tier(speed),
        source=session.source,
        notice=notice,
        report=build_report(session),
    )


def build_empty_snapshot(corpus: Corpus, group: int, notice: str) -> Snapshot:
    """Snapshot for a corpus with no quote in any group: the group bar and ``notice``."""
    return Snapshot(
        language=corpus.language,
        groups=tuple(g.label for g in corpus.groups),
        selected_group=corpus.clamp_group(group),
        state=SessionState.IDLE,
        previous=(),
        active=None,
        upcoming=(),
        words=0,
        correct=0,
        incorrect=0,
        accuracy=accuracy(0, 0),
        wpm=0.0,
        tier=speed_tier(0.0),
        source="",
        notice=notice,
    )
