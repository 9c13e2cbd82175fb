from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from vegam.core.corpus import Quote
from vegam.core.events import Key, KeyEvent
from vegam.core.stats import preview_tally


class SessionState(Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass(frozen=True)
class Session:
    """Progress through one wrapped quote.

    Sessions are immutable: every keystroke produces a new ``Session`` through
    the transition functions below, so the engine can be driven without a
    terminal.

    ``correct``/``incorrect`` only cover committed lines. ``words`` counts the
    word boundaries (spaces) accepted so far.
    """

    lines: Tuple[str, ...]
    source: str = ""
    quote_id: Optional[int] = None
    selected_group: int = 0
    start_time: float = 0.0
    current_line: int = 0
    buffer: str = ""
    committed: Tuple[str, ...] = ()
    correct: int = 0
    incorrect: int = 0
    words: int = 0
    finished_at: Optional[float] = None

    @classmethod
    def start(
        cls,
        lines: Sequence[str],
        quote: Optional[Quote] = None,
        group: int = 0,
    ) -> "Session":
        """Fresh session with every counter at zero."""
        if not lines:
            raise ValueError("a session needs at least one line")
        return cls(
            lines=tuple(lines),
            source=quote.source if quote else "",
            quote_id=quote.id if quote else None,
            selected_group=group,
        )

    @property
    def state(self) -> SessionState:
        if self.finished_at is not None:
            return SessionState.DONE
        if not self.buffer and self.current_line == 0:
            return SessionState.IDLE
        return SessionState.IN_PROGRESS

    @property
    def is_idle(self) -> bool:
        return self.state is SessionState.IDLE

    @property
    def is_done(self) -> bool:
        return self.state is SessionState.DONE

    @property
    def current_text(self) -> str:
        """Expected text of the active line, empty once every line is committed."""
        if self.current_line < len(self.lines):
            return self.lines[self.current_line]
        return ""

    def expected_char(self) -> str:
        """Character expected at the cursor; a space past the end of the line."""
        text = self.current_text
        position = len(self.buffer)
        if position < len(text):
            return text[position]
        return " "


def carry_over(old: Session, lines: Sequence[str], quote: Optional[Quote], group: int) -> Session:
    """New quote for ``group``; progress is dropped but the counters are kept."""
    fresh = Session.start(lines, quote, group)
    return replace(
        fresh,
        start_time=old.start_time,
        correct=old.correct,
        incorrect=old.incorrect,
        words=old.words,
    )


def restart(
    old: Session, lines: Sequence[str], quote: Optional[Quote], group: Optional[int] = None
) -> Session:
    """New quote with every counter reset, in the same group unless told otherwise."""
    return Session.start(lines, quote, old.selected_group if group is None else group)


def type_char(session: Session, char: str, now: float) -> Session:
    """Apply one typed character.

    Whitespace is only accepted where the line expects a space, and a
    non-whitespace character is refused at a space, so the cursor can never
    drift across a word boundary. Any other character is accepted even when
    wrong; mistakes are tallied when the line is committed.
    """
    if session.is_done:
        return session
    if session.is_idle:
        session = replace(session, start_time=now)

    expected = session.expected_char()
    words = session.words
    if char.isspace():
        if expected != " ":
            return session
        words += 1
    elif expected == " ":
        return session

    buffer = session.buffer + char
    line = session.current_text
    if len(buffer) < len(line):
        return replace(session, buffer=buffer, words=words)

    correct, incorrect = preview_tally(buffer, line)
    current_line = session.current_line + 1
    finished_at = now if current_line >= len(session.lines) else None
    return replace(
        session,
        buffer="",
        words=words,
        committed=session.committed + (buffer,),
        current_line=current_line,
        correct=session.correct + correct,
        incorrect=session.incorrect + incorrect,
        finished_at=finished_at,
    )


def backspace(session: Session) -> Session:
    """Remove the last typed character of the active line.

    Committed lines are final, so an empty buffer is left alone.
    """
    if session.is_done or not session.buffer:
        return session
    removed = session.buffer[-1]
    words = session.words
    if removed.isspace():
        words = max(0, words - 1)
    return replace(session, buffer=session.buffer[:-1], words=words)


def step_group(index: int, delta: int, count: int) -> int:
    """Move a group selection by ``delta``, wrapping around both ends."""
    if count <= 0:
        return 0
    return (index + delta) % count


def apply_event(session: Session, event: KeyEvent, now: float) -> Session:
    """Apply a typing event. Keys that need a new quote are left to the caller."""
    if event.key is Key.CHARACTER:
        return type_char(session, event.char, now)
    if event.key is Key.BACKSPACE:
        return backspace(session)
    return session
