from __future__ import annotations

import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from vegam.core.events import BACKSPACE, ESCAPE, LEFT, RIGHT, TAB, KeyEvent
from vegam.core.trainer import Trainer
from vegam.ui.typing_widgets import HeaderView, QuoteView, ReportView, StatsView

logger = logging.getLogger(__name__)

NAMED_KEYS = {
    "escape": ESCAPE,
    "left": LEFT,
    "right": RIGHT,
    "tab": TAB,
    "backspace": BACKSPACE,
}

TYPING_HELP = " Start typing to <start>   Change quote length ← →   New quote <TAB>   Quit <ESC> "
DONE_HELP = " Press <ESC> to exit or <TAB> to try again "


def translate_key(key: str, character: Optional[str], is_printable: bool) -> Optional[KeyEvent]:
    """Map a terminal key press onto an engine event, or None for keys the engine ignores."""
    if key in NAMED_KEYS:
        return NAMED_KEYS[key]
    if is_printable and character and len(character) == 1:
        return KeyEvent.character(character)
    return None


class TypingApp(App):
    """Single-screen typing test driven by a ``Trainer``.

    Every key press becomes one engine event followed by one redraw; there is
    no timer, so live figures update on keystrokes only.
    """

    TITLE = "vegam"

    CSS = """
    #screen-body {
        height: 100%;
        border: heavy $accent;
        padding: 0 2;
    }

    #header {
        height: 2;
        content-align: center middle;
        text-align: center;
    }

    #quote {
        height: 1fr;
        text-align: center;
    }

    #stats {
        height: 5;
    }

    #report {
        height: 1fr;
        border: round green;
        content-align: center middle;
        text-align: center;
        display: none;
    }

    #help {
        height: 1;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("escape", "engine('escape')", "Quit", priority=True),
        Binding("tab", "engine('tab')", "New quote", priority=True),
        Binding("left", "engine('left')", "Shorter", priority=True, show=False),
        Binding("right", "engine('right')", "Longer", priority=True, show=False),
        Binding("backspace", "engine('backspace')", "Delete", priority=True, show=False),
    ]

    def __init__(self, trainer: Trainer) -> None:
        super().__init__()
        self._trainer = trainer

    def compose(self) -> ComposeResult:
        with Vertical(id="screen-body"):
            yield HeaderView(id="header")
            yield QuoteView(id="quote")
            yield StatsView(id="stats")
            yield ReportView(id="report")
        yield Static(TYPING_HELP, id="help")

    def on_mount(self) -> None:
        self._redraw()

    def action_engine(self, key: str) -> None:
        self._dispatch(NAMED_KEYS[key])

    def on_key(self, event: events.Key) -> None:
        translated = translate_key(event.key, event.character, event.is_printable)
        if translated is None or event.key in NAMED_KEYS:
            return
        event.stop()
        self._dispatch(translated)

    def _dispatch(self, event: KeyEvent) -> None:
        if not self._trainer.handle(event):
            logger.info("Quit requested")
            self.exit()
            return
        self._redraw()

    def _redraw(self) -> None:
        snapshot = self._trainer.snapshot()
        done = snapshot.report is not None

        self.query_one(HeaderView).display = not done
        self.query_one(QuoteView).display = not done
        self.query_one(StatsView).display = not done
        report = self.query_one(ReportView)
        report.display = done

        if done:
            report.show(snapshot)
        else:
            self.query_one(HeaderView).show(snapshot)
            self.query_one(QuoteView).show(snapshot)
            self.query_one(StatsView).show(snapshot)
        self.query_one("#help", Static).update(DONE_HELP if done else TYPING_HELP)
