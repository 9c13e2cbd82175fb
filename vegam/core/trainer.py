from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional, Tuple

from vegam.core.corpus import Corpus, EmptySelectionError, Quote
from vegam.core.events import Key, KeyEvent
from vegam.core.session import Session, apply_event, carry_over, restart, step_group
from vegam.core.snapshot import Snapshot, build_empty_snapshot, build_snapshot
from vegam.core.wrapping import MAX_LINE_WIDTH, wrap_text

logger = logging.getLogger(__name__)

NO_QUOTES_NOTICE = "No quotes available in any length group"


class Trainer:
    """Owns the live session and turns key events into session transitions.

    Quote selection goes through an injected ``random.Random`` and time through
    an injected ``clock`` so runs are reproducible under test. When no group of
    the corpus holds a quote there is no session: the trainer only shows
    ``NO_QUOTES_NOTICE`` and waits for Esc.
    """

    def __init__(
        self,
        corpus: Corpus,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        width: int = MAX_LINE_WIDTH,
        group: int = 0,
    ) -> None:
        self._corpus = corpus
        self._rng = rng or random.Random()
        self._clock = clock
        self._width = width
        self._notice = ""
        self._group = corpus.clamp_group(group)
        self._session: Optional[Session] = None
        picked = self._pick(self._group, 1)
        if picked is not None:
            self._group, quote = picked
            self._session = Session.start(self._lines(quote), quote, self._group)

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def selected_group(self) -> int:
        if self._session is None:
            return self._group
        return self._session.selected_group

    @property
    def notice(self) -> str:
        """User-facing message about the last quote request, empty when all went well."""
        return self._notice

    def handle(self, event: KeyEvent) -> bool:
        """Apply one key event. Returns False when the user asked to quit."""
        key = event.key
        if key is Key.ESCAPE:
            return False
        if self._session is None:
            return True
        if key is Key.LEFT:
            self._navigate(-1)
        elif key is Key.RIGHT:
            self._navigate(1)
        elif key is Key.TAB:
            self._new_quote()
        else:
            was_done = self._session.is_done
            self._session = apply_event(self._session, event, self._clock())
            if self._session.is_done and not was_done:
                logger.info(
                    "Finished quote %s: %d words, %d correct, %d incorrect",
                    self._session.quote_id,
                    self._session.words,
                    self._session.correct,
                    self._session.incorrect,
                )
        return True

    def snapshot(self) -> Snapshot:
        if self._session is None:
            return build_empty_snapshot(self._corpus, self._group, self._notice)
        return build_snapshot(self._session, self._corpus, self._clock(), self._notice)

    def _navigate(self, delta: int) -> None:
        session = self._session
        if session is None or not session.is_idle:
            return
        target = step_group(session.selected_group, delta, len(self._corpus.groups))
        picked = self._pick(target, delta)
        if picked is not None:
            group, quote = picked
            self._session = carry_over(session, self._lines(quote), quote, group)

    def _new_quote(self) -> None:
        session = self._session
        if session is None or not (session.is_idle or session.is_done):
            return
        picked = self._pick(session.selected_group, 1)
        if picked is None:
            return
        group, quote = picked
        if session.is_idle:
            self._session = carry_over(session, self._lines(quote), quote, group)
        else:
            self._session = restart(session, self._lines(quote), quote, group)

    def _lines(self, quote: Quote) -> List[str]:
        return wrap_text(quote.text, self._width)

    def _pick(self, group: int, direction: int) -> Optional[Tuple[int, Quote]]:
        """Select a quote from ``group``, walking on in ``direction`` past empty groups.

        Returns None and sets ``NO_QUOTES_NOTICE`` when every group is empty.
        """
        count = len(self._corpus.groups)
        requested = group
        for _ in range(count):
            try:
                quote = self._corpus.select(group, self._rng)
            except EmptySelectionError as e:
                logger.warning("%s, trying the next group", e)
                group = step_group(group, direction, count)
                continue
            if group != requested:
                self._notice = (
                    f"No quotes for {self._corpus.group_label(requested)} characters, "
                    f"showing {self._corpus.group_label(group)}"
                )
            else:
                self._notice = ""
            return group, quote
        logger.warning("No quote fits any of the %d length groups", count)
        self._notice = NO_QUOTES_NOTICE
        return None
