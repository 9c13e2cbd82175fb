"""Tests for vegam.core.session – the keystroke state machine."""

from __future__ import annotations

import pytest

from vegam.core.corpus import Quote
from vegam.core.events import BACKSPACE, LEFT, TAB, KeyEvent
from vegam.core.session import (
    Session,
    SessionState,
    apply_event,
    backspace,
    carry_over,
    restart,
    step_group,
    type_char,
)
from vegam.core.wrapping import wrap_text


def type_text(session: Session, text: str, start: float = 100.0) -> Session:
    """Type ``text`` one character per second starting at ``start``."""
    for i, char in enumerate(text):
        session = type_char(session, char, start + i)
    return session


# ---------------------------------------------------------------------------
# Session – construction and state
# ---------------------------------------------------------------------------

class TestSessionStart:
    def test_counters_start_at_zero(self):
        s = Session.start(["the cat sat"])
        assert (s.correct, s.incorrect, s.words) == (0, 0, 0)
        assert s.current_line == 0
        assert s.buffer == ""
        assert s.committed == ()
        assert s.finished_at is None

    def test_quote_metadata(self):
        quote = Quote(id=9, text="x", source="Seneca", length=1)
        s = Session.start(["x"], quote, group=2)
        assert s.source == "Seneca"
        assert s.quote_id == 9
        assert s.selected_group == 2

    def test_lines_become_tuple(self):
        s = Session.start(["a ", "b"])
        assert s.lines == ("a ", "b")

    def test_no_lines_rejected(self):
        with pytest.raises(ValueError):
            Session.start([])

    def test_frozen(self):
        s = Session.start(["a"])
        with pytest.raises(AttributeError):
            s.words = 3  # type: ignore[misc]


class TestSessionState:
    def test_idle_initially(self):
        assert Session.start(["abc"]).state is SessionState.IDLE

    def test_in_progress_after_keystroke(self):
        s = type_char(Session.start(["abc"]), "a", 1.0)
        assert s.state is SessionState.IN_PROGRESS
        assert not s.is_idle

    def test_in_progress_on_later_line_with_empty_buffer(self):
        s = type_text(Session.start(["ab ", "cd"]), "ab ")
        assert s.buffer == ""
        assert s.state is SessionState.IN_PROGRESS

    def test_done(self):
        s = type_text(Session.start(["ab"]), "ab")
        assert s.state is SessionState.DONE
        assert s.is_done

    def test_expected_char(self):
        s = type_char(Session.start(["abc"]), "a", 1.0)
        assert s.expected_char() == "b"

    def test_expected_char_past_end_is_space(self):
        s = Session(lines=("ab",), buffer="ab")
        assert s.expected_char() == " "

    def test_current_text_when_finished(self):
        s = type_text(Session.start(["ab"]), "ab")
        assert s.current_text == ""


# ---------------------------------------------------------------------------
# type_char
# ---------------------------------------------------------------------------

class TestTypeChar:
    def test_full_quote(self):
        s = type_text(Session.start(["the cat sat"]), "the cat sat", start=100.0)
        assert s.correct == 11
        assert s.incorrect == 0
        assert s.words == 2
        assert s.committed == ("the cat sat",)
        assert s.current_line == 1
        assert s.is_done
        assert s.finished_at == 110.0

    def test_start_time_is_first_keystroke(self):
        s = type_text(Session.start(["hello"]), "hel", start=42.0)
        assert s.start_time == 42.0

    def test_start_time_not_moved_by_later_keys(self):
        s = type_text(Session.start(["ab ", "cd"]), "ab c", start=10.0)
        assert s.start_time == 10.0

    def test_wrong_letter_still_advances(self):
        s = type_text(Session.start(["the cat sat"]), "the c")
        s = type_char(s, "x", 200.0)
        assert s.buffer == "the cx"
        assert (s.correct, s.incorrect) == (0, 0)

    def test_letter_at_word_boundary_rejected(self):
        s = type_text(Session.start(["the cat sat"]), "the")
        after = type_char(s, "x", 200.0)
        assert after == s
        assert after.buffer == "the"

    def test_space_inside_word_rejected(self):
        s = type_text(Session.start(["the cat sat"]), "th")
        after = type_char(s, " ", 200.0)
        assert after.buffer == "th"
        assert after.words == 0

    def test_space_at_boundary_counts_word(self):
        s = type_text(Session.start(["the cat sat"]), "the ")
        assert s.words == 1
        assert s.buffer == "the "

    def test_tab_character_is_whitespace(self):
        s = type_text(Session.start(["the cat"]), "the")
        s = type_char(s, "\t", 200.0)
        assert s.words == 1
        assert s.buffer == "the\t"

    def test_leading_space_rejected_but_clock_starts(self):
        s = type_char(Session.start(["abc"]), " ", 7.0)
        assert s.buffer == ""
        assert s.start_time == 7.0

    def test_commit_tallies_whole_line(self):
        s = type_text(Session.start(["ab ", "cd"]), "xb ")
        assert s.correct + s.incorrect == len("ab ")
        assert (s.correct, s.incorrect) == (2, 1)
        assert s.committed == ("xb ",)
        assert s.current_line == 1
        assert not s.is_done

    def test_commit_on_trailing_space(self):
        s = type_text(Session.start(["ab ", "cd"]), "ab")
        assert s.current_line == 0
        s = type_char(s, " ", 300.0)
        assert s.current_line == 1
        assert s.buffer == ""
        assert s.words == 1

    def test_multi_line_quote(self):
        lines = ["one two ", "three"]
        s = type_text(Session.start(lines), "one two three")
        assert s.is_done
        assert s.correct == 13
        assert s.words == 2
        assert s.committed == ("one two ", "three")

    def test_ignored_when_done(self):
        s = type_text(Session.start(["ab"]), "ab")
        assert type_char(s, "c", 999.0) == s


# ---------------------------------------------------------------------------
# backspace
# ---------------------------------------------------------------------------

class TestBackspace:
    def test_removes_last_char(self):
        s = type_text(Session.start(["abc"]), "ab")
        assert backspace(s).buffer == "a"

    def test_removing_space_uncounts_word(self):
        s = type_text(Session.start(["the cat"]), "the ")
        s = backspace(s)
        assert s.buffer == "the"
        assert s.words == 0

    def test_word_count_floored_at_zero(self):
        s = Session(lines=("a b",), buffer="a ", words=0)
        assert backspace(s).words == 0

    def test_empty_buffer_first_line(self):
        s = Session.start(["abc"])
        assert backspace(s) == s

    def test_cannot_reach_committed_line(self):
        s = type_text(Session.start(["ab ", "cd"]), "ab ")
        after = backspace(s)
        assert after == s
        assert after.committed == ("ab ",)

    def test_ignored_when_done(self):
        s = type_text(Session.start(["ab"]), "ab")
        assert backspace(s) == s

    def test_retype_after_backspace(self):
        s = type_text(Session.start(["cat"]), "cx")
        s = backspace(s)
        s = type_text(s, "at", start=50.0)
        assert (s.correct, s.incorrect) == (3, 0)


# ---------------------------------------------------------------------------
# Group stepping and new quotes
# ---------------------------------------------------------------------------

class TestStepGroup:
    def test_left_from_first_wraps_to_last(self):
        assert step_group(0, -1, 4) == 3

    def test_right_from_last_wraps_to_first(self):
        assert step_group(3, 1, 4) == 0

    def test_plain_step(self):
        assert step_group(1, 1, 4) == 2
        assert step_group(2, -1, 4) == 1

    def test_single_group(self):
        assert step_group(0, 1, 1) == 0
        assert step_group(0, -1, 1) == 0

    def test_no_groups(self):
        assert step_group(0, 1, 0) == 0


class TestCarryOverAndRestart:
    def _finished(self) -> Session:
        return type_text(Session.start(["a b"], group=1), "a x", start=5.0)

    def test_carry_over_keeps_counters(self):
        old = self._finished()
        new = carry_over(old, ["next"], None, 2)
        assert (new.correct, new.incorrect, new.words) == (old.correct, old.incorrect, old.words)
        assert new.lines == ("next",)
        assert new.selected_group == 2
        assert new.is_idle

    def test_restart_resets_counters(self):
        old = self._finished()
        new = restart(old, ["next"], Quote(id=3, text="next", source="S", length=4))
        assert (new.correct, new.incorrect, new.words) == (0, 0, 0)
        assert new.committed == ()
        assert new.finished_at is None
        assert new.selected_group == 1
        assert new.quote_id == 3

    def test_restart_in_other_group(self):
        new = restart(self._finished(), ["x"], None, group=0)
        assert new.selected_group == 0


# ---------------------------------------------------------------------------
# apply_event
# ---------------------------------------------------------------------------

class TestApplyEvent:
    def test_character(self):
        s = apply_event(Session.start(["ab"]), KeyEvent.character("a"), 1.0)
        assert s.buffer == "a"

    def test_backspace(self):
        s = apply_event(Session(lines=("ab",), buffer="a"), BACKSPACE, 1.0)
        assert s.buffer == ""

    @pytest.mark.parametrize("event", [TAB, LEFT])
    def test_quote_changing_keys_leave_session(self, event: KeyEvent):
        s = Session.start(["ab"])
        assert apply_event(s, event, 1.0) is s


# ---------------------------------------------------------------------------
# Quotes ending in a space
# ---------------------------------------------------------------------------

class TestTrailingSpaceQuote:
    def test_full_text_finishes(self):
        text = "a" * 50 + " "
        s = type_text(Session.start(wrap_text(text, 50)), text)
        assert s.is_done
        assert s.correct + s.incorrect == len(text)
        assert s.words == 1

    def test_extra_space_after_finish_is_ignored(self):
        text = "a" * 50 + " "
        s = type_text(Session.start(wrap_text(text, 50)), text)
        after = type_char(s, " ", 999.0)
        assert after == s
