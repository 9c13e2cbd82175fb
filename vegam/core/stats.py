"""Speed and accuracy figures for a typing session.

All functions are pure: they take counters and clock readings and never touch
the session itself.

  * **Accuracy** – correct characters / all tallied characters, as a percentage.
  * **WPM** – accepted word boundaries / elapsed minutes since the first
    keystroke. Elapsed time is floored at 0.01 minutes so the figure stays
    finite right after typing starts.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Tuple

MIN_MINUTES = 0.01


class SpeedTier(Enum):
    """Cosmetic speed classes, slowest first: (upper bound, label, emoji)."""

    SLOTH = (10.0, "sloth", "🦥")
    SNAIL = (25.0, "snail", "🐌")
    TURTLE = (50.0, "turtle", "🐢")
    RABBIT = (75.0, "rabbit", "🐇")
    CHEETAH = (100.0, "cheetah", "🐆")
    TRAIN = (125.0, "train", "🚄")
    LIGHTNING = (math.inf, "lightning", "⚡")

    @property
    def upper(self) -> float:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def emoji(self) -> str:
        return self.value[2]


def elapsed_seconds(start: Optional[float], end: Optional[float]) -> float:
    """Seconds from ``start`` to ``end``; negative or unknown spans count as zero."""
    if start is None or end is None:
        return 0.0
    span = end - start
    if not math.isfinite(span) or span < 0:
        return 0.0
    return span


def accuracy(correct: int, incorrect: int) -> float:
    total = correct + incorrect
    if total <= 0:
        return 0.0
    return correct / total * 100.0


def wpm(words: int, start: Optional[float], end: Optional[float]) -> float:
    minutes = max(MIN_MINUTES, elapsed_seconds(start, end) / 60.0)
    return max(0, words) / minutes


def speed_tier(value: float) -> SpeedTier:
    for tier in SpeedTier:
        if value < tier.upper:
            return tier
    return SpeedTier.LIGHTNING


def preview_tally(typed: str, expected: str) -> Tuple[int, int]:
    """(correct, incorrect) for ``typed`` compared position by position.

    Positions past the end of ``expected`` are compared against a space.
    """
    correct = 0
    incorrect = 0
    for i, char in enumerate(typed):
        target = expected[i] if i < len(expected) else " "
        if char == target:
            correct += 1
        else:
            incorrect += 1
    return correct, incorrect


def format_wpm(value: float) -> str:
    """Tier emoji plus rounded WPM, e.g. ``"🐢  42"``."""
    return f"{speed_tier(value).emoji} {round(value):>3}"
