"""Greedy word wrapping of quote text into display lines."""

from __future__ import annotations

from typing import List

MAX_LINE_WIDTH = 50


def wrap_text(text: str, max_width: int = MAX_LINE_WIDTH) -> List[str]:
    """Split ``text`` on single spaces and pack the words into lines.

    Every line except the last keeps its trailing space, so ``"".join(lines)``
    gives back ``text`` exactly and the typing engine sees a real space at each
    word boundary. A word longer than ``max_width`` gets a line of its own and
    is never split. Empty words from repeated or trailing spaces stay on the
    current line, so no line is ever empty unless ``text`` is.
    """
    lines: List[str] = []
    for word in text.split(" "):
        if lines and (not word or len(lines[-1]) + 1 + len(word) <= max_width):
            lines[-1] = f"{lines[-1]} {word}"
        else:
            lines.append(word)

    for i in range(len(lines) - 1):
        lines[i] += " "
    return lines
