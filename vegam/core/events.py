"""Key events consumed by the typing engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    ESCAPE = "escape"
    LEFT = "left"
    RIGHT = "right"
    TAB = "tab"
    BACKSPACE = "backspace"
    CHARACTER = "character"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        return cls(Key.CHARACTER, char)


ESCAPE = KeyEvent(Key.ESCAPE)
LEFT = KeyEvent(Key.LEFT)
RIGHT = KeyEvent(Key.RIGHT)
TAB = KeyEvent(Key.TAB)
BACKSPACE = KeyEvent(Key.BACKSPACE)
