from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CORPUS_PATH = Path(__file__).resolve().parent.parent / "data" / "quotes" / "english.yaml"


class CorpusLoadError(Exception):
    """The quote corpus is missing or malformed. There is no way to run without it."""


class EmptySelectionError(LookupError):
    """No quote fits the bounds of the requested length group."""

    def __init__(self, group: "LengthGroup") -> None:
        super().__init__(f"No quotes between {group.min} and {group.max} characters")
        self.group = group


@dataclass(frozen=True)
class Quote:
    id: int
    text: str
    source: str
    length: int


@dataclass(frozen=True)
class LengthGroup:
    """Exclusive length range: a quote fits when ``min < length < max``."""

    min: int
    max: int

    def contains(self, length: int) -> bool:
        return self.min < length < self.max

    @property
    def label(self) -> str:
        return f"{self.min}-{self.max}"


@dataclass(frozen=True)
class Corpus:
    language: str
    groups: Tuple[LengthGroup, ...]
    quotes: Tuple[Quote, ...]

    def clamp_group(self, index: int) -> int:
        """Out-of-range group indices fall back to the first group."""
        if 0 <= index < len(self.groups):
            return index
        return 0

    def group_label(self, index: int) -> str:
        return self.groups[self.clamp_group(index)].label

    def matching(self, index: int) -> List[Quote]:
        group = self.groups[self.clamp_group(index)]
        return [quote for quote in self.quotes if group.contains(quote.length)]

    def select(self, index: int, rng: Optional[random.Random] = None) -> Quote:
        """Pick a quote uniformly at random from the group at ``index``."""
        index = self.clamp_group(index)
        candidates = self.matching(index)
        if not candidates:
            raise EmptySelectionError(self.groups[index])
        quote = (rng or random).choice(candidates)
        logger.debug("Picked quote %s from group %s", quote.id, self.groups[index].label)
        return quote


class CorpusRepository:
    """Loads the quote corpus once and keeps it for the whole run."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_CORPUS_PATH
        self._corpus = self._load_corpus()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    def _load_corpus(self) -> Corpus:
        path = self._path
        if not path.exists():
            raise CorpusLoadError(f"Corpus file not found: {path}")
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusLoadError(f"{path.name}: could not read corpus: {e}") from e
        except yaml.YAMLError as e:
            raise CorpusLoadError(f"{path.name}: invalid YAML: {e}") from e

        if not raw or not isinstance(raw, dict):
            raise CorpusLoadError(f"{path.name}: expected a mapping with 'language', 'groups' and 'quotes'")

        language = str(raw.get("language") or "unknown").strip()
        groups = self._parse_groups(path, raw.get("groups"))
        quotes = self._parse_quotes(path, raw.get("quotes"))

        corpus = Corpus(language=language, groups=groups, quotes=quotes)
        for i, group in enumerate(groups):
            if not corpus.matching(i):
                logger.warning("%s: no quotes fit group %s", path.name, group.label)

        logger.info(
            "Loaded %d %s quotes in %d groups from %s", len(quotes), language, len(groups), path
        )
        return corpus

    @staticmethod
    def _parse_groups(path: Path, groups) -> Tuple[LengthGroup, ...]:
        if not groups or not isinstance(groups, list):
            raise CorpusLoadError(f"{path.name}: missing or empty 'groups'")
        parsed: List[LengthGroup] = []
        for item in groups:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise CorpusLoadError(f"{path.name}: group {item!r} is not a [min, max] pair")
            try:
                low, high = int(item[0]), int(item[1])
            except (TypeError, ValueError) as e:
                raise CorpusLoadError(f"{path.name}: group {item!r} has non-integer bounds") from e
            if low >= high:
                raise CorpusLoadError(f"{path.name}: group {item!r} has min >= max")
            parsed.append(LengthGroup(min=low, max=high))
        return tuple(parsed)

    @staticmethod
    def _parse_quotes(path: Path, quotes) -> Tuple[Quote, ...]:
        if not isinstance(quotes, list):
            raise CorpusLoadError(f"{path.name}: missing 'quotes' list")
        parsed: List[Quote] = []
        for position, item in enumerate(quotes):
            if not isinstance(item, dict) or "text" not in item or "length" not in item:
                raise CorpusLoadError(f"{path.name}: quote #{position} needs 'text' and 'length'")
            text = str(item["text"])
            if not text.strip():
                logger.warning("%s: skipping blank quote #%d", path.name, position)
                continue
            try:
                quote_id = int(item.get("id", position))
                length = int(item["length"])
            except (TypeError, ValueError) as e:
                raise CorpusLoadError(f"{path.name}: quote #{position} has a non-integer id or length") from e
            parsed.append(
                Quote(id=quote_id, text=text, source=str(item.get("source") or ""), length=length)
            )
        return tuple(parsed)
