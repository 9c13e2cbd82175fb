"""Command-line configuration for the vegam typing trainer."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from vegam.core.corpus import DEFAULT_CORPUS_PATH
from vegam.core.wrapping import MAX_LINE_WIDTH

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class AppConfig:
    corpus_path: Path = DEFAULT_CORPUS_PATH
    width: int = MAX_LINE_WIDTH
    group: int = 0
    seed: Optional[int] = None
    log_level: str = "INFO"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vegam",
        description="Terminal typing trainer: type a quote, get your WPM and accuracy.",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=DEFAULT_CORPUS_PATH,
        help="quote corpus (YAML or JSON) to load instead of the bundled one",
    )
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=MAX_LINE_WIDTH,
        help=f"maximum characters per line (default {MAX_LINE_WIDTH})",
    )
    parser.add_argument(
        "--group",
        type=int,
        default=0,
        help="length group to start with; out-of-range values select the first group",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for quote selection")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (logs go to the textual console)",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> AppConfig:
    args = build_parser().parse_args(argv)
    return AppConfig(
        corpus_path=args.corpus,
        width=args.width,
        group=args.group,
        seed=args.seed,
        log_level=args.log_level,
    )
