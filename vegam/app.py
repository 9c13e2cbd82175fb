"""Application entry point and setup for the vegam typing trainer."""

import logging
import random
import sys
from typing import List, Optional

from textual.logging import TextualHandler

from vegam.config import parse_args
from vegam.core.corpus import CorpusLoadError, CorpusRepository
from vegam.core.trainer import Trainer
from vegam.ui.typing_app import TypingApp


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format.

    The terminal belongs to the TUI, so records go to the textual console
    (``textual console``) instead of stderr.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[TextualHandler()],
    )


def run(argv: Optional[List[str]] = None) -> None:
    """Parse options, load the corpus, and run the typing screen until Escape."""
    config = parse_args(argv)
    configure_logging(config.log_level)

    try:
        repository = CorpusRepository(config.corpus_path)
    except CorpusLoadError as e:
        logging.error("Cannot start: %s", e)
        print(f"vegam: {e}", file=sys.stderr)
        sys.exit(1)

    trainer = Trainer(
        repository.corpus,
        rng=random.Random(config.seed),
        width=config.width,
        group=config.group,
    )
    TypingApp(trainer).run()


if __name__ == "__main__":
    run()
