"""Classify the chapters of a book as war or peace related.

Usage:
    python -m theme_pipes [BOOK] [WAR_TERMS] [PEACE_TERMS]

Each argument is a path or an http(s) URL and defaults to the matching file
in the sources directory. Prints one "Chapter <N>: <label>" line per chapter.
"""

import asyncio
import logging
import sys

from theme_pipes.config import BOOK_PATH, PEACE_TERMS_PATH, TOKENS_DIR, WAR_TERMS_PATH
from theme_pipes.extract import load_text_source
from theme_pipes.load import write_tokens
from theme_pipes.transform import classify_book, format_themes, tokenize

logger = logging.getLogger(__name__)


async def load_sources(locations: list[str]) -> list[str | None]:
    """Load all text sources concurrently."""
    return await asyncio.gather(*(load_text_source(loc) for loc in locations))


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)

    args = sys.argv[1:] if argv is None else argv
    defaults = [str(BOOK_PATH), str(WAR_TERMS_PATH), str(PEACE_TERMS_PATH)]
    locations = args[:3] + defaults[len(args[:3]):]

    book, war_terms, peace_terms = asyncio.run(load_sources(locations))

    if book is None:
        logger.warning("No book available, nothing to classify")
    else:
        write_tokens(tokenize(book), TOKENS_DIR / "tokenized_book.txt")

    for line in format_themes(classify_book(book, war_terms, peace_terms)):
        print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
