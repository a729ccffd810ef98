import asyncio
import logging
from pathlib import Path

import aiohttp

logger = logging.getLogger(__name__)

# Headers for well behaved requests
HEADERS = {"User-Agent": "ThemePipesBot/1.0"}

# Project Gutenberg plain text edition of War and Peace
GUTENBERG_URL = "https://www.gutenberg.org/cache/epub/2600/pg2600.txt"

# Downloads of a full book can be slow, but should never hang forever
DOWNLOAD_TIMEOUT = aiohttp.ClientTimeout(total=120)


def is_url(location: str | Path) -> bool:
    """Check whether a source location should be downloaded."""
    return str(location).startswith(("http://", "https://"))


def read_text_file(path: str | Path) -> str | None:
    """Read a local text file.

    Returns:
        The file content, or None if the file could not be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None

    logger.info(f"Read {len(text)} characters from {path}")
    return text


async def download_text(url: str) -> str:
    """Download a plain text document.

    Raises:
        aiohttp.ClientError: If the request fails or returns non-200 status.
    """
    async with aiohttp.ClientSession(timeout=DOWNLOAD_TIMEOUT) as session:
        async with session.get(url, headers=HEADERS) as response:
            response.raise_for_status()
            return await response.text()


async def load_text_source(location: str | Path | None) -> str | None:
    """Load a text source from a local path or an http(s) URL.

    An unavailable source is not an error: it is logged and reported as
    None, so the rest of the pipeline can treat it as empty.

    Args:
        location: File path or URL, or None if no source is configured

    Returns:
        The text content, or None if the source is unavailable
    """
    if location is None:
        return None

    if not is_url(location):
        return read_text_file(location)

    logger.info(f"Downloading text from {location}")

    try:
        text = await download_text(str(location))
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Could not download {location}: {e}")
        return None

    logger.info(f"Downloaded {len(text)} characters from {location}")
    return text
