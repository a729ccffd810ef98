import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def write_tokens(tokens: list[str], path: str | Path) -> Path:
    """Write a token sequence to a text file, one token per line.

    Args:
        tokens: Tokens as produced by tokenize()
        path: Destination file, parent directories are created as needed

    Returns:
        The path written to
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{token}\n" for token in tokens), encoding="utf-8")

    logger.info(f"Wrote {len(tokens)} tokens to {path}")
    return path


def read_tokens(path: str | Path) -> list[str]:
    """Read a token sequence written by write_tokens().

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    text = Path(path).read_text(encoding="utf-8")
    return [line for line in text.split("\n") if line]
