from typing import Optional

import dagster as dg
from pydantic import Field

from theme_pipes.config import BOOK_PATH, PEACE_TERMS_PATH, WAR_TERMS_PATH
from theme_pipes.defs.resources import ThemeDB
from theme_pipes.extract import load_text_source
from theme_pipes.models import THEME_LABELS, WAR_RELATED
from theme_pipes.transform import (
    classify_chapters,
    count_chapter_terms,
    format_themes,
    split_by_chapter,
    tokenize,
)


# ==============================================================================
# Sources Domain: Raw text of the book and the two term lists
# ==============================================================================


class BookSourceConfig(dg.Config):
    """Configuration for the book to classify.

    The location can be a local file or an http(s) URL, for example the
    Project Gutenberg plain text edition.
    """

    location: str = Field(
        default=str(BOOK_PATH),
        description="Path or URL of the plain text book",
    )


class WarTermsSourceConfig(dg.Config):
    """Configuration for the list of war terms."""

    location: str = Field(
        default=str(WAR_TERMS_PATH),
        description="Path or URL of the whitespace separated war terms",
    )


class PeaceTermsSourceConfig(dg.Config):
    """Configuration for the list of peace terms."""

    location: str = Field(
        default=str(PEACE_TERMS_PATH),
        description="Path or URL of the whitespace separated peace terms",
    )


@dg.asset
async def book_text(
    context: dg.AssetExecutionContext, config: BookSourceConfig
) -> Optional[str]:
    """Load the raw text of the book.

    An unavailable book is stored as None and results in zero chapters.
    """
    text = await load_text_source(config.location)

    if text is None:
        context.log.warning(f"Book not available at {config.location}")
    else:
        context.log.info(f"Loaded {len(text)} characters of book text")

    return text


@dg.asset
async def war_terms_text(
    context: dg.AssetExecutionContext, config: WarTermsSourceConfig
) -> Optional[str]:
    """Load the raw list of war terms."""
    text = await load_text_source(config.location)

    if text is None:
        context.log.warning(f"War terms not available at {config.location}")

    return text


@dg.asset
async def peace_terms_text(
    context: dg.AssetExecutionContext, config: PeaceTermsSourceConfig
) -> Optional[str]:
    """Load the raw list of peace terms."""
    text = await load_text_source(config.location)

    if text is None:
        context.log.warning(f"Peace terms not available at {config.location}")

    return text


# ==============================================================================
# Tokens Domain: Tokenized inputs, stored one token per line
# ==============================================================================


@dg.asset(io_manager_key="token_io")
def book_tokens(
    context: dg.AssetExecutionContext, book_text: Optional[str]
) -> list[str]:
    """Tokenize the book, keeping chapter headings as CHAPTER_<N> markers."""
    tokens = tokenize(book_text)
    context.log.info(f"Tokenized book into {len(tokens)} tokens")
    return tokens


@dg.asset(io_manager_key="token_io")
def war_terms(
    context: dg.AssetExecutionContext, war_terms_text: Optional[str]
) -> list[str]:
    """Tokenize the war terms the same way as the book."""
    tokens = tokenize(war_terms_text)
    context.log.info(f"Found {len(tokens)} war terms")
    return tokens


@dg.asset(io_manager_key="token_io")
def peace_terms(
    context: dg.AssetExecutionContext, peace_terms_text: Optional[str]
) -> list[str]:
    """Tokenize the peace terms the same way as the book."""
    tokens = tokenize(peace_terms_text)
    context.log.info(f"Found {len(tokens)} peace terms")
    return tokens


@dg.asset_check(asset=war_terms)
def war_terms_not_empty(
    _: dg.AssetCheckExecutionContext, war_terms: list[str]
) -> dg.AssetCheckResult:
    """Check that the war term list contains at least one term.

    Without war terms every chapter classifies as peace-related.
    """
    count = len(war_terms)

    return dg.AssetCheckResult(
        passed=count > 0,
        description=f"Found {count} war terms"
        if count
        else "No war terms found, every chapter will be peace-related",
        metadata={"count": count, "unique_count": len(set(war_terms))},
    )


@dg.asset_check(asset=peace_terms)
def peace_terms_not_empty(
    _: dg.AssetCheckExecutionContext, peace_terms: list[str]
) -> dg.AssetCheckResult:
    """Check that the peace term list contains at least one term."""
    count = len(peace_terms)

    return dg.AssetCheckResult(
        passed=count > 0,
        description=f"Found {count} peace terms"
        if count
        else "No peace terms found, chapters with any war term will be war-related",
        metadata={"count": count, "unique_count": len(set(peace_terms))},
    )


# ==============================================================================
# Chapters Domain: Book split on chapter markers
# ==============================================================================


@dg.asset
def book_chapters(
    context: dg.AssetExecutionContext, book_tokens: list[str]
) -> dict[int, list[str]]:
    """Group the book tokens into chapters.

    Content before the first chapter heading is kept under index 0 but is
    never classified.
    """
    chapters = split_by_chapter(book_tokens)

    if 0 in chapters:
        context.log.info(f"Found {len(chapters[0])} tokens of front matter")

    context.log.info(f"Found {len(chapters) - (0 in chapters)} chapters")
    return chapters


@dg.asset_check(asset=book_chapters)
def chapters_found(
    _: dg.AssetCheckExecutionContext, book_chapters: dict[int, list[str]]
) -> dg.AssetCheckResult:
    """Check that the book has at least one chapter heading."""
    count = len([chapter for chapter in book_chapters if chapter > 0])
    passed = count > 0

    return dg.AssetCheckResult(
        passed=passed,
        description=f"Found {count} chapters"
        if passed
        else "No chapters found, inspect the book for CHAPTER <N> headings",
        metadata={"count": count},
    )


@dg.asset_check(asset=book_chapters)
def chapters_sequential(
    _: dg.AssetCheckExecutionContext, book_chapters: dict[int, list[str]]
) -> dg.AssetCheckResult:
    """Check that chapters are numbered 1..N without gaps.

    Also reports chapters without any content, which would indicate two
    headings directly after each other.
    """
    indices = sorted(chapter for chapter in book_chapters if chapter > 0)
    passed = indices == list(range(1, len(indices) + 1))

    empty_chapters = [chapter for chapter in indices if not book_chapters[chapter]]

    return dg.AssetCheckResult(
        passed=passed,
        description=f"All {len(indices)} chapters are sequential"
        if passed
        else f"Chapter indices are not sequential: {indices}",
        metadata={"count": len(indices), "empty_chapters": empty_chapters},
    )


# ==============================================================================
# Themes Domain: War or peace classification per chapter
# ==============================================================================


@dg.asset
def chapter_themes(
    context: dg.AssetExecutionContext,
    theme_db: ThemeDB,
    book_chapters: dict[int, list[str]],
    war_terms: list[str],
    peace_terms: list[str],
) -> None:
    """Classify each chapter by war and peace term density and store in SQLite.

    Table: chapter_theme (chapter, label, war_density, peace_density, token_count)
    """
    themes = classify_chapters(book_chapters, war_terms, peace_terms)

    for line in format_themes(themes):
        context.log.info(line)

    theme_db.replace_chapter_themes(themes)
    context.log.info(f"Stored {len(themes)} chapter themes to {theme_db.db_path}")


@dg.asset_check(asset=chapter_themes)
def chapter_themes_stored_correctly(
    _: dg.AssetCheckExecutionContext, theme_db: ThemeDB
) -> dg.AssetCheckResult:
    """Check that chapter themes were stored with valid labels and densities."""
    placeholders = ", ".join("?" for label in THEME_LABELS)

    with theme_db.get_connection() as conn:
        cursor = conn.execute("SELECT COUNT(*) FROM chapter_theme")
        total_chapters = cursor.fetchone()[0]

        cursor = conn.execute(
            f"SELECT COUNT(*) FROM chapter_theme WHERE label NOT IN ({placeholders})",
            THEME_LABELS,
        )
        invalid_labels = cursor.fetchone()[0]

        cursor = conn.execute(
            "SELECT COUNT(*) FROM chapter_theme WHERE war_density < 0 OR peace_density < 0"
        )
        negative_densities = cursor.fetchone()[0]

        cursor = conn.execute(
            "SELECT COUNT(*) FROM chapter_theme WHERE label = ?", (WAR_RELATED,)
        )
        war_chapters = cursor.fetchone()[0]

    passed = invalid_labels == 0 and negative_densities == 0

    issues = []
    if invalid_labels:
        issues.append(f"{invalid_labels} chapters with invalid labels")
    if negative_densities:
        issues.append(f"{negative_densities} chapters with negative densities")

    return dg.AssetCheckResult(
        passed=passed,
        description=f"Stored {total_chapters} chapters ({war_chapters} war-related)"
        if passed
        else "; ".join(issues),
        metadata={
            "total_chapters": total_chapters,
            "war_chapters": war_chapters,
            "peace_chapters": total_chapters - war_chapters,
            "invalid_labels": invalid_labels,
            "negative_densities": negative_densities,
        },
    )


@dg.asset
def chapter_term_counts(
    context: dg.AssetExecutionContext,
    theme_db: ThemeDB,
    book_chapters: dict[int, list[str]],
    war_terms: list[str],
    peace_terms: list[str],
) -> None:
    """Count every war and peace term per chapter and store in SQLite.

    Table: chapter_term_count (chapter, theme, term, count)
    """
    term_counts = count_chapter_terms(book_chapters, war_terms, "war")
    term_counts += count_chapter_terms(book_chapters, peace_terms, "peace")
    context.log.info(f"Found {len(term_counts)} chapter-term pairs")

    theme_db.replace_chapter_term_counts(term_counts)
    context.log.info(f"Stored term counts to {theme_db.db_path}")
