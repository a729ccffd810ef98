import logging
import string
from collections.abc import Iterable

from theme_pipes.models import (
    PEACE_RELATED,
    WAR_RELATED,
    ChapterTermCount,
    ChapterTheme,
)
from theme_pipes.statistics import calculate_density, count_occurrences

logger = logging.getLogger(__name__)

# Heading word that starts a new chapter in the book, e.g. "CHAPTER 12"
MARKER_WORD = "CHAPTER"
MARKER_PREFIX = MARKER_WORD + "_"

DIGITS = frozenset(string.digits)
WORD_CHARACTERS = frozenset(string.ascii_letters + string.digits + "_")


def rewrite_chapter_markers(text: str) -> str:
    """Join chapter headings into single marker words.

    Every "CHAPTER" followed by one or more spaces and a decimal number is
    rewritten to "CHAPTER_<number>", so the heading survives whitespace
    splitting as one token. Headings without a number are left untouched.

    Examples:
        >>> rewrite_chapter_markers("CHAPTER 1 Well, Prince")
        'CHAPTER_1 Well, Prince'
        >>> rewrite_chapter_markers("CHAPTER ONE")
        'CHAPTER ONE'
    """
    pieces: list[str] = []
    start = 0
    position = text.find(MARKER_WORD)

    while position != -1:
        spaces_end = position + len(MARKER_WORD)
        while spaces_end < len(text) and text[spaces_end] == " ":
            spaces_end += 1

        digits_end = spaces_end
        while digits_end < len(text) and text[digits_end] in DIGITS:
            digits_end += 1

        has_spaces = spaces_end > position + len(MARKER_WORD)
        has_digits = digits_end > spaces_end

        if has_spaces and has_digits:
            pieces.append(text[start:position])
            pieces.append(MARKER_PREFIX + text[spaces_end:digits_end])
            start = digits_end
            position = text.find(MARKER_WORD, digits_end)
        else:
            position = text.find(MARKER_WORD, position + 1)

    pieces.append(text[start:])
    return "".join(pieces)


def strip_word(word: str) -> str:
    """Keep only ASCII letters, digits and underscores of a word.

    Examples:
        >>> strip_word('"Well,')
        'Well'
        >>> strip_word("—")
        ''
    """
    return "".join(c for c in word if c in WORD_CHARACTERS)


def tokenize(text: str | None) -> list[str]:
    """Split raw text into word tokens.

    Chapter headings are rewritten to marker tokens first, then the text is
    split on whitespace and every word is stripped of punctuation. Words
    that end up empty are dropped. Casing is preserved.

    Args:
        text: The raw text, or None if the source was unavailable

    Returns:
        Tokens in the order they appear in the text

    Examples:
        >>> tokenize("CHAPTER 1 The Quick Brown Fox")
        ['CHAPTER_1', 'The', 'Quick', 'Brown', 'Fox']
        >>> tokenize(None)
        []
    """
    if text is None:
        return []

    words = rewrite_chapter_markers(text).split()
    stripped = (strip_word(word) for word in words)
    return [token for token in stripped if token]


def is_chapter_marker(token: str) -> bool:
    """Check whether a whole token is a chapter marker like "CHAPTER_12"."""
    number = token[len(MARKER_PREFIX):]
    return (
        token.startswith(MARKER_PREFIX)
        and len(number) > 0
        and all(c in DIGITS for c in number)
    )


def split_by_chapter(tokens: list[str]) -> dict[int, list[str]]:
    """Group tokens into chapters using the marker tokens as delimiters.

    The chapter index starts at 0 and is incremented by each marker. Marker
    tokens are not part of any chapter. Content before the first marker is
    kept under index 0, but if the text has no markers at all the result is
    empty.

    Args:
        tokens: Tokens as produced by tokenize()

    Returns:
        Dictionary mapping chapter index to its tokens, in ascending order

    Examples:
        >>> split_by_chapter(["CHAPTER_1", "war", "CHAPTER_2", "peace"])
        {1: ['war'], 2: ['peace']}
        >>> split_by_chapter(["no", "markers"])
        {}
    """
    chapters: dict[int, list[str]] = {}
    chapter = 0

    for token in tokens:
        if is_chapter_marker(token):
            chapter += 1
            # A chapter exists from its marker on, even if nothing follows
            chapters[chapter] = []
        else:
            chapters.setdefault(chapter, []).append(token)

    if chapter == 0:
        chapters.pop(0, None)

    return chapters


def filter_words(filter_terms: Iterable[str], words: list[str]) -> list[str]:
    """Keep the words that are one of the filter terms.

    Order and duplicates are preserved, so counting the result gives the
    per-term counts within the words. Matching is exact.

    Examples:
        >>> filter_words(["apple", "banana"], ["apple", "orange", "banana", "apple"])
        ['apple', 'banana', 'apple']
    """
    terms = set(filter_terms)
    return [word for word in words if word in terms]


def classify(war_density: float, peace_density: float) -> str:
    """Label a chapter by comparing its war and peace densities.

    War wins only on a strictly greater density; ties go to peace.
    """
    if war_density > peace_density:
        return WAR_RELATED
    return PEACE_RELATED


def classify_chapters(
    chapters: dict[int, list[str]],
    war_terms: list[str],
    peace_terms: list[str],
) -> list[ChapterTheme]:
    """Classify every chapter as war or peace related.

    Front matter (chapter 0) is never classified.

    Args:
        chapters: Chapter index to tokens, from split_by_chapter()
        war_terms: Tokenized war term list
        peace_terms: Tokenized peace term list

    Returns:
        List of ChapterTheme objects in ascending chapter order
    """
    war_filter = set(war_terms)
    peace_filter = set(peace_terms)

    themes: list[ChapterTheme] = []

    for chapter in sorted(chapters):
        if chapter == 0:
            continue

        tokens = chapters[chapter]
        total = len(tokens)

        war_counts = count_occurrences(filter_words(war_filter, tokens))
        peace_counts = count_occurrences(filter_words(peace_filter, tokens))

        war_density = calculate_density(war_counts, total)
        peace_density = calculate_density(peace_counts, total)

        themes.append(
            ChapterTheme(
                chapter=chapter,
                label=classify(war_density, peace_density),
                war_density=war_density,
                peace_density=peace_density,
                token_count=total,
            )
        )

    war_count = sum(1 for theme in themes if theme.label == WAR_RELATED)
    logger.info(
        f"Classified {len(themes)} chapters: {war_count} war-related, "
        f"{len(themes) - war_count} peace-related"
    )
    return themes


def classify_book(
    book: str | None,
    war_terms: str | None,
    peace_terms: str | None,
) -> list[ChapterTheme]:
    """Run the whole pipeline over a book and its two term lists.

    All three inputs are tokenized the same way. The term lists are used
    as a whole for every chapter and are never split into chapters.

    Args:
        book: Raw book text, or None if unavailable
        war_terms: Raw war term list, or None if unavailable
        peace_terms: Raw peace term list, or None if unavailable

    Returns:
        List of ChapterTheme objects in ascending chapter order

    Examples:
        >>> themes = classify_book(
        ...     "CHAPTER 1 soldiers fought battle CHAPTER 2 love and harmony",
        ...     "fought battle",
        ...     "love harmony",
        ... )
        >>> format_themes(themes)
        ['Chapter 1: war-related', 'Chapter 2: peace-related']
    """
    chapters = split_by_chapter(tokenize(book))
    logger.info(f"Split book into {len(chapters)} chapters")

    return classify_chapters(chapters, tokenize(war_terms), tokenize(peace_terms))


def count_chapter_terms(
    chapters: dict[int, list[str]],
    terms: list[str],
    theme: str,
) -> list[ChapterTermCount]:
    """Count each term of a term list within every chapter.

    Only terms that occur in a chapter are reported. Front matter
    (chapter 0) is skipped.

    Args:
        chapters: Chapter index to tokens, from split_by_chapter()
        terms: Tokenized term list
        theme: Name of the term list, e.g. "war" or "peace"

    Returns:
        List of ChapterTermCount objects ordered by chapter and term
    """
    term_filter = set(terms)
    term_counts: list[ChapterTermCount] = []

    for chapter in sorted(chapters):
        if chapter == 0:
            continue

        counts = count_occurrences(filter_words(term_filter, chapters[chapter]))

        for term, count in sorted(counts.items()):
            term_counts.append(
                ChapterTermCount(chapter=chapter, theme=theme, term=term, count=count)
            )

    return term_counts


def format_themes(themes: list[ChapterTheme]) -> list[str]:
    """Format classified chapters as "Chapter <N>: <label>" lines."""
    return [f"Chapter {theme.chapter}: {theme.label}" for theme in themes]
