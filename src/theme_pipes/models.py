"""Data models for the Theme Pipes project.

This module contains dataclasses representing the pipeline results.
"""

from dataclasses import dataclass

WAR_RELATED = "war-related"
PEACE_RELATED = "peace-related"

THEME_LABELS = (WAR_RELATED, PEACE_RELATED)


@dataclass(frozen=True)
class ChapterTheme:
    """Thematic classification of a single chapter.

    Attributes:
        chapter: The 1-based chapter index
        label: Either "war-related" or "peace-related"
        war_density: Matched war terms divided by the chapter's token count
        peace_density: Matched peace terms divided by the chapter's token count
        token_count: Total number of tokens in the chapter
    """
    chapter: int
    label: str
    war_density: float
    peace_density: float
    token_count: int


@dataclass(frozen=True)
class ChapterTermCount:
    """Count of a single term within a chapter.

    Attributes:
        chapter: The 1-based chapter index
        theme: Which term list the term belongs to ("war" or "peace")
        term: The term, exactly as tokenized
        count: Number of occurrences in the chapter
    """
    chapter: int
    theme: str
    term: str
    count: int
