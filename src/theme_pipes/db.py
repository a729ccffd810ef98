import sqlite3
from pathlib import Path

from theme_pipes.models import ChapterTermCount, ChapterTheme

CHAPTER_THEME_TABLE = """
    CREATE TABLE IF NOT EXISTS chapter_theme (
        chapter INTEGER PRIMARY KEY NOT NULL,
        label TEXT NOT NULL,
        war_density REAL NOT NULL,
        peace_density REAL NOT NULL,
        token_count INTEGER NOT NULL
    )
"""

CHAPTER_TERM_COUNT_TABLE = """
    CREATE TABLE IF NOT EXISTS chapter_term_count (
        chapter INTEGER NOT NULL,
        theme TEXT NOT NULL,
        term TEXT NOT NULL,
        count INTEGER NOT NULL,
        PRIMARY KEY (chapter, theme, term)
    )
"""


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Get a connection to the database.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(path)


def ensure_chapter_theme_table(db_path: str | Path) -> None:
    """Ensure the chapter_theme table exists with the correct schema.

    Args:
        db_path: Path to the SQLite database file
    """
    with get_connection(db_path) as conn:
        conn.execute(CHAPTER_THEME_TABLE)
        conn.commit()


def replace_chapter_themes(
    db_path: str | Path, themes: list[ChapterTheme]
) -> None:
    """Replace all chapter classifications in the database.

    Args:
        db_path: Path to the SQLite database file
        themes: List of ChapterTheme objects

    This atomically replaces the entire table contents.
    """
    ensure_chapter_theme_table(db_path)

    with get_connection(db_path) as conn:
        conn.execute("DELETE FROM chapter_theme")
        conn.executemany(
            """INSERT INTO chapter_theme
               (chapter, label, war_density, peace_density, token_count)
               VALUES (?, ?, ?, ?, ?)""",
            [
                (t.chapter, t.label, t.war_density, t.peace_density, t.token_count)
                for t in themes
            ],
        )
        conn.commit()


def ensure_chapter_term_count_table(db_path: str | Path) -> None:
    """Ensure the chapter_term_count table exists with the correct schema.

    Args:
        db_path: Path to the SQLite database file
    """
    with get_connection(db_path) as conn:
        conn.execute(CHAPTER_TERM_COUNT_TABLE)
        conn.commit()


def replace_chapter_term_counts(
    db_path: str | Path, term_counts: list[ChapterTermCount]
) -> None:
    """Replace all per-chapter term counts in the database.

    Args:
        db_path: Path to the SQLite database file
        term_counts: List of ChapterTermCount objects for both term lists

    This atomically replaces the entire table contents.
    """
    ensure_chapter_term_count_table(db_path)

    with get_connection(db_path) as conn:
        conn.execute("DELETE FROM chapter_term_count")
        conn.executemany(
            "INSERT INTO chapter_term_count (chapter, theme, term, count) VALUES (?, ?, ?, ?)",
            [(tc.chapter, tc.theme, tc.term, tc.count) for tc in term_counts],
        )
        conn.commit()


def read_chapter_themes(db_path: str | Path) -> list[ChapterTheme]:
    """Read all chapter classifications, ordered by chapter.

    Args:
        db_path: Path to the SQLite database file
    """
    ensure_chapter_theme_table(db_path)

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """SELECT chapter, label, war_density, peace_density, token_count
               FROM chapter_theme ORDER BY chapter"""
        )
        return [ChapterTheme(*row) for row in cursor.fetchall()]
