import dagster as dg
import pytest

from theme_pipes import db
from theme_pipes.defs.assets import (
    BookSourceConfig,
    PeaceTermsSourceConfig,
    WarTermsSourceConfig,
    book_chapters,
    book_text,
    book_tokens,
    chapter_term_counts,
    chapter_themes,
    peace_terms,
    peace_terms_text,
    war_terms,
    war_terms_text,
)
from theme_pipes.defs.io_managers import TokenListIOManager
from theme_pipes.defs.resources import ThemeDB
from theme_pipes.models import PEACE_RELATED, WAR_RELATED

ALL_ASSETS = [
    book_text,
    war_terms_text,
    peace_terms_text,
    book_tokens,
    war_terms,
    peace_terms,
    book_chapters,
    chapter_themes,
    chapter_term_counts,
]


@pytest.fixture
def sources(tmp_path):
    """Write a small book and both term lists to disk."""
    book = tmp_path / "book.txt"
    book.write_text(
        "The Project Gutenberg eBook\n\n"
        "CHAPTER 1\n\nThe soldiers fought a battle, and another battle.\n\n"
        "CHAPTER 2\n\nThere was love and harmony.\n",
        encoding="utf-8",
    )

    war = tmp_path / "war_terms.txt"
    war.write_text("battle fought\ncannon\n", encoding="utf-8")

    peace = tmp_path / "peace_terms.txt"
    peace.write_text("love\nharmony\n", encoding="utf-8")

    return book, war, peace


def materialize(tmp_path, book, war, peace):
    return dg.materialize(
        ALL_ASSETS,
        resources={
            "token_io": TokenListIOManager(storage_dir=str(tmp_path / "tokens")),
            "theme_db": ThemeDB(db_path=str(tmp_path / "analytics.db")),
        },
        run_config=dg.RunConfig(
            ops={
                "book_text": BookSourceConfig(location=str(book)),
                "war_terms_text": WarTermsSourceConfig(location=str(war)),
                "peace_terms_text": PeaceTermsSourceConfig(location=str(peace)),
            }
        ),
    )


def test_pipeline_classifies_chapters(tmp_path, sources):
    result = materialize(tmp_path, *sources)

    assert result.success

    themes = db.read_chapter_themes(tmp_path / "analytics.db")
    assert [(t.chapter, t.label) for t in themes] == [
        (1, WAR_RELATED),
        (2, PEACE_RELATED),
    ]
    assert themes[0].token_count == 8
    assert themes[0].war_density == pytest.approx(3 / 8)


def test_pipeline_keeps_front_matter_out_of_results(tmp_path, sources):
    result = materialize(tmp_path, *sources)

    chapters = result.output_for_node("book_chapters")
    assert chapters[0] == ["The", "Project", "Gutenberg", "eBook"]
    assert sorted(chapters) == [0, 1, 2]


def test_pipeline_stores_token_files(tmp_path, sources):
    materialize(tmp_path, *sources)

    tokens_dir = tmp_path / "tokens"
    book_tokens_file = (tokens_dir / "book_tokens.txt").read_text(encoding="utf-8")

    assert book_tokens_file.startswith("The\nProject\nGutenberg\neBook\nCHAPTER_1\n")
    assert (tokens_dir / "war_terms.txt").read_text(encoding="utf-8") == (
        "battle\nfought\ncannon\n"
    )


def test_pipeline_stores_term_counts(tmp_path, sources):
    materialize(tmp_path, *sources)

    with db.get_connection(tmp_path / "analytics.db") as conn:
        rows = conn.execute(
            "SELECT chapter, theme, term, count FROM chapter_term_count "
            "ORDER BY chapter, theme, term"
        ).fetchall()

    assert rows == [
        (1, "war", "battle", 2),
        (1, "war", "fought", 1),
        (2, "peace", "harmony", 1),
        (2, "peace", "love", 1),
    ]


def test_pipeline_without_book(tmp_path, sources):
    _, war, peace = sources

    result = materialize(tmp_path, tmp_path / "missing.txt", war, peace)

    assert result.success
    assert result.output_for_node("book_text") is None
    assert db.read_chapter_themes(tmp_path / "analytics.db") == []


def test_pipeline_without_term_lists(tmp_path, sources):
    book, _, _ = sources

    result = materialize(
        tmp_path, book, tmp_path / "missing_war.txt", tmp_path / "missing_peace.txt"
    )

    assert result.success
    themes = db.read_chapter_themes(tmp_path / "analytics.db")
    assert [t.label for t in themes] == [PEACE_RELATED, PEACE_RELATED]


def test_definitions_are_loadable():
    from theme_pipes.definitions import defs

    dg.Definitions.validate_loadable(defs)
