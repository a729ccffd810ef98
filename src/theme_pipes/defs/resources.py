import dagster as dg

from theme_pipes import db
from theme_pipes.models import ChapterTermCount, ChapterTheme


class ThemeDB(dg.ConfigurableResource):
    """SQLite database resource for chapter classifications.

    Wraps pure Python db module with Dagster resource pattern.
    Defaults to XDG_DATA_HOME/theme-pipes/analytics.db.
    """

    db_path: str

    def get_connection(self):
        """Get a connection to the analytics database."""
        return db.get_connection(self.db_path)

    def replace_chapter_themes(self, themes: list[ChapterTheme]) -> None:
        """Replace all chapter classifications in the database."""
        db.replace_chapter_themes(self.db_path, themes)

    def replace_chapter_term_counts(self, term_counts: list[ChapterTermCount]) -> None:
        """Replace all per-chapter term counts in the database."""
        db.replace_chapter_term_counts(self.db_path, term_counts)

    def read_chapter_themes(self) -> list[ChapterTheme]:
        """Read all chapter classifications, ordered by chapter."""
        return db.read_chapter_themes(self.db_path)
