import dagster as dg

from theme_pipes.config import DB_PATH, TOKENS_DIR
from theme_pipes.defs import assets
from theme_pipes.defs.io_managers import TokenListIOManager
from theme_pipes.defs.resources import ThemeDB


def _load_definitions() -> dg.Definitions:
    """Load definitions with the token I/O manager and the SQLite resource."""
    return dg.Definitions(
        assets=dg.load_assets_from_modules([assets]),
        asset_checks=dg.load_asset_checks_from_modules([assets]),
        resources={
            "token_io": TokenListIOManager(storage_dir=str(TOKENS_DIR)),
            "theme_db": ThemeDB(db_path=str(DB_PATH)),
        },
    )


defs = _load_definitions()
