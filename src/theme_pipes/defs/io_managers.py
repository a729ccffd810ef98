from pathlib import Path

import dagster as dg

from theme_pipes.load import read_tokens, write_tokens


class TokenListIOManager(dg.ConfigurableIOManager):
    """I/O Manager that stores token sequences as local text files.

    Each asset is stored as {storage_dir}/{asset_name}.txt with one token
    per line, which doubles as a human readable dump of the tokenizer output.
    Defaults to XDG_DATA_HOME/theme-pipes/tokens.
    """

    storage_dir: str

    def _get_path(self, context: dg.OutputContext | dg.InputContext) -> Path:
        """Get file path for a token list asset."""
        name = context.asset_key.path[-1]
        return Path(self.storage_dir) / f"{name}.txt"

    def handle_output(self, context: dg.OutputContext, obj: list[str]):
        """Save tokens to file."""
        path = write_tokens(obj, self._get_path(context))
        context.log.info(f"Stored {len(obj)} tokens at {path}")

    def load_input(self, context: dg.InputContext) -> list[str]:
        """Load tokens from file."""
        path = self._get_path(context)

        if not path.exists():
            raise FileNotFoundError(
                f"Token file not found: {path}. "
                "Materialize the asset first."
            )

        context.log.info(f"Loaded tokens from {path}")
        return read_tokens(path)
