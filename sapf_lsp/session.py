from __future__ import annotations

"""
Editor session state: configuration, the REPL process and the active
keyword index. One Session is owned by the language server and passed to
whatever needs it; the core `sapf` functions never see it.
"""

import logging
from typing import Callable, Optional

from sapf.catalog.generator import DEFAULT_TIMEOUT, generate_catalog
from sapf.catalog.keyword_index import KeywordIndex
from sapf.catalog.storage import load_keyword_index, save_language_data
from sapf.config import SapfConfig
from sapf.text.block_finder import (
    BlockPolicy,
    Selection,
    current_line,
    current_paragraph,
    locate_block,
    selection_span,
)
from sapf.types.catalog import Catalog
from sapf.types.span import TextSpan
from sapf_lsp.repl import ReplManager

logger = logging.getLogger(__name__)

# evaluation command -> how to pick the text at the cursor
EVAL_MODES = ("block", "inner_block", "line", "paragraph")


class Session:
    def __init__(self, config: SapfConfig,
                 on_output: Optional[Callable[[str], None]] = None,
                 on_warning: Optional[Callable[[str], None]] = None):
        self.config = config
        self.repl = ReplManager(config.binary_path, config.prelude_path,
                                on_output=on_output, on_warning=on_warning)
        self.index = KeywordIndex()

    # --- lifecycle ---
    def start(self) -> "Session":
        self.index = load_keyword_index(self.config.local_language_path)
        logger.info("loaded %d function definitions", len(self.index))
        return self

    def close(self) -> None:
        self.repl.dispose()

    def configure(self, config: SapfConfig) -> None:
        """Apply new settings; a changed binary or prelude restarts the REPL lazily."""
        old, self.config = self.config, config
        if (old.binary_path, old.prelude_path) != (config.binary_path, config.prelude_path):
            self.repl.dispose()
            self.repl.binary_path = config.binary_path
            self.repl.prelude_path = config.prelude_path
        if old.storage_dir != config.storage_dir:
            self.start()

    # --- evaluation ---
    def select(self, mode: str, text: str, cursor: int, selection: Optional[Selection] = None) -> TextSpan:
        # an explicit selection is always sent as-is
        selected = selection_span(text, selection)
        if selected is not None:
            return selected
        if mode == "block":
            return locate_block(text, cursor, self.config.code_block_brackets,
                                BlockPolicy.OUTERMOST, selection)
        if mode == "inner_block":
            return locate_block(text, cursor, self.config.code_block_brackets,
                                BlockPolicy.INNERMOST, selection)
        if mode == "paragraph":
            return current_paragraph(text, cursor, selection)
        if mode == "line":
            return current_line(text, cursor, selection)
        raise ValueError(f"Unknown evaluation mode: {mode}")

    def evaluate(self, span: TextSpan) -> None:
        self.repl.send(span.text)

    # --- catalog ---
    def regenerate(self, timeout: float = DEFAULT_TIMEOUT) -> Catalog:
        """Rebuild the catalog from the sapf binary and make it active.

        Any failure propagates and the previous index stays in place.
        """
        catalog = generate_catalog(self.config.binary_path, self.config.prelude_path or None, timeout)
        index = KeywordIndex.from_catalog(catalog)
        save_language_data(catalog, self.config.local_language_path)
        self.index = index
        return catalog

    def remove_local_definitions(self) -> bool:
        """Delete the generated catalog and go back to the bundled one.

        Returns False when there was no local catalog to remove.
        """
        path = self.config.local_language_path
        if not path.is_file():
            return False
        path.unlink()
        self.index = load_keyword_index(None)
        return True
