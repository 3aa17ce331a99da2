# Core, editor-independent text tooling for SAPF sources.
# Everything in this package is a pure function of its text input (plus injected
# configuration); editor state such as the REPL process or the active keyword
# index lives in sapf_lsp.session.Session.
#
# Offsets are 0-based character offsets into the full document text.

from sapf.types.span import TextSpan
from sapf.types.function_entry import FunctionEntry
from sapf.types.catalog import Catalog
from sapf.text.block_finder import BlockPolicy, locate_block, find_block, current_line, current_paragraph
from sapf.text.formatter import format_code, validate_code
from sapf.catalog.description import split_description
from sapf.catalog.help_parser import parse_help_output
from sapf.catalog.keyword_index import KeywordIndex

__all__ = [
    "TextSpan",
    "FunctionEntry",
    "Catalog",
    "BlockPolicy",
    "locate_block",
    "find_block",
    "current_line",
    "current_paragraph",
    "format_code",
    "validate_code",
    "split_description",
    "parse_help_output",
    "KeywordIndex",
]
