from __future__ import annotations

"""
Bracket pair kinds used to delimit evaluation blocks.

The set of kinds is closed: round, square and curly. Unknown kinds never raise
into callers; `get_bracket_pair` answers None and `resolve_bracket_kind` falls
back to the default kind with a warning.
"""

import logging
from typing import Dict, NamedTuple, Optional

logger = logging.getLogger(__name__)


class BracketPair(NamedTuple):
    open: str
    close: str


BRACKET_PAIRS: Dict[str, BracketPair] = {
    "round": BracketPair("(", ")"),
    "square": BracketPair("[", "]"),
    "curly": BracketPair("{", "}"),
}

DEFAULT_BRACKET_KIND = "round"

OPENING_BRACKETS = frozenset(p.open for p in BRACKET_PAIRS.values())
CLOSING_BRACKETS = frozenset(p.close for p in BRACKET_PAIRS.values())
MATCHING_CLOSE: Dict[str, str] = {p.open: p.close for p in BRACKET_PAIRS.values()}

for _kind, _pair in BRACKET_PAIRS.items():
    assert len(_pair.open) == 1 and len(_pair.close) == 1 and _pair.open != _pair.close, _kind


def get_bracket_pair(kind: Optional[str]) -> Optional[BracketPair]:
    if not isinstance(kind, str):
        return None
    return BRACKET_PAIRS.get(kind)


def resolve_bracket_kind(kind: Optional[str]) -> str:
    """Return `kind` if it names a bracket pair, else the default kind.

    An unknown value is logged as a warning; it is the caller's job to show
    the user a notification if one is wanted.
    """
    if isinstance(kind, str) and kind in BRACKET_PAIRS:
        return kind
    logger.warning("Invalid bracket type: %r, using %r", kind, DEFAULT_BRACKET_KIND)
    return DEFAULT_BRACKET_KIND
