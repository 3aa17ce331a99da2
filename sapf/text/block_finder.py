from __future__ import annotations

"""
Locating the piece of a document an evaluation command should send to sapf.

Blocks are found with a single left-to-right scan keeping an explicit stack of
(open offset, depth) pairs for the configured bracket kind. A closed pair is a
candidate when it strictly contains the cursor (open < cursor < close); a
cursor sitting on a bracket is outside that pair. Unmatched closing brackets
are ignored.

Two selection policies are supported:

- OUTERMOST: the candidate with the smallest open offset.
- INNERMOST: the candidate pushed at the greatest depth; ties go to the one
  found last.
"""

from enum import Enum
from typing import Iterator, List, Optional, Tuple

from sapf.brackets import DEFAULT_BRACKET_KIND, BracketPair, get_bracket_pair
from sapf.text.positions import line_bounds
from sapf.types.span import TextSpan

Selection = Tuple[int, int]


class BlockPolicy(Enum):
    OUTERMOST = "outermost"
    INNERMOST = "innermost"


def _iter_candidates(text: str, cursor: int, pair: BracketPair) -> Iterator[Tuple[int, int, int]]:
    """Yield (open, close, depth) for every closed pair containing the cursor."""
    stack: List[Tuple[int, int]] = []
    for i, ch in enumerate(text):
        if ch == pair.open:
            stack.append((i, len(stack)))
        elif ch == pair.close and stack:
            open_offset, depth = stack.pop()
            if open_offset < cursor < i:
                yield open_offset, i, depth


def find_block(text: str, cursor: int, kind: str = DEFAULT_BRACKET_KIND,
               policy: BlockPolicy = BlockPolicy.OUTERMOST) -> Optional[TextSpan]:
    """The enclosing block per `policy`, or None (also for an unknown kind)."""
    pair = get_bracket_pair(kind)
    if pair is None:
        return None

    best: Optional[Tuple[int, int, int]] = None
    for candidate in _iter_candidates(text, cursor, pair):
        if best is None:
            best = candidate
        elif policy is BlockPolicy.OUTERMOST:
            if candidate[0] < best[0]:
                best = candidate
        elif candidate[2] >= best[2]:
            best = candidate

    if best is None:
        return None
    start, end, _ = best
    return TextSpan(text[start + 1:end], start, end)


def selection_span(text: str, selection: Optional[Selection]) -> Optional[TextSpan]:
    if selection is None:
        return None
    start, end = sorted(selection)
    start, end = max(0, start), min(len(text), end)
    if start >= end:
        return None
    return TextSpan(text[start:end], start, end)


def current_line(text: str, cursor: int, selection: Optional[Selection] = None) -> TextSpan:
    """The non-empty selection, else the trimmed line holding the cursor."""
    selected = selection_span(text, selection)
    if selected is not None:
        return selected
    start, end = line_bounds(text, cursor)
    return TextSpan(text[start:end].strip(), start, end)


def locate_block(text: str, cursor: int, kind: str = DEFAULT_BRACKET_KIND,
                 policy: BlockPolicy = BlockPolicy.OUTERMOST,
                 selection: Optional[Selection] = None) -> TextSpan:
    block = find_block(text, cursor, kind, policy)
    if block is not None:
        return block
    return current_line(text, cursor, selection)


def current_paragraph(text: str, cursor: int, selection: Optional[Selection] = None) -> TextSpan:
    """The selection, else the run of non-blank lines around the cursor.

    On a blank line this is the (empty) current line.
    """
    selected = selection_span(text, selection)
    if selected is not None:
        return selected

    start, end = line_bounds(text, cursor)
    if not text[start:end].strip():
        return current_line(text, cursor)

    # walk up
    while start > 0:
        prev_start, prev_end = line_bounds(text, start - 1)
        if not text[prev_start:prev_end].strip():
            break
        start = prev_start
    # walk down
    while end < len(text):
        next_nl = text.find("\n", end)
        if next_nl == -1:
            break
        next_start, next_end = line_bounds(text, next_nl + 1)
        if not text[next_start:next_end].strip():
            break
        end = next_end

    return TextSpan(text[start:end].strip(), start, end)
