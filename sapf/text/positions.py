from __future__ import annotations
from typing import Tuple


def position_at(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def offset_at(text: str, line: int, character: int) -> int:
    """Inverse of position_at; positions past the end of a line clamp to it."""
    start = 0
    for _ in range(max(0, line)):
        nl = text.find("\n", start)
        if nl == -1:
            return len(text)
        start = nl + 1
    end = text.find("\n", start)
    if end == -1:
        end = len(text)
    return min(start + max(0, character), end)


def line_bounds(text: str, offset: int) -> Tuple[int, int]:
    """Start and end offsets of the line holding `offset`, newline excluded."""
    offset = max(0, min(offset, len(text)))
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end == -1:
        end = len(text)
    if end > start and text[end - 1] == "\r":
        end -= 1
    return start, end
