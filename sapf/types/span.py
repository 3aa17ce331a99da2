from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TextSpan:
    """A piece of document text and the offsets it was taken from.

    For bracket blocks `text` is the inner text while the offsets point at the
    open and close brackets themselves. For line/selection spans the offsets
    delimit `text`'s source (before trimming).
    """
    text: str
    start_offset: int
    end_offset: int
