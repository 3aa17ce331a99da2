from __future__ import annotations

"""
Splitting of raw function descriptions.

A raw description, as stored in catalog files, reads

    [@<tag>] [(<inputs> --> <outputs>)] <free text>

and is split by three scanners applied in order. Each optional scanner either
consumes its group and returns the new position, or returns None and leaves
the position untouched. Whatever remains, trimmed, is the description.

The same rule is used when parsing fresh help output and when loading a
catalog off disk, so both produce identical FunctionEntry values.
"""

from typing import NamedTuple, Optional, Tuple

from sapf.types.function_entry import FunctionEntry

ARROW = "-->"


class DescriptionParts(NamedTuple):
    special: Optional[str]
    signature: Optional[str]
    description: str


def _skip_spaces(raw: str, pos: int) -> int:
    while pos < len(raw) and raw[pos].isspace():
        pos += 1
    return pos


def scan_special(raw: str, pos: int = 0) -> Optional[Tuple[str, int]]:
    """`@` followed by one or more lower-case ASCII letters."""
    if pos >= len(raw) or raw[pos] != "@":
        return None
    end = pos + 1
    while end < len(raw) and "a" <= raw[end] <= "z":
        end += 1
    if end == pos + 1:
        return None
    return raw[pos + 1:end], _skip_spaces(raw, end)


def scan_signature(raw: str, pos: int = 0) -> Optional[Tuple[str, int]]:
    """`(` ... `-->` ... `)` with no `)` before the closing one."""
    if pos >= len(raw) or raw[pos] != "(":
        return None
    close = raw.find(")", pos + 1)
    if close == -1:
        return None
    if ARROW not in raw[pos + 1:close]:
        return None
    return raw[pos:close + 1], _skip_spaces(raw, close + 1)


def split_description(raw: str) -> DescriptionParts:
    pos = 0
    special = signature = None

    found = scan_special(raw, pos)
    if found is not None:
        special, pos = found

    found = scan_signature(raw, pos)
    if found is not None:
        signature, pos = found

    return DescriptionParts(special, signature, raw[pos:].strip())


def entry_from_raw(name: str, raw: str, category: str) -> FunctionEntry:
    special, signature, description = split_description(raw)
    return FunctionEntry(
        name=name,
        signature=signature,
        special=special,
        description=description,
        category=category,
    )
