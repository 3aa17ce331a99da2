from __future__ import annotations

"""
Indentation formatting and bracket validation for SAPF sources.

SAPF is a stack language: most code sits at the base level and only text
inside brackets is indented. Indentation is derived purely from bracket
counts, so formatting is idempotent. Brackets are counted lexically,
including inside string literals.
"""

from dataclasses import dataclass
from typing import List

from sapf.brackets import CLOSING_BRACKETS, MATCHING_CLOSE, OPENING_BRACKETS
from sapf.config import DEFAULT_INDENT_SIZE

COMMENT_MARKER = ";;"


def _normalize(line: str) -> str:
    # collapse internal whitespace runs, trim both ends
    return " ".join(line.split())


def format_code(code: str, indent_size: int = DEFAULT_INDENT_SIZE) -> str:
    formatted: List[str] = []
    indent_level = 0

    for line in code.split("\n"):
        cleaned = _normalize(line)
        if not cleaned:
            formatted.append("")
            continue

        # comments sit at the current level and never move it
        if cleaned.startswith(COMMENT_MARKER):
            formatted.append(" " * (indent_level * indent_size) + cleaned)
            continue

        line_indent = indent_level
        if cleaned[0] in CLOSING_BRACKETS:
            line_indent = max(0, indent_level - 1)

        opening = sum(1 for ch in cleaned if ch in OPENING_BRACKETS)
        closing = sum(1 for ch in cleaned if ch in CLOSING_BRACKETS)

        formatted.append(" " * (line_indent * indent_size) + cleaned)
        indent_level = max(0, indent_level + opening - closing)

    return "\n".join(formatted)


@dataclass(frozen=True)
class BracketIssue:
    line: int  # 0-based
    col: int  # 0-based
    message: str


def validate_code(code: str) -> List[BracketIssue]:
    """Report unmatched, mismatched and unclosed brackets of every kind."""
    issues: List[BracketIssue] = []
    stack: List[tuple[str, int, int]] = []

    for line_no, line in enumerate(code.split("\n")):
        for col, ch in enumerate(line):
            if ch in OPENING_BRACKETS:
                stack.append((ch, line_no, col))
            elif ch in CLOSING_BRACKETS:
                if not stack:
                    issues.append(BracketIssue(line_no, col, f"Unmatched closing bracket '{ch}' at line {line_no + 1}"))
                    continue
                open_ch, _, _ = stack.pop()
                expected = MATCHING_CLOSE[open_ch]
                if ch != expected:
                    issues.append(BracketIssue(
                        line_no, col,
                        f"Mismatched bracket: expected '{expected}' but found '{ch}' at line {line_no + 1}",
                    ))

    for open_ch, line_no, col in stack:
        issues.append(BracketIssue(line_no, col, f"Unclosed bracket '{open_ch}' at line {line_no + 1}"))

    return issues
