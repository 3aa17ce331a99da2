from __future__ import annotations

"""
Parser for the output of sapf's `helpall` command.

The output has an arbitrary preamble, a `BUILT IN FUNCTIONS` marker line, and
then `*** category ***` banners each followed by one line per function:

     add (a b --> c) adds two numbers
     dup @k (a --> a a) duplicate the top of the stack
           + (a b --> c) operator spelling of add
     ramp (n --> out)
     pi - the constant pi

Function lines are matched against ENTRY_RULES in order; the first rule that
matches wins. Lines matching no rule are skipped. The parser never raises on
content: output without a marker simply yields an empty Catalog.
"""

import logging
import re
from typing import Callable, Iterable, NamedTuple, Optional, Pattern

from sapf.catalog.description import entry_from_raw
from sapf.types.catalog import Catalog

logger = logging.getLogger(__name__)

LISTING_MARKER = "BUILT IN FUNCTIONS"
AUTOMAPPING_LINE = "Argument Automapping"

CATEGORY_RE = re.compile(r"^\s*\*\*\* (?P<name>.+?) \*\*\*\s*$")

_NAME = r"(?P<name>![\w?!]*|\w[\w?!]*)"
_SIGNATURE = r"(?P<sig>(?:@[a-z]+\s*)?\([^)]*-->[^)]*\))"


class EntryRule(NamedTuple):
    name: str
    pattern: Pattern[str]
    # match -> raw description string
    compose: Callable[["re.Match[str]"], str]


def _sig_and_desc(m: "re.Match[str]") -> str:
    return f"{m.group('sig')} {m.group('desc')}"


ENTRY_RULES = (
    EntryRule(
        "primary",
        re.compile(rf"^ {_NAME} {_SIGNATURE} (?P<desc>.+)$"),
        _sig_and_desc,
    ),
    EntryRule(
        "operator",
        re.compile(rf"^ {{6,}}(?P<name>\S+) {_SIGNATURE} (?P<desc>.+)$"),
        _sig_and_desc,
    ),
    EntryRule(
        "signature_only",
        re.compile(rf"^ {_NAME} {_SIGNATURE}\s*$"),
        lambda m: m.group("sig"),
    ),
    EntryRule(
        "plain",
        re.compile(rf"^ {_NAME} - (?P<desc>.+)$"),
        lambda m: m.group("desc"),
    ),
)


def match_entry_line(line: str) -> Optional[tuple[str, str]]:
    """Return (function name, raw description) for a function line, or None."""
    if line.lstrip().startswith(AUTOMAPPING_LINE):
        return None
    for rule in ENTRY_RULES:
        m = rule.pattern.match(line)
        if m:
            return m.group("name"), rule.compose(m).strip()
    return None


def parse_help_lines(lines: Iterable[str]) -> Catalog:
    catalog = Catalog()
    listing = False
    category: Optional[str] = None

    for line in lines:
        line = line.rstrip("\r\n")

        if not listing:
            if LISTING_MARKER in line:
                listing = True
            continue

        # a repeated marker is harmless
        if LISTING_MARKER in line:
            continue

        m = CATEGORY_RE.match(line)
        if m:
            category = m.group("name")
            catalog.category(category)
            continue

        if category is None or not line.strip():
            continue

        found = match_entry_line(line)
        if found is None:
            logger.debug("skipping help line %r", line)
            continue
        name, raw = found
        catalog.add(entry_from_raw(name, raw, category))

    if not listing:
        logger.warning("no %r marker found in help output; catalog is empty", LISTING_MARKER)
    return catalog


def parse_help_output(raw_help_text: str) -> Catalog:
    return parse_help_lines(raw_help_text.splitlines())
