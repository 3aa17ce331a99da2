from __future__ import annotations

"""
A pygls-based Language Server for SAPF.

Features:
- Diagnostics: unmatched, mismatched and unclosed brackets
- Hover and completion from the function catalog (off | minimum | full)
- Whole-document formatting (indentation from bracket depth)
- Commands to evaluate the block/inner block/line/paragraph at the cursor in a
  sapf REPL, to send the fixed REPL commands, and to regenerate or remove the
  local function catalog

Note: We never evaluate buffers ourselves; evaluation means sending text to
the sapf process owned by the session.
"""

import logging
import re
import sys
from typing import Any, List, Optional, Sequence

from pygls.server import LanguageServer
from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeConfigurationParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentFormattingParams,
    Hover,
    HoverParams,
    InitializeParams,
    MarkupContent,
    MarkupKind,
    MessageType,
    Position,
    Range,
    TextEdit,
)

from sapf.catalog.keyword_index import KeywordIndex
from sapf.config import config_from_env
from sapf.errors import SapfError
from sapf.text.formatter import format_code, validate_code
from sapf.text.positions import offset_at, position_at
from sapf.types.function_entry import FunctionEntry
from sapf.types.span import TextSpan
from sapf_lsp.repl import STANDARD_COMMANDS
from sapf_lsp.session import Session

logger = logging.getLogger(__name__)

# Characters of a completable word
WORD_RE = re.compile(r"[\w$?!]+$")
COMPLETION_TRIGGER_CHARACTERS = list("abcdefghijklmnopqrstuvwxyz0123456789$?!")
# Token boundaries for hover; operators such as `+` are words here
WORD_BREAKS = " \t()[]{}\n\r"

EVAL_COMMANDS = {
    "sapf.evalBlock": "block",
    "sapf.evalInnerBlock": "inner_block",
    "sapf.evalLine": "line",
    "sapf.evalParagraph": "paragraph",
}


class SapfLanguageServer(LanguageServer):
    CMD_NAME = "sapf-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.session = Session(config_from_env(), on_output=self._repl_output, on_warning=self._repl_warning)

    def _repl_output(self, line: str) -> None:
        # called from the REPL reader thread
        self.loop.call_soon_threadsafe(self.show_message_log, line)

    def _repl_warning(self, message: str) -> None:
        self.loop.call_soon_threadsafe(self.show_message, message, MessageType.Warning)


ls = SapfLanguageServer()


# --- Lifecycle ---
@ls.feature("initialize")
def on_initialize(params: InitializeParams):
    session = ls.session
    session.configure(session.config.with_settings(_sapf_settings(params.initialization_options)))
    session.start()


@ls.feature("initialized")
def on_initialized(*_):
    for warning in ls.session.config.warnings:
        ls.show_message(warning, MessageType.Warning)


@ls.feature("shutdown")
def on_shutdown(*_):
    ls.session.close()
    return None


@ls.feature("workspace/didChangeConfiguration")
def did_change_configuration(params: DidChangeConfigurationParams):
    session = ls.session
    settings = _sapf_settings(params.settings)
    if not settings:
        return
    shown = len(session.config.warnings)
    session.configure(session.config.with_settings(settings))
    # earlier warnings were already shown
    for warning in session.config.warnings[shown:]:
        ls.show_message(warning, MessageType.Warning)


def _sapf_settings(raw: Any) -> dict:
    # accept {"sapf": {...}} as well as the bare settings object
    if not isinstance(raw, dict):
        return {}
    inner = raw.get("sapf")
    return inner if isinstance(inner, dict) else raw


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    _publish_diagnostics(params.text_document.uri)


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    _publish_diagnostics(params.text_document.uri)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    ls.publish_diagnostics(params.text_document.uri, [])


def _document_text(uri: str) -> str:
    return ls.workspace.get_text_document(uri).source


# --- Diagnostics ---
def build_diagnostics(text: str) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for issue in validate_code(text):
        diags.append(
            Diagnostic(
                range=Range(
                    start=Position(line=issue.line, character=issue.col),
                    end=Position(line=issue.line, character=issue.col + 1),
                ),
                message=issue.message,
                severity=DiagnosticSeverity.Warning,
                source=SapfLanguageServer.CMD_NAME,
            )
        )
    return diags


def _publish_diagnostics(uri: str):
    ls.publish_diagnostics(uri, build_diagnostics(_document_text(uri)))


# --- Hover ---
def entry_markdown(entry: FunctionEntry, level: str) -> str:
    if level == "minimum":
        return f"```sapf\n{entry.name} {entry.signature or '(no signature)'}\n```"
    return (
        f"**Category**: {entry.category}\n\n"
        f"```sapf\n{entry.display_signature}\n```\n\n"
        f"{entry.description}"
    )


def build_hover(index: KeywordIndex, text: str, position: Position, level: str) -> Optional[Hover]:
    if level == "off":
        return None
    word = _extract_word_at(text, position)
    if not word:
        return None
    entry = index.lookup(word)
    if entry is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=entry_markdown(entry, level)))


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    session = ls.session
    text = _document_text(params.text_document.uri)
    return build_hover(session.index, text, params.position, session.config.hover_info)


# --- Completion ---
def build_completions(index: KeywordIndex, text: str, position: Position, level: str) -> List[CompletionItem]:
    prefix_text = _get_line_prefix(text, position)
    m = WORD_RE.search(prefix_text)
    current = m.group(0) if m else ""
    rng = Range(
        start=Position(line=position.line, character=position.character - len(current)),
        end=position,
    )

    items: List[CompletionItem] = []
    for entry in index.complete(current):
        item = CompletionItem(
            label=entry.name,
            kind=CompletionItemKind.Function,
            text_edit=TextEdit(range=rng, new_text=entry.name),
        )
        if level == "minimum":
            item.detail = entry.signature or "(no signature)"
        elif level != "off":
            item.detail = entry.signature or entry.description.split("\n")[0]
            item.documentation = MarkupContent(kind=MarkupKind.Markdown, value=entry_markdown(entry, "full"))
        items.append(item)
    return items


@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=COMPLETION_TRIGGER_CHARACTERS))
def on_completion(params: CompletionParams) -> CompletionList:
    session = ls.session
    text = _document_text(params.text_document.uri)
    items = build_completions(session.index, text, params.position, session.config.completion_info)
    return CompletionList(is_incomplete=False, items=items)


# --- Formatting ---
def build_format_edits(text: str, indent_size: int) -> List[TextEdit]:
    formatted = format_code(text, indent_size)
    if formatted == text:
        return []
    end_line, end_col = position_at(text, len(text))
    whole = Range(start=Position(line=0, character=0), end=Position(line=end_line, character=end_col))
    return [TextEdit(range=whole, new_text=formatted)]


@ls.feature("textDocument/formatting")
def on_formatting(params: DocumentFormattingParams) -> List[TextEdit]:
    text = _document_text(params.text_document.uri)
    return build_format_edits(text, ls.session.config.indent_size)


# --- Commands ---
def _arg(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _offset(text: str, pos: Any) -> int:
    return offset_at(text, int(_arg(pos, "line") or 0), int(_arg(pos, "character") or 0))


def span_to_json(text: str, span: TextSpan) -> dict:
    start_line, start_col = position_at(text, span.start_offset)
    end_line, end_col = position_at(text, span.end_offset)
    return {
        "text": span.text,
        "range": {
            "start": {"line": start_line, "character": start_col},
            "end": {"line": end_line, "character": end_col},
        },
    }


def run_eval(session: Session, mode: str, text: str, args: Sequence[Any]) -> dict:
    """Evaluate per `mode` with args `[uri, position, selection?]`."""
    cursor = _offset(text, args[1]) if len(args) > 1 and args[1] is not None else 0
    selection = None
    if len(args) > 2 and args[2] is not None:
        selection = (_offset(text, _arg(args[2], "start")), _offset(text, _arg(args[2], "end")))
    span = session.select(mode, text, cursor, selection)
    session.evaluate(span)
    return span_to_json(text, span)


def _register_eval_command(name: str, mode: str):
    @ls.command(name)
    def _eval(args):
        args = list(args or [])
        if not args:
            ls.show_message(f"{name}: missing document uri", MessageType.Error)
            return None
        try:
            return run_eval(ls.session, mode, _document_text(str(args[0])), args)
        except SapfError as ex:
            ls.show_message(str(ex), MessageType.Error)
            return None
    return _eval


def _register_repl_command(word: str):
    @ls.command(f"sapf.{word}")
    def _send(args):
        try:
            ls.session.repl.send(word)
        except SapfError as ex:
            ls.show_message(str(ex), MessageType.Error)
    return _send


for _name, _mode in EVAL_COMMANDS.items():
    _register_eval_command(_name, _mode)

for _word in STANDARD_COMMANDS:
    _register_repl_command(_word)


@ls.command("sapf.regenerateFunctionDefinitions")
@ls.thread()
def regenerate_definitions(args):
    session = ls.session
    if not session.config.prelude_path:
        ls.show_message(
            "To generate complete function definitions, configure the prelude file path (sapf.preludePath).",
            MessageType.Warning,
        )
    try:
        catalog = session.regenerate()
    except (SapfError, OSError) as ex:
        logger.error("regeneration failed: %s", ex)
        ls.show_message(f"Failed to regenerate function definitions: {ex}", MessageType.Error)
        return None
    count = catalog.function_count()
    ls.show_message(f"Successfully regenerated SAPF function definitions! Loaded {count} functions.")
    return {"functions": count}


@ls.command("sapf.removeFunctionDefinitions")
def remove_definitions(args):
    try:
        removed = ls.session.remove_local_definitions()
    except OSError as ex:
        ls.show_message(f"Failed to remove local function definition: {ex}", MessageType.Error)
        return None
    if removed:
        ls.show_message("Local function definition removed. Using default function definitions.")
    else:
        ls.show_message("No local function definition found to remove.")
    return removed


# --- Helpers ---

def _get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    line_text = lines[pos.line]
    return line_text[: pos.character]


def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    i = min(pos.character, len(line))
    start = i
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    end = i
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    word = line[start:end]
    return word or None


def main():
    logging.basicConfig(stream=sys.stderr, level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
