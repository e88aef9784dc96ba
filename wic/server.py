"""
A minimal language server for Wi: publishes the first fatal front-end error
as a diagnostic and shows the kind and value of declared names on hover.
"""

from typing import List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_HOVER,
    Diagnostic,
    DiagnosticSeverity,
    Hover,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
)
from pygls.server import LanguageServer
from pygls.workspace import TextDocument

from .diagnostics import locate
from .exceptions import WiError
from .parser.core.parser import parse_wi

server = LanguageServer("wi-language-server", "v1")


def collect_diagnostics(source: str) -> List[Diagnostic]:
    """Runs the front end over `source` and converts a fatal error into an LSP diagnostic."""
    try:
        parse_wi(source)
    except WiError as e:
        offset = e.position if e.position is not None else len(source)
        line_no, column, _ = locate(source, offset)
        start = Position(line=line_no - 1, character=column)
        end = Position(line=line_no - 1, character=column + 1)
        return [Diagnostic(range=Range(start=start, end=end), message=e.message, severity=DiagnosticSeverity.Error, source="wic")]
    return []


def describe_symbol(source: str, name: str) -> Optional[str]:
    """Markdown hover text for a declared variable, or None if the script does not parse."""
    try:
        program = parse_wi(source)
    except WiError:
        return None
    variable = program.find_variable(name)
    if variable is None:
        return None
    return f"**{variable.name}**: `{variable.type.value}`\n\n```wi\n{variable.value!r}\n```"


def _get_word_at_position(document: TextDocument, position: Position) -> str:
    line = document.lines[position.line]
    start, end = position.character, position.character
    while start > 0 and (line[start - 1].isalnum() or line[start - 1] == "_"):
        start -= 1
    while end < len(line) and (line[end].isalnum() or line[end] == "_"):
        end += 1
    return line[start:end]


def _validate(ls: LanguageServer, uri: str) -> None:
    document = ls.workspace.get_text_document(uri)
    ls.publish_diagnostics(uri, collect_diagnostics(document.source))


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls, params):
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls, params):
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls, params) -> Optional[Hover]:
    document = ls.workspace.get_text_document(params.text_document.uri)
    word = _get_word_at_position(document, params.position)
    text = describe_symbol(document.source, word) if word else None
    if text is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=text))


def main():
    server.start_io()


if __name__ == "__main__":
    main()
