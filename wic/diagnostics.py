"""
Human-readable reporting of front-end diagnostics.

A diagnostic points at a source offset. `locate` maps the offset back to a
line and column by scanning forward from the start of the source, and
`render` prints the offending line with a caret under the offset. Errors are
always fatal: `abort` reports one and ends the process.
"""

import sys
import traceback
from enum import Enum
from typing import Optional, TextIO, Tuple

from .exceptions import WiError
from .utils import TerminalColors


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


SYMBOLS = {Severity.INFO: "ℹ", Severity.WARNING: "⚠", Severity.ERROR: "✖"}
COLOURS = {Severity.INFO: TerminalColors.BLUE, Severity.WARNING: TerminalColors.YELLOW, Severity.ERROR: TerminalColors.RED}


def locate(source: str, offset: int) -> Tuple[int, int, str]:
    """
    Returns the 1-based line number, the 0-based column and the text of the
    line containing `offset`. Offsets past the end land on the last line.
    """
    line_no, column, line_start = 1, 0, 0
    for index, char in enumerate(source):
        if index == offset:
            break
        if char == "\n":
            line_no += 1
            column = 0
            line_start = index + 1
        else:
            column += 1

    line_end = source.find("\n", line_start)
    if line_end == -1:
        line_end = len(source)
    return line_no, column, source[line_start:line_end]


def render(
    reason: str,
    severity: Severity = Severity.ERROR,
    source: Optional[str] = None,
    offset: Optional[int] = None,
    file_name: str = "<stdin>",
    colour: bool = True,
) -> str:
    def paint(text: str, tint: str) -> str:
        return f"{tint}{text}{TerminalColors.RESET}" if colour else text

    tint = COLOURS[severity]
    marker = paint("[", TerminalColors.WHITE) + paint(SYMBOLS[severity], tint) + paint("]", TerminalColors.WHITE)

    if severity is Severity.INFO or source is None or offset is None:
        return f"{marker} {paint(reason, tint)}"

    line_no, column, line = locate(source, offset)
    # Keep tabs in the caret prefix so the caret lines up under tab-indented code
    caret_prefix = "".join(char if char == "\t" else " " for char in line[:column])
    return "\n".join(
        [
            f"{marker} {paint(f'{file_name}:{line_no}:{column + 1}', tint)}",
            f"\t{line}",
            f"\t{caret_prefix}{paint('^', tint)}",
            "",
            paint(reason, tint),
        ]
    )


def report(
    reason: str,
    severity: Severity = Severity.INFO,
    source: Optional[str] = None,
    offset: Optional[int] = None,
    file_name: str = "<stdin>",
    stream: Optional[TextIO] = None,
    colour: bool = True,
) -> None:
    stream = stream or sys.stderr
    print(render(reason, severity, source, offset, file_name, colour), file=stream)


def abort(error: WiError, source: str, file_name: str = "<stdin>", stream: Optional[TextIO] = None, verbose: bool = False, colour: bool = True):
    """Reports a fatal error and terminates with a non-zero status."""
    stream = stream or sys.stderr
    offset = error.position if error.position is not None else len(source)
    report(error.message, Severity.ERROR, source, offset, file_name, stream, colour)
    if verbose:
        print("".join(traceback.format_exception(type(error), error, error.__traceback__)), file=stream)
    sys.exit(1)
