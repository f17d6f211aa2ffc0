"""Scanner: single-pass, character-driven state machine over the source.

Every lexical mode has its own handler ``handler(ch, state) -> Action``.
Handlers read the character at ``state.cursor``, update ``state`` and hand
finished records to the node builder. Returning ``Action.REPEAT`` makes
the driver dispatch the same character again in the new mode.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

from . import errors
from .block import FOLD_MARKERS, BlockScalar
from .builder import consume
from .context import ContextStack
from .model import NodeRecord, Scalar, StartMapping, StartSequence, Value
from .scalars import resolve_escapes

log = logging.getLogger(__name__)


_NAME_CHAR_RE = re.compile(r"[A-Za-z0-9_]")
_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")

QUOTES = "'\""
LINEBREAKS = "\r\n"
BLANKS = " \t"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(source) -> Value:
    """Parse *source* into nested dicts, lists and scalars.

    Structured input (a dict or list) is returned unchanged; any other
    non-string input yields None.
    """
    if isinstance(source, str):
        return scan(source)
    if isinstance(source, (dict, list)):
        return source
    return None


def scan(text: str) -> Value:
    """Run the state machine over *text* and return the document root."""
    state = ScanState(text)
    end = len(text)

    while state.cursor < end:
        ch = text[state.cursor]
        if _HANDLERS[state.mode](ch, state) is Action.REPEAT:
            continue

        state.cursor += 1
        if ch == "\n":
            state.line += 1
            state.column = 1
        else:
            state.column += 1

    finish(state)
    return state.stack.root


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

class Mode(Enum):
    LEADING_SPACE = auto()         # indentation at start of a line
    AWAIT_LF = auto()              # read CR, LF must follow
    NAME = auto()                  # unquoted property name
    QUOTED_NAME = auto()
    ESCAPED_QUOTED_NAME = auto()
    COLON = auto()                 # whitespace between name and colon
    VALUE = auto()                 # unquoted value
    FOLDED_VALUE = auto()          # one line of a block scalar
    QUOTED_VALUE = auto()
    ESCAPED_QUOTED_VALUE = auto()
    COMMENT = auto()
    TRAILING_SPACE = auto()        # after a quoted value, up to linebreak


class Action(Enum):
    NEXT = auto()
    REPEAT = auto()


@dataclass
class ScanState:
    """Everything one scan mutates.

    ``start`` marks where the current token began, ``line_start`` where the
    current physical line began. ``lead`` is the whitespace between a
    sequence dash and a quoted value following it.
    """

    text: str
    stack: ContextStack = field(default_factory=ContextStack)
    mode: Mode = Mode.LEADING_SPACE
    record: NodeRecord | None = None
    cursor: int = 0
    line: int = 1
    column: int = 1
    line_start: int = 0
    start: int = 0
    indent: int = 0
    quote: str = ""
    quote_line: int = 0
    quote_column: int = 0
    lead: int = 0


# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------

def _emit(state: ScanState) -> None:
    consume(state.record, state.stack)
    state.record = None


def _line_break(ch: str, state: ScanState) -> None:
    if ch == "\r":
        state.mode = Mode.AWAIT_LF
    else:
        state.mode = Mode.LEADING_SPACE
        state.line_start = state.cursor + 1


def _open_quote(ch: str, state: ScanState) -> None:
    state.quote = ch
    state.start = state.cursor
    state.quote_line = state.line
    state.quote_column = state.column


def _quoted_text(state: ScanState) -> str:
    return resolve_escapes(state.text[state.start + 1:state.cursor])


def _set_name(state: ScanState) -> None:
    name = state.text[state.start:state.cursor]
    if not name:
        raise errors.CharacterError(state.line, state.column)
    state.record.name = name


def _close_value(state: ScanState, raw: str) -> None:
    """Finish an unquoted value: start a block scalar, a level or a scalar."""
    raw = raw.strip()
    record = state.record
    if raw in FOLD_MARKERS:
        record.block = BlockScalar(raw)
        return
    record.value = Scalar(raw) if raw else StartMapping()
    _emit(state)


def _close_block(state: ScanState) -> None:
    record = state.record
    if not record.block.has_content:
        raise errors.FoldError(record.line, record.column)
    log.debug(
        "block scalar %r from line %d closed after %d lines",
        record.block.marker, record.line, len(record.block.lines),
    )
    _emit(state)


def _shorthand(state: ScanState, lead: int, name: str | None) -> None:
    """Open the implicit level of ``- name: ...`` or ``- - ...``.

    The dash record becomes the opening of a mapping (with *name*) or a
    sequence (without), and a new record starts right after the separator,
    one column deeper than the dash plus the whitespace in between.
    """
    outer = state.record
    outer.value = StartSequence() if name is None else StartMapping()
    _emit(state)

    offset = 1 + lead
    state.record = NodeRecord(
        depth=outer.depth + offset,
        line=outer.line,
        column=outer.column + offset,
        name=name,
        is_array_slot=name is None,
    )
    state.start = state.cursor + 1
    state.mode = Mode.VALUE


def _at_separator(state: ScanState, index: int) -> bool:
    return index >= len(state.text) or state.text[index] in BLANKS + LINEBREAKS


# ---------------------------------------------------------------------------
# Mode handlers
# ---------------------------------------------------------------------------

def leading_space(ch: str, state: ScanState) -> Action:
    if ch in BLANKS:
        return Action.NEXT

    record = state.record

    if ch in LINEBREAKS:
        if record is not None and record.block is not None:
            record.block.add_blank()
        _line_break(ch, state)
        return Action.NEXT

    indent = state.cursor - state.line_start

    if record is not None and record.block is not None:
        if indent > record.depth:
            state.indent = indent
            state.mode = Mode.FOLDED_VALUE
            return Action.NEXT
        _close_block(state)

    if ch == "#":
        state.mode = Mode.COMMENT
        return Action.NEXT

    state.record = NodeRecord(depth=indent, line=state.line, column=state.column)

    if ch in QUOTES:
        _open_quote(ch, state)
        state.mode = Mode.QUOTED_NAME
    elif ch == "-":
        state.record.is_array_slot = True
        state.start = state.cursor + 1
        state.mode = Mode.VALUE
    else:
        state.start = state.cursor
        state.mode = Mode.NAME
        return Action.REPEAT

    return Action.NEXT


def await_lf(ch: str, state: ScanState) -> Action:
    if ch != "\n":
        raise errors.LinebreakError(state.line, state.column)
    _line_break(ch, state)
    return Action.NEXT


def name(ch: str, state: ScanState) -> Action:
    if ch == ":":
        _set_name(state)
        state.start = state.cursor + 1
        state.mode = Mode.VALUE
    elif ch in BLANKS:
        _set_name(state)
        state.mode = Mode.COLON
    elif ch in LINEBREAKS:
        raise errors.LinebreakError(state.line, state.column)
    elif ch == "#":
        raise errors.CommentError(state.line, state.column)
    elif not _NAME_CHAR_RE.match(ch):
        raise errors.CharacterError(state.line, state.column)
    return Action.NEXT


def quoted_name(ch: str, state: ScanState) -> Action:
    if ch == "\\":
        state.mode = Mode.ESCAPED_QUOTED_NAME
    elif ch in LINEBREAKS:
        raise errors.LinebreakError(state.line, state.column)
    elif ch == state.quote:
        state.record.name = _quoted_text(state)
        state.mode = Mode.COLON
    return Action.NEXT


def escaped_quoted_name(ch: str, state: ScanState) -> Action:
    if ch in LINEBREAKS:
        raise errors.LinebreakError(state.line, state.column)
    state.mode = Mode.QUOTED_NAME
    return Action.NEXT


def colon(ch: str, state: ScanState) -> Action:
    if ch == ":":
        state.start = state.cursor + 1
        state.mode = Mode.VALUE
    elif ch in BLANKS:
        pass
    elif ch in LINEBREAKS:
        raise errors.LinebreakError(state.line, state.column)
    elif ch == "#":
        raise errors.CommentError(state.line, state.column)
    else:
        raise errors.CharacterError(state.line, state.column)
    return Action.NEXT


def value(ch: str, state: ScanState) -> Action:
    if ch == "#":
        _close_value(state, state.text[state.start:state.cursor])
        state.mode = Mode.COMMENT
    elif ch in LINEBREAKS:
        _close_value(state, state.text[state.start:state.cursor])
        _line_break(ch, state)
    elif ch in QUOTES:
        if _only_blanks_passed(state):
            state.lead = state.cursor - state.start
            _open_quote(ch, state)
            state.mode = Mode.QUOTED_VALUE
    elif ch == ":" and state.record.is_array_slot:
        passed = state.text[state.start:state.cursor]
        key = passed.strip()
        if not _NAME_RE.match(key):
            raise errors.CharacterError(state.line, state.column)
        _shorthand(state, len(passed) - len(passed.lstrip()), key)
    elif (
        ch == "-"
        and state.record.is_array_slot
        and _only_blanks_passed(state)
        and _at_separator(state, state.cursor + 1)
    ):
        _shorthand(state, state.cursor - state.start, None)
    return Action.NEXT


def _only_blanks_passed(state: ScanState) -> bool:
    """True if nothing but blanks lies between the token start and the cursor.

    Scans backwards and stops at the first non-blank character.
    """
    index = state.cursor - 1
    while index >= state.start:
        if state.text[index] not in BLANKS:
            return False
        index -= 1
    return True


def folded_value(ch: str, state: ScanState) -> Action:
    if ch in LINEBREAKS:
        raw = state.text[state.line_start:state.cursor]
        state.record.block.add_line(state.indent, raw)
        _line_break(ch, state)
    return Action.NEXT


def quoted_value(ch: str, state: ScanState) -> Action:
    if ch == "\\":
        state.mode = Mode.ESCAPED_QUOTED_VALUE
    elif ch in LINEBREAKS:
        raise errors.LinebreakError(state.line, state.column)
    elif ch == state.quote:
        state.record.value = Scalar(_quoted_text(state), quoted=True)
        state.mode = Mode.TRAILING_SPACE
    return Action.NEXT


def escaped_quoted_value(ch: str, state: ScanState) -> Action:
    if ch in LINEBREAKS:
        raise errors.LinebreakError(state.line, state.column)
    state.mode = Mode.QUOTED_VALUE
    return Action.NEXT


def comment(ch: str, state: ScanState) -> Action:
    if ch in LINEBREAKS:
        _line_break(ch, state)
    return Action.NEXT


def trailing_space(ch: str, state: ScanState) -> Action:
    if ch in BLANKS:
        return Action.NEXT

    if ch in LINEBREAKS:
        _emit(state)
        _line_break(ch, state)
    elif ch == "#":
        _emit(state)
        state.mode = Mode.COMMENT
    elif ch == ":" and state.record.is_array_slot:
        # - 'quoted key': value
        _shorthand(state, state.lead, state.record.value.text)
    else:
        raise errors.CharacterError(state.line, state.column)
    return Action.NEXT


_HANDLERS: dict[Mode, Callable[[str, ScanState], Action]] = {
    Mode.LEADING_SPACE: leading_space,
    Mode.AWAIT_LF: await_lf,
    Mode.NAME: name,
    Mode.QUOTED_NAME: quoted_name,
    Mode.ESCAPED_QUOTED_NAME: escaped_quoted_name,
    Mode.COLON: colon,
    Mode.VALUE: value,
    Mode.FOLDED_VALUE: folded_value,
    Mode.QUOTED_VALUE: quoted_value,
    Mode.ESCAPED_QUOTED_VALUE: escaped_quoted_value,
    Mode.COMMENT: comment,
    Mode.TRAILING_SPACE: trailing_space,
}


# ---------------------------------------------------------------------------
# End of input
# ---------------------------------------------------------------------------

def finish(state: ScanState) -> None:
    """Close whatever the input left open when it ran out."""
    mode = state.mode

    if mode is Mode.VALUE:
        raw = state.text[state.start:].strip()
        if raw in FOLD_MARKERS:
            raise errors.FoldError(state.line, state.column)
        _close_value(state, raw)
    elif mode is Mode.TRAILING_SPACE:
        _emit(state)
    elif mode is Mode.FOLDED_VALUE:
        raw = state.text[state.line_start:]
        state.record.block.add_line(state.indent, raw)
    elif mode in (
        Mode.QUOTED_NAME,
        Mode.ESCAPED_QUOTED_NAME,
        Mode.QUOTED_VALUE,
        Mode.ESCAPED_QUOTED_VALUE,
    ):
        raise errors.QuoteError(state.quote_line, state.quote_column)
    elif mode in (Mode.NAME, Mode.COLON):
        raise errors.UnexpectedEOFError(state.line, state.column)

    if state.record is not None:
        _close_block(state)
