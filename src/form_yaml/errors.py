"""Exception hierarchy for form_yaml."""

from __future__ import annotations


class FormYAMLError(Exception):
    """Root of all errors raised by form_yaml."""


class ParseError(FormYAMLError, ValueError):
    """Invalid construct found while scanning the source text.

    ``line`` and ``column`` are 1-based and point at the offending
    character (or, for an unclosed quote, at the opening quote).
    """

    reason = "invalid input"

    def __init__(self, line: int, column: int, reason: str | None = None) -> None:
        if reason is not None:
            self.reason = reason
        self.line = line
        self.column = column
        super().__init__(f"{self.reason} in line {line}, column {column}")


class CharacterError(ParseError):
    reason = "invalid character"


class LinebreakError(ParseError):
    reason = "invalid linebreak"


class CommentError(ParseError):
    reason = "invalid comment"


class IndentationError(ParseError):
    reason = "invalid indentation"


class CollectionTypeError(ParseError):
    reason = "invalid mix of collections"


class FoldError(ParseError):
    reason = "invalid folded value"


class QuoteError(ParseError):
    reason = "missing closing quote"


class UnexpectedEOFError(ParseError):
    reason = "unexpected end of file"
