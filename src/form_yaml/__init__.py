"""form_yaml — lenient YAML-flavoured parser for form definitions."""

from .scanner import parse
from .model import Value
from .scalars import coerce_scalar
from .errors import (
    CharacterError,
    CollectionTypeError,
    CommentError,
    FoldError,
    FormYAMLError,
    IndentationError,
    LinebreakError,
    ParseError,
    QuoteError,
    UnexpectedEOFError,
)

__all__ = [
    "parse",
    "Value",
    "coerce_scalar",
    "FormYAMLError",
    "ParseError",
    "CharacterError",
    "LinebreakError",
    "CommentError",
    "IndentationError",
    "CollectionTypeError",
    "FoldError",
    "QuoteError",
    "UnexpectedEOFError",
]
