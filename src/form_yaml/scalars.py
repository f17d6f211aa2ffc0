"""Scalar coercion: turns plain value text into typed Python values."""

from __future__ import annotations

import re

from .model import Value


_NULL_RE = re.compile(r"^(?:null)?$")
_TRUE_RE = re.compile(r"^(?:y|yes|true|on)$", re.IGNORECASE)
_FALSE_RE = re.compile(r"^(?:n|no|false|off)$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "f": "\f",
    "v": "\v",
}


def coerce_scalar(text: str) -> Value:
    """Convert unquoted value text to None, a bool, a float or a string.

    - ``""`` / ``null``                 → None
    - ``y``, ``yes``, ``true``, ``on``  → True  (any case)
    - ``n``, ``no``, ``false``, ``off`` → False (any case)
    - ``-12``, ``+3.5``                 → float
    - Everything else                   → the trimmed text
    """
    trimmed = text.strip()
    if _NULL_RE.match(trimmed):
        return None
    if _TRUE_RE.match(trimmed):
        return True
    if _FALSE_RE.match(trimmed):
        return False
    if _NUMBER_RE.match(trimmed):
        return float(trimmed)
    return trimmed


def resolve_escapes(text: str) -> str:
    r"""Replace backslash escapes in quoted text.

    Only ``\n``, ``\t``, ``\f`` and ``\v`` have a special meaning; any other
    escaped character stands for itself (so ``\'`` is ``'`` and ``\\`` is
    ``\``).
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)
