"""Data model: parsed values and the transient records the scanner emits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .block import BlockScalar


# ---------------------------------------------------------------------------
# Value — what parse() returns
# ---------------------------------------------------------------------------

Value = Union[None, bool, float, str, "dict[str, Value]", "list[Value]"]


# ---------------------------------------------------------------------------
# Record values
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Scalar:
    """Final text of a value; quoted text is never coerced."""
    text: str
    quoted: bool = False


@dataclass(slots=True, frozen=True)
class StartMapping:
    """The record opens a nested mapping on the following lines."""

    def new_collector(self) -> dict:
        return {}


@dataclass(slots=True, frozen=True)
class StartSequence:
    """The record opens a nested sequence on the following lines."""

    def new_collector(self) -> list:
        return []


Opening = StartMapping | StartSequence
RecordValue = Scalar | StartMapping | StartSequence


# ---------------------------------------------------------------------------
# NodeRecord
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class NodeRecord:
    """One entry read by the scanner, waiting to be consumed.

    ``is_array_slot`` is set for sequence entries (``- ...``); all other
    records carry a ``name``. ``block`` is set while the record collects a
    block scalar's lines.
    """
    depth: int
    line: int
    column: int
    name: str | None = None
    is_array_slot: bool = False
    value: RecordValue | None = None
    block: BlockScalar | None = None
