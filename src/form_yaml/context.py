"""Context stack: the open nesting levels of the document being built."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from . import errors
from .model import NodeRecord

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Frame:
    """One open level of nesting.

    ``depth`` is None until the first child line of a freshly opened level
    has been seen. ``selector`` is the key or index under which the parent
    frame's collector holds ``collector``; it is None for the root.
    """
    depth: int | None
    selector: str | int | None
    collector: dict | list


@dataclass
class ContextStack:
    """LIFO of frames; ``frames[0]`` is the document root."""

    frames: list[Frame] = field(
        default_factory=lambda: [Frame(depth=0, selector=None, collector={})]
    )

    @property
    def top(self) -> Frame:
        return self.frames[-1]

    @property
    def root(self):
        return self.frames[0].collector

    def __len__(self) -> int:
        return len(self.frames)

    # -- Depth ----------------------------------------------------------

    def settle(self, record: NodeRecord) -> Frame:
        """Pop frames until the top one hosts *record*'s depth.

        An unresolved top frame adopts the record's depth when that is
        deeper than its parent, or when a sequence entry sits at the depth
        of the mapping key that opened the level (``key:`` followed by
        ``- item`` lines without extra indentation). Otherwise the level
        stays empty and is closed like any other. Such a compact sequence
        only holds sequence entries; a named record at its depth belongs
        to the mapping below it.
        """
        depth = record.depth
        while True:
            frame = self.top
            if frame.depth is None:
                parent = self.frames[-2]
                if depth > parent.depth or (
                    depth == parent.depth
                    and record.is_array_slot
                    and isinstance(parent.collector, dict)
                ):
                    frame.depth = depth
                    return frame
            elif frame.depth == depth:
                if record.is_array_slot or not self._is_compact(frame):
                    return frame
            elif frame.depth < depth:
                raise errors.IndentationError(record.line, record.column)

            log.debug("closing level at depth %s", frame.depth)
            self.frames.pop()

    def _is_compact(self, frame: Frame) -> bool:
        return (
            len(self.frames) > 1
            and frame is self.top
            and self.frames[-2].depth == frame.depth
        )

    # -- Collectors -----------------------------------------------------

    def collector_for(self, record: NodeRecord) -> dict | list:
        """Return the top collector, switching its kind to fit *record*.

        Only an empty collector may switch; the parent's slot is rewired
        to the replacement.
        """
        frame = self.top
        wants_list = record.is_array_slot
        if isinstance(frame.collector, list) == wants_list:
            return frame.collector

        if frame.collector:
            raise errors.CollectionTypeError(record.line, record.column)

        frame.collector = [] if wants_list else {}
        if len(self.frames) > 1:
            self.frames[-2].collector[frame.selector] = frame.collector
        return frame.collector

    def open(self, selector: str | int, collector: dict | list) -> Frame:
        frame = Frame(depth=None, selector=selector, collector=collector)
        self.frames.append(frame)
        log.debug("opening %s level under %r", type(collector).__name__, selector)
        return frame
