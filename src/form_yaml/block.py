"""Block scalars: multi-line literal (``|``) and folded (``>``) values."""

from __future__ import annotations

from dataclasses import dataclass, field


FOLD_MARKERS = frozenset({">", ">-", ">+", "|", "|-", "|+"})


@dataclass
class BlockScalar:
    """Collects the lines of one block scalar and assembles its text.

    ``lines`` holds every buffered line with the block's indentation
    removed; blank lines are kept as ``""``.
    """

    marker: str
    lines: list[str] = field(default_factory=list)
    baseline: int | None = None

    def __post_init__(self) -> None:
        if self.marker not in FOLD_MARKERS:
            raise ValueError(f"not a block scalar marker: {self.marker!r}")

    @property
    def style(self) -> str:
        """``|`` for literal, ``>`` for folded."""
        return self.marker[0]

    @property
    def chomping(self) -> str:
        """``""`` (clip), ``-`` (strip) or ``+`` (keep)."""
        return self.marker[1:]

    @property
    def has_content(self) -> bool:
        return self.baseline is not None

    # -- Collecting -----------------------------------------------------

    def add_blank(self) -> None:
        """Record an empty line; leading blank lines are dropped."""
        if self.has_content:
            self.lines.append("")

    def add_line(self, indent: int, raw: str) -> None:
        """Buffer *raw* (a full source line) indented by *indent* columns.

        The first line fixes the baseline. A later, shallower line lowers
        it and every line buffered so far is shifted right by the
        difference.
        """
        if self.baseline is None:
            self.baseline = indent
        elif indent < self.baseline:
            self._reindent(self.baseline - indent)
            self.baseline = indent
        self.lines.append(raw[self.baseline:].rstrip("\r"))

    def _reindent(self, width: int) -> None:
        padding = " " * width
        self.lines = [padding + line if line else line for line in self.lines]

    # -- Result ---------------------------------------------------------

    def text(self) -> str:
        content = list(self.lines)
        trailing = 0
        while content and content[-1] == "":
            content.pop()
            trailing += 1

        if self.style == "|":
            body = "\n".join(content)
        else:
            body = _fold(content)

        if self.chomping == "-":
            return body
        if self.chomping == "+":
            return body + "\n" * (trailing + 1)
        return body + "\n"


def _fold(lines: list[str]) -> str:
    """Join lines with single spaces; blank and more-indented lines keep breaks."""
    parts: list[str] = []
    prev: str | None = None
    for line in lines:
        if prev is None or prev == "":
            parts.append("\n" if line == "" and prev is not None else line)
        elif line == "":
            parts.append("\n")
        elif line[0] in " \t" or prev[0] in " \t":
            parts.append("\n" + line)
        else:
            parts.append(" " + line)
        prev = line
    return "".join(parts)
