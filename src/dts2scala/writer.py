"""Line buffer with scoped block indentation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class Writer:
    """Append-only list of lines. Blocks are opened only through `block()`."""

    _INDENT: str = "  "

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent: int = 0

    def line(self, text: str = "") -> None:
        """Emit a line with current indentation. Empty text is always a bare blank line."""
        if text:
            self.lines.append(self._INDENT * self.indent + text)
        else:
            self.lines.append("")

    def blank(self) -> None:
        """Emit a blank line unless the previous line is already blank."""
        if len(self.lines) > 0 and self.lines[-1] == "":
            return
        self.lines.append("")

    @contextmanager
    def block(self, header: str, indent: bool = True) -> Iterator[None]:
        """Write `header {`, yield for the body, then always write `}`.

        With indent=False the body stays at the header's level (package blocks).
        """
        self.line(header + " {")
        saved = self.indent
        if indent:
            self.indent += 1
        try:
            yield
        finally:
            self.indent = saved
            self.line("}")

    def output(self) -> str:
        """Return the accumulated output, newline-terminated."""
        return "\n".join(self.lines) + "\n"
