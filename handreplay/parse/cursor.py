"""
Line cursor over a hand history.
The only place that indexes the line list; every section parser moves through it.
"""

from typing import Optional, Sequence, Tuple

from .errors import UnexpectedEndOfInput


class LineCursor:
    """Trimmed lines of one hand plus the index of the line being read."""

    def __init__(self, lines: Sequence[str]):
        self._lines: Tuple[str, ...] = tuple(lines)
        self._position = 0

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        return cls(line.strip() for line in text.strip().splitlines())

    @property
    def position(self) -> int:
        return self._position

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines

    def peek(self) -> str:
        if self._position >= len(self._lines):
            raise UnexpectedEndOfInput()
        return self._lines[self._position]

    def advance(self) -> None:
        self._position += 1

    def at_end(self) -> bool:
        return self._position >= len(self._lines)

    def restore(self, position: int) -> None:
        self._position = position

    def remaining(self) -> Tuple[str, ...]:
        """Unread lines, as an immutable view that cannot move the cursor."""
        return self._lines[self._position:]

    def current_line(self) -> Optional[str]:
        """Current line text, or None when exhausted (for error context)."""
        if self.at_end():
            return None
        return self._lines[self._position]

    def __len__(self) -> int:
        return len(self._lines)
