"""
AST Node Position Module - Source Position Tracking

This module provides the immutable position value used by every AST node to
record where in the source document it starts and ends.

Usage:
    >>> start = ASTNodePosition.document_start()
    >>> start.advance("ab\\ncd")
    ASTNodePosition(line=2, column=3, offset=5)
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, order=True)
class ASTNodePosition:
    """
    Immutable (line, column, offset) position in a source document.

    Lines and columns are 1-based, the offset is the 0-based number of
    characters consumed from the start of the document. Positions order
    lexicographically by (line, column, offset).

    Attributes:
        line: Line number (>= 1)
        column: Column number (>= 1)
        offset: Characters consumed from document start (>= 0)
    """
    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        if self.line < 1 or self.column < 1 or self.offset < 0:
            raise ValueError(
                f"Invalid position: line={self.line}, column={self.column}, "
                f"offset={self.offset}"
            )

    @classmethod
    def document_start(cls) -> "ASTNodePosition":
        """Position of the first character of a document."""
        return cls(1, 1, 0)

    def advance(self, consumed: str) -> "ASTNodePosition":
        """
        Get the position immediately following ``consumed``.

        Args:
            consumed: Text consumed starting at this position

        Returns:
            Position after the consumed text (``self`` for empty input)
        """
        if not consumed:
            return self

        newlines = consumed.count("\n")
        if newlines == 0:
            column = self.column + len(consumed)
        else:
            column = len(consumed) - consumed.rfind("\n")

        return ASTNodePosition(
            line=self.line + newlines,
            column=column,
            offset=self.offset + len(consumed),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert position to dictionary representation."""
        return {"line": self.line, "column": self.column, "offset": self.offset}

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"
