"""Text edit primitives handed to the editor collaborator."""

from dataclasses import dataclass
from enum import StrEnum


class EditKind(StrEnum):
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based (line, character) location in a document."""

    line: int
    character: int = 0


@dataclass(frozen=True)
class Range:
    """A half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def of_lines(cls, first: int, last: int) -> "Range":
        """Whole lines ``first..last`` inclusive, including the final line break."""
        return cls(Position(first, 0), Position(last + 1, 0))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class TextEdit:
    """A single insert, delete or replace against one document snapshot."""

    kind: EditKind
    range: Range
    text: str = ""

    @classmethod
    def insert(cls, position: Position, text: str) -> "TextEdit":
        return cls(EditKind.INSERT, Range(position, position), text)

    @classmethod
    def delete(cls, span: Range) -> "TextEdit":
        return cls(EditKind.DELETE, span)

    @classmethod
    def replace(cls, span: Range, text: str) -> "TextEdit":
        return cls(EditKind.REPLACE, span, text)


# Every edit in a plan is expressed against the same pre-edit snapshot.
EditPlan = tuple[TextEdit, ...]
