"""Domain models for worklog documents."""

from dataclasses import dataclass
from enum import StrEnum


class BlockKind(StrEnum):
    """Kinds of block-level constructs the engine cares about."""

    HEADING = "heading_open"
    FENCE = "fence"
    OTHER = "other"


@dataclass(frozen=True)
class Block:
    """A block-level Markdown construct and the lines it spans."""

    kind: BlockKind
    line_span: tuple[int, int]  # (start_line, end_line) inclusive
    nesting_depth: int = 0
    tag_level: int = 0
    content: str = ""
    language: str = ""
    closed: bool = True

    @property
    def start_line(self) -> int:
        return self.line_span[0]

    @property
    def end_line(self) -> int:
        return self.line_span[1]

    @property
    def is_top_level(self) -> bool:
        return self.nesting_depth == 0

    @property
    def is_heading(self) -> bool:
        return self.kind is BlockKind.HEADING

    @property
    def is_fence(self) -> bool:
        return self.kind is BlockKind.FENCE


@dataclass(frozen=True)
class HeaderInfo:
    """What a single header line says about itself."""

    leading_space_width: int = 0
    level: int = 0
    trailing_space_width: int = 0
    first_word: str = ""
    todo_state: str = ""
    todo_state_index: int = 0

    @property
    def is_header(self) -> bool:
        return self.level > 0

    @property
    def prefix_width(self) -> int:
        """Columns taken by indentation, markers and the space after them."""
        return self.leading_space_width + self.level + self.trailing_space_width


@dataclass(frozen=True)
class Section:
    """A header at the partition level plus the lines it owns."""

    start_line: int
    end_line: int
    level: int
    todo_state: str = ""

    @property
    def is_done(self) -> bool:
        return self.todo_state == "DONE"

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class SectionMove:
    """Relocate a section so it starts right after ``anchor_line``.

    ``anchor_line`` is already adjusted for every move planned before this one.
    """

    section: Section
    anchor_line: int


@dataclass(frozen=True)
class DocumentSnapshot:
    """Everything derived from one version of a document's text."""

    text: str
    lines: tuple[str, ...]
    blocks: tuple[Block, ...]

    @property
    def last_line(self) -> int:
        return len(self.lines) - 1
