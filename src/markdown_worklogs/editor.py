"""In-memory and file-backed documents that apply edit batches atomically."""

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from markdown_worklogs.core.parser.blocks import split_lines
from markdown_worklogs.errors import EditApplicationError
from markdown_worklogs.models.edits import Position, TextEdit


class TextBuffer:
    """A document held in memory.

    Every edit in a batch is resolved against the same snapshot, then the
    batch is applied in one step. Overlapping edits reject the whole batch,
    so a document is never left half-edited.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        # Bumped on every applied batch.
        self.version = 0

    def get_text(self) -> str:
        return self._text

    @property
    def lines(self) -> list[str]:
        return split_lines(self._text)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, line: int) -> str:
        """Text of ``line`` without its line break."""
        return self.lines[line].rstrip("\r\n")

    def _offset(self, position: Position, lines: list[str], line_starts: list[int]) -> int:
        if position.line < 0:
            return 0
        if position.line >= len(lines):
            return len(self._text)
        visible = len(lines[position.line].rstrip("\r\n"))
        return line_starts[position.line] + min(max(position.character, 0), visible)

    def apply_edits(self, edits: Sequence[TextEdit]) -> bool:
        """Apply a batch of edits; return False when there was nothing to do."""
        if not edits:
            return False

        lines = self.lines
        line_starts: list[int] = []
        total = 0
        for line in lines:
            line_starts.append(total)
            total += len(line)

        spans: list[tuple[int, int, int, str]] = []
        for index, edit in enumerate(edits):
            start = self._offset(edit.range.start, lines, line_starts)
            end = self._offset(edit.range.end, lines, line_starts)
            if end < start:
                msg = f"Edit range ends before it starts: {edit!r}"
                raise EditApplicationError(msg, tuple(edits))
            spans.append((start, end, index, edit.text))
        spans.sort()

        pieces: list[str] = []
        cursor = 0
        for start, end, _index, text in spans:
            if start < cursor:
                msg = f"Overlapping edits in batch at offset {start}"
                raise EditApplicationError(msg, tuple(edits))
            pieces.append(self._text[cursor:start])
            pieces.append(text)
            cursor = end
        pieces.append(self._text[cursor:])

        self._text = "".join(pieces)
        self.version += 1
        logger.debug("Applied {} edit(s), document version {}", len(edits), self.version)
        return True


class WorklogFile(TextBuffer):
    """A Markdown file loaded into a buffer.

    ``save`` writes the file only when the contents changed, and never in
    dry-run mode.
    """

    def __init__(self, path: str | Path, *, dry_run: bool = False) -> None:
        self.path = Path(path).expanduser()
        self.dry_run = dry_run
        if not self.path.is_file():
            msg = f"Worklog file {str(self.path)!r} not found"
            raise FileNotFoundError(msg)

        super().__init__(self.path.read_text(encoding="utf-8"))
        self._saved_text = self.get_text()
        logger.debug("Loaded {} ({} lines), dry_run {!r}", self.path, self.line_count, dry_run)

    @property
    def dirty(self) -> bool:
        return self.get_text() != self._saved_text

    def save(self) -> bool:
        """Write pending changes back; return True if the file was written."""
        if not self.dirty:
            logger.debug("No changes to {}", self.path)
            return False
        if self.dry_run:
            logger.info("Would update {} (dry run)", self.path)
            return False

        self.path.write_text(self.get_text(), encoding="utf-8")
        self._saved_text = self.get_text()
        logger.info("Updated {}", self.path)
        return True
