"""Locate fenced code blocks around a line."""

from collections.abc import Iterable

from markdown_worklogs.models.document import Block


def find_enclosing_fence(blocks: Iterable[Block], line: int) -> Block | None:
    """First fenced block whose span contains ``line``."""
    for b in blocks:
        if b.is_fence and b.start_line <= line <= b.end_line:
            return b
    return None


def selectable_range(fence: Block) -> tuple[int, int] | None:
    """Interior lines of a fence, without its marker lines.

    An unterminated fence has no closing marker, so its interior runs to the
    end of its span. Returns None when the fence has no interior lines.
    """
    start = fence.start_line + 1
    end = fence.end_line - 1 if fence.closed else fence.end_line
    if start > end:
        return None
    return start, end


def fence_content(fence: Block) -> str:
    return fence.content
