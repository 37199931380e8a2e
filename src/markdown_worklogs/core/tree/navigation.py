"""Header navigation: next/previous, enclosing header, section bounds."""

from collections.abc import Iterable
from enum import StrEnum

from markdown_worklogs.models.document import Block


class Direction(StrEnum):
    FORWARD = "forward"
    BACKWARD = "backward"


def _level_matches(
    level: int,
    *,
    min_level: int | None,
    exact_level: int | None,
    max_level: int | None,
) -> bool:
    if exact_level is not None:
        return level == exact_level
    if min_level is not None:
        return level >= min_level
    if max_level is not None:
        return level <= max_level
    return True


def top_level_headings(
    blocks: Iterable[Block],
    *,
    lower_bound: int | None = None,
    upper_bound: int | None = None,
) -> list[Block]:
    """Headings outside any container whose start line lies within the bounds."""
    return [
        b
        for b in blocks
        if b.is_heading
        and b.is_top_level
        and (lower_bound is None or b.start_line >= lower_bound)
        and (upper_bound is None or b.start_line <= upper_bound)
    ]


def find_header(
    blocks: Iterable[Block],
    *,
    direction: Direction,
    from_line: int,
    include_from_line: bool = False,
    min_level: int | None = None,
    exact_level: int | None = None,
    max_level: int | None = None,
    lower_bound: int | None = None,
    upper_bound: int | None = None,
) -> int | None:
    """Find the nearest matching header line from ``from_line``.

    Args:
        blocks: Block sequence of the current snapshot.
        direction: Scan forward (towards the end) or backward.
        from_line: Reference line.
        include_from_line: Whether a header exactly at ``from_line`` qualifies.
        min_level: Only headers with level >= min_level.
        exact_level: Only headers with exactly this level.
        max_level: Only headers with level <= max_level.
        lower_bound: Ignore headers starting before this line.
        upper_bound: Ignore headers starting after this line.

    Returns:
        The header's start line, or None when nothing qualifies.
    """
    predicates = [p for p in (min_level, exact_level, max_level) if p is not None]
    if len(predicates) > 1:
        msg = "min_level, exact_level and max_level are mutually exclusive"
        raise ValueError(msg)

    candidates = [
        b.start_line
        for b in top_level_headings(blocks, lower_bound=lower_bound, upper_bound=upper_bound)
        if _level_matches(
            b.tag_level, min_level=min_level, exact_level=exact_level, max_level=max_level
        )
    ]

    if direction is Direction.FORWARD:
        after = [
            line
            for line in candidates
            if line > from_line or (include_from_line and line == from_line)
        ]
        return min(after, default=None)

    before = [
        line
        for line in candidates
        if line < from_line or (include_from_line and line == from_line)
    ]
    return max(before, default=None)


def enclosing_header(blocks: Iterable[Block], line: int) -> int | None:
    """The header governing ``line``: itself if it is a header, else the nearest above."""
    return find_header(blocks, direction=Direction.BACKWARD, from_line=line, include_from_line=True)


def header_level_at(blocks: Iterable[Block], line: int) -> int:
    """Level of the top-level heading starting at ``line``, 0 if there is none."""
    for b in top_level_headings(blocks, lower_bound=line, upper_bound=line):
        return b.tag_level
    return 0


def section_bounds(
    blocks: Iterable[Block],
    *,
    header_line: int,
    level: int,
    last_line: int,
) -> tuple[int, int]:
    """Lines strictly inside the header at ``header_line``.

    The range runs from the line after the header to the line before the next
    header of the same or a higher rank, or to ``last_line``. An empty range
    comes back with ``start > end``.
    """
    next_line = find_header(
        blocks, direction=Direction.FORWARD, from_line=header_line, max_level=level
    )
    end = last_line if next_line is None else next_line - 1
    return header_line + 1, end
