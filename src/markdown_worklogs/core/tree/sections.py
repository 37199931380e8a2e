"""Partition sibling sections and plan moves that sink DONE work to the bottom."""

from collections.abc import Sequence

from loguru import logger

from markdown_worklogs.core.parser.headers import header_info_from_line
from markdown_worklogs.core.tree.navigation import top_level_headings
from markdown_worklogs.models.document import Block, Section, SectionMove
from markdown_worklogs.models.edits import EditPlan, Position, Range, TextEdit


def partition_level(blocks: Sequence[Block], *, force_top_level: bool) -> int:
    """Level used as the sort unit: 1 when forced, else the shallowest present."""
    if force_top_level or not blocks:
        return 1
    return min(b.tag_level for b in blocks)


def collect_sections(
    blocks: Sequence[Block],
    lines: Sequence[str],
    *,
    lower_bound: int,
    upper_bound: int,
    force_top_level: bool,
) -> tuple[Section, ...]:
    """Split ``[lower_bound, upper_bound]`` into sections at the partition level.

    Lines in the range before the first partition-level header belong to no
    section and never move.
    """
    headings = [
        b
        for b in top_level_headings(blocks, lower_bound=lower_bound, upper_bound=upper_bound)
        if b.start_line < len(lines)
    ]
    level = partition_level(headings, force_top_level=force_top_level)
    starts = [b.start_line for b in headings if b.tag_level == level]

    sections: list[Section] = []
    for i, start in enumerate(starts):
        end = starts[i + 1] - 1 if i + 1 < len(starts) else upper_bound
        info = header_info_from_line(lines[start])
        sections.append(
            Section(start_line=start, end_line=end, level=level, todo_state=info.todo_state)
        )
    return tuple(sections)


def plan_moves(sections: Sequence[Section]) -> tuple[SectionMove, ...]:
    """Plan the moves that put every DONE section after the last open one.

    Moves are ordered bottom-most first. Each move's anchor already accounts
    for the lines pulled out by the moves before it, so the plan can be
    replayed one move at a time against the live document.
    """
    anchor: int | None = None
    for section in sections:
        if not section.is_done:
            anchor = section.end_line

    if anchor is None:
        # Nothing open in range: every section is DONE and already in place.
        return ()

    moves: list[SectionMove] = []
    for section in reversed([s for s in sections if s.is_done]):
        if section.start_line >= anchor:
            continue
        moves.append(SectionMove(section=section, anchor_line=anchor))
        anchor -= section.line_count
    logger.debug("Planned {} section move(s) across {} section(s)", len(moves), len(sections))
    return tuple(moves)


def move_edits(lines: Sequence[str], move: SectionMove) -> EditPlan:
    """Cut the section's lines and re-insert them right after the anchor line."""
    section = move.section
    if not (0 <= section.start_line <= section.end_line < move.anchor_line < len(lines)):
        msg = f"Move {move!r} does not fit a document of {len(lines)} lines"
        raise ValueError(msg)

    chunk = "".join(lines[section.start_line : section.end_line + 1])
    anchor_text = lines[move.anchor_line]
    if anchor_text.endswith("\n"):
        insert = TextEdit.insert(Position(move.anchor_line + 1, 0), chunk)
    else:
        # Anchor is the unterminated last line; keep lines from merging.
        insert = TextEdit.insert(
            Position(move.anchor_line, len(anchor_text)), "\n" + chunk.removesuffix("\n")
        )
    return (TextEdit.delete(Range.of_lines(section.start_line, section.end_line)), insert)
