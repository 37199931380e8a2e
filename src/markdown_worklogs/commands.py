"""Editor-facing worklog operations.

Each command reads a fresh snapshot from the editor, asks the core for a
line number or an edit plan, and hands complete plans back to the editor.
A lookup that finds nothing is a silent no-op.
"""

from datetime import datetime

from loguru import logger

from markdown_worklogs.config import Settings
from markdown_worklogs.core.parser.blocks import split_lines, take_snapshot
from markdown_worklogs.core.parser.headers import header_info_from_line
from markdown_worklogs.core.todo.state import compute_state_change
from markdown_worklogs.core.tree.codeblock import (
    fence_content,
    find_enclosing_fence,
    selectable_range,
)
from markdown_worklogs.core.tree.navigation import (
    Direction,
    enclosing_header,
    find_header,
    header_level_at,
    section_bounds,
)
from markdown_worklogs.core.tree.sections import collect_sections, move_edits, plan_moves
from markdown_worklogs.errors import NoActiveDocumentError
from markdown_worklogs.models.document import DocumentSnapshot
from markdown_worklogs.models.edits import EditPlan, Position, Range
from markdown_worklogs.protocols import EditorProtocol


def _snapshot(editor: EditorProtocol | None) -> tuple[EditorProtocol, DocumentSnapshot]:
    if editor is None:
        msg = "No active document to operate on"
        raise NoActiveDocumentError(msg)
    return editor, take_snapshot(editor.get_text())


# --- TODO state ---


def change_todo(
    editor: EditorProtocol | None,
    line: int,
    *,
    delta: int,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> EditPlan:
    """Move the header governing ``line`` one step through the TODO cycle.

    Args:
        editor: Document to edit.
        line: Cursor line; the nearest header at or above it is changed.
        delta: +1 for the next state, -1 for the previous one.
        settings: Whether to write completion annotations (defaults apply if None).
        now: Time used for a new completion annotation.

    Returns:
        The applied plan, empty when no header governs the line.
    """
    editor, snap = _snapshot(editor)
    header_line = enclosing_header(snap.blocks, line)
    if header_line is None:
        logger.debug("No header at or above line {}, nothing to change", line)
        return ()

    settings = settings or Settings()
    info = header_info_from_line(snap.lines[header_line])
    plan = compute_state_change(
        snap.lines,
        header_line,
        info,
        delta,
        insert_timestamp=settings.insert_closed_timestamp,
        now=now,
    )
    if plan and editor.apply_edits(plan):
        logger.info("Header on line {} moved from {!r}", header_line + 1, info.todo_state or "-")
    return plan


def increase_todo(
    editor: EditorProtocol | None,
    line: int,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> EditPlan:
    return change_todo(editor, line, delta=1, settings=settings, now=now)


def decrease_todo(
    editor: EditorProtocol | None,
    line: int,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> EditPlan:
    return change_todo(editor, line, delta=-1, settings=settings, now=now)


# --- Navigation ---


def goto_header(
    editor: EditorProtocol | None,
    line: int,
    *,
    direction: Direction,
    min_level: int | None = None,
    exact_level: int | None = None,
) -> int | None:
    """Line of the next/previous header from ``line``, excluding ``line`` itself."""
    _, snap = _snapshot(editor)
    return find_header(
        snap.blocks,
        direction=direction,
        from_line=line,
        min_level=min_level,
        exact_level=exact_level,
    )


def goto_next_header(
    editor: EditorProtocol | None,
    line: int,
    *,
    min_level: int | None = None,
    exact_level: int | None = None,
) -> int | None:
    return goto_header(
        editor, line, direction=Direction.FORWARD, min_level=min_level, exact_level=exact_level
    )


def goto_previous_header(
    editor: EditorProtocol | None,
    line: int,
    *,
    min_level: int | None = None,
    exact_level: int | None = None,
) -> int | None:
    return goto_header(
        editor, line, direction=Direction.BACKWARD, min_level=min_level, exact_level=exact_level
    )


def goto_next_top_level_header(editor: EditorProtocol | None, line: int) -> int | None:
    return goto_header(editor, line, direction=Direction.FORWARD, exact_level=1)


def goto_previous_top_level_header(editor: EditorProtocol | None, line: int) -> int | None:
    return goto_header(editor, line, direction=Direction.BACKWARD, exact_level=1)


def goto_parent_header(editor: EditorProtocol | None, line: int) -> int | None:
    """Nearest header above the enclosing one with a lower level."""
    _, snap = _snapshot(editor)
    header_line = enclosing_header(snap.blocks, line)
    if header_line is None:
        return None
    level = header_level_at(snap.blocks, header_line)
    if level <= 1:
        return None
    return find_header(
        snap.blocks, direction=Direction.BACKWARD, from_line=header_line, max_level=level - 1
    )


def goto_sibling_header(
    editor: EditorProtocol | None, line: int, *, direction: Direction
) -> int | None:
    """Next/previous header at the enclosing header's level, within the same parent."""
    _, snap = _snapshot(editor)
    header_line = enclosing_header(snap.blocks, line)
    if header_line is None:
        return None
    level = header_level_at(snap.blocks, header_line)

    lower, upper = 0, snap.last_line
    if level > 1:
        parent = find_header(
            snap.blocks, direction=Direction.BACKWARD, from_line=header_line, max_level=level - 1
        )
        if parent is not None:
            lower, upper = section_bounds(
                snap.blocks,
                header_line=parent,
                level=header_level_at(snap.blocks, parent),
                last_line=snap.last_line,
            )

    return find_header(
        snap.blocks,
        direction=direction,
        from_line=header_line,
        exact_level=level,
        lower_bound=lower,
        upper_bound=upper,
    )


# --- Reorganize ---


def reorganize(
    editor: EditorProtocol | None,
    *,
    lower_bound: int,
    upper_bound: int,
    force_top_level: bool,
) -> int:
    """Sink DONE sections below open ones within ``[lower_bound, upper_bound]``.

    Moves are planned once from the current snapshot, then applied one at a
    time. Each move is its own atomic edit whose text is cut from the
    document as it stands after the previous move.

    Returns:
        Number of sections moved.
    """
    editor, snap = _snapshot(editor)
    upper_bound = min(upper_bound, snap.last_line)
    if lower_bound > upper_bound:
        return 0

    sections = collect_sections(
        snap.blocks,
        snap.lines,
        lower_bound=lower_bound,
        upper_bound=upper_bound,
        force_top_level=force_top_level,
    )
    moved = 0
    for move in plan_moves(sections):
        lines = split_lines(editor.get_text())
        if not editor.apply_edits(move_edits(lines, move)):
            logger.warning(
                "Editor rejected move of section at line {}", move.section.start_line + 1
            )
            break
        moved += 1

    if moved:
        logger.info("Moved {} DONE section(s) to the bottom", moved)
    return moved


def sort_done_to_bottom(editor: EditorProtocol | None) -> int:
    """Reorganize the whole document by its level-1 sections."""
    _, snap = _snapshot(editor)
    return reorganize(editor, lower_bound=0, upper_bound=snap.last_line, force_top_level=True)


def sort_current_section(editor: EditorProtocol | None, line: int) -> int:
    """Reorganize the children of the header enclosing ``line``."""
    _, snap = _snapshot(editor)
    header_line = enclosing_header(snap.blocks, line)
    if header_line is None:
        logger.debug("No header at or above line {}, nothing to sort", line)
        return 0

    lower, upper = section_bounds(
        snap.blocks,
        header_line=header_line,
        level=header_level_at(snap.blocks, header_line),
        last_line=snap.last_line,
    )
    return reorganize(editor, lower_bound=lower, upper_bound=upper, force_top_level=False)


# --- Code blocks ---


def select_current_codeblock(editor: EditorProtocol | None, line: int) -> Range | None:
    """Selection covering the interior of the fence around ``line``."""
    _, snap = _snapshot(editor)
    fence = find_enclosing_fence(snap.blocks, line)
    if fence is None:
        return None
    interior = selectable_range(fence)
    if interior is None:
        return None
    first, last = interior
    return Range(Position(first, 0), Position(last, len(snap.lines[last].rstrip("\r\n"))))


def copy_current_codeblock(editor: EditorProtocol | None, line: int) -> str | None:
    """Content of the fence around ``line``; the caller owns the clipboard."""
    _, snap = _snapshot(editor)
    fence = find_enclosing_fence(snap.blocks, line)
    return None if fence is None else fence_content(fence)
