"""Cycle a header's TODO state and keep its completion annotation in sync."""

from collections.abc import Sequence
from datetime import datetime

from markdown_worklogs.config import DONE_STATE, TODO_STATES
from markdown_worklogs.core.parser.headers import (
    annotation_indent,
    format_completion_annotation,
    is_completion_annotation,
)
from markdown_worklogs.models.document import HeaderInfo
from markdown_worklogs.models.edits import EditPlan, Position, Range, TextEdit


def next_state_index(index: int, delta: int) -> int:
    """Step through the state cycle, wrapping in both directions."""
    if delta not in (1, -1):
        msg = f"delta must be +1 or -1, got {delta!r}"
        raise ValueError(msg)
    return (index + delta) % len(TODO_STATES)


def _line_removal(lines: Sequence[str], line: int) -> Range:
    """Range removing ``line`` entirely, line break included."""
    if lines[line].endswith("\n"):
        return Range.of_lines(line, line)
    # Last line without a break: eat the break that precedes it instead.
    previous = lines[line - 1].rstrip("\r\n")
    return Range(Position(line - 1, len(previous)), Position(line, len(lines[line])))


def _state_word_edit(
    line_text: str, header_line: int, info: HeaderInfo, new_state: str
) -> TextEdit:
    start = info.prefix_width
    if info.todo_state_index == 0:
        return TextEdit.insert(Position(header_line, start), f"{new_state} ")

    word_end = start + len(info.todo_state)
    has_space = word_end < len(line_text)
    end = word_end + 1 if has_space else word_end
    text = f"{new_state} " if new_state and has_space else new_state
    return TextEdit.replace(Range(Position(header_line, start), Position(header_line, end)), text)


def compute_state_change(
    lines: Sequence[str],
    header_line: int,
    info: HeaderInfo,
    delta: int,
    *,
    insert_timestamp: bool,
    now: datetime | None = None,
) -> EditPlan:
    """Build the edits that move the header at ``header_line`` one state along.

    Args:
        lines: Document lines, line breaks kept.
        header_line: Line of the header to change.
        info: Header info parsed from that line.
        delta: +1 to move forward through the cycle, -1 to move back.
        insert_timestamp: Whether entering DONE writes a completion annotation.
        now: Local time for the annotation (defaults to the current time).

    Returns:
        The edit plan, or an empty plan when the line is not a header.
    """
    if not info.is_header:
        return ()

    new_state = TODO_STATES[next_state_index(info.todo_state_index, delta)]
    line_text = lines[header_line].rstrip("\r\n")
    edits = [_state_word_edit(line_text, header_line, info, new_state)]

    below = header_line + 1
    has_annotation = below < len(lines) and is_completion_annotation(lines[below])

    if new_state == DONE_STATE:
        if insert_timestamp:
            stamp = format_completion_annotation(now or datetime.now(), annotation_indent(info))
            if has_annotation:
                # Refresh a leftover annotation rather than stacking a second one.
                old = lines[below].rstrip("\r\n")
                edits.append(
                    TextEdit.replace(Range(Position(below, 0), Position(below, len(old))), stamp)
                )
            else:
                edits.append(TextEdit.insert(Position(header_line, len(line_text)), "\n" + stamp))
    elif has_annotation:
        edits.append(TextEdit.delete(_line_removal(lines, below)))

    return tuple(edits)
