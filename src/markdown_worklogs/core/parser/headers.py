"""Read TODO state and layout from a header line."""

import re
from datetime import datetime

from markdown_worklogs.config import CLOSED_KEYWORD, TODO_STATES
from markdown_worklogs.models.document import HeaderInfo

_HEADER_RE = re.compile(r"^(\s*)(#+)(\s*)(\S*)")

_ANNOTATION_RE = re.compile(
    r"^\s*" + re.escape(CLOSED_KEYWORD) + r" \[\d{4}-\d{1,2}-\d{1,2} \d{1,2}:\d{1,2}\]\s*$"
)


def header_info_from_line(line_text: str) -> HeaderInfo:
    """Describe a header line; non-header lines get the zero value (level 0)."""
    match = _HEADER_RE.match(line_text.rstrip("\r\n"))
    if match is None:
        return HeaderInfo()

    leading, markers, trailing, first_word = match.groups()
    todo_state = first_word if first_word in TODO_STATES else ""
    return HeaderInfo(
        leading_space_width=len(leading),
        level=len(markers),
        trailing_space_width=len(trailing),
        first_word=first_word,
        todo_state=todo_state,
        todo_state_index=TODO_STATES.index(todo_state),
    )


def annotation_indent(info: HeaderInfo) -> int:
    """Indent that lines the annotation up one column past the marker run."""
    return info.leading_space_width + info.level + 1


def format_completion_annotation(now: datetime, indent: int = 0) -> str:
    """Render ``CLOSED: [Y-M-D H:Min]`` with unpadded components, no line break."""
    stamp = f"{now.year}-{now.month}-{now.day} {now.hour}:{now.minute}"
    return f"{' ' * indent}{CLOSED_KEYWORD} [{stamp}]"


def is_completion_annotation(line_text: str) -> bool:
    return _ANNOTATION_RE.match(line_text.rstrip("\r\n")) is not None
