"""Worklog tools for Markdown: TODO states, header navigation, DONE sorting."""

from markdown_worklogs.config import Settings
from markdown_worklogs.editor import TextBuffer, WorklogFile
from markdown_worklogs.protocols import EditorProtocol

__all__ = ["EditorProtocol", "Settings", "TextBuffer", "WorklogFile"]
