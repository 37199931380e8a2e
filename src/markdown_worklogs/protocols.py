"""Protocols for the editor collaborator the engine drives."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from markdown_worklogs.models.edits import TextEdit


@runtime_checkable
class EditorProtocol(Protocol):
    """Protocol for anything holding a document the engine can read and edit."""

    def get_text(self) -> str:
        """Return the current document snapshot."""
        ...

    def apply_edits(self, edits: Sequence[TextEdit]) -> bool:
        """Apply a batch of edits atomically; return True once applied."""
        ...
