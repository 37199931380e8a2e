"""Exceptions raised by the worklog engine."""


class NoActiveDocumentError(RuntimeError):
    """Raised when a command is invoked without a document to act on."""


class EditApplicationError(ValueError):
    """Raised when a batch of edits cannot be applied to a document."""

    def __init__(self, message: str, edits: tuple = ()) -> None:
        self.edits = edits
        super().__init__(message)
