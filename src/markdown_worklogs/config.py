"""Configuration constants and settings for markdown-worklogs."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

# Header states, in cycle order. Index 0 is "no state".
TODO_STATES: tuple[str, ...] = ("", "TODO", "DONE")

DONE_STATE = "DONE"

# Keyword of the completion annotation written below DONE headers.
CLOSED_KEYWORD = "CLOSED:"

# Environment variable that toggles the completion annotation.
INSERT_TIMESTAMP_ENV = "MARKDOWN_WORKLOGS_INSERT_TIMESTAMP"

_FALSY = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    """Read-only settings passed explicitly into state changes."""

    insert_closed_timestamp: bool = True


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from the environment, falling back to defaults."""
    env = os.environ if environ is None else environ
    raw = env.get(INSERT_TIMESTAMP_ENV)
    if raw is None or not raw.strip():
        return Settings()
    return Settings(insert_closed_timestamp=raw.strip().lower() not in _FALSY)
