"""
Record store errors.
"""
from __future__ import annotations

from enum import Enum


class RecordKind(str, Enum):
    """What a failed lookup was looking for."""

    MESSAGE = "message"
    AUTHOR = "author"
    AUTHOR_MESSAGES = "author_messages"


class RecordStoreError(Exception):
    """Base class for record store errors."""


class NotFound(RecordStoreError):
    """A lookup by identifier or author name found nothing."""

    def __init__(self, kind: RecordKind, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(self.detail)

    @property
    def detail(self) -> str:
        if self.kind == RecordKind.MESSAGE:
            return f"no message exists with id {self.key}"
        if self.kind == RecordKind.AUTHOR:
            return f"no author exists with name {self.key}"
        return f"no messages exist for author with name {self.key}"


class IdentifierExhausted(RecordStoreError):
    """Could not draw an unused identifier. Not expected in practice."""
