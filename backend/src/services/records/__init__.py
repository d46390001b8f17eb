"""
In-memory record store for authors and messages.
"""

from .errors import IdentifierExhausted, NotFound, RecordKind, RecordStoreError
from .models import Author, Message
from .store import RecordStore

__all__ = [
    "RecordStore",
    "Author",
    "Message",
    "RecordKind",
    "RecordStoreError",
    "NotFound",
    "IdentifierExhausted",
]
