"""
Services module - Domain logic layer.

This module provides:
- records: In-memory authors/messages store
- events: Live notification fanout for created records
"""

from .events import MESSAGE_CREATED, NotificationHub, Subscription
from .records import (
    Author,
    IdentifierExhausted,
    Message,
    NotFound,
    RecordKind,
    RecordStore,
    RecordStoreError,
)

__all__ = [
    # Records
    "RecordStore",
    "Author",
    "Message",
    "RecordKind",
    "RecordStoreError",
    "NotFound",
    "IdentifierExhausted",
    # Events
    "NotificationHub",
    "Subscription",
    "MESSAGE_CREATED",
]
