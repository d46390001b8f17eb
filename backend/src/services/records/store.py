"""
Record Store - In-memory authors, messages and the author -> messages index.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from ..events.ports import MESSAGE_CREATED, EventPublisher
from .errors import NotFound, RecordKind
from .ids import DEFAULT_ID_BYTES, new_unique_token
from .models import Author, Message

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Owns the author, message and author-index tables.

    Reads are synchronous. Writes are coroutines serialized behind an
    asyncio.Lock; the created message is published after the lock is released.

    Usage:
        store = RecordStore(publisher=NotificationHub())
        message = await store.create_message("hello", "Ada", author_age=36)
        store.list_messages("Ada")
    """

    def __init__(
        self,
        publisher: Optional[EventPublisher] = None,
        id_bytes: int = DEFAULT_ID_BYTES,
    ) -> None:
        """
        Args:
            publisher: Receives a snapshot of every created message
            id_bytes: Random bytes per identifier (hex length is twice this)
        """
        self._publisher = publisher
        self._id_bytes = id_bytes
        self._lock = asyncio.Lock()

        # id -> Message
        self._messages: Dict[str, Message] = {}
        # name -> Author
        self._authors: Dict[str, Author] = {}
        # Author ids, separate namespace from message ids
        self._author_ids: set[str] = set()
        # author id -> message ids in creation order
        self._author_messages: Dict[str, List[str]] = {}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_message(self, message_id: str) -> Message:
        message = self._messages.get(message_id)
        if message is None:
            raise NotFound(RecordKind.MESSAGE, message_id)
        return message

    def list_messages(self, author_name: str) -> List[Message]:
        """
        Messages of an author in creation order.

        Raises NotFound for an unknown author, and also when the author is
        known but has no indexed messages.
        """
        author = self._authors.get(author_name)
        if author is None:
            raise NotFound(RecordKind.AUTHOR, author_name)

        message_ids = self._author_messages.get(author.id)
        if not message_ids:
            raise NotFound(RecordKind.AUTHOR_MESSAGES, author_name)

        return [self._messages[message_id] for message_id in message_ids]

    def list_authors(self) -> List[Author]:
        return list(self._authors.values())

    def count_messages(self) -> int:
        return len(self._messages)

    def count_authors(self) -> int:
        return len(self._authors)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_message(
        self,
        content: Optional[str],
        author_name: str,
        author_age: Optional[int] = None,
        author_nationality: Optional[str] = None,
    ) -> Message:
        """
        Create a message, creating its author on first use of the name.

        Age and nationality only apply when the author is new; an existing
        author is reused unchanged.
        """
        async with self._lock:
            author = self._authors.get(author_name)
            if author is None:
                author_id = new_unique_token(self._author_ids, self._id_bytes)
                author = Author(
                    id=author_id,
                    name=author_name,
                    age=author_age,
                    nationality=author_nationality,
                )
                self._authors[author_name] = author
                self._author_ids.add(author_id)
                logger.debug(f"RecordStore: Created author {author_name!r} ({author_id})")

            message_id = new_unique_token(self._messages, self._id_bytes)
            message = Message(id=message_id, content=content, author=author)
            self._messages[message_id] = message
            self._author_messages.setdefault(author.id, []).append(message_id)
            snapshot = message.snapshot()

        logger.debug(f"RecordStore: Created message {message_id} by {author_name!r}")

        if self._publisher is not None:
            self._publisher.publish(MESSAGE_CREATED, snapshot)

        return message

    async def update_message(self, message_id: str, content: Optional[str]) -> Message:
        """Replace the content of a message. The author is left untouched."""
        async with self._lock:
            message = self.get_message(message_id)
            message.content = content

        logger.debug(f"RecordStore: Updated message {message_id}")
        return message
