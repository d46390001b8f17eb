"""
Record models - Authors and the messages they write.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Author:
    """A named writer. Identity is keyed by name; never mutated after creation.

    Attributes:
        id: Opaque hex token
        name: Natural key
        age: Optional age
        nationality: Optional nationality
    """

    id: str
    name: str
    age: Optional[int] = None
    nationality: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "nationality": self.nationality,
        }


@dataclass(slots=True)
class Message:
    """A piece of content attributed to exactly one Author.

    Only ``content`` changes after creation (see RecordStore.update_message).
    """

    id: str
    content: Optional[str]
    author: Author

    def snapshot(self) -> "Message":
        """Copy detached from later updates, used for event fanout."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Shape shared by HTTP responses and pushed events."""
        return {
            "id": self.id,
            "content": self.content,
            "author": self.author.to_dict(),
        }
