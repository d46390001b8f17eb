"""
Web API Schemas - Pydantic models for request/response
"""
from typing import Optional

from pydantic import BaseModel, Field

from ..services.records import Author, Message


class AuthorInput(BaseModel):
    name: str = Field(..., description="Author name, identifies the author")
    age: Optional[int] = None
    nationality: Optional[str] = None


class MessageInput(BaseModel):
    """Request to create a message."""
    content: Optional[str] = None
    author: AuthorInput


class UpdateMessageRequest(BaseModel):
    """Request to replace the content of a message."""
    content: Optional[str] = None


class AuthorResponse(BaseModel):
    id: str
    name: str
    age: Optional[int] = None
    nationality: Optional[str] = None

    @classmethod
    def from_record(cls, author: Author) -> "AuthorResponse":
        return cls(**author.to_dict())


class MessageResponse(BaseModel):
    id: str
    content: Optional[str] = None
    author: AuthorResponse

    @classmethod
    def from_record(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id,
            content=message.content,
            author=AuthorResponse.from_record(message.author),
        )


class CountResponse(BaseModel):
    count: int
