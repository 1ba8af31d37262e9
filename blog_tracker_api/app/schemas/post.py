"""
Pydantic models for blog posts.

``PostInput`` accepts the raw form fields, all optional, so that
missing and blank values reach the validator and produce the same
messages regardless of how the client encoded the request.
``PostRead`` is the full post and ``PostSummary`` the list view with
an excerpt and a human readable date.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from blog_tracker_api.app.core.formatting import DEFAULT_EXCERPT_LENGTH, create_excerpt, format_date
from blog_tracker_api.app.schemas.entry import Entry

POST_FIELDS = frozenset({"title", "author", "content"})


class PostInput(BaseModel):
    """Schema for creating or replacing a post."""

    title: Optional[str] = Field(None, examples=["My first trip"])
    author: Optional[str] = Field(None, examples=["Bo"])
    content: Optional[str] = Field(None, examples=["It all started at the airport..."])


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: int
    title: str
    author: str
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entry(cls, entry: Entry) -> "PostRead":
        return cls(
            id=entry.id,
            title=entry.fields["title"],
            author=entry.fields["author"],
            content=entry.fields["content"],
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class PostSummary(BaseModel):
    """List view of a post."""

    id: int
    title: str
    author: str
    excerpt: str
    created_at: datetime
    created_display: str

    @classmethod
    def from_post(cls, post: PostRead, excerpt_length: int = DEFAULT_EXCERPT_LENGTH) -> "PostSummary":
        return cls(
            id=post.id,
            title=post.title,
            author=post.author,
            excerpt=create_excerpt(post.content, excerpt_length),
            created_at=post.created_at,
            created_display=format_date(post.created_at),
        )
