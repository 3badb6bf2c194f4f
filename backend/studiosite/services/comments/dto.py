from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CommentCreateIn:
    """
    Public comment submission.

    :param post_id: Target post.
    :param author_name: Display name.
    :param author_email: Contact address, never shown publicly.
    :param content: Comment body.
    """

    post_id: int
    author_name: str
    author_email: str
    content: str


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    post_id: int
    author_name: str
    author_email: str
    content: str
    status: str
    created_at: datetime
    updated_at: datetime
