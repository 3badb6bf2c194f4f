from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ContactIn:
    """
    Contact form payload.

    :param consent: Whether the sender agreed to be contacted back.
    """

    name: str
    email: str
    service: str
    message: str
    company: str | None = None
    consent: bool = False


@dataclass(frozen=True, slots=True)
class ContactOut:
    id: int
    name: str
    email: str
    company: str | None
    service: str
    message: str
    consent: bool
    created_at: datetime
