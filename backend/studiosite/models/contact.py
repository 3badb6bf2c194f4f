"""Contact form submissions."""

from __future__ import annotations

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studiosite.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class ContactSubmission(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Write-once enquiry sent from the public contact form."""

    __tablename__ = "contact_submissions"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    company: Mapped[str | None] = mapped_column(String(120))
    service: Mapped[str] = mapped_column(String(80), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    consent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
