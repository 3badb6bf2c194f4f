"""Contact submission repository (append-only)."""

from __future__ import annotations

from studiosite.models.contact import ContactSubmission
from studiosite.repositories.base import BaseRepository


class ContactSubmissionRepository(BaseRepository[ContactSubmission]):
    """Persistence-only repository for :class:`ContactSubmission`.

    Submissions are write-once, so no update whitelist is exposed.
    """

    model = ContactSubmission

    def _sortable_fields(self):
        return {"created_at": ContactSubmission.created_at}

    def _filterable_fields(self):
        return {"email": ContactSubmission.email, "service": ContactSubmission.service}
