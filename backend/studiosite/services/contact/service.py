from __future__ import annotations

import logging

from studiosite.models.contact import ContactSubmission
from studiosite.models.user import ROLE_ADMIN
from studiosite.services._shared.base import BaseService
from studiosite.services.contact.dto import ContactIn, ContactOut

log = logging.getLogger(__name__)


def to_contact_out(row: ContactSubmission) -> ContactOut:
    return ContactOut(
        id=row.id,
        name=row.name,
        email=row.email,
        company=row.company,
        service=row.service,
        message=row.message,
        consent=bool(row.consent),
        created_at=row.created_at,
    )


class ContactService(BaseService):
    """Write-once intake of contact form submissions."""

    def submit(self, dto: ContactIn) -> ContactOut:
        with self.rw_uow() as uow:
            row = ContactSubmission(
                name=dto.name.strip(),
                email=dto.email.strip().lower(),
                company=(dto.company or "").strip() or None,
                service=dto.service.strip(),
                message=dto.message.strip(),
                consent=bool(dto.consent),
            )
            uow.contacts.add(row)
            log.info("contact.submitted", extra={"email": row.email})
            return to_contact_out(row)

    def list_submissions(self) -> list[ContactOut]:
        """
        All submissions, newest first.

        :raises AuthorizationError: Unless the acting user is an admin.
        """
        self.ensure_role(ROLE_ADMIN)
        with self.ro_uow() as uow:
            return [to_contact_out(r) for r in uow.contacts.list(sort=["-created_at"])]
