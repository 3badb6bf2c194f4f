"""Housekeeping for uploaded post images."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from studiosite.services._shared.base import BaseService, ServiceContext
from studiosite.services._shared.ports.media_store import MediaStore

log = logging.getLogger(__name__)


@dataclass(slots=True)
class PruneReport:
    """
    Outcome of a prune run.

    :param orphans: References with no post pointing at them.
    :param deleted: Orphans actually removed (empty on a dry run).
    :param failed: Orphans whose removal raised ``OSError``.
    """

    orphans: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class MediaService(BaseService):
    """Compare stored files with post references and remove the leftovers."""

    def __init__(self, *, store: MediaStore, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.store = store

    def prune(self, *, dry_run: bool = False) -> PruneReport:
        with self.ro_uow() as uow:
            referenced = uow.posts.featured_images()

        report = PruneReport(
            orphans=sorted(ref for ref in self.store.list_references() if ref not in referenced)
        )
        if dry_run:
            return report

        for ref in report.orphans:
            try:
                if self.store.delete(ref):
                    report.deleted.append(ref)
            except OSError:
                log.exception("media.prune.delete_failed", extra={"path": ref})
                report.failed.append(ref)
        log.info("media.prune.done deleted=%d failed=%d", len(report.deleted), len(report.failed))
        return report
