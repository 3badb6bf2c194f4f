from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalMediaStore:
    """
    Filesystem-backed media store.

    Files live flat under ``root`` and are referenced on posts as
    ``<url_prefix><filename>`` (e.g. ``/uploads/cover.png``).

    :param root: Upload directory.
    :param url_prefix: Public URL prefix stored on posts.
    """

    root: str
    url_prefix: str = "/uploads/"

    def _path_for(self, reference: str) -> str | None:
        if not reference.startswith(self.url_prefix):
            return None
        name = reference[len(self.url_prefix) :]
        if not name or name != os.path.basename(name) or name in (".", ".."):
            return None
        root = os.path.realpath(self.root)
        path = os.path.realpath(os.path.join(root, name))
        if os.path.dirname(path) != root:
            return None
        return path

    def delete(self, reference: str) -> bool:
        """
        Remove the file behind ``reference``.

        :returns: ``True`` when a file was removed, ``False`` for foreign,
            unsafe or already missing references.
        :raises OSError: When the file exists but cannot be removed.
        """
        path = self._path_for(reference)
        if path is None:
            log.warning("media.reference.rejected", extra={"path": reference})
            return False
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        return True

    def list_references(self) -> Iterator[str]:
        """Yield a reference for every regular file in ``root``."""
        if not os.path.isdir(self.root):
            return
        with os.scandir(self.root) as entries:
            for entry in entries:
                if entry.is_file() and not entry.name.startswith("."):
                    yield f"{self.url_prefix}{entry.name}"
