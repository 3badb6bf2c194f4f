from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


class MediaStore(Protocol):
    """Port for the file storage that holds uploaded post images.

    ``reference`` is the value stored on a post (e.g. ``/uploads/abc.png``).
    """

    def delete(self, reference: str) -> bool: ...

    def list_references(self) -> Iterable[str]: ...


class InMemoryMediaStore(MediaStore):
    """Set-backed media store used in unit tests."""

    def __init__(self, references: Iterable[str] = ()) -> None:
        self.references: set[str] = set(references)
        self.deleted: list[str] = []

    def delete(self, reference: str) -> bool:
        if reference not in self.references:
            return False
        self.references.discard(reference)
        self.deleted.append(reference)
        return True

    def list_references(self) -> Iterable[str]:
        return sorted(self.references)
