"""Slug helpers for blog posts."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Collection

FALLBACK_SLUG = "post"
MAX_SLUG_LENGTH = 200

_NON_WORD = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Lower-case ASCII slug of ``text``.

    Accents are folded (``"Café"`` -> ``"cafe"``), every run of other
    characters becomes a single hyphen. Empty results fall back to ``post``.
    """
    folded = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    slug = _NON_WORD.sub("-", folded.lower()).strip("-")
    slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    return slug or FALLBACK_SLUG


def unique_slug(
    base: str,
    taken: Collection[str] | Callable[[str], bool],
) -> str:
    """
    Resolve ``base`` against existing slugs by suffixing ``-1``, ``-2``...

    :param base: Already slugified candidate.
    :param taken: Set of slugs in use, or a predicate answering "is taken?".
    :returns: ``base`` itself when free, otherwise the first free suffix.
    """
    is_taken = taken if callable(taken) else taken.__contains__
    if not is_taken(base):
        return base
    n = 1
    while is_taken(f"{base}-{n}"):
        n += 1
    return f"{base}-{n}"
