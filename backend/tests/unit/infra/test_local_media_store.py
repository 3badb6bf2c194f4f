"""Unit tests for the filesystem-backed media store."""

from __future__ import annotations

import pytest

from studiosite.infra.media.local_media_store import LocalMediaStore


@pytest.fixture()
def store(tmp_path) -> LocalMediaStore:
    (tmp_path / "cover.png").write_bytes(b"png")
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / ".hidden").write_text("x")
    (tmp_path / "nested").mkdir()
    return LocalMediaStore(root=str(tmp_path))


def test_list_references_skips_hidden_files_and_directories(store):
    assert sorted(store.list_references()) == ["/uploads/cover.png", "/uploads/notes.txt"]


def test_delete_existing_and_missing(store, tmp_path):
    assert store.delete("/uploads/cover.png") is True
    assert not (tmp_path / "cover.png").exists()
    assert store.delete("/uploads/cover.png") is False


@pytest.mark.parametrize(
    "reference",
    ["/uploads/../secret.txt", "/elsewhere/cover.png", "/uploads/", "/uploads/nested/../../x"],
)
def test_delete_refuses_paths_outside_the_root(store, tmp_path, reference):
    (tmp_path.parent / "secret.txt").write_text("keep")

    assert store.delete(reference) is False
    assert (tmp_path.parent / "secret.txt").exists()
    assert (tmp_path / "cover.png").exists()


def test_missing_root_lists_nothing(tmp_path):
    assert list(LocalMediaStore(root=str(tmp_path / "absent")).list_references()) == []
