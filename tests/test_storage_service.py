"""Tests for upload storage."""

import pytest

from app.backend.services.storage_service import StorageError, UploadStorage


class TestUploadStorage:
    """Tests for UploadStorage."""

    def test_save_generates_unique_names(self, tmp_path):
        storage = UploadStorage(tmp_path / "uploads")

        first = storage.save("report.PDF", b"one")
        second = storage.save("report.PDF", b"two")

        assert first != second
        assert first.endswith(".pdf")
        assert storage.read(first) == b"one"
        assert storage.read(second) == b"two"

    def test_path_ignores_directories(self, tmp_path):
        storage = UploadStorage(tmp_path)
        assert storage.path_for("../../etc/passwd") == tmp_path / "passwd"

    def test_delete(self, tmp_path):
        storage = UploadStorage(tmp_path)
        filename = storage.save("a.pdf", b"data")

        assert storage.delete(filename) is True
        assert not storage.path_for(filename).exists()

    def test_delete_missing_file_is_tolerated(self, tmp_path):
        assert UploadStorage(tmp_path).delete("gone.pdf") is False

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UploadStorage(tmp_path).read("gone.pdf")

    def test_delete_failure_raises_storage_error(self, tmp_path):
        storage = UploadStorage(tmp_path)
        # A directory cannot be unlinked like a file
        (tmp_path / "folder.pdf").mkdir()

        with pytest.raises(StorageError):
            storage.delete("folder.pdf")
