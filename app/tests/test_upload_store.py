import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.services import upload_service
from app.services.upload_service import (
    UploadStore, generate_file_name, is_allowed_file, to_public_url,
)
from app.utils.exceptions import (
    ErrorCode, FileTooLargeException, InvalidFileTypeException, TooManyFilesException,
)


def make_upload(name: str, content: bytes = b"x" * 32, content_type: str = "image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.parametrize("content_type, file_name, allowed", [
    ("image/jpeg",               "car.jpg",     True),
    ("image/png",                "car",         True),
    ("image/gif",                "car.bin",     True),
    ("image/webp",               None,          True),
    ("application/octet-stream", "scan.tiff",   True),
    ("IMAGE/PNG",                "car.png",     True),
    ("image/png; charset=binary", "car",        True),
    ("text/plain",               "photo.JPEG",  True),
    ("text/plain",               "photo.WebP",  True),
    ("application/pdf",          "brochure.pdf", False),
    ("text/plain",               "notes.txt",   False),
    ("text/plain",               "jpg",         False),
    ("image/svg+xml",            "logo.svg",    False),
    (None,                       None,          False),
])
def test_is_allowed_file(content_type, file_name, allowed):
    assert is_allowed_file(content_type, file_name) is allowed


def test_generate_file_name_keeps_extension():
    name = generate_file_name("Front View.JPG")
    assert re.fullmatch(r"\d{13}-\d{1,9}\.jpg", name)


def test_generate_file_name_without_extension():
    assert re.fullmatch(r"\d{13}-\d{1,9}", generate_file_name("blob"))


def test_generated_names_do_not_collide():
    names = {generate_file_name("a.png") for _ in range(200)}
    assert len(names) == 200


def test_to_public_url():
    assert to_public_url("/uploads/vehicles/a.jpg", "http://testserver/") == "http://testserver/uploads/vehicles/a.jpg"
    assert to_public_url("/uploads/vehicles/a.jpg", "https://cdn.example.com") == "https://cdn.example.com/uploads/vehicles/a.jpg"


class TestUploadStore:

    def test_save_all_creates_directory_and_keeps_order(self, tmp_path):
        directory = tmp_path / "nested" / "vehicles"
        store = UploadStore(directory, "/uploads/vehicles")
        uploads = [make_upload(f"img{i}.png", content=bytes([i]) * 10, content_type="image/png") for i in range(3)]

        stored = store.save_all(uploads)

        assert directory.is_dir()
        assert [s.originalName for s in stored] == ["img0.png", "img1.png", "img2.png"]
        for i, s in enumerate(stored):
            assert s.path == f"/uploads/vehicles/{s.fileName}"
            assert s.diskPath.read_bytes() == bytes([i]) * 10
            assert s.size == 10

    def test_no_files_does_not_touch_disk(self, tmp_path):
        store = UploadStore(tmp_path / "vehicles", "/uploads/vehicles")
        assert store.save_all([]) == []
        assert not (tmp_path / "vehicles").exists()

    def test_empty_file_slots_are_skipped(self, tmp_path):
        store = UploadStore(tmp_path, "/uploads/vehicles")
        stored = store.save_all([make_upload("", b"", "application/octet-stream"), make_upload("a.jpg")])
        assert len(stored) == 1

    def test_invalid_type_rejects_whole_batch_before_writing(self, tmp_path):
        directory = tmp_path / "vehicles"
        store = UploadStore(directory, "/uploads/vehicles")
        uploads = [make_upload("ok.jpg"), make_upload("evil.exe", content_type="application/x-msdownload")]

        with pytest.raises(InvalidFileTypeException) as exc:
            store.save_all(uploads)

        assert exc.value.status_code == 400
        assert exc.value.error_code == ErrorCode.INVALID_FILE_TYPE
        assert not directory.exists()

    def test_oversized_file_removes_everything_written(self, tmp_path):
        store = UploadStore(tmp_path, "/uploads/vehicles", max_size=100)
        uploads = [make_upload("small.jpg", b"a" * 100), make_upload("big.jpg", b"b" * 101)]

        with pytest.raises(FileTooLargeException) as exc:
            store.save_all(uploads)

        assert exc.value.error_code == ErrorCode.FILE_TOO_LARGE
        assert list(tmp_path.iterdir()) == []

    def test_file_exactly_at_limit_is_accepted(self, tmp_path):
        store = UploadStore(tmp_path, "/uploads/vehicles", max_size=100)
        stored = store.save_all([make_upload("edge.jpg", b"a" * 100)])
        assert stored[0].size == 100

    def test_too_many_files(self, tmp_path):
        store = UploadStore(tmp_path, "/uploads/vehicles", max_files=2)
        with pytest.raises(TooManyFilesException):
            store.save_all([make_upload(f"{i}.jpg") for i in range(3)])
        assert list(tmp_path.iterdir()) == []

    def test_discard_and_delete_paths(self, tmp_path):
        store = UploadStore(tmp_path, "/uploads/vehicles")
        first, second = store.save_all([make_upload("a.jpg"), make_upload("b.jpg")])

        store.discard([first])
        assert not first.diskPath.exists()

        keep = tmp_path / "keep.txt"
        keep.write_text("keep")
        store.delete_paths([second.path, "/other/keep.txt", "/uploads/vehicles/missing.jpg"])
        assert not second.diskPath.exists()
        assert keep.exists()

    def test_name_collision_keeps_existing_file(self, tmp_path, monkeypatch):
        existing = tmp_path / "1700000000000-42.jpg"
        existing.write_bytes(b"someone else's photo")
        names = iter(["1700000000000-42.jpg", "1700000000000-43.jpg"])
        monkeypatch.setattr(upload_service, "generate_file_name", lambda original: next(names))

        store = UploadStore(tmp_path, "/uploads/vehicles")
        (stored,) = store.save_all([make_upload("new.jpg", b"new photo")])

        assert stored.fileName == "1700000000000-43.jpg"
        assert stored.diskPath.read_bytes() == b"new photo"
        assert existing.read_bytes() == b"someone else's photo"

    def test_is_writable(self, tmp_path):
        store = UploadStore(tmp_path / "missing", "/uploads/vehicles")
        assert not store.is_writable()
        store.ensure_directory()
        assert store.is_writable()
