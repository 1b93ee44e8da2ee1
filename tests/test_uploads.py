"""Photo upload tests."""

import re

from civic_reporter.core.errors import StorageError
from civic_reporter.services import upload_service

FORM = {
    "title": "Overflowing dumpster",
    "description": "Trash has not been collected behind the library for ten days.",
    "category": "sanitation",
}
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_is_stored_under_generated_filename(client, upload_dir):
    r = client.post("/api/issues", data=FORM, files={"image": ("dumpster.PNG", PNG, "image/png")})
    assert r.status_code == 201

    issue = client.get(f"/api/issues/{r.json()['id']}").json()
    filename = issue["image_path"]
    assert re.fullmatch(r"\d+-\d+\.png", filename)
    assert "/" not in filename
    assert (upload_dir / filename).read_bytes() == PNG

    served = client.get(f"/uploads/{filename}")
    assert served.status_code == 200
    assert served.content == PNG


def test_non_image_upload_is_rejected(client, upload_dir):
    r = client.post("/api/issues", data=FORM, files={"image": ("notes.txt", b"hello", "text/plain")})
    assert r.status_code == 400
    assert r.json()["detail"] == "Only images are allowed!"
    assert client.get("/api/issues").json()["total"] == 0
    assert list(upload_dir.iterdir()) == []


def test_oversized_upload_is_rejected_and_nothing_persisted(client, upload_dir):
    six_mb = b"\xff" * (6 * 1024 * 1024)
    r = client.post("/api/issues", data=FORM, files={"image": ("big.jpg", six_mb, "image/jpeg")})
    assert r.status_code == 413
    assert "too large" in r.json()["detail"]
    assert client.get("/api/issues").json()["total"] == 0
    assert list(upload_dir.iterdir()) == []


def test_upload_at_limit_is_accepted(client, monkeypatch):
    monkeypatch.setattr(upload_service.settings, "max_upload_bytes", 1024)
    r = client.post("/api/issues", data=FORM, files={"image": ("edge.jpg", b"\x01" * 1024, "image/jpeg")})
    assert r.status_code == 201


def test_invalid_form_does_not_write_upload(client, upload_dir):
    form = {**FORM, "category": "unknown"}
    r = client.post("/api/issues", data=form, files={"image": ("a.png", PNG, "image/png")})
    assert r.status_code == 422
    assert list(upload_dir.iterdir()) == []


def test_failed_insert_removes_written_upload(client, upload_dir, monkeypatch):
    from civic_reporter.services import issue_service

    def broken(db, data, image_path=None):
        assert (upload_dir / image_path).exists()
        raise StorageError("disk I/O error")

    monkeypatch.setattr(issue_service, "create_issue", broken)

    r = client.post("/api/issues", data=FORM, files={"image": ("a.png", PNG, "image/png")})
    assert r.status_code == 500
    assert r.json()["detail"] == "disk I/O error"
    assert list(upload_dir.iterdir()) == []


def test_generated_filenames_keep_extension_and_differ():
    names = {upload_service.generate_filename("photo.JPEG") for _ in range(20)}
    assert len(names) == 20
    assert all(n.endswith(".jpeg") for n in names)
    assert upload_service.generate_filename(None).count(".") == 0


def test_name_collision_never_overwrites_existing_upload(client, upload_dir, monkeypatch):
    (upload_dir / "1700000000000-1.png").write_bytes(b"earlier photo")
    names = iter(["1700000000000-1.png", "1700000000000-2.png"])
    monkeypatch.setattr(upload_service, "generate_filename", lambda original: next(names))

    r = client.post("/api/issues", data=FORM, files={"image": ("a.png", PNG, "image/png")})
    assert r.status_code == 201

    issue = client.get(f"/api/issues/{r.json()['id']}").json()
    assert issue["image_path"] == "1700000000000-2.png"
    assert (upload_dir / "1700000000000-1.png").read_bytes() == b"earlier photo"
    assert (upload_dir / "1700000000000-2.png").read_bytes() == PNG
