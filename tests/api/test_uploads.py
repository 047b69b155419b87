"""Image Upload — POST /posts/imageboi stores files under the upload directory.

Invariants:
    - Success answers the JSON string "Uploaded" and writes <millis><name>
    - Files above the limit answer 413 and leave nothing behind
    - A request without the "image" field answers 400
"""

import logging
from pathlib import Path

LIMIT = 2048  # matches test_settings.upload_max_bytes


async def test_upload_stores_file_with_timestamp_prefix(client, test_settings):
    res = await client.post(
        "/posts/imageboi",
        files={"image": ("cat.jpg", b"\xff\xd8\xff" + b"0" * 100, "image/jpeg")},
    )
    assert res.status_code == 200
    assert res.json() == "Uploaded"

    stored = list(Path(test_settings.upload_dir).iterdir())
    assert len(stored) == 1
    name = stored[0].name
    assert name.endswith("cat.jpg")
    assert name[: -len("cat.jpg")].isdigit()
    assert stored[0].read_bytes().startswith(b"\xff\xd8\xff")


async def test_upload_strips_directory_parts(client, test_settings):
    res = await client.post(
        "/posts/imageboi",
        files={"image": ("../../etc/evil.png", b"png-bytes", "image/png")},
    )
    assert res.status_code == 200
    stored = list(Path(test_settings.upload_dir).iterdir())
    assert [p.name.endswith("evil.png") for p in stored] == [True]


async def test_upload_over_limit_rejected(client, test_settings):
    res = await client.post(
        "/posts/imageboi",
        files={"image": ("big.jpg", b"x" * (LIMIT + 1), "image/jpeg")},
    )
    assert res.status_code == 413
    assert "too large" in res.json()["error"]
    upload_dir = Path(test_settings.upload_dir)
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


async def test_upload_exactly_at_limit_accepted(client):
    res = await client.post(
        "/posts/imageboi",
        files={"image": ("edge.jpg", b"x" * LIMIT, "image/jpeg")},
    )
    assert res.status_code == 200


async def test_upload_without_file_rejected(client):
    res = await client.post("/posts/imageboi", data={"other": "value"})
    assert res.status_code == 400
    assert res.json() == {"error": "No file uploaded in field 'image'"}


async def test_upload_with_info_logging_enabled(client, test_settings, caplog):
    caplog.set_level(logging.INFO)
    ok = await client.post(
        "/posts/imageboi", files={"image": ("ok.jpg", b"abc", "image/jpeg")},
    )
    assert ok.status_code == 200
    assert ok.json() == "Uploaded"

    big = await client.post(
        "/posts/imageboi",
        files={"image": ("big.jpg", b"0" * (LIMIT + 1), "image/jpeg")},
    )
    assert big.status_code == 413
    assert len(list(Path(test_settings.upload_dir).iterdir())) == 1
