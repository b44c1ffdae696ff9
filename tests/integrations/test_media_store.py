import hashlib

import httpx
import pytest

from src.field_attendance.field_attendance.core.exceptions import UpstreamError
from src.field_attendance.field_attendance.integrations.media_store import CloudinaryMediaStore


def _store(handler):
    return CloudinaryMediaStore(
        cloud_name="demo",
        api_key="key-1",
        api_secret="s3cret",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_upload_signs_request_and_returns_secure_url():
    captured = {}

    def handler(request):
        captured["url"] = str(request.url)
        captured["body"] = request.read()
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/a.jpg"})

    url = _store(handler).upload(b"\xff\xd8jpeg-bytes")

    assert url == "https://res.cloudinary.com/demo/image/upload/v1/a.jpg"
    assert captured["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert b"jpeg-bytes" in captured["body"]
    assert b'name="api_key"' in captured["body"]
    assert b'name="signature"' in captured["body"]


def test_signature_is_sha1_of_sorted_params():
    store = _store(lambda request: httpx.Response(200))
    expected = hashlib.sha1(b"timestamp=1700000000s3cret").hexdigest()
    assert store._signature({"timestamp": "1700000000"}) == expected


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": {"message": "Invalid Signature"}}),
        httpx.Response(200, json={"public_id": "a"}),
        httpx.Response(200, text="not json"),
    ],
)
def test_upload_failures_raise_upstream_error(response):
    with pytest.raises(UpstreamError, match="Image upload failed"):
        _store(lambda request: response).upload(b"data")


def test_upload_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(UpstreamError):
        _store(handler).upload(b"data")
