import httpx
import pytest

from src.field_attendance.field_attendance.common.geo import GeoPoint
from src.field_attendance.field_attendance.core.constants import UNKNOWN_LOCATION
from src.field_attendance.field_attendance.core.exceptions import UpstreamError
from src.field_attendance.field_attendance.integrations.mapping import GoogleMapsClient


def _client(handler):
    return GoogleMapsClient("maps-key", client=httpx.Client(transport=httpx.MockTransport(handler)))


def _matrix_payload(n, *, bad=()):
    rows = []
    for i in range(n):
        elements = []
        for j in range(n):
            if i == j and i in bad:
                elements.append({"status": "ZERO_RESULTS"})
            else:
                elements.append({"status": "OK", "distance": {"text": f"{i}.{j} km", "value": i * 1000 + j}})
        rows.append({"elements": elements})
    return {"status": "OK", "rows": rows}


def test_reverse_geocode_returns_first_address():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={"status": "OK", "results": [{"formatted_address": "MG Road, Bengaluru"}]})

    assert _client(handler).reverse_geocode(12.97, 77.59) == "MG Road, Bengaluru"
    assert seen["latlng"] == "12.97,77.59"
    assert seen["key"] == "maps-key"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}),
        httpx.Response(200, json={"status": "OK", "results": []}),
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>"),
    ],
)
def test_reverse_geocode_degrades_to_unknown(response):
    assert _client(lambda request: response).reverse_geocode(1.0, 2.0) == UNKNOWN_LOCATION


def test_reverse_geocode_survives_transport_error():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    assert _client(handler).reverse_geocode(1.0, 2.0) == UNKNOWN_LOCATION


def test_pairwise_distances_reads_diagonal():
    def handler(request):
        assert request.url.params["origins"] == "1.0,1.0|2.0,2.0|3.0,3.0"
        assert request.url.params["destinations"] == "2.0,2.0|3.0,3.0|4.0,4.0"
        return httpx.Response(200, json=_matrix_payload(3, bad={1}))

    points = [GeoPoint(float(i), float(i)) for i in range(1, 5)]
    elements = _client(handler).pairwise_distances(points[:-1], points[1:])

    assert [(e.status, e.distance_text) for e in elements] == [
        ("OK", "0.0 km"),
        ("ZERO_RESULTS", None),
        ("OK", "2.2 km"),
    ]
    assert [e.ok for e in elements] == [True, False, True]


def test_pairwise_distances_batches_large_days():
    calls = []

    def handler(request):
        n = len(request.url.params["origins"].split("|"))
        calls.append(n)
        return httpx.Response(200, json=_matrix_payload(n))

    points = [GeoPoint(10 + i / 100, 77.0) for i in range(24)]
    elements = _client(handler).pairwise_distances(points[:-1], points[1:])

    assert calls == [10, 10, 3]
    assert len(elements) == 23
    assert all(e.ok for e in elements)


def test_pairwise_distances_marks_malformed_rows():
    def handler(request):
        return httpx.Response(200, json={"status": "OK", "rows": [{"elements": []}]})

    points = [GeoPoint(1.0, 1.0), GeoPoint(2.0, 2.0), GeoPoint(3.0, 3.0)]
    elements = _client(handler).pairwise_distances(points[:-1], points[1:])

    assert [e.status for e in elements] == ["MALFORMED", "MALFORMED"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"status": "REQUEST_DENIED", "rows": []}),
        httpx.Response(503, text="unavailable"),
    ],
)
def test_pairwise_distances_whole_call_failure(response):
    points = [GeoPoint(1.0, 1.0), GeoPoint(2.0, 2.0)]
    with pytest.raises(UpstreamError):
        _client(lambda request: response).pairwise_distances(points[:1], points[1:])


def test_pairwise_distances_requires_aligned_inputs():
    with pytest.raises(ValueError):
        _client(lambda request: httpx.Response(200)).pairwise_distances([GeoPoint(1.0, 1.0)], [])
