from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import httpx

from ..common.geo import GeoPoint
from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS, UNKNOWN_LOCATION
from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatrixElement:
    """Distance for one origin/destination pair as reported by the provider."""

    status: str
    distance_text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "OK" and bool(self.distance_text)


class MappingService(Protocol):
    def reverse_geocode(self, lat: float, lng: float) -> str:
        """Human-readable address; never raises, degrades to UNKNOWN_LOCATION."""

        raise NotImplementedError

    def pairwise_distances(self, origins: Sequence[GeoPoint], destinations: Sequence[GeoPoint]) -> list[MatrixElement]:
        """One element per index ``i`` for the pair ``(origins[i], destinations[i])``.

        Raises UpstreamError only when the call as a whole fails.
        """

        raise NotImplementedError


class GoogleMapsClient(MappingService):
    BASE_URL = "https://maps.googleapis.com/maps/api"
    # Distance Matrix allows at most 100 elements per request; a batch of n pairs costs n*n.
    MAX_PAIRS_PER_REQUEST = 10

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=timeout)

    def _get_json(self, path: str, params: dict) -> dict:
        response = self._client.get(f"{self.BASE_URL}/{path}", params=dict(params, key=self._api_key))
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected response body")
        return payload

    def reverse_geocode(self, lat: float, lng: float) -> str:
        try:
            data = self._get_json("geocode/json", {"latlng": f"{lat},{lng}", "result_type": "street_address"})
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoding failed for %s,%s: %s", lat, lng, exc)
            return UNKNOWN_LOCATION

        if data.get("status") != "OK":
            logger.warning("Geocoding API error for %s,%s: %s", lat, lng, data.get("status"))
            return UNKNOWN_LOCATION

        results = data.get("results") or []
        address = results[0].get("formatted_address") if results and isinstance(results[0], dict) else None
        if not address:
            logger.warning("Geocoding returned no address for %s,%s", lat, lng)
            return UNKNOWN_LOCATION
        return str(address)

    def pairwise_distances(self, origins: Sequence[GeoPoint], destinations: Sequence[GeoPoint]) -> list[MatrixElement]:
        if len(origins) != len(destinations):
            raise ValueError("origins and destinations must have the same length")

        elements: list[MatrixElement] = []
        for start in range(0, len(origins), self.MAX_PAIRS_PER_REQUEST):
            end = start + self.MAX_PAIRS_PER_REQUEST
            elements.extend(self._matrix_diagonal(origins[start:end], destinations[start:end]))
        return elements

    def _matrix_diagonal(self, origins: Sequence[GeoPoint], destinations: Sequence[GeoPoint]) -> list[MatrixElement]:
        params = {
            "origins": "|".join(p.as_latlng() for p in origins),
            "destinations": "|".join(p.as_latlng() for p in destinations),
        }
        try:
            data = self._get_json("distancematrix/json", params)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Distance Matrix request failed: %s", exc)
            raise UpstreamError("Error calculating distances") from exc

        if data.get("status") != "OK":
            logger.error("Distance Matrix API error: %s", data.get("status"))
            raise UpstreamError(f"Distance Matrix API error: {data.get('status')}")

        rows = data.get("rows") or []
        return [_diagonal_element(rows, i) for i in range(len(origins))]


def _diagonal_element(rows: list, index: int) -> MatrixElement:
    """Element ``[index][index]``: origin ``index`` to destination ``index``."""
    try:
        element = rows[index]["elements"][index]
        status = str(element.get("status") or "UNKNOWN")
        text = (element.get("distance") or {}).get("text")
    except (IndexError, KeyError, TypeError, AttributeError):
        return MatrixElement(status="MALFORMED")
    return MatrixElement(status=status, distance_text=str(text) if text else None)
