from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from travel_planner.config import SEARCH_TIMEOUT, TRAVEL_API_BASE
from travel_planner.providers.base import FlightsProvider, HotelsProvider, SearchProviderError


class _SearchClient:
    """
    Thin GET-JSON client for a search backend exposing
    ``/api/flights`` and ``/api/hotels``.
    """

    def __init__(self, base_url: str = TRAVEL_API_BASE, timeout: int = SEARCH_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = requests.get(url, params=params or {}, timeout=self.timeout)
        except requests.RequestException as e:
            raise SearchProviderError(f"Search API unreachable: {e}") from e
        if r.status_code >= 400:
            raise SearchProviderError(f"Search API error {r.status_code}: {r.text[:200]}")
        try:
            return r.json()
        except ValueError as e:
            raise SearchProviderError("Search API returned invalid JSON") from e


class HttpFlightsProvider(_SearchClient, FlightsProvider):
    def search_flights(self, origin=None, destination=None, date_iso=None) -> List[dict]:
        params = {"from": origin, "to": destination, "date": date_iso}
        data = self._get("/api/flights", {k: v for k, v in params.items() if v})
        return list((data or {}).get("flights") or [])


class HttpHotelsProvider(_SearchClient, HotelsProvider):
    def search_hotels(self, city: str, min_stars: int = 0) -> List[dict]:
        data = self._get("/api/hotels", {"city": city, "minStars": min_stars})
        return list((data or {}).get("hotels") or [])
