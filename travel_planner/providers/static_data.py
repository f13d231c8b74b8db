import json
from pathlib import Path
from typing import Optional

from travel_planner.providers.base import FlightsProvider, HotelsProvider

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _load_json(path: Path, key: str) -> list[dict]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    return list(data[key] if isinstance(data, dict) else data)


class StaticFlightsProvider(FlightsProvider):
    """
    Flights from a bundled JSON file (``data/flights.json`` by default).
    Filters by exact equality on each provided field.
    """

    def __init__(self, flights: Optional[list[dict]] = None, path: Optional[Path] = None):
        if flights is None:
            flights = _load_json(path or DATA_DIR / "flights.json", "flights")
        self.flights = flights

    def search_flights(self, origin=None, destination=None, date_iso=None) -> list[dict]:
        out = self.flights
        if origin:
            out = [f for f in out if f["from"] == origin.upper()]
        if destination:
            out = [f for f in out if f["to"] == destination.upper()]
        if date_iso:
            out = [f for f in out if f["date"] == date_iso]
        return list(out)


class StaticHotelsProvider(HotelsProvider):
    def __init__(self, hotels: Optional[list[dict]] = None, path: Optional[Path] = None):
        if hotels is None:
            hotels = _load_json(path or DATA_DIR / "hotels.json", "hotels")
        self.hotels = hotels

    def search_hotels(self, city: str, min_stars: int = 0) -> list[dict]:
        out = self.hotels
        if city:
            key = city.upper()
            out = [h for h in out if h["city"].upper() == key]
        if min_stars:
            out = [h for h in out if h["stars"] >= min_stars]
        return list(out)
