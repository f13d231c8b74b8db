from travel_planner.config import TRAVEL_DATA_SOURCE
from travel_planner.providers.base import FlightsProvider, HotelsProvider, SearchProviderError


def default_providers(source: str = TRAVEL_DATA_SOURCE) -> tuple[FlightsProvider, HotelsProvider]:
    if source == "http":
        from travel_planner.providers.http_search import HttpFlightsProvider, HttpHotelsProvider

        return HttpFlightsProvider(), HttpHotelsProvider()
    if source == "static":
        from travel_planner.providers.static_data import StaticFlightsProvider, StaticHotelsProvider

        return StaticFlightsProvider(), StaticHotelsProvider()
    raise ValueError(f"Unknown TRAVEL_DATA_SOURCE: {source}")


__all__ = ["FlightsProvider", "HotelsProvider", "SearchProviderError", "default_providers"]
