from abc import ABC, abstractmethod
from typing import Optional


class SearchProviderError(RuntimeError):
    """A search source could not answer (transport error, bad status, bad payload)."""


class FlightsProvider(ABC):
    @abstractmethod
    def search_flights(
        self,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        date_iso: Optional[str] = None,
    ) -> list[dict]:
        """Flights matching every provided field exactly. No ranking."""
        ...

class HotelsProvider(ABC):
    @abstractmethod
    def search_hotels(self, city: str, min_stars: int = 0) -> list[dict]:
        """Hotels in ``city`` (case-insensitive) with at least ``min_stars``."""
        ...
