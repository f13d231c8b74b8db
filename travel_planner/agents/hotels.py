import logging
from typing import Iterable, Optional

from travel_planner.memory import RICH
from travel_planner.providers.base import HotelsProvider

logger = logging.getLogger(__name__)


def min_stars(persona: str) -> int:
    return 5 if persona == RICH else 4


def persona_badge(persona: str) -> str:
    return "Prefers First Class & 5★" if persona == RICH else "Prefers Business Class & 4★+"


def is_hotel_required(mentions_hotel: bool, top_overnight: bool) -> bool:
    return bool(mentions_hotel) or bool(top_overnight)


def resolve_hotel_city(intent: Optional[dict], top_flight: Optional[dict]) -> Optional[str]:
    """
    City for a hotel search: the destination named in this utterance,
    else where the top-ranked flight lands. None when neither is known.
    """
    if intent and intent.get("to"):
        return intent["to"]
    if top_flight and top_flight.get("to"):
        return top_flight["to"]
    return None


def rank_hotels(hotels: Iterable[dict], persona: str) -> list[dict]:
    floor = min_stars(persona)
    keep = [h for h in hotels if h.get("stars", 0) >= floor]
    return sorted(keep, key=lambda h: (-h.get("stars", 0), h.get("price", 0)))


def run_hotels_agent(provider: HotelsProvider, city: str, persona: str) -> dict:
    try:
        hotels = provider.search_hotels(city, min_stars(persona))
    except Exception as e:
        logger.warning("Hotel search failed for %s: %s", city, e)
        hotels = []

    ranked = rank_hotels(hotels or [], persona)
    top = ranked[0] if ranked else None
    return {"hotels": ranked, "top": top}
