import logging
from typing import Iterable, Optional

from travel_planner.memory import BUSINESS, RICH
from travel_planner.providers.base import FlightsProvider

logger = logging.getLogger(__name__)

# class -> points, per persona
CLASS_POINTS = {
    RICH: {"first": 3, "business": 2, "economy": 0},
    BUSINESS: {"first": 0, "business": 3, "economy": 1},
}


def score_flight(flight: dict, persona: str) -> int:
    cls = str(flight.get("class") or "").lower()
    score = CLASS_POINTS.get(persona, CLASS_POINTS[BUSINESS]).get(cls, 0)
    if persona == RICH:
        if flight.get("overnight"):
            score -= 1  # avoid overnights if possible
    elif not flight.get("overnight"):
        score += 1
    return score


def rank_flights(flights: Iterable[dict], persona: str) -> list[dict]:
    """Best first: highest score, then cheapest. sorted() keeps input order on full ties."""
    return sorted(flights, key=lambda f: (-score_flight(f, persona), f.get("price", 0)))


def run_flights_agent(provider: FlightsProvider, query: Optional[dict], persona: str) -> dict:
    q = query or {}
    try:
        flights = provider.search_flights(q.get("from"), q.get("to"), q.get("date"))
    except Exception as e:
        logger.warning("Flight search failed for %s: %s", q, e)
        flights = []

    ranked = rank_flights(flights or [], persona)
    top = ranked[0] if ranked else None
    return {"flights": ranked, "top": top}
