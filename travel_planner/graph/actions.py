"""
Explicit user actions (persona change, flight selection, refresh) and the
search steps they share with the text-turn graph.

Every function takes a TravelState and returns a new one. Nothing here
writes to storage: memory changes are announced with a "save_memory" effect
that the caller executes.
"""
import logging
from typing import Optional

from travel_planner.agents.flights import rank_flights, run_flights_agent
from travel_planner.agents.hotels import min_stars, run_hotels_agent
from travel_planner.graph.state import TravelState
from travel_planner.memory import PERSONAS, RICH, merge_memory
from travel_planner.providers.base import FlightsProvider, HotelsProvider

logger = logging.getLogger(__name__)

SAVE_MEMORY = "save_memory"


def add_trace(state: TravelState, node: str, detail: dict):
    state["trace"] = list(state.get("trace") or []) + [{"node": node, "detail": detail}]


def add_reply(state: TravelState, text: str):
    state["replies"] = list(state.get("replies") or []) + [text]


def add_effect(state: TravelState, effect: str):
    state["effects"] = list(state.get("effects") or []) + [effect]


def format_price(amount) -> str:
    return f"${amount:,.2f}"


def describe_query(query: Optional[dict]) -> str:
    q = query or {}
    route = f"{q.get('from') or 'anywhere'} → {q.get('to') or 'anywhere'}"
    if q.get("date"):
        route += f" on {q['date']}"
    return route


# ---------------------------
# Search steps
# ---------------------------
def flight_search_step(state: TravelState, provider: FlightsProvider) -> TravelState:
    state = dict(state)
    memory = state.get("memory") or {}
    query = memory.get("last_query") or {}

    data = run_flights_agent(provider, query, memory.get("persona"))
    state["flights"] = data["flights"]

    if data["top"]:
        add_reply(state, "I found flight options ranked by your persona.")
        add_trace(state, "flights_ok", {"query": query, "count": len(data["flights"]), "top": data["top"]})
    else:
        add_reply(state, f"No flights found for {describe_query(query)}. Try another date or route?")
        add_trace(state, "flights_none", {"query": query})
    return state


def hotel_search_step(state: TravelState, provider: HotelsProvider, city: str) -> TravelState:
    """Mark the hotel as required, then search and rank hotels in ``city``."""
    state = dict(state)
    state["memory"] = merge_memory(state.get("memory") or {}, {"hotel_required": True})
    state["hotel_pending"] = False
    add_effect(state, SAVE_MEMORY)

    persona = state["memory"].get("persona")
    data = run_hotels_agent(provider, city, persona)
    state["hotels"] = data["hotels"]

    if data["top"]:
        add_trace(state, "hotels_ok", {"city": city, "count": len(data["hotels"]), "top": data["top"]})
    else:
        add_trace(state, "hotels_none", {"city": city})
    return state


def no_hotels_message(city: str, persona: str) -> str:
    return f"No {min_stars(persona)}★+ hotels found in {city}."


# ---------------------------
# Explicit actions
# ---------------------------
def choose_persona(state: TravelState, persona: str) -> TravelState:
    if persona not in PERSONAS:
        raise ValueError(f"Unknown persona: {persona}")

    state = dict(state)
    state["memory"] = merge_memory(state.get("memory") or {}, {"persona": persona})
    # held flights follow the new preference; this is not a new search
    state["flights"] = rank_flights(state.get("flights") or [], persona)
    add_effect(state, SAVE_MEMORY)

    if persona == RICH:
        detail = "I will prefer First Class flights and 5★ hotels."
    else:
        detail = "I will prefer Business Class flights and 4★+ hotels."
    add_reply(state, f"Persona set to {persona}. {detail}")
    add_trace(state, "persona", {"persona": persona})
    return state


def select_flight(state: TravelState, flight_id: str, hotels_provider: HotelsProvider) -> TravelState:
    flight = next((f for f in state.get("flights") or [] if f.get("id") == flight_id), None)
    if flight is None:
        logger.info("Ignoring selection of unknown flight %s", flight_id)
        return dict(state)

    state = dict(state)
    memory = dict(state.get("memory") or {})
    memory["chosen_flight_id"] = flight["id"]
    # a selection is authoritative: replace the query rather than merging
    memory["last_query"] = {k: flight[k] for k in ("from", "to", "date") if flight.get(k)}
    state["memory"] = memory
    add_effect(state, SAVE_MEMORY)

    add_reply(
        state,
        f"Selected {flight.get('airline')} {flight['id']} {flight.get('from')}→{flight.get('to')} "
        f"on {flight.get('date')} ({flight.get('class')}, {format_price(flight.get('price', 0))}).",
    )
    add_trace(state, "flight_selected", {"flight": flight})

    if flight.get("overnight"):
        add_reply(state, "This is an overnight flight; I will arrange a hotel.")
        state = hotel_search_step(state, hotels_provider, flight["to"])
        if not state["hotels"]:
            add_reply(state, no_hotels_message(flight["to"], memory.get("persona")))
    return state


def refresh_flights(state: TravelState, flights_provider: FlightsProvider) -> TravelState:
    if not (state.get("memory") or {}).get("last_query"):
        return dict(state)
    return flight_search_step(state, flights_provider)
