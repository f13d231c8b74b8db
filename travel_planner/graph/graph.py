from langgraph.graph import StateGraph, END

from travel_planner.graph.state import TravelState
from travel_planner.graph.intent import extract_intent, has_query_fields
from travel_planner.graph.actions import (
    SAVE_MEMORY,
    add_effect,
    add_reply,
    add_trace,
    flight_search_step,
    hotel_search_step,
    no_hotels_message,
)
from travel_planner.agents.hotels import is_hotel_required, resolve_hotel_city
from travel_planner.memory import merge_query
from travel_planner.providers.base import FlightsProvider, HotelsProvider


# ---------------------------
# Nodes that need no search source
# ---------------------------
def node_extract(state: TravelState) -> TravelState:
    state = dict(state)
    user_text = (state.get("user_input") or "").strip()

    state["intent"] = extract_intent(user_text)
    state["hotel_city"] = None
    state["replies"] = []
    state["effects"] = []
    state["trace"] = []
    add_trace(state, "extract", state["intent"])
    return state


def node_remember(state: TravelState) -> TravelState:
    state = dict(state)
    state["memory"] = merge_query(state.get("memory") or {}, state["intent"])
    add_effect(state, SAVE_MEMORY)
    add_trace(state, "remember", {"last_query": state["memory"].get("last_query")})
    return state


def node_route_flights(state: TravelState) -> str:
    # search again only on new query facts, or when nothing is held yet
    if has_query_fields(state.get("intent") or {}) or not state.get("flights"):
        return "flight_search"
    return "hotel_policy"


def node_hotel_policy(state: TravelState) -> TravelState:
    state = dict(state)
    intent = state.get("intent") or {}
    flights = state.get("flights") or []
    top = flights[0] if flights else None

    required = is_hotel_required(intent.get("mentions_hotel"), bool(top and top.get("overnight")))
    # a requirement left unresolved on an earlier turn is retried every turn
    required = required or bool(state.get("hotel_pending"))
    if not required:
        return state

    city = resolve_hotel_city(intent, top)
    if city:
        state["hotel_city"] = city
        add_trace(state, "hotel_required", {"city": city})
    else:
        state["hotel_pending"] = True
        add_trace(state, "hotel_pending", {"reason": "no destination known"})
    return state


def node_route_hotels(state: TravelState) -> str:
    return "hotel_search" if state.get("hotel_city") else "done"


# ---------------------------
# Build graph
# ---------------------------
def build_graph(flights_provider: FlightsProvider, hotels_provider: HotelsProvider):
    """
    One text turn:
      extract -> remember -> [flight_search] -> hotel_policy -> [hotel_search]
    """

    def node_flight_search(state: TravelState) -> TravelState:
        return flight_search_step(state, flights_provider)

    def node_hotel_search(state: TravelState) -> TravelState:
        city = state["hotel_city"]
        state = hotel_search_step(state, hotels_provider, city)
        if state["hotels"]:
            add_reply(state, f"Hotel is required in {city}. Suggested options listed.")
        else:
            add_reply(state, f"Hotel is required in {city}. " + no_hotels_message(city, state["memory"].get("persona")))
        return state

    g = StateGraph(TravelState)

    g.add_node("extract", node_extract)
    g.add_node("remember", node_remember)
    g.add_node("flight_search", node_flight_search)
    g.add_node("hotel_policy", node_hotel_policy)
    g.add_node("hotel_search", node_hotel_search)

    g.set_entry_point("extract")
    g.add_edge("extract", "remember")

    g.add_conditional_edges("remember", node_route_flights, {
        "flight_search": "flight_search",
        "hotel_policy": "hotel_policy",
    })
    g.add_edge("flight_search", "hotel_policy")

    g.add_conditional_edges("hotel_policy", node_route_hotels, {
        "hotel_search": "hotel_search",
        "done": END,
    })
    g.add_edge("hotel_search", END)

    return g.compile()
