import logging
import time
from typing import Any, Dict, List, Optional

from travel_planner.agents.hotels import persona_badge
from travel_planner.graph import actions
from travel_planner.graph.graph import build_graph
from travel_planner.graph.state import TravelState
from travel_planner.memory import MemoryStore
from travel_planner.providers.base import FlightsProvider, HotelsProvider

logger = logging.getLogger(__name__)


class TravelSession:
    """
    One user's planner session.

    Holds the state between steps, runs each step to completion, appends
    the resulting messages to the transcript and executes the effects the
    step asked for (saving memory).
    """

    def __init__(
        self,
        store: MemoryStore,
        flights_provider: FlightsProvider,
        hotels_provider: HotelsProvider,
        graph=None,
    ):
        self.store = store
        self.flights_provider = flights_provider
        self.hotels_provider = hotels_provider
        self.graph = graph if graph is not None else build_graph(flights_provider, hotels_provider)

        self.memory = store.load()
        self.flights: List[dict] = []
        self.hotels: List[dict] = []
        self.hotel_pending = False
        self.messages: List[Dict[str, Any]] = []
        self.last_trace: List[dict] = []

    # ---------------------------
    # Turn inputs
    # ---------------------------
    def submit(self, text: str) -> List[Dict[str, Any]]:
        """Handle a free-text utterance. Returns the messages it added."""
        q = (text or "").strip()
        if not q:
            return []

        start = len(self.messages)
        self._append("user", q)
        state = self._state()
        state["user_input"] = q
        self._apply(self.graph.invoke(state))
        return self.messages[start:]

    def choose_persona(self, persona: str) -> List[Dict[str, Any]]:
        start = len(self.messages)
        self._apply(actions.choose_persona(self._state(), persona))
        return self.messages[start:]

    def select_flight(self, flight_id: str) -> List[Dict[str, Any]]:
        start = len(self.messages)
        self._apply(actions.select_flight(self._state(), flight_id, self.hotels_provider))
        return self.messages[start:]

    def refresh_flights(self) -> List[Dict[str, Any]]:
        start = len(self.messages)
        self._apply(actions.refresh_flights(self._state(), self.flights_provider))
        return self.messages[start:]

    # ---------------------------
    # Outputs
    # ---------------------------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "messages": list(self.messages),
            "flights": list(self.flights),
            "hotels": list(self.hotels),
            "memory": dict(self.memory),
            "persona_badge": persona_badge(self.memory.get("persona")),
        }

    def view(self) -> Dict[str, Any]:
        """Ephemeral results to carry between HTTP requests."""
        return {"flights": self.flights, "hotels": self.hotels, "hotel_pending": self.hotel_pending}

    def restore(self, view: Optional[Dict[str, Any]], messages: Optional[List[dict]] = None):
        view = view or {}
        self.flights = list(view.get("flights") or [])
        self.hotels = list(view.get("hotels") or [])
        self.hotel_pending = bool(view.get("hotel_pending"))
        if messages is not None:
            self.messages = list(messages)

    # ---------------------------
    # Internals
    # ---------------------------
    def _state(self) -> TravelState:
        return {
            "memory": dict(self.memory),
            "flights": list(self.flights),
            "hotels": list(self.hotels),
            "hotel_pending": self.hotel_pending,
            "replies": [],
            "effects": [],
            "trace": [],
        }

    def _apply(self, out: TravelState):
        self.memory = out.get("memory") or self.memory
        self.flights = out.get("flights") or []
        self.hotels = out.get("hotels") or []
        self.hotel_pending = bool(out.get("hotel_pending"))
        self.last_trace = out.get("trace") or []

        for text in out.get("replies") or []:
            self._append("agent", text)

        effects = out.get("effects") or []
        logger.debug("Step produced %d replies, effects=%s", len(out.get("replies") or []), effects)
        if actions.SAVE_MEMORY in effects:
            self.store.save(self.memory)

    def _append(self, role: str, text: str):
        ts = int(time.time() * 1000)
        if self.messages:
            ts = max(ts, self.messages[-1]["ts"])
        self.messages.append({"role": role, "text": text, "ts": ts})
