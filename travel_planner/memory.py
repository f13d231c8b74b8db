"""
Session memory: persona plus facts remembered from the conversation.

Memory is a plain dict so it serializes straight to the JSON blob:

    {
      "persona": "Business",
      "last_query": {"from": "NYC", "to": "LAX", "date": "2025-11-10"},
      "chosen_flight_id": "F100",
      "hotel_required": true
    }

Only ``persona`` is always present. Everything else accumulates: merges skip
absent values so a known fact is never erased by a partial update.
"""
import json
import logging
from typing import Any, Dict, Optional, TypedDict

from travel_planner.config import MEMORY_STORAGE_KEY
from travel_planner.db import SessionLocal
from travel_planner.models import MemoryBlob

logger = logging.getLogger(__name__)

RICH = "Rich"
BUSINESS = "Business"
PERSONAS = (RICH, BUSINESS)

QUERY_FIELDS = ("from", "to", "date")


class Memory(TypedDict, total=False):
    persona: str
    last_query: Dict[str, str]
    chosen_flight_id: str
    hotel_required: bool


def default_memory() -> Memory:
    return {"persona": BUSINESS}


def merge_query(memory: Memory, query: Dict[str, Any]) -> Memory:
    """Sticky-merge from/to/date into ``last_query``; returns a new dict."""
    merged = dict(memory.get("last_query") or {})
    for key in QUERY_FIELDS:
        value = (query or {}).get(key)
        if value:
            merged[key] = value

    out = dict(memory)
    if merged:
        out["last_query"] = merged
    return out


def merge_memory(memory: Memory, updates: Dict[str, Any]) -> Memory:
    out = dict(memory)
    for key, value in (updates or {}).items():
        if value is None:
            continue
        if key == "last_query":
            out = merge_query(out, value)
        else:
            out[key] = value
    return out


def parse_memory(raw: Optional[str]) -> Memory:
    """
    Decode a stored blob over the default memory.
    Anything unreadable degrades to the default rather than raising.
    """
    memory = default_memory()
    if not raw:
        return memory

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning("Stored memory is not valid JSON; using defaults")
        return memory

    if not isinstance(data, dict):
        logger.warning("Stored memory is not an object; using defaults")
        return memory

    persona = data.get("persona")
    if persona in PERSONAS:
        memory["persona"] = persona
    elif persona is not None:
        logger.warning("Unknown persona %r in stored memory; keeping %s", persona, BUSINESS)

    last_query = data.get("last_query")
    if isinstance(last_query, dict):
        known = {k: last_query[k] for k in QUERY_FIELDS if isinstance(last_query.get(k), str)}
        if known:
            memory["last_query"] = known

    if isinstance(data.get("chosen_flight_id"), str):
        memory["chosen_flight_id"] = data["chosen_flight_id"]
    if isinstance(data.get("hotel_required"), bool):
        memory["hotel_required"] = data["hotel_required"]

    return memory


class MemoryStore:
    """One named JSON blob in the ``memory_blobs`` table."""

    def __init__(self, name: str = MEMORY_STORAGE_KEY, session_factory=None):
        self.name = name
        self.session_factory = session_factory or SessionLocal

    def load(self) -> Memory:
        db = self.session_factory()
        try:
            blob = db.get(MemoryBlob, self.name)
            raw = blob.value if blob else None
        finally:
            db.close()
        return parse_memory(raw)

    def save(self, memory: Memory) -> None:
        payload = json.dumps(memory)
        db = self.session_factory()
        try:
            blob = db.get(MemoryBlob, self.name)
            if blob is None:
                db.add(MemoryBlob(name=self.name, value=payload))
            else:
                blob.value = payload
            db.commit()
        finally:
            db.close()
        logger.debug("Saved memory %s: %s", self.name, payload)
