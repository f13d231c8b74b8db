import logging
import uuid

from flask import Flask, request, jsonify

from travel_planner import init_db
from travel_planner.config import API_PORT, LOG_LEVEL, MEMORY_STORAGE_KEY
from travel_planner.db import SessionLocal
from travel_planner.memory import PERSONAS, MemoryStore
from travel_planner.models import Conversation, Message
from travel_planner.graph.graph import build_graph
from travel_planner.providers import default_providers
from travel_planner.providers.static_data import StaticFlightsProvider, StaticHotelsProvider
from travel_planner.session import TravelSession

logger = logging.getLogger(__name__)

app = Flask(__name__)

flights_provider, hotels_provider = default_providers()
graph = build_graph(flights_provider, hotels_provider)

# search backend served at /api/* (bundled data)
flights_backend = StaticFlightsProvider()
hotels_backend = StaticHotelsProvider()


def _text(body: dict, key: str) -> str:
    """String field from a JSON body; anything that is not a string counts as missing."""
    value = body.get(key)
    return value.strip() if isinstance(value, str) else ""


def _json_body() -> dict:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _conversation_id(body: dict) -> str:
    return _text(body, "conversation_id") or uuid.uuid4().hex


def _open_session(db, conversation_id: str):
    conv = db.get(Conversation, conversation_id)
    if not conv:
        conv = Conversation(id=conversation_id, context={})
        db.add(conv)
        db.commit()
        db.refresh(conv)

    session = TravelSession(
        MemoryStore(f"{MEMORY_STORAGE_KEY}:{conversation_id}"),
        flights_provider,
        hotels_provider,
        graph=graph,
    )
    history = [{"role": m.role, "text": m.content, "ts": m.ts} for m in conv.messages]
    session.restore(conv.context, messages=history)
    return conv, session


def _finish(db, conv: Conversation, session: TravelSession, added: list[dict]):
    conv.context = session.view()
    db.add(conv)
    for m in added:
        db.add(Message(
            conversation_id=conv.id,
            role=m["role"],
            content=m["text"],
            ts=m["ts"],
            meta={"trace": session.last_trace} if m["role"] == "agent" else {},
        ))
    db.commit()

    return jsonify({
        "conversation_id": conv.id,
        "added": added,
        **session.snapshot(),
        "trace": session.last_trace,
    })


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.post("/chat")
def chat():
    body = _json_body()
    user_input = _text(body, "message")
    if not user_input:
        return jsonify({"error": "message is required"}), 400

    db = SessionLocal()
    try:
        conv, session = _open_session(db, _conversation_id(body))
        added = session.submit(user_input)
        return _finish(db, conv, session, added)
    finally:
        db.close()


@app.post("/persona")
def persona():
    body = _json_body()
    choice = body.get("persona")
    if choice not in PERSONAS:
        return jsonify({"error": f"persona must be one of {', '.join(PERSONAS)}"}), 400

    db = SessionLocal()
    try:
        conv, session = _open_session(db, _conversation_id(body))
        added = session.choose_persona(choice)
        return _finish(db, conv, session, added)
    finally:
        db.close()


@app.post("/flights/select")
def select_flight():
    body = _json_body()
    flight_id = _text(body, "flight_id")
    if not flight_id:
        return jsonify({"error": "flight_id is required"}), 400

    db = SessionLocal()
    try:
        conv, session = _open_session(db, _conversation_id(body))
        added = session.select_flight(flight_id)
        return _finish(db, conv, session, added)
    finally:
        db.close()


@app.post("/flights/refresh")
def refresh_flights():
    body = _json_body()
    db = SessionLocal()
    try:
        conv, session = _open_session(db, _conversation_id(body))
        added = session.refresh_flights()
        return _finish(db, conv, session, added)
    finally:
        db.close()


@app.get("/session/<conversation_id>")
def get_session(conversation_id: str):
    db = SessionLocal()
    try:
        if not db.get(Conversation, conversation_id):
            return jsonify({"error": "Session not found"}), 404
        _, session = _open_session(db, conversation_id)
        return jsonify({"conversation_id": conversation_id, **session.snapshot()})
    finally:
        db.close()


# ---------------------------
# Search backend
# ---------------------------
@app.get("/api/flights")
def api_flights():
    args = request.args
    flights = flights_backend.search_flights(args.get("from"), args.get("to"), args.get("date"))
    return jsonify({"flights": flights})


@app.get("/api/hotels")
def api_hotels():
    args = request.args
    try:
        min_stars = int(args.get("minStars") or 0)
    except ValueError:
        return jsonify({"error": "minStars must be an integer"}), 400
    hotels = hotels_backend.search_hotels(args.get("city") or "", min_stars)
    return jsonify({"hotels": hotels})


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Create tables (simple dev mode)
    init_db()
    app.run(host="0.0.0.0", port=API_PORT, debug=True)
