from typing import TypedDict, Optional, Any

class TravelState(TypedDict, total=False):
    user_input: str

    # remembered across visits (persisted via the "save_memory" effect)
    memory: dict[str, Any]

    # held between turns, replaced on every search
    flights: list[dict]
    hotels: list[dict]
    hotel_pending: bool             # hotel needed but no city known yet

    # per-turn working values
    intent: dict[str, Any]
    hotel_city: Optional[str]

    # outputs
    replies: list[str]              # agent messages produced this step
    effects: list[str]              # side effects for the caller, e.g. "save_memory"
    trace: list[dict]
