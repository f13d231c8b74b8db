import re
from typing import Optional


FROM_WORD = re.compile(r"\bfrom\s+([A-Za-z]{3})\b", re.IGNORECASE)
FROM_ARROW = re.compile(r"\b([A-Za-z]{3})\s*(?:->|→)")
TO_WORD = re.compile(r"\bto\s+([A-Za-z]{3})\b", re.IGNORECASE)
TO_ARROW = re.compile(r"(?:->|→)\s*([A-Za-z]{3})\b")
ISO_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})")
HOTEL_WORDS = re.compile(r"hotel|stay|night|overnight", re.IGNORECASE)


def _first_code(text: str, *patterns: re.Pattern) -> Optional[str]:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return m.group(1).upper()
    return None


def extract_intent(text: str) -> dict:
    """
    Best-effort extraction of a flight query from free text.

    Returns {"from", "to", "date", "mentions_hotel"}; fields that could not be
    found are None. "flights from NYC to LAX on 2025-11-10" and
    "NYC -> LAX 2025-11-10" both give the full triple.
    """
    t = text or ""
    date = ISO_DATE.search(t)
    return {
        "from": _first_code(t, FROM_WORD, FROM_ARROW),
        "to": _first_code(t, TO_WORD, TO_ARROW),
        "date": date.group(1) if date else None,
        "mentions_hotel": bool(HOTEL_WORDS.search(t)),
    }


def has_query_fields(intent: dict) -> bool:
    return any(intent.get(k) for k in ("from", "to", "date"))
