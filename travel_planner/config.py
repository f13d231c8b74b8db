import os
from dotenv import load_dotenv

load_dotenv()

# Storage
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///travel_planner.db")
MEMORY_STORAGE_KEY = os.environ.get("MEMORY_STORAGE_KEY", "agentic_travel_memory_v1")

# Search sources: "static" (bundled JSON) or "http" (remote /api/flights, /api/hotels)
TRAVEL_DATA_SOURCE = os.environ.get("TRAVEL_DATA_SOURCE", "static")
TRAVEL_API_BASE = os.environ.get("TRAVEL_API_BASE", "http://127.0.0.1:5000")
SEARCH_TIMEOUT = int(os.environ.get("SEARCH_TIMEOUT", "15"))

# Server
API_PORT = int(os.environ.get("API_PORT", "5000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
