import os
import tempfile

# must be set before travel_planner.config is imported
_TMP = tempfile.mkdtemp(prefix="travel_planner_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'app.db')}"
os.environ["TRAVEL_DATA_SOURCE"] = "static"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from travel_planner.memory import MemoryStore
from travel_planner.models import Base
from travel_planner.providers.base import FlightsProvider, HotelsProvider, SearchProviderError


def make_flight(fid, cls="Economy", price=100, overnight=False, origin="NYC", dest="LAX", date="2025-11-10"):
    return {
        "id": fid, "from": origin, "to": dest, "date": date,
        "depart": "09:00", "arrive": "12:00", "airline": "TestAir",
        "class": cls, "price": price, "overnight": overnight,
    }


def make_hotel(hid, stars, price, city="LAX"):
    return {"id": hid, "city": city, "name": f"Hotel {hid}", "stars": stars, "price": price}


class FakeFlightsProvider(FlightsProvider):
    def __init__(self, flights=None):
        self.flights = flights or []
        self.calls = []

    def search_flights(self, origin=None, destination=None, date_iso=None):
        self.calls.append({"from": origin, "to": destination, "date": date_iso})
        return list(self.flights)


class FakeHotelsProvider(HotelsProvider):
    def __init__(self, hotels=None):
        self.hotels = hotels or []
        self.calls = []

    def search_hotels(self, city, min_stars=0):
        self.calls.append({"city": city, "min_stars": min_stars})
        return list(self.hotels)


class BrokenFlightsProvider(FlightsProvider):
    def search_flights(self, origin=None, destination=None, date_iso=None):
        raise SearchProviderError("flight source down")


class BrokenHotelsProvider(HotelsProvider):
    def search_hotels(self, city, min_stars=0):
        raise SearchProviderError("hotel source down")


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'memory.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return MemoryStore("test_memory", session_factory=session_factory)
