import pytest

from travel_planner.agents.flights import rank_flights, run_flights_agent, score_flight
from travel_planner.agents.hotels import (
    is_hotel_required,
    min_stars,
    persona_badge,
    rank_hotels,
    resolve_hotel_city,
    run_hotels_agent,
)
from tests.conftest import (
    BrokenFlightsProvider,
    BrokenHotelsProvider,
    FakeFlightsProvider,
    FakeHotelsProvider,
    make_flight,
    make_hotel,
)


@pytest.mark.parametrize("cls,overnight,expected", [
    ("first", False, 3),
    ("business", False, 2),
    ("economy", False, 0),
    ("first", True, 2),
    ("economy", True, -1),
    ("premium", False, 0),
])
def test_rich_scores(cls, overnight, expected):
    assert score_flight(make_flight("X", cls=cls, overnight=overnight), "Rich") == expected


@pytest.mark.parametrize("cls,overnight,expected", [
    ("first", False, 1),
    ("business", False, 4),
    ("economy", False, 2),
    ("business", True, 3),
    ("economy", True, 1),
    ("premium", True, 0),
])
def test_business_scores(cls, overnight, expected):
    assert score_flight(make_flight("X", cls=cls, overnight=overnight), "Business") == expected


def test_class_is_case_insensitive():
    assert score_flight(make_flight("X", cls="FIRST"), "Rich") == score_flight(make_flight("Y", cls="first"), "Rich")


@pytest.mark.parametrize("overnight", [True, False])
def test_score_monotonicity(overnight):
    first = make_flight("A", cls="First", overnight=overnight)
    business = make_flight("B", cls="Business", overnight=overnight)
    economy = make_flight("C", cls="Economy", overnight=overnight)
    assert score_flight(first, "Rich") >= score_flight(business, "Rich")
    assert score_flight(business, "Business") >= score_flight(economy, "Business")


def test_rich_prefers_first_despite_price():
    flights = [make_flight("E", cls="economy", price=100), make_flight("F", cls="first", price=500)]
    assert [f["id"] for f in rank_flights(flights, "Rich")] == ["F", "E"]


def test_ties_broken_by_price_then_input_order():
    flights = [
        make_flight("B1", cls="Business", price=900),
        make_flight("B2", cls="Business", price=700),
        make_flight("B3", cls="Business", price=700),
    ]
    assert [f["id"] for f in rank_flights(flights, "Business")] == ["B2", "B3", "B1"]


def test_ranking_is_idempotent():
    flights = [
        make_flight("1", cls="Economy", price=200),
        make_flight("2", cls="Business", price=800, overnight=True),
        make_flight("3", cls="First", price=1500),
        make_flight("4", cls="Business", price=600),
        make_flight("5", cls="Economy", price=200),
    ]
    for persona in ("Rich", "Business"):
        once = rank_flights(flights, persona)
        assert rank_flights(once, persona) == once


def test_run_flights_agent_passes_query():
    provider = FakeFlightsProvider([make_flight("A", cls="Economy"), make_flight("B", cls="Business")])
    data = run_flights_agent(provider, {"from": "NYC", "to": "LAX", "date": "2025-11-10"}, "Business")
    assert provider.calls == [{"from": "NYC", "to": "LAX", "date": "2025-11-10"}]
    assert data["top"]["id"] == "B"


def test_run_flights_agent_degrades_on_failure():
    assert run_flights_agent(BrokenFlightsProvider(), {"to": "LAX"}, "Rich") == {"flights": [], "top": None}


def test_min_stars_and_badge():
    assert min_stars("Rich") == 5
    assert min_stars("Business") == 4
    assert "5★" in persona_badge("Rich")
    assert "4★+" in persona_badge("Business")


def test_hotel_required():
    assert is_hotel_required(True, False)
    assert is_hotel_required(False, True)
    assert not is_hotel_required(False, False)


def test_rank_hotels_filters_and_sorts():
    hotels = [
        make_hotel("a", 4, 300),
        make_hotel("b", 5, 700),
        make_hotel("c", 3, 90),
        make_hotel("d", 5, 500),
        make_hotel("e", 4, 200),
    ]
    rich = rank_hotels(hotels, "Rich")
    business = rank_hotels(hotels, "Business")
    assert [h["id"] for h in rich] == ["d", "b"]
    assert [h["id"] for h in business] == ["d", "b", "e", "a"]
    assert all(h["stars"] >= 5 for h in rich)
    assert all(h["stars"] >= 4 for h in business)


def test_resolve_hotel_city_priority():
    top = make_flight("A", dest="LHR")
    assert resolve_hotel_city({"to": "SEA"}, top) == "SEA"
    assert resolve_hotel_city({"to": None}, top) == "LHR"
    assert resolve_hotel_city({}, None) is None


def test_run_hotels_agent_refilters():
    provider = FakeHotelsProvider([make_hotel("a", 3, 50), make_hotel("b", 5, 400)])
    data = run_hotels_agent(provider, "LAX", "Business")
    assert provider.calls == [{"city": "LAX", "min_stars": 4}]
    assert [h["id"] for h in data["hotels"]] == ["b"]


def test_run_hotels_agent_degrades_on_failure():
    assert run_hotels_agent(BrokenHotelsProvider(), "LAX", "Rich") == {"hotels": [], "top": None}
