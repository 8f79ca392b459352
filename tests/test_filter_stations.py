"""
Tests for the station filter engine.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import StationNotFound
from app.application.use_cases.filter_stations import (
    FilterStationsUseCase,
    active_filter_count,
    default_criteria,
    filter_stations,
)
from app.domain.entities.filter_criteria import ANY, FilterCriteria
from app.domain.entities.station import AvailabilityStatus
from app.infrastructure.directory.static_directory import StaticStationDirectory


def _catalog(make_station):
    return [
        make_station(
            id="A",
            name="Tata Power Hub",
            address="Connaught Place, New Delhi",
            distance_km=2.5,
            charger_types=("CCS2",),
            amenities=("WiFi", "Coffee"),
        ),
        make_station(
            id="B",
            name="Statiq Noida",
            address="Sector 18, Noida",
            distance_km=4.2,
            status=AvailabilityStatus.busy,
            charger_types=("Type2AC",),
            amenities=("WiFi",),
        ),
        make_station(
            id="C",
            name="Jio-bp Dwarka",
            address="Dwarka, New Delhi",
            distance_km=12.3,
            charger_types=("CCS2",),
            amenities=("WiFi", "Coffee", "ATM"),
        ),
    ]


def _ids(stations):
    return [s.id for s in stations]


def test_type_and_distance_example(make_station):
    """CCS2 within 10 km keeps A only: B fails on type, C on distance."""
    criteria = FilterCriteria(charger_type="CCS2", max_distance_km=10)
    assert _ids(filter_stations(_catalog(make_station), "", criteria)) == ["A"]


def test_query_matches_name_or_address_case_insensitive(make_station):
    catalog = _catalog(make_station)
    wide = FilterCriteria(max_distance_km=50)

    assert _ids(filter_stations(catalog, "new delhi", wide)) == ["A", "C"]
    assert _ids(filter_stations(catalog, "STATIQ", wide)) == ["B"]
    assert _ids(filter_stations(catalog, "", wide)) == ["A", "B", "C"]
    assert filter_stations(catalog, "mumbai", wide) == []


def test_availability_must_match_exactly(make_station):
    catalog = _catalog(make_station)
    busy = FilterCriteria(availability="busy", max_distance_km=50)
    offline = FilterCriteria(availability="offline", max_distance_km=50)

    assert _ids(filter_stations(catalog, "", busy)) == ["B"]
    assert filter_stations(catalog, "", offline) == []


def test_amenities_require_all_labels(make_station):
    catalog = _catalog(make_station)
    both = FilterCriteria(amenities=frozenset({"WiFi", "Coffee"}), max_distance_km=50)
    atm = FilterCriteria(amenities=frozenset({"ATM"}), max_distance_km=50)

    assert _ids(filter_stations(catalog, "", both)) == ["A", "C"]
    assert _ids(filter_stations(catalog, "", atm)) == ["C"]


def test_distance_bound_is_inclusive(make_station):
    catalog = _catalog(make_station)
    assert _ids(filter_stations(catalog, "", FilterCriteria(max_distance_km=4.2))) == ["A", "B"]


def test_empty_catalog_gives_empty_result():
    assert filter_stations([], "anything", FilterCriteria()) == []


def test_filter_is_idempotent(make_station):
    catalog = _catalog(make_station)
    criteria = FilterCriteria(amenities=frozenset({"WiFi"}), max_distance_km=20)
    once = filter_stations(catalog, "delhi", criteria)
    assert filter_stations(once, "delhi", criteria) == once


def test_tightening_never_grows_result(make_station):
    catalog = _catalog(make_station)
    loose = FilterCriteria(max_distance_km=20)
    narrower = FilterCriteria(max_distance_km=3)
    more_amenities = FilterCriteria(amenities=frozenset({"Coffee"}), max_distance_km=20)

    base = len(filter_stations(catalog, "", loose))
    assert len(filter_stations(catalog, "", narrower)) <= base
    assert len(filter_stations(catalog, "", more_amenities)) <= base


def test_order_preserved_and_inputs_untouched(make_station):
    catalog = list(reversed(_catalog(make_station)))
    snapshot = list(catalog)
    criteria = FilterCriteria(charger_type=ANY, max_distance_km=50)

    result = filter_stations(catalog, "", criteria)

    assert _ids(result) == ["C", "B", "A"]
    assert catalog == snapshot
    assert result is not catalog


def test_active_filter_count():
    assert active_filter_count(default_criteria()) == 0
    criteria = FilterCriteria(
        charger_type="CCS2",
        availability="available",
        amenities=frozenset({"WiFi"}),
        max_distance_km=25,
    )
    assert active_filter_count(criteria) == 4


def test_use_case_reads_directory_catalog():
    """Default criteria over the bundled catalog drop the station beyond 10 km."""
    uc = FilterStationsUseCase(directory=StaticStationDirectory())
    result = uc.execute("", default_criteria())

    assert result.total == 5
    assert _ids(result.stations) == ["1", "2", "3", "4"]
    assert result.active_filters == 0
    assert not result.empty

    nothing = uc.execute("no such place", default_criteria())
    assert nothing.empty


def test_query_whitespace_is_matched_literally(make_station):
    """Only an empty query matches everything; spaces are part of the substring."""
    catalog = [
        make_station(id="A", name="Hub", address="Noida"),
        make_station(id="B", name="Tata Hub", address="Delhi"),
    ]
    wide = FilterCriteria(max_distance_km=50)

    assert _ids(filter_stations(catalog, " ", wide)) == ["B"]
    assert filter_stations(catalog, "hub ", wide) == []
    assert _ids(filter_stations(catalog, " HUB", wide)) == ["B"]


def test_use_case_station_lookup():
    uc = FilterStationsUseCase(directory=StaticStationDirectory())
    assert uc.get_station("3").name == "ChargeZone Cyber Hub"
    with pytest.raises(StationNotFound):
        uc.get_station("99")
