"""Unit tests for address component restructuring and query normalization."""

import json

from address_proximity.lib.geocoder.base import GeocodingResult
from address_proximity.lib.geocoder.components import normalize_lookup_query, restructure_components

WACKER = {
    "formatted_address": "233 S Wacker Dr Suite 5, Chicago, IL 60606, USA",
    "place_id": "ChIJ-wacker",
    "types": ["subpremise"],
    "address_components": [
        {"long_name": "Suite 5", "short_name": "5", "types": ["subpremise"]},
        {"long_name": "233", "short_name": "233", "types": ["street_number"]},
        {"long_name": "South Wacker Drive", "short_name": "S Wacker Dr", "types": ["route"]},
        {"long_name": "The Loop", "short_name": "The Loop", "types": ["neighborhood", "political"]},
        {"long_name": "Chicago", "short_name": "Chicago", "types": ["locality", "political"]},
        {"long_name": "Cook County", "short_name": "Cook County", "types": ["administrative_area_level_2"]},
        {"long_name": "Illinois", "short_name": "IL", "types": ["administrative_area_level_1", "political"]},
        {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
        {"long_name": "60606", "short_name": "60606", "types": ["postal_code"]},
    ],
}


class TestRestructureComponents:
    """Tests for restructure_components."""

    def test_full_address(self) -> None:
        components = restructure_components(WACKER)
        assert components.street1 == "233 South Wacker Drive"
        assert components.street2 == "Suite 5"
        assert components.city == "Chicago"
        assert components.state == "Illinois"
        assert components.zip == "60606"
        assert components.neighborhood == "The Loop"
        assert components.county == "Cook County"
        assert components.country == "United States"
        assert components.country_code == "US"
        assert components.place_id == "ChIJ-wacker"
        assert components.formatted == WACKER["formatted_address"]
        assert components.name is None

    def test_empty_input(self) -> None:
        assert restructure_components(None).to_dict() == restructure_components({}).to_dict()
        assert all(value is None for value in restructure_components(None).to_dict().values())

    def test_postal_town_as_city(self) -> None:
        raw = {"address_components": [{"long_name": "Reading", "short_name": "Reading", "types": ["postal_town"]}]}
        assert restructure_components(raw).city == "Reading"

    def test_place_name(self) -> None:
        raw = {
            "address_components": [
                {"long_name": "Willis Tower", "short_name": "Willis Tower", "types": ["premise"]},
                {"long_name": "233", "short_name": "233", "types": ["street_number"]},
            ]
        }
        assert restructure_components(raw).name == "Willis Tower"

    def test_route_only(self) -> None:
        route = {"long_name": "Lake Shore Drive", "short_name": "Lake Shore Dr", "types": ["route"]}
        raw = {"address_components": [route]}
        assert restructure_components(raw).street1 == "Lake Shore Drive"

    def test_malformed_components_ignored(self) -> None:
        raw = {"address_components": ["junk", {"long_name": "Ohio", "types": ["administrative_area_level_1"]}]}
        assert restructure_components(raw).state == "Ohio"
        assert restructure_components({"address_components": "junk"}).state is None

    def test_result_type(self) -> None:
        result = GeocodingResult(latitude=41.88, longitude=-87.63, raw_response=WACKER)
        assert result.result_type == "subpremise"
        assert GeocodingResult(latitude=0.0, longitude=0.0).result_type is None


class TestNormalizeLookupQuery:
    """Tests for cache key normalization."""

    def test_text(self) -> None:
        assert normalize_lookup_query("  233 s   wacker dr,\tchicago ") == "233 S WACKER DR, CHICAGO"

    def test_blank_text(self) -> None:
        assert normalize_lookup_query("   ") == ""

    def test_structured_query_is_canonical(self) -> None:
        first = normalize_lookup_query({"components": "country:us", "address": " springfield "})
        second = normalize_lookup_query({"address": "SPRINGFIELD", "components": "COUNTRY:US", "bounds": None})
        assert first == second
        assert json.loads(first) == {"address": "SPRINGFIELD", "components": "COUNTRY:US"}
