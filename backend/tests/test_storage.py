"""Evaluate compiled queries against the SQLite-backed place store."""

from __future__ import annotations

import asyncio

import pytest
from backend.app.contracts import PlaceCreate
from backend.app.search import compile_query, parse_params
from backend.app.seed import DEMO_PLACES, seed
from backend.app.storage import DB


def _find(raw=None, region="ganesha"):
    spec = compile_query(parse_params(raw or {}, region))
    return asyncio.run(DB.find_places(spec))


def _names(places):
    return [place["name"] for place in places]


class TestFindPlaces:
    def test_region_only_returns_whole_region(self, catalog):
        assert len(_find()) == 5
        assert set(_names(_find(region="jatinangor"))) == {
            "Bakso Jatinangor",
            "Nasi Goreng Sayati",
        }

    def test_default_order_is_rating_ascending(self, catalog):
        assert _names(_find()) == [
            "Mie Kocok Tamansari",
            "Warung Kopi Dago",
            "Crisbar",
            "Ayam Bakar Cisitu",
            "Sate Bakar Dago",
        ]

    def test_sort_by_distance_ascending(self, catalog):
        places = _find({"sort_data": "distance", "sort_status": "asc"})
        distances = [place["distance"] for place in places]
        assert distances == sorted(distances)
        assert places[0]["name"] == "Warung Kopi Dago"

    def test_sort_by_price_descending(self, catalog):
        prices = [place["price"] for place in _find({"sort_data": "price", "sort_status": "desc"})]
        assert prices == [30000, 22000, 18000, 15000, 12000]

    def test_price_range_inclusive(self, catalog):
        places = _find({"filter_price": "15000;22000"})
        assert set(_names(places)) == {"Warung Kopi Dago", "Ayam Bakar Cisitu", "Crisbar"}

    def test_price_lower_bound_only(self, catalog):
        assert set(_names(_find({"filter_price": "20000;"}))) == {"Crisbar", "Sate Bakar Dago"}

    def test_inverted_price_range_is_empty(self, catalog):
        assert _find({"filter_price": "25000;10000"}) == []

    def test_category_membership_is_case_insensitive(self, catalog):
        places = _find({"filter_category": "AYAM;Nasi"})
        assert set(_names(places)) == {"Ayam Bakar Cisitu", "Crisbar"}

    def test_category_and_search_are_conjoined(self, catalog):
        places = _find({"filter_category": "ayam;nasi", "search": "bakar"})
        assert _names(places) == ["Ayam Bakar Cisitu"]

    def test_search_spans_name_description_and_category(self, catalog):
        assert set(_names(_find({"search": "BAKAR"}))) == {
            "Ayam Bakar Cisitu",
            "Sate Bakar Dago",
            "Mie Kocok Tamansari",
        }
        assert _names(_find({"search": "charcoal"})) == ["Sate Bakar Dago"]

    def test_search_treats_wildcards_literally(self, catalog):
        assert _find({"search": "%"}) == []
        assert _find({"search": "_"}) == []

    def test_search_folds_non_ascii_case(self, catalog):
        asyncio.run(
            DB.create_place(
                PlaceCreate(
                    name="Éclair Dago",
                    description="CRÈME BRÛLÉE and pastries",
                    price=25000,
                    region="ganesha",
                )
            )
        )
        assert _names(_find({"search": "éclair"})) == ["Éclair Dago"]
        assert _names(_find({"search": "ÉCLAIR"})) == ["Éclair Dago"]
        assert _names(_find({"search": "crème brûlée"})) == ["Éclair Dago"]

    def test_platform_and_payment_filters(self, catalog):
        assert set(_names(_find({"filter_platform": "GoFood"}))) == {
            "Ayam Bakar Cisitu",
            "Crisbar",
            "Sate Bakar Dago",
        }
        assert _names(_find({"filter_payment": "ovo;dana"})) == ["Crisbar"]

    def test_filters_never_leak_across_regions(self, catalog):
        assert _names(_find({"filter_payment": "dana"}, region="ganesha")) == []
        assert _names(_find({"filter_payment": "dana"}, region="jatinangor")) == [
            "Nasi Goreng Sayati"
        ]

    @pytest.mark.parametrize(
        "dropped",
        ["filter_category", "filter_price", "filter_platform", "filter_payment", "search"],
    )
    def test_omitting_a_dimension_never_narrows(self, catalog, dropped):
        full = {
            "filter_category": "ayam;nasi",
            "filter_price": "10000;25000",
            "filter_platform": "gofood",
            "filter_payment": "qris",
            "search": "a",
        }
        relaxed = {key: value for key, value in full.items() if key != dropped}
        assert set(_names(_find(full))) <= set(_names(_find(relaxed)))

    def test_tags_are_projected_to_names(self, catalog):
        (place,) = _find({"search": "Crisbar"})
        assert place["categories"] == [{"name": "ayam"}, {"name": "nasi"}]
        assert place["payment_methods"] == [{"name": "cash"}, {"name": "ovo"}, {"name": "qris"}]
        assert place["region"] == "GANESHA"


class TestWrites:
    def test_create_reuses_existing_tags(self, catalog):
        payload = PlaceCreate(
            name="Ayam Geprek Dipatiukur",
            price=13000,
            region="ganesha",
            category="Ayam ; Pedas",
        )
        created = asyncio.run(DB.create_place(payload))
        assert created["categories"] == [{"name": "ayam"}, {"name": "pedas"}]
        assert set(_names(_find({"filter_category": "pedas"}))) == {"Ayam Geprek Dipatiukur"}
        assert len(_find({"filter_category": "ayam"})) == 3

    def test_concurrent_creates_share_a_new_tag(self, catalog):
        payloads = [
            PlaceCreate(name="Warung Baru Satu", price=11000, region="ganesha", category="baru"),
            PlaceCreate(name="Warung Baru Dua", price=12000, region="ganesha", category="Baru"),
        ]

        async def create_both():
            return await asyncio.gather(*(DB.create_place(payload) for payload in payloads))

        first, second = asyncio.run(create_both())
        assert first["categories"] == second["categories"] == [{"name": "baru"}]
        assert set(_names(_find({"filter_category": "baru"}))) == {
            "Warung Baru Satu",
            "Warung Baru Dua",
        }

    def test_get_and_delete(self, catalog):
        place_id = catalog["Crisbar"]
        assert asyncio.run(DB.get_place(place_id))["name"] == "Crisbar"
        assert asyncio.run(DB.delete_place(place_id)) is True
        assert asyncio.run(DB.get_place(place_id)) is None
        assert asyncio.run(DB.delete_place(place_id)) is False
        assert "Crisbar" not in _names(_find())

    def test_count_places(self, catalog):
        assert asyncio.run(DB.count_places()) == 7


def test_seed_fills_empty_store_once(empty_catalog):
    assert asyncio.run(seed()) == len(DEMO_PLACES)
    assert asyncio.run(seed()) == 0
    assert asyncio.run(DB.count_places()) == len(DEMO_PLACES)
