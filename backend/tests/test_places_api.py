from __future__ import annotations

import pytest


def test_region_only_search(client, catalog):
    response = client.get("/v1/places/ganesha")
    assert response.status_code == 200
    body = response.json()
    assert len(body["places"]) == 5
    assert body["filters"] == {
        "categories": None,
        "price_min": None,
        "price_max": None,
        "platforms": None,
        "payment_methods": None,
        "search": None,
    }
    item = body["places"][0]
    for key in ("id", "name", "price", "distance", "rating", "region", "categories", "platforms"):
        assert key in item


def test_search_echoes_active_filters(client, catalog):
    response = client.get(
        "/v1/places/GANESHA",
        params={"filter_category": "ayam;nasi", "filter_price": "10000;25000", "search": "bakar"},
    )
    assert response.status_code == 200
    body = response.json()
    assert [place["name"] for place in body["places"]] == ["Ayam Bakar Cisitu"]
    assert body["filters"]["categories"] == ["ayam", "nasi"]
    assert body["filters"]["price_min"] == 10000
    assert body["filters"]["price_max"] == 25000
    assert body["filters"]["search"] == "bakar"


def test_sort_parameters(client, catalog):
    response = client.get(
        "/v1/places/ganesha", params={"sort_data": "distance", "sort_status": "desc"}
    )
    assert response.status_code == 200
    distances = [place["distance"] for place in response.json()["places"]]
    assert distances == sorted(distances, reverse=True)


def test_empty_parameters_are_ignored(client, catalog):
    response = client.get(
        "/v1/places/jatinangor",
        params={"filter_category": "", "search": "", "sort_status": "", "sort_data": ""},
    )
    assert response.status_code == 200
    assert len(response.json()["places"]) == 2


def test_no_match_is_an_empty_success(client, catalog):
    response = client.get("/v1/places/jatinangor", params={"search": "pizza"})
    assert response.status_code == 200
    assert response.json()["places"] == []


def test_unknown_region_is_404(client, catalog):
    response = client.get("/v1/places/bandung")
    assert response.status_code == 404
    assert response.json()["param"] == "region"


@pytest.mark.parametrize(
    "params, param",
    [
        ({"sort_status": "xyz"}, "sort_status"),
        ({"sort_data": "name"}, "sort_data"),
        ({"filter_price": "murah;mahal"}, "filter_price"),
    ],
)
def test_invalid_parameters_are_400(client, catalog, params, param):
    response = client.get("/v1/places/ganesha", params=params)
    assert response.status_code == 400
    body = response.json()
    assert body["param"] == param
    assert body["detail"]


def test_create_place(client, catalog):
    response = client.post(
        "/v1/places",
        json={
            "name": "  Seblak   Jeletot ",
            "price": 10000,
            "region": "jatinangor",
            "time_open": "10:00",
            "time_close": "22:00",
            "rating": 4.1,
            "category": "Seblak;PEDAS",
            "platform": ["GoFood"],
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Seblak Jeletot"
    assert body["region"] == "JATINANGOR"
    assert body["categories"] == [{"name": "pedas"}, {"name": "seblak"}]
    assert body["platforms"] == [{"name": "gofood"}]
    assert body["payment_methods"] == []

    found = client.get("/v1/places/jatinangor", params={"filter_category": "Pedas"}).json()
    assert [place["name"] for place in found["places"]] == ["Seblak Jeletot"]


@pytest.mark.parametrize(
    "override",
    [
        {"rating": 6},
        {"price": -1},
        {"region": "bandung"},
        {"time_open": "25:00"},
        {"name": "   "},
    ],
)
def test_create_place_rejects_invalid_payload(client, catalog, override):
    payload = {"name": "Warung Baru", "price": 10000, "region": "GANESHA"}
    payload.update(override)
    response = client.post("/v1/places", json=payload)
    assert response.status_code == 422


def test_delete_place(client, catalog):
    place_id = catalog["Warung Kopi Dago"]
    response = client.delete(f"/v1/places/{place_id}")
    assert response.status_code == 204
    assert client.delete(f"/v1/places/{place_id}").status_code == 404
    names = [place["name"] for place in client.get("/v1/places/ganesha").json()["places"]]
    assert "Warung Kopi Dago" not in names


def test_delete_rejects_malformed_id(client, catalog):
    assert client.delete("/v1/places/not-a-uuid").status_code == 422
