# tests/test_clients.py
# -*- coding: utf-8 -*-

import pytest

from conftest import RIO, SAO_PAULO, FakeResponse, FakeSession
from logico2.road.community import NominatimClient, OSRMClient
from logico2.road.ors_client import ORSClient
from logico2.road.ors_common import NoRoute, ProviderConfig, ProviderUnavailable

LINE = {
      "type": "LineString"
    , "coordinates": [[-46.6333, -23.5505], [-45.9, -23.2], [-44.6, -22.7], [-43.9, -22.8], [-43.1729, -22.9068]]
}


def _ors(*responses) -> ORSClient:
    cfg = ProviderConfig.for_ors(api_key="test-key", rate_limit_calls=None)
    return ORSClient(cfg, session=FakeSession(*responses))


def _nominatim(*responses) -> NominatimClient:
    return NominatimClient(ProviderConfig.for_nominatim(rate_limit_calls=None), session=FakeSession(*responses))


def _osrm(*responses) -> OSRMClient:
    return OSRMClient(session=FakeSession(*responses))


# ────────────────────────────────────────────────────────────────────────────────
# ORS
# ────────────────────────────────────────────────────────────────────────────────

def test_ors_directions():
    payload = {"features": [{"geometry": LINE, "properties": {"summary": {"distance": 432_100.0, "duration": 19_800.0}}}]}
    c = _ors(FakeResponse(200, payload))

    route = c.route(SAO_PAULO, RIO)

    assert route.source == "ors"
    assert route.distance_meters == 432_100.0
    assert route.duration_seconds == 19_800.0
    assert len(route.geometry) == 5
    assert route.is_estimated is False

    call = c._sess.calls[0]
    assert call["url"].endswith("/v2/directions/driving-car/geojson")
    assert call["json"]["coordinates"] == [[-46.6333, -23.5505], [-43.1729, -22.9068]]


def test_ors_directions_without_features():
    c = _ors(FakeResponse(200, {"features": []}))
    with pytest.raises(ProviderUnavailable):
        c.route(SAO_PAULO, RIO)


def test_ors_directions_without_geometry_falls_back_to_endpoints():
    payload = {"features": [{"properties": {"summary": {"distance": 400_000.0, "duration": 18_000.0}}}]}
    route = _ors(FakeResponse(200, payload)).route(SAO_PAULO, RIO)
    assert route.geometry == (SAO_PAULO, RIO)
    assert route.is_estimated is True


def test_ors_geocode_restricted_to_brazil():
    payload = {
        "features": [
            {
                  "geometry": {"coordinates": [-46.6560, -23.5614]}
                , "properties": {"label": "Avenida Paulista, São Paulo, SP, Brasil", "layer": "street"}
            }
        ]
    }
    c = _ors(FakeResponse(200, payload))
    p = c.geocode("Av. Paulista, São Paulo")

    assert p.source == "ors"
    assert p.label.startswith("Avenida Paulista")
    params = c._sess.calls[0]["params"]
    assert params["boundary.country"] == "BRA"
    assert params["size"] == 1


def test_ors_geocode_only_country_hit_is_empty():
    payload = {"features": [{"geometry": {"coordinates": [-53.0, -10.0]}, "properties": {"label": "Brasil", "layer": "country"}}]}
    with pytest.raises(ProviderUnavailable):
        _ors(FakeResponse(200, payload)).geocode("Brasil")


def test_ors_suggest():
    feats = [
        {"geometry": {"coordinates": [-46.6 - i / 100, -23.5]}, "properties": {"label": f"Rua {i}", "layer": "street"}}
        for i in range(8)
    ]
    c = _ors(FakeResponse(200, {"features": feats}))
    assert c.suggest("Rua", 5) == [f"Rua {i}" for i in range(5)]
    assert c._sess.calls[0]["url"].endswith("/geocode/autocomplete")


def test_ors_from_env(monkeypatch):
    monkeypatch.setenv("ORS_API_KEY", "env-key")
    c = ORSClient.from_env()
    assert c.cfg.api_key == "env-key"
    c.close()


# ────────────────────────────────────────────────────────────────────────────────
# Nominatim
# ────────────────────────────────────────────────────────────────────────────────

def test_nominatim_geocode():
    item = {"lat": "-22.9068", "lon": "-43.1729", "display_name": "Rio de Janeiro, Brasil", "addresstype": "city"}
    c = _nominatim(FakeResponse(200, [item]))
    p = c.geocode("Rio de Janeiro")

    assert p.source == "nominatim"
    assert p.lat == pytest.approx(-22.9068)
    params = c._sess.calls[0]["params"]
    assert params["countrycodes"] == "br"
    assert params["format"] == "json"
    assert params["limit"] == 1


def test_nominatim_empty_and_unexpected_payloads():
    with pytest.raises(ProviderUnavailable):
        _nominatim(FakeResponse(200, [])).geocode("xyz")
    with pytest.raises(ProviderUnavailable):
        _nominatim(FakeResponse(200, {"error": "bad"})).geocode("xyz")


def test_nominatim_suggest():
    items = [{"lat": "-23.5", "lon": "-46.6", "display_name": f"Rua {i}"} for i in range(3)]
    assert _nominatim(FakeResponse(200, items)).suggest("Rua", 5) == ["Rua 0", "Rua 1", "Rua 2"]


# ────────────────────────────────────────────────────────────────────────────────
# OSRM
# ────────────────────────────────────────────────────────────────────────────────

def test_osrm_route():
    payload = {"code": "Ok", "routes": [{"distance": 434_000.0, "duration": 20_500.0, "geometry": LINE}]}
    c = _osrm(FakeResponse(200, payload))
    route = c.route(SAO_PAULO, RIO)

    assert route.source == "osrm"
    assert route.distance_meters == 434_000.0
    assert len(route.geometry) == 5
    call = c._sess.calls[0]
    assert call["url"].endswith("/route/v1/driving/-46.6333,-23.5505;-43.1729,-22.9068")
    assert call["params"] == {"overview": "full", "geometries": "geojson"}


def test_osrm_no_route():
    with pytest.raises(NoRoute):
        _osrm(FakeResponse(200, {"code": "NoRoute", "routes": []})).route(SAO_PAULO, RIO)
