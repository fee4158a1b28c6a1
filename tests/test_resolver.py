# tests/test_resolver.py
# -*- coding: utf-8 -*-

import asyncio

import pytest

from conftest import RIO, FakeProvider
from logico2.addressing.resolver import coerce_point, geocode_address, search_addresses
from logico2.core.models import GeoPoint, InvalidInput
from logico2.road.ors_common import AddressNotFound, ProviderUnavailable, RateLimited

PAULISTA = GeoPoint(lat=-23.5614, lon=-46.6560, label="Avenida Paulista, São Paulo", source="ors")
PAULISTA_OSM = GeoPoint(lat=-23.5613, lon=-46.6565, label="Avenida Paulista, Bela Vista", source="nominatim")


def _geocode(value, providers):
    return asyncio.run(geocode_address(value, providers=providers, timeout_s=1.0))


def test_coerce_point_accepts_coordinate_shapes():
    assert coerce_point("-23.5505,-46.6333").lat == -23.5505
    assert coerce_point((-22.9068, -43.1729)).lon == -43.1729
    assert coerce_point({"lat": -22.9, "lon": -43.2, "label": "Rio"}).label == "Rio"
    assert coerce_point(RIO).source == "input"
    assert coerce_point(PAULISTA) is PAULISTA
    assert coerce_point("Rio de Janeiro") is None


def test_coerce_point_rejects_bad_values():
    with pytest.raises(InvalidInput):
        coerce_point((95.0, 10.0))
    with pytest.raises(TypeError):
        coerce_point(42)


def test_coordinates_never_reach_providers(fake_providers):
    primary = FakeProvider(geocode=PAULISTA)
    p = _geocode("-23.5505, -46.6333", fake_providers(primary=primary))
    assert p.source == "input"
    assert p.label == "-23.550500,-46.633300"
    assert primary.calls["geocode"] == []


def test_primary_wins(fake_providers):
    secondary = FakeProvider(geocode=PAULISTA_OSM)
    p = _geocode("Av. Paulista", fake_providers(primary=FakeProvider(geocode=PAULISTA), geocoder=secondary))
    assert p == PAULISTA
    assert secondary.calls["geocode"] == []


@pytest.mark.parametrize("failure", [ProviderUnavailable("no results"), RateLimited("429")])
def test_secondary_called_exactly_once_when_primary_fails(fake_providers, failure):
    primary = FakeProvider(geocode=failure)
    secondary = FakeProvider(geocode=PAULISTA_OSM)

    p = _geocode("Av. Paulista", fake_providers(primary=primary, geocoder=secondary))

    assert p == PAULISTA_OSM
    assert primary.calls["geocode"] == [("Av. Paulista",)]
    assert secondary.calls["geocode"] == [("Av. Paulista",)]


def test_without_primary_only_secondary_is_used(fake_providers):
    secondary = FakeProvider(geocode=PAULISTA_OSM)
    assert _geocode("Av. Paulista", fake_providers(geocoder=secondary)).source == "nominatim"


def test_all_tiers_fail(fake_providers):
    providers = fake_providers(
          primary=FakeProvider(geocode=ProviderUnavailable("x"))
        , geocoder=FakeProvider(geocode=ProviderUnavailable("y"))
    )
    with pytest.raises(AddressNotFound) as ei:
        _geocode("Rua Inexistente 999", providers)
    assert ei.value.address == "Rua Inexistente 999"


def test_blank_address(fake_providers):
    primary = FakeProvider(geocode=PAULISTA)
    with pytest.raises(AddressNotFound):
        _geocode("   ", fake_providers(primary=primary))
    assert primary.calls["geocode"] == []


def test_search_short_query_makes_no_calls(fake_providers):
    primary = FakeProvider(suggest=["x"])
    assert asyncio.run(search_addresses("Av", providers=fake_providers(primary=primary))) == []
    assert primary.calls["suggest"] == []


def test_search_falls_back_and_truncates(fake_providers):
    providers = fake_providers(
          primary=FakeProvider(suggest=ProviderUnavailable("quota"))
        , geocoder=FakeProvider(suggest=[f"Rua {i}" for i in range(8)])
    )
    labels = asyncio.run(search_addresses("Rua", providers=providers, limit=3, timeout_s=1.0))
    assert labels == ["Rua 0", "Rua 1", "Rua 2"]
    assert providers.geocoder.calls["suggest"] == [("Rua", 3)]


def test_search_never_raises(fake_providers):
    providers = fake_providers(
          primary=FakeProvider(suggest=ProviderUnavailable("x"))
        , geocoder=FakeProvider(suggest=ProviderUnavailable("y"))
    )
    assert asyncio.run(search_addresses("Avenida", providers=providers, timeout_s=1.0)) == []
