# tests/test_coords.py
# -*- coding: utf-8 -*-

import pytest

from logico2.addressing.coords import (
      filter_hits
    , format_latlon
    , hit_labels
    , hit_to_point
    , normalize_hit
    , parse_latlon_str
)

ORS_FEATURE = {
      "type": "Feature"
    , "geometry": {"type": "Point", "coordinates": [-46.6560, -23.5614]}
    , "properties": {"label": "Avenida Paulista, São Paulo, SP, Brasil", "layer": "street"}
}
NOMINATIM_ITEM = {
      "lat": "-22.9068"
    , "lon": "-43.1729"
    , "display_name": "Rio de Janeiro, Região Sudeste, Brasil"
    , "addresstype": "city"
}
COUNTRY_FEATURE = {
      "geometry": {"coordinates": [-53.0, -10.0]}
    , "properties": {"label": "Brasil", "layer": "country"}
}


@pytest.mark.parametrize(
    "text, expected",
    [
          ("-23.5505,-46.6333", (-23.5505, -46.6333))
        , (" -22.9 , -43.17 ", (-22.9, -43.17))
        , ("10,20", (10.0, 20.0))
        , ("95,10", None)
        , ("10,200", None)
        , ("São Paulo, SP", None)
        , ("", None)
    ],
)
def test_parse_latlon_str(text, expected):
    assert parse_latlon_str(text) == expected


def test_format_latlon():
    assert format_latlon(-23.5505, -46.6333) == "-23.550500,-46.633300"


def test_normalize_both_provider_shapes():
    ors = normalize_hit(ORS_FEATURE)
    nom = normalize_hit(NOMINATIM_ITEM)
    assert ors == {"lat": -23.5614, "lon": -46.6560, "label": ORS_FEATURE["properties"]["label"], "layer": "street"}
    assert nom["lat"] == pytest.approx(-22.9068)
    assert nom["label"].startswith("Rio de Janeiro")
    assert nom["layer"] == "city"


def test_normalize_rejects_malformed():
    assert normalize_hit({"lat": "x", "lon": "1"}) is None
    assert normalize_hit({"geometry": {"coordinates": [1]}}) is None
    assert normalize_hit({"lat": "100", "lon": "0"}) is None


def test_filter_hits_drops_country_layer():
    hits = filter_hits({"type": "FeatureCollection", "features": [COUNTRY_FEATURE, ORS_FEATURE]})
    assert len(hits) == 1
    assert hits[0]["layer"] == "street"
    assert filter_hits(None) == []
    assert filter_hits([NOMINATIM_ITEM, 42, "not json"])[0]["layer"] == "city"


def test_hit_to_point_and_labels():
    p = hit_to_point(normalize_hit(NOMINATIM_ITEM), source="nominatim")
    assert p.source == "nominatim"
    assert p.lat == pytest.approx(-22.9068)

    unlabeled = hit_to_point({"lat": 1.0, "lon": 2.0, "label": None}, source="ors")
    assert unlabeled.label == "1.000000,2.000000"

    assert hit_labels([NOMINATIM_ITEM, NOMINATIM_ITEM, NOMINATIM_ITEM], 2) == [NOMINATIM_ITEM["display_name"]] * 2
