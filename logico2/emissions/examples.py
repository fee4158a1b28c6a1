# logico2/emissions/examples.py
# -*- coding: utf-8 -*-
"""
Ready-made calculator scenarios for typical Brazilian freight operations.

Public API
----------
- EXAMPLE_CATEGORIES
- ExampleScenario
- list_examples(category=None) -> list[ExampleScenario]
- get_example(example_id) -> ExampleScenario
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from logico2.core.models import (
      CargoProfile
    , InvalidInput
    , OperationProfile
    , VehicleProfile
)
from logico2.infra.logging import get_logger

_log = get_logger(__name__)


EXAMPLE_CATEGORIES: Dict[str, str] = {
      "all": "Todos"
    , "regional": "Regional"
    , "highway": "Rodoviário"
    , "agribusiness": "Agronegócio"
    , "challenging": "Rotas Desafiadoras"
    , "eco-friendly": "Sustentável"
    , "specialized": "Especializado"
}


@dataclass(frozen=True)
class ExampleScenario:
    id: str
    title: str
    description: str
    category: str
    vehicle: VehicleProfile
    operation: OperationProfile
    cargo: CargoProfile

    def as_inputs(self) -> Tuple[VehicleProfile, OperationProfile, CargoProfile]:
        """(vehicle, operation, cargo) ready for estimate_emissions."""
        return self.vehicle, self.operation, self.cargo


_EXAMPLES: Tuple[ExampleScenario, ...] = (
      ExampleScenario(
          id="regional-delivery"
        , title="Distribuição Regional"
        , description="Entregas diárias de um centro de distribuição para lojas em cidades vizinhas."
        , category="regional"
        , vehicle=VehicleProfile("medium", 2015, "diesel", 3.5)
        , operation=OperationProfile(250, "mixed", 1, "day")
        , cargo=CargoProfile(8, "general", 85)
    )
    , ExampleScenario(
          id="long-haul"
        , title="Transporte de Longa Distância"
        , description="Carreta fazendo o trajeto São Paulo - Rio de Janeiro pela Via Dutra."
        , category="highway"
        , vehicle=VehicleProfile("semi", 2019, "diesel-b12", 2.2)
        , operation=OperationProfile(430, "highway", 2, "week")
        , cargo=CargoProfile(28, "container", 90)
    )
    , ExampleScenario(
          id="agribusiness"
        , title="Transporte de Grãos"
        , description="Rodotrem levando soja de Sorriso (MT) ao porto de Santos (SP)."
        , category="agribusiness"
        , vehicle=VehicleProfile("road-train", 2020, "diesel-b12", 1.8)
        , operation=OperationProfile(1800, "highway", 1, "week")
        , cargo=CargoProfile(57, "bulk", 95)
    )
    , ExampleScenario(
          id="mountainous"
        , title="Rota Serra do Mar"
        , description="Caminhão pesado descendo a Serra do Mar entre o planalto e o porto."
        , category="challenging"
        , vehicle=VehicleProfile("heavy", 2016, "diesel", 1.5)
        , operation=OperationProfile(80, "mountainous", 1, "day")
        , cargo=CargoProfile(15, "general", 80)
    )
    , ExampleScenario(
          id="biodiesel"
        , title="Transporte com Biodiesel"
        , description="Operação regional usando biodiesel B100 para reduzir emissões."
        , category="eco-friendly"
        , vehicle=VehicleProfile("medium", 2021, "biodiesel", 3.0)
        , operation=OperationProfile(300, "mixed", 3, "week")
        , cargo=CargoProfile(10, "general", 75)
    )
    , ExampleScenario(
          id="livestock"
        , title="Transporte de Gado"
        , description="Boiadeiro levando gado de fazendas do interior para frigoríficos."
        , category="specialized"
        , vehicle=VehicleProfile("heavy", 2014, "diesel", 2.2)
        , operation=OperationProfile(350, "mixed", 2, "week")
        , cargo=CargoProfile(20, "livestock", 90)
    )
)


def list_examples(category: Optional[str] = None) -> List[ExampleScenario]:
    """
    All scenarios, or only those in `category` ("all" and None mean no filter).
    """
    if category is None or category == "all":
        return list(_EXAMPLES)
    if category not in EXAMPLE_CATEGORIES:
        raise InvalidInput(
            f"Unknown example category {category!r}; expected one of {sorted(EXAMPLE_CATEGORIES)}"
        )
    return [ex for ex in _EXAMPLES if ex.category == category]


def get_example(example_id: str) -> ExampleScenario:
    for ex in _EXAMPLES:
        if ex.id == example_id:
            return ex
    _log.warning("get_example: unknown id %r", example_id)
    raise InvalidInput(
        f"Unknown example {example_id!r}; expected one of {[ex.id for ex in _EXAMPLES]}"
    )


__all__ = ["EXAMPLE_CATEGORIES", "ExampleScenario", "get_example", "list_examples"]
