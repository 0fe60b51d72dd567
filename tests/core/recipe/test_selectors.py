# tests/core/recipe/test_selectors.py
"""
Testes dos seletores de colunas.

Os testes asseguram que:
- cada variante resolve contra o schema na ordem esperada
- seletores por papel respeitam o filtro de tipo
- a união preserva a ordem e remove duplicatas
- a forma declarativa (config) produz o seletor equivalente

Limites explícitos:
    - Não valida guardrails de resolução (ver test_guardrails)
"""

import pandas as pd
import pytest

from recipeflow.core.recipe.schema import Schema
from recipeflow.core.recipe.selectors import (
    EndsWith,
    HasRole,
    Names,
    StartsWith,
    Union,
    all_nominal_predictors,
    all_numeric_predictors,
    all_outcomes,
    all_predictors,
    as_selector,
    ends_with,
    has_role,
    matches,
    names,
    selector_from_config,
    starts_with,
)
from recipeflow.core.recipe.types import OUTCOME, PREDICTOR, ColumnType


@pytest.fixture
def schema() -> Schema:
    df = pd.DataFrame(
        {
            "price": [1.0, 2.0],
            "area": [10.0, 20.0],
            "type_B": [0.0, 1.0],
            "type_C": [1.0, 0.0],
            "neighborhood": ["N1", "N2"],
            "house_id": ["h1", "h2"],
        }
    )
    roles = {
        "price": frozenset({OUTCOME}),
        "area": frozenset({PREDICTOR}),
        "type_B": frozenset({PREDICTOR}),
        "type_C": frozenset({PREDICTOR}),
        "neighborhood": frozenset({PREDICTOR}),
        "house_id": frozenset({"id"}),
    }
    return Schema.from_frame(df, roles)


def test_names_preserves_declared_order_and_skips_missing(schema):
    assert names("type_C", "area", "missing").resolve(schema) == ["type_C", "area"]
    assert names("area").literal_names() == ["area"]


def test_pattern_selectors(schema):
    assert starts_with("type_").resolve(schema) == ["type_B", "type_C"]
    assert ends_with("_id").resolve(schema) == ["house_id"]
    assert matches(r"^(area|price)$").resolve(schema) == ["price", "area"]


def test_role_selectors(schema):
    assert all_predictors().resolve(schema) == ["area", "type_B", "type_C", "neighborhood"]
    assert all_numeric_predictors().resolve(schema) == ["area", "type_B", "type_C"]
    assert all_nominal_predictors().resolve(schema) == ["neighborhood"]
    assert all_outcomes().resolve(schema) == ["price"]
    assert has_role("id").resolve(schema) == ["house_id"]


def test_union_is_ordered_and_unique(schema):
    sel = starts_with("type_") | names("area", "type_B")
    assert isinstance(sel, Union)
    assert sel.resolve(schema) == ["type_B", "type_C", "area"]
    assert sel.literal_names() == ["area", "type_B"]


def test_as_selector_coercions():
    assert as_selector("a") == Names(names=("a",))
    assert as_selector(["a", "b"]) == Names(names=("a", "b"))
    assert isinstance(as_selector(["a", starts_with("x_")]), Union)
    with pytest.raises(TypeError):
        as_selector(42)


def test_describe_is_readable():
    assert starts_with("x_").describe() == "starts_with('x_')"
    assert all_numeric_predictors().describe() == "has_role('predictor', types=[numeric])"


def test_selector_from_config_forms():
    """
    Verifica as formas declarativas aceitas em YAML/JSON.

    Invariantes:
        - str e lista de str viram Names
        - {role, type} vira HasRole com filtro de tipo
        - {any: [...]} vira Union
        - formas desconhecidas são rejeitadas com ValueError
    """
    assert selector_from_config("area") == Names(names=("area",))
    assert selector_from_config(["a", "b"]) == Names(names=("a", "b"))
    assert selector_from_config({"starts_with": "type_"}) == StartsWith(prefix="type_")
    assert selector_from_config({"ends_with": "_id"}) == EndsWith(suffix="_id")
    assert selector_from_config({"role": "predictor", "type": "nominal"}) == HasRole(
        role="predictor", types=frozenset({ColumnType.NOMINAL})
    )
    sel = selector_from_config({"any": ["area", {"starts_with": "type_"}]})
    assert isinstance(sel, Union)

    with pytest.raises(ValueError):
        selector_from_config({"unknown": 1})
    with pytest.raises(ValueError):
        selector_from_config({"role": "predictor", "type": "spaceship"})
    with pytest.raises(ValueError):
        selector_from_config({"any": []})
