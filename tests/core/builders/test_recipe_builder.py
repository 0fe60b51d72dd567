# tests/core/builders/test_recipe_builder.py
"""
Testes do builder declarativo de receitas (build_recipe).

Os testes asseguram que:
- a seção `recipe` produz uma Recipe equivalente à declarada em código
- seletores declarativos são convertidos para os seletores do core
- entradas malformadas falham com InvalidStepConfig e o índice do Step
- o builder não executa prepare

Limites explícitos:
    - Não valida carregamento de arquivos (ver core/config)
"""

import pandas as pd
import pytest

from recipeflow.builders.recipe import build_recipe
from recipeflow.core.exceptions import InvalidStepConfig
from recipeflow.core.recipe import Recipe, all_nominal_predictors, starts_with
from recipeflow.core.recipe.types import ColumnType
from recipeflow.steps import DummyStep, InteractStep, LogStep, OtherStep


def _config() -> dict:
    return {
        "recipe": {
            "roles": {"outcome": "price", "predictors": "all"},
            "steps": [
                {"kind": "log", "columns": "area"},
                {"kind": "other", "columns": "neighborhood", "threshold": 0.1},
                {"kind": "dummy", "columns": {"role": "predictor", "type": ["nominal", "ordinal"]}},
                {"kind": "interact", "a": "area", "b": {"starts_with": "type_"}},
            ],
        }
    }


def test_build_recipe_matches_code_declaration(housing_df):
    built = build_recipe(_config())
    coded = (
        Recipe.declare(outcome="price")
        .add_step(LogStep(columns="area"))
        .add_step(OtherStep(columns="neighborhood", threshold=0.1))
        .add_step(DummyStep(columns=all_nominal_predictors()))
        .add_step(InteractStep(a="area", b=starts_with("type_")))
    )

    assert built == coded
    assert built.fingerprint() == coded.fingerprint()
    pd.testing.assert_frame_equal(built.prepare(housing_df).bake(None), coded.prepare(housing_df).bake(None))


def test_build_recipe_optional_keys():
    cfg = {
        "recipe": {
            "roles": {"outcome": "price", "custom": {"house_id": "id"}},
            "strict_schema": False,
            "types": {"notes": "text"},
            "steps": [
                {"kind": "log", "id": "log_price", "columns": "price", "touches_outcomes": True, "skip": True},
            ],
        }
    }
    rec = build_recipe(cfg)
    assert rec.strict_schema is False
    assert rec.type_overrides == (("notes", ColumnType.TEXT),)
    step = rec.steps[0]
    assert (step.id, step.skip, step.touches_outcomes) == ("log_price", True, True)


def test_build_recipe_without_steps():
    rec = build_recipe({"recipe": {"roles": {"outcome": "price"}}})
    assert rec.steps == ()


@pytest.mark.parametrize(
    "cfg",
    [
        {},
        {"recipe": []},
        {"recipe": {"steps": []}},
        {"recipe": {"roles": {}}},
        {"recipe": {"roles": {"outcome": "price"}, "steps": {"kind": "log"}}},
        {"recipe": {"roles": {"outcome": "price"}, "strict_schema": "yes"}},
        {"recipe": {"roles": {"outcome": "price"}, "types": {"notes": "prose"}}},
        {"recipe": {"roles": {"outcome": "price", "custom": ["id"]}}},
    ],
)
def test_build_recipe_rejects_malformed_sections(cfg):
    with pytest.raises(InvalidStepConfig):
        build_recipe(cfg)


@pytest.mark.parametrize(
    "step",
    [
        "log",
        {"columns": "area"},
        {"kind": "boxcox", "columns": "area"},
        {"kind": "log", "columns": {"nope": 1}},
        {"kind": "log", "columns": "area", "power": 2},
        {"kind": "other", "columns": "neighborhood", "threshold": -1},
        {"kind": "other", "columns": "neighborhood", "threshold": float("inf")},
    ],
)
def test_build_recipe_reports_step_index(step):
    cfg = {"recipe": {"roles": {"outcome": "price"}, "steps": [{"kind": "log", "columns": "area"}, step]}}
    with pytest.raises(InvalidStepConfig) as exc:
        build_recipe(cfg)
    assert exc.value.details["index"] == 1
    assert "recipe.steps[1]" in exc.value.message
