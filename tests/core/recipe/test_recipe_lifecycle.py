# tests/core/recipe/test_recipe_lifecycle.py
"""
Testes do ciclo de vida Declared → Prepared.

Este módulo valida a separação entre a Recipe declarada (imutável, sem
dados) e a PreparedRecipe (estado aprendido congelado).

Os testes asseguram que:
- a declaração é imutável e preserva ordem e ids
- ids duplicados são rejeitados na declaração
- prepare é idempotente e não muta a Recipe nem o treino
- prepare sobre uma PreparedRecipe produz uma instância nova
- falhas em qualquer Step abortam a preparação inteira

Decisões arquiteturais:
    - Declaração e preparação são tipos distintos
    - A mesma Recipe é reutilizável entre experimentos

Limites explícitos:
    - Não valida a semântica de cada Step (ver tests/steps)
"""

import dataclasses

import pandas as pd
import pytest

from recipeflow.core.exceptions import InvalidStepConfig
from recipeflow.core.recipe import PreparedRecipe, Recipe, all_nominal_predictors
from recipeflow.core.recipe.recipe import DuplicateStepIdError
from recipeflow.steps import DummyStep, LogStep, NormalizeStep, OtherStep


def _recipe() -> Recipe:
    return (
        Recipe.declare(outcome="price")
        .add_step(LogStep(columns="area"))
        .add_step(OtherStep(columns="neighborhood", threshold=0.10))
        .add_step(DummyStep(columns=all_nominal_predictors()))
    )


def test_add_step_returns_new_recipe_and_assigns_ids():
    base = Recipe.declare(outcome="price")
    rec = base.add_step(LogStep(columns="area")).add_step(NormalizeStep(columns="area", id="scale_area"))

    assert base.steps == ()
    assert rec.step_ids() == ["log_1", "scale_area"]


def test_recipe_is_frozen():
    rec = _recipe()
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.strict_schema = False  # type: ignore[misc]


def test_duplicate_step_ids_rejected_at_declaration():
    rec = Recipe.declare(outcome="price").add_step(LogStep(columns="area", id="tx"))
    with pytest.raises(DuplicateStepIdError):
        rec.add_step(NormalizeStep(columns="area", id="tx"))


def test_non_step_objects_rejected():
    with pytest.raises(TypeError):
        Recipe.declare(outcome="price").add_step({"kind": "log"})


def test_invalid_step_params_fail_at_declaration():
    with pytest.raises(InvalidStepConfig):
        LogStep(columns="area", base=1)
    with pytest.raises(InvalidStepConfig):
        LogStep()


def test_prepare_does_not_mutate_training_data(housing_df):
    before = housing_df.copy()
    _recipe().prepare(housing_df)
    pd.testing.assert_frame_equal(housing_df, before)


def test_prepare_is_idempotent(housing_df):
    """
    Verifica que duas preparações sobre o mesmo treino produzem
    estado aprendido com saídas idênticas.

    Invariantes:
        - A ordem e o conjunto de Steps preparados são os declarados
        - bake sobre o mesmo dataset produz frames idênticos
    """
    rec = _recipe()
    p1 = rec.prepare(housing_df)
    p2 = rec.prepare(housing_df)

    assert isinstance(p1, PreparedRecipe)
    assert p1 is not p2
    assert [s.step.id for s in p1.steps] == rec.step_ids()
    pd.testing.assert_frame_equal(p1.bake(housing_df), p2.bake(housing_df))
    assert p1.output_columns() == p2.output_columns()


def test_reprepare_creates_fresh_instance(housing_df):
    rec = _recipe()
    p1 = rec.prepare(housing_df)
    subset = housing_df[housing_df["neighborhood"].isin(["N1", "N2"])]
    p2 = p1.prepare(subset)

    assert p2 is not p1
    assert p2.recipe is rec
    assert "neighborhood_N2" in p2.output_columns()
    assert "neighborhood_N3" not in p2.output_columns()
    assert "neighborhood_N3" in p1.output_columns()


def test_prepared_recipe_exposes_traces_and_events(housing_df, ctx):
    prepared = _recipe().prepare(housing_df, ctx=ctx)

    summary = prepared.summary()
    assert [s["step_id"] for s in summary] == ["log_1", "other_2", "dummy_3"]
    assert summary[2]["removed"] == ["neighborhood", "type"]
    assert "type_B" in summary[2]["created"]

    messages = [e["message"] for e in prepared.events]
    assert messages[0] == "recipe prepare started"
    assert messages[-1] == "recipe prepared"
    assert all(e["run_id"] == "test-run" for e in prepared.events)


def test_required_columns_follow_training_order(housing_df):
    prepared = _recipe().prepare(housing_df)
    assert prepared.required_columns == ("area", "neighborhood", "type")
    assert prepared.training_schema.names() == ["price", "area", "neighborhood", "type"]


def test_failing_step_aborts_whole_prepare(housing_df, ctx):
    """
    Verifica a atomicidade da preparação.

    Um Step que falha no meio da receita impede a criação de qualquer
    PreparedRecipe; o erro é registrado como evento estruturado.
    """
    rec = _recipe().add_step(DummyStep(columns="neighborhood_N2", reference="Z"))

    with pytest.raises(InvalidStepConfig):
        rec.prepare(housing_df, ctx=ctx)

    errors = [e for e in ctx.events if e["level"] == "error"]
    assert len(errors) == 1
    assert errors[0]["step_id"] == "dummy_4"


def test_fingerprint_depends_only_on_declaration(housing_df):
    rec = _recipe()
    assert rec.fingerprint() == _recipe().fingerprint()
    assert rec.prepare(housing_df).fingerprint() == rec.fingerprint()
    changed = rec.add_step(NormalizeStep(columns="area"))
    assert changed.fingerprint() != rec.fingerprint()


def test_prepare_rejects_non_dataframe():
    with pytest.raises(TypeError):
        _recipe().prepare([{"price": 1.0}])
