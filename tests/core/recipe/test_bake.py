# tests/core/recipe/test_bake.py
"""
Testes de aplicação (`bake`) de receitas preparadas.

Os testes asseguram que:
- o número de linhas e o índice são preservados
- bake(None) devolve o treino transformado em cache
- bake(None) equivale a bake(treino) sem Steps com skip
- Steps com skip participam do prepare e são ignorados em dados novos
- a projeção acontece apenas depois de todos os Steps
- datasets sem colunas exigidas falham com SchemaMismatch, sem saída parcial

Princípios fundamentais:
    - bake é função pura de (PreparedRecipe, dataset)
    - nenhum estado é re-aprendido no bake
"""

import numpy as np
import pandas as pd
import pytest

from recipeflow.core.exceptions import SchemaMismatch, UnknownColumn
from recipeflow.core.recipe import Recipe, all_nominal_predictors, all_predictors, starts_with
from recipeflow.steps import DummyStep, LogStep, NormalizeStep, OtherStep


def _prepared(df):
    rec = (
        Recipe.declare(outcome="price")
        .add_step(LogStep(columns="area"))
        .add_step(OtherStep(columns="neighborhood", threshold=0.10))
        .add_step(DummyStep(columns=all_nominal_predictors()))
    )
    return rec.prepare(df)


def test_bake_preserves_rows_and_index(housing_df):
    prepared = _prepared(housing_df)
    new = housing_df.iloc[10:30].copy()
    new.index = [f"r{i}" for i in range(20)]

    out = prepared.bake(new)
    assert out.shape[0] == 20
    assert list(out.index) == list(new.index)


def test_bake_none_equals_bake_training(housing_df):
    prepared = _prepared(housing_df)
    cached = prepared.bake(None)
    recomputed = prepared.bake(housing_df)
    pd.testing.assert_frame_equal(cached, recomputed)


def test_bake_none_returns_a_copy(housing_df):
    prepared = _prepared(housing_df)
    out = prepared.bake()
    out["area"] = 0.0
    assert (prepared.bake()["area"] != 0.0).all()


def test_bake_does_not_mutate_input(housing_df):
    prepared = _prepared(housing_df)
    new = housing_df.head(5).copy()
    before = new.copy()
    prepared.bake(new)
    pd.testing.assert_frame_equal(new, before)


def test_bake_column_order_follows_output_schema(housing_df):
    prepared = _prepared(housing_df)
    shuffled = housing_df[["type", "neighborhood", "area", "price"]]
    out = prepared.bake(shuffled)
    assert list(out.columns) == prepared.output_columns()


def test_bake_without_outcome_column(housing_df):
    prepared = _prepared(housing_df)
    out = prepared.bake(housing_df.drop(columns=["price"]))
    assert "price" not in out.columns
    assert out.shape == (100, len(prepared.output_columns()) - 1)


def test_projection_by_names_and_selector(housing_df):
    prepared = _prepared(housing_df)

    by_names = prepared.bake(housing_df, columns=["type_C", "area"])
    assert list(by_names.columns) == ["type_C", "area"]

    by_selector = prepared.bake(None, columns=starts_with("neighborhood_"))
    assert list(by_selector.columns) == [
        "neighborhood_N2",
        "neighborhood_N3",
        "neighborhood_N4",
        "neighborhood_other",
    ]

    predictors = prepared.bake(None, columns=all_predictors())
    assert "price" not in predictors.columns


def test_projection_of_unknown_column_raises(housing_df):
    prepared = _prepared(housing_df)
    with pytest.raises(UnknownColumn):
        prepared.bake(None, columns=["neighborhood"])
    with pytest.raises(UnknownColumn):
        prepared.bake(None, columns=starts_with("zzz_"))


def test_schema_mismatch_produces_no_output(housing_df, ctx):
    """
    Verifica que a ausência de uma coluna exigida aborta o bake.

    Invariantes:
        - A exceção é SchemaMismatch
        - details lista exatamente as colunas ausentes
        - Nenhum Step é aplicado (nenhum evento de Step no contexto)
    """
    prepared = _prepared(housing_df)
    new = housing_df.drop(columns=["neighborhood"])

    result = None
    with pytest.raises(SchemaMismatch) as exc:
        result = prepared.bake(new, ctx=ctx)

    assert result is None
    assert exc.value.details["missing_columns"] == ["neighborhood"]
    assert [e["level"] for e in ctx.events] == ["error"]


def test_skip_step_applies_on_training_only(housing_df):
    """
    Verifica o comportamento skip-on-apply.

    Um log do outcome com skip=True transforma o treino em cache,
    mas deixa a coluna inalterada quando aplicado a dados novos.
    """
    rec = (
        Recipe.declare(outcome="price")
        .add_step(LogStep(columns="price", touches_outcomes=True, skip=True, id="log_price"))
        .add_step(NormalizeStep(columns="area"))
    )
    prepared = rec.prepare(housing_df)

    train_out = prepared.bake(None)
    np.testing.assert_allclose(train_out["price"].to_numpy(), np.log(housing_df["price"].to_numpy()))

    new = housing_df.head(10)
    new_out = prepared.bake(new)
    pd.testing.assert_series_equal(new_out["price"], new["price"])
    assert not np.allclose(new_out["area"].to_numpy(), new["area"].to_numpy())


def test_skip_step_is_logged_on_bake(housing_df, ctx):
    rec = Recipe.declare(outcome="price").add_step(
        LogStep(columns="price", touches_outcomes=True, skip=True, id="log_price")
    )
    prepared = rec.prepare(housing_df)
    prepared.bake(housing_df.head(3), ctx=ctx)
    skipped = [e for e in ctx.events if e["message"] == "step skipped on bake"]
    assert [e["step_id"] for e in skipped] == ["log_price"]


def test_bake_xy_splits_predictors_and_outcome(housing_df):
    prepared = _prepared(housing_df)

    X, y = prepared.bake_xy(housing_df)
    assert "price" not in X.columns
    assert isinstance(y, pd.Series)
    assert y.name == "price"

    X_new, y_new = prepared.bake_xy(housing_df.drop(columns=["price"]))
    assert y_new is None
    assert list(X_new.columns) == list(X.columns)


def test_bake_xy_keeps_outcome_out_of_predictors(housing_df):
    rec = Recipe.declare(outcome="price", predictors=["price", "area", "type"]).add_step(
        DummyStep(columns=all_nominal_predictors())
    )
    prepared = rec.prepare(housing_df)

    X, y = prepared.bake_xy(housing_df)
    assert list(X.columns) == ["area", "type_B", "type_C"]
    pd.testing.assert_series_equal(y, housing_df["price"])


def test_bake_rejects_non_dataframe(housing_df):
    prepared = _prepared(housing_df)
    with pytest.raises(TypeError):
        prepared.bake(housing_df.to_dict(orient="records"))
