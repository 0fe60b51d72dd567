# tests/conftest.py
"""
Fixtures compartilhados para testes do RecipeFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- um dataset tabular determinístico no formato "housing-like"
- um dataset categórico com frequências conhecidas
- contexto de execução controlado (RecipeContext)

Decisões arquiteturais:
    - Dados são gerados com seed fixa (numpy Generator)
    - Fixtures retornam DataFrames novos a cada teste
    - Imports do core acontecem dentro das fixtures

Invariantes:
    - Nenhuma fixture executa prepare ou bake
    - Nenhuma fixture realiza I/O

Limites explícitos:
    - Não substituir testes e2e
    - Não conter lógica de domínio
"""

import numpy as np
import pandas as pd
import pytest


NEIGHBORHOOD_COUNTS = {"N1": 35, "N2": 25, "N3": 20, "N4": 15, "N5": 5}
TYPE_COUNTS = {"A": 40, "B": 30, "C": 30}


@pytest.fixture
def housing_df() -> pd.DataFrame:
    """
    Dataset de treino com 100 linhas:
    price (numérico), area (numérico), neighborhood (5 níveis), type (3 níveis).

    Frequências de neighborhood: N1 35%, N2 25%, N3 20%, N4 15%, N5 5%.
    """
    rng = np.random.default_rng(42)
    neighborhood = [lvl for lvl, n in NEIGHBORHOOD_COUNTS.items() for _ in range(n)]
    kind = [lvl for lvl, n in TYPE_COUNTS.items() for _ in range(n)]
    neighborhood = rng.permutation(neighborhood).tolist()
    kind = rng.permutation(kind).tolist()
    area = rng.uniform(50.0, 300.0, size=100).round(1)
    price = (area * 1500 + rng.normal(0, 10000, size=100)).round(0)
    return pd.DataFrame(
        {
            "price": price,
            "area": area,
            "neighborhood": neighborhood,
            "type": kind,
        }
    )


@pytest.fixture
def levels_df() -> pd.DataFrame:
    """Coluna categórica com frequências A 70%, B 20%, C 9%, D 1%."""
    values = ["A"] * 70 + ["B"] * 20 + ["C"] * 9 + ["D"] * 1
    return pd.DataFrame({"y": np.arange(100, dtype=float), "cat": values})


@pytest.fixture
def ctx():
    from recipeflow.core.recipe.context import RecipeContext

    return RecipeContext(run_id="test-run")
