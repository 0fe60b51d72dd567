"""
# Recipe Core (RecipeFlow)

Este pacote define os **contratos canônicos** e as **estruturas
fundamentais** de uma receita de transformação de dados.

Uma receita tem ciclo de vida em três fases:

    declarar (Recipe) → preparar (PreparedRecipe) → aplicar (bake)

## Componentes

- **types**: `ColumnType`, papéis reservados, `StepTrace`
- **schema**: `ColumnInfo`, `Schema` (schema de treino e schema corrente)
- **roles**: `RoleSpec` (declaração de outcome/predictors/custom)
- **selectors**: seletores fechados de colunas
- **step**: protocolos `Step` e `PreparedStep`
- **context**: `RecipeContext` (eventos estruturados e warnings)
- **registry**: `StepRegistry` explícito (kind → classe)
- **recipe**: `Recipe` declarada
- **prepared**: `PreparedRecipe` e `bake`

## Invariantes

- Recipe e PreparedRecipe são imutáveis
- prepare é atômico e determinístico
- bake preserva linhas e nunca re-aprende estado
"""

from .context import RecipeContext
from .prepared import PreparedRecipe
from .recipe import DuplicateStepIdError, Recipe
from .registry import DuplicateStepKindError, StepRegistry, default_registry
from .roles import RoleSpec
from .schema import ColumnInfo, Schema
from .selectors import (
    Selector,
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
from .step import PreparedStep, Step
from .types import OUTCOME, PREDICTOR, ColumnType, StepTrace

__all__ = [
    "ColumnInfo",
    "ColumnType",
    "DuplicateStepIdError",
    "DuplicateStepKindError",
    "OUTCOME",
    "PREDICTOR",
    "PreparedRecipe",
    "PreparedStep",
    "Recipe",
    "RecipeContext",
    "RoleSpec",
    "Schema",
    "Selector",
    "Step",
    "StepRegistry",
    "StepTrace",
    "all_nominal_predictors",
    "all_numeric_predictors",
    "all_outcomes",
    "all_predictors",
    "as_selector",
    "default_registry",
    "ends_with",
    "has_role",
    "matches",
    "names",
    "selector_from_config",
    "starts_with",
]
