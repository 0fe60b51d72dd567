# src/recipeflow/__init__.py
"""
RecipeFlow: receitas declarativas de transformação de dados.

Uma receita é uma sequência ordenada e imutável de Steps mais uma
declaração de papéis de colunas. O ciclo de vida é explícito:

    Recipe.declare(...)        → Recipe (declarada, não toca dados)
    recipe.prepare(training)   → PreparedRecipe (estado aprendido congelado)
    prepared.bake(new_data)    → DataFrame transformado

Arquitetura em alto nível:
    - core.config      → carregamento, merge e hashing de configuração
    - core.recipe      → Recipe, PreparedRecipe, seletores, schema, registry
    - steps            → Steps embutidos (log, other, dummy, spline, ...)
    - builders         → construção de receitas a partir de config
    - persistence      → persistência versionada de receitas preparadas
    - split            → split inicial treino/teste

Limites explícitos:
    - Não ajusta modelos
    - Não carrega datasets
"""

from .core.recipe import (
    PreparedRecipe,
    Recipe,
    RecipeContext,
    RoleSpec,
    all_nominal_predictors,
    all_numeric_predictors,
    all_outcomes,
    all_predictors,
    ends_with,
    has_role,
    matches,
    names,
    starts_with,
)
from .split import Split, initial_split

__all__ = [
    "PreparedRecipe",
    "Recipe",
    "RecipeContext",
    "RoleSpec",
    "Split",
    "all_nominal_predictors",
    "all_numeric_predictors",
    "all_outcomes",
    "all_predictors",
    "ends_with",
    "has_role",
    "initial_split",
    "matches",
    "names",
    "starts_with",
]
