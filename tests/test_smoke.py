# tests/test_smoke.py
"""Smoke test: o pacote importa e expõe a API pública."""


def test_public_api_imports():
    import recipeflow
    from recipeflow import Recipe, initial_split  # noqa: F401
    from recipeflow.builders import build_recipe  # noqa: F401
    from recipeflow.core.config import load_config  # noqa: F401
    from recipeflow.persistence import RecipeStore  # noqa: F401
    from recipeflow.steps import BUILTIN_STEPS

    assert "Recipe" in recipeflow.__all__
    assert len(BUILTIN_STEPS) == 8
