"""Builder canônico: recipe (v1).

Constrói uma `Recipe` de forma **determinística** e **declarativa** a partir
da seção `recipe` da configuração efetiva.

Regras (v1):
- `roles` é obrigatório e deve declarar ao menos `outcome` ou `predictors`.
- `steps` é uma lista ordenada; cada item declara `kind` e, conforme o
  Step, seletores (`columns`, ou `a`/`b` para interact) e parâmetros.
- Seletores seguem `selector_from_config` (nome, lista, starts_with,
  ends_with, matches, role/type, any).
- Chaves opcionais por Step: `id`, `skip`, `touches_outcomes`.
- `types` declara overrides de tipo por coluna (ex.: `notes: text`).
- O Builder **não executa** prepare.

Config esperada (exemplo):

recipe:
  roles:
    outcome: price
    predictors: all
    custom: {house_id: id}
  strict_schema: true
  steps:
    - kind: log
      columns: area
    - kind: other
      columns: neighborhood
      threshold: 0.1
    - kind: dummy
      columns: {role: predictor, type: nominal}
    - kind: interact
      a: area
      b: {starts_with: type_}

Limites explícitos:
- Fora de escopo: ajuste de modelos, carregamento de datasets.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from recipeflow.core.exceptions import InvalidStepConfig
from recipeflow.core.recipe.recipe import Recipe
from recipeflow.core.recipe.registry import StepRegistry, default_registry
from recipeflow.core.recipe.roles import RoleSpec
from recipeflow.core.recipe.selectors import selector_from_config
from recipeflow.core.recipe.types import ColumnType

def _expect(cond: bool, msg: str, **details: Any) -> None:
    if not cond:
        raise InvalidStepConfig(message=msg, details=details)


def _get_recipe_cfg(cfg: Dict[str, Any]) -> Dict[str, Any]:
    rec = cfg.get("recipe") if isinstance(cfg, dict) else None
    _expect(isinstance(rec, dict), "Invalid config: recipe section must be a mapping")
    return rec


def _build_step(index: int, item: Any, registry: StepRegistry) -> Any:
    _expect(isinstance(item, dict), f"Invalid config: recipe.steps[{index}] must be a mapping", index=index)
    kind = item.get("kind")
    _expect(
        isinstance(kind, str) and bool(kind.strip()),
        f"Invalid config: recipe.steps[{index}].kind is required",
        index=index,
    )

    kind = kind.strip()
    try:
        step_cls = registry.get(kind)
        params: Dict[str, Any] = {}
        for key, value in item.items():
            if key == "kind":
                continue
            if key in getattr(step_cls, "selector_fields", ()):
                try:
                    params[key] = selector_from_config(value)
                except ValueError as e:
                    raise InvalidStepConfig(
                        message=f"Invalid selector in `{key}`: {e}",
                        details={"kind": kind, "field": key},
                    ) from e
            else:
                params[key] = value
        return registry.create(kind, **params)
    except InvalidStepConfig as e:
        raise InvalidStepConfig(
            message=f"Invalid config: recipe.steps[{index}]: {e.message}",
            details={"index": index, **e.details},
            hint=e.hint,
        ) from e


def build_recipe(config: Dict[str, Any], registry: Optional[StepRegistry] = None) -> Recipe:
    """Constrói a Recipe declarada a partir da configuração.

    Args:
        config: Config efetiva (dict), contendo a seção `recipe`.
        registry: StepRegistry a usar (default: `default_registry()`).

    Returns:
        Recipe (estado Declared).

    Raises:
        InvalidStepConfig: configuração malformada (com o índice do Step).
    """
    registry = registry if registry is not None else default_registry()
    rec = _get_recipe_cfg(config)

    roles_cfg = rec.get("roles")
    _expect(isinstance(roles_cfg, dict), "Invalid config: recipe.roles must be a mapping")
    _expect(
        "outcome" in roles_cfg or "predictors" in roles_cfg,
        "Invalid config: recipe.roles must declare outcome and/or predictors",
    )
    try:
        roles = RoleSpec.from_config(roles_cfg)
    except ValueError as e:
        raise InvalidStepConfig(message=str(e), details={"section": "recipe.roles"}) from e

    types_cfg = rec.get("types") or {}
    _expect(isinstance(types_cfg, dict), "Invalid config: recipe.types must be a mapping")
    try:
        overrides = tuple((str(c), ColumnType(t)) for c, t in types_cfg.items())
    except ValueError as e:
        raise InvalidStepConfig(message=f"Invalid config: recipe.types: {e}", details={"section": "recipe.types"}) from e

    strict = rec.get("strict_schema", True)
    _expect(isinstance(strict, bool), "Invalid config: recipe.strict_schema must be a boolean")

    steps_cfg = rec.get("steps") or []
    _expect(isinstance(steps_cfg, list), "Invalid config: recipe.steps must be a list")
    steps: List[Any] = [_build_step(i, item, registry) for i, item in enumerate(steps_cfg)]

    return Recipe(roles=roles, steps=tuple(steps), type_overrides=overrides, strict_schema=strict)


__all__ = ["build_recipe"]
