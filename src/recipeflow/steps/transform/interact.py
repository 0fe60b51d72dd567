"""
Step canônico: interact (v1).

Produz termos de interação entre dois grupos de colunas numéricas,
tipicamente uma coluna numérica e as indicadoras de um `dummy` anterior.

Regras (v1):
- Grupos declarados por dois seletores (`a` e `b`), resolvidos no
  schema corrente (após os Steps anteriores).
- Para cada par (x em a, y em b, x != y) é criada a coluna
  `<x>_x_<y>` = x * y, anexada ao final do dataset.
- As colunas de origem são preservadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Tuple

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase


@dataclass(frozen=True, kw_only=True)
class InteractStep(StepBase):
    """Interações pareadas `a × b`."""

    kind: ClassVar[str] = "interact"
    selector_fields: ClassVar[Tuple[str, ...]] = ("a", "b")

    a: Any = None
    b: Any = None
    sep: str = "_x_"

    def _validate(self) -> None:
        if not isinstance(self.sep, str) or not self.sep:
            raise self._invalid("interact separator must be a non-empty string", sep=self.sep)

    def params(self) -> Dict[str, Any]:
        return {"sep": self.sep}

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedInteract":
        cols_a = resolve(self.a)
        cols_b = resolve(self.b)
        self._require_numeric(data, cols_a + cols_b)

        existing = set(str(c) for c in data.columns)
        terms: List[Tuple[str, str, str]] = []
        for x in cols_a:
            for y in cols_b:
                if x == y:
                    continue
                name = f"{x}{self.sep}{y}"
                if name in existing:
                    raise self._invalid(f"interaction column {name} already exists", column=name)
                existing.add(name)
                terms.append((x, y, name))

        if not terms:
            raise self._invalid("interact produced no terms", a=cols_a, b=cols_b)

        columns = list(dict.fromkeys(cols_a + cols_b))
        return PreparedInteract(step=self, columns=tuple(columns), terms=tuple(terms))


@dataclass(frozen=True)
class PreparedInteract(PreparedBase):
    terms: Tuple[Tuple[str, str, str], ...] = ()

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        for x, y, name in self.terms:
            out[name] = out[x].astype(float) * out[y].astype(float)
        return out
