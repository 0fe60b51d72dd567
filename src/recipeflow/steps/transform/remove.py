"""
Steps canônicos de remoção de colunas: zv e rm (v1).

- zv: remove colunas com um único valor distinto no treino
  (valores ausentes contam como valor). Pode não encontrar nenhuma
  coluna; nesse caso é um no-op.
- rm: remove as colunas selecionadas.

Em ambos os casos o conjunto removido é congelado no prepare. No apply,
colunas já ausentes no dataset não geram erro (não são exigidas).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase


@dataclass(frozen=True, kw_only=True)
class ZeroVarianceStep(StepBase):
    kind: ClassVar[str] = "zv"

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedRemove":
        cols = resolve(self.columns, require=False)
        removed = tuple(c for c in cols if data[c].nunique(dropna=False) <= 1)
        if removed:
            ctx.log(step_id=self.id, level="info", message="zero-variance columns removed", removed=list(removed))
        return PreparedRemove(step=self, columns=tuple(cols), removed=removed)


@dataclass(frozen=True, kw_only=True)
class RemoveStep(StepBase):
    kind: ClassVar[str] = "rm"

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedRemove":
        cols = resolve(self.columns, require=False)
        return PreparedRemove(step=self, columns=tuple(cols), removed=tuple(cols))


@dataclass(frozen=True)
class PreparedRemove(PreparedBase):
    removed: Tuple[str, ...] = ()

    @property
    def required_columns(self) -> Tuple[str, ...]:
        return ()

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        return out.drop(columns=[c for c in self.removed if c in out.columns])
