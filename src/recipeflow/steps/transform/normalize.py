"""
Step canônico: normalize (v1).

Centraliza e escala colunas numéricas com média e desvio padrão
(ddof=1) aprendidos no treino.

Regras (v1):
- Estatísticas ignoram valores ausentes.
- Desvio padrão nulo ou indefinido → escala 1.0 e warning no prepare
  (a coluna é apenas centralizada).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Tuple

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase


@dataclass(frozen=True, kw_only=True)
class NormalizeStep(StepBase):
    kind: ClassVar[str] = "normalize"

    center: bool = True
    scale: bool = True

    def _validate(self) -> None:
        if not (self.center or self.scale):
            raise self._invalid("normalize requires center and/or scale")

    def params(self) -> Dict[str, Any]:
        return {"center": self.center, "scale": self.scale}

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedNormalize":
        cols = resolve(self.columns)
        self._require_numeric(data, cols)

        stats: List[Tuple[str, float, float]] = []
        for col in cols:
            x = data[col].astype(float)
            mean = float(x.mean()) if self.center else 0.0
            sd = float(x.std()) if self.scale else 1.0
            if math.isnan(mean):
                raise self._invalid(f"column {col} has no non-missing values in training data", column=col)
            if math.isnan(sd) or sd == 0.0:
                ctx.add_warning(step_id=self.id, message=f"column {col} has zero variance; scale set to 1.0")
                sd = 1.0
            stats.append((col, mean, sd))

        return PreparedNormalize(step=self, columns=tuple(cols), stats=tuple(stats))


@dataclass(frozen=True)
class PreparedNormalize(PreparedBase):
    stats: Tuple[Tuple[str, float, float], ...] = ()

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        for col, mean, sd in self.stats:
            out[col] = (out[col].astype(float) - mean) / sd
        return out
