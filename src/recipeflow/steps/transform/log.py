"""
Step canônico: log (v1).

Transformação logarítmica in-place de colunas numéricas:

    x' = log(x + offset) / log(base)

Princípios:
- Sem estado aprendido: o prepare apenas congela as colunas resolvidas.
- Valores não positivos produzem -inf/NaN (sem coerção silenciosa);
  o apply registra um warning quando isso acontece.
- Pode ser usado sobre o outcome com `touches_outcomes=True` e,
  tipicamente, `skip=True` (transformação do outcome apenas no treino).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict

import numpy as np

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase


@dataclass(frozen=True, kw_only=True)
class LogStep(StepBase):
    """Logaritmo (base configurável) com offset."""

    kind: ClassVar[str] = "log"

    base: float = math.e
    offset: float = 0.0

    def _validate(self) -> None:
        if not isinstance(self.base, (int, float)) or self.base <= 0 or self.base == 1:
            raise self._invalid("log base must be a positive number different from 1", base=self.base)
        if not isinstance(self.offset, (int, float)):
            raise self._invalid("log offset must be a number", offset=self.offset)

    def params(self) -> Dict[str, Any]:
        return {"base": float(self.base), "offset": float(self.offset)}

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedLog":
        cols = resolve(self.columns)
        self._require_numeric(data, cols)
        return PreparedLog(step=self, columns=tuple(cols))


@dataclass(frozen=True)
class PreparedLog(PreparedBase):
    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        step = self.step
        denom = math.log(step.base)
        for col in self.columns:
            values = out[col].astype(float) + step.offset
            with np.errstate(divide="ignore", invalid="ignore"):
                out[col] = np.log(values) / denom
            if (values <= 0).any():
                ctx.add_warning(
                    step_id=step.id,
                    message=f"log of non-positive values in column {col} produced non-finite results",
                )
        return out
