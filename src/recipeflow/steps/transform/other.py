"""
Step canônico: other (v1).

Agrupa categorias pouco frequentes em um único nível `other`.

Regras (v1):
- A frequência de cada nível é calculada **apenas** no dataset de treino,
  ignorando valores ausentes.
- `threshold` em (0, 1): proporção mínima; `threshold >= 1`: contagem
  mínima (inteira). Níveis com frequência abaixo do limiar são agrupados.
- No apply, qualquer nível não retido (inclusive níveis nunca vistos no
  treino) é mapeado para `other`.
- Valores ausentes permanecem ausentes.

Princípios:
- Nenhuma heurística de fuzzy matching.
- Os níveis retidos são congelados no prepare, em ordem determinística
  (frequência decrescente, depois representação textual).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Tuple

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase


@dataclass(frozen=True, kw_only=True)
class OtherStep(StepBase):
    """Colapso de níveis raros no nível `other`."""

    kind: ClassVar[str] = "other"

    threshold: float = 0.05
    other: str = "other"

    def _validate(self) -> None:
        t = self.threshold
        if isinstance(t, bool) or not isinstance(t, (int, float)) or not math.isfinite(t) or t <= 0:
            raise self._invalid("other threshold must be a positive finite number", threshold=t)
        if t >= 1 and float(t) != int(t):
            raise self._invalid("other threshold >= 1 is a count and must be an integer", threshold=t)
        if not isinstance(self.other, str) or not self.other:
            raise self._invalid("other label must be a non-empty string", other=self.other)

    def params(self) -> Dict[str, Any]:
        return {"threshold": self.threshold, "other": self.other}

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedOther":
        cols = resolve(self.columns)
        retained: List[Tuple[str, Tuple[Any, ...]]] = []

        for col in cols:
            counts = data[col].astype(object).value_counts(dropna=True)
            total = int(counts.sum())
            if total == 0:
                raise self._invalid(f"column {col} has no non-missing values in training data", column=col)

            if self.threshold < 1:
                keep_mask = (counts / total) >= self.threshold
            else:
                keep_mask = counts >= int(self.threshold)

            kept = [(lvl, int(n)) for lvl, n in counts[keep_mask].items()]
            kept.sort(key=lambda kv: (-kv[1], str(kv[0])))
            levels = tuple(lvl for lvl, _ in kept)

            pooled = sorted((str(lvl) for lvl in counts.index if lvl not in levels))
            if pooled and self.other in (str(lvl) for lvl in levels):
                raise self._invalid(
                    f"level {self.other!r} already exists in column {col}; choose another label",
                    column=col,
                )

            if pooled:
                ctx.log(
                    step_id=self.id,
                    level="info",
                    message="levels pooled into other",
                    column=col,
                    pooled=pooled,
                    retained=[str(lvl) for lvl in levels],
                )
            retained.append((col, levels))

        return PreparedOther(step=self, columns=tuple(cols), retained=tuple(retained))


@dataclass(frozen=True)
class PreparedOther(PreparedBase):
    retained: Tuple[Tuple[str, Tuple[Any, ...]], ...] = ()

    def levels_for(self, column: str) -> Tuple[Any, ...]:
        for col, levels in self.retained:
            if col == column:
                return levels
        raise KeyError(column)

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        for col, levels in self.retained:
            s = out[col].astype(object)
            mask = s.notna() & ~s.isin(list(levels))
            out[col] = s.where(~mask, self.step.other)
        return out
