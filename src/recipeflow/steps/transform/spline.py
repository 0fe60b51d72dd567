"""
Step canônico: spline (v1).

Expande colunas numéricas em uma base de B-splines com `deg_free` colunas.

Regras (v1):
- Os nós são posicionados nos quantis do dataset de treino e congelados
  no prepare (`sklearn.preprocessing.SplineTransformer`).
- Grau = min(3, deg_free - 1); número de nós = deg_free - grau + 1,
  de modo que a base tenha exatamente `deg_free` colunas.
- Fora do intervalo de treino a base é extrapolada linearmente.
- Nomes determinísticos: `<coluna>_spline_<i>`, i = 1..deg_free.
- A base substitui a coluna de origem, na mesma posição.
- Valores ausentes geram linhas ausentes na base (o ajuste ignora NaN).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Tuple

import numpy as np
import pandas as pd

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase, replace_with_block


@dataclass(frozen=True, kw_only=True)
class SplineStep(StepBase):
    """Base de splines com graus de liberdade fixos."""

    kind: ClassVar[str] = "spline"

    deg_free: int = 3

    def _validate(self) -> None:
        if isinstance(self.deg_free, bool) or not isinstance(self.deg_free, int) or self.deg_free < 2:
            raise self._invalid("spline deg_free must be an integer >= 2", deg_free=self.deg_free)

    def params(self) -> Dict[str, Any]:
        return {"deg_free": self.deg_free}

    def _transformer(self) -> Any:
        from sklearn.preprocessing import SplineTransformer

        degree = min(3, self.deg_free - 1)
        return SplineTransformer(
            n_knots=self.deg_free - degree + 1,
            degree=degree,
            knots="quantile",
            extrapolation="linear",
            include_bias=True,
        )

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedSpline":
        cols = resolve(self.columns)
        self._require_numeric(data, cols)

        fitted: List[Tuple[str, Any, Tuple[str, ...]]] = []
        for col in cols:
            x = data[col].astype(float)
            x = x[x.notna()].to_numpy().reshape(-1, 1)
            if np.unique(x).size < 2:
                raise self._invalid(f"column {col} needs at least two distinct values for a spline basis", column=col)
            try:
                st = self._transformer().fit(x)
            except ValueError as e:
                raise self._invalid(f"spline basis for column {col} could not be fitted: {e}", column=col) from e

            names = tuple(f"{col}_spline_{i}" for i in range(1, self.deg_free + 1))
            fitted.append((col, st, names))

        return PreparedSpline(step=self, columns=tuple(cols), bases=tuple(fitted))


@dataclass(frozen=True)
class PreparedSpline(PreparedBase):
    bases: Tuple[Tuple[str, Any, Tuple[str, ...]], ...] = ()

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        for col, st, names in self.bases:
            x = out[col].astype(float)
            present = x.notna().to_numpy()
            values = np.full((len(x), len(names)), np.nan)
            if present.any():
                values[present] = st.transform(x.to_numpy()[present].reshape(-1, 1))
            block = pd.DataFrame(values, index=out.index, columns=list(names))
            out = replace_with_block(out, col, block)
        return out
