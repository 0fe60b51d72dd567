"""
Step canônico: dummy (v1).

Codifica colunas categóricas como colunas indicadoras.

Regras (v1):
- Níveis são aprendidos no treino: ordem das categorias quando a coluna é
  `pandas.Categorical`; caso contrário, ordem textual ascendente.
- Nível de referência: `reference` quando declarado, senão o primeiro
  nível. A referência não gera coluna (exceto com `one_hot=True`).
- Nomes determinísticos: `<coluna>_<nível>`.
- As colunas indicadoras substituem a coluna de origem, na mesma posição.
- Valores 0/1 (float). Valor ausente → indicadores ausentes.
- Nível não visto no treino → todos os indicadores 0, com warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from recipeflow.core.recipe.context import RecipeContext
from recipeflow.steps.base import PreparedBase, StepBase, replace_with_block


def _learn_levels(s: Any) -> List[Any]:
    if isinstance(s.dtype, pd.CategoricalDtype):
        present = set(s.dropna().unique())
        return [c for c in s.cat.categories if c in present]
    return sorted(s.dropna().unique().tolist(), key=str)


@dataclass(frozen=True)
class DummyEncoding:
    """Estado aprendido para uma coluna."""

    column: str
    levels: Tuple[Any, ...]
    reference: Any
    encoded: Tuple[Any, ...]
    names: Tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class DummyStep(StepBase):
    """Indicadores `<coluna>_<nível>` com nível de referência."""

    kind: ClassVar[str] = "dummy"

    one_hot: bool = False
    reference: Optional[str] = None

    def params(self) -> Dict[str, Any]:
        return {"one_hot": self.one_hot, "reference": self.reference}

    def prepare(self, data: Any, resolve, ctx: RecipeContext) -> "PreparedDummy":
        cols = resolve(self.columns)
        encodings: List[DummyEncoding] = []
        existing = set(str(c) for c in data.columns)

        for col in cols:
            levels = _learn_levels(data[col])
            if not levels:
                raise self._invalid(f"column {col} has no levels in training data", column=col)

            if self.reference is not None:
                found = [lvl for lvl in levels if str(lvl) == str(self.reference)]
                if not found:
                    raise self._invalid(
                        f"reference level {self.reference!r} not found in column {col}",
                        column=col,
                        levels=[str(lvl) for lvl in levels],
                    )
                ref = found[0]
            else:
                ref = levels[0]

            encoded = tuple(levels) if self.one_hot else tuple(lvl for lvl in levels if lvl != ref)
            names = tuple(f"{col}_{lvl}" for lvl in encoded)

            clash = [n for n in names if n in existing and n != col]
            if clash:
                raise self._invalid(
                    f"indicator columns for {col} collide with existing columns: {clash}",
                    column=col,
                    collisions=clash,
                )
            if len(set(names)) != len(names):
                raise self._invalid(f"levels of column {col} produce duplicated indicator names", column=col)

            existing |= set(names)
            encodings.append(
                DummyEncoding(column=col, levels=tuple(levels), reference=ref, encoded=encoded, names=names)
            )

        return PreparedDummy(step=self, columns=tuple(cols), encodings=tuple(encodings))


@dataclass(frozen=True)
class PreparedDummy(PreparedBase):
    encodings: Tuple[DummyEncoding, ...] = ()

    def indicator_names(self) -> List[str]:
        out: List[str] = []
        for enc in self.encodings:
            out.extend(enc.names)
        return out

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:
        for enc in self.encodings:
            s = out[enc.column].astype(object)
            missing = s.isna()

            block = pd.DataFrame(index=out.index)
            for lvl, name in zip(enc.encoded, enc.names):
                ind = (s == lvl).astype(float)
                ind[missing] = np.nan
                block[name] = ind

            unseen = ~missing & ~s.isin(list(enc.levels))
            if unseen.any():
                values = sorted(set(str(v) for v in s[unseen]))
                ctx.add_warning(
                    step_id=self.step.id,
                    message=f"unseen levels in column {enc.column} encoded as all zeros: {values}",
                )
            out = replace_with_block(out, enc.column, block)
        return out
