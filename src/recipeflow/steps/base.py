"""
Base comum dos Steps embutidos.

`StepBase` concentra os campos compartilhados por todos os Steps
declarados (id, seletor, skip, touches_outcomes) e a normalização de
seletores; `PreparedBase` concentra a verificação de colunas exigidas
antes de qualquer `apply`.

Cada Step concreto define apenas:
    - `kind` (ClassVar) e seus parâmetros
    - `_validate()` para parâmetros inválidos
    - `prepare()` retornando seu PreparedStep
    - `params()` para serialização
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, List, Tuple

from recipeflow.core.exceptions import InvalidStepConfig, SchemaMismatch
from recipeflow.core.recipe.context import RecipeContext
from recipeflow.core.recipe.selectors import Selector, as_selector


@dataclass(frozen=True, kw_only=True)
class StepBase:
    kind: ClassVar[str] = ""
    selector_fields: ClassVar[Tuple[str, ...]] = ("columns",)

    columns: Any = None
    id: str = ""
    skip: bool = False
    touches_outcomes: bool = False

    def __post_init__(self) -> None:
        for name in self.selector_fields:
            value = getattr(self, name)
            if value is None:
                raise InvalidStepConfig(
                    message=f"Step {self.kind} requires a column selector in `{name}`",
                    details={"step": self.id or None, "kind": self.kind, "field": name},
                )
            try:
                object.__setattr__(self, name, as_selector(value))
            except TypeError as e:
                raise InvalidStepConfig(
                    message=str(e),
                    details={"step": self.id or None, "kind": self.kind, "field": name},
                ) from e
        self._validate()

    def _validate(self) -> None:
        pass

    def _invalid(self, message: str, **details: Any) -> InvalidStepConfig:
        return InvalidStepConfig(
            message=message,
            details={"step": self.id or None, "kind": self.kind, **details},
        )

    def selectors(self) -> Dict[str, Selector]:
        return {name: getattr(self, name) for name in self.selector_fields}

    def params(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "kind": self.kind,
            "id": self.id,
            "skip": self.skip,
            "touches_outcomes": self.touches_outcomes,
        }
        for name, sel in self.selectors().items():
            out[name] = sel.describe()
        out.update(self.params())
        return out

    def _require_numeric(self, data: Any, columns: Iterable[str]) -> None:
        import pandas as pd

        bad = [c for c in columns if not pd.api.types.is_numeric_dtype(data[c])]
        if bad:
            raise self._invalid(
                f"Step {self.kind} requires numeric columns; got non-numeric: {bad}",
                columns=bad,
            )


@dataclass(frozen=True)
class PreparedBase:
    step: Any
    columns: Tuple[str, ...]

    @property
    def required_columns(self) -> Tuple[str, ...]:
        return self.columns

    def apply(self, data: Any, ctx: RecipeContext) -> Any:
        present = set(str(c) for c in data.columns)
        missing = [c for c in self.required_columns if c not in present]
        if missing:
            raise SchemaMismatch(
                message=f"Dataset is missing columns required by step {self.step.id}: {missing}",
                details={
                    "step": self.step.id,
                    "kind": self.step.kind,
                    "missing_columns": missing,
                    "available_columns": sorted(present),
                },
            )
        return self._transform(data.copy(), ctx)

    def _transform(self, out: Any, ctx: RecipeContext) -> Any:  # pragma: no cover
        raise NotImplementedError


def replace_with_block(out: Any, column: str, block: Any) -> Any:
    """Substitui `column` por `block` (DataFrame) na mesma posição."""
    import pandas as pd

    cols: List[str] = list(out.columns)
    pos = cols.index(column)
    left = out.iloc[:, :pos]
    right = out.iloc[:, pos + 1:]
    return pd.concat([left, block, right], axis=1)
