"""
Recipe preparada (estado `Prepared`) e aplicação (`bake`).

Este módulo define a `PreparedRecipe`, resultado imutável de
`Recipe.prepare(treino)`: cada Step com seu estado aprendido congelado,
o schema de treino, o schema de saída e o resultado transformado do
treino (cache).

Responsabilidades do módulo:
    - Aplicar a receita a qualquer dataset compatível (`bake`)
    - Devolver o treino transformado sem recomputar (`bake(None)`)
    - Projetar colunas de saída após todos os Steps
    - Separar predictors e outcome para um componente de ajuste (`bake_xy`)

Princípios fundamentais:
    - `bake` é função pura de (PreparedRecipe, dataset)
    - Nenhum Step é re-aprendido no bake
    - Steps com `skip=True` são ignorados em dados novos

Invariantes:
    - Número de linhas e índice do dataset são preservados
    - A ordem das colunas segue o schema de saída do treino
    - Falha de schema não produz saída parcial
    - Uma PreparedRecipe nunca é mutada (segura para uso concorrente)

Limites explícitos:
    - Não re-prepara Steps
    - Não ajusta modelos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..exceptions import SchemaMismatch, UnknownColumn
from .context import RecipeContext
from .schema import Schema
from .selectors import HasRole, Selector, all_predictors
from .types import OUTCOME, StepTrace

ColumnsArg = Union[None, str, Sequence[str], Selector]


@dataclass(frozen=True, eq=False)
class PreparedRecipe:
    """
    Receita preparada contra exatamente um dataset de treino.

    Campos:
        - recipe: a Recipe declarada de origem (reutilizável)
        - steps: PreparedSteps, na ordem declarada
        - training_schema: schema do dataset de treino (com papéis)
        - output_schema: schema do treino após todos os Steps
        - required_columns: colunas que todo dataset deve conter no bake
        - traces: registro do que cada Step fez no prepare
        - events: eventos estruturados emitidos durante o prepare
        - training_output: treino transformado (cache de `bake(None)`)
    """

    recipe: Any
    steps: Tuple[Any, ...]
    training_schema: Schema
    output_schema: Schema
    required_columns: Tuple[str, ...]
    traces: Tuple[StepTrace, ...] = ()
    events: Tuple[Dict[str, Any], ...] = ()
    training_output: Any = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Bake
    # ------------------------------------------------------------------
    def bake(
        self,
        new_data: Any = None,
        columns: ColumnsArg = None,
        ctx: Optional[RecipeContext] = None,
    ) -> Any:
        """
        Aplica a receita preparada.

        Args:
            new_data: DataFrame a transformar; `None` devolve uma cópia do
                treino transformado no prepare.
            columns: projeção opcional (nomes ou seletor), aplicada apenas
                depois de todos os Steps.
            ctx: contexto opcional para eventos estruturados.

        Returns:
            pandas.DataFrame transformado.

        Raises:
            SchemaMismatch: se `new_data` não contém uma coluna exigida.
            UnknownColumn: se a projeção referencia colunas inexistentes.
        """
        import pandas as pd

        ctx = ctx if ctx is not None else RecipeContext()

        if new_data is None:
            out = self.training_output.copy()
            source = "training"
        else:
            if not isinstance(new_data, pd.DataFrame):
                raise TypeError(f"new_data must be a pandas DataFrame, got {type(new_data).__name__}")
            out = self._bake_new(new_data, ctx)
            source = "new_data"

        if columns is not None:
            out = self._project(out, columns)

        ctx.log(
            step_id=None,
            level="info",
            message="recipe baked",
            source=source,
            rows=int(out.shape[0]),
            columns=int(out.shape[1]),
        )
        return out

    def _bake_new(self, new_data: Any, ctx: RecipeContext) -> Any:
        present = [str(c) for c in new_data.columns]
        missing = [c for c in self.required_columns if c not in present]
        if missing:
            ctx.log(step_id=None, level="error", message="schema mismatch on bake", missing_columns=missing)
            raise SchemaMismatch(
                message=f"Dataset is missing columns required by the recipe: {missing}",
                details={
                    "step": None,
                    "missing_columns": missing,
                    "required_columns": list(self.required_columns),
                    "available_columns": present,
                },
            )

        data = new_data.copy()
        data.columns = present
        keep = [c for c in self.training_schema.names() if c in present]
        out = data.loc[:, keep]

        for prepared in self.steps:
            step = prepared.step
            if step.skip:
                ctx.log(step_id=step.id, level="info", message="step skipped on bake", kind=step.kind)
                continue
            try:
                out = prepared.apply(out, ctx)
            except Exception as e:
                ctx.log(
                    step_id=step.id,
                    level="error",
                    message="recipe bake failed",
                    kind=step.kind,
                    error_type=e.__class__.__name__,
                    error_message=str(e) or "error",
                )
                raise

        expected = self.output_schema.names()
        order = [c for c in expected if c in out.columns]
        order += [c for c in out.columns if c not in expected]
        return out.loc[:, order]

    def _project(self, out: Any, columns: ColumnsArg) -> Any:
        available = Schema(columns=tuple(c for c in self.output_schema if c.name in out.columns))

        if isinstance(columns, Selector):
            selected = columns.resolve(available)
            if not selected:
                raise UnknownColumn(
                    message=f"Projection {columns.describe()} matched no output columns",
                    details={"step": None, "selector": columns.describe(), "schema": available.names()},
                )
            return out.loc[:, selected]

        wanted = [columns] if isinstance(columns, str) else [str(c) for c in columns]
        unknown = [c for c in wanted if c not in out.columns]
        if unknown:
            raise UnknownColumn(
                message=f"Projection references unknown output columns: {unknown}",
                details={"step": None, "selector": ", ".join(wanted), "schema": list(out.columns)},
            )
        return out.loc[:, wanted]

    def bake_xy(self, new_data: Any = None, ctx: Optional[RecipeContext] = None) -> Tuple[Any, Any]:
        """
        Aplica a receita e separa predictors (X) e outcome (y).

        `y` é uma Series quando há um único outcome, um DataFrame quando há
        vários, e `None` quando o dataset não contém outcomes. Colunas com
        papel outcome nunca entram em X, mesmo quando também são predictors.
        """
        out = self.bake(new_data, ctx=ctx)
        outcomes = [c for c in HasRole(role=OUTCOME).resolve(self.output_schema) if c in out.columns]
        X = self._project(out, all_predictors())
        X = X.loc[:, [c for c in X.columns if c not in outcomes]]
        if not outcomes:
            return X, None
        if len(outcomes) == 1:
            return X, out[outcomes[0]]
        return X, out.loc[:, outcomes]

    # ------------------------------------------------------------------
    # Inspeção
    # ------------------------------------------------------------------
    def prepare(self, training: Any, ctx: Optional[RecipeContext] = None) -> "PreparedRecipe":
        """Nova preparação a partir da mesma Recipe declarada (não muta esta)."""
        return self.recipe.prepare(training, ctx=ctx)

    def fingerprint(self) -> str:
        return self.recipe.fingerprint()

    def output_columns(self) -> List[str]:
        return self.output_schema.names()

    def summary(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self.traces]
