"""
Recipe declarada (estado `Declared`).

Este módulo define a `Recipe`, a especificação imutável de um pipeline de
transformações: uma sequência ordenada de Steps e uma declaração de papéis.
Uma Recipe não toca dados; a única transição é `prepare(treino)`, que
produz uma `PreparedRecipe` nova.

Responsabilidades do módulo:
    - Preservar a ordem declarada e a unicidade dos ids de Step
    - Resolver papéis e schema de treino no prepare
    - Resolver seletores contra o schema corrente, Step a Step
    - Aplicar guardrails de resolução:
        UnknownColumn, RoleConflict, DependencyOrderViolation
    - Garantir preparação atômica (falha em qualquer Step aborta tudo)

Decisões arquiteturais:
    - Declaração e preparação são tipos distintos (Recipe / PreparedRecipe)
    - A Recipe pode ser preparada várias vezes, contra datasets diferentes
    - O rastreamento do schema corrente é ligado por padrão
      (`strict_schema=True`); com `strict_schema=False` uma dependência
      quebrada vira warning e o Step segue com as colunas que restaram

Invariantes:
    - O conjunto e a ordem dos Steps são congelados na declaração
    - prepare nunca reordena nem remove Steps
    - Colunas de outcome só chegam a Steps com `touches_outcomes=True`

Limites explícitos:
    - Não ajusta modelos
    - Não filtra nem agrega linhas
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..config.hashing import compute_config_hash
from ..exceptions import DependencyOrderViolation, RoleConflict, UnknownColumn
from .context import RecipeContext
from .roles import ALL, RoleSpec
from .schema import ColumnInfo, Schema
from .selectors import Selector
from .step import Step
from .types import ColumnType, OUTCOME, PREDICTOR, StepTrace


class DuplicateStepIdError(ValueError):
    """
    Exceção levantada quando dois Steps da mesma Recipe compartilham o `id`.

    Decisões arquiteturais:
        - Ids de Step devem ser únicos na Recipe
        - A duplicidade é detectada na declaração, antes de qualquer prepare
    """


@dataclass(frozen=True)
class Recipe:
    """
    Especificação imutável de uma receita.

    Campos:
        - roles: declaração de papéis (RoleSpec)
        - steps: Steps em ordem de declaração
        - type_overrides: tipos declarados explicitamente por coluna
        - strict_schema: rastreamento estrito de dependências entre Steps

    Uso típico:
        rec = (
            Recipe.declare(outcome="price")
            .add_step(LogStep(columns="area"))
            .add_step(DummyStep(columns=all_nominal_predictors()))
        )
        prepared = rec.prepare(train_df)
        baked = prepared.bake(test_df)
    """

    roles: RoleSpec = field(default_factory=RoleSpec)
    steps: Tuple[Any, ...] = ()
    type_overrides: Tuple[Tuple[str, ColumnType], ...] = ()
    strict_schema: bool = True

    def __post_init__(self) -> None:
        normalized = []
        seen: List[str] = []
        for i, step in enumerate(self.steps):
            if not isinstance(step, Step):
                raise TypeError(f"steps[{i}] does not satisfy the Step protocol: {step!r}")
            if not step.id:
                step = replace(step, id=f"{step.kind}_{i + 1}")
            if step.id in seen:
                raise DuplicateStepIdError(f"Duplicate step id: {step.id}")
            seen.append(step.id)
            normalized.append(step)
        object.__setattr__(self, "steps", tuple(normalized))

    # ------------------------------------------------------------------
    # Declaração
    # ------------------------------------------------------------------
    @classmethod
    def declare(
        cls,
        *,
        outcome: Union[str, Sequence[str], None] = None,
        predictors: Union[str, Sequence[str], None] = ALL,
        custom: Optional[Mapping[str, Union[str, Sequence[str]]]] = None,
        types: Optional[Mapping[str, Union[str, ColumnType]]] = None,
        strict_schema: bool = True,
    ) -> "Recipe":
        overrides = tuple((str(c), ColumnType(t)) for c, t in (types or {}).items())
        return cls(
            roles=RoleSpec.of(outcome=outcome, predictors=predictors, custom=custom),
            type_overrides=overrides,
            strict_schema=strict_schema,
        )

    def add_step(self, step: Any) -> "Recipe":
        """Retorna uma nova Recipe com `step` anexado ao final."""
        return replace(self, steps=self.steps + (step,))

    def step_ids(self) -> List[str]:
        return [s.id for s in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roles": self.roles.to_dict(),
            "types": {c: t.value for c, t in self.type_overrides},
            "strict_schema": self.strict_schema,
            "steps": [s.to_dict() for s in self.steps],
        }

    def fingerprint(self) -> str:
        """Hash SHA-256 canônico da declaração (independe de dados)."""
        return compute_config_hash(self.to_dict())

    # ------------------------------------------------------------------
    # Transição Declared → Prepared
    # ------------------------------------------------------------------
    def prepare(self, training: Any, ctx: Optional[RecipeContext] = None) -> "PreparedRecipe":
        """
        Prepara a receita contra um dataset de treino.

        Para cada Step, na ordem declarada:
            1. resolve seletores contra o schema corrente
            2. aprende o estado (`step.prepare`)
            3. aplica o Step ao treino (inclusive Steps com skip=True)
            4. evolui o schema corrente

        Args:
            training: DataFrame de treino (não é mutado).
            ctx: contexto opcional para eventos estruturados.

        Returns:
            PreparedRecipe: receita preparada, imutável.

        Raises:
            UnknownColumn, RoleConflict, DependencyOrderViolation,
            InvalidStepConfig: a preparação é abortada no primeiro erro.
        """
        import pandas as pd

        from .prepared import PreparedRecipe

        if not isinstance(training, pd.DataFrame):
            raise TypeError(f"training data must be a pandas DataFrame, got {type(training).__name__}")

        ctx = ctx if ctx is not None else RecipeContext()
        columns = [str(c) for c in training.columns]
        if len(set(columns)) != len(columns):
            raise ValueError("training data has duplicated column names")

        data = training.copy()
        data.columns = columns
        roles = self.roles.resolve(columns)
        unknown_overrides = [c for c, _ in self.type_overrides if c not in columns]
        if unknown_overrides:
            raise UnknownColumn(
                message=f"Column declared in types not found in training data: {unknown_overrides[0]}",
                details={"step": None, "selector": unknown_overrides[0], "schema": columns, "section": "types"},
            )
        training_schema = Schema.from_frame(data, roles, dict(self.type_overrides))

        ctx.log(
            step_id=None,
            level="info",
            message="recipe prepare started",
            rows=int(data.shape[0]),
            columns=len(columns),
            steps=len(self.steps),
        )

        schema = training_schema
        history: Dict[str, ColumnInfo] = {c.name: c for c in schema}
        prepared_steps: List[Any] = []
        traces: List[StepTrace] = []
        created_so_far: set = set()
        required: set = set()

        for step in self.steps:
            before = schema.names()
            try:
                resolve = self._resolver(step, schema, history, ctx)
                prepared = step.prepare(data, resolve, ctx)
                data = prepared.apply(data, ctx)
                schema = schema.evolve(data, schema.roles_of(prepared.columns))
            except Exception as e:
                ctx.log(
                    step_id=step.id,
                    level="error",
                    message="recipe prepare failed",
                    kind=step.kind,
                    error_type=e.__class__.__name__,
                    error_message=str(e) or "error",
                )
                raise

            after = schema.names()
            created = tuple(c for c in after if c not in before)
            removed = tuple(c for c in before if c not in after)

            if not step.skip:
                for c in prepared.required_columns:
                    if training_schema.has(c) and c not in created_so_far:
                        required.add(c)
            created_so_far |= set(created)
            for c in schema:
                history.setdefault(c.name, c)

            params = {k: v for k, v in step.to_dict().items() if k not in ("kind", "id", "skip")}
            traces.append(
                StepTrace(
                    step_id=step.id,
                    kind=step.kind,
                    columns=tuple(prepared.columns),
                    created=created,
                    removed=removed,
                    skip=step.skip,
                    params=params,
                )
            )
            prepared_steps.append(prepared)
            ctx.log(
                step_id=step.id,
                level="info",
                message="step prepared",
                kind=step.kind,
                columns=list(prepared.columns),
                created=len(created),
                removed=len(removed),
                skip=step.skip,
            )

        for c in training_schema:
            if c.has_role(PREDICTOR):
                required.add(c.name)
        required_cols = tuple(n for n in training_schema.names() if n in required)

        ctx.log(
            step_id=None,
            level="info",
            message="recipe prepared",
            output_columns=len(schema),
            required_columns=len(required_cols),
        )

        return PreparedRecipe(
            recipe=self,
            steps=tuple(prepared_steps),
            training_schema=training_schema,
            output_schema=schema,
            required_columns=required_cols,
            traces=tuple(traces),
            events=tuple(dict(e) for e in ctx.events),
            training_output=data,
        )

    # ------------------------------------------------------------------
    # Resolução de seletores
    # ------------------------------------------------------------------
    def _resolver(self, step: Any, schema: Schema, history: Dict[str, ColumnInfo], ctx: RecipeContext):
        strict = self.strict_schema
        history_schema = Schema(columns=tuple(history.values()))

        def resolve(selector: Selector, require: bool = True) -> List[str]:
            cols = selector.resolve(schema)
            details = {
                "step": step.id,
                "kind": step.kind,
                "selector": selector.describe(),
                "schema": schema.names(),
            }

            for name in selector.literal_names():
                if schema.has(name):
                    continue
                if name not in history:
                    raise UnknownColumn(
                        message=f"Column {name} not found for step {step.id}",
                        details={**details, "column": name},
                    )
                if strict:
                    raise DependencyOrderViolation(
                        message=f"Column {name} was removed or renamed by a previous step",
                        details={**details, "column": name},
                    )
                ctx.add_warning(
                    step_id=step.id,
                    message=f"column {name} was removed by a previous step; selector resolved without it",
                )

            if not cols and require:
                earlier = selector.resolve(history_schema)
                if not earlier:
                    raise UnknownColumn(
                        message=f"Selector {selector.describe()} matched no columns for step {step.id}",
                        details=details,
                    )
                if strict:
                    raise DependencyOrderViolation(
                        message=f"Selector {selector.describe()} only matches columns removed by previous steps",
                        details={**details, "removed_matches": earlier},
                    )
                ctx.add_warning(
                    step_id=step.id,
                    message=f"selector {selector.describe()} matched no surviving columns; step is a no-op",
                )

            outcomes = [c for c in cols if schema.get(c).has_role(OUTCOME)]
            if outcomes and not step.touches_outcomes:
                raise RoleConflict(
                    message=f"Step {step.id} targets outcome columns {outcomes} without touches_outcomes=True",
                    details={**details, "outcomes": outcomes},
                )
            return cols

        return resolve
