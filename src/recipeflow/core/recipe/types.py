"""
Tipos canônicos de receitas do RecipeFlow.

Este módulo define as estruturas e enums fundamentais compartilhados
entre schema, seletores, Steps e a Recipe.

Componentes principais:
    - ColumnType → enum de tipos de valor de coluna
    - OUTCOME / PREDICTOR → papéis (roles) reservados
    - StepTrace  → registro imutável do que um Step fez no prepare

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Nenhuma lógica de execução vive neste módulo

Limites explícitos:
    - Não executa Steps
    - Não resolve seletores
    - Não manipula DataFrames (exceto inferência de tipo por dtype)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


OUTCOME = "outcome"
PREDICTOR = "predictor"


class ColumnType(str, Enum):
    """
    Tipos de valor de uma coluna do dataset.

    Os valores são strings para facilitar serialização em JSON/YAML
    e a declaração de overrides em configuração.

    Tipos definidos:
        - NUMERIC: valores numéricos (inclui booleanos)
        - NOMINAL: categorias sem ordem
        - ORDINAL: categorias ordenadas (pandas Categorical ordered)
        - TEXT: texto livre (apenas via override explícito)
        - DATE: datas e timestamps

    Invariantes:
        - Toda coluna do schema possui exatamente um tipo
        - TEXT nunca é inferido automaticamente
    """
    NUMERIC = "numeric"
    NOMINAL = "nominal"
    ORDINAL = "ordinal"
    TEXT = "text"
    DATE = "date"


def infer_column_type(series: Any) -> ColumnType:
    """Infere o ColumnType a partir do dtype de uma `pandas.Series`."""
    import pandas as pd

    dtype = series.dtype
    if isinstance(dtype, pd.CategoricalDtype):
        return ColumnType.ORDINAL if dtype.ordered else ColumnType.NOMINAL
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return ColumnType.DATE
    if pd.api.types.is_bool_dtype(dtype) or pd.api.types.is_numeric_dtype(dtype):
        return ColumnType.NUMERIC
    return ColumnType.NOMINAL


@dataclass(frozen=True)
class StepTrace:
    """
    Registro imutável da preparação de um Step.

    Campos:
        - step_id: identificador do Step na receita
        - kind: tipo do Step (ex.: "dummy", "other")
        - columns: colunas resolvidas pelo seletor no schema corrente
        - created: colunas novas produzidas pelo Step
        - removed: colunas removidas pelo Step
        - skip: se o Step é ignorado ao aplicar em dados novos
        - params: parâmetros declarados (serializáveis)

    Este registro alimenta `PreparedRecipe.summary()` e eventos de log.
    """
    step_id: str
    kind: str
    columns: Tuple[str, ...]
    created: Tuple[str, ...] = ()
    removed: Tuple[str, ...] = ()
    skip: bool = False
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_id": self.step_id,
            "kind": self.kind,
            "columns": list(self.columns),
            "created": list(self.created),
            "removed": list(self.removed),
            "skip": self.skip,
            "params": dict(self.params),
        }


def as_name_list(value: Any) -> List[str]:
    """Normaliza `str | list[str] | None` para lista de nomes."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]
