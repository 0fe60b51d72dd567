"""
Split inicial treino/teste (v1).

Responsabilidades:
- Separar um DataFrame em treino e teste antes da preparação da receita
- `prop` (fração de treino) configurável
- `seed` explícita (determinismo obrigatório)
- estratificação opcional por uma coluna

Princípios:
- Decisão declarada: split nunca é implícito
- Reprodutibilidade total: a mesma seed gera os mesmos índices
- A receita é preparada apenas sobre `training()`

Limites explícitos:
- Não faz validação cruzada nem reamostragem
- Não altera colunas nem tipos
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


def _validate_prop(prop: Any) -> float:
    if isinstance(prop, bool) or not isinstance(prop, (int, float)):
        raise ValueError("Invalid config: prop must be a number")
    p = float(prop)
    if not (0.0 < p < 1.0):
        raise ValueError("Invalid config: prop must be between 0 and 1 (exclusive)")
    return p


def _validate_seed(seed: Any) -> int:
    if seed is None:
        raise ValueError("Invalid config: seed is required for determinism")
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError("Invalid config: seed must be an int")
    return int(seed)


@dataclass(frozen=True)
class Split:
    """Resultado de `initial_split`: índices congelados sobre o dataset original."""

    data: Any
    train_index: Tuple[Any, ...]
    test_index: Tuple[Any, ...]
    prop: float
    seed: int
    strata: Optional[str] = None

    def training(self) -> Any:
        return self.data.loc[list(self.train_index)].copy()

    def testing(self) -> Any:
        return self.data.loc[list(self.test_index)].copy()

    def impact(self) -> Dict[str, Any]:
        return {
            "rows_total": int(len(self.data)),
            "rows_train": int(len(self.train_index)),
            "rows_test": int(len(self.test_index)),
            "prop": float(self.prop),
            "stratified": self.strata is not None,
            "stratify_column": self.strata,
            "seed": int(self.seed),
        }


def initial_split(data: Any, prop: float = 0.75, strata: Optional[str] = None, *, seed: Any = None) -> Split:
    """
    Separa `data` em treino (`prop`) e teste (`1 - prop`).

    Args:
        data: pandas.DataFrame com índice único.
        prop: fração de linhas destinadas ao treino.
        strata: coluna usada para estratificação (opcional).
        seed: semente inteira (obrigatória).

    Raises:
        ValueError: parâmetros inválidos ou estratificação impossível.
        TypeError: `data` não é um DataFrame.
    """
    import pandas as pd  # type: ignore
    from sklearn.model_selection import train_test_split  # type: ignore

    if not isinstance(data, pd.DataFrame):
        raise TypeError(f"initial_split expects a pandas DataFrame, got {type(data).__name__}")

    p = _validate_prop(prop)
    s = _validate_seed(seed)

    if not data.index.is_unique:
        raise ValueError("initial_split requires a unique index")

    y = None
    if strata is not None:
        if strata not in data.columns:
            raise ValueError(f"Stratify column not found: {strata}")
        y = data[strata]

    try:
        train_idx, test_idx = train_test_split(
            data.index.to_numpy(),
            train_size=p,
            random_state=s,
            shuffle=True,
            stratify=y,
        )
    except ValueError as e:
        if strata is not None:
            raise ValueError(f"Stratified split not possible: {e}") from e
        raise

    return Split(
        data=data,
        train_index=tuple(train_idx.tolist()),
        test_index=tuple(test_idx.tolist()),
        prop=p,
        seed=s,
        strata=strata,
    )


__all__ = ["Split", "initial_split"]
