"""
Declaração de papéis (roles) de colunas.

Superfície mínima com que o chamador declara a função de cada coluna
ao construir uma Recipe:

    outcome:    nome ou lista de nomes
    predictors: lista de nomes ou "all" (todas as demais colunas sem papel)
    custom:     mapeamento coluna → papel (ou lista de papéis)

A declaração é resolvida apenas no prepare, contra as colunas do dataset
de treino.

Invariantes:
    - Uma coluna pode acumular múltiplos papéis
    - Colunas declaradas e ausentes no treino geram UnknownColumn
    - "all" nunca inclui outcomes nem colunas com papel custom

Limites explícitos:
    - Não infere outcome
    - Não valida tipos de coluna
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import UnknownColumn
from .types import OUTCOME, PREDICTOR, as_name_list

ALL = "all"


@dataclass(frozen=True)
class RoleSpec:
    """Declaração imutável de papéis de colunas."""

    outcome: Tuple[str, ...] = ()
    predictors: Union[str, Tuple[str, ...]] = ALL
    custom: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()

    @classmethod
    def of(
        cls,
        *,
        outcome: Union[str, Sequence[str], None] = None,
        predictors: Union[str, Sequence[str], None] = ALL,
        custom: Optional[Mapping[str, Union[str, Sequence[str]]]] = None,
    ) -> "RoleSpec":
        if predictors is None or predictors == ALL:
            preds: Union[str, Tuple[str, ...]] = ALL
        else:
            preds = tuple(as_name_list(predictors))

        custom_items: List[Tuple[str, Tuple[str, ...]]] = []
        for col, roles in (custom or {}).items():
            role_list = tuple(as_name_list(roles))
            for r in role_list:
                if not r.strip():
                    raise ValueError(f"Invalid role for column {col!r}: empty string")
            custom_items.append((str(col), role_list))

        return cls(outcome=tuple(as_name_list(outcome)), predictors=preds, custom=tuple(custom_items))

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "RoleSpec":
        if not isinstance(cfg, Mapping):
            raise ValueError("Invalid config: recipe.roles must be a mapping")
        custom = cfg.get("custom") or {}
        if not isinstance(custom, Mapping):
            raise ValueError("Invalid config: recipe.roles.custom must be a mapping")
        return cls.of(outcome=cfg.get("outcome"), predictors=cfg.get("predictors", ALL), custom=custom)

    def resolve(self, columns: Sequence[str]) -> Dict[str, FrozenSet[str]]:
        """
        Resolve a declaração contra as colunas do dataset de treino.

        Returns:
            Dict[str, FrozenSet[str]]: papéis por coluna (apenas colunas com papel).

        Raises:
            UnknownColumn: se alguma coluna declarada não existir no dataset.
        """
        available = [str(c) for c in columns]
        roles: Dict[str, set] = {}

        def _add(col: str, role: str, section: str) -> None:
            if col not in available:
                raise UnknownColumn(
                    message=f"Column declared in roles.{section} not found in training data: {col}",
                    details={"step": None, "selector": col, "schema": available, "section": section},
                )
            roles.setdefault(col, set()).add(role)

        for col in self.outcome:
            _add(col, OUTCOME, "outcome")

        for col, role_list in self.custom:
            for r in role_list:
                _add(col, r, "custom")

        if self.predictors == ALL:
            for col in available:
                if col not in roles:
                    roles[col] = {PREDICTOR}
        else:
            for col in self.predictors:
                _add(col, PREDICTOR, "predictors")

        return {c: frozenset(r) for c, r in roles.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": list(self.outcome),
            "predictors": self.predictors if self.predictors == ALL else list(self.predictors),
            "custom": {c: list(r) for c, r in self.custom},
        }
