"""
Schema tabular de receitas.

Este módulo define o `Schema`, a visão ordenada e imutável das colunas
de um dataset (nome, tipo e papéis), usada em dois momentos:

    - schema de treino: congelado no prepare a partir do dataset de treino
    - schema corrente: evolui Step a Step durante o prepare, refletindo
      colunas criadas, removidas e renomeadas

Seletores são sempre resolvidos contra o schema corrente, nunca contra
o DataFrame diretamente.

Invariantes:
    - A ordem das colunas é a ordem do DataFrame de origem
    - Nomes são únicos
    - Uma instância de Schema nunca é alterada após criada

Limites explícitos:
    - Não transforma dados
    - Não valida semântica de domínio
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple

from .types import ColumnType, PREDICTOR, infer_column_type


@dataclass(frozen=True)
class ColumnInfo:
    """Nome, tipo e papéis de uma coluna."""

    name: str
    type: ColumnType
    roles: FrozenSet[str] = frozenset()

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type.value, "roles": sorted(self.roles)}


@dataclass(frozen=True)
class Schema:
    """Sequência ordenada e imutável de `ColumnInfo`."""

    columns: Tuple[ColumnInfo, ...] = ()

    def __iter__(self) -> Iterator[ColumnInfo]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def names(self) -> List[str]:
        return [c.name for c in self.columns]

    def has(self, name: str) -> bool:
        return any(c.name == name for c in self.columns)

    def get(self, name: str) -> ColumnInfo:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(name)

    def roles_of(self, names: Iterable[str]) -> FrozenSet[str]:
        out: set = set()
        for n in names:
            if self.has(n):
                out |= self.get(n).roles
        return frozenset(out)

    def to_dict(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in self.columns]

    # ------------------------------------------------------------------
    # Construção
    # ------------------------------------------------------------------
    @classmethod
    def from_frame(
        cls,
        df: Any,
        roles: Mapping[str, FrozenSet[str]],
        type_overrides: Optional[Mapping[str, ColumnType]] = None,
    ) -> "Schema":
        """
        Constrói o schema de treino a partir de um DataFrame.

        Tipos são inferidos do dtype de cada coluna, exceto quando um
        override explícito é declarado. Colunas sem papel declarado
        recebem um conjunto vazio de roles.
        """
        overrides = dict(type_overrides or {})
        cols = []
        for name in df.columns:
            name = str(name)
            ctype = overrides.get(name) or infer_column_type(df[name])
            cols.append(ColumnInfo(name=name, type=ctype, roles=frozenset(roles.get(name, frozenset()))))
        return cls(columns=tuple(cols))

    def evolve(self, df: Any, inherited_roles: FrozenSet[str]) -> "Schema":
        """
        Produz o schema corrente após a execução de um Step.

        - Colunas sobreviventes mantêm seus papéis; o tipo é re-inferido
          (um Step pode, por exemplo, converter texto em indicadores).
        - Colunas novas herdam os papéis das colunas de entrada do Step
          (`inherited_roles`); na ausência, recebem `predictor`.
        - Overrides de tipo TEXT são preservados enquanto a coluna existir.
        """
        new_roles = inherited_roles or frozenset({PREDICTOR})
        cols = []
        for name in df.columns:
            name = str(name)
            if self.has(name):
                prev = self.get(name)
                ctype = prev.type if prev.type == ColumnType.TEXT else infer_column_type(df[name])
                cols.append(ColumnInfo(name=name, type=ctype, roles=prev.roles))
            else:
                cols.append(ColumnInfo(name=name, type=infer_column_type(df[name]), roles=frozenset(new_roles)))
        return Schema(columns=tuple(cols))
