"""
Seletores de colunas.

Este módulo define o conjunto fechado de seletores usados por Steps para
declarar quais colunas transformam:

    - Names       → nomes literais (ordem preservada)
    - StartsWith  → prefixo
    - EndsWith    → sufixo
    - Matches     → expressão regular (re.search)
    - HasRole     → predicado por papel, com filtro opcional de tipo
    - Union       → união ordenada de seletores

Decisões arquiteturais:
    - Seletores são valores imutáveis e serializáveis
    - A resolução acontece uma única vez no prepare, contra o schema
      corrente; o resultado (lista de nomes) é congelado no Step preparado
    - Nenhum seletor consulta o DataFrame diretamente

Invariantes:
    - A resolução é determinística e segue a ordem do schema
      (exceto Names, que segue a ordem declarada)
    - Um seletor nunca retorna nomes duplicados

Limites explícitos:
    - Não valida papéis de outcome (responsabilidade da Recipe)
    - Não levanta erro para zero matches (responsabilidade da Recipe)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Optional, Sequence, Tuple, Union as _U

from .schema import Schema
from .types import ColumnType, OUTCOME, PREDICTOR


class Selector:
    """Base dos seletores de colunas."""

    def resolve(self, schema: Schema) -> List[str]:  # pragma: no cover
        raise NotImplementedError

    def describe(self) -> str:  # pragma: no cover
        raise NotImplementedError

    def literal_names(self) -> List[str]:
        """Nomes declarados literalmente (usado para detectar dependências quebradas)."""
        return []

    def __or__(self, other: "Selector") -> "Union":
        return Union(selectors=(self, as_selector(other)))


@dataclass(frozen=True)
class Names(Selector):
    names: Tuple[str, ...]

    def resolve(self, schema: Schema) -> List[str]:
        out: List[str] = []
        for n in self.names:
            if schema.has(n) and n not in out:
                out.append(n)
        return out

    def describe(self) -> str:
        return ", ".join(self.names)

    def literal_names(self) -> List[str]:
        return list(self.names)


@dataclass(frozen=True)
class StartsWith(Selector):
    prefix: str

    def resolve(self, schema: Schema) -> List[str]:
        return [n for n in schema.names() if n.startswith(self.prefix)]

    def describe(self) -> str:
        return f"starts_with({self.prefix!r})"


@dataclass(frozen=True)
class EndsWith(Selector):
    suffix: str

    def resolve(self, schema: Schema) -> List[str]:
        return [n for n in schema.names() if n.endswith(self.suffix)]

    def describe(self) -> str:
        return f"ends_with({self.suffix!r})"


@dataclass(frozen=True)
class Matches(Selector):
    pattern: str

    def resolve(self, schema: Schema) -> List[str]:
        rx = re.compile(self.pattern)
        return [n for n in schema.names() if rx.search(n)]

    def describe(self) -> str:
        return f"matches({self.pattern!r})"


@dataclass(frozen=True)
class HasRole(Selector):
    """Colunas que possuem `role` e, opcionalmente, um dos tipos em `types`."""

    role: str
    types: Optional[FrozenSet[ColumnType]] = None

    def resolve(self, schema: Schema) -> List[str]:
        out = []
        for c in schema:
            if not c.has_role(self.role):
                continue
            if self.types is not None and c.type not in self.types:
                continue
            out.append(c.name)
        return out

    def describe(self) -> str:
        if self.types is None:
            return f"has_role({self.role!r})"
        types = ", ".join(sorted(t.value for t in self.types))
        return f"has_role({self.role!r}, types=[{types}])"


@dataclass(frozen=True)
class Union(Selector):
    selectors: Tuple[Selector, ...]

    def resolve(self, schema: Schema) -> List[str]:
        out: List[str] = []
        for s in self.selectors:
            for n in s.resolve(schema):
                if n not in out:
                    out.append(n)
        return out

    def describe(self) -> str:
        return " | ".join(s.describe() for s in self.selectors)

    def literal_names(self) -> List[str]:
        out: List[str] = []
        for s in self.selectors:
            out.extend(s.literal_names())
        return out


# ---------------------------------------------------------------------------
# Fábricas
# ---------------------------------------------------------------------------

def names(*cols: str) -> Names:
    return Names(names=tuple(cols))


def starts_with(prefix: str) -> StartsWith:
    return StartsWith(prefix=prefix)


def ends_with(suffix: str) -> EndsWith:
    return EndsWith(suffix=suffix)


def matches(pattern: str) -> Matches:
    re.compile(pattern)
    return Matches(pattern=pattern)


def has_role(role: str, types: Optional[Sequence[_U[str, ColumnType]]] = None) -> HasRole:
    if types is None:
        return HasRole(role=role)
    return HasRole(role=role, types=frozenset(ColumnType(t) for t in types))


def all_predictors() -> HasRole:
    return HasRole(role=PREDICTOR)


def all_numeric_predictors() -> HasRole:
    return HasRole(role=PREDICTOR, types=frozenset({ColumnType.NUMERIC}))


def all_nominal_predictors() -> HasRole:
    return HasRole(role=PREDICTOR, types=frozenset({ColumnType.NOMINAL, ColumnType.ORDINAL}))


def all_outcomes() -> HasRole:
    return HasRole(role=OUTCOME)


def as_selector(value: Any) -> Selector:
    """Converte `str`, lista de `str`/seletores ou seletor em Selector."""
    if isinstance(value, Selector):
        return value
    if isinstance(value, str):
        return Names(names=(value,))
    if isinstance(value, (list, tuple)):
        if all(isinstance(v, str) for v in value):
            return Names(names=tuple(value))
        return Union(selectors=tuple(as_selector(v) for v in value))
    raise TypeError(f"Invalid column selector: {value!r}")


def selector_from_config(value: Any) -> Selector:
    """
    Constrói um seletor a partir de configuração declarativa (YAML/JSON).

    Formas aceitas:
        - "col" ou ["a", "b"]              → Names
        - {starts_with: "x_"}               → StartsWith
        - {ends_with: "_id"}                → EndsWith
        - {matches: "^a.*"}                 → Matches
        - {role: predictor, type: nominal}  → HasRole (type pode ser lista)
        - {any: [<seletor>, ...]}           → Union

    Raises:
        ValueError: se a forma declarada não for reconhecida.
    """
    if isinstance(value, str):
        return Names(names=(value,))
    if isinstance(value, list):
        if all(isinstance(v, str) for v in value):
            return Names(names=tuple(value))
        return Union(selectors=tuple(selector_from_config(v) for v in value))
    if not isinstance(value, dict) or len(value) == 0:
        raise ValueError(f"Invalid selector config: {value!r}")

    if "starts_with" in value:
        return starts_with(str(value["starts_with"]))
    if "ends_with" in value:
        return ends_with(str(value["ends_with"]))
    if "matches" in value:
        return matches(str(value["matches"]))
    if "any" in value:
        items = value["any"]
        if not isinstance(items, list) or not items:
            raise ValueError("Invalid selector config: any must be a non-empty list")
        return Union(selectors=tuple(selector_from_config(v) for v in items))
    if "role" in value:
        types = value.get("type")
        if types is not None and not isinstance(types, list):
            types = [types]
        try:
            return has_role(str(value["role"]), types)
        except ValueError as e:
            raise ValueError(f"Invalid selector config: unknown column type in {value!r}") from e

    raise ValueError(f"Invalid selector config: {value!r}")
