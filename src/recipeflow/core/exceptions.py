"""
RecipeFlow: Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas durante a preparação
(`prepare`) e a aplicação (`bake`) de receitas.

Objetivo:
- Permitir que Steps e a Recipe levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para RecipeErrorPayload
- Evitar ValueError/KeyError genéricos em guardrails críticos

Regras:
- Toda exceção carrega contexto suficiente para diagnóstico:
  step, seletor de colunas e schema observado (quando aplicável).
- Exceções devem carregar apenas dados estruturados (serializáveis).
- Nenhuma exceção é tratada com retry ou fallback silencioso.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class RecipeException(Exception):
    """Base class para exceções internas do RecipeFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        step = self.details.get("step")
        if step:
            return f"[{step}] {self.message}"
        return self.message


# ---------------------------------------------------------------------------
# Resolução de colunas (prepare)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class UnknownColumn(RecipeException):
    """Seletor não encontrou nenhuma coluna (ou coluna declarada não existe)."""


@dataclass(frozen=True, eq=False)
class DependencyOrderViolation(RecipeException):
    """Step referencia coluna removida ou renomeada por um Step anterior."""


@dataclass(frozen=True, eq=False)
class RoleConflict(RecipeException):
    """Coluna de outcome alvo de um Step que não declarou tocar outcomes."""


# ---------------------------------------------------------------------------
# Aplicação (bake)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class SchemaMismatch(RecipeException):
    """Dataset não contém coluna exigida pelo estado aprendido."""


# ---------------------------------------------------------------------------
# Declaração / Persistência
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class InvalidStepConfig(RecipeException):
    """Parâmetros de Step inválidos ou inconsistentes."""


@dataclass(frozen=True, eq=False)
class UnsupportedBlobVersion(RecipeException):
    """Artefato persistido com versão de formato desconhecida."""


@dataclass(frozen=True, eq=False)
class BlobFingerprintMismatch(RecipeException):
    """Fingerprint do envelope persistido diverge da receita carregada."""
