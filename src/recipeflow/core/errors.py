"""
RecipeFlow: Canonical Error Structures (v1)

Este módulo define o padrão canônico de payload de erro do RecipeFlow.
Erros de preparação e aplicação de receitas são artefatos de domínio,
devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

O payload é a forma exposta a notebooks, relatórios e logs estruturados;
as exceções tipadas vivem em `core.exceptions`.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .exceptions import (
    BlobFingerprintMismatch,
    DependencyOrderViolation,
    InvalidStepConfig,
    RecipeException,
    RoleConflict,
    SchemaMismatch,
    UnknownColumn,
    UnsupportedBlobVersion,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecipeErrorPayload:
    """
    Payload canônico de erro do RecipeFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
      (step, seletor, schema observado)
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

UNKNOWN_COLUMN = "UNKNOWN_COLUMN"
SCHEMA_MISMATCH = "SCHEMA_MISMATCH"
DEPENDENCY_ORDER_VIOLATION = "DEPENDENCY_ORDER_VIOLATION"
ROLE_CONFLICT = "ROLE_CONFLICT"
INVALID_STEP_CONFIG = "INVALID_STEP_CONFIG"
UNSUPPORTED_BLOB_VERSION = "UNSUPPORTED_BLOB_VERSION"
BLOB_FINGERPRINT_MISMATCH = "BLOB_FINGERPRINT_MISMATCH"
RECIPE_ERROR = "RECIPE_ERROR"

_TYPE_BY_EXCEPTION = (
    (UnknownColumn, UNKNOWN_COLUMN),
    (SchemaMismatch, SCHEMA_MISMATCH),
    (DependencyOrderViolation, DEPENDENCY_ORDER_VIOLATION),
    (RoleConflict, ROLE_CONFLICT),
    (InvalidStepConfig, INVALID_STEP_CONFIG),
    (UnsupportedBlobVersion, UNSUPPORTED_BLOB_VERSION),
    (BlobFingerprintMismatch, BLOB_FINGERPRINT_MISMATCH),
)

_DEFAULT_HINTS = {
    UNKNOWN_COLUMN: "Revise o seletor do Step ou o dataset de treino; nenhuma coluna compatível foi encontrada.",
    SCHEMA_MISMATCH: "O dataset deve conter as mesmas colunas usadas no treino da receita.",
    DEPENDENCY_ORDER_VIOLATION: "Reordene os Steps: a coluna foi removida ou renomeada por um Step anterior.",
    ROLE_CONFLICT: "Declare touches_outcomes=True no Step ou ajuste o seletor para excluir o outcome.",
    INVALID_STEP_CONFIG: "Revise os parâmetros declarados para o Step.",
    UNSUPPORTED_BLOB_VERSION: "Prepare a receita novamente e persista com a versão atual do formato.",
    BLOB_FINGERPRINT_MISMATCH: "O artefato foi alterado após a gravação; prepare e persista a receita novamente.",
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def schema_mismatch(
    *,
    missing_columns: List[str],
    step: Optional[str] = None,
    available_columns: Optional[List[str]] = None,
    hint: str = _DEFAULT_HINTS[SCHEMA_MISMATCH],
) -> RecipeErrorPayload:
    return RecipeErrorPayload(
        type=SCHEMA_MISMATCH,
        message="Coluna exigida pela receita ausente no dataset",
        details={
            "missing_columns": list(missing_columns),
            "step": step,
            "available_columns": list(available_columns or []),
        },
        hint=hint,
    )


def unknown_column(
    *,
    selector: str,
    step: Optional[str] = None,
    schema: Optional[List[str]] = None,
    hint: str = _DEFAULT_HINTS[UNKNOWN_COLUMN],
) -> RecipeErrorPayload:
    return RecipeErrorPayload(
        type=UNKNOWN_COLUMN,
        message="Seletor não encontrou colunas no schema",
        details={
            "selector": selector,
            "step": step,
            "schema": list(schema or []),
        },
        hint=hint,
    )


def to_payload(exc: BaseException) -> RecipeErrorPayload:
    """Converte uma exceção em payload canônico.

    Exceções tipadas do RecipeFlow preservam mensagem, details e hint.
    Qualquer outra exceção é encapsulada como RECIPE_ERROR, com o tipo
    original registrado em `details.exc_type`.
    """
    if isinstance(exc, RecipeException):
        code = RECIPE_ERROR
        for cls, c in _TYPE_BY_EXCEPTION:
            if isinstance(exc, cls):
                code = c
                break
        return RecipeErrorPayload(
            type=code,
            message=exc.message,
            details=dict(exc.details),
            hint=exc.hint or _DEFAULT_HINTS.get(code),
        )

    return RecipeErrorPayload(
        type=RECIPE_ERROR,
        message=str(exc) or exc.__class__.__name__,
        details={"exc_type": exc.__class__.__name__},
        hint="Verifique o stacktrace; nenhum fallback é aplicado automaticamente.",
    )
