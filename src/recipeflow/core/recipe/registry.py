"""
Registro explícito de tipos de Step.

Este módulo define o `StepRegistry`, responsável por mapear o nome de um
tipo de Step (`kind`) para a classe que o implementa, permitindo a
construção de receitas a partir de configuração declarativa.

Decisões arquiteturais:
    - Não existe registro global mutável: `default_registry()` sempre
      devolve uma instância nova com os Steps embutidos
    - Duplicidade de `kind` é tratada como erro fatal
    - A ordem de registro é preservada

Invariantes:
    - Cada `kind` registrado é único
    - Apenas classes com atributo `kind` consistente são aceitas

Limites explícitos:
    - Não valida parâmetros de Steps (responsabilidade de cada Step)
    - Não monta receitas (responsabilidade de builders.recipe)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Type

from ..exceptions import InvalidStepConfig


class DuplicateStepKindError(ValueError):
    """
    Exceção levantada quando dois Steps são registrados com o mesmo `kind`.

    Invariantes:
        - Um `kind` duplicado invalida o registry
        - Nenhum registro parcial é aceito após a detecção do erro
    """


@dataclass
class StepRegistry:
    """Mapa `kind → classe de Step`, com ordem de registro preservada."""

    _classes: Dict[str, Type[Any]] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, step_cls: Type[Any]) -> Type[Any]:
        kind = getattr(step_cls, "kind", None)
        if not isinstance(kind, str) or not kind.strip():
            raise ValueError("step class must define a non-empty string `kind`")

        if kind in self._classes:
            raise DuplicateStepKindError(f"Duplicate step kind: {kind}")

        self._classes[kind] = step_cls
        self._order.append(kind)
        return step_cls

    def get(self, kind: str) -> Type[Any]:
        if kind not in self._classes:
            raise InvalidStepConfig(
                message=f"Unknown step kind: {kind}",
                details={"kind": kind, "available": list(self._order)},
            )
        return self._classes[kind]

    def create(self, kind: str, **params: Any) -> Any:
        step_cls = self.get(kind)
        try:
            return step_cls(**params)
        except TypeError as e:
            raise InvalidStepConfig(
                message=f"Invalid parameters for step kind {kind}: {e}",
                details={"kind": kind, "params": sorted(params)},
            ) from e

    def kinds(self) -> List[str]:
        return list(self._order)


def default_registry() -> StepRegistry:
    """Registry novo contendo todos os Steps embutidos."""
    from recipeflow.steps import BUILTIN_STEPS

    registry = StepRegistry()
    for step_cls in BUILTIN_STEPS:
        registry.register(step_cls)
    return registry
