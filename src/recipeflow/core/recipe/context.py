"""
Contexto de execução de prepare/bake.

Este módulo define o `RecipeContext`, a estrutura canônica utilizada para
registrar eventos estruturados e warnings durante a preparação e a
aplicação de uma receita.

O RecipeContext atua como o único meio permitido de:
    - registro de logs estruturados (eventos)
    - coleta de warnings não fatais associados a Steps

Princípios fundamentais:
    - Isolamento por execução (cada prepare/bake pode ter seu contexto)
    - Eventos são dados estruturados, não texto formatado
    - Ausência de estado global compartilhado

Invariantes:
    - Logs sempre incluem `run_id` e `step_id`
    - Warnings são agrupados por `step_id`
    - O contexto é mutável; a receita preparada congela uma cópia dos
      eventos de preparação

Limites explícitos:
    - Não executa Steps
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4


@dataclass
class RecipeContext:
    """
    Contexto de uma execução de prepare ou bake.

    Campos:
        - run_id: identificador da execução (gerado quando omitido)
        - created_at: timestamp UTC de criação
        - meta: metadados livres do chamador
        - events: eventos estruturados registrados via `log`
        - warnings: mensagens não fatais por `step_id`
    """
    run_id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def log(self, *, step_id: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)
        self.log(step_id=step_id, level="warning", message=message)

    def events_for(self, step_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("step_id") == step_id]
