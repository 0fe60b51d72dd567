"""
Contrato canônico de Step do RecipeFlow.

Este módulo define os protocolos formais que um Step declarado e sua
versão preparada devem satisfazer para participar de uma Recipe.

Ciclo de vida:
    Step (declarado) --prepare(dados de treino)--> PreparedStep --apply(dados)--> DataFrame

Responsabilidades de um Step:
    - declarar seletores e parâmetros (sem tocar dados)
    - aprender estado a partir do dataset de treino (`prepare`)

Responsabilidades de um PreparedStep:
    - aplicar a transformação usando apenas o estado congelado e o
      DataFrame recebido (`apply`)
    - declarar as colunas de entrada exigidas (`required_columns`)

Princípios fundamentais:
    - Steps não conhecem a Recipe nem outros Steps
    - Seletores são resolvidos via callback fornecido pela Recipe
    - Conformidade é garantida por duck typing (@runtime_checkable)

Invariantes:
    - `prepare` é determinístico: dois prepares sobre o mesmo treino
      produzem estados com `apply` idêntico
    - `apply` nunca muta o DataFrame recebido nem o estado aprendido
    - `apply` preserva número de linhas e índice

Limites explícitos:
    - Não valida papéis de outcome (responsabilidade da Recipe)
    - Não registra eventos diretamente (usa o contexto recebido)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Protocol, Tuple, runtime_checkable

from .context import RecipeContext
from .selectors import Selector

# resolve(selector, *, require=True) -> lista de colunas do schema corrente
Resolver = Callable[..., List[str]]


@runtime_checkable
class PreparedStep(Protocol):
    """Step com estado aprendido congelado, pronto para `apply`."""

    step: "Step"
    columns: Tuple[str, ...]

    @property
    def required_columns(self) -> Tuple[str, ...]:
        """Colunas que o dataset precisa conter quando `apply` é chamado."""
        ...

    def apply(self, data: Any, ctx: RecipeContext) -> Any:
        """Aplica a transformação a uma cópia de `data` e a retorna."""
        ...


@runtime_checkable
class Step(Protocol):
    """
    Contrato canônico de um Step declarado.

    Atributos obrigatórios:
        - id: identificador único na receita
        - kind: nome do tipo de Step (chave no StepRegistry)
        - skip: se True, o Step participa do prepare mas é ignorado ao
          aplicar a receita em dados novos
        - touches_outcomes: se True, o Step pode selecionar colunas de outcome

    Decisões arquiteturais:
        - O protocolo não impõe herança, apenas conformidade estrutural
        - Steps são valores imutáveis; a Recipe atribui ids via cópia

    Limites explícitos:
        - Não aplica transformações fora de um PreparedStep
        - Não resolve colunas sem o callback da Recipe
    """
    id: str
    kind: str
    skip: bool
    touches_outcomes: bool

    def selectors(self) -> Dict[str, Selector]:
        """Seletores declarados, por nome de parâmetro."""
        ...

    def prepare(self, data: Any, resolve: Resolver, ctx: RecipeContext) -> PreparedStep:
        """Aprende o estado do Step a partir do dataset de treino."""
        ...

    def to_dict(self) -> Dict[str, Any]:
        """Representação serializável da declaração."""
        ...
