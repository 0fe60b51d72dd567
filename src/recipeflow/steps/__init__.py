"""
Steps embutidos do RecipeFlow.

Cada Step é um valor imutável declarado pelo usuário; o prepare produz
um PreparedStep com o estado aprendido congelado.

    log        → logaritmo in-place (sem estado)
    other      → colapso de níveis raros
    dummy      → indicadores `<coluna>_<nível>`
    spline     → base de splines com graus de liberdade fixos
    interact   → interações `<a>_x_<b>`
    normalize  → centralização e escala
    zv         → remoção de colunas de variância zero
    rm         → remoção explícita de colunas
"""

from .transform.dummy import DummyStep
from .transform.interact import InteractStep
from .transform.log import LogStep
from .transform.normalize import NormalizeStep
from .transform.other import OtherStep
from .transform.remove import RemoveStep, ZeroVarianceStep
from .transform.spline import SplineStep

BUILTIN_STEPS = (
    LogStep,
    OtherStep,
    DummyStep,
    SplineStep,
    InteractStep,
    NormalizeStep,
    ZeroVarianceStep,
    RemoveStep,
)

__all__ = [
    "BUILTIN_STEPS",
    "DummyStep",
    "InteractStep",
    "LogStep",
    "NormalizeStep",
    "OtherStep",
    "RemoveStep",
    "SplineStep",
    "ZeroVarianceStep",
]
