# src/recipeflow/core/config/__init__.py

"""
Camada de configuração do RecipeFlow.

Carregamento, merge e hashing das configurações que declaram receitas.

A configuração é:
    - declarativa
    - determinística
    - separada do estado aprendido (que vive na PreparedRecipe)

Limites explícitos:
    - Não constrói receitas
    - Não toca dados
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config, load_config_with_hash
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_config_with_hash",
]
