"""
Loader de configuração do RecipeFlow.

Carrega a configuração efetiva que declara receitas a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Formato esperado (exemplo):

recipe:
  roles:
    outcome: price
    predictors: all
  strict_schema: true
  steps:
    - kind: log
      columns: area
    - kind: other
      columns: neighborhood
      threshold: 0.1

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides locais nunca mutam os defaults
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não constrói a Recipe (responsabilidade de builders.recipe)
    - Não valida parâmetros de Steps
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import json

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML/JSON e valida que o conteúdo raiz é um dict.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config_with_hash(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Tuple[Dict[str, Any], str]:
    """
    Resolve a configuração efetiva e seu hash canônico.

    Política de resolução:
        - defaults obrigatórios
        - local opcional; quando o arquivo existe, tem prioridade
        - resolução via `deep_merge`

    Returns:
        Tuple[Dict[str, Any], str]: configuração efetiva e hash SHA-256.
    """
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective, compute_config_hash(effective)


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Resolve a configuração efetiva (defaults + override local opcional)."""
    config, _ = load_config_with_hash(defaults_path=defaults_path, local_path=local_path)
    return config
