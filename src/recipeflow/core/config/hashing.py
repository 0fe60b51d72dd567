"""
Hashing canônico de estruturas declarativas.

Usado para identificar configurações resolvidas e declarações de
receitas (`Recipe.fingerprint()`), e registrado nos metadados de
persistência de receitas preparadas.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256, hexadecimal de 64 caracteres

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash,
      independentemente da ordem original das chaves
"""


import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash SHA-256 de um dicionário serializável.

    Raises:
        TypeError: se `config` não for um dicionário ou contiver valores
            não serializáveis em JSON.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
