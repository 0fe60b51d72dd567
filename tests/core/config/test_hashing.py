# tests/core/config/test_hashing.py
"""
Testes do hashing canônico de configuração.

Os testes asseguram que:
- configurações equivalentes produzem o mesmo hash
- alterações na configuração produzem hashes diferentes
- o algoritmo corresponde ao SHA-256 do JSON canônico
"""

import hashlib
import json

import pytest

from recipeflow.core.config.hashing import compute_config_hash


def _canonical_json_bytes(obj: dict) -> bytes:
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def test_hash_is_deterministic():
    """
    Verifica que o hash independe da ordem das chaves.

    Invariantes:
        - Configurações equivalentes produzem o mesmo hash
        - O hash possui 64 caracteres hexadecimais
    """
    h1 = compute_config_hash({"b": 2, "a": 1})
    h2 = compute_config_hash({"a": 1, "b": 2})
    assert h1 == h2
    assert isinstance(h1, str)
    assert len(h1) == 64


def test_hash_changes_on_change():
    base = {"recipe": {"steps": [{"kind": "other", "threshold": 0.05}]}}
    changed = {"recipe": {"steps": [{"kind": "other", "threshold": 0.1}]}}
    assert compute_config_hash(base) != compute_config_hash(changed)


def test_hash_matches_sha256_of_canonical_json():
    cfg = {"recipe": {"roles": {"outcome": "preço"}}}
    expected = hashlib.sha256(_canonical_json_bytes(cfg)).hexdigest()
    assert compute_config_hash(cfg) == expected


def test_hash_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])  # type: ignore[arg-type]
