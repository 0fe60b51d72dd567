"""Persistência canônica de receitas preparadas (v1).

Uma `PreparedRecipe` é persistida como blob opaco e versionado contendo:

- a declaração (Recipe: Steps + parâmetros + papéis)
- o estado aprendido de cada Step
- o schema de treino

garantindo round-trip load sem alteração de comportamento no `bake`.

Decisões (v1):
- Formato: joblib
- Caminho determinístico (relativo ao run_dir): artifacts/recipe.joblib
- Envelope: {"format_version": "v1", "fingerprint": <sha256>, "prepared": <obj>}

Limites explícitos:
- Não re-prepara a receita no load
- Não altera estado aprendido no reload
- Não persiste o dataset de treino além do cache já contido no objeto
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import joblib

from recipeflow.core.exceptions import BlobFingerprintMismatch, UnsupportedBlobVersion
from recipeflow.core.recipe.prepared import PreparedRecipe

FORMAT_VERSION = "v1"


@dataclass(frozen=True)
class RecipeArtifactMeta:
    """Metadata mínima (v1) de uma receita persistida."""

    fingerprint: str
    type: str = "prepared_recipe"
    format: str = "joblib"
    path: str = "artifacts/recipe.joblib"
    version: str = FORMAT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "format": self.format,
            "path": self.path,
            "version": self.version,
            "fingerprint": self.fingerprint,
        }


class RecipeStore:
    """Store canônica (v1) para persistência e load de PreparedRecipe."""

    def __init__(self, *, run_dir: Union[str, Path]):
        self.run_dir = Path(run_dir)

    def artifact_path(self) -> Path:
        """Caminho absoluto determinístico do artefato no run_dir."""
        return self.run_dir / "artifacts" / "recipe.joblib"

    def artifact_rel_path(self) -> str:
        return "artifacts/recipe.joblib"

    def save(self, *, prepared: PreparedRecipe) -> Dict[str, Any]:
        """Salva a receita preparada e retorna a metadata (serializável)."""
        if not isinstance(prepared, PreparedRecipe):
            raise TypeError(f"expected PreparedRecipe, got {type(prepared).__name__}")

        fingerprint = prepared.fingerprint()
        path = self.artifact_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump(
            {"format_version": FORMAT_VERSION, "fingerprint": fingerprint, "prepared": prepared},
            path,
        )
        return RecipeArtifactMeta(fingerprint=fingerprint, path=self.artifact_rel_path()).to_dict()

    def load(self) -> PreparedRecipe:
        """Carrega a receita preparada sem recalcular estado."""
        path = self.artifact_path()
        if not path.exists():
            raise FileNotFoundError(str(path))

        blob = joblib.load(path)
        version = blob.get("format_version") if isinstance(blob, dict) else None
        if version != FORMAT_VERSION:
            raise UnsupportedBlobVersion(
                message=f"Unsupported prepared recipe format version: {version!r}",
                details={"path": self.artifact_rel_path(), "version": version, "supported": [FORMAT_VERSION]},
            )

        prepared = blob["prepared"]
        actual = prepared.fingerprint()
        if actual != blob.get("fingerprint"):
            raise BlobFingerprintMismatch(
                message="Prepared recipe fingerprint does not match its envelope",
                details={"path": self.artifact_rel_path(), "expected": blob.get("fingerprint"), "actual": actual},
            )
        return prepared


__all__ = ["RecipeStore", "RecipeArtifactMeta", "FORMAT_VERSION"]
