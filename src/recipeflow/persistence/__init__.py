from .recipe_store import FORMAT_VERSION, RecipeArtifactMeta, RecipeStore

__all__ = ["FORMAT_VERSION", "RecipeArtifactMeta", "RecipeStore"]
