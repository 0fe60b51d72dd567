"""Builders declarativos (config → objetos do core)."""

from .recipe import build_recipe

__all__ = ["build_recipe"]
