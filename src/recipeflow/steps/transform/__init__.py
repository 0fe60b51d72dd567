"""Transformações concretas dos Steps embutidos."""
