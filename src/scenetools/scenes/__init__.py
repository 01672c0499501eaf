"""Declarative scene descriptions."""

from .loader import SceneLoader

__all__ = ["SceneLoader"]
