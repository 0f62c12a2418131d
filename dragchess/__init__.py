"""Drag-and-drop chess with a legal move generator, FEN loading and an alpha-beta engine."""

__version__ = "0.1.0"
__all__ = ["__version__"]