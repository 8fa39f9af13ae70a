"""Styling module for the quiz player."""

from .color_palette import ColorPalette
from .styles import Styles

__all__ = ["ColorPalette", "Styles"]
