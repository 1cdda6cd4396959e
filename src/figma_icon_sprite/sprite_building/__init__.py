"""Sprite building exports."""

from .sprite_assembler import SPRITE_ROOT_OPEN, assemble_sprite
from .svg_normalizer import SvgNormalizationError, normalize_svg

__all__ = [
    "SPRITE_ROOT_OPEN",
    "assemble_sprite",
    "SvgNormalizationError",
    "normalize_svg",
]
