"""
Deck Export Module

Turns a stored presentation into a themed 16:9 .pptx deck: bullet
normalization, per-slide layout planning and python-pptx rendering.
"""

from .bullets import join_bullets, normalize_bullets
from .deck_assembler import DECK_AUTHOR, PPTX_MEDIA_TYPE, DeckAssembler, export_filename
from .image_loader import ImageLoader, ImageLoadError
from .layout_planner import (
    deck_title,
    image_on_left_for,
    plan_closing_slide,
    plan_content_slide,
    plan_title_slide,
)
from .types import Box, ImageElement, LayoutPlan, ShapeElement, SlideKind, TextElement

__all__ = [
    'DECK_AUTHOR',
    'PPTX_MEDIA_TYPE',
    'Box',
    'DeckAssembler',
    'ImageElement',
    'ImageLoadError',
    'ImageLoader',
    'LayoutPlan',
    'ShapeElement',
    'SlideKind',
    'TextElement',
    'deck_title',
    'export_filename',
    'image_on_left_for',
    'join_bullets',
    'normalize_bullets',
    'plan_closing_slide',
    'plan_content_slide',
    'plan_title_slide',
]
