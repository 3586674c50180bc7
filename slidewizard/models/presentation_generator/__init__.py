"""
Presentation Generator Module

This module drafts new presentations with an LLM: slide titles and bullet
content from a topic, then one themed image per slide.
"""

from .presentation_generator import PresentationGenerator
from .types import GeneratedSlide, SlideContentError, SlideImageResult

__all__ = ['PresentationGenerator', 'GeneratedSlide', 'SlideContentError', 'SlideImageResult']
