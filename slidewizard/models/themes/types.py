"""
Type definitions for presentation themes
"""

from dataclasses import dataclass
from enum import Enum


class ThemeName(str, Enum):
    """Themes selectable when a presentation is created"""

    PROFESSIONAL = 'professional'
    CREATIVE = 'creative'
    MINIMAL = 'minimal'
    BOLD = 'bold'
    ACADEMIC = 'academic'


@dataclass(frozen=True)
class PreviewClasses:
    """Tailwind class set used by the on-screen slide preview"""

    bg: str
    text: str
    accent: str
    border: str


@dataclass(frozen=True)
class ThemeDefinition:
    """Colors and style guidance shared by the preview, the prompts and the export"""

    name: str
    label: str
    bg1: str  # dark panel behind images and headers
    bg2: str  # main content background
    bg3: str  # light callout / content box
    title: str
    text: str
    accent: str
    shadow: str
    preview: PreviewClasses
    content_guidance: str
    image_style: str
    font_face: str = 'Arial'
