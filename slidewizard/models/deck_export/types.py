"""
Type definitions for the deck export module

Geometry is expressed in inches on a 10 x 5.625 in (16:9) canvas; colors are
hex RGB strings without the leading '#'.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

SLIDE_WIDTH = 10.0
SLIDE_HEIGHT = 5.625


class SlideKind(str, Enum):
    TITLE = 'title'
    CONTENT = 'content'
    CLOSING = 'closing'


class HorizontalAlign(str, Enum):
    LEFT = 'left'
    CENTER = 'center'


class VerticalAlign(str, Enum):
    TOP = 'top'
    MIDDLE = 'middle'


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class ShapeElement:
    """Filled rectangle: panels, bands, stripes and accent bars"""

    role: str
    box: Box
    fill: str
    line_color: Optional[str] = None
    line_width: float = 0.0


@dataclass(frozen=True)
class TextElement:
    """Text box holding either a single run of text or a bullet list"""

    role: str
    box: Box
    color: str
    font_size: int
    text: str = ''
    bullets: List[str] = field(default_factory=list)
    bold: bool = False
    font_face: str = 'Arial'
    align: HorizontalAlign = HorizontalAlign.LEFT
    valign: VerticalAlign = VerticalAlign.TOP
    line_spacing: Optional[int] = None

    @property
    def is_bullet_list(self) -> bool:
        return bool(self.bullets)


@dataclass(frozen=True)
class ImageElement:
    """Picture scaled to fill its box, cropping the overflow"""

    role: str
    box: Box
    source: str
    sizing: str = 'cover'


LayoutElement = Union[ShapeElement, TextElement, ImageElement]


@dataclass
class LayoutPlan:
    """Positioned elements of one slide, in drawing order"""

    kind: SlideKind
    elements: List[LayoutElement] = field(default_factory=list)
    image_on_left: Optional[bool] = None

    def add(self, element: LayoutElement) -> LayoutElement:
        self.elements.append(element)
        return element

    @property
    def images(self) -> List[ImageElement]:
        return [e for e in self.elements if isinstance(e, ImageElement)]

    @property
    def texts(self) -> List[TextElement]:
        return [e for e in self.elements if isinstance(e, TextElement)]

    @property
    def shapes(self) -> List[ShapeElement]:
        return [e for e in self.elements if isinstance(e, ShapeElement)]

    def find(self, role: str) -> Optional[LayoutElement]:
        for element in self.elements:
            if element.role == role:
                return element
        return None
