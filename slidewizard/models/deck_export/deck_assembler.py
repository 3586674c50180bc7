"""
Deck assembly and .pptx rendering

Builds the title slide, one slide per stored slide and the closing slide,
then renders every layout plan with python-pptx into an in-memory file.
"""

import logging
import random
import re
from io import BytesIO
from typing import Any, Callable, List, Optional, Sequence

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Inches, Pt

from ..themes import get_theme
from .bullets import BULLET_CHAR, normalize_bullets
from .image_loader import ImageLoader
from .layout_planner import (
    deck_title,
    image_on_left_for,
    plan_closing_slide,
    plan_content_slide,
    plan_title_slide,
)
from .types import (
    SLIDE_HEIGHT,
    SLIDE_WIDTH,
    Box,
    HorizontalAlign,
    ImageElement,
    LayoutPlan,
    ShapeElement,
    TextElement,
    VerticalAlign,
)

logger = logging.getLogger(__name__)

DECK_AUTHOR = 'SlideWizard AI'
PPTX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.presentationml.presentation'
BLANK_LAYOUT_INDEX = 6

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def export_filename(title: Optional[str]) -> str:
    """File name for a downloaded deck, derived from the presentation title"""
    name = _UNSAFE_FILENAME_CHARS.sub('_', title or '').strip(' ._')
    return f'{name or "presentation"}.pptx'


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color.lstrip('#').upper())


def _set_bullet(paragraph, char: str = BULLET_CHAR) -> None:
    """Native bullet (a:buChar) with a hanging indent"""
    pPr = paragraph._p.get_or_add_pPr()
    for child in list(pPr):
        if child.tag in {qn('a:buChar'), qn('a:buAutoNum'), qn('a:buBlip'), qn('a:buNone')}:
            pPr.remove(child)
    pPr.set('marL', str(int(Inches(0.25))))
    pPr.set('indent', str(-int(Inches(0.25))))
    bu_font = OxmlElement('a:buFont')
    bu_font.set('typeface', 'Arial')
    pPr.append(bu_font)
    bu_char = OxmlElement('a:buChar')
    bu_char.set('char', char)
    pPr.append(bu_char)


class DeckAssembler:
    """Sequences and renders a whole deck.

    ``rng`` decides which side the title slide image goes on; it is the only
    random choice in the export, so tests pass a fixed function.
    """

    def __init__(
        self,
        image_loader: Optional[ImageLoader] = None,
        rng: Optional[Callable[[], float]] = None,
        author: str = DECK_AUTHOR,
    ):
        self.image_loader = image_loader or ImageLoader()
        self.rng = rng or random.random
        self.author = author

    def plan_deck(self, presentation: Any, slides: Sequence[Any]) -> List[LayoutPlan]:
        """Layout plans for title, content and closing slides, in output order"""
        palette = get_theme(getattr(presentation, 'theme', None))
        ordered = sorted(slides, key=lambda s: s.slide_index)

        first_image = ordered[0].image_url if ordered and ordered[0].image_url else None
        plans = [
            plan_title_slide(
                deck_title(presentation.title, presentation.topic),
                palette,
                image_source=first_image,
                image_on_left=self.rng() > 0.5,
            )
        ]
        for slide in ordered:
            plans.append(
                plan_content_slide(
                    slide.title or '',
                    normalize_bullets(slide.content),
                    palette,
                    image_source=slide.image_url or None,
                    image_on_left=image_on_left_for(slide.slide_index),
                )
            )
        plans.append(plan_closing_slide(palette))
        return plans

    def build_deck(self, presentation: Any, slides: Sequence[Any]) -> bytes:
        """Render the deck and return the .pptx bytes"""
        plans = self.plan_deck(presentation, slides)
        prs = Presentation()
        prs.slide_width = Inches(SLIDE_WIDTH)
        prs.slide_height = Inches(SLIDE_HEIGHT)
        prs.core_properties.author = self.author
        prs.core_properties.title = deck_title(presentation.title, presentation.topic)
        prs.core_properties.subject = presentation.topic or ''

        for index, plan in enumerate(plans):
            slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT_INDEX])
            self.render_plan(slide, plan, index)

        buffer = BytesIO()
        prs.save(buffer)
        logger.info(f'Exported deck "{presentation.title}" with {len(plans)} slides')
        return buffer.getvalue()

    def render_plan(self, slide, plan: LayoutPlan, position: int = 0) -> None:
        for element in plan.elements:
            if isinstance(element, ShapeElement):
                self._add_shape(slide, element)
            elif isinstance(element, TextElement):
                self._add_text(slide, element)
            elif isinstance(element, ImageElement):
                self._add_image(slide, element, position)

    @staticmethod
    def _emu_box(box: Box):
        return Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h)

    def _add_shape(self, slide, element: ShapeElement):
        shape = slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, *self._emu_box(element.box))
        shape.fill.solid()
        shape.fill.fore_color.rgb = _rgb(element.fill)
        if element.line_color:
            shape.line.color.rgb = _rgb(element.line_color)
            shape.line.width = Pt(element.line_width)
        else:
            shape.line.fill.background()
        shape.shadow.inherit = False
        shape.name = element.role
        return shape

    def _add_text(self, slide, element: TextElement):
        textbox = slide.shapes.add_textbox(*self._emu_box(element.box))
        textbox.name = element.role
        text_frame = textbox.text_frame
        text_frame.word_wrap = True
        text_frame.vertical_anchor = MSO_ANCHOR.MIDDLE if element.valign == VerticalAlign.MIDDLE else MSO_ANCHOR.TOP

        items = element.bullets if element.is_bullet_list else [element.text]
        for i, item in enumerate(items):
            p = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            p.alignment = PP_ALIGN.CENTER if element.align == HorizontalAlign.CENTER else PP_ALIGN.LEFT
            if element.line_spacing:
                p.line_spacing = Pt(element.line_spacing)
            run = p.add_run()
            run.text = item
            font = run.font
            font.name = element.font_face
            font.size = Pt(element.font_size)
            font.bold = element.bold
            font.color.rgb = _rgb(element.color)
            if element.is_bullet_list:
                _set_bullet(p)
        return textbox

    def _add_image(self, slide, element: ImageElement, position: int):
        # a broken image never takes the rest of the slide down with it
        try:
            image_bytes = self.image_loader.load(element.source)
            picture = slide.shapes.add_picture(BytesIO(image_bytes), *self._emu_box(element.box))
            if element.sizing == 'cover':
                self._crop_to_cover(picture, element.box)
            picture.name = element.role
            return picture
        except Exception as e:
            logger.warning(f'Skipping image on slide {position + 1}: {str(e)}')
            return None

    @staticmethod
    def _crop_to_cover(picture, box: Box) -> None:
        """Crop the overflow so the picture fills its box without distortion"""
        image_w, image_h = picture.image.size
        if not image_w or not image_h:
            return
        box_ratio = box.w / box.h
        image_ratio = image_w / image_h
        if image_ratio > box_ratio:
            overflow = (1 - box_ratio / image_ratio) / 2
            picture.crop_left = overflow
            picture.crop_right = overflow
        elif image_ratio < box_ratio:
            overflow = (1 - image_ratio / box_ratio) / 2
            picture.crop_top = overflow
            picture.crop_bottom = overflow
