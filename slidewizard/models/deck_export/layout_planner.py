"""
Slide layout planning

Pure functions that turn slide data and a theme into positioned elements.
Nothing here touches python-pptx; deck_assembler renders the plans.
"""

from typing import List, Optional

from ..themes import ThemeDefinition
from .types import (
    SLIDE_HEIGHT,
    SLIDE_WIDTH,
    Box,
    HorizontalAlign,
    ImageElement,
    LayoutPlan,
    ShapeElement,
    SlideKind,
    TextElement,
    VerticalAlign,
)

WHITE = 'FFFFFF'

IMAGE_PANEL_WIDTH = 3.5  # 35% of the slide
CONTENT_PANEL_WIDTH = 6.5  # 65% of the slide
DIVIDER_WIDTH = 0.1
IMAGE_BOX_LEFT = Box(0.3, 0.7, 2.9, 4.2)
IMAGE_BOX_RIGHT = Box(6.8, 0.7, 2.9, 4.2)

FOOTER_STRIPE = Box(0.0, 5.55, SLIDE_WIDTH, 0.075)
CLOSING_STRIPE_HEIGHT = 0.3
CLOSING_MESSAGE = 'Thank You!!'

DEFAULT_DECK_TITLE = 'Presentation'


def image_on_left_for(slide_index: int) -> bool:
    """Content slides alternate sides: even indices put the image on the left"""
    return slide_index % 2 == 0


def _split_panels(plan: LayoutPlan, palette: ThemeDefinition, image_on_left: bool) -> None:
    if image_on_left:
        plan.add(ShapeElement('image_panel', Box(0.0, 0.0, IMAGE_PANEL_WIDTH, SLIDE_HEIGHT), palette.bg1))
        plan.add(
            ShapeElement('content_panel', Box(IMAGE_PANEL_WIDTH, 0.0, CONTENT_PANEL_WIDTH, SLIDE_HEIGHT), palette.bg2)
        )
        plan.add(ShapeElement('divider', Box(IMAGE_PANEL_WIDTH, 0.0, DIVIDER_WIDTH, SLIDE_HEIGHT), palette.accent))
    else:
        plan.add(ShapeElement('content_panel', Box(0.0, 0.0, CONTENT_PANEL_WIDTH, SLIDE_HEIGHT), palette.bg2))
        plan.add(
            ShapeElement('image_panel', Box(CONTENT_PANEL_WIDTH, 0.0, IMAGE_PANEL_WIDTH, SLIDE_HEIGHT), palette.bg1)
        )
        plan.add(
            ShapeElement(
                'divider', Box(CONTENT_PANEL_WIDTH - DIVIDER_WIDTH, 0.0, DIVIDER_WIDTH, SLIDE_HEIGHT), palette.accent
            )
        )


def _image(source: str, image_on_left: bool) -> ImageElement:
    return ImageElement('image', IMAGE_BOX_LEFT if image_on_left else IMAGE_BOX_RIGHT, source)


def _footer(plan: LayoutPlan, palette: ThemeDefinition) -> None:
    plan.add(ShapeElement('footer_stripe', FOOTER_STRIPE, palette.accent))


def plan_image_content_slide(
    title: str, bullets: List[str], image_source: str, palette: ThemeDefinition, image_on_left: bool
) -> LayoutPlan:
    plan = LayoutPlan(SlideKind.CONTENT, image_on_left=image_on_left)
    _split_panels(plan, palette, image_on_left)
    plan.add(_image(image_source, image_on_left))

    if image_on_left:
        title_box, bullets_box = Box(3.8, 0.4, 6.0, 0.8), Box(3.8, 1.4, 5.9, 3.8)
    else:
        title_box, bullets_box = Box(0.4, 0.4, 5.8, 0.8), Box(0.4, 1.4, 5.8, 3.8)

    plan.add(
        TextElement(
            'title',
            title_box,
            palette.title,
            24,
            text=title,
            bold=True,
            font_face=palette.font_face,
            line_spacing=26,
        )
    )
    if bullets:
        plan.add(
            TextElement(
                'bullets',
                bullets_box,
                palette.text,
                12,
                bullets=list(bullets),
                font_face=palette.font_face,
                line_spacing=18,
            )
        )
    _footer(plan, palette)
    return plan


def plan_full_width_slide(title: str, bullets: List[str], palette: ThemeDefinition) -> LayoutPlan:
    plan = LayoutPlan(SlideKind.CONTENT)
    plan.add(ShapeElement('background', Box(0.0, 0.0, SLIDE_WIDTH, SLIDE_HEIGHT), palette.bg2))
    plan.add(ShapeElement('top_stripe', Box(0.0, 0.0, SLIDE_WIDTH, 0.08), palette.accent))
    plan.add(ShapeElement('header_band', Box(0.0, 0.08, SLIDE_WIDTH, 1.5), palette.bg1))
    plan.add(
        TextElement(
            'title',
            Box(0.6, 0.4, 8.8, 1.0),
            WHITE,
            32,
            text=title,
            bold=True,
            font_face=palette.font_face,
            valign=VerticalAlign.MIDDLE,
            line_spacing=36,
        )
    )
    plan.add(
        ShapeElement('content_panel', Box(0.5, 1.9, 9.0, 3.2), palette.bg3, line_color=palette.shadow, line_width=0.5)
    )
    plan.add(ShapeElement('content_accent_bar', Box(0.5, 1.9, 0.08, 3.2), palette.accent))
    if bullets:
        plan.add(
            TextElement(
                'bullets',
                Box(1.1, 2.2, 8.1, 2.6),
                palette.text,
                15,
                bullets=list(bullets),
                font_face=palette.font_face,
                line_spacing=22,
            )
        )
    _footer(plan, palette)
    return plan


def plan_content_slide(
    title: str,
    bullets: List[str],
    palette: ThemeDefinition,
    image_source: Optional[str] = None,
    image_on_left: bool = True,
) -> LayoutPlan:
    """Plan one content slide; the 35/65 split is used only when there is an image"""
    if image_source:
        return plan_image_content_slide(title, bullets, image_source, palette, image_on_left)
    return plan_full_width_slide(title, bullets, palette)


def plan_title_slide(
    title: str, palette: ThemeDefinition, image_source: Optional[str] = None, image_on_left: bool = True
) -> LayoutPlan:
    """Opening slide: title in an accent-bordered callout beside the first slide's image"""
    plan = LayoutPlan(SlideKind.TITLE, image_on_left=image_on_left)
    _split_panels(plan, palette, image_on_left)
    if image_source:
        plan.add(_image(image_source, image_on_left))

    if image_on_left:
        callout_box, title_box = Box(4.0, 2.0, 5.5, 1.8), Box(4.2, 2.2, 5.1, 1.4)
    else:
        callout_box, title_box = Box(0.5, 2.0, 5.5, 1.8), Box(0.7, 2.2, 5.1, 1.4)

    plan.add(ShapeElement('title_callout', callout_box, palette.bg3, line_color=palette.accent, line_width=3))
    plan.add(
        TextElement(
            'title',
            title_box,
            palette.title,
            38,
            text=title or DEFAULT_DECK_TITLE,
            bold=True,
            font_face=palette.font_face,
            align=HorizontalAlign.CENTER,
            valign=VerticalAlign.MIDDLE,
        )
    )
    return plan


def plan_closing_slide(palette: ThemeDefinition) -> LayoutPlan:
    plan = LayoutPlan(SlideKind.CLOSING)
    plan.add(ShapeElement('background', Box(0.0, 0.0, SLIDE_WIDTH, SLIDE_HEIGHT), palette.bg1))
    plan.add(ShapeElement('top_stripe', Box(0.0, 0.0, SLIDE_WIDTH, CLOSING_STRIPE_HEIGHT), palette.accent))
    plan.add(
        ShapeElement(
            'bottom_stripe',
            Box(0.0, SLIDE_HEIGHT - CLOSING_STRIPE_HEIGHT, SLIDE_WIDTH, CLOSING_STRIPE_HEIGHT),
            palette.accent,
        )
    )
    plan.add(
        TextElement(
            'message',
            Box(1.0, 2.2, 8.0, 1.5),
            WHITE,
            64,
            text=CLOSING_MESSAGE,
            bold=True,
            font_face=palette.font_face,
            align=HorizontalAlign.CENTER,
            valign=VerticalAlign.MIDDLE,
        )
    )
    return plan


def deck_title(title: Optional[str], topic: Optional[str]) -> str:
    """Title shown on the opening slide: title, then topic, then a generic label"""
    for candidate in (title, topic):
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_DECK_TITLE
