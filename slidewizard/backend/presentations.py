import asyncio
import logging
import os
import shutil
from typing import List, Optional, Tuple

from fastapi import HTTPException, status

from slidewizard.models.deck_export import DeckAssembler, ImageLoader, export_filename
from slidewizard.models.presentation_generator import PresentationGenerator, SlideImageResult
from slidewizard.models.themes import get_theme
from slidewizard.models.utils.openrouter_client import OpenRouterService

from .auth import SessionContext, require_user
from .config import (
    ALLOWED_SLIDE_COUNTS,
    IMAGE_MODEL,
    IMAGES_DIR,
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
    SLIDE_LAYOUT,
    TEXT_MODEL,
)
from .db import (
    delete_presentation_by_id,
    get_presentation_by_id,
    get_presentations_by_user_id,
    get_slides_by_presentation_id,
    store_presentation,
    store_slides,
    update_presentation_by_id,
)
from .db_models import (
    Presentation,
    PresentationCreate,
    PresentationGenerateRequest,
    PresentationGenerateResponse,
    PresentationUpdate,
    PresentationWithSlides,
    Slide,
    SlideCreate,
    User,
)
from .images import store_image_payload

logger = logging.getLogger(__name__)

ai_service = OpenRouterService(
    model=TEXT_MODEL,
    image_model=IMAGE_MODEL,
    api_key=OPENROUTER_API_KEY or None,
    base_url=OPENROUTER_BASE_URL,
)
presentation_generator = PresentationGenerator(ai_service)
deck_assembler = DeckAssembler(image_loader=ImageLoader(local_root=IMAGES_DIR))


def _validate_generation_request(request: PresentationGenerateRequest) -> str:
    topic = (request.topic or '').strip()
    if not topic or not request.slide_count:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Topic and slide count are required')
    if request.slide_count not in ALLOWED_SLIDE_COUNTS:
        allowed = ', '.join(str(c) for c in ALLOWED_SLIDE_COUNTS)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f'Slide count must be one of: {allowed}')
    return topic


def _image_reference(presentation_id: str, result: SlideImageResult) -> str:
    """Stored reference for a slide image, empty when generation or storage failed"""
    if not result.ok:
        return ''
    try:
        return store_image_payload(presentation_id, result.slide_index, result.payload)
    except (OSError, ValueError) as e:
        logger.warning(f'Could not store image for slide {result.slide_index}: {str(e)}')
        return ''


async def generate_presentation(
    request: PresentationGenerateRequest, session: SessionContext
) -> PresentationGenerateResponse:
    """Draft, illustrate and persist a new presentation"""
    topic = _validate_generation_request(request)
    user = require_user(session)

    slide_count = request.slide_count
    theme = get_theme(request.theme).name
    description = (request.description or '').strip() or None
    logger.info(f'Generating presentation for user {user.id}: {topic} ({slide_count} slides, theme: {theme})')

    generated = await presentation_generator.generate_slide_content(topic, slide_count, theme, description)
    generated = generated[:slide_count]

    presentation = store_presentation(
        PresentationCreate(topic=topic, title=topic, theme=theme, slide_count=slide_count), user.id
    )

    image_results = await presentation_generator.generate_slide_images(generated, theme)
    failed = [r.slide_index for r in image_results if not r.ok]
    if failed:
        logger.warning(f'Presentation {presentation.id}: no image for slides {failed}')

    slide_rows = [
        SlideCreate(
            presentation_id=presentation.id,
            slide_index=result.slide_index,
            title=slide.title,
            content=slide.content,
            image_url=_image_reference(presentation.id, result),
            layout=SLIDE_LAYOUT,
        )
        for slide, result in zip(generated, image_results)
    ]

    try:
        slides = store_slides(slide_rows)
    except Exception as e:
        logger.error(f'Slides insert failed, presentation {presentation.id} was left without slides: {str(e)}')
        raise

    logger.info(f'Successfully created presentation {presentation.id}')
    return PresentationGenerateResponse(
        presentation_id=presentation.id, slides=sorted(slides, key=lambda s: s.slide_index)
    )


def list_presentations(user: User) -> List[Presentation]:
    """Get the user's presentations, newest first"""
    presentations = get_presentations_by_user_id(user.id)
    return sorted(presentations, key=lambda p: p.created_at, reverse=True)


def get_presentation(presentation_id: str, user: User) -> Presentation | None:
    """Get a presentation owned by the user"""
    presentation = get_presentation_by_id(presentation_id)
    if presentation is None or presentation.user_id != user.id:
        return None
    return presentation


def get_presentation_with_slides(presentation_id: str, user: User) -> PresentationWithSlides | None:
    presentation = get_presentation(presentation_id, user)
    if presentation is None:
        return None
    slides = get_slides_by_presentation_id(presentation_id)
    return PresentationWithSlides(**presentation.model_dump(), slides=slides)


def get_presentation_slides(presentation_id: str, user: User) -> List[Slide] | None:
    if get_presentation(presentation_id, user) is None:
        return None
    return get_slides_by_presentation_id(presentation_id)


def update_presentation(presentation_id: str, update: PresentationUpdate, user: User) -> Presentation | None:
    """Update the title or theme of an existing presentation"""
    if get_presentation(presentation_id, user) is None:
        return None
    return update_presentation_by_id(presentation_id, update)


def delete_presentation(presentation_id: str, user: User, images_dir: str = IMAGES_DIR) -> Presentation | None:
    """Delete a presentation, its slides and its stored images"""
    if get_presentation(presentation_id, user) is None:
        return None

    deleted = delete_presentation_by_id(presentation_id)
    if deleted:
        image_dir = os.path.join(images_dir, presentation_id)
        if os.path.isdir(image_dir):
            shutil.rmtree(image_dir)
    return deleted


async def export_presentation(presentation_id: str, user: User) -> Optional[Tuple[str, bytes]]:
    """Render the presentation to .pptx and return (filename, file bytes)"""
    presentation = get_presentation(presentation_id, user)
    if presentation is None:
        return None

    slides = get_slides_by_presentation_id(presentation_id)
    content = await asyncio.to_thread(deck_assembler.build_deck, presentation, slides)
    return export_filename(presentation.title), content
