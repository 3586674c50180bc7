import logging
from typing import Optional, Tuple
from urllib.parse import quote

from fastapi import HTTPException, status

from slidewizard.models.suggestion_generator import (
    SlideSuggestion,
    SuggestionGenerator,
    SuggestionRequest,
    SuggestionResponse,
)

from .config import IMAGES_DIR, SUGGESTION_IMAGE_URL
from .db import get_presentation_by_id, get_slide_by_id, update_slide_by_id
from .db_models import Presentation, Slide, SlideUpdate, User
from .images import is_stored_image
from .presentations import ai_service

logger = logging.getLogger(__name__)

suggestion_generator = SuggestionGenerator(ai_service)


def _owned_slide(slide_id: str, user: User) -> Optional[Tuple[Slide, Presentation]]:
    """Slide and its presentation, or None when missing or owned by someone else"""
    slide = get_slide_by_id(slide_id)
    if slide is None:
        return None
    presentation = get_presentation_by_id(slide.presentation_id)
    if presentation is None or presentation.user_id != user.id:
        return None
    return slide, presentation


def suggestion_image_url(image_query: str) -> str:
    return SUGGESTION_IMAGE_URL.format(query=quote(image_query, safe=''))


def update_slide(slide_id: str, update: SlideUpdate, user: User) -> Slide | None:
    """Manual edit of a slide's title, content or image"""
    if _owned_slide(slide_id, user) is None:
        return None
    slide = update_slide_by_id(slide_id, update)
    logger.info(f'Updated slide {slide_id}')
    return slide


async def suggest_edits(request: SuggestionRequest) -> SuggestionResponse:
    title = (request.title or '').strip()
    content = (request.content or '').strip()
    if not title or not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Title and content are required')
    return await suggestion_generator.generate_suggestions(title, content, request.topic)


async def suggest_slide_edits(slide_id: str, user: User) -> SuggestionResponse | None:
    """Alternative versions of a stored slide, using its presentation topic"""
    owned = _owned_slide(slide_id, user)
    if owned is None:
        return None
    slide, presentation = owned
    return await suggestion_generator.generate_suggestions(slide.title, slide.content, presentation.topic)


def apply_suggestion(slide_id: str, suggestion: SlideSuggestion, user: User) -> Slide | None:
    """Overwrite a slide with one of its suggestions"""
    if _owned_slide(slide_id, user) is None:
        return None

    changes = {'title': suggestion.title, 'content': suggestion.content}
    if suggestion.image_query and suggestion.image_query.strip():
        changes['image_url'] = suggestion_image_url(suggestion.image_query.strip())

    logger.info(f'Applying suggestion to slide {slide_id}')
    return update_slide_by_id(slide_id, SlideUpdate(**changes))


def get_slide_image_path(slide_id: str, user: User, images_dir: str = IMAGES_DIR) -> str | None:
    """Local file behind a slide's stored image, None for remote or missing images"""
    owned = _owned_slide(slide_id, user)
    if owned is None:
        return None
    slide, _ = owned
    return slide.image_url if is_stored_image(slide.image_url, images_dir) else None
