"""
Presentation Generator using LLM to draft slides and slide images
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from ..themes import get_theme
from ..utils.JsonExtractor import JsonExtractor
from ..utils.openrouter_client import OpenRouterService
from .types import GeneratedSlide, SlideContentError, SlideImageResult

logger = logging.getLogger(__name__)


class PresentationGenerator:
    """
    Drafts slide titles, bullet content and one image per slide
    """

    def __init__(self, ai_service: Optional[OpenRouterService] = None):
        self.ai_service = ai_service or OpenRouterService()
        self.extractor = JsonExtractor('array')

    def _get_system_prompt(self, topic: str, slide_count: int, theme: str, has_description: bool) -> str:
        guidance = get_theme(theme).content_guidance
        context_rule = (
            '\n            - Use the provided additional context to tailor the content and imagery'
            if has_description
            else ''
        )
        return f"""You are a professional presentation creator. Generate {slide_count} slides about "{topic}" in a {theme} style.

            Theme guidance: {guidance}

            Return a JSON array with exactly {slide_count} objects, each with:
            - title: slide title (max 65 chars, theme-appropriate, clear and concise)
            - content: main content/bullets (6-8 bullet points separated by • , each bullet 75-95 chars with substantial detail)
            - imageQuery: detailed description for AI image generation (describe the style, mood, and subject in 10-15 words)

            CRITICAL FORMATTING RULES:
            - Content should be comprehensive and informative (6-8 bullet points per slide)
            - Each bullet point should be a complete, detailed sentence (75-95 characters)
            - Provide substantial detail to fill the content area effectively without overlapping
            - Do NOT use markdown formatting like ** or __ anywhere in the content
            - Make it engaging, well-structured, and perfectly aligned with the {theme} theme
            - Content must fill approximately 65% of the slide space properly{context_rule}"""

    def _get_user_prompt(self, topic: str, slide_count: int, theme: str, description: Optional[str]) -> str:
        prompt = f'Create {slide_count} {theme} slides about: {topic}'
        if description:
            prompt += (
                f'\n\nAdditional context: {description}'
                '\n\nUse this context to generate more relevant and targeted content and images.'
            )
        return prompt

    def _get_image_prompt(self, slide: GeneratedSlide, theme: str) -> str:
        style = get_theme(theme).image_style
        return (
            f'Generate a high-quality 16:9 aspect ratio image for a {theme} presentation slide. '
            f'Style: {style}. Subject: {slide.image_subject}. '
            f'Make it visually stunning and perfectly aligned with the {theme} aesthetic.'
        )

    async def generate_slide_content(
        self, topic: str, slide_count: int, theme: str, description: Optional[str] = None
    ) -> List[GeneratedSlide]:
        """Ask the text model for the slides and parse its answer"""
        theme = get_theme(theme).name
        messages = [
            {'role': 'system', 'content': self._get_system_prompt(topic, slide_count, theme, bool(description))},
            {'role': 'user', 'content': self._get_user_prompt(topic, slide_count, theme, description)},
        ]

        logger.info(f'Generating {slide_count} {theme} slides about: {topic}')
        response = await self.ai_service.chat(messages)

        result = self.extractor.invoke(response)
        if not result.ok:
            logger.error(f'Failed to parse AI response ({result.error}): {result.raw_text[:500]}')
            raise SlideContentError('Failed to parse AI generated content')
        if not result.value:
            logger.error('AI response contained no slides')
            raise SlideContentError('AI generated no slides')

        try:
            return [GeneratedSlide.model_validate(item) for item in result.value]
        except ValidationError as e:
            logger.error(f'AI response had malformed slide entries: {str(e)}')
            raise SlideContentError('Failed to parse AI generated content') from e

    async def generate_slide_image(self, slide: GeneratedSlide, theme: str, slide_index: int) -> SlideImageResult:
        """One image request; any failure becomes an empty result"""
        theme = get_theme(theme).name
        try:
            logger.info(f'Generating {theme} themed image for slide {slide_index}: {slide.image_subject}')
            payload = await self.ai_service.generate_image(self._get_image_prompt(slide, theme))
            logger.info(f'Successfully generated image for slide {slide_index}')
            return SlideImageResult(slide_index=slide_index, payload=payload)
        except Exception as e:
            logger.warning(f'Failed to generate image for slide {slide_index}: {str(e)}')
            return SlideImageResult(slide_index=slide_index, error=str(e))

    async def generate_slide_images(self, slides: Sequence[GeneratedSlide], theme: str) -> List[SlideImageResult]:
        """Request every slide image concurrently and wait for all of them"""
        tasks = [self.generate_slide_image(slide, theme, index) for index, slide in enumerate(slides)]
        return list(await asyncio.gather(*tasks))
