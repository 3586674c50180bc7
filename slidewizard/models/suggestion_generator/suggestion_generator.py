import logging
from typing import Optional

from pydantic import ValidationError

from ..utils.JsonExtractor import JsonExtractor
from ..utils.openrouter_client import OpenRouterService
from .types import SUGGESTION_COUNT, SlideSuggestion, SuggestionError, SuggestionResponse

logger = logging.getLogger(__name__)


class SuggestionGenerator:
    """Three alternative takes on one slide: more concise, more detailed, different angle"""

    system_prompt = """You are a professional presentation editor. Generate 3 alternative versions of a slide.
            Return a JSON object with:
            {
              "suggestions": [
                {
                  "title": "alternative title",
                  "content": "alternative content with bullets",
                  "imageQuery": "search term for alternative image",
                  "reason": "why this version is better"
                }
              ]
            }

            Make each suggestion unique: one more concise, one more detailed, one with different angle."""

    def __init__(self, ai_service: Optional[OpenRouterService] = None):
        self.ai_service = ai_service or OpenRouterService()
        self.extractor = JsonExtractor('object')

    def _get_user_prompt(self, title: str, content: str, topic: Optional[str]) -> str:
        return f"""Current slide:
Title: {title}
Content: {content}
Topic: {topic or "general"}

Generate 3 improved alternatives."""

    async def generate_suggestions(self, title: str, content: str, topic: Optional[str] = None) -> SuggestionResponse:
        logger.info(f'Generating AI suggestions for slide: "{title}"')
        response = await self.ai_service.analyze_text(self.system_prompt, self._get_user_prompt(title, content, topic))

        result = self.extractor.invoke(response)
        if not result.ok:
            logger.error(f'Failed to parse AI response ({result.error}): {result.raw_text[:500]}')
            raise SuggestionError('Failed to parse AI generated suggestions')

        raw_suggestions = result.value.get('suggestions')
        if not isinstance(raw_suggestions, list) or not raw_suggestions:
            logger.error(f'AI response had no suggestions: {result.raw_text[:500]}')
            raise SuggestionError('Failed to parse AI generated suggestions')

        try:
            suggestions = [SlideSuggestion.model_validate(item) for item in raw_suggestions[:SUGGESTION_COUNT]]
        except ValidationError as e:
            logger.error(f'AI response had malformed suggestions: {str(e)}')
            raise SuggestionError('Failed to parse AI generated suggestions') from e

        logger.info(f'Successfully generated {len(suggestions)} suggestions')
        return SuggestionResponse(suggestions=suggestions)
