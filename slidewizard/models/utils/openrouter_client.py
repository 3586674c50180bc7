import logging
import os
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://openrouter.ai/api/v1'
DEFAULT_TEXT_MODEL = 'google/gemini-2.5-flash'
DEFAULT_IMAGE_MODEL = 'google/gemini-2.5-flash-image-preview'


class AIServiceError(Exception):
    """The remote generation service failed or answered with something unusable"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OpenRouterService:
    """Chat-completions client used for both text and image generation.

    Calls are made once; a failed call is reported to the caller as
    AIServiceError and never retried here.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        image_model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
    ):
        self.model = model or os.getenv('TEXT_MODEL', DEFAULT_TEXT_MODEL)
        self.image_model = image_model or os.getenv('IMAGE_MODEL', DEFAULT_IMAGE_MODEL)
        self.api_key = api_key or os.getenv('OPENROUTER_API_KEY')
        if not self.api_key:
            raise ValueError('OPENROUTER_API_KEY environment variable is required')

        self.base_url = (base_url or os.getenv('OPENROUTER_BASE_URL', DEFAULT_BASE_URL)).rstrip('/')
        self.timeout = timeout
        self.headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
            'X-Title': 'SlideWizard',
        }

    async def _post_completion(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f'{self.base_url}/chat/completions', headers=self.headers, json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f'AI gateway HTTP error {e.response.status_code}: {e.response.text[:500]}')
            raise AIServiceError(f'AI generation failed: {e.response.status_code}', e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f'AI gateway request failed: {str(e)}')
            raise AIServiceError(f'AI service error: {str(e)}') from e

    async def chat(self, messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
        """Send role-tagged messages and return the assistant text"""
        payload = {'model': model or self.model, 'messages': messages}
        data = await self._post_completion(payload)
        try:
            content = data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError) as e:
            raise AIServiceError('AI response had no message content') from e
        if not isinstance(content, str):
            raise AIServiceError('AI response had no message content')
        return content

    async def analyze_text(self, prompt: str, text: str) -> str:
        """System prompt plus user text, the common two-message case"""
        return await self.chat([{'role': 'system', 'content': prompt}, {'role': 'user', 'content': text}])

    async def generate_image(self, prompt: str, model: Optional[str] = None) -> str:
        """Return the first generated image as a URL or data URL"""
        payload = {
            'model': model or self.image_model,
            'messages': [{'role': 'user', 'content': prompt}],
            'modalities': ['image', 'text'],
        }
        data = await self._post_completion(payload)
        try:
            image_url = data['choices'][0]['message']['images'][0]['image_url']['url']
        except (KeyError, IndexError, TypeError) as e:
            raise AIServiceError('AI response contained no image') from e
        if not isinstance(image_url, str) or not image_url:
            raise AIServiceError('AI response contained no image')
        return image_url
