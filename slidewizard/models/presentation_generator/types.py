"""
Type definitions for presentation generator module
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..deck_export.bullets import join_bullets


class SlideContentError(Exception):
    """Generated slide content could not be extracted or understood"""


class GeneratedSlide(BaseModel):
    """One slide as drafted by the text model"""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ''
    content: str = ''
    image_query: Optional[str] = Field(None, alias='imageQuery')

    @field_validator('title', 'content', mode='before')
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ''
        # some models answer with a list of bullets instead of one string
        if isinstance(v, list):
            return join_bullets(str(item) for item in v)
        return str(v)

    @property
    def image_subject(self) -> str:
        return (self.image_query or '').strip() or self.title


@dataclass
class SlideImageResult:
    """Outcome of one image request; an empty payload means no image"""

    slide_index: int
    payload: str = ''
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.payload)
