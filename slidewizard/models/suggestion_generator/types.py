from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

SUGGESTION_COUNT = 3


class SuggestionError(Exception):
    """Suggestions could not be extracted from the model answer"""


class SlideSuggestion(BaseModel):
    """One alternative version of a slide"""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    content: str
    image_query: Optional[str] = Field(None, alias='imageQuery')
    reason: Optional[str] = None


class SuggestionRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    topic: Optional[str] = None


class SuggestionResponse(BaseModel):
    suggestions: List[SlideSuggestion]
