from .suggestion_generator import SuggestionGenerator
from .types import SUGGESTION_COUNT, SlideSuggestion, SuggestionError, SuggestionRequest, SuggestionResponse

__all__ = [
    'SUGGESTION_COUNT',
    'SlideSuggestion',
    'SuggestionError',
    'SuggestionGenerator',
    'SuggestionRequest',
    'SuggestionResponse',
]
