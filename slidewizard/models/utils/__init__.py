from .JsonExtractor import ExtractionResult, JsonExtractionError, JsonExtractor, extract_json
from .openrouter_client import AIServiceError, OpenRouterService

__all__ = [
    'AIServiceError',
    'ExtractionResult',
    'JsonExtractionError',
    'JsonExtractor',
    'OpenRouterService',
    'extract_json',
]
