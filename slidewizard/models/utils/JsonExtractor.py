import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from langchain_core.runnables import Runnable, RunnableConfig


class JsonExtractionError(ValueError):
    """Model output did not contain usable JSON"""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


@dataclass
class ExtractionResult:
    """Either a parsed value or the raw text that could not be parsed"""

    raw_text: str
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise JsonExtractionError(self.error, self.raw_text)
        return self.value


class JsonExtractor(Runnable):
    """Pulls a JSON array or object out of free-form model output.

    Candidates are tried in order: the body of a fenced code block (any
    language tag), the span from the first opening bracket to the last
    closing one, then the whole text. The first one that parses to the
    expected shape wins.
    """

    fenced_pattern = re.compile(r'```[ \t]*(?:[\w-]+)?[ \t]*\n?([\s\S]*?)\s*```', re.I)
    bracket_patterns = {
        'array': re.compile(r'\[[\s\S]*\]'),
        'object': re.compile(r'\{[\s\S]*\}'),
    }

    def __init__(self, shape: str = 'array'):
        if shape not in JsonExtractor.bracket_patterns:
            raise ValueError(f'Unsupported JSON shape: {shape}')
        self.shape = shape

    def _candidates(self, text: str) -> List[str]:
        candidates = []
        fenced = JsonExtractor.fenced_pattern.search(text)
        if fenced:
            candidates.append(fenced.group(1).strip())

        bracketed = JsonExtractor.bracket_patterns[self.shape].search(text)
        if bracketed:
            candidates.append(bracketed.group(0).strip())

        candidates.append(text.strip())
        return list(dict.fromkeys(c for c in candidates if c))

    def _parse(self, candidate: str) -> Tuple[Any, Optional[str]]:
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError as e:
            return None, f'Invalid JSON in model response: {e}'

        expected = list if self.shape == 'array' else dict
        if not isinstance(value, expected):
            return None, f'Expected a JSON {self.shape}, got {type(value).__name__}'
        return value, None

    def invoke(self, input: str, config: Optional[RunnableConfig] = None, **kwargs: Any) -> ExtractionResult:
        if not isinstance(input, str) or not input.strip():
            return ExtractionResult(raw_text=input or '', error='Empty model response')

        first_error = None
        for candidate in self._candidates(input):
            value, error = self._parse(candidate)
            if error is None:
                return ExtractionResult(raw_text=input, value=value)
            first_error = first_error or error

        return ExtractionResult(raw_text=input, error=first_error)


def extract_json(text: str, shape: str = 'array') -> ExtractionResult:
    return JsonExtractor(shape).invoke(text)
