from .themes import DEFAULT_THEME, THEMES, get_theme, is_known_theme, list_themes
from .types import PreviewClasses, ThemeDefinition, ThemeName

__all__ = [
    'DEFAULT_THEME',
    'THEMES',
    'PreviewClasses',
    'ThemeDefinition',
    'ThemeName',
    'get_theme',
    'is_known_theme',
    'list_themes',
]
