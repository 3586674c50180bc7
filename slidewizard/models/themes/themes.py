from typing import List

from .types import PreviewClasses, ThemeDefinition, ThemeName

DEFAULT_THEME = ThemeName.PROFESSIONAL.value

THEMES = {
    ThemeName.PROFESSIONAL.value: ThemeDefinition(
        name='professional',
        label='Professional - Clean and corporate',
        bg1='0F172A',
        bg2='FFFFFF',
        bg3='E0E7FF',
        title='0F172A',
        text='1E293B',
        accent='3B82F6',
        shadow='94A3B8',
        preview=PreviewClasses(
            bg='bg-gradient-to-br from-slate-50 to-slate-100',
            text='text-slate-900',
            accent='text-blue-700',
            border='border-slate-300',
        ),
        content_guidance=(
            'Clean, corporate style with formal language and structured bullet points. '
            'Use business-appropriate imagery.'
        ),
        image_style='Corporate, clean, professional stock photo style with muted colors and business aesthetic',
    ),
    ThemeName.CREATIVE.value: ThemeDefinition(
        name='creative',
        label='Creative - Vibrant and artistic',
        bg1='581C87',
        bg2='FFFFFF',
        bg3='F3E8FF',
        title='581C87',
        text='6B21A8',
        accent='A855F7',
        shadow='C084FC',
        preview=PreviewClasses(
            bg='bg-gradient-to-br from-purple-50 to-pink-50',
            text='text-purple-900',
            accent='text-pink-600',
            border='border-purple-300',
        ),
        content_guidance=(
            'Vibrant, artistic style with engaging language and colorful imagery. Be innovative and eye-catching.'
        ),
        image_style='Vibrant, artistic, colorful and imaginative visual with creative composition',
    ),
    ThemeName.MINIMAL.value: ThemeDefinition(
        name='minimal',
        label='Minimal - Simple and elegant',
        bg1='1F2937',
        bg2='FFFFFF',
        bg3='F3F4F6',
        title='111827',
        text='374151',
        accent='6B7280',
        shadow='9CA3AF',
        preview=PreviewClasses(
            bg='bg-white',
            text='text-gray-900',
            accent='text-gray-700',
            border='border-gray-200',
        ),
        content_guidance=(
            'Simple, elegant style with concise text and clean imagery. Focus on clarity and whitespace.'
        ),
        image_style='Minimal, clean, simple composition with lots of whitespace and subtle colors',
    ),
    ThemeName.BOLD.value: ThemeDefinition(
        name='bold',
        label='Bold - Strong and impactful',
        bg1='7F1D1D',
        bg2='FFFFFF',
        bg3='FEE2E2',
        title='7F1D1D',
        text='991B1B',
        accent='EF4444',
        shadow='FCA5A5',
        preview=PreviewClasses(
            bg='bg-gradient-to-br from-orange-100 to-red-100',
            text='text-red-900',
            accent='text-orange-700',
            border='border-red-300',
        ),
        content_guidance=(
            'Strong, impactful style with powerful statements and striking imagery. Use assertive language.'
        ),
        image_style='Strong, dramatic, high-contrast visual with bold colors and striking composition',
    ),
    ThemeName.ACADEMIC.value: ThemeDefinition(
        name='academic',
        label='Academic - Educational and formal',
        bg1='1E3A8A',
        bg2='FFFFFF',
        bg3='DBEAFE',
        title='1E3A8A',
        text='1E40AF',
        accent='3B82F6',
        shadow='93C5FD',
        preview=PreviewClasses(
            bg='bg-gradient-to-br from-blue-50 to-indigo-50',
            text='text-indigo-900',
            accent='text-blue-800',
            border='border-indigo-300',
        ),
        content_guidance=(
            'Educational, formal style with detailed explanations and scholarly imagery. '
            'Be informative and precise.'
        ),
        image_style='Educational, informative, scholarly illustration style with clear visual hierarchy',
    ),
}


def get_theme(theme_id: str | None) -> ThemeDefinition:
    """Resolve a theme identifier, falling back to the professional theme"""
    if isinstance(theme_id, ThemeName):
        theme_id = theme_id.value
    if not isinstance(theme_id, str):
        return THEMES[DEFAULT_THEME]
    return THEMES.get(theme_id.strip().lower(), THEMES[DEFAULT_THEME])


def is_known_theme(theme_id: str | None) -> bool:
    return isinstance(theme_id, str) and theme_id.strip().lower() in THEMES


def list_themes() -> List[ThemeDefinition]:
    """Return every theme in picker order"""
    return list(THEMES.values())
