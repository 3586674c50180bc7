"""
Tests for theme palette resolution
"""

import pytest

from slidewizard.models.themes import DEFAULT_THEME, THEMES, ThemeName, get_theme, is_known_theme, list_themes

HEX_FIELDS = ('bg1', 'bg2', 'bg3', 'title', 'text', 'accent', 'shadow')


class TestGetTheme:
    """Tests for get_theme."""

    @pytest.mark.parametrize('name', [t.value for t in ThemeName])
    def test_known_theme(self, name):
        """Every named theme resolves to itself."""
        assert get_theme(name).name == name

    def test_professional_palette(self):
        """The professional palette keeps its exact colors."""
        theme = get_theme('professional')
        assert theme.bg1 == '0F172A'
        assert theme.bg2 == 'FFFFFF'
        assert theme.accent == '3B82F6'

    @pytest.mark.parametrize('value', ['neon', '', None, 42])
    def test_unknown_falls_back_to_professional(self, value):
        """Unknown identifiers resolve to the default theme."""
        assert get_theme(value).name == DEFAULT_THEME == 'professional'

    def test_case_and_whitespace_insensitive(self):
        assert get_theme('  Creative ').name == 'creative'

    def test_enum_member(self):
        assert get_theme(ThemeName.BOLD).name == 'bold'


class TestThemeCatalog:
    """Tests for the theme catalog."""

    def test_five_themes_in_picker_order(self):
        assert [t.name for t in list_themes()] == ['professional', 'creative', 'minimal', 'bold', 'academic']

    @pytest.mark.parametrize('theme', list(THEMES.values()), ids=list(THEMES))
    def test_colors_are_hex_without_hash(self, theme):
        """Colors are six hex digits with no leading '#'."""
        for field in HEX_FIELDS:
            value = getattr(theme, field)
            assert len(value) == 6
            int(value, 16)

    @pytest.mark.parametrize('theme', list(THEMES.values()), ids=list(THEMES))
    def test_guidance_present(self, theme):
        assert theme.content_guidance
        assert theme.image_style
        assert theme.preview.bg.startswith('bg-')

    def test_is_known_theme(self):
        assert is_known_theme('minimal')
        assert is_known_theme('ACADEMIC')
        assert not is_known_theme('neon')
        assert not is_known_theme(None)

    def test_default_theme_shared_with_models(self):
        """Request and presentation models default to the palette module's theme."""
        from slidewizard.backend.db_models import PresentationBase, PresentationGenerateRequest

        assert PresentationGenerateRequest().theme == DEFAULT_THEME
        assert PresentationBase.model_fields['theme'].default == DEFAULT_THEME
