"""
Tests for presentation and slide services
"""

import base64
from io import BytesIO
from pathlib import Path

import pytest
from fastapi import HTTPException
from pptx import Presentation as PptxPresentation
from pptx.enum.shapes import MSO_SHAPE_TYPE

from slidewizard.backend import presentations, slides as slide_services
from slidewizard.backend.config import IMAGES_DIR
from slidewizard.backend.db_models import PresentationUpdate, SlideUpdate
from slidewizard.backend.images import store_image_payload
from slidewizard.models.deck_export import DeckAssembler, ImageLoader
from slidewizard.models.suggestion_generator import SlideSuggestion, SuggestionRequest, SuggestionResponse


class FakeDB:
    """In-memory rows behind the db helpers used by the services"""

    def __init__(self, presentation, slides):
        self.presentations = {presentation.id: presentation}
        self.slides = {s.id: s for s in slides}
        self.deleted = []

    def get_presentation_by_id(self, presentation_id):
        return self.presentations.get(presentation_id)

    def get_presentations_by_user_id(self, user_id):
        return [p for p in self.presentations.values() if p.user_id == user_id]

    def get_slides_by_presentation_id(self, presentation_id):
        rows = [s for s in self.slides.values() if s.presentation_id == presentation_id]
        return sorted(rows, key=lambda s: s.slide_index)

    def update_presentation_by_id(self, presentation_id, update):
        presentation = self.presentations[presentation_id]
        updated = presentation.model_copy(update=update.model_dump(exclude_unset=True))
        self.presentations[presentation_id] = updated
        return updated

    def delete_presentation_by_id(self, presentation_id):
        self.deleted.append(presentation_id)
        for slide_id in [s.id for s in self.slides.values() if s.presentation_id == presentation_id]:
            del self.slides[slide_id]
        return self.presentations.pop(presentation_id, None)

    def get_slide_by_id(self, slide_id):
        return self.slides.get(slide_id)

    def update_slide_by_id(self, slide_id, update):
        updated = self.slides[slide_id].model_copy(update=update.model_dump(exclude_unset=True))
        self.slides[slide_id] = updated
        return updated


@pytest.fixture
def db(monkeypatch, presentation, slides):
    fake = FakeDB(presentation, slides)
    for name in (
        'get_presentation_by_id',
        'get_presentations_by_user_id',
        'get_slides_by_presentation_id',
        'update_presentation_by_id',
        'delete_presentation_by_id',
    ):
        monkeypatch.setattr(presentations, name, getattr(fake, name))
    for name in ('get_presentation_by_id', 'get_slide_by_id', 'update_slide_by_id'):
        monkeypatch.setattr(slide_services, name, getattr(fake, name))
    return fake


class FakeSuggestionGenerator:
    def __init__(self):
        self.calls = []

    async def generate_suggestions(self, title, content, topic=None):
        self.calls.append((title, content, topic))
        return SuggestionResponse(suggestions=[SlideSuggestion(title='Better', content='• Sharper')])


class TestPresentationServices:
    """Tests for presentation CRUD and ownership."""

    def test_get_own_presentation(self, db, user):
        assert presentations.get_presentation('pres-1', user).id == 'pres-1'

    def test_other_users_presentation_hidden(self, db, other_user):
        assert presentations.get_presentation('pres-1', other_user) is None
        assert presentations.get_presentation_slides('pres-1', other_user) is None
        assert presentations.update_presentation('pres-1', PresentationUpdate(title='x'), other_user) is None
        assert presentations.delete_presentation('pres-1', other_user) is None
        assert db.deleted == []

    def test_missing_presentation(self, db, user):
        assert presentations.get_presentation('nope', user) is None

    def test_list(self, db, user, other_user):
        assert [p.id for p in presentations.list_presentations(user)] == ['pres-1']
        assert presentations.list_presentations(other_user) == []

    def test_with_slides(self, db, user):
        result = presentations.get_presentation_with_slides('pres-1', user)
        assert [s.slide_index for s in result.slides] == [0, 1, 2]

    def test_update(self, db, user):
        updated = presentations.update_presentation('pres-1', PresentationUpdate(theme='minimal'), user)
        assert updated.theme == 'minimal'
        assert updated.title == 'Renewable Energy'

    def test_update_rejects_unknown_theme(self):
        with pytest.raises(ValueError):
            PresentationUpdate(theme='neon')

    def test_delete_removes_slides_and_images(self, db, user, temp_dir, png_bytes):
        image_dir = temp_dir / 'pres-1'
        image_dir.mkdir()
        (image_dir / 'slide_0.png').write_bytes(png_bytes)

        deleted = presentations.delete_presentation('pres-1', user, images_dir=str(temp_dir))

        assert deleted.id == 'pres-1'
        assert db.slides == {}
        assert not image_dir.exists()

    @pytest.mark.asyncio
    async def test_export(self, db, user, monkeypatch):
        monkeypatch.setattr(presentations, 'deck_assembler', DeckAssembler(rng=lambda: 0.0))
        filename, content = await presentations.export_presentation('pres-1', user)

        assert filename == 'Renewable Energy.pptx'
        assert len(PptxPresentation(BytesIO(content)).slides) == 5

    @pytest.mark.asyncio
    async def test_export_renders_stored_image(self, db, user, monkeypatch, temp_dir, png_bytes):
        """An inline image written by the generation flow shows up in the exported deck."""
        data_url = 'data:image/png;base64,' + base64.b64encode(png_bytes).decode('ascii')
        stored_path = store_image_payload('pres-1', 0, data_url, images_dir=str(temp_dir))
        db.slides['slide-0'] = db.slides['slide-0'].model_copy(update={'image_url': stored_path})
        assembler = DeckAssembler(image_loader=ImageLoader(local_root=str(temp_dir)), rng=lambda: 0.9)
        monkeypatch.setattr(presentations, 'deck_assembler', assembler)

        _, content = await presentations.export_presentation('pres-1', user)
        rendered = list(PptxPresentation(BytesIO(content)).slides)

        pictures = [[s for s in slide.shapes if s.shape_type == MSO_SHAPE_TYPE.PICTURE] for slide in rendered]
        assert [len(p) for p in pictures] == [1, 1, 0, 0, 0]
        assert pictures[1][0].image.blob == png_bytes

    def test_export_reads_images_from_storage_dir(self):
        assert presentations.deck_assembler.image_loader.local_root == Path(IMAGES_DIR).resolve()

    @pytest.mark.asyncio
    async def test_export_not_owned(self, db, other_user):
        assert await presentations.export_presentation('pres-1', other_user) is None


class TestSlideServices:
    """Tests for slide edits and suggestions."""

    def test_update_slide(self, db, user):
        updated = slide_services.update_slide('slide-1', SlideUpdate(title='Edited'), user)
        assert updated.title == 'Edited'
        assert updated.content == db.slides['slide-1'].content

    def test_update_slide_not_owned(self, db, other_user):
        assert slide_services.update_slide('slide-1', SlideUpdate(title='Edited'), other_user) is None
        assert db.slides['slide-1'].title == 'Slide 1'

    @pytest.mark.asyncio
    async def test_suggest_uses_presentation_topic(self, db, user, monkeypatch):
        generator = FakeSuggestionGenerator()
        monkeypatch.setattr(slide_services, 'suggestion_generator', generator)

        response = await slide_services.suggest_slide_edits('slide-2', user)

        assert response.suggestions[0].title == 'Better'
        assert generator.calls == [('Slide 2', '• First point\n• Second **bold** point', 'Renewable Energy')]

    @pytest.mark.asyncio
    async def test_suggest_missing_slide(self, db, user, monkeypatch):
        generator = FakeSuggestionGenerator()
        monkeypatch.setattr(slide_services, 'suggestion_generator', generator)
        assert await slide_services.suggest_slide_edits('nope', user) is None
        assert generator.calls == []

    def test_apply_suggestion_with_image_query(self, db, user):
        suggestion = SlideSuggestion(title='New', content='• New body', imageQuery='wind farm')
        updated = slide_services.apply_suggestion('slide-0', suggestion, user)

        assert updated.title == 'New'
        assert updated.content == '• New body'
        assert updated.image_url == 'https://source.unsplash.com/800x450/?wind%20farm'

    def test_apply_suggestion_keeps_image_without_query(self, db, user):
        db.slides['slide-0'] = db.slides['slide-0'].model_copy(update={'image_url': 'http://img/0.png'})
        updated = slide_services.apply_suggestion('slide-0', SlideSuggestion(title='New', content='x'), user)
        assert updated.image_url == 'http://img/0.png'

    def test_slide_image_path(self, db, user, temp_dir, png_bytes):
        path = temp_dir / 'pres-1' / 'slide_0.png'
        path.parent.mkdir()
        path.write_bytes(png_bytes)
        db.slides['slide-0'] = db.slides['slide-0'].model_copy(update={'image_url': str(path)})

        assert slide_services.get_slide_image_path('slide-0', user, images_dir=str(temp_dir)) == str(path)
        assert slide_services.get_slide_image_path('slide-1', user, images_dir=str(temp_dir)) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize('title,content', [('', 'body'), ('Title', '   '), (None, None)])
    async def test_unsaved_suggestions_require_title_and_content(self, monkeypatch, title, content):
        generator = FakeSuggestionGenerator()
        monkeypatch.setattr(slide_services, 'suggestion_generator', generator)

        with pytest.raises(HTTPException) as exc_info:
            await slide_services.suggest_edits(SuggestionRequest(title=title, content=content))
        assert exc_info.value.status_code == 400
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_unsaved_suggestions(self, monkeypatch):
        generator = FakeSuggestionGenerator()
        monkeypatch.setattr(slide_services, 'suggestion_generator', generator)

        response = await slide_services.suggest_edits(SuggestionRequest(title=' Draft ', content='• idea'))
        assert response.suggestions[0].title == 'Better'
        assert generator.calls == [('Draft', '• idea', None)]
