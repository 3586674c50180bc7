import logging
import os
from dataclasses import asdict
from datetime import timedelta
from urllib.parse import quote

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response

from slidewizard.models.deck_export import PPTX_MEDIA_TYPE
from slidewizard.models.suggestion_generator import SlideSuggestion, SuggestionRequest, SuggestionResponse
from slidewizard.models.themes import list_themes

from .auth import (
    SessionContext,
    authenticate_user,
    create_access_token,
    create_user,
    get_current_active_user,
    get_session_context,
)
from .config import ACCESS_TOKEN_EXPIRE_MINUTES, IMAGES_DIR, LOG_LEVEL, PROJECT_NAME
from .db_models import (
    LoginRequest,
    Presentation,
    PresentationGenerateRequest,
    PresentationGenerateResponse,
    PresentationUpdate,
    PresentationWithSlides,
    Slide,
    SlideUpdate,
    Token,
    User,
    UserCreate,
)
from .presentations import delete_presentation as delete_presentation_service
from .presentations import export_presentation as export_presentation_service
from .presentations import generate_presentation as generate_presentation_service
from .presentations import get_presentation_slides as get_presentation_slides_service
from .presentations import get_presentation_with_slides as get_presentation_with_slides_service
from .presentations import list_presentations as list_presentations_service
from .presentations import update_presentation as update_presentation_service
from .slides import apply_suggestion as apply_suggestion_service
from .slides import get_slide_image_path as get_slide_image_path_service
from .slides import suggest_edits as suggest_edits_service
from .slides import suggest_slide_edits as suggest_slide_edits_service
from .slides import update_slide as update_slide_service

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(title=PROJECT_NAME)

os.makedirs(IMAGES_DIR, exist_ok=True)

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


def _content_disposition(filename: str) -> str:
    fallback = filename.encode('ascii', 'ignore').decode('ascii').strip() or 'presentation.pptx'
    return f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(filename)}'


# Authentication
@app.post('/api/v1/auth/register', response_model=User)
async def register(user: UserCreate):
    """Register a new user"""
    return create_user(user)


@app.post('/api/v1/auth/login', response_model=Token)
async def login(login_data: LoginRequest):
    """Login user and return access token"""
    user = authenticate_user(login_data.email, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Incorrect email or password',
            headers={'WWW-Authenticate': 'Bearer'},
        )
    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(data={'sub': user.email}, expires_delta=access_token_expires)
    return {'access_token': access_token, 'token_type': 'bearer'}


@app.get('/api/v1/auth/me', response_model=User)
async def read_users_me(current_user: User = Depends(get_current_active_user)):
    """Get current authenticated user"""
    return current_user


@app.get('/api/v1/themes')
async def get_themes():
    """Themes available for new presentations"""
    return [asdict(theme) for theme in list_themes()]


# Presentations
@app.post('/api/v1/presentations/generate', response_model=PresentationGenerateResponse)
async def generate_presentation_endpoint(
    request: PresentationGenerateRequest, session: SessionContext = Depends(get_session_context)
):
    """Generate a new presentation from a topic"""
    try:
        return await generate_presentation_service(request, session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'Presentation generation endpoint error: {str(e)}')
        raise HTTPException(status_code=500, detail=f'Generation failed: {str(e)}')


@app.get('/api/v1/presentations/', response_model=list[Presentation])
async def get_all_presentations(current_user: User = Depends(get_current_active_user)):
    """Get the current user's presentations"""
    return list_presentations_service(current_user)


@app.get('/api/v1/presentations/{presentation_id}', response_model=PresentationWithSlides)
async def get_presentation_endpoint(presentation_id: str, current_user: User = Depends(get_current_active_user)):
    """Get a presentation with its slides"""
    presentation = get_presentation_with_slides_service(presentation_id, current_user)
    if not presentation:
        raise HTTPException(status_code=404, detail='Presentation not found')
    return presentation


@app.put('/api/v1/presentations/{presentation_id}', response_model=Presentation)
async def update_presentation_endpoint(
    presentation_id: str, presentation_update: PresentationUpdate, current_user: User = Depends(get_current_active_user)
):
    """Update an existing presentation"""
    updated_presentation = update_presentation_service(presentation_id, presentation_update, current_user)
    if not updated_presentation:
        raise HTTPException(status_code=404, detail='Presentation not found')
    return updated_presentation


@app.delete('/api/v1/presentations/{presentation_id}')
async def delete_presentation_endpoint(presentation_id: str, current_user: User = Depends(get_current_active_user)):
    """Delete a presentation and its slides"""
    deleted_presentation = delete_presentation_service(presentation_id, current_user)
    if not deleted_presentation:
        raise HTTPException(status_code=404, detail='Presentation not found')
    return {'message': f"Presentation '{deleted_presentation.title}' has been deleted successfully"}


@app.get('/api/v1/presentations/{presentation_id}/slides', response_model=list[Slide])
async def get_presentation_slides_endpoint(
    presentation_id: str, current_user: User = Depends(get_current_active_user)
):
    slides = get_presentation_slides_service(presentation_id, current_user)
    if slides is None:
        raise HTTPException(status_code=404, detail='Presentation not found')
    return slides


@app.get('/api/v1/presentations/{presentation_id}/export')
async def export_presentation_endpoint(presentation_id: str, current_user: User = Depends(get_current_active_user)):
    """Download the presentation as a .pptx file"""
    try:
        exported = await export_presentation_service(presentation_id, current_user)
    except Exception as e:
        logger.error(f'Export error: {str(e)}')
        raise HTTPException(status_code=500, detail=f'Export failed: {str(e)}')

    if exported is None:
        raise HTTPException(status_code=404, detail='Presentation not found')

    filename, content = exported
    return Response(
        content=content,
        media_type=PPTX_MEDIA_TYPE,
        headers={'Content-Disposition': _content_disposition(filename)},
    )


# Slides
@app.put('/api/v1/slides/{slide_id}', response_model=Slide)
async def update_slide_endpoint(
    slide_id: str, slide_update: SlideUpdate, current_user: User = Depends(get_current_active_user)
):
    """Edit a slide's title, content or image"""
    updated_slide = update_slide_service(slide_id, slide_update, current_user)
    if not updated_slide:
        raise HTTPException(status_code=404, detail='Slide not found')
    return updated_slide


@app.post('/api/v1/slides/suggestions', response_model=SuggestionResponse)
async def suggest_edits_endpoint(request: SuggestionRequest, current_user: User = Depends(get_current_active_user)):
    """Suggest alternatives for slide text that is not stored yet"""
    try:
        return await suggest_edits_service(request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'Suggestion error: {str(e)}')
        raise HTTPException(status_code=500, detail='Failed to generate suggestions')


@app.post('/api/v1/slides/{slide_id}/suggestions', response_model=SuggestionResponse)
async def suggest_slide_edits_endpoint(slide_id: str, current_user: User = Depends(get_current_active_user)):
    """Suggest alternative versions of a stored slide"""
    try:
        suggestions = await suggest_slide_edits_service(slide_id, current_user)
    except Exception as e:
        logger.error(f'Suggestion error for slide {slide_id}: {str(e)}')
        raise HTTPException(status_code=500, detail='Failed to generate suggestions')

    if suggestions is None:
        raise HTTPException(status_code=404, detail='Slide not found')
    return suggestions


@app.post('/api/v1/slides/{slide_id}/apply-suggestion', response_model=Slide)
async def apply_suggestion_endpoint(
    slide_id: str, suggestion: SlideSuggestion, current_user: User = Depends(get_current_active_user)
):
    """Replace a slide with one of its suggestions"""
    updated_slide = apply_suggestion_service(slide_id, suggestion, current_user)
    if not updated_slide:
        raise HTTPException(status_code=404, detail='Slide not found')
    return updated_slide


@app.get('/api/v1/slides/{slide_id}/image')
async def get_slide_image(slide_id: str, current_user: User = Depends(get_current_active_user)):
    """Serve a generated slide image stored on this server"""
    image_path = get_slide_image_path_service(slide_id, current_user)
    if not image_path:
        raise HTTPException(status_code=404, detail='Image not found')
    return FileResponse(path=image_path)
