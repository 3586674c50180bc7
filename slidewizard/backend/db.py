from typing import List

from .airtable_client import airtable_client
from .db_models import (
    Presentation,
    PresentationCreate,
    PresentationUpdate,
    Slide,
    SlideCreate,
    SlideUpdate,
    UserCreate,
    UserInDB,
)


# Presentation operations
def get_presentation_by_id(presentation_id: str) -> Presentation | None:
    """Get a presentation by its ID"""
    return airtable_client.get_presentation_by_id(presentation_id)


def get_presentations_by_user_id(user_id: str) -> List[Presentation]:
    """Get a user's presentations, newest first"""
    return airtable_client.get_presentations_by_user_id(user_id)


def store_presentation(presentation: PresentationCreate, user_id: str) -> Presentation:
    """Insert a new presentation row"""
    return airtable_client.create_presentation(presentation, user_id)


def update_presentation_by_id(presentation_id: str, update: PresentationUpdate) -> Presentation | None:
    return airtable_client.update_presentation(presentation_id, update)


def delete_presentation_by_id(presentation_id: str) -> Presentation | None:
    """Delete a presentation with its slides and return the deleted presentation"""
    presentation = get_presentation_by_id(presentation_id)
    if presentation and airtable_client.delete_presentation(presentation_id):
        return presentation
    return None


# Slide operations
def store_slides(slides: List[SlideCreate]) -> List[Slide]:
    """Insert all slides of a presentation in one batch"""
    if not slides:
        return []
    return airtable_client.create_slides(slides)


def get_slide_by_id(slide_id: str) -> Slide | None:
    return airtable_client.get_slide_by_id(slide_id)


def get_slides_by_presentation_id(presentation_id: str) -> List[Slide]:
    """Get a presentation's slides ordered by slide index"""
    slides = airtable_client.get_slides_by_presentation_id(presentation_id)
    return sorted(slides, key=lambda s: s.slide_index)


def update_slide_by_id(slide_id: str, update: SlideUpdate) -> Slide | None:
    return airtable_client.update_slide(slide_id, update)


# User operations
def get_user_by_id(user_id: str) -> UserInDB | None:
    """Get a user by their ID"""
    return airtable_client.get_user_by_id(user_id)


def get_user_by_email(email: str) -> UserInDB | None:
    """Get a user by their email"""
    return airtable_client.get_user_by_email(email)


def store_user(user: UserCreate, hashed_password: str) -> UserInDB:
    """Store a new user in the database"""
    return airtable_client.create_user(user, hashed_password)


def email_exists(email: str) -> bool:
    """Check if a user with this email exists"""
    return get_user_by_email(email) is not None
