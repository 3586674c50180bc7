from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, field_validator

from slidewizard.models.themes import DEFAULT_THEME, is_known_theme


class PresentationBase(BaseModel):
    topic: str
    title: str
    theme: str = DEFAULT_THEME
    slide_count: int

    @field_validator('theme')
    def validate_theme(cls, v):
        return v if is_known_theme(v) else DEFAULT_THEME


class PresentationCreate(PresentationBase):
    pass


class PresentationUpdate(BaseModel):
    title: Optional[str] = None
    theme: Optional[str] = None

    @field_validator('theme')
    def validate_theme(cls, v):
        if v is not None and not is_known_theme(v):
            raise ValueError(f'Unknown theme: {v}')
        return v


class Presentation(PresentationBase):
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime


class SlideBase(BaseModel):
    presentation_id: str
    slide_index: int
    title: str
    content: str
    image_url: str = ''
    layout: str = 'title-content'


class SlideCreate(SlideBase):
    pass


class SlideUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None


class Slide(SlideBase):
    id: str


# Generation Models
class PresentationGenerateRequest(BaseModel):
    topic: Optional[str] = None
    description: Optional[str] = None
    slide_count: Optional[int] = None
    theme: str = DEFAULT_THEME


class PresentationGenerateResponse(BaseModel):
    presentation_id: str
    slides: List[Slide]


class PresentationWithSlides(Presentation):
    slides: List[Slide]


# User Models
class UserBase(BaseModel):
    email: EmailStr
    full_name: str
    is_active: bool = True


class UserCreate(UserBase):
    password: str


class User(UserBase):
    id: str
    created_at: datetime
    updated_at: datetime


class UserInDB(User):
    hashed_password: str


# Authentication Models
class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    email: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
