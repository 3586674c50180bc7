"""
Pytest configuration and shared fixtures
"""

import base64
import os
from datetime import datetime
from pathlib import Path
from typing import Generator
import tempfile

# config refuses to import without these; set them before any slidewizard.backend import
os.environ.setdefault('AIRTABLE_API_KEY', 'test-airtable-key')
os.environ.setdefault('AIRTABLE_BASE_ID', 'appTestBase')
os.environ.setdefault('OPENROUTER_API_KEY', 'test-openrouter-key')
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest

from slidewizard.backend.db_models import Presentation, Slide, User

# 1x1 PNG
PNG_BYTES = base64.b64decode(
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=='
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def user() -> User:
    now = datetime(2025, 1, 1, 12, 0, 0)
    return User(id='user-1', email='ada@example.com', full_name='Ada Lovelace', created_at=now, updated_at=now)


@pytest.fixture
def other_user() -> User:
    now = datetime(2025, 1, 1, 12, 0, 0)
    return User(id='user-2', email='bob@example.com', full_name='Bob', created_at=now, updated_at=now)


@pytest.fixture
def presentation(user: User) -> Presentation:
    now = datetime(2025, 1, 2, 9, 30, 0)
    return Presentation(
        id='pres-1',
        user_id=user.id,
        topic='Renewable Energy',
        title='Renewable Energy',
        theme='professional',
        slide_count=3,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def slides() -> list[Slide]:
    return [
        Slide(
            id=f'slide-{i}',
            presentation_id='pres-1',
            slide_index=i,
            title=f'Slide {i}',
            content='• First point\n• Second **bold** point',
            image_url='',
        )
        for i in range(3)
    ]
