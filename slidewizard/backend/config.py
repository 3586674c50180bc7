import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_NAME: str = 'slidewizard'
LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO').upper()

AIRTABLE_API_KEY: str = os.getenv('AIRTABLE_API_KEY', '')
AIRTABLE_BASE_ID: str = os.getenv('AIRTABLE_BASE_ID', '')

AIRTABLE_TABLES = {
    'users': 'Users',
    'presentations': 'Presentations',
    'slides': 'Slides',
}

OPENROUTER_API_KEY: str = os.getenv('OPENROUTER_API_KEY', '')
OPENROUTER_BASE_URL: str = os.getenv('OPENROUTER_BASE_URL', 'https://openrouter.ai/api/v1')
TEXT_MODEL: str = os.getenv('TEXT_MODEL', 'google/gemini-2.5-flash')
IMAGE_MODEL: str = os.getenv('IMAGE_MODEL', 'google/gemini-2.5-flash-image-preview')

SECRET_KEY: str = os.getenv('SECRET_KEY', 'your-secret-key-change-in-production')
ALGORITHM: str = 'HS256'
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', '30'))

UPLOAD_DIR: str = os.getenv('UPLOAD_DIR', 'uploads')
IMAGES_DIR: str = os.path.join(UPLOAD_DIR, 'images')

ALLOWED_SLIDE_COUNTS = (3, 5, 7, 10, 15, 20)
SLIDE_LAYOUT = 'title-content'
SUGGESTION_IMAGE_URL = 'https://source.unsplash.com/800x450/?{query}'

if not AIRTABLE_API_KEY or not AIRTABLE_BASE_ID:
    raise ValueError('AIRTABLE_API_KEY and AIRTABLE_BASE_ID must be set in the .env file')
