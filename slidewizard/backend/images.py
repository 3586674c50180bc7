import base64
import binascii
import logging
import os

from slidewizard.models.deck_export.image_loader import DATA_URL_PATTERN

from .config import IMAGES_DIR

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    'image/png': 'png',
    'image/jpeg': 'jpg',
    'image/jpg': 'jpg',
    'image/webp': 'webp',
    'image/gif': 'gif',
}


def store_image_payload(presentation_id: str, slide_index: int, payload: str, images_dir: str = IMAGES_DIR) -> str:
    """Persist a generated image and return the reference stored on the slide.

    Remote URLs are kept as they are; inline data URLs are written under
    ``images_dir`` because they are too large for a table cell.
    """
    if payload.startswith(('http://', 'https://')):
        return payload

    match = DATA_URL_PATTERN.match(payload)
    if not match or not match.group('b64'):
        raise ValueError('Unsupported image payload')

    extension = IMAGE_EXTENSIONS.get((match.group('mime') or '').lower(), 'png')
    try:
        image_bytes = base64.b64decode(match.group('data'), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f'Invalid base64 image payload: {e}') from e
    if not image_bytes:
        raise ValueError('Empty image payload')

    presentation_dir = os.path.join(images_dir, presentation_id)
    os.makedirs(presentation_dir, exist_ok=True)
    file_path = os.path.join(presentation_dir, f'slide_{slide_index}.{extension}')
    with open(file_path, 'wb') as f:
        f.write(image_bytes)

    logger.info(f'Stored image for slide {slide_index} at {file_path} ({len(image_bytes)} bytes)')
    return file_path


def is_stored_image(reference: str, images_dir: str = IMAGES_DIR) -> bool:
    """True when the reference points at a file written by store_image_payload"""
    if not reference or reference.startswith(('http://', 'https://', 'data:')):
        return False
    root = os.path.realpath(images_dir)
    path = os.path.realpath(reference)
    return path.startswith(root + os.sep) and os.path.isfile(path)
