import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(
    r'^data:(?P<mime>[\w/+.-]+)?(?P<params>(;[\w-]+=[^;,]*)*)(?P<b64>;base64)?,(?P<data>.*)$',
    re.S,
)


class ImageLoadError(Exception):
    pass


class ImageLoader:
    """Resolves a slide image reference to raw bytes.

    Accepts data URLs, http(s) URLs and files stored under ``local_root``.
    """

    def __init__(self, local_root: Optional[str] = None, timeout: float = 30.0):
        self.local_root = Path(local_root).resolve() if local_root else None
        self.timeout = timeout

    def load(self, source: str) -> bytes:
        if not source:
            raise ImageLoadError('Empty image reference')
        if source.startswith('data:'):
            return self._decode_data_url(source)
        if source.startswith(('http://', 'https://')):
            return self._fetch(source)
        return self._read_local(source)

    def _decode_data_url(self, source: str) -> bytes:
        match = DATA_URL_PATTERN.match(source)
        if not match or not match.group('b64'):
            raise ImageLoadError('Unsupported data URL')
        try:
            return base64.b64decode(match.group('data'), validate=False)
        except (binascii.Error, ValueError) as e:
            raise ImageLoadError(f'Invalid base64 image data: {e}') from e

    def _fetch(self, url: str) -> bytes:
        try:
            response = httpx.get(url, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ImageLoadError(f'Could not download image {url}: {e}') from e
        if not response.content:
            raise ImageLoadError(f'Image download returned no data: {url}')
        return response.content

    def _read_local(self, source: str) -> bytes:
        if self.local_root is None:
            raise ImageLoadError(f'Local image references are not enabled: {source}')
        path = Path(source)
        if not path.is_absolute():
            path = Path.cwd() / path
        path = path.resolve()
        if self.local_root not in path.parents:
            raise ImageLoadError(f'Image path outside of image storage: {source}')
        if not path.is_file():
            raise ImageLoadError(f'Image file not found: {source}')
        return path.read_bytes()
