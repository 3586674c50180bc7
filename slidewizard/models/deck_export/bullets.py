import re
from typing import Iterable, List, Union

BULLET_CHAR = '•'
_SEPARATORS = re.compile(r'[•\n]')


def normalize_bullets(content: Union[str, Iterable[str], None]) -> List[str]:
    """Split slide content into clean bullet lines.

    Either the bullet character or a line break separates items; bold
    markup is dropped and blank items are discarded.
    """
    if content is None:
        return []
    if not isinstance(content, str):
        content = '\n'.join(str(item) for item in content)

    bullets = []
    for part in _SEPARATORS.split(content):
        line = part.replace('**', '').strip()
        if line:
            bullets.append(line)
    return bullets


def join_bullets(bullets: Iterable[str]) -> str:
    """Bullet lines back to stored content, one `• ` item per line"""
    return '\n'.join(f'{BULLET_CHAR} {b}' for b in normalize_bullets(list(bullets)))
