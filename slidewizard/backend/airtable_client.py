import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pyairtable import Api
from pyairtable.formulas import match

from .config import AIRTABLE_API_KEY, AIRTABLE_BASE_ID, AIRTABLE_TABLES
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

logger = logging.getLogger(__name__)


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


def _parse_datetime(value: Optional[str]) -> datetime:
    return datetime.fromisoformat(value) if value else datetime.now()


class AirtableClient:
    def __init__(self):
        self.api = Api(AIRTABLE_API_KEY)
        self.base = self.api.base(AIRTABLE_BASE_ID)

        self.users_table = self.base.table(AIRTABLE_TABLES['users'])
        self.presentations_table = self.base.table(AIRTABLE_TABLES['presentations'])
        self.slides_table = self.base.table(AIRTABLE_TABLES['slides'])

    def _user_from_airtable(self, record: Dict[str, Any]) -> UserInDB:
        fields = record['fields']
        return UserInDB(
            id=fields.get('id', ''),
            email=fields.get('email', ''),
            full_name=fields.get('full_name', ''),
            hashed_password=fields.get('hashed_password', ''),
            is_active=fields.get('is_active', True),
            created_at=_parse_datetime(fields.get('created_at')),
            updated_at=_parse_datetime(fields.get('updated_at')),
        )

    def _prepare_presentation_for_airtable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        keys = ('id', 'user_id', 'topic', 'title', 'theme', 'slide_count', 'created_at', 'updated_at')
        return {key: _iso(data[key]) for key in keys if key in data}

    def _presentation_from_airtable(self, record: Dict[str, Any]) -> Presentation:
        fields = record['fields']
        return Presentation(
            id=fields.get('id', ''),
            user_id=fields.get('user_id', ''),
            topic=fields.get('topic', ''),
            title=fields.get('title', ''),
            theme=fields.get('theme', 'professional'),
            slide_count=int(fields.get('slide_count', 0)),
            created_at=_parse_datetime(fields.get('created_at')),
            updated_at=_parse_datetime(fields.get('updated_at')),
        )

    def _prepare_slide_for_airtable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        keys = ('id', 'presentation_id', 'slide_index', 'title', 'content', 'image_url', 'layout')
        return {key: data[key] for key in keys if key in data}

    def _slide_from_airtable(self, record: Dict[str, Any]) -> Slide:
        fields = record['fields']
        return Slide(
            id=fields.get('id', ''),
            presentation_id=fields.get('presentation_id', ''),
            slide_index=int(fields.get('slide_index', 0)),
            title=fields.get('title', ''),
            content=fields.get('content', ''),
            image_url=fields.get('image_url') or '',
            layout=fields.get('layout', 'title-content'),
        )

    def _find_one(self, table, **criteria) -> Optional[Dict[str, Any]]:
        records = table.all(formula=match(criteria), max_records=1)
        return records[0] if records else None

    # Users
    def create_user(self, user_create: UserCreate, hashed_password: str, user_id: Optional[str] = None) -> UserInDB:
        now = datetime.now()
        user_data = {
            'id': user_id or str(uuid.uuid4()),
            'email': user_create.email,
            'full_name': user_create.full_name,
            'hashed_password': hashed_password,
            'is_active': user_create.is_active,
            'created_at': now.isoformat(),
            'updated_at': now.isoformat(),
        }
        record = self.users_table.create(user_data, typecast=True)
        return self._user_from_airtable(record)

    def get_user_by_id(self, user_id: str) -> Optional[UserInDB]:
        record = self._find_one(self.users_table, id=user_id)
        return self._user_from_airtable(record) if record else None

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        record = self._find_one(self.users_table, email=email)
        return self._user_from_airtable(record) if record else None

    # Presentations
    def create_presentation(
        self, presentation_create: PresentationCreate, user_id: str, presentation_id: Optional[str] = None
    ) -> Presentation:
        now = datetime.now()
        data = presentation_create.model_dump()
        data.update(
            {'id': presentation_id or str(uuid.uuid4()), 'user_id': user_id, 'created_at': now, 'updated_at': now}
        )
        record = self.presentations_table.create(self._prepare_presentation_for_airtable(data), typecast=True)
        return self._presentation_from_airtable(record)

    def get_presentation_by_id(self, presentation_id: str) -> Optional[Presentation]:
        record = self._find_one(self.presentations_table, id=presentation_id)
        return self._presentation_from_airtable(record) if record else None

    def get_presentations_by_user_id(self, user_id: str) -> List[Presentation]:
        records = self.presentations_table.all(formula=match({'user_id': user_id}), sort=['-created_at'])
        return [self._presentation_from_airtable(record) for record in records]

    def update_presentation(
        self, presentation_id: str, presentation_update: PresentationUpdate
    ) -> Optional[Presentation]:
        record = self._find_one(self.presentations_table, id=presentation_id)
        if not record:
            return None

        update_data = presentation_update.model_dump(exclude_unset=True)
        update_data['updated_at'] = datetime.now()
        updated_record = self.presentations_table.update(
            record['id'], self._prepare_presentation_for_airtable(update_data), typecast=True
        )
        return self._presentation_from_airtable(updated_record)

    def delete_presentation(self, presentation_id: str) -> bool:
        """Delete a presentation and, first, every slide that belongs to it"""
        record = self._find_one(self.presentations_table, id=presentation_id)
        if not record:
            return False

        slide_records = self.slides_table.all(formula=match({'presentation_id': presentation_id}))
        if slide_records:
            self.slides_table.batch_delete([r['id'] for r in slide_records])
        self.presentations_table.delete(record['id'])
        return True

    # Slides
    def create_slides(self, slides: List[SlideCreate]) -> List[Slide]:
        """Insert a presentation's slides in one batch"""
        rows = []
        for slide in slides:
            data = slide.model_dump()
            data['id'] = str(uuid.uuid4())
            rows.append(self._prepare_slide_for_airtable(data))
        records = self.slides_table.batch_create(rows, typecast=True)
        return [self._slide_from_airtable(record) for record in records]

    def get_slide_by_id(self, slide_id: str) -> Optional[Slide]:
        record = self._find_one(self.slides_table, id=slide_id)
        return self._slide_from_airtable(record) if record else None

    def get_slides_by_presentation_id(self, presentation_id: str) -> List[Slide]:
        records = self.slides_table.all(formula=match({'presentation_id': presentation_id}), sort=['slide_index'])
        return [self._slide_from_airtable(record) for record in records]

    def update_slide(self, slide_id: str, slide_update: SlideUpdate) -> Optional[Slide]:
        record = self._find_one(self.slides_table, id=slide_id)
        if not record:
            return None

        update_data = self._prepare_slide_for_airtable(slide_update.model_dump(exclude_unset=True))
        updated_record = self.slides_table.update(record['id'], update_data, typecast=True)
        return self._slide_from_airtable(updated_record)


airtable_client = AirtableClient()
