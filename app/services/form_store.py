"""
Form Definition Store
Holds the list of form definitions loaded once from the "forms" collection
and mirrors every write into it. One instance is owned by the application
and handed to the routes, never reached through a module global.
"""
import logging
from typing import Dict, List, Optional

from app.config.database import Collections
from app.database.db_operations import DBOperations
from app.models.form import FormDefinition, FormValidationError

logger = logging.getLogger(__name__)


class FormStoreError(Exception):
    """Raised when the document store rejects a list/upsert/delete"""


class FormStore:
    """Keyed form storage with an in-memory copy of the collection."""

    def __init__(self, ops: DBOperations):
        self._ops = ops
        self._forms: Dict[str, FormDefinition] = {}
        self._loaded = False

    async def load(self) -> List[FormDefinition]:
        """Fetch every stored definition, replacing the in-memory copy"""
        try:
            docs = await self._ops.get_all(Collections.FORMS)
        except Exception as exc:
            logger.error("❌ Error fetching forms from store: %s", exc)
            raise FormStoreError("양식 데이터를 불러오지 못했습니다.") from exc

        self._forms = {}
        for doc in docs:
            form = FormDefinition.from_document(doc)
            self._forms[form.id] = form
        self._loaded = True
        logger.info("📋 Loaded %d form(s)", len(self._forms))
        return self.list()

    async def ensure_loaded(self) -> None:
        if not self._loaded:
            await self.load()

    def list(self) -> List[FormDefinition]:
        return [form.model_copy(deep=True) for form in self._forms.values()]

    def get(self, form_id: str) -> Optional[FormDefinition]:
        form = self._forms.get(form_id)
        return form.model_copy(deep=True) if form else None

    async def upsert(self, form: FormDefinition) -> FormDefinition:
        """Persist form under its id; last writer wins"""
        if not form.is_valid():
            raise FormValidationError("양식 이름과 필드 ID는 비워둘 수 없습니다.")
        if not form.field_ids_unique():
            raise FormValidationError("필드 ID가 중복되었습니다.")

        try:
            await self._ops.upsert(Collections.FORMS, form.id, form.to_document())
        except Exception as exc:
            logger.error("❌ Error saving form %s: %s", form.id, exc)
            raise FormStoreError("양식을 저장하지 못했습니다.") from exc

        # Saved forms move to the end of the list
        self._forms.pop(form.id, None)
        self._forms[form.id] = form.model_copy(deep=True)
        logger.info("💾 Saved form %s (%s)", form.id, form.name)
        return self.get(form.id)

    async def delete(self, form_id: str) -> bool:
        try:
            deleted = await self._ops.delete(Collections.FORMS, form_id)
        except Exception as exc:
            logger.error("❌ Error deleting form %s: %s", form_id, exc)
            raise FormStoreError("양식을 삭제하지 못했습니다.") from exc

        self._forms.pop(form_id, None)
        logger.info("🗑️ Deleted form %s", form_id)
        return deleted
