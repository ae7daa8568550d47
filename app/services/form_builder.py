"""
Form Builder - edits one draft form definition for an administrator
"""
import logging
import re
import time
from typing import Any, Dict, Optional

from app.models.form import (
    APPLICANT_FIELD_ID,
    FieldType,
    FormDefinition,
    FormField,
    FormValidationError,
    applicant_field,
    parse_options_text,
)
from app.services.form_store import FormStore
from app.services.navigation import View

logger = logging.getLogger(__name__)

# Attributes a fixed field keeps regardless of edits
LOCKED_ATTRIBUTES = ("label", "type", "placeholder")


def _millis() -> int:
    return int(time.time() * 1000)


def new_form_id() -> str:
    """Id for a form created from the admin list"""
    return f"form_{_millis()}"


class FormBuilder:
    """
    Holds the draft being edited. Nothing is written to the store until
    save() succeeds.
    """

    def __init__(self, store: FormStore):
        self.store = store
        self.form: Optional[FormDefinition] = None

    def load(self, form_id: str) -> FormDefinition:
        """Start editing form_id, or a fresh skeleton if it does not exist"""
        existing = self.store.get(form_id)
        if existing is None:
            self.form = FormDefinition(id=form_id, fields=[applicant_field()])
        elif not any(f.id == APPLICANT_FIELD_ID for f in existing.fields):
            # Definitions created before the requester field was mandatory
            existing.fields.insert(0, applicant_field())
            self.form = existing
        else:
            self.form = existing
        return self.form

    def _require_draft(self) -> FormDefinition:
        if self.form is None:
            raise LookupError("No form loaded in the builder")
        return self.form

    def update_details(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        handler_ldap: Optional[str] = None,
    ) -> FormDefinition:
        form = self._require_draft()
        if name is not None:
            form.name = name
        if description is not None:
            form.description = description
        if handler_ldap is not None:
            form.handler_ldap = re.sub(r"\s", "", handler_ldap)
        return form

    def add_field(self) -> FormField:
        form = self._require_draft()
        field_id = f"field_{_millis()}"
        taken = {f.id for f in form.fields}
        suffix = 1
        while field_id in taken:
            field_id = f"field_{_millis()}_{suffix}"
            suffix += 1
        field = FormField(id=field_id, label="", type=FieldType.TEXT, placeholder="")
        form.fields.append(field)
        return field

    def update_field(self, field_id: str, changes: Dict[str, Any]) -> Optional[FormField]:
        """Merge changes into the matching field; unknown ids are ignored"""
        form = self._require_draft()
        for index, field in enumerate(form.fields):
            if field.id != field_id:
                continue

            editable = set(FormField.model_fields) - {"id", "is_fixed"}
            if field.is_fixed:
                editable -= set(LOCKED_ATTRIBUTES)
            changes = {k: v for k, v in changes.items() if k in editable}

            updated = field
            new_type = changes.pop("type", None)
            if new_type is not None:
                updated = updated.with_type(new_type)

            options = changes.pop("options", None)
            if options is not None and updated.type is FieldType.DROPDOWN:
                if isinstance(options, str):
                    options = parse_options_text(options)
                changes["options"] = list(options)

            if changes:
                updated = updated.model_copy(update=changes)
            form.fields[index] = updated
            return updated
        return None

    def remove_field(self, field_id: str) -> bool:
        form = self._require_draft()
        target = form.get_field(field_id)
        if target is None or target.is_fixed:
            return False
        form.fields = [f for f in form.fields if f.id != field_id]
        return True

    async def save(self) -> View:
        """Persist the draft and return the view to navigate to"""
        form = self._require_draft()
        if not form.name.strip():
            raise FormValidationError("양식 이름을 입력해주세요.")
        self.form = await self.store.upsert(form)
        logger.info("🛠️ Builder saved form %s", form.id)
        return View.ADMIN_PORTAL
