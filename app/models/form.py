"""
Form model and schemas for the request form builder
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from enum import Enum

class FieldType(str, Enum):
    TEXT = "TEXT"
    TEXTAREA = "TEXTAREA"
    DATE = "DATE"
    DATETIME = "DATETIME"
    DROPDOWN = "DROPDOWN"

class FormValidationError(ValueError):
    """Raised when a form definition cannot be saved as-is"""

class FormField(BaseModel):
    id: str
    label: str = ""
    type: FieldType = FieldType.TEXT
    placeholder: Optional[str] = None
    options: Optional[List[str]] = None  # For dropdown
    is_fixed: bool = Field(False, alias="isFixed")

    class Config:
        populate_by_name = True

    def with_type(self, new_type: FieldType) -> "FormField":
        """Return a copy retyped to new_type, keeping options only for dropdown -> dropdown"""
        new_type = FieldType(new_type)
        if new_type is FieldType.DROPDOWN:
            options = list(self.options or []) if self.type is FieldType.DROPDOWN else []
        else:
            options = None
        return self.model_copy(update={"type": new_type, "options": options})

class FormDefinition(BaseModel):
    id: str
    name: str = ""
    description: str = ""
    handler_ldap: str = Field("", alias="handlerLdap")
    fields: List[FormField] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def is_valid(self) -> bool:
        """A definition is valid when it has a name and every field has an id"""
        return bool(self.name.strip()) and all(f.id for f in self.fields)

    def field_ids_unique(self) -> bool:
        ids = [f.id for f in self.fields]
        return len(ids) == len(set(ids))

    def get_field(self, field_id: str) -> Optional[FormField]:
        return next((f for f in self.fields if f.id == field_id), None)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the stored camelCase document shape"""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "FormDefinition":
        data = {k: v for k, v in doc.items() if k not in ("_id", "updated_at")}
        data.setdefault("id", doc.get("_id"))
        return cls.model_validate(data)

# Mandatory requester field, always first in builder-managed forms
APPLICANT_FIELD_ID = "field_applicant_fixed"

def applicant_field() -> FormField:
    return FormField(
        id=APPLICANT_FIELD_ID,
        label="신청자",
        type=FieldType.TEXT,
        placeholder="LDAP을 입력하세요(bella.arena)",
        is_fixed=True,
    )

def parse_options_text(text: str) -> List[str]:
    """Split dropdown options typed one per line.

    Blank lines are kept as empty options; whether they should be dropped is
    still undecided.
    """
    return text.split("\n")

def options_text(field: FormField) -> str:
    return "\n".join(field.options or [])
