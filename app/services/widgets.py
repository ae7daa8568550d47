"""
Schema-driven widgets: one entry per FieldType describes how the field is
rendered on the request screen and edited in the builder.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.models.form import FieldType, FormField, options_text

DROPDOWN_PROMPT = "옵션을 선택하세요"


@dataclass(frozen=True)
class WidgetSpec:
    control: str                 # input | textarea | select
    input_type: Optional[str]    # HTML input type, None for textarea/select
    display_name: str            # label in the builder's type picker
    rows: Optional[int] = None
    shows_placeholder: bool = False
    has_options: bool = False


WIDGETS: Dict[FieldType, WidgetSpec] = {
    FieldType.TEXT: WidgetSpec("input", "text", "텍스트", shows_placeholder=True),
    FieldType.TEXTAREA: WidgetSpec("textarea", None, "여러 줄 텍스트", rows=4, shows_placeholder=True),
    FieldType.DATE: WidgetSpec("input", "date", "날짜"),
    FieldType.DATETIME: WidgetSpec("input", "datetime-local", "날짜 및 시간"),
    FieldType.DROPDOWN: WidgetSpec("select", None, "드롭다운", has_options=True),
}

_missing = set(FieldType) - set(WIDGETS)
if _missing:
    raise RuntimeError(f"No widget registered for field types: {sorted(t.value for t in _missing)}")


def widget_for(field_type: FieldType) -> WidgetSpec:
    return WIDGETS[FieldType(field_type)]


def render_field(field: FormField, value: Any = None, error: Optional[str] = None) -> Dict[str, Any]:
    """Build the input widget view for one field on the request screen"""
    spec = widget_for(field.type)
    widget: Dict[str, Any] = {
        "id": field.id,
        "label": field.label,
        "type": field.type.value,
        "control": spec.control,
        "value": value or "",
        "error": error,
    }
    if spec.input_type:
        widget["input_type"] = spec.input_type
    if spec.rows:
        widget["rows"] = spec.rows
    if spec.shows_placeholder:
        widget["placeholder"] = field.placeholder
    if spec.has_options:
        prompt = {"value": "", "label": field.placeholder or DROPDOWN_PROMPT, "disabled": True}
        widget["options"] = [prompt] + [
            {"value": opt, "label": opt, "disabled": False} for opt in field.options or []
        ]
    return widget


def render_builder_field(field: FormField) -> Dict[str, Any]:
    """Build the editor row for one field in the form builder"""
    spec = widget_for(field.type)
    row: Dict[str, Any] = {
        "id": field.id,
        "label": field.label,
        "type": field.type.value,
        "type_choices": [
            {"value": t.value, "label": w.display_name} for t, w in WIDGETS.items()
        ],
        "locked": field.is_fixed,
        "removable": not field.is_fixed,
    }
    if spec.shows_placeholder:
        row["placeholder"] = field.placeholder or ""
    if spec.has_options:
        row["options_text"] = options_text(field)
    return row
