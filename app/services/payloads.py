"""
Payload builders for the two submission destinations.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.models.form import FormDefinition

NO_INFO = "정보 없음"

# Form name -> (sheet tab, field labels in column order).
# Values are looked up by exact label text, so renaming a label in the
# builder silently blanks its column.
SHEET_LAYOUTS: Dict[str, Tuple[str, List[str]]] = {
    "방문자 등록": (
        "visitors",
        ["신청자 이름", "날짜 및 시간", "방문자 이름", "방문자 소속", "총 방문자 수"],
    ),
    "임시 사원증 신청": (
        "temp_badge",
        ["신청자 이름", "사원증이 필요한 날짜"],
    ),
}


def parse_assignees(handler_ldap: Optional[str]) -> List[str]:
    """'bella.arena, jaye.sung,' -> ['bella.arena', 'jaye.sung']"""
    if not handler_ldap:
        return []
    return [ldap.strip() for ldap in handler_ldap.split(",") if ldap.strip()]


def build_chat_payload(form: FormDefinition, values: Mapping[str, Any]) -> Dict[str, Any]:
    lines = [f"* {field.label}: {values.get(field.id) or NO_INFO}" for field in form.fields]
    text = f"# {form.name}\n\n" + "\n".join(lines).strip()
    return {
        "text": text,
        "task": {
            "template_name": "",
            "assignees": parse_assignees(form.handler_ldap),
        },
        "expire_type": None,
    }


def value_by_label(form: FormDefinition, values: Mapping[str, Any], label: str) -> Any:
    target = next((f for f in form.fields if (f.label or "").strip() == label.strip()), None)
    if target is None:
        return ""
    value = values.get(target.id)
    return "" if value is None else value


def build_sheet_payload(form: FormDefinition, values: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Row for the spreadsheet appender, or None when the form has no sheet"""
    title = (form.name or "").strip()
    layout = SHEET_LAYOUTS.get(title)
    if layout is None:
        return None
    sheet, labels = layout
    return {
        "sheet": sheet,
        "title": title,
        "values": [value_by_label(form, values, label) for label in labels],
    }
