"""
Helper utility functions for building screen payloads
"""
from typing import Any, Dict, List

from app.models.form import FormDefinition
from app.services.form_builder import FormBuilder
from app.services.navigation import Navigator
from app.services.payloads import parse_assignees
from app.services.widgets import render_builder_field


def form_summary(form: FormDefinition) -> Dict[str, Any]:
    """Card shown in the user and admin form lists"""
    return {
        "id": form.id,
        "name": form.name,
        "description": form.description,
        "handlerLdap": form.handler_ldap,
        "assignees": parse_assignees(form.handler_ldap),
        "field_count": len(form.fields),
    }

def form_summaries(forms: List[FormDefinition]) -> List[Dict[str, Any]]:
    return [form_summary(form) for form in forms]

def builder_view(builder: FormBuilder) -> Dict[str, Any]:
    form = builder.form
    return {
        "id": form.id,
        "name": form.name,
        "description": form.description,
        "handlerLdap": form.handler_ldap,
        "fields": [render_builder_field(field) for field in form.fields],
    }

def screen(navigator: Navigator, **content: Any) -> Dict[str, Any]:
    """Wrap screen content with the navigation state"""
    return {"navigation": navigator.snapshot(), **content}
