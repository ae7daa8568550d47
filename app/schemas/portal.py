"""
Portal Pydantic Schemas
Request bodies for the user portal and admin screens
"""
from typing import List, Optional, Union
from pydantic import BaseModel

from app.models.form import FieldType


# ============================================
# User portal
# ============================================

class FieldValueRequest(BaseModel):
    """Value typed into one field of the request form"""
    value: str = ""


# ============================================
# Admin
# ============================================

class AdminAuthRequest(BaseModel):
    password: str = ""


class FormDetailsUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    handlerLdap: Optional[str] = None


class FieldUpdateRequest(BaseModel):
    """Partial changes for one builder field; options accept newline text"""
    label: Optional[str] = None
    type: Optional[FieldType] = None
    placeholder: Optional[str] = None
    options: Optional[Union[List[str], str]] = None
