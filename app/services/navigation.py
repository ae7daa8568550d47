"""
Navigation between the four portal screens and the admin password gate.

The gate is a plain comparison against one shared secret. It keeps casual
visitors out of the admin screens and nothing more.
"""
from enum import Enum
from typing import Optional

from app.config.settings import settings

PASSWORD_ERROR = "비밀번호가 올바르지 않습니다."


class View(str, Enum):
    USER_PORTAL = "USER_PORTAL"
    REQUEST_FORM = "REQUEST_FORM"
    ADMIN_PORTAL = "ADMIN_PORTAL"
    FORM_BUILDER = "FORM_BUILDER"


ADMIN_VIEWS = (View.ADMIN_PORTAL, View.FORM_BUILDER)


class AccessDenied(Exception):
    """Raised when an admin screen is requested before the gate was passed"""


class Navigator:
    def __init__(self, admin_password: Optional[str] = None):
        self._admin_password = admin_password if admin_password is not None else settings.ADMIN_PASSWORD
        self.view = View.USER_PORTAL
        self.current_form_id: Optional[str] = None
        self.prompt_open = False
        self.password_error = ""
        self.admin_unlocked = False

    def open_admin_prompt(self) -> None:
        self.prompt_open = True

    def close_admin_prompt(self) -> None:
        self.prompt_open = False
        self.password_error = ""

    def authenticate(self, password: str) -> bool:
        if password == self._admin_password:
            self.admin_unlocked = True
            self.view = View.ADMIN_PORTAL
            self.current_form_id = None
            self.prompt_open = False
            self.password_error = ""
            return True
        self.prompt_open = True
        self.password_error = PASSWORD_ERROR
        return False

    def go_user_portal(self) -> None:
        self.view = View.USER_PORTAL
        self.current_form_id = None
        self.admin_unlocked = False

    def go_request_form(self, form_id: str) -> None:
        self.view = View.REQUEST_FORM
        self.current_form_id = form_id
        self.admin_unlocked = False

    def go_admin_portal(self) -> None:
        self._require_admin()
        self.view = View.ADMIN_PORTAL
        self.current_form_id = None

    def go_builder(self, form_id: str) -> None:
        self._require_admin()
        self.view = View.FORM_BUILDER
        self.current_form_id = form_id

    def _require_admin(self) -> None:
        if not self.admin_unlocked:
            raise AccessDenied("관리자 비밀번호가 필요합니다.")

    def snapshot(self) -> dict:
        return {
            "view": self.view.value,
            "current_form_id": self.current_form_id,
            "prompt_open": self.prompt_open,
            "password_error": self.password_error or None,
        }
