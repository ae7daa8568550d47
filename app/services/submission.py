"""
Request Submission Pipeline
Validates the values a user entered for one form and fans them out to the
chat webhook (must succeed) and the sheets webhook (best effort).
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from app.models.form import FormDefinition
from app.services.payloads import build_chat_payload, build_sheet_payload
from app.services.webhook_client import WebhookDispatcher
from app.services.widgets import render_field

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "이 필드는 필수입니다."
ERROR_MESSAGE = "요청 제출 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
SUCCESS_MESSAGE = "요청이 성공적으로 전송되었습니다."


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


BUTTON_LABELS = {
    SubmissionStatus.IDLE: "요청 보내기",
    SubmissionStatus.SUBMITTING: "제출 중...",
    SubmissionStatus.SUCCESS: "성공적으로 제출되었습니다!",
    SubmissionStatus.ERROR: "다시 시도",
}


class SubmissionNotAllowed(Exception):
    """Raised when submit or edit is attempted from a state that forbids it"""


class SubmissionSession:
    """One user filling in one form."""

    def __init__(self, form: FormDefinition):
        self.form = form
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.status = SubmissionStatus.IDLE

    @property
    def can_submit(self) -> bool:
        return self.status in (SubmissionStatus.IDLE, SubmissionStatus.ERROR)

    def set_value(self, field_id: str, value: Any) -> None:
        """Edits stay open after success; only submit is disabled"""
        if self.form.get_field(field_id) is None:
            raise KeyError(field_id)
        self.values[field_id] = value
        self.errors.pop(field_id, None)

    def validate(self) -> bool:
        errors = {}
        for field in self.form.fields:
            value = self.values.get(field.id)
            if not value or (isinstance(value, str) and not value.strip()):
                errors[field.id] = REQUIRED_MESSAGE
        self.errors = errors
        return not errors

    async def submit(self, dispatcher: WebhookDispatcher) -> SubmissionStatus:
        if not self.can_submit:
            raise SubmissionNotAllowed(f"Cannot submit while {self.status.value}")

        if not self.validate():
            return self.status

        self.status = SubmissionStatus.SUBMITTING
        chat_payload = build_chat_payload(self.form, self.values)
        sheet_payload = build_sheet_payload(self.form, self.values)

        try:
            chat_result, sheet_result = await asyncio.gather(
                dispatcher.send_chat(chat_payload),
                dispatcher.send_sheet(sheet_payload),
                return_exceptions=True,
            )
        except asyncio.CancelledError:
            logger.warning("Submission for form %s cancelled in flight", self.form.id)
            self.status = SubmissionStatus.ERROR
            raise

        if isinstance(sheet_result, Exception):
            logger.warning("[Sheets Append Warning] %s", sheet_result)

        if isinstance(chat_result, Exception):
            logger.error("Submission error for form %s: %s", self.form.id, chat_result)
            self.status = SubmissionStatus.ERROR
            return self.status

        self.status = SubmissionStatus.SUCCESS
        self.values = {}
        logger.info("✅ Submitted request for form %s", self.form.id)
        return self.status

    def view(self) -> Dict[str, Any]:
        """Request-form screen state"""
        message: Optional[str] = None
        if self.status is SubmissionStatus.ERROR:
            message = ERROR_MESSAGE
        elif self.status is SubmissionStatus.SUCCESS:
            message = SUCCESS_MESSAGE

        fields: List[Dict[str, Any]] = [
            render_field(field, self.values.get(field.id), self.errors.get(field.id))
            for field in self.form.fields
        ]
        return {
            "form_id": self.form.id,
            "name": self.form.name,
            "description": self.form.description,
            "fields": fields,
            "status": self.status.value,
            "button_label": BUTTON_LABELS[self.status],
            "button_disabled": not self.can_submit,
            "message": message,
        }
