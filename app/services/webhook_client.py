"""
Outbound webhook calls made when a request form is submitted.

- chat webhook: JSON body, creates the task for the assignees. Any failure
  here fails the submission.
- sheets webhook: form-encoded body with a JSON string in `payload`. Its
  outcome never reaches the user.
"""
import json
import logging
from typing import Any, Dict, Optional

import httpx

from app.config.settings import settings

logger = logging.getLogger(__name__)


class WebhookError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WebhookDispatcher:
    """Posts submission payloads to the chat and sheets endpoints."""

    def __init__(
        self,
        chat_url: Optional[str] = None,
        sheets_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.chat_url = chat_url or settings.CHAT_WEBHOOK_URL
        self.sheets_url = sheets_url or settings.SHEETS_WEBHOOK_URL
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # No timeout: a dispatched submission runs until the endpoint answers
        return httpx.AsyncClient(timeout=None, transport=self._transport)

    async def send_chat(self, payload: Dict[str, Any]) -> None:
        try:
            async with self._client() as client:
                response = await client.post(self.chat_url, json=payload)
        except httpx.HTTPError as e:
            raise WebhookError(f"Webhook request failed: {e}") from e

        if not response.is_success:
            raise WebhookError(
                f"Webhook failed with status {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        logger.info("📨 Chat webhook accepted submission (%d)", response.status_code)

    async def send_sheet(self, payload: Optional[Dict[str, Any]]) -> None:
        if payload is None:
            return
        body = {"payload": json.dumps(payload, ensure_ascii=False)}
        try:
            async with self._client() as client:
                response = await client.post(self.sheets_url, data=body)
        except httpx.HTTPError as e:
            raise WebhookError(f"Sheets request failed: {e}") from e

        if not response.is_success:
            raise WebhookError(
                f"Sheets append failed with status {response.status_code}",
                status_code=response.status_code,
            )
        logger.info("📊 Appended row to sheet '%s'", payload.get("sheet"))
