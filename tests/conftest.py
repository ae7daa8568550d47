"""Shared fixtures: an in-memory "forms" collection and recorded webhook traffic."""
import json
from types import SimpleNamespace
from urllib.parse import parse_qs

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.database.db_operations import DBOperations
from app.main import app, init_state
from app.models.form import FieldType, FormDefinition, FormField, applicant_field
from app.services.form_store import FormStore
from app.services.webhook_client import WebhookDispatcher

CHAT_URL = "https://chat.test/webhook"
SHEETS_URL = "https://sheets.test/exec"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


class _Cursor:
    def __init__(self, docs):
        self._docs = docs

    def limit(self, n):
        return _Cursor(self._docs[:n])

    async def to_list(self, length=None):
        return list(self._docs if length is None else self._docs[:length])


class FakeCollection:
    """Just enough of a motor collection for keyed upsert/delete/list."""

    def __init__(self):
        self.docs = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise RuntimeError("database unavailable")

    def find(self, query=None):
        self._check()
        return _Cursor([dict(d) for d in self.docs.values()])

    async def find_one(self, query):
        self._check()
        doc = self.docs.get(query["_id"])
        return dict(doc) if doc else None

    async def replace_one(self, query, document, upsert=False):
        self._check()
        self.docs[query["_id"]] = json.loads(json.dumps(document, default=str))
        return SimpleNamespace(matched_count=1)

    async def delete_one(self, query):
        self._check()
        removed = self.docs.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed else 0)


class WebhookRecorder:
    """httpx transport handler answering both webhooks with configurable statuses."""

    def __init__(self):
        self.chat_status = 200
        self.sheet_status = 200
        self.chat_error = None
        self.chat_requests = []
        self.sheet_requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == CHAT_URL:
            if self.chat_error:
                raise self.chat_error
            self.chat_requests.append(json.loads(request.content))
            return httpx.Response(self.chat_status, text="ok")
        form = parse_qs(request.content.decode())
        self.sheet_requests.append(json.loads(form["payload"][0]))
        return httpx.Response(self.sheet_status, text="ok")

    @property
    def calls(self):
        return len(self.chat_requests) + len(self.sheet_requests)


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def store(collection):
    return FormStore(DBOperations(lambda name: collection))


@pytest.fixture
def webhooks():
    return WebhookRecorder()


@pytest.fixture
def dispatcher(webhooks):
    return WebhookDispatcher(CHAT_URL, SHEETS_URL, transport=httpx.MockTransport(webhooks))


@pytest.fixture
def visitor_form():
    return FormDefinition(
        id="form_visitors",
        name="방문자 등록",
        description="방문 예정자를 등록합니다.",
        handler_ldap="bella.arena, jaye.sung,",
        fields=[
            FormField(id="f1", label="신청자 이름", type=FieldType.TEXT),
            FormField(id="f2", label="날짜 및 시간", type=FieldType.DATETIME),
            FormField(id="f3", label="방문자 이름", type=FieldType.TEXT),
            FormField(id="f4", label="방문자 소속", type=FieldType.TEXT),
            FormField(id="f5", label="총 방문자 수", type=FieldType.DROPDOWN, options=["1", "2", "3+"]),
        ],
    )


@pytest.fixture
def supply_form():
    return FormDefinition(
        id="form_supply",
        name="비품 요청",
        handler_ldap="jaye.sung",
        fields=[
            applicant_field(),
            FormField(id="item", label="품목", type=FieldType.TEXT),
            FormField(id="memo", label="메모", type=FieldType.TEXTAREA),
        ],
    )


@pytest.fixture
async def client(store, dispatcher):
    init_state(app, store, dispatcher)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
