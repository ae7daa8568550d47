"""Tests for the request submission pipeline."""
import asyncio

import httpx
import pytest

from app.services.submission import (
    REQUIRED_MESSAGE,
    SubmissionNotAllowed,
    SubmissionSession,
    SubmissionStatus,
)


def fill(session, values):
    for field_id, value in values.items():
        session.set_value(field_id, value)


VISITOR_VALUES = {"f1": "A", "f2": "B", "f3": "C", "f4": "D", "f5": "E"}


class TestValidation:

    @pytest.mark.anyio
    async def test_blank_field_blocks_dispatch(self, visitor_form, dispatcher, webhooks):
        session = SubmissionSession(visitor_form)
        fill(session, {**VISITOR_VALUES, "f3": "   "})

        status = await session.submit(dispatcher)

        assert status is SubmissionStatus.IDLE
        assert session.errors == {"f3": REQUIRED_MESSAGE}
        assert webhooks.calls == 0

    def test_error_cleared_when_value_changes(self, visitor_form):
        session = SubmissionSession(visitor_form)
        session.validate()
        assert len(session.errors) == 5
        session.set_value("f1", "A")
        assert "f1" not in session.errors
        assert len(session.errors) == 4

    def test_unknown_field_rejected(self, visitor_form):
        session = SubmissionSession(visitor_form)
        with pytest.raises(KeyError):
            session.set_value("missing", "x")


class TestDispatch:

    @pytest.mark.anyio
    async def test_primary_success_resets_values(self, visitor_form, dispatcher, webhooks):
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)

        status = await session.submit(dispatcher)

        assert status is SubmissionStatus.SUCCESS
        assert session.values == {}
        assert webhooks.chat_requests[0]["task"]["assignees"] == ["bella.arena", "jaye.sung"]
        assert webhooks.sheet_requests == [
            {"sheet": "visitors", "title": "방문자 등록", "values": ["A", "B", "C", "D", "E"]}
        ]

    @pytest.mark.anyio
    async def test_primary_failure_governs_outcome(self, visitor_form, dispatcher, webhooks):
        webhooks.chat_status = 500
        webhooks.sheet_status = 200
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)

        status = await session.submit(dispatcher)

        assert status is SubmissionStatus.ERROR
        assert session.values == VISITOR_VALUES
        assert len(webhooks.sheet_requests) == 1

    @pytest.mark.anyio
    async def test_network_failure_is_an_error(self, visitor_form, dispatcher, webhooks):
        webhooks.chat_error = httpx.ConnectError("boom")
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)

        assert await session.submit(dispatcher) is SubmissionStatus.ERROR

    @pytest.mark.anyio
    async def test_secondary_failure_does_not_block(self, visitor_form, dispatcher, webhooks, caplog):
        webhooks.sheet_status = 500
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)

        assert await session.submit(dispatcher) is SubmissionStatus.SUCCESS
        assert "Sheets Append Warning" in caplog.text

    @pytest.mark.anyio
    async def test_unrecognised_form_skips_sheets(self, supply_form, dispatcher, webhooks):
        session = SubmissionSession(supply_form)
        fill(session, {"field_applicant_fixed": "bella.arena", "item": "펜", "memo": "2개"})

        assert await session.submit(dispatcher) is SubmissionStatus.SUCCESS
        assert len(webhooks.chat_requests) == 1
        assert webhooks.sheet_requests == []


class TestStatusMachine:

    @pytest.mark.anyio
    async def test_retry_allowed_after_error(self, visitor_form, dispatcher, webhooks):
        webhooks.chat_status = 503
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)
        await session.submit(dispatcher)
        assert session.view()["button_label"] == "다시 시도"

        webhooks.chat_status = 200
        assert await session.submit(dispatcher) is SubmissionStatus.SUCCESS
        assert len(webhooks.chat_requests) == 2

    @pytest.mark.anyio
    async def test_success_is_terminal(self, visitor_form, dispatcher):
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)
        await session.submit(dispatcher)

        view = session.view()
        assert view["button_disabled"] is True
        assert view["message"] == "요청이 성공적으로 전송되었습니다."
        with pytest.raises(SubmissionNotAllowed):
            await session.submit(dispatcher)

    @pytest.mark.anyio
    async def test_editing_after_success_keeps_submit_disabled(self, visitor_form, dispatcher, webhooks):
        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)
        await session.submit(dispatcher)

        session.set_value("f1", "again")

        assert session.values == {"f1": "again"}
        assert session.status is SubmissionStatus.SUCCESS
        assert session.view()["button_disabled"] is True
        with pytest.raises(SubmissionNotAllowed):
            await session.submit(dispatcher)
        assert len(webhooks.chat_requests) == 1

    @pytest.mark.anyio
    async def test_cancelled_dispatch_leaves_retryable_error(self, visitor_form):
        started = asyncio.Event()
        release = asyncio.Event()

        class StalledDispatcher:
            async def send_chat(self, payload):
                started.set()
                await release.wait()

            async def send_sheet(self, payload):
                return None

        session = SubmissionSession(visitor_form)
        fill(session, VISITOR_VALUES)
        task = asyncio.create_task(session.submit(StalledDispatcher()))
        await started.wait()
        assert session.status is SubmissionStatus.SUBMITTING

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.status is SubmissionStatus.ERROR
        assert session.can_submit is True
        assert session.view()["button_label"] == "다시 시도"

    def test_idle_view(self, visitor_form):
        view = SubmissionSession(visitor_form).view()
        assert view["status"] == "idle"
        assert view["button_label"] == "요청 보내기"
        assert view["button_disabled"] is False
        assert [f["id"] for f in view["fields"]] == ["f1", "f2", "f3", "f4", "f5"]
