"""
Request dependencies - application-owned state handed to the routes
"""
from fastapi import Header, HTTPException, Request, Response, status

from app.config.settings import settings
from app.services.form_store import FormStore, FormStoreError
from app.services.sessions import PortalSession
from app.services.webhook_client import WebhookDispatcher


async def get_store(request: Request) -> FormStore:
    """The form store, loaded from the database on first use"""
    store: FormStore = request.app.state.store
    try:
        await store.ensure_loaded()
    except FormStoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return store


def get_dispatcher(request: Request) -> WebhookDispatcher:
    return request.app.state.dispatcher


def get_session(
    request: Request,
    response: Response,
    x_session_id: str = Header(None),
) -> PortalSession:
    """Session for the calling tab; a new id is echoed back when none was sent"""
    session = request.app.state.sessions.get_or_create(x_session_id)
    response.headers[settings.SESSION_HEADER] = session.id
    return session
