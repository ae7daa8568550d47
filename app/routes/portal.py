"""
User portal routes - form list, request form, submission
"""
from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.responses import JSONResponse

from app.schemas.portal import FieldValueRequest
from app.services.form_store import FormStore
from app.services.sessions import PortalSession
from app.services.submission import SubmissionNotAllowed, SubmissionSession, SubmissionStatus
from app.services.webhook_client import WebhookDispatcher
from app.services.navigation import View
from app.utils.dependencies import get_dispatcher, get_session, get_store
from app.utils.helpers import form_summaries, screen

router = APIRouter(prefix="/portal", tags=["Portal"])

def _active_submission(session: PortalSession, form_id: str) -> SubmissionSession:
    submission = session.submission
    nav = session.navigator
    if (
        submission is None
        or nav.view is not View.REQUEST_FORM
        or nav.current_form_id != form_id
        or submission.form.id != form_id
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Open the form before editing it"
        )
    return submission

@router.get("/forms")
async def list_forms(
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """User form list"""
    session.navigator.go_user_portal()
    session.submission = None
    return screen(session.navigator, forms=form_summaries(store.list()))

@router.get("/forms/{form_id}")
async def open_form(
    form_id: str,
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """Request form screen; arriving from another screen starts with empty values"""
    form = store.get(form_id)
    if not form:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="양식을 찾을 수 없습니다"
        )

    nav = session.navigator
    returning = (
        nav.view is View.REQUEST_FORM
        and nav.current_form_id == form_id
        and session.submission is not None
    )
    if not returning:
        nav.go_request_form(form_id)
        session.submission = SubmissionSession(form)
    return screen(nav, form=session.submission.view())

@router.put("/forms/{form_id}/values/{field_id}")
async def set_value(
    form_id: str,
    field_id: str,
    body: FieldValueRequest,
    session: PortalSession = Depends(get_session)
):
    """Change one field value"""
    submission = _active_submission(session, form_id)
    try:
        submission.set_value(field_id, body.value)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Field not found"
        )
    return screen(session.navigator, form=submission.view())

@router.post("/forms/{form_id}/submit")
async def submit_form(
    form_id: str,
    session: PortalSession = Depends(get_session),
    dispatcher: WebhookDispatcher = Depends(get_dispatcher)
):
    """Validate and dispatch the request"""
    submission = _active_submission(session, form_id)
    try:
        result = await submission.submit(dispatcher)
    except SubmissionNotAllowed as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    body = screen(session.navigator, form=submission.view())
    headers = {"X-Session-ID": session.id}
    if submission.errors:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body, headers=headers)
    if result is SubmissionStatus.ERROR:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=body, headers=headers)
    return body
