"""
Admin routes - password gate, form list, form builder
"""
from fastapi import APIRouter, HTTPException, Request, status, Depends
from fastapi.responses import JSONResponse

from app.models.form import FormValidationError
from app.schemas.portal import AdminAuthRequest, FieldUpdateRequest, FormDetailsUpdate
from app.services.form_builder import new_form_id
from app.services.form_store import FormStore, FormStoreError
from app.services.navigation import AccessDenied, View
from app.services.sessions import PortalSession
from app.utils.dependencies import get_session, get_store
from app.utils.helpers import builder_view, form_summaries, screen

router = APIRouter(prefix="/admin", tags=["Admin"])

def _forbidden(e: AccessDenied) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

def _store_unavailable(e: FormStoreError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

def _require_builder(session: PortalSession):
    nav = session.navigator
    if not nav.admin_unlocked:
        raise _forbidden(AccessDenied("관리자 비밀번호가 필요합니다."))
    if nav.view is not View.FORM_BUILDER or session.builder.form is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No form open in the builder"
        )
    return session.builder

# ─── Password Gate ────────────────────────────────────────────────────────────

@router.post("/prompt")
async def open_prompt(session: PortalSession = Depends(get_session)):
    """Show the password prompt"""
    session.navigator.open_admin_prompt()
    return screen(session.navigator)

@router.delete("/prompt")
async def close_prompt(session: PortalSession = Depends(get_session)):
    """Dismiss the password prompt"""
    session.navigator.close_admin_prompt()
    return screen(session.navigator)

@router.post("/auth")
async def authenticate(
    body: AdminAuthRequest,
    request: Request,
    session: PortalSession = Depends(get_session)
):
    """Compare the password, then load the admin list on a match"""
    nav = session.navigator
    if not nav.authenticate(body.password):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=screen(nav),
            headers={"X-Session-ID": session.id},
        )
    session.submission = None
    store = await get_store(request)
    return screen(nav, forms=form_summaries(store.list()))

# ─── Admin Form List ──────────────────────────────────────────────────────────

@router.get("/forms")
async def list_forms(
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """Admin form list"""
    try:
        session.navigator.go_admin_portal()
    except AccessDenied as e:
        raise _forbidden(e)
    return screen(session.navigator, forms=form_summaries(store.list()))

@router.post("/forms", status_code=status.HTTP_201_CREATED)
async def create_form(
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """Open the builder on a new, unsaved form"""
    form_id = new_form_id()
    try:
        session.navigator.go_builder(form_id)
    except AccessDenied as e:
        raise _forbidden(e)
    session.builder.load(form_id)
    return screen(session.navigator, builder=builder_view(session.builder))

@router.delete("/forms/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_form(
    form_id: str,
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """Delete form"""
    if not session.navigator.admin_unlocked:
        raise _forbidden(AccessDenied("관리자 비밀번호가 필요합니다."))
    try:
        deleted = await store.delete(form_id)
    except FormStoreError as e:
        raise _store_unavailable(e)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Form not found"
        )

# ─── Form Builder ─────────────────────────────────────────────────────────────

@router.get("/forms/{form_id}/builder")
async def open_builder(
    form_id: str,
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """Edit an existing form, or start a new one under form_id"""
    try:
        session.navigator.go_builder(form_id)
    except AccessDenied as e:
        raise _forbidden(e)
    session.builder.load(form_id)
    return screen(session.navigator, builder=builder_view(session.builder))

@router.patch("/builder")
async def update_details(
    body: FormDetailsUpdate,
    session: PortalSession = Depends(get_session)
):
    """Update name, description or handlers of the draft"""
    builder = _require_builder(session)
    builder.update_details(
        name=body.name,
        description=body.description,
        handler_ldap=body.handlerLdap,
    )
    return screen(session.navigator, builder=builder_view(builder))

@router.post("/builder/fields", status_code=status.HTTP_201_CREATED)
async def add_field(session: PortalSession = Depends(get_session)):
    """Append a blank text field"""
    builder = _require_builder(session)
    builder.add_field()
    return screen(session.navigator, builder=builder_view(builder))

@router.patch("/builder/fields/{field_id}")
async def update_field(
    field_id: str,
    body: FieldUpdateRequest,
    session: PortalSession = Depends(get_session)
):
    """Merge changes into one field"""
    builder = _require_builder(session)
    builder.update_field(field_id, body.model_dump(exclude_unset=True))
    return screen(session.navigator, builder=builder_view(builder))

@router.delete("/builder/fields/{field_id}")
async def remove_field(
    field_id: str,
    session: PortalSession = Depends(get_session)
):
    """Remove a field; the requester field stays"""
    builder = _require_builder(session)
    builder.remove_field(field_id)
    return screen(session.navigator, builder=builder_view(builder))

@router.post("/builder/save")
async def save_form(
    store: FormStore = Depends(get_store),
    session: PortalSession = Depends(get_session)
):
    """Save the draft and return to the admin list"""
    builder = _require_builder(session)
    try:
        next_view = await builder.save()
    except FormValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except FormStoreError as e:
        raise _store_unavailable(e)

    if next_view is View.ADMIN_PORTAL:
        session.navigator.go_admin_portal()
    return screen(session.navigator, forms=form_summaries(store.list()))
