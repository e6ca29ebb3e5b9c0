"""
Admin authentication routes.
Login issues the signed token as an HttpOnly cookie; logout expires it;
``/admin/me`` reports who the cookie belongs to.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..deps import get_auth_service
from ...core.security import SessionBoundary, get_current_admin, get_session_boundary
from ...models.admin import AdminIdentity
from ...schemas.auth import AdminInfo, LoginRequest, LoginResponse, SessionResponse
from ...schemas.common import SuccessResponse
from ...services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    session: SessionBoundary = Depends(get_session_boundary),
):
    """
    Verify admin credentials and set the session cookie.

    Unknown email and wrong password produce the same 401 response.
    """
    admin = auth_service.authenticate(req.email, req.password)
    _, cookie = session.issue_login_cookie(admin.id, admin.email)

    response = JSONResponse(
        LoginResponse(admin=AdminInfo(email=admin.email)).model_dump()
    )
    return cookie.apply(response)


@router.post("/logout", response_model=SuccessResponse)
def logout(session: SessionBoundary = Depends(get_session_boundary)):
    response = JSONResponse(SuccessResponse().model_dump())
    return session.issue_logout_cookie().apply(response)


@router.get("/me", response_model=SessionResponse, responses={401: {"model": SessionResponse}})
def me(admin: AdminIdentity = Depends(get_current_admin)):
    if admin is None:
        return JSONResponse(SessionResponse().model_dump(), status_code=401)
    return SessionResponse(admin=AdminInfo(email=admin.email))
