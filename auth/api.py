"""HTTP routes for authentication."""

import ipaddress

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.base import success_response, error_response, ErrorCodes
from auth.actions import CredentialsAuthenticator
from auth.config import AuthConfig
from auth.service import AuthService
from auth.types import AuthenticatedUser

SESSION_COOKIE = "session_token"


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def _safe_redirect(target: object, default: str) -> str:
    """Only same-site paths are allowed as post-login destinations."""
    if isinstance(target, str) and target.startswith("/") and not target.startswith("//"):
        return target
    return default


def create_auth_router(auth_service: AuthService, config: AuthConfig) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])

    @router.post("/login")
    async def login(request: Request):
        """Sign in from the login form.

        Sets session_token cookie and redirects on success.
        """
        form = await request.form()
        ip_address = _get_client_ip(request)
        signed_in: list[AuthenticatedUser] = []

        def sign_in(provider, form_data):
            signed_in.append(auth_service.sign_in(provider, form_data, ip_address=ip_address))

        message = CredentialsAuthenticator(sign_in).authenticate(None, form)
        if message is not None:
            return JSONResponse(
                status_code=401,
                content=error_response(ErrorCodes.INVALID_CREDENTIALS, message).model_dump(mode="json"),
            )

        session = signed_in[0].session
        response = RedirectResponse(
            url=_safe_redirect(form.get("redirectTo"), config.login_redirect),
            status_code=303,
        )
        response.set_cookie(
            key=SESSION_COOKIE,
            value=session.token,
            httponly=True,
            secure=config.session_cookie_secure,
            samesite="lax",
            max_age=int((session.expires_at - session.created_at).total_seconds()),
        )
        return response

    @router.post("/logout")
    async def logout(request: Request):
        """Logout - revoke session and clear cookie."""
        session_token = request.cookies.get(SESSION_COOKIE)
        if session_token:
            auth_service.logout(session_token)

        response = JSONResponse(
            content=success_response({"message": "Logged out successfully"}).model_dump(mode="json")
        )
        response.delete_cookie(key=SESSION_COOKIE)
        return response

    return router
