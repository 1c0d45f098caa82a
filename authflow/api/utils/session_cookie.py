from typing import Optional

from fastapi import status
from fastapi.responses import RedirectResponse

from config import ApplicationConfig


def set_session_cookie(response, session_token: str) -> None:
    response.set_cookie(
        ApplicationConfig.SESSION_COOKIE_NAME,
        session_token,
        max_age=ApplicationConfig.SESSION_EXPIRY_HOURS * 3600,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(ApplicationConfig.SESSION_COOKIE_NAME)


def redirect(url: str, session_token: Optional[str] = None) -> RedirectResponse:
    """
    303 redirect for a form post.

    Args:
        url: Target path
        session_token: Raw session cookie value to (re)issue, if the
            handler created or rotated a session
    """
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    if session_token:
        set_session_cookie(response, session_token)
    return response
