"""
Page Models

Render instructions returned by GET endpoints and by failed form posts.
Templating is left to the client; these carry everything a template needs.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field

PAGE_TITLES = {
    "/": "Shop",
    "/login": "Login",
    "/signup": "Signup",
    "/reset": "Reset Password",
    "/new-password": "New Password",
}

# Never echoed back into a form
PASSWORD_FIELDS = {"password", "confirm_password"}


class PageResponse(BaseModel):
    path: str
    page_title: str
    error_message: Optional[str] = None
    validation_errors: Dict[str, str] = Field(default_factory=dict)
    old_input: Dict[str, str] = Field(default_factory=dict)


class NewPasswordPage(PageResponse):
    user_id: str
    password_token: str


class HomePage(PageResponse):
    is_authenticated: bool = False
    user: Optional[dict] = None


def strip_passwords(values: Optional[dict]) -> Dict[str, str]:
    if not isinstance(values, dict):
        return {}
    return {
        key: str(value)
        for key, value in values.items()
        if key not in PASSWORD_FIELDS and value is not None
    }


def page_from_flash(path: str, flash: Optional[dict]) -> PageResponse:
    """Page model for path with the consumed flash slot applied"""
    flash = flash or {}
    return PageResponse(
        path=path,
        page_title=PAGE_TITLES.get(path, ""),
        error_message=flash.get("message"),
        old_input=strip_passwords(flash.get("old_input")),
    )
