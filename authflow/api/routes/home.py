from typing import Optional

from fastapi import APIRouter, Depends

from authflow.api.pages import PAGE_TITLES, HomePage
from authflow.app.services.session_store import SessionStore
from authflow.depends import get_session_store, get_session_token

router = APIRouter(tags=["Home"])


@router.get("/", response_model=HomePage)
async def home(
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """Home page; shows who is logged in, if anyone"""
    session = await session_store.load(session_token)
    is_authenticated = session is not None and session.is_logged_in

    return HomePage(
        path="/",
        page_title=PAGE_TITLES["/"],
        is_authenticated=is_authenticated,
        user=session.user_data if is_authenticated else None,
    )
