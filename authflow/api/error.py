"""
HTTP error mapping for use case Results.

Routes turn an Error they can't recover from into one of these; the
handlers in app.py render them as {"error": {"code", "message"}}.
"""

from fastapi import status
from authflow.libs.result import Error

STORE_FAILURE = Error("STORE_FAILURE", "Internal server error")


class ClientError(Exception):
    """User-facing, non-fatal failure (e.g. a dead reset link)"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ServerError(Exception):
    """Fatal request failure; the message is never shown to the browser"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": STORE_FAILURE.message}}
