"""
Domain Exceptions

Failures raised by leaf collaborators (store, token source, mail transport).
Use cases translate the recoverable ones into Result errors.
"""


class EmailAlreadyExistsError(Exception):
    """Unique email constraint rejected a new user"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class EntropyError(Exception):
    """OS random source unavailable; no token can be issued"""


class MailFailure(Exception):
    """Outbound mail could not be delivered"""
