from abc import ABC, abstractmethod

from authflow.app.repositories.session_repository import ISessionRepository
from authflow.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Transaction boundary over the credential store and the session store.

    One instance serves a whole request and is entered once per step
    (use case, session read, session write). Leaving the block without
    commit() rolls back.
    """

    users: IUserRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
