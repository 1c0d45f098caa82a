from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from authflow.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from authflow.adapter.services.smtp_mailer import SmtpMailer
from authflow.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authflow.app.services.mailer import IMailer
from authflow.app.services.password_hasher import IPasswordHasher
from authflow.app.services.session_store import SessionStore
from authflow.app.services.token_generator import TokenGenerator
from authflow.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_generator() -> TokenGenerator:
    return TokenGenerator()


def get_mailer() -> IMailer:
    return SmtpMailer(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        sender=ApplicationConfig.MAIL_FROM,
        username=ApplicationConfig.SMTP_USERNAME or None,
        password=ApplicationConfig.SMTP_PASSWORD or None,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
        timeout=ApplicationConfig.MAIL_TIMEOUT_SECONDS,
    )


def get_session_store(uow: UnitOfWork = Depends(get_unit_of_work)) -> SessionStore:
    return SessionStore(
        uow, lifetime=timedelta(hours=ApplicationConfig.SESSION_EXPIRY_HOURS)
    )


def get_session_token(request: Request) -> Optional[str]:
    """Raw session cookie value sent by the browser, if any"""
    return request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)
