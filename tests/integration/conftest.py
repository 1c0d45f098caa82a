import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from authflow.depends import get_mailer, get_password_hasher, get_unit_of_work
from authflow.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from authflow.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authflow.app.services.mailer import IMailer
from authflow.domain.entities import User
from authflow.domain.exceptions import MailFailure


class RecordingMailer(IMailer):
    """Keeps sent messages in memory; can be told to fail"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to: str, subject: str, html: str) -> str:
        if self.fail:
            raise MailFailure("relay unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html})
        return f"<{len(self.sent)}@test>"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def mailer():
    return RecordingMailer()


@pytest_asyncio.fixture
async def client(db_session, mailer):
    from httpx import ASGITransport
    from authflow.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_mailer] = lambda: mailer
    # Low cost keeps the suite fast; the production cost is tested separately
    app.dependency_overrides[get_password_hasher] = lambda: BcryptPasswordHasher(rounds=4)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def fetch_user(db_session):
    """Reload a user row as the store currently has it"""

    async def _fetch(email: str) -> User:
        db_session.expire_all()
        result = await db_session.exec(select(User).where(User.email == email))
        return result.one()

    return _fetch


@pytest_asyncio.fixture
def signup(client):
    """Create an account through the signup route"""

    async def _signup(email="user@shop.com", password="secret1"):
        response = await client.post("/signup", json={
            "email": email,
            "password": password,
            "confirm_password": password,
        })
        assert response.status_code == 303
        return response

    return _signup
