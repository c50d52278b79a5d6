import itertools
import secrets
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app
from app.models.contact import Contact
from app.models.user import User

_sequence = itertools.count(1)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    async def _make_user(**overrides) -> User:
        n = next(_sequence)
        fields = {
            "name": f"User {n}",
            "email": f"user{n}@email.com",
            "api_token": secrets.token_hex(20),
        }
        fields.update(overrides)
        user = User(**fields)
        async with session_factory() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_contact(session_factory):
    async def _make_contact(user: User, **overrides) -> Contact:
        n = next(_sequence)
        fields = {
            "user_id": user.id,
            "name": f"Contact {n}",
            "email": f"contact{n}@email.com",
            "birthday": date(1985, 6, 15),
            "company": "Acme Corp",
        }
        fields.update(overrides)
        contact = Contact(**fields)
        async with session_factory() as session:
            session.add(contact)
            await session.commit()
            await session.refresh(contact)
        return contact

    return _make_contact


@pytest.fixture
def fetch_contact(session_factory):
    async def _fetch(contact_id: int):
        async with session_factory() as session:
            return await session.get(Contact, contact_id)

    return _fetch


@pytest.fixture
def count_contacts(session_factory):
    async def _count() -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count(Contact.id)))
            return result.scalar()

    return _count


@pytest.fixture
async def user(make_user):
    return await make_user()


@pytest.fixture
def contact_data(user):
    return {
        "name": "Test Name",
        "email": "test@email.com",
        "birthday": "01/12/1991",
        "company": "ABC String",
        "api_token": user.api_token,
    }
