import pytest
from httpx import ASGITransport, AsyncClient

from stayplanner.db.base import Base
from stayplanner.db import crud_properties, models  # noqa: F401
from stayplanner.db.session import build_engine, build_session_factory, get_db
from stayplanner.main import app


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def cottage(db):
    return await crud_properties.create_property(
        db, slug="cottage", title="Cottage", description="Sea view", price=100
    )


@pytest.fixture
async def cabin(db):
    return await crud_properties.create_property(
        db, slug="cabin", title="Cabin", description="Forest", price=80
    )


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
