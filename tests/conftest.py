import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="autoinspect-test-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TEST_DIR, "test.sqlite3")
os.environ["DATA_DIR"] = os.path.join(_TEST_DIR, "data")
os.environ["API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402


class FakeAnalyzer:
    """Stands in for the vision provider; answers are keyed by image bytes."""

    def __init__(self):
        self.results = {}
        self.calls = []

    async def analyze(self, image, zone, vehicle_description):
        self.calls.append((image, zone, vehicle_description))
        result = self.results.get(image)
        if isinstance(result, BaseException):
            raise result
        if result is None:
            from autoinspect.schemas.vision import PhotoAnalysis
            return PhotoAnalysis(score=10)
        return result


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    import asyncio

    from autoinspect.database import create_tables, async_session
    from autoinspect.seed import seed_data

    async def _setup():
        await create_tables()
        async with async_session() as session:
            await seed_data(session)

    asyncio.run(_setup())


@pytest_asyncio.fixture
async def db_session():
    from autoinspect.database import Base
    from autoinspect.models import vehicle, inspection  # noqa: F401

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def storage(tmp_path):
    from autoinspect.services.storage import LocalStorage
    return LocalStorage(str(tmp_path))


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def api_analyzer(analyzer):
    """Route the API's vision provider to the fake analyzer."""
    from autoinspect.main import app
    from autoinspect.services.vision_service import get_analyzer

    app.dependency_overrides[get_analyzer] = lambda: analyzer
    yield analyzer
    app.dependency_overrides.pop(get_analyzer, None)
