"""Test fixtures — memory-backed file store and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from codepad.config import Settings
from codepad.main import create_app
from codepad.services import build_services
from codepad.services.file_store import FileStore
from codepad.services.notifications import Notifier
from codepad.services.persistence import PersistenceLayer
from codepad.services.recent_files import RecentFilesTracker
from codepad.utils.storage import MemoryStorage

START_MILLIS = 1_700_000_000_000


class FakeClock:
    """Deterministic millisecond clock."""

    def __init__(self, start: int = START_MILLIS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def persistence(storage, notifier):
    return PersistenceLayer(storage, notifier=notifier)


@pytest.fixture
def make_store(persistence, clock):
    """Build (and load) a store over the shared storage."""

    def _make() -> FileStore:
        store = FileStore(
            persistence=persistence,
            recent=RecentFilesTracker(clock=clock),
            clock=clock,
        )
        store.load()
        return store

    return _make


@pytest.fixture
def store(make_store):
    """Loaded store — seeded with the starter index.html."""
    return make_store()


@pytest.fixture
def empty_store(clock):
    """Unpersisted store with no files and no selection."""
    return FileStore(recent=RecentFilesTracker(clock=clock), clock=clock)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        storage_backend="memory",
        data_dir=str(tmp_path),
        database_path=str(tmp_path / "codepad.db"),
    )


@pytest_asyncio.fixture
async def client(test_settings):
    """Async test client; services are attached directly (no lifespan run)."""
    app = create_app(test_settings)
    app.state.services = build_services(test_settings)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
