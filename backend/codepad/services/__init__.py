"""Business logic services — wiring for one file store per application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from codepad.config import Settings, settings as default_settings

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from codepad.services.file_store import FileStore
    from codepad.services.notifications import Notifier
    from codepad.services.persistence import PersistenceLayer

logger = logging.getLogger(__name__)


@dataclass
class Services:
    store: FileStore
    notifier: Notifier
    persistence: PersistenceLayer
    config: Settings
    engine: Engine | None = None


def build_services(config: Settings | None = None) -> Services:
    """Create storage, persistence and the file store, then load saved state."""
    from codepad.database import init_db, make_engine, make_session_factory
    from codepad.services.file_store import FileStore
    from codepad.services.notifications import Notifier
    from codepad.services.persistence import PersistenceLayer
    from codepad.services.recent_files import RecentFilesTracker
    from codepad.utils.storage import MemoryStorage, SqlStorage

    config = config or default_settings
    engine = None
    if config.storage_backend == "sqlite":
        engine = make_engine(config.database_path)
        init_db(engine)
        storage: Any = SqlStorage(make_session_factory(engine))
    else:
        storage = MemoryStorage(quota_bytes=config.storage_quota_bytes)

    notifier = Notifier(max_notices=config.max_notifications)
    persistence = PersistenceLayer(
        storage,
        notifier=notifier,
        files_key=config.files_key,
        recent_key=config.recent_files_key,
        tabs_key=config.open_tabs_key,
        active_tab_key=config.active_tab_key,
    )
    store = FileStore(
        persistence=persistence,
        recent=RecentFilesTracker(limit=config.recent_files_limit),
        default_file_name=config.default_file_name,
    )
    store.load()
    logger.info(
        "File store ready (%s storage, %d files)", config.storage_backend, len(store)
    )
    return Services(
        store=store,
        notifier=notifier,
        persistence=persistence,
        config=config,
        engine=engine,
    )


def init_services(app_state: Any, config: Settings | None = None) -> Services:
    """Build services and attach them to ``app.state``."""
    services = build_services(config)
    app_state.services = services
    return services


def shutdown_services(app_state: Any) -> None:
    services: Services | None = getattr(app_state, "services", None)
    if services is None:
        return
    services.store.save()
    if services.engine is not None:
        services.engine.dispose()
    app_state.services = None
    logger.info("Services shut down")
