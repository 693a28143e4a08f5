from __future__ import annotations

from collections.abc import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from asset_inventory.config import settings
from asset_inventory.models import Base


def enable_sqlite_foreign_keys(target: Engine) -> None:
    # SQLite ignores REFERENCES clauses unless the pragma is set per connection.
    if target.dialect.name != 'sqlite':
        return

    @event.listens_for(target, 'connect')
    def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def _build_engine() -> Engine:
    url = settings.database_url_normalized
    connect_args = {'check_same_thread': False} if url.startswith('sqlite') else {}
    built = create_engine(url, echo=settings.database_echo, pool_pre_ping=True, connect_args=connect_args)
    enable_sqlite_foreign_keys(built)
    return built


engine = _build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(bind: Engine | None = None) -> None:
    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
