from contextlib import contextmanager
import os
from pathlib import Path
from typing import Callable, ContextManager
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/foodorder.db")

SessionFactory = Callable[[], ContextManager[Session]]


def _ensure_sqlite_parent(url: str) -> None:
    # sqlite refuses to create the file when its directory is missing
    if url.startswith("sqlite:///") and ":memory:" not in url:
        db_path = url.split("sqlite:///")[-1]
        Path(db_path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def build_engine(url: str) -> Engine:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty database
        return create_engine(
            url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    _ensure_sqlite_parent(url)
    if url.startswith("sqlite"):
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, future=True, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> SessionFactory:
    """Return a ``get_session``-style factory bound to ``engine``.

    Every ``with factory() as session:`` block is one transaction: it commits
    when the block exits normally and rolls back when anything escapes it.
    """
    maker = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    @contextmanager
    def _session_scope():
        session = maker()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return _session_scope


def init_db(engine: Engine) -> None:
    from ..models import Base

    Base.metadata.create_all(engine)


engine = build_engine(DATABASE_URL)
get_session = make_session_factory(engine)
