"""
Database connection and session management for the catalog store.

Provides the SQLAlchemy engine, session factory and a transactional
session scope for the SQLite file backing persisted collections.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base


# Default database path (relative to project root)
DEFAULT_DB_PATH = "data/catalog_store.db"


class DatabaseManager:
    """
    Manages database connections and sessions.

    Creates the engine and session factory, and configures SQLite for
    the single-writer catalog workload.
    """

    def __init__(
        self,
        db_path: Optional[str] = None,
        echo: bool = False,
    ):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
            echo: If True, SQL statements will be logged
        """
        self.db_path = db_path or DEFAULT_DB_PATH
        self.echo = echo
        self.in_memory = ":memory:" in self.db_path

        connect_args = {"check_same_thread": False}
        engine_kwargs = dict(echo=self.echo, connect_args=connect_args)

        if self.in_memory:
            # StaticPool keeps the single in-memory connection alive
            engine_kwargs["poolclass"] = StaticPool
        else:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self.database_url = f"sqlite:///{self.db_path}"
        self.engine = create_engine(self.database_url, **engine_kwargs)

        self._configure_sqlite()

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def _configure_sqlite(self) -> None:
        """Configure SQLite-specific settings."""
        in_memory = self.in_memory

        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

    def create_all_tables(self) -> None:
        """Create all tables defined in models."""
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope with automatic commit/rollback.

        Usage:
            with db_manager.session_scope() as session:
                session.add(collection)
                # Automatically commits on success, rolls back on exception
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close all connections and dispose of the engine."""
        self.engine.dispose()


def create_test_db() -> DatabaseManager:
    """
    Create an in-memory database for testing.

    Returns:
        DatabaseManager instance with tables created
    """
    db = DatabaseManager(db_path=":memory:", echo=False)
    db.create_all_tables()
    return db
