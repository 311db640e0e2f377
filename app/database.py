"""Database connection and session management."""

from sqlmodel import Session, SQLModel, create_engine

from app.config import settings


def _engine_options(database_url: str) -> dict:
    """Pool options for server databases, thread option for SQLite."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)


def init_db() -> None:
    """Create all tables."""
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    """Get database session."""
    with Session(engine) as session:
        yield session
