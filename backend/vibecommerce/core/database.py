from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from vibecommerce.core.config import settings


def build_engine(url: str):
    """Create an engine for the given URL.

    SQLite connections are handed between the event loop and FastAPI's
    threadpool, so the same-thread check has to be switched off.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


# Create database engine - manages connection pool
engine = build_engine(settings.DATABASE_URL)

# Create session factory - each request gets a new session
# autocommit=False: Changes require explicit commit (checkout relies on this for atomicity)
# autoflush=False: Don't auto-flush before queries
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all database models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session.

    This is a FastAPI dependency that provides a database session to route handlers.
    Tests swap it out through app.dependency_overrides to get an isolated store.
    The session is automatically closed after the request completes (via finally block).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close session, even if request raises an exception
        # Prevents connection leaks
        db.close()
