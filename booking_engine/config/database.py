"""Database configuration and connection setup"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from booking_engine.config.settings import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def is_in_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def engine_options(url: str) -> dict:
    """Pool options per backend"""
    if is_in_memory_sqlite(url):
        # Every session must see the same in-memory database
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    if make_url(url).get_backend_name() == "sqlite":
        # File database: one connection per session, default pool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "poolclass": QueuePool,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


# Create database engine with connection pooling
engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    **engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """Create all database tables that do not exist yet"""
    from booking_engine.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


def drop_tables():
    """Drop all database tables"""
    from booking_engine.models import Base

    Base.metadata.drop_all(bind=engine)


if __name__ == "__main__":
    create_tables()
