import logging
import uuid

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .config import settings

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
    pass

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Create any missing tables. Managed deployments run `alembic upgrade head`
    instead; create_all is a no-op for tables that already exist.
    """
    from . import models  # noqa: F401  (registers every table on Base.metadata)

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Connected to database (%s)", bind.url.get_backend_name())


def generate_id() -> str:
    return uuid.uuid4().hex
