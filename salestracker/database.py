"""Database engine and session setup."""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from salestracker.config import settings


def make_engine(url: str):
    """Create an engine, allowing SQLite connections to cross threads."""
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync dependencies in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
