from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from booklibrary.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    # Register the models on Base before creating tables.
    from booklibrary import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
