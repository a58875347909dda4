"""
Benefit Survey - Database Configuration
SQLAlchemy connection for the feedback store
"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

# Any SQLAlchemy URL; defaults to a local SQLite file in the working directory
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite:///./benefit_survey.db"
)

# SQLite needs this flag for FastAPI's threadpool
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create engine
engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def get_db():
    """Dependency for FastAPI - yields database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database - create all tables."""
    # Import models so they register with Base.metadata
    from .models import db_models  # noqa: F401
    Base.metadata.create_all(bind=engine)
