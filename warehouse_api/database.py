### Description ###
# Warehouse API - Clean J Shipping Backend
# - App Database Setup -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
App Database Setup

SQLite database (by default) for storing:
- Staff and customer accounts
- Issued API keys and their usage counters
- Access logs

Uses synchronous SQLAlchemy (no greenlet dependency).
"""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from warehouse_api.config import get_api_settings

# Database file location
DATA_DIR = Path(__file__).parent.parent / "data"
DATA_DIR.mkdir(exist_ok=True)
DATABASE_PATH = DATA_DIR / "warehouse.db"
DATABASE_URL = get_api_settings().database_url or f"sqlite:///{DATABASE_PATH}"

# Create engine (synchronous)
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    echo=False,  # Set True for SQL debugging
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency that provides a database session.

    Usage:
        @app.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize the database - create all tables.

    Call this on application startup.
    """
    # Import models to register them with Base
    from warehouse_api.models import access_log, api_key, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    print(f"Database initialized at: {DATABASE_URL}")
