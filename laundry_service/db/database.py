"""Database connection and session management"""
from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Connection-pooled access to the relational store
    
    Constructed once per application and passed to whoever needs a
    session; nothing in the service reaches for a global engine.
    """
    
    def __init__(self, database_url: str, pool_size: int = 5, max_overflow: int = 10, echo: bool = False):
        logger.info("Initializing database connection")
        
        if database_url.startswith("sqlite"):
            # Single shared connection so in-memory databases survive across sessions
            self.engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo
            )
        else:
            self.engine = create_engine(
                database_url,
                pool_pre_ping=True,
                pool_size=pool_size,
                max_overflow=max_overflow,
                echo=echo
            )
        
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Database connection initialized")
    
    def create_tables(self):
        """Create all tables"""
        # Register the models on Base.metadata before create_all()
        from laundry_service.models import order  # noqa: F401
        
        logger.info("Creating database tables")
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created")
    
    def drop_tables(self):
        Base.metadata.drop_all(bind=self.engine)
    
    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session scoped to one logical operation, closed on every exit path"""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()
    
    def ping(self) -> bool:
        """Round trip to the store"""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    
    def dispose(self):
        self.engine.dispose()
        logger.info("Database connection pool disposed")


def get_database(request: Request) -> Database:
    """Dependency for the application's Database"""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for getting database session"""
    with get_database(request).session() as db:
        yield db
