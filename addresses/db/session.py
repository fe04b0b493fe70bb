"""Database session management."""
import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from ..exceptions import PersistenceError
from .models import Base

logger = logging.getLogger(__name__)


def commit_or_raise(session: Session) -> None:
    """Commit the session, turning database failures into PersistenceError.

    The session is rolled back before the error propagates so it stays usable.
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        logger.debug(f"Commit failed, rolling back session {id(session)}: {e}")
        session.rollback()
        raise PersistenceError(f"Failed to save changes: {e}") from e


def flush_or_raise(session: Session) -> None:
    """Flush pending changes without committing."""
    try:
        session.flush()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"Failed to save changes: {e}") from e


class SessionManager:
    """Manages database sessions."""

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize session manager with database URL."""
        self.engine = create_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)

    def create_all(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    def __enter__(self) -> Session:
        """Context manager entry."""
        self.session = self.get_session()
        self.logger.debug(f"Entering context with session: {id(self.session)}")
        return self.session

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.logger.debug(f"Exiting context with session: {id(self.session)}")
        try:
            if exc_type is None:
                self.logger.debug("Committing session")
                commit_or_raise(self.session)
            else:
                self.logger.debug("Rolling back session")
                self.session.rollback()
        finally:
            self.logger.debug("Closing session")
            self.session.close()
