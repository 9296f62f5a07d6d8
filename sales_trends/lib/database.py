from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine, make_url
from loguru import logger as log
from sales_trends.core.config import settings

class DatabaseManager:
    """
    Singleton Database Manager using SQLAlchemy.
    Provides connection pooling and session management.
    The engine is created on first use so importing the app never needs a driver.
    """
    _instance = None
    _engine: Engine = None
    _SessionFactory = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(DatabaseManager, cls).__new__(cls)
        return cls._instance

    def _initialize(self):
        connection_url = make_url(settings.DATABASE_URL)

        engine_kwargs = {
            "pool_pre_ping": settings.DB_POOL_PRE_PING,
            "echo": False, # Set to True for debugging SQL queries
        }
        # SQLite file databases do not take the server pool sizing options
        if connection_url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )

        try:
            self._engine = create_engine(connection_url, **engine_kwargs)

            self._SessionFactory = sessionmaker(
                bind=self._engine,
                autocommit=False,
                autoflush=False
            )

            log.info(f"Successfully initialized DB engine for {connection_url.render_as_string(hide_password=True)}")
        except Exception as e:
            log.error(f"Error initializing database engine: {str(e)}")
            raise e

    def get_session(self) -> Session:
        """Returns a new session object."""
        if self._SessionFactory is None:
            self._initialize()
        return self._SessionFactory()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._initialize()
        return self._engine

# Global instance
db_manager = DatabaseManager()

def get_db() -> Generator[Session, None, None]:
    """
    Dependency helper to get a DB session.
    Use with FastAPI: Depends(get_db)
    """
    db = db_manager.get_session()
    try:
        yield db
    finally:
        db.close()
