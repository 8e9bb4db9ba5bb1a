"""
Database configuration and connection management for RarePlants.

This module provides the async SQLAlchemy setup backing the plant store:
engine configuration, pooled connections, health checks and per-operation
session scoping.
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Dict, Any
from urllib.parse import urlparse

from sqlalchemy import text, event
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncEngine,
    async_sessionmaker,
    AsyncSession
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.orm import declarative_base

from rareplants.shared.exceptions import StorageError, ConfigurationError

logger = logging.getLogger(__name__)

# SQLAlchemy base class for all models
Base = declarative_base()

SUPPORTED_SCHEMES = ('postgresql+asyncpg', 'sqlite+aiosqlite')
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./rareplants.db"


class DatabaseConfig:
    """Database configuration with validation and connection pooling settings."""

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        command_timeout: int = 60,
    ):
        self.url = self._validate_url(url)
        self.echo = echo
        self.pool_size = self._validate_positive_int(pool_size, "pool_size")
        self.max_overflow = self._validate_non_negative_int(max_overflow, "max_overflow")
        self.pool_timeout = self._validate_positive_int(pool_timeout, "pool_timeout")
        self.pool_recycle = self._validate_positive_int(pool_recycle, "pool_recycle")
        self.pool_pre_ping = pool_pre_ping
        self.command_timeout = self._validate_positive_int(command_timeout, "command_timeout")

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Build configuration from DATABASE_* environment variables."""
        try:
            return cls(
                url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
                echo=os.getenv("DATABASE_ECHO", "false").lower() == "true",
                pool_size=int(os.getenv("DATABASE_POOL_SIZE", "10")),
                max_overflow=int(os.getenv("DATABASE_MAX_OVERFLOW", "20")),
                pool_timeout=int(os.getenv("DATABASE_POOL_TIMEOUT", "30")),
                pool_recycle=int(os.getenv("DATABASE_POOL_RECYCLE", "3600")),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid database setting: {e}")

    @staticmethod
    def _validate_url(url: str) -> str:
        """Validate database URL format."""
        if not url:
            raise ConfigurationError("Database URL cannot be empty")

        scheme = urlparse(url).scheme
        if not scheme:
            raise ConfigurationError("Database URL must include a scheme (e.g., postgresql+asyncpg://)")
        if scheme not in SUPPORTED_SCHEMES:
            raise ConfigurationError(f"Unsupported database scheme: {scheme}")

        return url

    @staticmethod
    def _validate_positive_int(value: int, name: str) -> int:
        """Validate that a value is a positive integer."""
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigurationError(f"{name} must be a positive integer, got: {value}")
        return value

    @staticmethod
    def _validate_non_negative_int(value: int, name: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigurationError(f"{name} must be a non-negative integer, got: {value}")
        return value

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and (":memory:" in self.url or self.url.endswith(":///"))

    def to_engine_kwargs(self) -> Dict[str, Any]:
        """Convert config to SQLAlchemy engine kwargs."""
        kwargs: Dict[str, Any] = {
            "echo": self.echo,
            "pool_pre_ping": self.pool_pre_ping,
        }

        if self.is_in_memory:
            # Every session must see the same in-memory database
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        elif self.is_sqlite:
            # SQLite doesn't support connection pooling
            kwargs["poolclass"] = NullPool
        else:
            kwargs.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "connect_args": {
                    "command_timeout": self.command_timeout,
                    "server_settings": {"application_name": "RarePlants"},
                },
            })

        return kwargs


class DatabaseManager:
    """Manages the plant store engine, sessions, health checks and lifecycle."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None
        self._health_check_query = text("SELECT 1")

    async def initialize(self) -> None:
        """Initialize database engine and session factory."""
        try:
            self.engine = create_async_engine(self.config.url, **self.config.to_engine_kwargs())

            self.session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=True,
            )

            self._setup_event_listeners()

            logger.info("Database initialized: %s", self._sanitize_url(self.config.url))

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise StorageError(f"Database initialization failed: {e}", operation="initialize")

    def _setup_event_listeners(self) -> None:
        """Log connection checkout and return for pool diagnostics."""
        if not self.engine:
            return

        @event.listens_for(self.engine.sync_engine, "checkout")
        def on_checkout(dbapi_connection, connection_record, connection_proxy):
            logger.debug(f"Connection checked out from pool: {id(dbapi_connection)}")

        @event.listens_for(self.engine.sync_engine, "checkin")
        def on_checkin(dbapi_connection, connection_record):
            logger.debug(f"Connection returned to pool: {id(dbapi_connection)}")

    async def health_check(self) -> Dict[str, Any]:
        """Perform database health check."""
        if not self.engine:
            raise StorageError("Database not initialized", operation="health_check")

        started = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(self._health_check_query)

            return {
                "status": "healthy",
                "url": self._sanitize_url(self.config.url),
                "pool": self._get_pool_status(),
                "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
            }

        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
            }

    def _get_pool_status(self) -> Dict[str, Any]:
        """Get connection pool status."""
        if not self.engine:
            return {"type": "no_pool"}

        pool = self.engine.pool
        status: Dict[str, Any] = {"type": pool.__class__.__name__}
        for name in ("size", "checkedin", "checkedout", "overflow"):
            method = getattr(pool, name, None)
            if callable(method):
                status[name] = method()
        return status

    @staticmethod
    def _sanitize_url(url: str) -> str:
        """Remove sensitive information from database URL."""
        parsed = urlparse(url)
        if parsed.password:
            return url.replace(parsed.password, "***")
        return url

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session for a single operation.

        The session is committed when the block exits normally, rolled back
        when it raises, and closed in either case.
        """
        if not self.session_factory:
            raise StorageError("Database not initialized", operation="session")

        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all database tables."""
        if not self.engine:
            raise StorageError("Database not initialized", operation="create_tables")

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create tables: {e}")
            raise StorageError(f"Table creation failed: {e}", operation="create_tables")

    async def drop_tables(self) -> None:
        """Drop all database tables (use with caution!)."""
        if not self.engine:
            raise StorageError("Database not initialized", operation="drop_tables")

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("All database tables dropped")

    async def close(self) -> None:
        """Close database connections and cleanup."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connections closed")


# Global database manager instance
db_manager: Optional[DatabaseManager] = None


async def initialize_database(config: DatabaseConfig) -> DatabaseManager:
    """Initialize global database manager."""
    global db_manager
    db_manager = DatabaseManager(config)
    await db_manager.initialize()
    return db_manager


def get_database_manager() -> DatabaseManager:
    """Get global database manager instance."""
    if db_manager is None:
        raise StorageError("Database not initialized. Call initialize_database() first.")
    return db_manager


async def close_database() -> None:
    """Close database connections."""
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None
