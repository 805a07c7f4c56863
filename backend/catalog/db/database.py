from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from catalog.config import Config


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


def get_async_url(url: str, db_type: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    db_type = db_type.lower()
    if db_type == "postgresql":
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif db_type == "sqlite":
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


class Database:
    """Owns the async engine and the session factory handed out per request."""

    def __init__(self):
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self, url: str | None = None):
        """Create database engine.

        Args:
            url: Async SQLAlchemy URL; defaults to the configured database
        """
        self.engine = create_async_engine(
            url or get_async_url(Config.DATABASE_URL, Config.DATABASE_TYPE),
            echo=False
        )
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_tables(self):
        """Create the products and offers tables if they don't exist."""
        import catalog.models  # noqa: F401  registers the tables on Base

        if not self.engine:
            await self.connect()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None


db = Database()


async def get_session() -> AsyncSession:
    if not db.session_factory:
        await db.connect()
    async with db.session_factory() as session:
        yield session
