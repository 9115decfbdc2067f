from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from easyg.config import settings


def normalise_database_url(url: str) -> str:
    """Force the asyncpg driver on plain Postgres URLs (Heroku-style postgres:// included)."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return url.replace(prefix, "postgresql+asyncpg://", 1)
    return url


engine = create_async_engine(
    normalise_database_url(settings.database_url),
    pool_pre_ping=True,
    echo=settings.database_echo,
)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncSession:  # type: ignore[misc]
    async with async_session() as session:
        yield session
