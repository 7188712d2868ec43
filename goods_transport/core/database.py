# goods_transport/core/database.py
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from goods_transport.core.config import settings

database_url = settings.DATABASE_URL

if database_url.startswith("sqlite"):
    engine_options = {"connect_args": {"check_same_thread": False}}
else:
    engine_options = {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_timeout": 60,
        "pool_recycle": 3600,      # Recycle connections every hour
        "pool_pre_ping": True,
    }

engine = create_async_engine(
    database_url,
    echo=False,
    future=True,
    **engine_options,
)

async_session_maker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def get_async_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session

async def dispose_engine() -> None:
    await engine.dispose()
