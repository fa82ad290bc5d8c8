from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from shipping_backend.app.core.database import async_session


# One session per request; shipping endpoints only read
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session
