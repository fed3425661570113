"""Unit of work pattern implementation."""
from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncGenerator, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.repositories import AnalysisRepository, FrameRepository


class UnitOfWork:
    """Unit of work sharing one session between the catalog and the analysis log.

    Attributes:
        frames: Frame catalog repository (also the matcher's FrameCatalog)
        analyses: Analysis log repository
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work.

        Args:
            session: Database session
        """
        self._session = session
        self.frames = FrameRepository(session)
        self.analyses = AnalysisRepository(session)

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Commit when the block succeeded, roll back otherwise."""
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self._session.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator["UnitOfWork", None]:
        """Scope that commits on success and rolls back on error.

        Example:
            ```python
            async with uow.transaction():
                await uow.frames.create(new_frame)
            ```
        """
        try:
            yield self
            await self.commit()
        except Exception:
            await self.rollback()
            raise
