from datetime import datetime
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.database.uuid_binding import to_pg_uuid
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IShowQueryRepo
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.driven_adapter.model.show_model import ShowModel
from src.service.catalog.driven_adapter.repo.show_mapper import show_model_to_entity


class ShowQueryRepoImpl(IShowQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, show_id: UUID) -> Optional[Show]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShowModel).where(ShowModel.id == to_pg_uuid(show_id))
            )
            show_model = result.scalar_one_or_none()
            return show_model_to_entity(show_model) if show_model else None

    @Logger.io
    async def get_by_ids(self, *, show_ids: List[UUID]) -> List[Show]:
        if not show_ids:
            return []
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShowModel).where(ShowModel.id.in_([to_pg_uuid(i) for i in show_ids]))
            )
            return [show_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_upcoming(self, *, now: datetime, movie_id: Optional[str] = None) -> List[Show]:
        stmt = select(ShowModel).where(ShowModel.show_date_time >= now)
        if movie_id is not None:
            stmt = stmt.where(ShowModel.movie_id == movie_id)
        async with self.session_factory() as session:
            result = await session.execute(stmt.order_by(ShowModel.show_date_time))
            return [show_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_starting_between(self, *, start: datetime, end: datetime) -> List[Show]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShowModel)
                .where(ShowModel.show_date_time > start, ShowModel.show_date_time <= end)
                .order_by(ShowModel.show_date_time)
            )
            return [show_model_to_entity(m) for m in result.scalars().all()]
