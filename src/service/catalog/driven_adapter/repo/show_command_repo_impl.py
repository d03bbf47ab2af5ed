from typing import AsyncContextManager, Callable, List

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.uuid_binding import to_pg_uuid
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IShowCommandRepo
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.driven_adapter.model.show_model import ShowModel
from src.service.catalog.driven_adapter.repo.show_mapper import show_model_to_entity


class ShowCommandRepoImpl(IShowCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create_many(self, *, shows: List[Show]) -> List[Show]:
        if not shows:
            return []
        async with self.session_factory() as session:
            stmt = (
                insert(ShowModel)
                .values(
                    [
                        {
                            'id': to_pg_uuid(show.id),
                            'movie_id': show.movie_id,
                            'show_date_time': show.show_date_time,
                            'show_price': show.show_price,
                        }
                        for show in shows
                    ]
                )
                .on_conflict_do_nothing(constraint='uq_show_movie_slot')
                .returning(ShowModel)
            )
            created = [show_model_to_entity(m) for m in (await session.execute(stmt)).scalars()]
            await session.commit()
            return created
