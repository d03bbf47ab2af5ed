from typing import AsyncContextManager, Callable, List

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IFavoriteMovieRepo
from src.service.catalog.driven_adapter.model.favorite_movie_model import FavoriteMovieModel


class FavoriteMovieRepoImpl(IFavoriteMovieRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def toggle(self, *, user_id: str, movie_id: str) -> bool:
        async with self.session_factory() as session:
            removed = await session.execute(
                delete(FavoriteMovieModel).where(
                    FavoriteMovieModel.user_id == user_id,
                    FavoriteMovieModel.movie_id == movie_id,
                )
            )
            if removed.rowcount == 0:
                await session.execute(
                    insert(FavoriteMovieModel)
                    .values(user_id=user_id, movie_id=movie_id)
                    .on_conflict_do_nothing()
                )
            await session.commit()
            return removed.rowcount == 0

    @Logger.io
    async def list_movie_ids(self, *, user_id: str) -> List[str]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(FavoriteMovieModel.movie_id)
                .where(FavoriteMovieModel.user_id == user_id)
                .order_by(FavoriteMovieModel.created_at)
            )
            return list(result.scalars().all())
