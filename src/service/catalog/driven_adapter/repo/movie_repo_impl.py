from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IMovieRepo
from src.service.catalog.domain.entity.movie_entity import Movie
from src.service.catalog.driven_adapter.model.movie_model import MovieModel


class MovieRepoImpl(IMovieRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, movie_id: str) -> Optional[Movie]:
        async with self.session_factory() as session:
            result = await session.execute(select(MovieModel).where(MovieModel.id == movie_id))
            movie_model = result.scalar_one_or_none()
            return self._model_to_entity(movie_model) if movie_model else None

    @Logger.io
    async def get_by_ids(self, *, movie_ids: List[str]) -> List[Movie]:
        if not movie_ids:
            return []
        async with self.session_factory() as session:
            result = await session.execute(select(MovieModel).where(MovieModel.id.in_(movie_ids)))
            return [self._model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def save(self, *, movie: Movie) -> Movie:
        values = movie.to_dict()
        values.pop('created_at')
        async with self.session_factory() as session:
            stmt = (
                insert(MovieModel)
                .values(**values)
                .on_conflict_do_update(
                    index_elements=[MovieModel.id],
                    set_={k: v for k, v in values.items() if k != 'id'},
                )
                .returning(MovieModel)
            )
            movie_model = (await session.execute(stmt)).scalar_one()
            await session.commit()
            return self._model_to_entity(movie_model)

    @staticmethod
    def _model_to_entity(movie_model: MovieModel) -> Movie:
        return Movie(
            id=movie_model.id,
            title=movie_model.title,
            overview=movie_model.overview,
            poster_path=movie_model.poster_path,
            backdrop_path=movie_model.backdrop_path,
            genres=list(movie_model.genres or []),
            casts=list(movie_model.casts or []),
            release_date=movie_model.release_date,
            original_language=movie_model.original_language,
            tagline=movie_model.tagline,
            vote_average=movie_model.vote_average,
            runtime=movie_model.runtime,
            created_at=movie_model.created_at,
        )
