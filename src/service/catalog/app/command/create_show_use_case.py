from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.deferred_task.deferred_task import DeferredTaskHandlerName
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IMovieMetadataProvider, IMovieRepo, IShowCommandRepo
from src.service.catalog.domain.entity.movie_entity import Movie
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.domain.show_schedule_domain import parse_show_slots


class CreateShowUseCase:
    """
    Admin action: add one show per (date, time) slot for a movie.

    Flow:
    1. Validate input and expand the slots (UTC)
    2. Import the movie from the metadata provider if it is not stored yet
    3. Insert the shows (occupied seats start empty: no Kvrocks entry)
    4. Schedule the "new show" notification when at least one show is new
    """

    def __init__(
        self,
        *,
        movie_repo: IMovieRepo,
        show_command_repo: IShowCommandRepo,
        movie_metadata_provider: IMovieMetadataProvider,
        deferred_task_queue: IDeferredTaskQueue,
    ) -> None:
        self.movie_repo = movie_repo
        self.show_command_repo = show_command_repo
        self.movie_metadata_provider = movie_metadata_provider
        self.deferred_task_queue = deferred_task_queue
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
        show_command_repo: IShowCommandRepo = Depends(Provide[Container.show_command_repo]),
        movie_metadata_provider: IMovieMetadataProvider = Depends(
            Provide[Container.movie_metadata_provider]
        ),
        deferred_task_queue: IDeferredTaskQueue = Depends(Provide[Container.deferred_task_queue]),
    ) -> Self:
        return cls(
            movie_repo=movie_repo,
            show_command_repo=show_command_repo,
            movie_metadata_provider=movie_metadata_provider,
            deferred_task_queue=deferred_task_queue,
        )

    @Logger.io
    async def create_shows(
        self, *, movie_id: str, show_price: int, shows_input: List[Dict[str, Any]]
    ) -> List[Show]:
        if not movie_id:
            raise ValidationError('movie_id is required')
        if not show_price or show_price <= 0:
            raise ValidationError('show_price must be a positive integer')
        slots = parse_show_slots(shows_input)

        with self.tracer.start_as_current_span(
            'use_case.create_shows',
            attributes={'movie.id': movie_id, 'show.count': len(slots)},
        ):
            movie = await self._get_or_import_movie(movie_id=movie_id)

            shows = await self.show_command_repo.create_many(
                shows=[
                    Show.create(movie_id=movie.id, show_date_time=slot, show_price=show_price)
                    for slot in slots
                ]
            )
            Logger.base.info(
                f'🎬 [CREATE-SHOW] {len(shows)}/{len(slots)} new shows for "{movie.title}"'
            )

            # A retry that only hit existing slots announces nothing
            if shows:
                await self.deferred_task_queue.schedule_after(
                    delay_seconds=0,
                    handler=DeferredTaskHandlerName.NOTIFY_SHOW_ADDED,
                    payload={'movie_title': movie.title},
                )
            return shows

    async def _get_or_import_movie(self, *, movie_id: str) -> Movie:
        movie = await self.movie_repo.get_by_id(movie_id=movie_id)
        if movie:
            return movie

        Logger.base.info(f'🎞️ [CREATE-SHOW] Importing movie {movie_id} from metadata provider')
        return await self.movie_repo.save(
            movie=await self.movie_metadata_provider.get_movie(movie_id=movie_id)
        )
