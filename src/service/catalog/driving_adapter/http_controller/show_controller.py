from fastapi import APIRouter, Depends
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.create_show_use_case import CreateShowUseCase
from src.service.catalog.app.query.list_now_playing_source_use_case import (
    ListNowPlayingSourceUseCase,
)
from src.service.catalog.app.query.list_show_times_use_case import ListShowTimesUseCase
from src.service.catalog.app.query.list_upcoming_shows_use_case import ListUpcomingShowsUseCase
from src.service.catalog.driving_adapter.http_controller.schema.show_schema import (
    NowPlayingResponse,
    ShowAddRequest,
    ShowAddResponse,
    ShowListResponse,
    ShowTimesResponse,
)
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/now-playing-source')
@Logger.io
async def list_now_playing_source(
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: ListNowPlayingSourceUseCase = Depends(ListNowPlayingSourceUseCase.depends),
) -> NowPlayingResponse:
    return NowPlayingResponse(movies=await use_case.list_now_playing())


@router.post('/add')
@Logger.io
async def add_show(
    request: ShowAddRequest,
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: CreateShowUseCase = Depends(CreateShowUseCase.depends),
) -> ShowAddResponse:
    with tracer.start_as_current_span('controller.add_show') as span:
        span.set_attribute('movie.id', request.movie_id)
        span.set_attribute('admin.id', current_user.id)

        shows = await use_case.create_shows(
            movie_id=request.movie_id,
            show_price=request.show_price,
            shows_input=[slot.model_dump() for slot in request.shows_input],
        )
        return ShowAddResponse(message=f'Show added successfully ({len(shows)} new)')


@router.get('/all')
@Logger.io
async def list_upcoming_shows(
    use_case: ListUpcomingShowsUseCase = Depends(ListUpcomingShowsUseCase.depends),
) -> ShowListResponse:
    return ShowListResponse(shows=await use_case.list_upcoming_shows())


# Keep last: the path parameter would shadow the static routes above
@router.get('/{movie_id}')
@Logger.io
async def list_show_times(
    movie_id: str,
    use_case: ListShowTimesUseCase = Depends(ListShowTimesUseCase.depends),
) -> ShowTimesResponse:
    result = await use_case.list_show_times(movie_id=movie_id)
    return ShowTimesResponse(movie=result['movie'], date_time=result['date_time'])
