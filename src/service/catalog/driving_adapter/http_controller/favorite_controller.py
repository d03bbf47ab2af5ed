from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.toggle_favorite_movie_use_case import (
    ToggleFavoriteMovieUseCase,
)
from src.service.catalog.app.query.list_favorite_movies_use_case import (
    ListFavoriteMoviesUseCase,
)
from src.service.catalog.driving_adapter.http_controller.schema.favorite_schema import (
    FavoriteListResponse,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
)
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)


router = APIRouter()


@router.post('/update-favorite')
@Logger.io
async def update_favorite(
    request: FavoriteToggleRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ToggleFavoriteMovieUseCase = Depends(ToggleFavoriteMovieUseCase.depends),
) -> FavoriteToggleResponse:
    is_favorite = await use_case.toggle(user_id=current_user.id, movie_id=request.movie_id)
    return FavoriteToggleResponse(
        message='Favorite added successfully' if is_favorite else 'Favorite removed successfully',
        is_favorite=is_favorite,
    )


@router.get('/favorites')
@Logger.io
async def list_favorites(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListFavoriteMoviesUseCase = Depends(ListFavoriteMoviesUseCase.depends),
) -> FavoriteListResponse:
    return FavoriteListResponse(movies=await use_case.list_favorites(user_id=current_user.id))
