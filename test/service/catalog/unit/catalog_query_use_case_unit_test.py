from datetime import datetime, timedelta, timezone

import pytest
import uuid_utils

from src.platform.exception.exceptions import NotFoundError
from src.service.catalog.app.command.toggle_favorite_movie_use_case import (
    ToggleFavoriteMovieUseCase,
)
from src.service.catalog.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.catalog.app.query.list_favorite_movies_use_case import (
    ListFavoriteMoviesUseCase,
)
from src.service.catalog.app.query.list_show_times_use_case import ListShowTimesUseCase
from src.service.catalog.app.query.list_upcoming_shows_use_case import ListUpcomingShowsUseCase
from src.service.catalog.domain.entity.movie_entity import Movie
from src.service.catalog.domain.entity.show_entity import Show
from test.in_memory_adapters import (
    InMemoryFavoriteMovieRepo,
    InMemoryMovieRepo,
    InMemorySeatState,
    InMemoryShowRepo,
)
from test.test_constants import BUYER_ID, MOVIE_ID


def _show(movie_id: str, hours_from_now: float) -> Show:
    return Show.create(
        movie_id=movie_id,
        show_date_time=datetime.now(timezone.utc) + timedelta(hours=hours_from_now),
        show_price=100,
    )


class TestListUpcomingShows:
    @pytest.mark.asyncio
    async def test_first_upcoming_show_per_movie(self, movie: Movie) -> None:
        other = Movie(id='550', title='Fight Club')
        past = _show(MOVIE_ID, -2)
        soon = _show(MOVIE_ID, 3)
        later = _show(MOVIE_ID, 30)
        other_show = _show('550', 5)
        use_case = ListUpcomingShowsUseCase(
            show_query_repo=InMemoryShowRepo([past, later, other_show, soon]),
            movie_repo=InMemoryMovieRepo([movie, other]),
        )

        shows = await use_case.list_upcoming_shows()

        assert [s['id'] for s in shows] == [str(soon.id), str(other_show.id)]
        assert shows[0]['movie']['title'] == movie.title
        assert shows[1]['movie']['id'] == '550'


class TestListShowTimes:
    @pytest.mark.asyncio
    async def test_groups_upcoming_shows_by_date(
        self, movie_repo: InMemoryMovieRepo, upcoming_show: Show
    ) -> None:
        use_case = ListShowTimesUseCase(
            show_query_repo=InMemoryShowRepo([upcoming_show, _show(MOVIE_ID, -1)]),
            movie_repo=movie_repo,
        )

        result = await use_case.list_show_times(movie_id=MOVIE_ID)

        start = upcoming_show.show_date_time
        assert result['movie']['id'] == MOVIE_ID
        assert result['date_time'] == {
            start.date().isoformat(): [
                {'time': start.strftime('%H:%M'), 'show_id': str(upcoming_show.id)}
            ]
        }

    @pytest.mark.asyncio
    async def test_unknown_movie(self, show_repo: InMemoryShowRepo) -> None:
        use_case = ListShowTimesUseCase(show_query_repo=show_repo, movie_repo=InMemoryMovieRepo())

        with pytest.raises(NotFoundError):
            await use_case.list_show_times(movie_id='missing')


class TestGetSeatMap:
    @pytest.mark.asyncio
    async def test_returns_label_to_holder(
        self, show_repo: InMemoryShowRepo, seat_state: InMemorySeatState, upcoming_show: Show
    ) -> None:
        await seat_state.claim_seats(show_id=upcoming_show.id, seat_labels=['D1'], holder_id='b1')
        use_case = GetSeatMapUseCase(show_query_repo=show_repo, seat_state_query_handler=seat_state)

        assert await use_case.get_seat_map(show_id=upcoming_show.id) == {'D1': 'b1'}

    @pytest.mark.asyncio
    async def test_fresh_show_is_empty(
        self, show_repo: InMemoryShowRepo, seat_state: InMemorySeatState, upcoming_show: Show
    ) -> None:
        use_case = GetSeatMapUseCase(show_query_repo=show_repo, seat_state_query_handler=seat_state)

        assert await use_case.get_seat_map(show_id=upcoming_show.id) == {}

    @pytest.mark.asyncio
    async def test_unknown_show(
        self, show_repo: InMemoryShowRepo, seat_state: InMemorySeatState
    ) -> None:
        use_case = GetSeatMapUseCase(show_query_repo=show_repo, seat_state_query_handler=seat_state)

        with pytest.raises(NotFoundError):
            await use_case.get_seat_map(show_id=uuid_utils.uuid7())


class TestFavorites:
    @pytest.mark.asyncio
    async def test_toggle_adds_then_removes(self, favorite_repo: InMemoryFavoriteMovieRepo) -> None:
        use_case = ToggleFavoriteMovieUseCase(favorite_movie_repo=favorite_repo)

        assert await use_case.toggle(user_id=BUYER_ID, movie_id=MOVIE_ID) is True
        assert await use_case.toggle(user_id=BUYER_ID, movie_id=MOVIE_ID) is False
        assert await favorite_repo.list_movie_ids(user_id=BUYER_ID) == []

    @pytest.mark.asyncio
    async def test_list_skips_movies_not_in_catalog(
        self, favorite_repo: InMemoryFavoriteMovieRepo, movie_repo: InMemoryMovieRepo
    ) -> None:
        await favorite_repo.toggle(user_id=BUYER_ID, movie_id=MOVIE_ID)
        await favorite_repo.toggle(user_id=BUYER_ID, movie_id='never-imported')
        use_case = ListFavoriteMoviesUseCase(favorite_movie_repo=favorite_repo, movie_repo=movie_repo)

        movies = await use_case.list_favorites(user_id=BUYER_ID)

        assert [m['id'] for m in movies] == [MOVIE_ID]
