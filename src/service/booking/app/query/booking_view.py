"""Expands bookings with their show, movie and (optionally) user for API responses."""

from typing import Any, Dict, List, Optional

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo
from src.service.shared_kernel.app.interface import IUserQueryRepo


async def expand_bookings(
    bookings: List[Booking],
    *,
    show_query_repo: IShowQueryRepo,
    movie_repo: IMovieRepo,
    user_query_repo: Optional[IUserQueryRepo] = None,
) -> List[Dict[str, Any]]:
    shows = {
        str(s.id): s
        for s in await show_query_repo.get_by_ids(
            show_ids=list({str(b.show_id): b.show_id for b in bookings}.values())
        )
    }
    movies = {
        m.id: m
        for m in await movie_repo.get_by_ids(
            movie_ids=list({s.movie_id for s in shows.values()})
        )
    }
    users = {}
    if user_query_repo is not None:
        users = {
            u.id: u
            for u in await user_query_repo.get_by_ids(user_ids=list({b.user_id for b in bookings}))
        }

    expanded = []
    for booking in bookings:
        item = booking.to_dict()
        show = shows.get(str(booking.show_id))
        item['show'] = None
        if show:
            movie = movies.get(show.movie_id)
            item['show'] = {**show.to_dict(), 'movie': movie.to_dict() if movie else None}
        if user_query_repo is not None:
            user = users.get(booking.user_id)
            item['user'] = {'id': user.id, 'name': user.name, 'email': user.email} if user else None
        expanded.append(item)
    return expanded
