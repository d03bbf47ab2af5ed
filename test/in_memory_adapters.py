"""
In-memory adapters honouring the same interfaces as the PostgreSQL / Kvrocks
implementations. Behavioural tests run the real use cases against these.
"""

import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.deferred_task.deferred_task import DeferredTask
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.exception.exceptions import SeatsUnavailableError
from src.service.booking.app.interface import IBookingCommandRepo, IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.catalog.app.interface import (
    IFavoriteMovieRepo,
    IMovieRepo,
    IShowCommandRepo,
    IShowQueryRepo,
)
from src.service.catalog.domain.entity.movie_entity import Movie
from src.service.catalog.domain.entity.show_entity import Show
from src.service.notification.app.interface import IEmailSender
from src.service.reservation.app.interface import (
    ISeatStateCommandHandler,
    ISeatStateQueryHandler,
)
from src.service.reservation.domain.seat_selection_domain import normalize_seat_labels
from src.service.shared_kernel.app.interface import IUserCommandRepo, IUserQueryRepo
from src.service.shared_kernel.domain.entity.user_entity import UserEntity


class InMemorySeatState(ISeatStateCommandHandler, ISeatStateQueryHandler):
    """Same all-or-nothing and holder-check rules as the Lua scripts."""

    def __init__(self) -> None:
        self.occupied: Dict[str, Dict[str, str]] = {}

    async def claim_seats(self, *, show_id: UUID, seat_labels: List[str], holder_id: str) -> None:
        labels = normalize_seat_labels(seat_labels)
        seats = self.occupied.setdefault(str(show_id), {})
        taken = [label for label in labels if label in seats]
        if taken:
            raise SeatsUnavailableError(seats=taken)
        for label in labels:
            seats[label] = holder_id

    async def release_seats(
        self, *, show_id: UUID, seat_labels: List[str], holder_id: Optional[str] = None
    ) -> int:
        seats = self.occupied.setdefault(str(show_id), {})
        released = 0
        for label in seat_labels:
            if label in seats and (holder_id is None or seats[label] == holder_id):
                del seats[label]
                released += 1
        return released

    async def confirm_seats(self, *, show_id: UUID, seat_labels: List[str]) -> None:
        return None

    async def get_occupied_seats(self, *, show_id: UUID) -> Dict[str, str]:
        return dict(self.occupied.get(str(show_id), {}))


class InMemoryBookingRepo(IBookingCommandRepo, IBookingQueryRepo):
    def __init__(self) -> None:
        self.bookings: Dict[str, Booking] = {}

    async def create(self, *, booking: Booking) -> Booking:
        self.bookings[str(booking.id)] = booking
        return booking

    async def mark_paid(self, *, booking_id: UUID, paid_at: datetime) -> bool:
        booking = self.bookings.get(str(booking_id))
        if not booking or booking.is_paid:
            return False
        self.bookings[str(booking_id)] = booking.mark_paid(paid_at=paid_at)
        return True

    async def delete_if_unpaid(self, *, booking_id: UUID) -> bool:
        booking = self.bookings.get(str(booking_id))
        if not booking or booking.is_paid:
            return False
        del self.bookings[str(booking_id)]
        return True

    async def delete(self, *, booking_id: UUID) -> bool:
        return self.bookings.pop(str(booking_id), None) is not None

    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        return self.bookings.get(str(booking_id))

    async def list_by_user(self, *, user_id: str) -> List[Booking]:
        return [b for b in await self.list_all() if b.user_id == user_id]

    async def list_all(self) -> List[Booking]:
        return sorted(self.bookings.values(), key=lambda b: b.created_at, reverse=True)

    async def list_paid_by_show_ids(self, *, show_ids: List[UUID]) -> List[Booking]:
        wanted = {str(show_id) for show_id in show_ids}
        return [b for b in self.bookings.values() if b.is_paid and str(b.show_id) in wanted]

    async def paid_summary(self) -> Tuple[int, int]:
        paid = [b for b in self.bookings.values() if b.is_paid]
        return len(paid), sum(b.amount for b in paid)


class InMemoryShowRepo(IShowCommandRepo, IShowQueryRepo):
    def __init__(self, shows: Optional[List[Show]] = None) -> None:
        self.shows: Dict[str, Show] = {str(s.id): s for s in shows or []}

    async def create_many(self, *, shows: List[Show]) -> List[Show]:
        existing = {(s.movie_id, s.show_date_time) for s in self.shows.values()}
        created = []
        for show in shows:
            if (show.movie_id, show.show_date_time) in existing:
                continue
            self.shows[str(show.id)] = show
            existing.add((show.movie_id, show.show_date_time))
            created.append(show)
        return created

    async def get_by_id(self, *, show_id: UUID) -> Optional[Show]:
        return self.shows.get(str(show_id))

    async def get_by_ids(self, *, show_ids: List[UUID]) -> List[Show]:
        return [self.shows[str(i)] for i in show_ids if str(i) in self.shows]

    async def list_upcoming(self, *, now: datetime, movie_id: Optional[str] = None) -> List[Show]:
        return sorted(
            (
                s
                for s in self.shows.values()
                if s.show_date_time >= now and (movie_id is None or s.movie_id == movie_id)
            ),
            key=lambda s: s.show_date_time,
        )

    async def list_starting_between(self, *, start: datetime, end: datetime) -> List[Show]:
        return sorted(
            (s for s in self.shows.values() if start < s.show_date_time <= end),
            key=lambda s: s.show_date_time,
        )


class InMemoryMovieRepo(IMovieRepo):
    def __init__(self, movies: Optional[List[Movie]] = None) -> None:
        self.movies: Dict[str, Movie] = {m.id: m for m in movies or []}

    async def get_by_id(self, *, movie_id: str) -> Optional[Movie]:
        return self.movies.get(movie_id)

    async def get_by_ids(self, *, movie_ids: List[str]) -> List[Movie]:
        return [self.movies[i] for i in movie_ids if i in self.movies]

    async def save(self, *, movie: Movie) -> Movie:
        self.movies[movie.id] = movie
        return movie


class InMemoryFavoriteMovieRepo(IFavoriteMovieRepo):
    def __init__(self) -> None:
        self.favorites: Dict[str, List[str]] = {}

    async def toggle(self, *, user_id: str, movie_id: str) -> bool:
        movie_ids = self.favorites.setdefault(user_id, [])
        if movie_id in movie_ids:
            movie_ids.remove(movie_id)
            return False
        movie_ids.append(movie_id)
        return True

    async def list_movie_ids(self, *, user_id: str) -> List[str]:
        return list(self.favorites.get(user_id, []))


class InMemoryUserRepo(IUserCommandRepo, IUserQueryRepo):
    def __init__(self, users: Optional[List[UserEntity]] = None) -> None:
        self.users: Dict[str, UserEntity] = {u.id: u for u in users or []}

    async def upsert(self, *, user: UserEntity) -> UserEntity:
        self.users[user.id] = user
        return user

    async def delete(self, *, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        return self.users.get(user_id)

    async def get_by_ids(self, *, user_ids: List[str]) -> List[UserEntity]:
        return [self.users[i] for i in user_ids if i in self.users]

    async def list_all(self) -> List[UserEntity]:
        return list(self.users.values())

    async def count(self) -> int:
        return len(self.users)


@attrs.define
class ScheduledTask:
    task_id: str
    handler: str
    payload: Dict[str, Any]
    due_at: float
    attempts: int = 0
    lease: Optional[int] = None


class InMemoryDeferredTaskQueue(IDeferredTaskQueue):
    """
    Queue with a controllable clock: `now` defaults to time.time() but tests
    set it directly to jump past a hold window.
    """

    def __init__(self, *, now: Optional[float] = None) -> None:
        self.now = now if now is not None else time.time()
        self.tasks: Dict[str, ScheduledTask] = {}
        self._lease_seq = 0
        self.fail_next_schedule: Optional[Exception] = None

    async def schedule_after(
        self,
        *,
        delay_seconds: float,
        handler: str,
        payload: Dict[str, Any],
        task_id: Optional[str] = None,
        replace: bool = False,
    ) -> str:
        if self.fail_next_schedule is not None:
            error, self.fail_next_schedule = self.fail_next_schedule, None
            raise error

        task_id = task_id or str(uuid_utils.uuid7())
        due_at = self.now + max(delay_seconds, 0)
        existing = self.tasks.get(task_id)
        if existing and not replace and existing.due_at <= due_at:
            return task_id
        attempts = existing.attempts if existing and not replace else 0
        self.tasks[task_id] = ScheduledTask(task_id, str(handler), dict(payload), due_at, attempts)
        return task_id

    async def claim_due(self, *, limit: int) -> List[DeferredTask]:
        due = sorted(
            (t for t in self.tasks.values() if t.due_at <= self.now), key=lambda t: t.due_at
        )[:limit]
        claimed = []
        for task in due:
            self._lease_seq += 1
            task.attempts += 1
            task.lease = self._lease_seq
            task.due_at = self.now + 60
            claimed.append(
                DeferredTask(task.task_id, task.handler, task.payload, task.attempts, task.lease)
            )
        return claimed

    async def ack(self, *, task: DeferredTask) -> bool:
        # A handler that rescheduled its own task replaced the entry; keep it
        current = self.tasks.get(task.task_id)
        if current is None or current.lease != task.lease_until_ms:
            return False
        del self.tasks[task.task_id]
        return True

    async def retry(self, *, task: DeferredTask, delay_seconds: float) -> bool:
        current = self.tasks.get(task.task_id)
        if current is None or current.lease != task.lease_until_ms:
            return False
        current.lease = None
        current.due_at = self.now + delay_seconds
        return True

    def handlers_scheduled(self) -> List[str]:
        return [t.handler for t in self.tasks.values()]


class RecordingEmailSender(IEmailSender):
    def __init__(self, *, fail_for: Optional[set[str]] = None) -> None:
        self.sent_emails: List[Dict[str, str]] = []
        self.fail_for = fail_for or set()

    async def send_email(self, *, to: str, subject: str, body: str) -> bool:
        if to in self.fail_for:
            raise ConnectionError(f'SMTP refused {to}')
        self.sent_emails.append({'to': to, 'subject': subject, 'body': body})
        return True
