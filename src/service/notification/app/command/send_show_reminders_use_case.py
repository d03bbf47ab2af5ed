from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from src.platform.config.core_setting import settings
from src.platform.deferred_task.deferred_task import DeferredTaskHandlerName
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface import IBookingQueryRepo
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo
from src.service.notification.app.interface import IEmailSender
from src.service.notification.domain.email_template import show_reminder_email
from src.service.shared_kernel.app.interface import IUserQueryRepo


SHOW_REMINDER_TASK_ID = 'send_show_reminders'


class SendShowRemindersUseCase:
    """
    Recurring job: remind every user holding a paid booking for a show that
    starts within the next interval, then schedule the next run. Consecutive
    runs cover back-to-back windows.
    """

    def __init__(
        self,
        *,
        show_query_repo: IShowQueryRepo,
        movie_repo: IMovieRepo,
        booking_query_repo: IBookingQueryRepo,
        user_query_repo: IUserQueryRepo,
        email_sender: IEmailSender,
        deferred_task_queue: IDeferredTaskQueue,
        interval_seconds: Optional[int] = None,
    ) -> None:
        self.show_query_repo = show_query_repo
        self.movie_repo = movie_repo
        self.booking_query_repo = booking_query_repo
        self.user_query_repo = user_query_repo
        self.email_sender = email_sender
        self.deferred_task_queue = deferred_task_queue
        self.interval_seconds = interval_seconds or settings.SHOW_REMINDER_INTERVAL_SECONDS

    async def ensure_scheduled(self) -> None:
        """Arm the first run; an already scheduled run is kept."""
        await self.deferred_task_queue.schedule_after(
            delay_seconds=self.interval_seconds,
            handler=DeferredTaskHandlerName.SEND_SHOW_REMINDERS,
            payload={},
            task_id=SHOW_REMINDER_TASK_ID,
        )

    @Logger.io
    async def send_reminders(self, *, now: Optional[datetime] = None) -> Dict[str, int]:
        now = now or datetime.now(timezone.utc)
        window_end = now + timedelta(seconds=self.interval_seconds)

        shows = await self.show_query_repo.list_starting_between(start=now, end=window_end)
        bookings = await self.booking_query_repo.list_paid_by_show_ids(
            show_ids=[s.id for s in shows]
        )
        movies = {
            m.id: m
            for m in await self.movie_repo.get_by_ids(movie_ids=list({s.movie_id for s in shows}))
        }
        users = {
            u.id: u
            for u in await self.user_query_repo.get_by_ids(
                user_ids=list({b.user_id for b in bookings})
            )
        }

        sent = failed = 0
        for show in shows:
            recipients = sorted({b.user_id for b in bookings if str(b.show_id) == str(show.id)})
            movie = movies.get(show.movie_id)
            for user_id in recipients:
                user = users.get(user_id)
                if not user or not user.email:
                    continue
                subject, body = show_reminder_email(
                    user_name=user.name,
                    movie_title=movie.title if movie else show.movie_id,
                    show_date_time=show.show_date_time,
                )
                try:
                    await self.email_sender.send_email(to=user.email, subject=subject, body=body)
                    sent += 1
                except Exception as e:
                    failed += 1
                    Logger.base.error(f'📧 [REMINDER] Failed to email {user.email}: {e}')

        Logger.base.info(f'⏰ [REMINDER] Sent {sent} reminder(s), {failed} failed')

        await self.deferred_task_queue.schedule_after(
            delay_seconds=self.interval_seconds,
            handler=DeferredTaskHandlerName.SEND_SHOW_REMINDERS,
            payload={},
            task_id=SHOW_REMINDER_TASK_ID,
            replace=True,
        )
        return {'sent': sent, 'failed': failed}
