from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface import IBookingQueryRepo
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo
from src.service.notification.app.interface import IEmailSender
from src.service.notification.domain.email_template import booking_confirmation_email
from src.service.shared_kernel.app.interface import IUserQueryRepo


class SendBookingConfirmationUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        show_query_repo: IShowQueryRepo,
        movie_repo: IMovieRepo,
        user_query_repo: IUserQueryRepo,
        email_sender: IEmailSender,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.show_query_repo = show_query_repo
        self.movie_repo = movie_repo
        self.user_query_repo = user_query_repo
        self.email_sender = email_sender

    @Logger.io
    async def send(self, *, booking_id: UUID) -> bool:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            Logger.base.warning(f'📧 [CONFIRM] Booking {booking_id} not found, skipping')
            return False

        user = await self.user_query_repo.get_by_id(user_id=booking.user_id)
        if not user or not user.email:
            Logger.base.warning(f'📧 [CONFIRM] No email for user {booking.user_id}, skipping')
            return False

        show = await self.show_query_repo.get_by_id(show_id=booking.show_id)
        if not show:
            Logger.base.warning(f'📧 [CONFIRM] Show {booking.show_id} not found, skipping')
            return False
        movie = await self.movie_repo.get_by_id(movie_id=show.movie_id)

        subject, body = booking_confirmation_email(
            user_name=user.name,
            movie_title=movie.title if movie else show.movie_id,
            show_date_time=show.show_date_time,
            seats=booking.booked_seats,
            amount=booking.amount,
        )
        return await self.email_sender.send_email(to=user.email, subject=subject, body=body)
