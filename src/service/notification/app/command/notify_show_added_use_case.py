from src.platform.logging.loguru_io import Logger
from src.service.notification.app.interface import IEmailSender
from src.service.notification.domain.email_template import new_show_email
from src.service.shared_kernel.app.interface import IUserQueryRepo


class NotifyShowAddedUseCase:
    def __init__(self, *, user_query_repo: IUserQueryRepo, email_sender: IEmailSender) -> None:
        self.user_query_repo = user_query_repo
        self.email_sender = email_sender

    @Logger.io
    async def notify(self, *, movie_title: str) -> int:
        """Email every known user about the new show. Returns the number of emails sent."""
        sent = failed = 0
        for user in await self.user_query_repo.list_all():
            if not user.email:
                continue
            subject, body = new_show_email(user_name=user.name, movie_title=movie_title)
            try:
                await self.email_sender.send_email(to=user.email, subject=subject, body=body)
                sent += 1
            except Exception as e:
                failed += 1
                Logger.base.error(f'📧 [NOTIFY] Failed to email {user.email}: {e}')

        Logger.base.info(
            f'📣 [NOTIFY] New show "{movie_title}" announced to {sent} users, {failed} failed'
        )
        return sent
