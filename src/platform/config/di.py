"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.deferred_task.kvrocks_deferred_task_queue import KvrocksDeferredTaskQueue
from src.service.booking.app.command.expire_unpaid_booking_use_case import (
    ExpireUnpaidBookingUseCase,
)
from src.service.booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.booking.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.catalog.driven_adapter.provider.tmdb_movie_provider_impl import (
    TmdbMovieProviderImpl,
)
from src.service.catalog.driven_adapter.repo.favorite_movie_repo_impl import (
    FavoriteMovieRepoImpl,
)
from src.service.catalog.driven_adapter.repo.movie_repo_impl import MovieRepoImpl
from src.service.catalog.driven_adapter.repo.show_command_repo_impl import ShowCommandRepoImpl
from src.service.catalog.driven_adapter.repo.show_query_repo_impl import ShowQueryRepoImpl
from src.service.notification.app.command.notify_show_added_use_case import (
    NotifyShowAddedUseCase,
)
from src.service.notification.app.command.send_booking_confirmation_use_case import (
    SendBookingConfirmationUseCase,
)
from src.service.notification.app.command.send_show_reminders_use_case import (
    SendShowRemindersUseCase,
)
from src.service.notification.driven_adapter.email.logging_email_sender import LoggingEmailSender
from src.service.reservation.app.command.release_seats_use_case import ReleaseSeatsUseCase
from src.service.reservation.driven_adapter.state.seat_state_command_handler_impl import (
    SeatStateCommandHandlerImpl,
)
from src.service.reservation.driven_adapter.state.seat_state_query_handler_impl import (
    SeatStateQueryHandlerImpl,
)
from src.service.shared_kernel.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.shared_kernel.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.shared_kernel.driving_adapter.http_controller.auth.identity_auth import (
    IdentityAuth,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (session factory handed to every repository)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    movie_repo = providers.Singleton(MovieRepoImpl, session_factory=database.provided.session)
    show_command_repo = providers.Singleton(
        ShowCommandRepoImpl, session_factory=database.provided.session
    )
    show_query_repo = providers.Singleton(
        ShowQueryRepoImpl, session_factory=database.provided.session
    )
    favorite_movie_repo = providers.Singleton(
        FavoriteMovieRepoImpl, session_factory=database.provided.session
    )
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )

    # Seat state (Kvrocks, atomic Lua scripts)
    seat_state_command_handler = providers.Singleton(SeatStateCommandHandlerImpl)
    seat_state_query_handler = providers.Singleton(SeatStateQueryHandlerImpl)

    # Durable delayed tasks (Kvrocks)
    deferred_task_queue = providers.Singleton(
        KvrocksDeferredTaskQueue,
        visibility_timeout_seconds=config_service.provided.DEFERRED_TASK_VISIBILITY_TIMEOUT_SECONDS,
    )

    # External collaborators (closed in the lifespan)
    movie_metadata_provider = providers.Singleton(TmdbMovieProviderImpl)
    email_sender = providers.Singleton(LoggingEmailSender)

    # Auth service
    identity_auth = providers.Singleton(
        IdentityAuth,
        jwks_url=config_service.provided.IDENTITY_JWKS_URL,
        secret=config_service.provided.IDENTITY_JWT_SECRET.get_secret_value.call(),
        algorithm=config_service.provided.IDENTITY_JWT_ALGORITHM,
        audience=config_service.provided.IDENTITY_JWT_AUDIENCE,
        admin_user_ids=config_service.provided.ADMIN_USER_IDS,
    )

    # Use cases driven by the deferred task worker (HTTP use cases resolve via `depends`)
    release_seats_use_case = providers.Singleton(
        ReleaseSeatsUseCase,
        show_query_repo=show_query_repo,
        seat_state_command_handler=seat_state_command_handler,
    )
    expire_unpaid_booking_use_case = providers.Singleton(
        ExpireUnpaidBookingUseCase,
        booking_command_repo=booking_command_repo,
        booking_query_repo=booking_query_repo,
        release_seats_use_case=release_seats_use_case,
        seat_state_command_handler=seat_state_command_handler,
    )
    notify_show_added_use_case = providers.Singleton(
        NotifyShowAddedUseCase,
        user_query_repo=user_query_repo,
        email_sender=email_sender,
    )
    send_booking_confirmation_use_case = providers.Singleton(
        SendBookingConfirmationUseCase,
        booking_query_repo=booking_query_repo,
        show_query_repo=show_query_repo,
        movie_repo=movie_repo,
        user_query_repo=user_query_repo,
        email_sender=email_sender,
    )
    send_show_reminders_use_case = providers.Singleton(
        SendShowRemindersUseCase,
        show_query_repo=show_query_repo,
        movie_repo=movie_repo,
        booking_query_repo=booking_query_repo,
        user_query_repo=user_query_repo,
        email_sender=email_sender,
        deferred_task_queue=deferred_task_queue,
        interval_seconds=config_service.provided.SHOW_REMINDER_INTERVAL_SECONDS,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
