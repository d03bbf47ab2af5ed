"""Plain-text bodies for the outgoing emails. Times are rendered in UTC."""

from datetime import datetime, timezone
from typing import List, Tuple


SIGNATURE = 'Enjoy the show!\nTeam Popcorn Booking'


def _show_time(show_date_time: datetime) -> Tuple[str, str]:
    start = show_date_time.astimezone(timezone.utc)
    return start.strftime('%d %B %Y'), start.strftime('%H:%M UTC')


def booking_confirmation_email(
    *, user_name: str, movie_title: str, show_date_time: datetime, seats: List[str], amount: int
) -> Tuple[str, str]:
    day, time = _show_time(show_date_time)
    subject = f'Payment Confirmation: "{movie_title}" booked!'
    body = (
        f'Hey {user_name or "there"},\n\n'
        f'Your booking for "{movie_title}" is confirmed.\n\n'
        f'Movie: {movie_title}\n'
        f'Date: {day}\n'
        f'Time: {time}\n'
        f'Seats: {", ".join(seats)}\n'
        f'Amount: {amount}\n\n'
        f'{SIGNATURE}'
    )
    return subject, body


def show_reminder_email(
    *, user_name: str, movie_title: str, show_date_time: datetime
) -> Tuple[str, str]:
    day, time = _show_time(show_date_time)
    subject = f'Reminder: Your movie "{movie_title}" starts soon!'
    body = (
        f'Hello {user_name or "there"},\n\n'
        f'This is a quick reminder that "{movie_title}" is scheduled for {day} at {time}.\n'
        'Make sure you are ready!\n\n'
        f'{SIGNATURE}'
    )
    return subject, body


def new_show_email(*, user_name: str, movie_title: str) -> Tuple[str, str]:
    subject = f'New Show Added: {movie_title}'
    body = (
        f'Hi {user_name or "there"},\n\n'
        f'We have just added a new show to our library: "{movie_title}".\n'
        'Visit our website to book your seats.\n\n'
        'Thanks,\nTeam Popcorn Booking'
    )
    return subject, body
