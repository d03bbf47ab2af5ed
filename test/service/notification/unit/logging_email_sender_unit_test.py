from datetime import datetime, timezone

import pytest

from src.service.notification.domain.email_template import booking_confirmation_email
from src.service.notification.driven_adapter.email.logging_email_sender import LoggingEmailSender


@pytest.mark.asyncio
async def test_records_sent_email() -> None:
    sender = LoggingEmailSender(sender='tickets@popcorn.test')

    assert await sender.send_email(to='a@test.com', subject='Hi', body='Body') is True

    [email] = sender.sent_emails
    assert email['from'] == 'tickets@popcorn.test'
    assert (email['to'], email['subject'], email['body']) == ('a@test.com', 'Hi', 'Body')


def test_confirmation_renders_utc_time() -> None:
    subject, body = booking_confirmation_email(
        user_name='',
        movie_title='Until Dawn',
        show_date_time=datetime(2030, 7, 1, 18, 30, tzinfo=timezone.utc),
        seats=['A1'],
        amount=200,
    )

    assert subject == 'Payment Confirmation: "Until Dawn" booked!'
    assert body.startswith('Hey there,')
    assert 'Date: 01 July 2030' in body
    assert 'Time: 18:30 UTC' in body
