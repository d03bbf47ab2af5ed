"""HTTP surface of the booking ledger: /api/booking and /api/user/bookings."""

from fastapi.testclient import TestClient
import uuid_utils

from src.platform.constant.route_constant import BOOKING_BASE, USER_BASE
from src.service.catalog.domain.entity.show_entity import Show
from test.in_memory_adapters import InMemoryBookingRepo, InMemoryDeferredTaskQueue
from test.shared.utils import assert_response_status, bearer_headers
from test.test_constants import ANOTHER_BUYER_ID, BUYER_ID


def _create(client: TestClient, show: Show, seats: list[str], user_id: str = BUYER_ID):
    return client.post(
        f'{BOOKING_BASE}/create',
        json={'show_id': str(show.id), 'selected_seats': seats},
        headers=bearer_headers(user_id),
    )


class TestCreateBooking:
    def test_creates_pending_booking(
        self, client: TestClient, upcoming_show: Show, task_queue: InMemoryDeferredTaskQueue
    ) -> None:
        response = _create(client, upcoming_show, ['A1', 'A2', 'A3'])

        assert_response_status(response, 201)
        body = response.json()
        assert body['success'] is True
        assert body['user_id'] == BUYER_ID
        assert body['booked_seats'] == ['A1', 'A2', 'A3']
        assert body['amount'] == 600
        assert body['is_paid'] is False
        assert f'release_unpaid_booking:{body["id"]}' in task_queue.tasks

    def test_taken_seat_is_409_with_unavailable_seats(
        self, client: TestClient, upcoming_show: Show
    ) -> None:
        assert_response_status(_create(client, upcoming_show, ['A1']), 201)

        response = _create(client, upcoming_show, ['A1', 'A2'], user_id=ANOTHER_BUYER_ID)

        assert_response_status(response, 409)
        assert response.json() == {
            'success': False,
            'message': 'Seats already taken: A1',
            'unavailable_seats': ['A1'],
        }

    def test_duplicate_seats_are_400(self, client: TestClient, upcoming_show: Show) -> None:
        assert_response_status(_create(client, upcoming_show, ['A1', 'A1']), 400)

    def test_missing_fields_are_400(self, client: TestClient) -> None:
        response = client.post(
            f'{BOOKING_BASE}/create', json={}, headers=bearer_headers(BUYER_ID)
        )
        assert_response_status(response, 400)
        assert response.json()['success'] is False

    def test_unknown_show_is_404(self, client: TestClient) -> None:
        response = client.post(
            f'{BOOKING_BASE}/create',
            json={'show_id': str(uuid_utils.uuid7()), 'selected_seats': ['A1']},
            headers=bearer_headers(BUYER_ID),
        )
        assert_response_status(response, 404)

    def test_requires_authentication(self, client: TestClient, upcoming_show: Show) -> None:
        response = client.post(
            f'{BOOKING_BASE}/create',
            json={'show_id': str(upcoming_show.id), 'selected_seats': ['A1']},
        )
        assert_response_status(response, 401)


class TestSeatMap:
    def test_occupied_seats_map_to_holder(self, client: TestClient, upcoming_show: Show) -> None:
        booking_id = _create(client, upcoming_show, ['B4', 'B5']).json()['id']

        response = client.get(f'{BOOKING_BASE}/seats/{upcoming_show.id}')

        assert_response_status(response, 200)
        assert response.json() == {
            'success': True,
            'occupied_seats': {'B4': booking_id, 'B5': booking_id},
        }

    def test_unknown_show_is_404(self, client: TestClient) -> None:
        assert_response_status(client.get(f'{BOOKING_BASE}/seats/{uuid_utils.uuid7()}'), 404)


class TestPayBooking:
    def test_owner_pays(
        self, client: TestClient, upcoming_show: Show, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking_id = _create(client, upcoming_show, ['A1']).json()['id']

        response = client.post(
            f'{BOOKING_BASE}/{booking_id}/pay', headers=bearer_headers(BUYER_ID)
        )

        assert_response_status(response, 200)
        assert response.json()['is_paid'] is True
        assert response.json()['paid_at'] is not None

    def test_other_user_is_forbidden(self, client: TestClient, upcoming_show: Show) -> None:
        booking_id = _create(client, upcoming_show, ['A1']).json()['id']

        response = client.post(
            f'{BOOKING_BASE}/{booking_id}/pay', headers=bearer_headers(ANOTHER_BUYER_ID)
        )

        assert_response_status(response, 403)

    def test_unknown_booking_is_404(self, client: TestClient) -> None:
        response = client.post(
            f'{BOOKING_BASE}/{uuid_utils.uuid7()}/pay', headers=bearer_headers(BUYER_ID)
        )
        assert_response_status(response, 404)


class TestUserBookings:
    def test_lists_only_callers_bookings(self, client: TestClient, upcoming_show: Show) -> None:
        mine = _create(client, upcoming_show, ['A1']).json()['id']
        _create(client, upcoming_show, ['A2'], user_id=ANOTHER_BUYER_ID)

        response = client.get(f'{USER_BASE}/bookings', headers=bearer_headers(BUYER_ID))

        assert_response_status(response, 200)
        bookings = response.json()['bookings']
        assert [b['id'] for b in bookings] == [mine]
        assert bookings[0]['show']['movie']['id'] == upcoming_show.movie_id
