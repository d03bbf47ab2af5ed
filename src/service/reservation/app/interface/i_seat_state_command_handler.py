from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID


class ISeatStateCommandHandler(ABC):
    """
    Seat State Command Handler Interface (CQRS Command)

    The only writer of a show's occupied-seats map.
    """

    @abstractmethod
    async def claim_seats(self, *, show_id: UUID, seat_labels: List[str], holder_id: str) -> None:
        """
        Claim every label for `holder_id`, or none of them.

        Raises:
            ValidationError: empty list or duplicate labels
            SeatsUnavailableError: at least one label is already occupied
        """

    @abstractmethod
    async def release_seats(
        self, *, show_id: UUID, seat_labels: List[str], holder_id: Optional[str] = None
    ) -> int:
        """
        Remove the labels from the map. Labels already free are skipped.
        With `holder_id`, only labels still held by that holder are removed.

        Returns:
            Number of labels actually freed
        """

    @abstractmethod
    async def confirm_seats(self, *, show_id: UUID, seat_labels: List[str]) -> None:
        """Paid seats stay occupied; the booking's is_paid flag is authoritative."""
