from typing import List


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class SeatsUnavailableError(CustomBaseError):
    """Raised when a claim overlaps seats that are already held or sold."""

    def __init__(self, seats: List[str]) -> None:
        self.seats = list(seats)
        super().__init__(f'Seats already taken: {", ".join(self.seats)}', 409)


class ServiceUnavailableError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
