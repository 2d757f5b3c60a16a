class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class LayoutError(DomainError):
    """Seat layout configuration is inconsistent"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class BookingServiceError(CustomBaseError):
    """Remote booking/seat-status service call failed (transport or non-2xx)"""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message, status_code)
