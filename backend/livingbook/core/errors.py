# app-wide error taxonomy, rendered as {"message": ...} by exception_handlers


class DomainError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class Unauthorized(DomainError):
    def __init__(self, message: str = "unauthorized access"):
        super().__init__(message, 401)


class Forbidden(DomainError):
    def __init__(self, message: str = "forbidden access"):
        super().__init__(message, 403)


class NotFound(DomainError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, 404)


class BookingConflict(DomainError):
    def __init__(self, message: str = "Booking already exists for this date."):
        super().__init__(message, 409)


class UpdateFailed(DomainError):
    def __init__(self, message: str = "Update failed"):
        super().__init__(message, 500)


class StorageError(DomainError):
    """
    Underlying store fault. `error` carries the driver's message so the
    caller sees what went wrong.
    """

    def __init__(self, error: str, message: str = "storage error"):
        self.error = error
        super().__init__(message, 500)
