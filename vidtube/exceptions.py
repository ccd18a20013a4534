class ApiError(Exception):
    """Application error carrying the HTTP status and message sent to the client."""

    def __init__(self, status_code: int, message: str = "Something went wrong", errors: list | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        self.data = None
        self.success = False

    def to_response(self) -> dict:
        return {
            "statusCode": self.status_code,
            "data": self.data,
            "message": self.message,
            "success": self.success,
            "errors": self.errors,
        }


class BadRequestError(ApiError):
    """Raised when identifiers or body fields are malformed or missing."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(400, message, errors)


class UnauthorizedError(ApiError):
    """Raised when no authenticated requester is attached to the request."""

    def __init__(self, message: str = "Unauthorized request"):
        super().__init__(401, message)


class ForbiddenError(ApiError):
    """Raised when the requester does not own the resource."""

    def __init__(self, message: str):
        super().__init__(403, message)


class NotFoundError(ApiError):
    """Raised when the referenced resource does not exist."""

    def __init__(self, message: str):
        super().__init__(404, message)


class InternalError(ApiError):
    """Raised when a storage write or media upload fails unexpectedly."""

    def __init__(self, message: str):
        super().__init__(500, message)
