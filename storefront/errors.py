"""Exception taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to; the error handler turns it
into a ``{"error": message}`` JSON body.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class InsufficientStockError(ValidationError):
    pass


class AuthenticationError(AppError):
    status_code = 401


class InvalidTokenError(AuthenticationError):
    pass


class AuthorizationError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class InternalError(AppError):
    status_code = 500


class HashingError(InternalError):
    pass


class SigningError(InternalError):
    pass


class UpstreamError(InternalError):
    pass
