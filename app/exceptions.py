class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(AppError):
    status = 400


class NotFoundError(AppError):
    status = 404


class StateError(AppError):
    """Raised for a transition the current state does not allow."""

    status = 400


class UpstreamError(AppError):
    """Store, identity provider or mail provider failure."""

    status = 500


class PermissionDenied(AppError):
    status = 403


class AuthError(AppError):
    status = 401
