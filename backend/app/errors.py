class AppError(Exception):
    """Base class for errors that map onto the API's JSON error envelope."""

    status_code = 500
    error_type = "InternalError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "errorType": self.error_type}


class ValidationError(AppError):
    status_code = 400
    error_type = "ValidationError"


class ReferenceNotFoundError(AppError):
    """A referenced team, player, game, category or template does not exist."""

    status_code = 400
    error_type = "ReferenceError"


class NotFoundError(AppError):
    status_code = 404
    error_type = "NotFoundError"


class ConflictError(AppError):
    status_code = 409
    error_type = "ConflictError"


class StateError(AppError):
    """Operation is not allowed in the game's current lifecycle state."""

    status_code = 400
    error_type = "StateError"


class NoTemplateError(AppError):
    status_code = 404
    error_type = "NoTemplateError"
