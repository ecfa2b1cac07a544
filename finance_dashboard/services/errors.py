from collections.abc import Sequence


class BaseServiceError(Exception):
    detail: str = "Unknown dashboard error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.detail
        super().__init__(self.detail)


class InvalidTransitionError(BaseServiceError):
    detail = "This action is not available right now"


class TransportError(BaseServiceError):
    detail = "Request to the transaction API failed"
    status_code: int | None = None

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code


class ServerError(TransportError):
    detail = "Internal server error. Try again later."


class ForbiddenError(TransportError):
    detail = "Access denied. Check your permissions."
    status_code = 403


class RemoteValidationError(TransportError):
    detail = "Invalid data. Check the required fields."
    status_code = 400


class MissingReferenceError(RemoteValidationError):
    detail = "Category not found."
    status_code = 404


class UnknownTransportError(TransportError):
    pass


LOAD_FAILED_MESSAGE = "Failed to load data. Try again."
SUBMIT_FAILED_MESSAGE = "Failed to save transaction. Try again."


def describe_failure(exc: BaseException, fallback: str) -> str:
    """Turn a collaborator failure into the single message shown to the user.

    Classified transport errors carry their own message; anything else
    (unknown statuses, connection problems, unexpected exceptions) gets the
    generic message of the action that failed.
    """
    if isinstance(exc, TransportError) and not isinstance(exc, UnknownTransportError):
        return exc.detail
    return fallback


# when several requests fail together, the first match here is reported
FAILURE_PRIORITY: tuple[type[TransportError], ...] = (
    ForbiddenError,
    ServerError,
    MissingReferenceError,
    RemoteValidationError,
    TransportError,
)


def primary_failure(errors: Sequence[BaseException]) -> BaseException:
    for error_type in FAILURE_PRIORITY:
        for exc in errors:
            if isinstance(exc, error_type):
                return exc
    return errors[0]
