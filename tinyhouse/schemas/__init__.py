"""Pydantic v2 input schemas validated before any database or network I/O."""

from pydantic import ValidationError

from tinyhouse.errors import InvalidInputError


def first_error_message(exc: ValidationError) -> str:
    """Return the message of the first failure.

    A validator's own ``ValueError`` is returned as written; any other error
    is prefixed with the field it was raised for.
    """
    error = exc.errors()[0]
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)

    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


def as_invalid_input(exc: ValidationError) -> InvalidInputError:
    return InvalidInputError(first_error_message(exc))
