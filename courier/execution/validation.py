"""Validator stage."""

from typing import Any

from courier.coding.validators import ResponseValidator
from courier.models.errors import ResponseValidationError, UnknownRequestError
from courier.models.response import Response


def run_validator(
    validator: ResponseValidator[Any, Any],
    response: Response[Any],
) -> Response[Any]:
    """Run a response validator.

    Args:
        validator: Validator to run.
        response: Assembled (or fallback) response.

    Returns:
        The response accepted by the validator.

    Raises:
        ResponseValidationError: If the validator raised its declared error type.
        UnknownRequestError: If it raised anything else or returned a
            non-Response value.
    """
    try:
        accepted = validator.validate(response)
    except validator.error_type as e:
        raise ResponseValidationError(e) from e
    except Exception as e:  # noqa: BLE001
        msg = f"Validator raised undeclared {type(e).__name__}: {e}"
        raise UnknownRequestError(msg, cause=e) from e

    if not isinstance(accepted, Response):
        msg = f"Validator returned {type(accepted).__name__}, expected Response"
        raise UnknownRequestError(msg)
    return accepted
