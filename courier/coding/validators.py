"""Response validators.

A validator inspects a fully assembled ``Response`` and either returns it
(possibly transformed) or raises an instance of its declared ``error_type``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from courier.models.errors import HTTPError, NoValidationError
from courier.models.response import Response


BodyT = TypeVar("BodyT")
ErrorT = TypeVar("ErrorT", bound=Exception)


@dataclass(frozen=True)
class ResponseValidator(Generic[BodyT, ErrorT]):
    """Accepts or rejects an assembled response.

    Attributes:
        handler: Callable returning the accepted response or raising.
        error_type: Exception type the handler raises to reject a response.
    """

    handler: Callable[[Response[BodyT]], Response[BodyT]]
    error_type: type[ErrorT]

    def validate(self, response: Response[BodyT]) -> Response[BodyT]:
        """Run the validator.

        Args:
            response: Assembled response.

        Returns:
            The accepted response.
        """
        return self.handler(response)

    @classmethod
    def unsafe(cls) -> "ResponseValidator[Any, NoValidationError]":
        """Accept every response unchanged."""
        return ResponseValidator(lambda response: response, NoValidationError)

    @classmethod
    def status_code(cls) -> "ResponseValidator[Any, HTTPError]":
        """Reject responses whose status code is present and not 2xx."""
        return ResponseValidator(_validate_status_code, HTTPError)


def _validate_status_code(response: Response[Any]) -> Response[Any]:
    if response.status_code is None:
        return response
    error = HTTPError.from_status(response.status_code)
    if error is not None:
        raise error
    return response
