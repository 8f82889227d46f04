"""Form parameters for ``application/x-www-form-urlencoded`` bodies."""

from collections.abc import Iterator, Mapping
from urllib.parse import quote


ParameterValue = str | int | float | bool


def _render(value: ParameterValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RequestParameters(Mapping[str, ParameterValue]):
    """Ordered, immutable name/value pairs encoded as a form body.

    Names are unique; a repeated name keeps its first position and the
    last value assigned to it.
    """

    def __init__(
        self,
        parameters: Mapping[str, ParameterValue] | None = None,
        **kwargs: ParameterValue,
    ) -> None:
        """Initialize the parameters.

        Args:
            parameters: Initial name/value pairs.
            kwargs: Additional pairs, applied after ``parameters``.
        """
        self._items: dict[str, ParameterValue] = dict(parameters or {})
        self._items.update(kwargs)

    def __getitem__(self, key: str) -> ParameterValue:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"RequestParameters({self._items!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RequestParameters):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def encode(self) -> str:
        """Percent-encode as ``name=value&name=value``."""
        return "&".join(
            f"{quote(name, safe='')}={quote(_render(value), safe='')}"
            for name, value in self._items.items()
        )
