"""Unit tests for RequestDescriptor."""

import dataclasses

import pytest

from courier.coding.codecs import BodyDecoder, BodyEncoder
from courier.models.method import RequestMethod
from courier.request.descriptor import RequestDescriptor
from courier.request.protocols import Requestable


class TestRequestDescriptorDefaults:
    """Tests for default field values."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """A bare descriptor is a GET to the host with raw bytes."""
        descriptor = RequestDescriptor()

        assert descriptor.path == ""
        assert descriptor.query == ()
        assert descriptor.method == RequestMethod.GET
        assert dict(descriptor.headers) == {}
        assert descriptor.response_decoder.decode(b"raw") == b"raw"
        assert descriptor.request_encoder.encode(b"raw") == b"raw"

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_non_positive_timeout_rejected(self, timeout: float) -> None:
        """Timeouts must be positive."""
        with pytest.raises(ValueError, match="timeout_interval"):
            RequestDescriptor(timeout_interval=timeout)

    def test_method_string_coerced(self) -> None:
        """Method strings become RequestMethod members."""
        assert RequestDescriptor(method="POST").method is RequestMethod.POST  # type: ignore[arg-type]


class TestRequestDescriptorImmutability:
    """Tests for frozen fields."""

    def test_fields_frozen(self) -> None:
        """Fields cannot be reassigned."""
        descriptor = RequestDescriptor()

        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.path = "/other"  # type: ignore[misc]

    def test_headers_read_only_copy(self) -> None:
        """Headers are copied into a read-only mapping."""
        source = {"X-One": "1"}
        descriptor = RequestDescriptor(headers=source)

        source["X-Two"] = "2"

        assert dict(descriptor.headers) == {"X-One": "1"}
        with pytest.raises(TypeError):
            descriptor.headers["X-Three"] = "3"  # type: ignore[index]

    def test_query_frozen_to_tuple(self) -> None:
        """Query pairs are frozen with duplicates kept."""
        descriptor = RequestDescriptor(query=[("tag", "a"), ("tag", "b")])

        assert descriptor.query == (("tag", "a"), ("tag", "b"))

    def test_replace(self) -> None:
        """replace() returns a modified copy."""
        original = RequestDescriptor(path="/a")

        changed = original.replace(path="/b")

        assert changed.path == "/b"
        assert original.path == "/a"


class TestRequestableProtocol:
    """Tests for the Requestable protocol."""

    def test_descriptor_is_requestable(self) -> None:
        """RequestDescriptor satisfies the protocol."""
        assert isinstance(RequestDescriptor(), Requestable)

    def test_custom_class_is_requestable(self) -> None:
        """Any object with the right attributes satisfies the protocol."""

        @dataclasses.dataclass
        class Ping:
            path: str = "/ping"
            query: tuple[tuple[str, str], ...] = ()
            method: RequestMethod = RequestMethod.HEAD
            headers: dict[str, str] = dataclasses.field(default_factory=dict)
            body: None = None
            authentication: None = None
            fallback_response: None = None
            request_encoder: BodyEncoder[bytes] = dataclasses.field(
                default_factory=BodyEncoder.passthrough
            )
            response_decoder: BodyDecoder[bytes] = dataclasses.field(
                default_factory=BodyDecoder.passthrough
            )
            response_validator: object = None
            timeout_interval: float = 5.0

        assert isinstance(Ping(), Requestable)

    def test_plain_object_is_not_requestable(self) -> None:
        """Objects missing attributes do not satisfy the protocol."""
        assert not isinstance(object(), Requestable)
