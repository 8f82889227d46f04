"""Unit tests for form parameters."""

from courier.models.parameters import RequestParameters


class TestRequestParameters:
    """Tests for RequestParameters."""

    def test_encode_keeps_order(self) -> None:
        """Pairs are encoded in insertion order."""
        params = RequestParameters({"name": "morpheus", "job": "leader"})

        assert params.encode() == "name=morpheus&job=leader"

    def test_encode_escapes_and_renders_values(self) -> None:
        """Reserved characters are escaped and booleans render lowercase."""
        params = RequestParameters({"q": "a&b c", "limit": 10, "active": True, "ratio": 0.5})

        assert params.encode() == "q=a%26b%20c&limit=10&active=true&ratio=0.5"

    def test_kwargs_applied_after_mapping(self) -> None:
        """Keyword pairs override mapping pairs."""
        params = RequestParameters({"a": "1"}, a="2", b="3")

        assert dict(params) == {"a": "2", "b": "3"}

    def test_mapping_protocol(self) -> None:
        """Parameters behave as a read-only mapping."""
        params = RequestParameters(x="1")

        assert params["x"] == "1"
        assert len(params) == 1
        assert params == RequestParameters({"x": "1"})
        assert hash(params) == hash(RequestParameters({"x": "1"}))
