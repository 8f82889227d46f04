"""Unit tests for header helpers."""

from courier.models.headers import CacheControl, ContentType, HeaderKey, get_header, merge_headers


class TestMergeHeaders:
    """Tests for merge_headers."""

    def test_later_layer_wins(self) -> None:
        """Later layers override earlier ones."""
        assert merge_headers({"A": "1"}, {"A": "2", "B": "2"}, {"B": "3"}) == {
            "A": "2",
            "B": "3",
        }

    def test_case_insensitive_keeps_latest_spelling(self) -> None:
        """Keys collide case-insensitively and keep the later spelling."""
        assert merge_headers({"X-Token": "a"}, {"x-token": "b"}) == {"x-token": "b"}

    def test_skips_missing_layers(self) -> None:
        """None and empty layers are ignored."""
        assert merge_headers(None, {}, {"A": "1"}) == {"A": "1"}

    def test_returns_new_dict(self) -> None:
        """Input mappings are never mutated."""
        base = {"A": "1"}
        merged = merge_headers(base, {"B": "2"})

        assert base == {"A": "1"}
        assert merged is not base


class TestGetHeader:
    """Tests for get_header."""

    def test_lookup_ignores_case(self) -> None:
        """Lookup matches regardless of case."""
        assert get_header({"content-type": "text/plain"}, HeaderKey.CONTENT_TYPE) == "text/plain"

    def test_missing(self) -> None:
        """Missing keys and missing headers return None."""
        assert get_header({"A": "1"}, "B") is None
        assert get_header(None, "A") is None


class TestHeaderValues:
    """Tests for header value helpers."""

    def test_content_type_values(self) -> None:
        """Content types render as their header value."""
        assert ContentType.JSON.value == "application/json"
        assert ContentType.URLENCODED.value.startswith("application/x-www-form-urlencoded")

    def test_cache_control_combine(self) -> None:
        """Directives combine into one comma-separated value."""
        value = CacheControl.combine(
            CacheControl.NO_TRANSFORM,
            CacheControl.max_age(60),
            CacheControl.max_stale(),
            CacheControl.min_fresh(10),
        )

        assert value == "no-transform, max-age=60, max-stale, min-fresh=10"

    def test_bounded_max_stale(self) -> None:
        """max-stale accepts an optional bound."""
        assert CacheControl.max_stale(30) == "max-stale=30"
