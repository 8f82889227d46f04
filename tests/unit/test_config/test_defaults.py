"""Unit tests for default header values."""

import platform

import pytest

from courier.config.defaults import (
    default_accept_language,
    default_user_agent,
    preferred_languages,
)
from courier.constants import COURIER_VERSION


class TestDefaultUserAgent:
    """Tests for default_user_agent()."""

    def test_format(self) -> None:
        """The agent lists app, platform, Python and library versions."""
        agent = default_user_agent("reports", "3.2")

        assert agent.startswith("reports/3.2 (")
        assert f"Python {platform.python_version()}" in agent
        assert agent.endswith(f") courier/{COURIER_VERSION}")

    def test_unknown_version(self) -> None:
        """A missing version is reported as Unknown."""
        assert default_user_agent("reports").startswith("reports/Unknown (")


class TestAcceptLanguage:
    """Tests for default_accept_language()."""

    @pytest.mark.unit
    def test_quality_factors_descend(self) -> None:
        """Quality factors drop by 0.1 per position."""
        assert default_accept_language(["en-US", "en", "fr"]) == (
            "en-US;q=1.0, en;q=0.9, fr;q=0.8"
        )

    @pytest.mark.unit
    def test_capped_at_six(self) -> None:
        """Only the first six languages are sent."""
        value = default_accept_language(["a", "b", "c", "d", "e", "f", "g", "h"])

        assert value.split(", ") == [
            "a;q=1.0",
            "b;q=0.9",
            "c;q=0.8",
            "d;q=0.7",
            "e;q=0.6",
            "f;q=0.5",
        ]

    def test_empty(self) -> None:
        """No languages gives an empty value."""
        assert default_accept_language([]) == ""


class TestPreferredLanguages:
    """Tests for preferred_languages()."""

    def test_language_env_first(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LANGUAGE entries come first, normalized to tags."""
        monkeypatch.setenv("LANGUAGE", "fr_CA.UTF-8:fr::fr")

        languages = preferred_languages()

        assert languages[:2] == ["fr-CA", "fr"]
        assert languages.count("fr") == 1

    def test_never_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """At least one language is always returned."""
        monkeypatch.setenv("LANGUAGE", "C:POSIX")

        assert preferred_languages()
