"""Default ``User-Agent`` and ``Accept-Language`` values."""

import locale
import os
import platform
import sys
from collections.abc import Sequence
from pathlib import Path

from courier.constants import COURIER_VERSION, MAX_ACCEPT_LANGUAGES


def default_user_agent(app_name: str | None = None, app_version: str | None = None) -> str:
    """Build the default ``User-Agent`` header value.

    Format: ``<app>/<version> (<os> <release>; Python <version>) courier/<version>``.

    Args:
        app_name: Application name. Defaults to the running program's name.
        app_version: Application version.

    Returns:
        User agent string.
    """
    name = app_name or Path(sys.argv[0]).name or "Unknown"
    version = app_version or "Unknown"
    system = platform.system() or "Unknown"
    os_part = f"{system} {platform.release()}".strip()
    return (
        f"{name}/{version} ({os_part}; Python {platform.python_version()}) "
        f"courier/{COURIER_VERSION}"
    )


def preferred_languages() -> list[str]:
    """Read the process's preferred language tags.

    Uses ``LANGUAGE`` (colon-separated) first, then the current locale.
    ``en_US.UTF-8`` style names become ``en-US``.
    """
    candidates: list[str] = []
    env_languages = os.environ.get("LANGUAGE", "")
    candidates.extend(part for part in env_languages.split(":") if part)
    current, _ = locale.getlocale()
    if current:
        candidates.append(current)

    tags: list[str] = []
    for candidate in candidates:
        tag = candidate.split(".")[0].replace("_", "-")
        if tag and tag not in {"C", "POSIX"} and tag not in tags:
            tags.append(tag)
    return tags or ["en"]


def default_accept_language(languages: Sequence[str] | None = None) -> str:
    """Build an ``Accept-Language`` value with descending quality factors.

    The first six languages get q=1.0, 0.9, 0.8 and so on.

    Args:
        languages: Language tags in preference order. Defaults to
            ``preferred_languages()``.

    Returns:
        Header value, e.g. ``"en-US;q=1.0, en;q=0.9"``.
    """
    tags = list(languages) if languages is not None else preferred_languages()
    return ", ".join(
        f"{tag};q={round(1.0 - index * 0.1, 1)}"
        for index, tag in enumerate(tags[:MAX_ACCEPT_LANGUAGES])
    )
