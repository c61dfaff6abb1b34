"""Optimistic concurrency control helpers."""

from __future__ import annotations

import re

from tasklane.models import TaskValidationError, VersionConflictError

_IF_MATCH_PATTERN = re.compile(r'^(?:W/)?"?v?(\d+)"?$')


class ConcurrencyGuard:
    """Rejects writes whose expected version differs from the stored version."""

    @staticmethod
    def check(current_version: int, expected_version: int | None) -> None:
        """Pass silently when no version is expected or the versions match.

        Raises:
            VersionConflictError: If the expected version is stale
        """
        if expected_version is None:
            return
        if expected_version != current_version:
            raise VersionConflictError(expected=expected_version, actual=current_version)


def resolve_expected_version(
    body_version: int | None, header_version: int | None
) -> int | None:
    """Pick the expected version, preferring the one sent in the payload."""
    if body_version is not None:
        return body_version
    return header_version


def parse_if_match(value: str | int | None) -> int | None:
    """Parse an If-Match style version token.

    Accepts ``3``, ``"3"``, ``v3``, ``"v3"`` and weak ``W/"3"`` forms.

    Args:
        value: Raw token, or None

    Returns:
        The version number, or None for an empty token

    Raises:
        TaskValidationError: If the token is not a version number
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value

    token = value.strip()
    if not token:
        return None

    match = _IF_MATCH_PATTERN.match(token)
    if match is None:
        raise TaskValidationError(f"Invalid version token: {value!r}")
    return int(match.group(1))
