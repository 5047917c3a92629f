"""
Argument and credential validation

Checks run synchronously before any signing or network work begins, so a
misconfigured client fails locally instead of producing signatures that the
API rejects.
"""

import re
from typing import Any, Sequence

from .exceptions import InvalidArgument, InvalidCredentialFormat

# 256-bit key rendered as lowercase hex
SHA256_KEY_PATTERN = re.compile(r'^[0-9a-f]{64}$')


def validate_secret(secret: str, name: str = "secret") -> None:
    """
    Validate the shape of an application secret.

    Args:
        secret: Secret to validate
        name: Argument name used in the error message

    Raises:
        InvalidCredentialFormat: If the secret is not 64 lowercase hex characters
    """
    if not isinstance(secret, str) or not SHA256_KEY_PATTERN.match(secret):
        raise InvalidCredentialFormat(
            f"{name} must be a 64 character lowercase hexadecimal string",
            {"argument": name}
        )


def is_valid_secret(secret: Any) -> bool:
    """Return True if ``secret`` passes validate_secret."""
    return isinstance(secret, str) and bool(SHA256_KEY_PATTERN.match(secret))


def require_non_empty(name: str, value: Any) -> None:
    """
    Require a value to be present.

    Strings and sequences must also be non-empty.

    Raises:
        InvalidArgument: If the value is None or empty
    """
    if value is None:
        raise InvalidArgument(f"{name} cannot be None", {"argument": name})

    if isinstance(value, (str, list, tuple)) and len(value) == 0:
        raise InvalidArgument(f"{name} cannot be empty", {"argument": name})


def require_max_length(name: str, max_length: int, items: Sequence[Any]) -> None:
    """
    Require a sequence to hold at most ``max_length`` items.

    Raises:
        InvalidArgument: If the sequence is too long
    """
    if len(items) > max_length:
        raise InvalidArgument(
            f"{name} cannot contain more than {max_length} items, got {len(items)}",
            {"argument": name, "max_length": max_length, "length": len(items)}
        )


def require_no_empty_members(name: str, items: Sequence[Any]) -> None:
    """
    Require every member of a sequence to be a non-empty string.

    Raises:
        InvalidArgument: If any member is None, not a string, or empty
    """
    for index, item in enumerate(items):
        if item is None or not isinstance(item, str) or item == "":
            raise InvalidArgument(
                f"{name} cannot contain null or empty members (index {index})",
                {"argument": name, "index": index}
            )
