"""Field-level validators shared by request schemas."""

import re
from typing import Final

URL_REGEX: Final[str] = r"^https?://.+"
YEAR_REGEX: Final[str] = r"^\d{4}$"
USERNAME_REGEX: Final[str] = r"^[a-zA-Z0-9_]+$"

_URL_PATTERN: Final[re.Pattern[str]] = re.compile(URL_REGEX)
_YEAR_PATTERN: Final[re.Pattern[str]] = re.compile(YEAR_REGEX)
_USERNAME_PATTERN: Final[re.Pattern[str]] = re.compile(USERNAME_REGEX)
_CAMEL_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"(?<!^)(?=[A-Z])")


def strip_or_none(value: str | None) -> str | None:
    """Trim a string; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_url(value: str | None, label: str = "URL") -> str | None:
    value = strip_or_none(value)
    if value is not None and not _URL_PATTERN.match(value):
        raise ValueError(f"{label} must be a valid URL")
    return value


def validate_year(value: str | None) -> str | None:
    value = strip_or_none(value)
    if value is not None and not _YEAR_PATTERN.match(value):
        raise ValueError("Year must be a 4-digit number")
    return value


def validate_username(value: str) -> str:
    value = value.strip()
    if not _USERNAME_PATTERN.match(value):
        raise ValueError("Username can only contain letters, numbers, and underscores")
    return value


def clean_string_list(
    values: list[str] | str | None,
    *,
    lower: bool = False,
    max_item_length: int | None = None,
    label: str = "Item",
) -> list[str]:
    """Normalize a list of short labels.

    Accepts a list or a comma-separated string. Items are trimmed, empty items
    dropped and, when ``lower`` is set, lower-cased.
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    cleaned = []
    for item in values:
        item = str(item).strip()
        if not item:
            continue
        if max_item_length is not None and len(item) > max_item_length:
            raise ValueError(f"Each {label.lower()} must not exceed {max_item_length} characters")
        cleaned.append(item.lower() if lower else item)
    return cleaned


def camel_to_snake(name: str) -> str:
    """``createdAt`` -> ``created_at``; snake_case passes through."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def parse_int(raw: str | int | None) -> int | None:
    """Parse an integer query value. Non-numeric input yields None."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None
