"""Normalization and validation pipeline for Event records.

Every create and update runs a candidate through `normalize_and_validate`
before it reaches the store. The pipeline is pure: it derives the slug,
rewrites date and time into their canonical forms and enforces the field
constraints, raising `EventValidationError` on the first failure.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from .errors import EventValidationError, ValidationErrorKind
from .models.event import EventMode, EventRecord

_SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")
_TIME_PATTERN = re.compile(r"([0-9]{1,2}):([0-9]{2})(\s*(AM|PM))?", re.IGNORECASE)

# Trimmed before validation and storage.
TRIMMED_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "audience",
    "organizer",
)

REQUIRED_TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)

MAX_LENGTHS = {
    "title": 100,
    "description": 1000,
    "overview": 500,
}

COLLECTION_FIELDS = ("agenda", "tags")


def derive_slug(title: str) -> str:
    """Build a URL-safe slug from an event title.

    >>> derive_slug("Dev Conf 2025!!")
    'dev-conf-2025'
    """
    slug = title.lower().strip()
    slug = _SLUG_INVALID_CHARS.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def normalize_date(value: str) -> str:
    """Parse a calendar date and return it as YYYY-MM-DD (UTC).

    Missing parts default to the first month and day of the current year,
    so "March 2025" is 2025-03-01. Input without any date part is rejected.
    """
    year = datetime.now(timezone.utc).year
    try:
        parsed = date_parser.parse(value, default=datetime(year, 1, 1))
        # A bare time takes every date part from the default.
        alternate = date_parser.parse(value, default=datetime(year - 1, 2, 2))
        if all(
            getattr(parsed, part) != getattr(alternate, part)
            for part in ("year", "month", "day")
        ):
            raise ValueError(f"No date in {value!r}")

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date().isoformat()
    except (ValueError, OverflowError) as e:
        raise EventValidationError(
            ValidationErrorKind.INVALID_DATE_FORMAT,
            "date",
            "Invalid date format",
        ) from e


def normalize_time(value: str) -> str:
    """Convert `H:MM`, `HH:MM` or either with AM/PM into 24-hour HH:MM."""
    match = _TIME_PATTERN.fullmatch(value.strip())
    if not match:
        raise EventValidationError(
            ValidationErrorKind.INVALID_TIME_FORMAT,
            "time",
            "Invalid time format. Use HH:MM or HH:MM AM/PM",
        )

    hours = int(match.group(1))
    minutes = match.group(2)
    period = match.group(4).upper() if match.group(4) else None

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    if hours < 0 or hours > 23:
        raise EventValidationError(
            ValidationErrorKind.INVALID_HOUR_VALUE,
            "time",
            "Invalid hour value",
        )

    return f"{hours:02d}:{minutes}"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, EventMode):
        return value.value
    return value if isinstance(value, str) else str(value)


def _as_list(value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [_as_text(item) for item in value]


def normalize_and_validate(
    candidate: Mapping[str, Any],
    is_new_record: bool,
    changed_fields: Optional[Iterable[str]] = None,
) -> EventRecord:
    """Turn a raw candidate into a normalized, persistable record.

    Args:
        candidate: All Event fields as proposed. On updates this is the stored
            record merged with the patch, including the stored `slug`.
        is_new_record: True only at creation. Everything counts as changed.
        changed_fields: Names of the fields being modified on update.

    Raises:
        EventValidationError: For the first failed check, in the order
            required fields, lengths, mode, agenda/tags, date, time.
    """
    changed = set(changed_fields or ())

    def touched(field: str) -> bool:
        return is_new_record or field in changed

    fields = {name: _as_text(candidate.get(name)) for name in REQUIRED_TEXT_FIELDS}
    for name in TRIMMED_FIELDS:
        fields[name] = fields[name].strip()

    if touched("title"):
        slug = derive_slug(fields["title"])
    else:
        slug = _as_text(candidate.get("slug"))

    for name in REQUIRED_TEXT_FIELDS:
        if not fields[name].strip():
            raise EventValidationError(
                ValidationErrorKind.REQUIRED_FIELD_MISSING,
                name,
                f"Field '{name}' is required",
            )

    collections = {name: _as_list(candidate.get(name)) for name in COLLECTION_FIELDS}
    for name, items in collections.items():
        if items is None:
            raise EventValidationError(
                ValidationErrorKind.REQUIRED_FIELD_MISSING,
                name,
                f"Field '{name}' is required",
            )

    for name, limit in MAX_LENGTHS.items():
        if len(fields[name]) > limit:
            raise EventValidationError(
                ValidationErrorKind.FIELD_TOO_LONG,
                name,
                f"Field '{name}' must be at most {limit} characters",
            )

    modes = {mode.value for mode in EventMode}
    if fields["mode"] not in modes:
        raise EventValidationError(
            ValidationErrorKind.INVALID_MODE,
            "mode",
            f"Mode must be one of: {', '.join(sorted(modes))}",
        )

    for name, items in collections.items():
        if not items:
            singular = "agenda item" if name == "agenda" else "tag"
            raise EventValidationError(
                ValidationErrorKind.EMPTY_COLLECTION,
                name,
                f"At least one {singular} is required",
            )

    if touched("date"):
        fields["date"] = normalize_date(fields["date"])

    if touched("time"):
        fields["time"] = normalize_time(fields["time"])

    return EventRecord(
        slug=slug,
        mode=EventMode(fields["mode"]),
        agenda=collections["agenda"],
        tags=collections["tags"],
        **{name: fields[name] for name in REQUIRED_TEXT_FIELDS if name != "mode"},
    )
