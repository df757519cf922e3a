"""Input validation for task fields: description and tags."""

from __future__ import annotations

from collections.abc import Iterable


class ValidationError(ValueError):
    """Raised when user-supplied task input is rejected.

    Raised before any repository mutation, so a failed command leaves the
    collection untouched.
    """


def ensure_encodable(text: str, what: str) -> str:
    """Reject text the task file cannot hold (lone surrogates from bad argv bytes)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(f"{what} contains characters that are not valid UTF-8: {text!r}.") from None
    return text


def validate_description(text: str | None) -> str:
    """Return *text* stripped of surrounding whitespace, rejecting blanks."""
    if text is None or not str(text).strip():
        raise ValidationError("Task description cannot be empty.")
    return ensure_encodable(str(text).strip(), "Task description")


def parse_tags(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize tags from ``"a, b,c"`` or an iterable of strings.

    Items are trimmed and empty items dropped. Order and duplicates are kept
    as supplied.
    """
    if raw is None:
        return ()
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    tags: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(f"Tag must be text, got {type(item).__name__}.")
        tag = item.strip()
        if tag:
            tags.append(ensure_encodable(tag, "Tag"))
    return tuple(tags)


def check_stored_description(text: object) -> str:
    """Accept a persisted description as written: non-blank text, kept verbatim."""
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Stored description must be non-empty text.")
    return ensure_encodable(text, "Stored description")


def check_stored_tags(raw: object) -> tuple[str, ...]:
    """Accept persisted tags as written, empty strings included."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValidationError("Stored tags must be a list.")
    for item in raw:
        if not isinstance(item, str):
            raise ValidationError(f"Tag must be text, got {type(item).__name__}.")
        ensure_encodable(item, "Stored tag")
    return tuple(raw)
