"""Identifier and timestamp helpers shared by the services."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar
from uuid import UUID

from cinema.domain.errors import InvalidIdError, InvalidIntervalError

IdGenerator = Callable[[], UUID]
Clock = Callable[[], datetime]

IdT = TypeVar("IdT")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_aware(moment: datetime, name: str) -> datetime:
    """Raise InvalidIntervalError unless `moment` is a timezone-aware datetime."""
    if not isinstance(moment, datetime):
        raise InvalidIntervalError(f"{name} must be a datetime")
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise InvalidIntervalError(f"{name} must be timezone-aware")
    return moment


def parse_id(id_type: type[IdT], raw: "IdT | str", kind: str) -> IdT:
    """Accept either a typed identifier or its string form.

    Raises:
        InvalidIdError: If the string is not a valid UUID.
    """
    if isinstance(raw, id_type):
        return raw
    try:
        return id_type.from_string(raw)  # type: ignore[attr-defined]
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidIdError(kind) from exc
