"""Field rules applied by entity validators when attributes are assigned."""

import re
from datetime import datetime, timezone

from catalog.core.errors import ConstraintViolationError

MAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def require_text(entity: str, field: str, value: str | None, max_length: int) -> str:
    if value is None or not value.strip():
        raise ConstraintViolationError(entity, field, 'must not be blank')
    if len(value) > max_length:
        raise ConstraintViolationError(entity, field, f'must be {max_length} characters or fewer')
    return value


def require_mail(entity: str, field: str, value: str | None, max_length: int) -> str:
    value = require_text(entity, field, value, max_length)
    if not MAIL_PATTERN.match(value):
        raise ConstraintViolationError(entity, field, 'must be a well-formed e-mail address')
    return value


def as_utc(value: datetime | None) -> datetime | None:
    """Aware values are converted to UTC, naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def require_utc_timestamp(entity: str, field: str, value: datetime | None) -> datetime:
    if value is None:
        raise ConstraintViolationError(entity, field, 'must not be null')
    return as_utc(value)
