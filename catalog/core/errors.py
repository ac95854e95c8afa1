"""Exceptions shared by the persistence and HTTP layers."""

from sqlalchemy.exc import IntegrityError


class ConstraintViolationError(ValueError):
    """A write rejected by a data-integrity rule on an entity field."""

    def __init__(self, entity: str, field: str, message: str):
        super().__init__(f'{entity}.{field}: {message}')
        self.entity = entity
        self.field = field
        self.message = message


def iter_causes(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def root_cause(exc: BaseException) -> BaseException:
    cause = exc
    for cause in iter_causes(exc):
        pass
    return cause


def is_constraint_violation(exc: BaseException) -> bool:
    return any(isinstance(cause, (ConstraintViolationError, IntegrityError)) for cause in iter_causes(exc))
