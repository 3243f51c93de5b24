"""
Human-readable codes of the form ``<PREFIX>-<NNN>``.

Residents use ``R`` and transactions use ``INC``/``EXP``.  The next number
is derived from the most recently inserted row carrying the prefix, so
codes keep counting up even when older rows are deleted.  The columns
holding the codes are unique; :func:`create_with_code` regenerates the
code when a concurrent writer got there first.
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

from django.db import IntegrityError, models, transaction

from facility.exceptions import DataIntegrityError

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=models.Model)

MAX_ATTEMPTS = 5


def format_code(prefix: str, number: int) -> str:
    # three digits minimum; R-1000 follows R-999
    return f"{prefix}-{number:03d}"


def next_code(model: type[models.Model], *, field: str, prefix: str) -> str:
    last = (
        model.objects.filter(**{f"{field}__startswith": f"{prefix}-"})
        .order_by('-id')
        .values_list(field, flat=True)
        .first()
    )
    if last is None:
        return format_code(prefix, 1)
    suffix = last[len(prefix) + 1:]
    if not (suffix.isascii() and suffix.isdigit()):
        raise DataIntegrityError(f"Malformed code {last!r} for prefix {prefix}")
    return format_code(prefix, int(suffix) + 1)


def create_with_code(model: type[M], *, field: str, prefix: str, build: Callable[[str], M]) -> M:
    """Save the instance returned by ``build(code)``, retrying on a code collision.

    Must run inside an outer transaction; each attempt uses a savepoint so a
    collision does not poison the surrounding work.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        code = next_code(model, field=field, prefix=prefix)
        instance = build(code)
        try:
            with transaction.atomic():
                instance.save()
            return instance
        except IntegrityError:
            if not model.objects.filter(**{field: code}).exists():
                raise
            logger.warning("Code %s already taken (attempt %d), regenerating", code, attempt)
    raise DataIntegrityError(f"Could not allocate a unique {prefix} code")
