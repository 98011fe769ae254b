"""
Stockroom Backend — Shared Service Helpers
============================================

What:  Field checks and database error translation used by every service.

    require_fields()     → ValidationError listing every missing/blank field
    clean()              → whitespace trim that tolerates None
    database_errors()    → wraps a block of ORM calls; IntegrityError becomes
                           ConflictError, any other SQLAlchemyError becomes
                           DatabaseError. Application exceptions raised inside
                           the block pass through unchanged.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from stockroom.exceptions import ConflictError, DatabaseError, ValidationError

logger = logging.getLogger(__name__)


def clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(**fields: Any) -> None:
    """
    Raise ValidationError unless every keyword argument carries a value.

    Zero and False count as present; None and whitespace-only strings don't.
    """
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise ValidationError(
            message=f"Missing required fields: {', '.join(missing)}",
            context={"missing_fields": missing},
        )


@contextmanager
def database_errors(action: str, **context: Any) -> Iterator[None]:
    """
    Translate SQLAlchemy failures raised inside the block.

    Args:
        action:  Phrase completing "Could not ..." (e.g. "create the user")
        context: Extra identifiers logged with the failure
    """
    try:
        yield
    except IntegrityError as e:
        # Lost a race against the service's own uniqueness check
        logger.warning("Integrity error while trying to %s: %s", action, e.orig)
        raise ConflictError(
            message=f"Could not {action}: it conflicts with existing data",
            context=context,
        ) from e
    except SQLAlchemyError as e:
        logger.error("Database error while trying to %s: %s", action, str(e), exc_info=True)
        raise DatabaseError(
            message=f"Could not {action}. Please try again.",
            context={"error_type": type(e).__name__, **context},
        ) from e
