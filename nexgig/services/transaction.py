import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from nexgig.core.errors import ConflictError, MarketplaceError, StoreError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(session: Session, action: str, conflict: Optional[str] = None) -> Iterator[Session]:
    """Runs the enclosed writes as one unit: commit on exit, full rollback on any error.

    Domain errors raised inside the block are re-raised untouched. A uniqueness
    violation becomes ``ConflictError(conflict)`` when ``conflict`` is given;
    every other store error becomes ``StoreError``.
    """
    try:
        yield session
        session.commit()
    except MarketplaceError:
        session.rollback()
        raise
    except IntegrityError as exc:
        session.rollback()
        if conflict is not None:
            logger.warning("%s rejected by a uniqueness constraint", action)
            raise ConflictError(conflict) from exc
        logger.exception("%s failed, transaction rolled back", action)
        raise StoreError(f"Failed to {action}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("%s failed, transaction rolled back", action)
        raise StoreError(f"Failed to {action}") from exc
