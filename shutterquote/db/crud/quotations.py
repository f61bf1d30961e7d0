"""Quotation store: create once, read many."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from shutterquote.core.config import get_settings
from shutterquote.core.errors import StorageUnavailable, ValidationError
from shutterquote.db.models import Quotation
from shutterquote.pricing.calculator import DISCOUNT_TYPES

logger = logging.getLogger(__name__)

MAX_NUMBER_ATTEMPTS = 5

# Columns a caller may supply; number, id and created_at belong to the store.
WRITABLE_FIELDS = frozenset(
    c.name for c in Quotation.__table__.columns if c.name not in {"id", "quotation_number", "created_at"}
)


class QuotationStore:
    def __init__(self, db: Session, clock: Callable[[], int] = time.time_ns) -> None:
        self.db = db
        self.clock = clock
        self.prefix = get_settings().QUOTATION_PREFIX

    def _number(self, attempt: int) -> str:
        millis = self.clock() // 1_000_000
        return f"{self.prefix}-{millis + attempt}"

    def create(self, data: Mapping[str, Any]) -> str:
        """Persist ``data`` verbatim under a freshly assigned quotation number.

        Numbers are millisecond timestamps; the unique constraint on
        ``quotation_number`` turns a collision into a retry with the next value.
        """
        unknown = set(data) - WRITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown quotation fields: {', '.join(sorted(unknown))}")
        if data.get("discount_type", "none") not in DISCOUNT_TYPES:
            raise ValidationError(f"discount_type must be one of {', '.join(DISCOUNT_TYPES)}")

        for attempt in range(MAX_NUMBER_ATTEMPTS):
            number = self._number(attempt)
            record = Quotation(
                quotation_number=number,
                created_at=datetime.now(timezone.utc),
                **data,
            )
            try:
                self.db.add(record)
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                if "quotation_number" not in str(exc.orig):
                    raise ValidationError("Quotation record is incomplete or inconsistent") from exc
                logger.warning("Quotation number %s already taken, retrying", number)
                continue
            except OperationalError as exc:
                self.db.rollback()
                raise StorageUnavailable("Database not available") from exc
            logger.info("Created quotation %s for %s", number, data.get("customer_name"))
            return number

        raise StorageUnavailable("Could not allocate a unique quotation number")

    def get_by_number(self, quotation_number: str) -> Optional[Quotation]:
        try:
            return (
                self.db.query(Quotation)
                .filter(Quotation.quotation_number == quotation_number)
                .one_or_none()
            )
        except OperationalError:
            logger.warning("Quotation store unavailable, lookup of %s degraded", quotation_number, exc_info=True)
            self.db.rollback()
            return None

    def get_by_id(self, quotation_id: int) -> Optional[Quotation]:
        try:
            return self.db.get(Quotation, quotation_id)
        except OperationalError:
            logger.warning("Quotation store unavailable, lookup of id %s degraded", quotation_id, exc_info=True)
            self.db.rollback()
            return None

    def list_all(self) -> list[Quotation]:
        try:
            return list(
                self.db.query(Quotation).order_by(Quotation.created_at.asc(), Quotation.id.asc()).all()
            )
        except OperationalError:
            logger.warning("Quotation store unavailable, returning no quotations", exc_info=True)
            self.db.rollback()
            return []
