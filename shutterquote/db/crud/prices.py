"""Product price catalog backed by the ``product_prices`` table."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from shutterquote.core.errors import NotFound, StorageUnavailable, ValidationError
from shutterquote.core.security import Principal, ensure_admin
from shutterquote.db.models import ProductPrice
from shutterquote.pricing.calculator import to_decimal

logger = logging.getLogger(__name__)

DEFAULT_PRICES: tuple[dict[str, Any], ...] = (
    {"product_type": "plastic", "price_per_sqm": Decimal("45.00"), "description": "PVC roller shutter"},
    {"product_type": "aluminium", "price_per_sqm": Decimal("85.00"), "description": "Aluminium roller shutter"},
)


class PriceCatalog:
    def __init__(self, db: Session) -> None:
        self.db = db
        # false after a read degraded on a storage outage
        self.available = True

    def get_all(self) -> list[ProductPrice]:
        try:
            return list(self.db.query(ProductPrice).order_by(ProductPrice.id).all())
        except OperationalError:
            logger.warning("Price catalog unavailable, returning no entries", exc_info=True)
            self.available = False
            self.db.rollback()
            return []

    def get_by_type(self, product_type: str) -> Optional[ProductPrice]:
        try:
            return (
                self.db.query(ProductPrice)
                .filter(ProductPrice.product_type == product_type)
                .one_or_none()
            )
        except OperationalError:
            logger.warning("Price catalog unavailable, lookup of %s degraded", product_type, exc_info=True)
            self.available = False
            self.db.rollback()
            return None

    def update(self, product_type: str, new_price: Any, principal: Optional[Principal]) -> ProductPrice:
        """Overwrite the price of an existing product type. Admin only."""
        ensure_admin(principal)
        price = to_decimal(new_price, "price_per_sqm")
        if price < 0:
            raise ValidationError("price_per_sqm must not be negative")

        try:
            entry = (
                self.db.query(ProductPrice)
                .filter(ProductPrice.product_type == product_type)
                .one_or_none()
            )
            if entry is None:
                raise NotFound(f"Unknown product type '{product_type}'")
            entry.price_per_sqm = price
            entry.updated_at = datetime.now(timezone.utc)
            self.db.commit()
        except OperationalError as exc:
            self.db.rollback()
            raise StorageUnavailable("Database not available") from exc

        logger.info("Price for %s set to %s by %s", product_type, price, principal.name)
        return entry

    def seed(self, entries: Iterable[dict[str, Any]] = DEFAULT_PRICES) -> int:
        """Insert catalog entries that do not exist yet. Existing prices are left alone."""
        created = 0
        try:
            existing = {p for (p,) in self.db.query(ProductPrice.product_type).all()}
            for entry in entries:
                if entry["product_type"] in existing:
                    continue
                self.db.add(
                    ProductPrice(
                        product_type=entry["product_type"],
                        price_per_sqm=to_decimal(entry["price_per_sqm"], "price_per_sqm"),
                        description=entry.get("description"),
                    )
                )
                created += 1
            self.db.commit()
        except OperationalError as exc:
            self.db.rollback()
            raise StorageUnavailable("Database not available") from exc
        return created
