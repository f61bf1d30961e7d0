"""Seed the default product price catalog.

Usage:
  python scripts/seed_prices.py [--create-tables]

Existing product types keep their current price. ``--create-tables`` creates
the schema directly from the models (handy for a local SQLite file); otherwise
the schema is expected to exist already (alembic upgrade head).
"""

from __future__ import annotations

import sys
from typing import Optional

from shutterquote.db.base import Base
from shutterquote.db.crud.prices import PriceCatalog
from shutterquote.db.session import SessionLocal, engine


def main(argv: Optional[list[str]] = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if "--create-tables" in argv:
        Base.metadata.create_all(engine)

    db = SessionLocal()
    try:
        created = PriceCatalog(db).seed()
        print({"created": created})
    finally:
        db.close()


if __name__ == "__main__":
    main()
