"""Write the PDF of a stored quotation to disk.

Usage:
  python scripts/render_quotation.py QT-1700000000000 [out.pdf]
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from shutterquote.db.crud.quotations import QuotationStore
from shutterquote.db.session import SessionLocal
from shutterquote.render.pdf import pdf_filename, render_quotation_pdf


def main(argv: Optional[list[str]] = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        raise SystemExit("usage: render_quotation.py <quotation-number> [out.pdf]")
    number = argv[0]

    db = SessionLocal()
    try:
        quotation = QuotationStore(db).get_by_number(number)
        if quotation is None:
            raise SystemExit(f"quotation {number} not found")
        target = Path(argv[1]) if len(argv) >= 2 else Path(pdf_filename(quotation.quotation_number))
        target.write_bytes(render_quotation_pdf(quotation))
        print({"quotation_number": number, "path": str(target)})
    finally:
        db.close()


if __name__ == "__main__":
    main()
