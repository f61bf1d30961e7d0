from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shutterquote.db.crud.prices import PriceCatalog
from shutterquote.db.session import get_db
from shutterquote.pricing.calculator import calculate
from shutterquote.schemas.dto import BreakdownResponse, CalculationRequest

router = APIRouter()


@router.post("", response_model=BreakdownResponse)
def calculate_quotation(payload: CalculationRequest, db: Session = Depends(get_db)) -> BreakdownResponse:
    """Price the request against the current catalog. Nothing is stored."""
    breakdown = calculate(payload.to_input(), PriceCatalog(db))
    return BreakdownResponse.from_breakdown(breakdown)
