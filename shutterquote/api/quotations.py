from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from shutterquote.core.config import get_settings
from shutterquote.core.security import Principal, optional_principal
from shutterquote.db.crud.prices import PriceCatalog
from shutterquote.db.crud.quotations import QuotationStore
from shutterquote.db.session import get_db
from shutterquote.pricing.calculator import verify_submission
from shutterquote.render.pdf import pdf_filename, render_quotation_pdf
from shutterquote.schemas.dto import QuotationCreate, QuotationCreated, QuotationResponse

router = APIRouter()


@router.post("", response_model=QuotationCreated, status_code=201)
def create_quotation(
    payload: QuotationCreate,
    principal: Optional[Principal] = Depends(optional_principal),
    db: Session = Depends(get_db),
) -> QuotationCreated:
    if get_settings().VERIFY_SUBMITTED_TOTALS:
        verify_submission(payload.to_input(), payload.figures(), PriceCatalog(db))

    record = payload.to_record()
    record["created_by"] = principal.name if principal else None
    number = QuotationStore(db).create(record)
    return QuotationCreated(quotation_number=number)


@router.get("", response_model=list[QuotationResponse])
def list_quotations(db: Session = Depends(get_db)) -> list[QuotationResponse]:
    return [QuotationResponse.model_validate(q) for q in QuotationStore(db).list_all()]


@router.get("/by-id/{quotation_id}", response_model=QuotationResponse)
def get_quotation_by_id(quotation_id: int, db: Session = Depends(get_db)) -> QuotationResponse:
    quotation = QuotationStore(db).get_by_id(quotation_id)
    if quotation is None:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return QuotationResponse.model_validate(quotation)


@router.get("/{quotation_number}", response_model=QuotationResponse)
def get_quotation(quotation_number: str, db: Session = Depends(get_db)) -> QuotationResponse:
    quotation = QuotationStore(db).get_by_number(quotation_number)
    if quotation is None:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return QuotationResponse.model_validate(quotation)


@router.get("/{quotation_number}/pdf")
def get_quotation_pdf(quotation_number: str, db: Session = Depends(get_db)) -> Response:
    quotation = QuotationStore(db).get_by_number(quotation_number)
    if quotation is None:
        raise HTTPException(status_code=404, detail="Quotation not found")
    document = render_quotation_pdf(quotation)
    return Response(
        content=document,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(quotation.quotation_number)}"'},
    )
