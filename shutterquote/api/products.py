from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shutterquote.core.security import Principal, require_admin
from shutterquote.db.crud.prices import PriceCatalog
from shutterquote.db.session import get_db
from shutterquote.schemas.dto import PriceUpdateRequest, ProductPriceResponse

router = APIRouter()


@router.get("", response_model=list[ProductPriceResponse])
def list_prices(db: Session = Depends(get_db)) -> list[ProductPriceResponse]:
    return [ProductPriceResponse.model_validate(p) for p in PriceCatalog(db).get_all()]


@router.get("/{product_type}", response_model=ProductPriceResponse)
def get_price(product_type: str, db: Session = Depends(get_db)) -> ProductPriceResponse:
    entry = PriceCatalog(db).get_by_type(product_type)
    if entry is None:
        raise HTTPException(status_code=404, detail="Product price not found")
    return ProductPriceResponse.model_validate(entry)


@router.put("/{product_type}", response_model=ProductPriceResponse)
def update_price(
    product_type: str,
    payload: PriceUpdateRequest,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ProductPriceResponse:
    entry = PriceCatalog(db).update(product_type, payload.price_per_sqm, principal)
    return ProductPriceResponse.model_validate(entry)
