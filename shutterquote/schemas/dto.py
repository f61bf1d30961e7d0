from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from shutterquote.core.config import get_settings
from shutterquote.pricing.calculator import QuotationBreakdown, QuotationInput

DiscountType = Literal["none", "percentage", "fixed"]


def _default_vat() -> Decimal:
    return get_settings().DEFAULT_VAT_PERCENTAGE


class AdditionalCost(BaseModel):
    label: str = Field(min_length=1)
    amount: Decimal


class ProductPriceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_type: str
    price_per_sqm: Decimal
    description: str | None = None
    updated_at: datetime | None = None


class PriceUpdateRequest(BaseModel):
    # validated by the catalog so non-numeric input maps to the same error
    price_per_sqm: str


class CalculationRequest(BaseModel):
    product_type: str
    width: Decimal = Field(gt=0, description="cm")
    height: Decimal = Field(gt=0, description="cm")
    quantity: int = Field(gt=0)
    vat_percentage: Decimal = Field(default_factory=_default_vat, ge=0, le=100)
    discount_type: DiscountType = "none"
    discount_value: Decimal = Field(default=Decimal("0"), ge=0)
    additional_costs: list[AdditionalCost] = Field(default_factory=list)

    @model_validator(mode="after")
    def _percentage_in_range(self):
        if self.discount_type == "percentage" and self.discount_value > 100:
            raise ValueError("a percentage discount cannot exceed 100")
        return self

    def to_input(self) -> QuotationInput:
        return QuotationInput(
            product_type=self.product_type,
            width=self.width,
            height=self.height,
            quantity=self.quantity,
            vat_percentage=self.vat_percentage,
            discount_type=self.discount_type,
            discount_value=self.discount_value,
            additional_costs=self.additional_costs,
        )


class BreakdownResponse(BaseModel):
    area: str
    price_per_sqm: str
    net_price: str
    discount_amount: str
    gross_price: str
    vat_amount: str
    additional_costs_total: str
    final_total: str

    @classmethod
    def from_breakdown(cls, breakdown: QuotationBreakdown) -> "BreakdownResponse":
        return cls(**{k: str(v) for k, v in breakdown.rounded().items()})


class QuotationCreate(CalculationRequest):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr | None = None
    customer_phone: str | None = None
    customer_address: str | None = None

    area: Decimal = Field(gt=0)
    price_per_sqm: Decimal = Field(ge=0)
    net_price: Decimal
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)
    gross_price: Decimal
    vat_amount: Decimal
    additional_costs_total: Decimal = Decimal("0")
    final_total: Decimal

    notes: str | None = None

    def figures(self) -> dict[str, Decimal]:
        return {name: getattr(self, name) for name in BreakdownResponse.model_fields}

    def to_record(self) -> dict:
        data = self.model_dump(exclude={"additional_costs"})
        data["additional_costs"] = [item.as_json() for item in self.to_input().additional_costs]
        return data


class QuotationCreated(BaseModel):
    success: bool = True
    quotation_number: str


class QuotationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quotation_number: str
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    product_type: str
    width: Decimal
    height: Decimal
    quantity: int
    area: Decimal
    price_per_sqm: Decimal
    net_price: Decimal
    vat_percentage: Decimal
    vat_amount: Decimal
    gross_price: Decimal
    discount_type: DiscountType
    discount_value: Decimal
    discount_amount: Decimal
    additional_costs: list[AdditionalCost]
    additional_costs_total: Decimal
    final_total: Decimal
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
