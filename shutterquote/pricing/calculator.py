"""Quotation price calculation.

The pipeline is fixed: area -> net -> discount -> gross -> VAT -> additional
costs -> final total. Every step works on exact Decimals; rounding to cents
happens only when figures are presented (``QuotationBreakdown.rounded``).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from shutterquote.core.errors import NotFound, StorageUnavailable, ValidationError

DISCOUNT_NONE = "none"
DISCOUNT_PERCENTAGE = "percentage"
DISCOUNT_FIXED = "fixed"
DISCOUNT_TYPES = (DISCOUNT_NONE, DISCOUNT_PERCENTAGE, DISCOUNT_FIXED)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
SQCM_PER_SQM = Decimal("10000")


class PriceLookup(Protocol):
    def get_by_type(self, product_type: str) -> Any: ...


def to_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{name} must be a number") from None
    if not result.is_finite():
        raise ValidationError(f"{name} must be a finite number")
    return result


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CostLineItem:
    label: str
    amount: Decimal

    def as_json(self) -> dict[str, str]:
        return {"label": self.label, "amount": str(self.amount)}


@dataclass(frozen=True)
class QuotationInput:
    product_type: str
    width: Decimal
    height: Decimal
    quantity: int
    vat_percentage: Decimal
    discount_type: str = DISCOUNT_NONE
    discount_value: Decimal = Decimal("0")
    additional_costs: Sequence[CostLineItem] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("width", "height", "vat_percentage", "discount_value"):
            object.__setattr__(self, name, to_decimal(getattr(self, name), name))
        object.__setattr__(self, "additional_costs", build_cost_items(self.additional_costs))


@dataclass(frozen=True)
class QuotationBreakdown:
    area: Decimal
    price_per_sqm: Decimal
    net_price: Decimal
    discount_amount: Decimal
    gross_price: Decimal
    vat_amount: Decimal
    additional_costs_total: Decimal
    final_total: Decimal

    def rounded(self) -> dict[str, Decimal]:
        return {f.name: quantize_money(getattr(self, f.name)) for f in fields(self)}


def build_cost_items(raw: Optional[Iterable[Any]]) -> tuple[CostLineItem, ...]:
    """Coerce dicts/objects with ``label`` and ``amount`` into CostLineItems."""
    items: list[CostLineItem] = []
    for index, entry in enumerate(raw or []):
        if isinstance(entry, CostLineItem):
            items.append(entry)
            continue
        if isinstance(entry, Mapping):
            label, amount = entry.get("label"), entry.get("amount")
        else:
            label, amount = getattr(entry, "label", None), getattr(entry, "amount", None)
        if not isinstance(label, str) or amount is None:
            raise ValidationError(f"additional_costs[{index}] needs a label and an amount")
        items.append(CostLineItem(label=label, amount=to_decimal(amount, f"additional_costs[{index}].amount")))
    return tuple(items)


def validate_input(data: QuotationInput) -> None:
    if data.width <= 0:
        raise ValidationError("width must be greater than 0")
    if data.height <= 0:
        raise ValidationError("height must be greater than 0")
    if isinstance(data.quantity, bool) or not isinstance(data.quantity, int) or data.quantity <= 0:
        raise ValidationError("quantity must be a positive integer")
    if not Decimal("0") <= data.vat_percentage <= HUNDRED:
        raise ValidationError("vat_percentage must be between 0 and 100")
    if data.discount_type not in DISCOUNT_TYPES:
        raise ValidationError(f"discount_type must be one of {', '.join(DISCOUNT_TYPES)}")
    if data.discount_value < 0:
        raise ValidationError("discount_value must not be negative")
    if data.discount_type == DISCOUNT_PERCENTAGE and data.discount_value > HUNDRED:
        raise ValidationError("a percentage discount cannot exceed 100")


def compute_area(width: Decimal, height: Decimal) -> Decimal:
    return width * height / SQCM_PER_SQM


def compute_discount(net_price: Decimal, discount_type: str, discount_value: Decimal) -> Decimal:
    if discount_type == DISCOUNT_PERCENTAGE:
        return net_price * discount_value / HUNDRED
    if discount_type == DISCOUNT_FIXED:
        return discount_value
    return Decimal("0")


def sum_costs(items: Iterable[CostLineItem]) -> Decimal:
    total = Decimal("0")
    for item in items:
        total += item.amount
    return total


def _breakdown(data: QuotationInput, price_per_sqm: Decimal) -> QuotationBreakdown:
    area = compute_area(data.width, data.height)
    net_price = area * price_per_sqm * data.quantity
    discount_amount = compute_discount(net_price, data.discount_type, data.discount_value)
    gross_price = net_price - discount_amount
    vat_amount = gross_price * data.vat_percentage / HUNDRED
    additional_costs_total = sum_costs(data.additional_costs)
    final_total = gross_price + vat_amount + additional_costs_total
    return QuotationBreakdown(
        area=area,
        price_per_sqm=price_per_sqm,
        net_price=net_price,
        discount_amount=discount_amount,
        gross_price=gross_price,
        vat_amount=vat_amount,
        additional_costs_total=additional_costs_total,
        final_total=final_total,
    )


def calculate(data: QuotationInput, catalog: PriceLookup) -> QuotationBreakdown:
    """Price ``data`` against the current catalog entry for its product type."""
    validate_input(data)
    entry = catalog.get_by_type(data.product_type)
    if entry is None:
        if not getattr(catalog, "available", True):
            raise StorageUnavailable("Price catalog not available")
        raise NotFound(f"No price configured for product type '{data.product_type}'")
    return _breakdown(data, to_decimal(entry.price_per_sqm, "price_per_sqm"))


def verify_submission(
    data: QuotationInput, submitted: Mapping[str, Any], catalog: PriceLookup
) -> QuotationBreakdown:
    """Recompute the breakdown and reject submitted figures that disagree with it.

    Figures are compared at cent precision. Missing figures count as mismatches.
    """
    breakdown = calculate(data, catalog)
    expected = breakdown.rounded()
    mismatched: list[str] = []
    for name, value in expected.items():
        raw = submitted.get(name)
        if raw is None or quantize_money(to_decimal(raw, name)) != value:
            mismatched.append(name)
    if mismatched:
        raise ValidationError(
            "Submitted figures do not match the current pricing: " + ", ".join(mismatched)
        )
    return breakdown
