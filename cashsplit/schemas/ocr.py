"""
Wire schemas for the OCR service response.

The service returns a JSON array of receipt objects with capitalized keys:

    [{"Subtotal": "15.00", "Tax": 1.5, "Total": "16.50", "Tip": "N/A",
      "Items": [{"Name": "Burger", "Quantity": "1", "Total Price": 10.0}]}]

Amounts and quantities may arrive as numbers, numeric strings or "N/A".
They go through ``tolerant_amount``: anything unusable becomes 0.0.
Name and Total Price are strict; a silently zeroed price would skew the split.
"""
import logging
import math
from typing import Annotated, Any, List

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationInfo

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def tolerant_amount(value: Any, info: ValidationInfo) -> float:
    """Number -> float; numeric string (not "N/A") -> parsed; else 0.0."""
    parsed = None
    if _is_number(value) or (isinstance(value, str) and value != NOT_AVAILABLE):
        try:
            parsed = float(value)
        except (ValueError, OverflowError):
            parsed = None

    if parsed is not None and math.isfinite(parsed):
        return parsed

    logger.warning("Defaulting %s=%r to 0.0", info.field_name, value)
    return 0.0


def strict_number(value: Any) -> float:
    if not _is_number(value):
        raise ValueError(f"expected a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError("number too large")
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


TolerantFloat = Annotated[float, BeforeValidator(tolerant_amount)]
StrictNumber = Annotated[float, BeforeValidator(strict_number)]


class OcrItem(BaseModel):
    name: str = Field(alias="Name")
    quantity: TolerantFloat = Field(default=0.0, alias="Quantity")
    total_price: StrictNumber = Field(alias="Total Price")

    model_config = ConfigDict(populate_by_name=True)


class OcrReceipt(BaseModel):
    subtotal: TolerantFloat = Field(default=0.0, alias="Subtotal")
    tax: TolerantFloat = Field(default=0.0, alias="Tax")
    total: TolerantFloat = Field(default=0.0, alias="Total")
    tip: TolerantFloat = Field(default=0.0, alias="Tip")
    items: List[OcrItem] = Field(alias="Items")

    model_config = ConfigDict(populate_by_name=True)
