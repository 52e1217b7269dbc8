"""
Receipt ledger model - the editable record of one receipt.

Design principles:
- Items are identified by position; there is no removal, so an index
  referenced by a claim stays valid for the whole session
- Totals are edited independently of items; sum(items) == subtotal is not enforced
- Values are never bounds-checked; the human corrects OCR noise
"""

from typing import Optional, List
from pydantic import BaseModel, Field


class LineItem(BaseModel):
    name: str
    quantity: Optional[float] = None  # unknown when the OCR could not read it
    total_price: float  # line total, never a unit price

    model_config = {"validate_assignment": True}


class ReceiptLedger(BaseModel):
    """
    Line items plus subtotal/tax/total/tip.

    Invariant:
    - is_valid() iff subtotal, tax and total are all non-zero (tip may be 0)
    """
    items: List[LineItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    tip: float = 0.0

    model_config = {"validate_assignment": True}

    def add_item(self, item: LineItem) -> int:
        """Append an item and return its index."""
        self.items.append(item)
        return len(self.items) - 1

    def add_blank_item(self) -> int:
        """Append an empty row for the user to fill in."""
        return self.add_item(LineItem(name="", quantity=0.0, total_price=0.0))

    def update_item(self, index: int, new_item: LineItem) -> None:
        if index < 0 or index >= len(self.items):
            raise IndexError(f"Item index {index} out of range")
        self.items[index] = new_item

    def set_totals(self, subtotal: float, tax: float, total: float, tip: float) -> None:
        self.subtotal = subtotal
        self.tax = tax
        self.total = total
        self.tip = tip

    def is_valid(self) -> bool:
        return self.subtotal != 0 and self.tax != 0 and self.total != 0

    @property
    def final_total(self) -> float:
        """Total plus tip: the amount the allocation distributes."""
        return self.total + self.tip

    def items_total(self) -> float:
        return sum(item.total_price for item in self.items)
