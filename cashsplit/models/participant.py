"""
Participant model - someone a receipt can be split with.

A participant owns at most one Tab per splitting session. Tabs are cleared
at the start of every session; claims never carry over between receipts.
"""

from typing import Optional, List
from bson import ObjectId
from pydantic import BaseModel, Field

from cashsplit.models.receipt import ReceiptLedger

SELF_PARTICIPANT_NAME = "YOU"


def _new_participant_id() -> str:
    return str(ObjectId())


class ClaimedItem(BaseModel):
    """Copy of a claimed line item as it stood when the tab was built."""
    name: str
    quantity: float = 0.0
    price: float


class Tab(BaseModel):
    """A participant's claimed items and the ledger their share is computed against."""
    claimed_items: List[ClaimedItem] = Field(default_factory=list)
    ledger: ReceiptLedger

    def add_item(self, name: str, quantity: float, price: float) -> None:
        self.claimed_items.append(ClaimedItem(name=name, quantity=quantity, price=price))

    def item_total(self) -> float:
        return sum(item.price for item in self.claimed_items)


class Participant(BaseModel):
    id: str = Field(default_factory=_new_participant_id)
    name: str
    contact_address: Optional[str] = None  # phone number or similar, optional
    tab: Optional[Tab] = None

    @property
    def is_self(self) -> bool:
        return self.name == SELF_PARTICIPANT_NAME
