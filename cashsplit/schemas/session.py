from typing import Optional, List, Dict
from pydantic import BaseModel

from cashsplit.models.receipt import LineItem
from cashsplit.services.split_service import TabSummary


class SessionCreate(BaseModel):
    """Start a session from the OCR service's raw response text."""
    raw_text: str


class TotalsUpdate(BaseModel):
    subtotal: float
    tax: float
    total: float
    tip: float


class ClaimToggle(BaseModel):
    item_index: int
    participant_id: str


class ClaimResponse(BaseModel):
    item_index: int
    claimant_id: Optional[str] = None


class LedgerResponse(BaseModel):
    items: List[LineItem]
    subtotal: float
    tax: float
    total: float
    tip: float
    final_total: float
    is_valid: bool


class SessionResponse(BaseModel):
    id: str
    ledger: LedgerResponse
    claims: Dict[int, str]


class VisibleItem(BaseModel):
    index: int
    item: LineItem
    claimed: bool


class SummaryResponse(BaseModel):
    tabs: List[TabSummary]
    unallocated: float
    recipients: List[str]
