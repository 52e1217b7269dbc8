"""
Split session - one receipt being divided among the directory's participants.

Flow:
1. start(): clear every participant's tab, empty claim registry
2. edit the ledger, toggle claims
3. allocate_all() / summaries(): build tabs from the registry against the
   live ledger and compute what everyone owes

Tabs are rebuilt on every allocation, so ledger edits made after a claim are
always reflected. A session assumes a single writer.
"""
import logging
from typing import Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from cashsplit.core.errors import ItemNotFound, ParticipantNotFound, PreconditionViolation
from cashsplit.models.participant import ClaimedItem, Participant, Tab
from cashsplit.models.receipt import ReceiptLedger
from cashsplit.services.allocation_service import AllocationService
from cashsplit.services.claim_registry import ClaimRegistry, ToggleClaim
from cashsplit.services.directory_service import ParticipantDirectory

logger = logging.getLogger(__name__)


class TabSummary(BaseModel):
    """Per-participant export: what they claimed and what they owe."""
    participant_id: str
    name: str
    contact_address: Optional[str] = None
    items: List[ClaimedItem] = Field(default_factory=list)
    amount_owed: float
    is_self: bool = False


class SplitSession:

    def __init__(self, ledger: ReceiptLedger, directory: ParticipantDirectory):
        self.id = str(ObjectId())
        self.ledger = ledger
        self.directory = directory
        self.claims = ClaimRegistry()

    @classmethod
    def start(cls, ledger: ReceiptLedger, directory: ParticipantDirectory) -> "SplitSession":
        """Begin splitting a new receipt; tabs from the previous receipt are dropped."""
        directory.reset_all_tabs()
        session = cls(ledger, directory)
        logger.info(
            "Started session %s: %d items, %d participants",
            session.id, len(ledger.items), len(directory)
        )
        return session

    def sync_directory(self, directory: ParticipantDirectory) -> None:
        """Adopt a freshly loaded directory; claims held by removed participants are released."""
        for participant_id in set(self.claims.as_dict().values()):
            if participant_id not in directory:
                self.claims.release_participant(participant_id)
        self.directory = directory

    def _check_item(self, item_index: int) -> None:
        if item_index < 0 or item_index >= len(self.ledger.items):
            raise ItemNotFound(item_index)

    def _check_participant(self, participant_id: str) -> None:
        if participant_id not in self.directory:
            raise ParticipantNotFound(participant_id)

    def toggle_claim(self, item_index: int, participant_id: str) -> Optional[str]:
        self._check_item(item_index)
        self._check_participant(participant_id)
        return self.claims.toggle_claim(ToggleClaim(item_index=item_index, participant_id=participant_id))

    def unclaim(self, item_index: int) -> None:
        self._check_item(item_index)
        self.claims.unclaim(item_index)

    def visible_items(self, participant_id: str) -> List[int]:
        self._check_participant(participant_id)
        return self.claims.visible_items(participant_id, len(self.ledger.items))

    def build_tab(self, participant_id: str) -> Optional[Tab]:
        """Tab of the participant's claimed items, or None when they hold nothing."""
        indexes = self.claims.items_claimed_by(participant_id)
        if not indexes:
            return None

        tab = Tab(ledger=self.ledger.model_copy(deep=True))
        for index in indexes:
            item = self.ledger.items[index]
            tab.add_item(item.name, item.quantity or 0.0, item.total_price)
        return tab

    def materialize_tabs(self) -> List[Participant]:
        """Write a fresh tab (or None) onto every participant in the directory."""
        for participant in self.directory.list_participants():
            self.directory.set_tab(participant.id, self.build_tab(participant.id))
        return self.directory.list_participants()

    def allocate_all(self) -> Dict[str, float]:
        if not self.ledger.is_valid():
            raise PreconditionViolation("Subtotal, tax and total must all be non-zero before splitting")
        participants = self.materialize_tabs()
        return AllocationService.allocate_all(participants)

    def summaries(self) -> List[TabSummary]:
        """Export for every participant holding a tab, in directory order."""
        owed = self.allocate_all()
        return [
            TabSummary(
                participant_id=participant.id,
                name=participant.name,
                contact_address=participant.contact_address,
                items=participant.tab.claimed_items,
                amount_owed=owed[participant.id],
                is_self=participant.is_self,
            )
            for participant in self.directory.list_participants()
            if participant.tab is not None
        ]


def render_summary_text(summary: TabSummary) -> str:
    """Plain-text receipt for one participant, as sent to them."""
    lines = [f"Friend: {summary.name}"]
    for item in summary.items:
        lines.append(f"Item: {item.name}")
        lines.append(f"Quantity: {item.quantity:.1f}")
        lines.append(f"Price: {item.price:.2f}")
    verb = "owe" if summary.is_self else "owes"
    lines.append(f"{summary.name} {verb} {summary.amount_owed:.2f}")
    return "\n".join(lines)
