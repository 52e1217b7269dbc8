from typing import Dict, Iterable

from cashsplit.core.errors import PreconditionViolation
from cashsplit.models.participant import Participant, Tab
from cashsplit.models.receipt import ReceiptLedger


class AllocationService:
    @staticmethod
    def allocate(tab: Tab) -> float:
        """
        Amount owed by the tab's owner.

        The owner's share of the pre-tax subtotal is applied to total + tip,
        so tax and tip are spread in proportion to what each person ordered.
        The ledger total is assumed to already include tax.
        """
        ledger = tab.ledger
        if not ledger.is_valid():
            raise PreconditionViolation(
                f"Cannot allocate against an invalid ledger "
                f"(subtotal={ledger.subtotal}, tax={ledger.tax}, total={ledger.total})"
            )

        if not tab.claimed_items:
            return 0.0

        share_ratio = tab.item_total() / ledger.subtotal
        return share_ratio * ledger.final_total

    @staticmethod
    def allocate_all(participants: Iterable[Participant]) -> Dict[str, float]:
        """Owed amount per participant id; participants without a tab owe 0."""
        owed: Dict[str, float] = {}
        for participant in participants:
            if participant.tab is None:
                owed[participant.id] = 0.0
            else:
                owed[participant.id] = AllocationService.allocate(participant.tab)
        return owed

    @staticmethod
    def unallocated_amount(ledger: ReceiptLedger, owed: Dict[str, float]) -> float:
        """
        What is left of total + tip after everyone's share.

        Non-zero when items are unclaimed or item prices don't add up to the
        subtotal. Not an error; hosts may show it.
        """
        return ledger.final_total - sum(owed.values())
