"""
Claim registry - which participant, if any, holds each item index.

Invariants:
- Each index maps to at most one participant
- Claiming an index held by someone else transfers it
- Claiming an index you already hold releases it
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class ToggleClaim(BaseModel):
    """Command: flip ``participant_id``'s claim on ``item_index``."""
    item_index: int
    participant_id: str

    model_config = ConfigDict(frozen=True)


class ClaimRegistry:
    """Mapping of item index -> participant id for one splitting session."""

    def __init__(self):
        self._claims: Dict[int, str] = {}

    def toggle_claim(self, command: ToggleClaim) -> Optional[str]:
        """Apply the command and return the resulting claimant of the item."""
        current = self._claims.get(command.item_index)
        if current == command.participant_id:
            del self._claims[command.item_index]
            return None
        self._claims[command.item_index] = command.participant_id
        return command.participant_id

    def claim(self, item_index: int, participant_id: str) -> Optional[str]:
        return self.toggle_claim(ToggleClaim(item_index=item_index, participant_id=participant_id))

    def unclaim(self, item_index: int) -> None:
        self._claims.pop(item_index, None)

    def claimant_of(self, item_index: int) -> Optional[str]:
        return self._claims.get(item_index)

    def items_claimed_by(self, participant_id: str) -> List[int]:
        return sorted(index for index, owner in self._claims.items() if owner == participant_id)

    def visible_items(self, participant_id: str, item_count: int) -> List[int]:
        """Indexes a participant may pick from: unclaimed ones and their own."""
        return [
            index for index in range(item_count)
            if self._claims.get(index) in (None, participant_id)
        ]

    def release_participant(self, participant_id: str) -> None:
        for index in self.items_claimed_by(participant_id):
            del self._claims[index]

    def clear(self) -> None:
        self._claims.clear()

    def as_dict(self) -> Dict[int, str]:
        return dict(self._claims)
