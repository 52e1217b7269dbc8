"""
Participant directory - the people a receipt can be split with.

The directory owns every Participant record. Callers get copies and write
changes back through directory methods, so no two views alias one record.
"""
import logging
from typing import Dict, List, Optional

from pydantic import TypeAdapter

from cashsplit.core.errors import ParticipantNotFound
from cashsplit.models.participant import Participant, Tab, SELF_PARTICIPANT_NAME

logger = logging.getLogger(__name__)

_participant_list = TypeAdapter(List[Participant])


class ParticipantDirectory:

    def __init__(self, participants: Optional[List[Participant]] = None):
        """
        Args:
            participants: the previously stored participant set, or None when
                none has ever been stored. In that case the self participant
                "YOU" is seeded.
        """
        self._participants: Dict[str, Participant] = {}
        if participants is None:
            logger.info("No stored participants, seeding %s", SELF_PARTICIPANT_NAME)
            self._store(Participant(name=SELF_PARTICIPANT_NAME))
        else:
            for participant in participants:
                self._store(participant)

    def _store(self, participant: Participant) -> None:
        self._participants[participant.id] = participant.model_copy(deep=True)

    def add_participant(self, name: str, contact_address: Optional[str] = None) -> Participant:
        participant = Participant(name=name, contact_address=contact_address or None)
        self._store(participant)
        return participant.model_copy(deep=True)

    def list_participants(self) -> List[Participant]:
        return [p.model_copy(deep=True) for p in self._participants.values()]

    def get(self, participant_id: str) -> Participant:
        participant = self._participants.get(participant_id)
        if participant is None:
            raise ParticipantNotFound(participant_id)
        return participant.model_copy(deep=True)

    def __contains__(self, participant_id: str) -> bool:
        return participant_id in self._participants

    def __len__(self) -> int:
        return len(self._participants)

    def set_tab(self, participant_id: str, tab: Optional[Tab]) -> Participant:
        participant = self.get(participant_id)
        participant.tab = tab.model_copy(deep=True) if tab is not None else None
        self._store(participant)
        return participant

    def reset_all_tabs(self) -> None:
        """Clear every tab. Called once when a new receipt is started."""
        for participant_id in list(self._participants):
            self._participants[participant_id] = self._participants[participant_id].model_copy(
                update={"tab": None}
            )

    def contact_addresses(self) -> List[str]:
        return [p.contact_address for p in self._participants.values() if p.contact_address]

    def to_records(self) -> List[dict]:
        return _participant_list.dump_python(list(self._participants.values()), mode="json")

    def to_json(self) -> str:
        return _participant_list.dump_json(list(self._participants.values())).decode("utf-8")

    @classmethod
    def from_records(cls, records: List[dict]) -> "ParticipantDirectory":
        return cls(_participant_list.validate_python(records))

    @classmethod
    def from_json(cls, text: str) -> "ParticipantDirectory":
        return cls(_participant_list.validate_json(text))
