from typing import List
from fastapi import APIRouter

from cashsplit.db.session import get_database
from cashsplit.repositories.participant_repo import ParticipantRepository
from cashsplit.schemas.participant import ParticipantCreate, ParticipantResponse
from cashsplit.models.participant import Participant

router = APIRouter()


def _to_response(participant: Participant) -> ParticipantResponse:
    return ParticipantResponse(
        id=participant.id,
        name=participant.name,
        contact_address=participant.contact_address,
        has_tab=participant.tab is not None
    )


@router.get("/", response_model=List[ParticipantResponse])
async def list_participants():
    """List everyone a receipt can be split with"""
    db = await get_database()
    directory = await ParticipantRepository(db).load_directory()
    return [_to_response(p) for p in directory.list_participants()]


@router.post("/", response_model=ParticipantResponse, status_code=201)
async def add_participant(participant_in: ParticipantCreate):
    """Add a participant to the directory"""
    db = await get_database()
    repo = ParticipantRepository(db)
    directory = await repo.load_directory()
    participant = directory.add_participant(participant_in.name, participant_in.contact_address)
    await repo.save_directory(directory)
    return _to_response(participant)
