from typing import List
from fastapi import APIRouter, HTTPException, UploadFile, File
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from cashsplit.core.config import settings
from cashsplit.core.errors import DecodeError, ItemNotFound, ParticipantNotFound, PreconditionViolation, UploadError
from cashsplit.db.session import get_database
from cashsplit.models.receipt import LineItem
from cashsplit.ocr.client import upload_receipt_image
from cashsplit.repositories.participant_repo import ParticipantRepository
from cashsplit.schemas.session import (
    ClaimResponse,
    ClaimToggle,
    LedgerResponse,
    SessionCreate,
    SessionResponse,
    SummaryResponse,
    TotalsUpdate,
    VisibleItem,
)
from cashsplit.services.allocation_service import AllocationService
from cashsplit.services.decoder import decode
from cashsplit.services.session_store import sessions
from cashsplit.services.split_service import SplitSession, render_summary_text

router = APIRouter()


def _get_session(session_id: str) -> SplitSession:
    session = sessions.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


async def _synced_session(session_id: str) -> SplitSession:
    """The open session, holding the participant directory as currently stored"""
    session = _get_session(session_id)
    db = await get_database()
    session.sync_directory(await ParticipantRepository(db).load_directory())
    return session


def _to_response(session: SplitSession) -> SessionResponse:
    ledger = session.ledger
    return SessionResponse(
        id=session.id,
        ledger=LedgerResponse(
            items=ledger.items,
            subtotal=ledger.subtotal,
            tax=ledger.tax,
            total=ledger.total,
            tip=ledger.tip,
            final_total=ledger.final_total,
            is_valid=ledger.is_valid()
        ),
        claims=session.claims.as_dict()
    )


async def _start_session(raw_text: str) -> SplitSession:
    try:
        ledger = decode(raw_text)
    except DecodeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    db = await get_database()
    repo = ParticipantRepository(db)
    directory = await repo.load_directory()
    session = SplitSession.start(ledger, directory)
    # Persist the cleared tabs (and the seeded "YOU" on first use)
    await repo.save_directory(directory)
    return sessions.add(session)


@router.post("/", response_model=SessionResponse, status_code=201)
async def create_session(session_in: SessionCreate):
    """Start splitting a receipt from the OCR service's raw response"""
    session = await _start_session(session_in.raw_text)
    return _to_response(session)


@router.post("/upload", response_model=SessionResponse, status_code=201)
async def upload_receipt(file: UploadFile = File(...)):
    """Send a receipt photo to the OCR service and start a session from its answer"""
    image_data = await file.read()
    if len(image_data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail="Image too large")

    try:
        raw_text = await run_in_threadpool(
            upload_receipt_image,
            image_data,
            filename=file.filename or "image.jpg",
            mime_type=file.content_type or "image/jpeg"
        )
    except UploadError as e:
        raise HTTPException(status_code=502, detail=str(e))

    session = await _start_session(raw_text)
    return _to_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return _to_response(_get_session(session_id))


@router.delete("/{session_id}")
async def close_session(session_id: str):
    if not sessions.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Session closed"}


@router.post("/{session_id}/items", response_model=SessionResponse, status_code=201)
async def add_item(session_id: str, item: LineItem):
    """Append a line item the OCR missed"""
    session = _get_session(session_id)
    session.ledger.add_item(item)
    return _to_response(session)


@router.put("/{session_id}/items/{item_index}", response_model=SessionResponse)
async def update_item(session_id: str, item_index: int, item: LineItem):
    """Correct a line item in place"""
    session = _get_session(session_id)
    try:
        session.ledger.update_item(item_index, item)
    except IndexError:
        raise HTTPException(status_code=404, detail="Item not found")
    return _to_response(session)


@router.put("/{session_id}/totals", response_model=SessionResponse)
async def set_totals(session_id: str, totals: TotalsUpdate):
    session = _get_session(session_id)
    session.ledger.set_totals(totals.subtotal, totals.tax, totals.total, totals.tip)
    return _to_response(session)


@router.post("/{session_id}/claims", response_model=ClaimResponse)
async def toggle_claim(session_id: str, claim: ClaimToggle):
    """Claim an item for a participant, or release it if they already hold it"""
    session = await _synced_session(session_id)
    try:
        claimant = session.toggle_claim(claim.item_index, claim.participant_id)
    except (ItemNotFound, ParticipantNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ClaimResponse(item_index=claim.item_index, claimant_id=claimant)


@router.delete("/{session_id}/claims/{item_index}", response_model=ClaimResponse)
async def unclaim(session_id: str, item_index: int):
    session = _get_session(session_id)
    try:
        session.unclaim(item_index)
    except ItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ClaimResponse(item_index=item_index, claimant_id=None)


@router.get("/{session_id}/participants/{participant_id}/items", response_model=List[VisibleItem])
async def visible_items(session_id: str, participant_id: str):
    """Items a participant can pick from: unclaimed ones and their own"""
    session = await _synced_session(session_id)
    try:
        indexes = session.visible_items(participant_id)
    except ParticipantNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [
        VisibleItem(
            index=index,
            item=session.ledger.items[index],
            claimed=session.claims.claimant_of(index) == participant_id
        )
        for index in indexes
    ]


def _summary_response(session: SplitSession) -> SummaryResponse:
    try:
        tabs = session.summaries()
    except PreconditionViolation as e:
        raise HTTPException(status_code=409, detail=str(e))

    owed = {tab.participant_id: tab.amount_owed for tab in tabs}
    return SummaryResponse(
        tabs=tabs,
        unallocated=round(AllocationService.unallocated_amount(session.ledger, owed), 2),
        recipients=[tab.contact_address for tab in tabs if tab.contact_address]
    )


@router.get("/{session_id}/summary", response_model=SummaryResponse)
async def get_summary(session_id: str):
    """Preview everyone's tab without storing it"""
    session = await _synced_session(session_id)
    return _summary_response(session)


@router.post("/{session_id}/summary", response_model=SummaryResponse)
async def finalize_summary(session_id: str):
    """Compute everyone's tab and store it on the participant directory"""
    session = await _synced_session(session_id)
    summary = _summary_response(session)

    db = await get_database()
    await ParticipantRepository(db).save_tabs(session.directory)
    return summary


@router.get("/{session_id}/summary/{participant_id}/text", response_class=PlainTextResponse)
async def get_summary_text(session_id: str, participant_id: str):
    """The plain-text receipt sent to one participant"""
    session = await _synced_session(session_id)
    try:
        tabs = session.summaries()
    except PreconditionViolation as e:
        raise HTTPException(status_code=409, detail=str(e))

    for tab in tabs:
        if tab.participant_id == participant_id:
            return render_summary_text(tab)
    raise HTTPException(status_code=404, detail="No tab for this participant")
