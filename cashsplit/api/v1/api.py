from fastapi import APIRouter
from cashsplit.api.v1.endpoints import participants, sessions

api_router = APIRouter()

api_router.include_router(participants.router, prefix="/participants", tags=["participants"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
