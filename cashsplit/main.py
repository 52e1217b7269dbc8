from contextlib import asynccontextmanager

from fastapi import FastAPI
from cashsplit.core.config import settings
from cashsplit.core.logging import configure_logging
from cashsplit.db.mongo import connect_to_mongo, close_mongo_connection
from cashsplit.api.v1.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await connect_to_mongo()
    yield
    await close_mongo_connection()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

@app.get("/")
async def root():
    return {"message": "Welcome to CashSplit API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
