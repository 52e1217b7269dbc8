"""
Shared fixtures.

MongoDB is replaced by a MagicMock whose "directories" collection keeps
documents in a plain dict, so repository round-trips behave like the real
thing without a server.
"""
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock, patch
from httpx import AsyncClient, ASGITransport

from cashsplit.main import app
from cashsplit.models.receipt import LineItem, ReceiptLedger
from cashsplit.services.session_store import sessions


@pytest.fixture
def mock_db():
    """Mock database with an in-memory "directories" collection."""
    store = {}

    async def find_one(query):
        return store.get(query["_id"])

    async def update_one(query, update, upsert=False):
        doc = store.get(query["_id"])
        if doc is None:
            if not upsert:
                return MagicMock(modified_count=0)
            doc = store[query["_id"]] = {"_id": query["_id"]}
        doc.update(update["$set"])
        return MagicMock(modified_count=1)

    collection = MagicMock()
    collection.find_one = AsyncMock(side_effect=find_one)
    collection.update_one = AsyncMock(side_effect=update_one)
    collection.store = store

    db = MagicMock()
    db.__getitem__.return_value = collection
    db.directories = collection
    return db


@pytest_asyncio.fixture
async def client(mock_db):
    """API client with the database patched out and a clean session store."""
    sessions.clear()
    with patch("cashsplit.api.v1.endpoints.sessions.get_database", return_value=mock_db), \
         patch("cashsplit.api.v1.endpoints.participants.get_database", return_value=mock_db):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    sessions.clear()


@pytest.fixture
def burger_ledger():
    """Two items, $15 subtotal, 10% tax, $3 tip."""
    return ReceiptLedger(
        items=[
            LineItem(name="Burger", quantity=1.0, total_price=10.0),
            LineItem(name="Fries", quantity=1.0, total_price=5.0),
        ],
        subtotal=15.0,
        tax=1.5,
        total=16.5,
        tip=3.0
    )


@pytest.fixture
def raw_receipt():
    return (
        '[{"Subtotal":"15.00","Tax":1.5,"Total":"16.50","Tip":"N/A",'
        '"Items":[{"Name":"Burger","Quantity":"1","Total Price":10.0},'
        '{"Name":"Fries","Quantity":1,"Total Price":5}]}]'
    )
