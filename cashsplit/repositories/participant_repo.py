from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from cashsplit.services.directory_service import ParticipantDirectory

DIRECTORY_DOC_ID = "participants"


class ParticipantRepository:
    """
    Participant directory persistence.

    The whole directory is one document holding a JSON array of participant
    records (id, name, contact address, tab). A missing document means no
    participant set was ever stored, which makes the directory seed "YOU".
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["directories"]

    async def load_directory(self) -> ParticipantDirectory:
        """Load the stored directory, or seed and store a new one."""
        doc = await self.collection.find_one({"_id": DIRECTORY_DOC_ID})
        if doc is None:
            directory = ParticipantDirectory()
            await self.save_directory(directory)
            return directory
        return ParticipantDirectory.from_records(doc.get("participants", []))

    async def save_directory(self, directory: ParticipantDirectory) -> None:
        """Replace the stored directory."""
        await self.collection.update_one(
            {"_id": DIRECTORY_DOC_ID},
            {"$set": {
                "participants": directory.to_records(),
                "updated_at": datetime.now(timezone.utc)
            }},
            upsert=True
        )

    async def save_tabs(self, directory: ParticipantDirectory) -> None:
        """
        Store the tabs held by ``directory`` onto the stored directory.

        Only tabs are written, and only for participants still stored;
        participants added or removed elsewhere are left as they are.
        """
        stored = await self.load_directory()
        for participant in directory.list_participants():
            if participant.id in stored:
                stored.set_tab(participant.id, participant.tab)
        await self.save_directory(stored)
