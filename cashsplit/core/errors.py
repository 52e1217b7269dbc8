"""Error taxonomy shared by the splitting services."""


class CashSplitError(Exception):
    """Base class for errors raised by the splitting engine."""
    pass


class DecodeError(CashSplitError):
    """The OCR payload is malformed: bad JSON, wrong root, missing required field."""
    pass


class PreconditionViolation(CashSplitError):
    """Allocation was invoked against a ledger that fails ``is_valid()``."""
    pass


class ParticipantNotFound(CashSplitError):
    """No participant with the given id exists in the directory."""

    def __init__(self, participant_id: str):
        super().__init__(f"Participant {participant_id} not found")
        self.participant_id = participant_id


class ItemNotFound(CashSplitError):
    """An item index does not exist in the ledger."""

    def __init__(self, item_index: int):
        super().__init__(f"Item {item_index} not found")
        self.item_index = item_index


class UploadError(CashSplitError):
    """The OCR upload collaborator failed to return a response."""
    pass
