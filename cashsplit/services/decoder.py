"""Tolerant decoding of the OCR service's receipt payload into a ReceiptLedger."""
import json
import logging
from typing import Union

from pydantic import ValidationError

from cashsplit.core.errors import DecodeError
from cashsplit.models.receipt import LineItem, ReceiptLedger
from cashsplit.schemas.ocr import OcrReceipt

logger = logging.getLogger(__name__)


def decode(raw_text: Union[str, bytes]) -> ReceiptLedger:
    """
    Decode the raw OCR response into an editable ledger.

    Only the first receipt object of the array is used.

    Raises:
        DecodeError: bad JSON, non-array root, empty array, non-object first
        element, or an item without a Name / numeric Total Price.
    """
    if isinstance(raw_text, bytes):
        try:
            raw_text = raw_text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Response is not valid UTF-8: {e}") from e

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as e:
        logger.info("OCR response is not JSON: %s", e)
        raise DecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise DecodeError("Expected a JSON array of receipts")
    if not payload:
        raise DecodeError("Receipt array is empty")
    if len(payload) > 1:
        logger.debug("Ignoring %d extra receipt object(s)", len(payload) - 1)

    first = payload[0]
    if not isinstance(first, dict):
        raise DecodeError("First receipt is not a JSON object")

    try:
        receipt = OcrReceipt.model_validate(first)
    except ValidationError as e:
        logger.info("OCR receipt failed validation: %s", e)
        raise DecodeError(_describe(e)) from e

    return ReceiptLedger(
        items=[
            LineItem(name=item.name, quantity=item.quantity, total_price=item.total_price)
            for item in receipt.items
        ],
        subtotal=receipt.subtotal,
        tax=receipt.tax,
        total=receipt.total,
        tip=receipt.tip,
    )


def encode_payload(ledger: ReceiptLedger) -> str:
    """Render a ledger back into the OCR wire format (a one-element array)."""
    receipt = {
        "Subtotal": ledger.subtotal,
        "Tax": ledger.tax,
        "Total": ledger.total,
        "Tip": ledger.tip,
        "Items": [
            {
                "Name": item.name,
                "Quantity": item.quantity if item.quantity is not None else 0.0,
                "Total Price": item.total_price,
            }
            for item in ledger.items
        ],
    }
    return json.dumps([receipt])


def _describe(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        problems.append(f"{location}: {err['msg']}")
    return "Malformed receipt: " + "; ".join(problems)
