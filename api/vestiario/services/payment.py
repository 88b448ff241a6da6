"""Mock card payment processor.

Stands in for a real gateway: validates the card fields the way a checkout
form would and approves anything well-formed. Only the boolean outcome and
the receipt id matter to the booking flow.
"""

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

logger = logging.getLogger(__name__)

_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/(\d{2})$")


@dataclass(frozen=True)
class CardDetails:
    number: str
    holder_name: str
    expiry: str  # MM/YY
    cvv: str


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    receipt_id: str | None = None
    message: str = ""


def _card_expired(expiry: str, today: date) -> bool:
    match = _EXPIRY_RE.match(expiry)
    month, year = int(match.group(1)), 2000 + int(match.group(2))
    # Cards are valid through the last day of the expiry month
    return (year, month) < (today.year, today.month)


def validate_card(card: CardDetails, today: date | None = None) -> str | None:
    """Return an error message for a malformed card, or None."""
    today = today or date.today()
    number = card.number.replace(" ", "")

    if len(number) != 16 or not number.isdigit():
        return "Invalid card number."
    if not card.holder_name.strip():
        return "Card holder name is required."
    if not _EXPIRY_RE.match(card.expiry):
        return "Expiry must be in MM/YY format."
    if _card_expired(card.expiry, today):
        return "Card has expired."
    if not (card.cvv.isdigit() and len(card.cvv) in (3, 4)):
        return "Invalid CVV."
    return None


def process_payment(amount: Decimal, card: CardDetails, today: date | None = None) -> PaymentResult:
    """Charge `amount` to the card. Never raises; failures come back as success=False."""
    if amount <= 0:
        return PaymentResult(success=False, message="Amount must be positive.")

    error = validate_card(card, today)
    if error:
        logger.info("Payment declined: %s", error)
        return PaymentResult(success=False, message=error)

    receipt_id = f"pi_{uuid.uuid4().hex[:24]}"
    logger.info("Payment of %s approved, receipt %s (card ending %s)", amount, receipt_id, card.number[-4:])
    return PaymentResult(success=True, receipt_id=receipt_id, message="Payment approved.")
