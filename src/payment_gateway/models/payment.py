"""Payment domain models."""

from dataclasses import dataclass
from enum import Enum

from payment_gateway.models.exceptions import InvalidPaymentRecordError


class Currency(str, Enum):
    """Currencies accepted by the gateway."""

    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"


class PaymentStatus(str, Enum):
    """Payment status as reported to merchants."""

    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class ValidationError:
    """A single field-level rule violation."""

    field: str
    message: str


@dataclass
class PaymentRequest:
    """
    Card payment as submitted by a merchant.

    Fields are optional so that incomplete submissions reach the validator,
    which reports every missing or malformed field in one pass.
    """

    card_number: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    currency: Currency | str | None = None
    amount: int | None = None
    cvv: str | None = None


@dataclass(frozen=True)
class PaymentRecord:
    """
    Finalized payment as kept by the payment store.

    Only AUTHORIZED and DECLINED payments are ever recorded. Instances are
    immutable; build them with create() so last_four is derived once.
    """

    payment_id: str
    status: PaymentStatus
    last_four: int
    expiry_month: int
    expiry_year: int
    currency: Currency
    amount: int

    @classmethod
    def create(
        cls,
        payment_id: str,
        status: PaymentStatus,
        request: PaymentRequest,
    ) -> "PaymentRecord":
        """
        Build a record from a validated request.

        Raises:
            InvalidPaymentRecordError: blank payment_id, or a card number
                shorter than four characters.
        """
        if not payment_id or not payment_id.strip():
            raise InvalidPaymentRecordError("payment_id must not be blank")

        card_number = request.card_number or ""
        if len(card_number) < 4:
            raise InvalidPaymentRecordError(
                "card number must have at least 4 characters to derive last four"
            )

        return cls(
            payment_id=payment_id,
            status=status,
            last_four=int(card_number[-4:]),
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=Currency(request.currency),
            amount=request.amount,
        )
