"""Pydantic models for JSON API requests/responses."""

from pydantic import BaseModel, Field

from payment_gateway.models import PaymentRecord, PaymentRequest, Rejected


class PaymentRequestJSON(BaseModel):
    """
    JSON request model for submitting a card payment.

    Every field is optional here; completeness and format are checked by the
    gateway's validator so that all problems are reported together.
    """

    card_number: str | None = Field(None, description="Card number, 14-19 digits")
    expiry_month: int | None = Field(None, description="Expiry month, 1-12")
    expiry_year: int | None = Field(None, description="Expiry year, e.g. 2026")
    currency: str | None = Field(None, description="Currency code (USD, GBP, EUR)")
    amount: int | None = Field(None, description="Amount in minor units")
    cvv: str | None = Field(None, description="Card security code, 3-4 digits")

    model_config = {
        "json_schema_extra": {
            "example": {
                "card_number": "2222405343248877",
                "expiry_month": 4,
                "expiry_year": 2027,
                "currency": "GBP",
                "amount": 100,
                "cvv": "123",
            }
        }
    }

    def to_payment_request(self) -> PaymentRequest:
        return PaymentRequest(
            card_number=self.card_number,
            expiry_month=self.expiry_month,
            expiry_year=self.expiry_year,
            currency=self.currency,
            amount=self.amount,
            cvv=self.cvv,
        )


class PaymentResponseJSON(BaseModel):
    """JSON response model for a recorded payment."""

    id: str = Field(..., description="Payment identifier")
    status: str = Field(..., description="Payment status (Authorized, Declined)")
    card_number_last_four: int = Field(..., description="Last four digits of the card")
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentResponseJSON":
        return cls(
            id=record.payment_id,
            status=record.status.value,
            card_number_last_four=record.last_four,
            expiry_month=record.expiry_month,
            expiry_year=record.expiry_year,
            currency=record.currency.value,
            amount=record.amount,
        )


class FieldErrorJSON(BaseModel):
    """A single field-level error."""

    field: str
    message: str


class RejectedResponseJSON(BaseModel):
    """JSON response model for a rejected payment."""

    id: str = Field(..., description="Payment identifier the request was processed under")
    status: str = Field(default="Rejected")
    errors: list[FieldErrorJSON] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: Rejected) -> "RejectedResponseJSON":
        return cls(
            id=outcome.payment_id,
            status=outcome.status.value,
            errors=[
                FieldErrorJSON(field=error.field, message=error.message)
                for error in outcome.errors
            ],
        )
