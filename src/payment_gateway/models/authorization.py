"""Authorization models exchanged with the acquiring bank."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from payment_gateway.models.payment import Currency, PaymentRequest


@dataclass(frozen=True)
class AuthorizationVerdict:
    """The bank's approve/decline decision for one authorization attempt."""

    authorized: bool
    authorization_code: str | None = None


@dataclass(frozen=True)
class AuthorizerUnavailable:
    """
    Returned instead of a verdict when the bank could not be asked.

    Covers every transport problem (non-2xx status, malformed body, timeout,
    connection error) without distinguishing between them.
    """

    reason: str


AuthorizationResult = AuthorizationVerdict | AuthorizerUnavailable | None


class BankPaymentRequest(BaseModel):
    """Normalized payload POSTed to the bank's /payments endpoint."""

    card_number: str
    expiry_date: str = Field(..., description="Zero-padded MM/YYYY")
    currency: str = Field(..., description="Three-letter currency code")
    amount: int
    cvv: str

    @classmethod
    def from_payment_request(cls, request: PaymentRequest) -> "BankPaymentRequest":
        return cls(
            card_number=request.card_number,
            expiry_date=f"{request.expiry_month:02d}/{request.expiry_year}",
            currency=Currency(request.currency).value,
            amount=request.amount,
            cvv=request.cvv,
        )


class BankPaymentResponse(BaseModel):
    """Reply body returned by the bank."""

    # Only a JSON true counts as authorized; "yes" or 1 is a malformed reply.
    authorized: bool = Field(default=False, strict=True)
    authorization_code: str | None = None

    def to_verdict(self) -> AuthorizationVerdict:
        return AuthorizationVerdict(
            authorized=self.authorized,
            authorization_code=self.authorization_code,
        )
