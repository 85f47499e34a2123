"""
Payment request validation.

Every rule is evaluated for every field, so a single pass reports all
problems with a request (several messages may target the same field).
Validation has no side effects; the current time comes from an injected
clock so that expiry checks are deterministic under test.
"""

import calendar
import re
from collections.abc import Callable
from datetime import datetime, timezone

from payment_gateway.models import Currency, PaymentRequest, ValidationError

DEFAULT_MIN_EXPIRY_YEAR = 2024

_DIGITS = re.compile(r"[0-9]*")


def utc_now() -> datetime:
    """Default clock: current UTC time."""
    return datetime.now(timezone.utc)


class PaymentRequestValidator:
    """Field-level and cross-field rules for a PaymentRequest."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        min_expiry_year: int = DEFAULT_MIN_EXPIRY_YEAR,
    ) -> None:
        self.clock = clock
        self.min_expiry_year = min_expiry_year

    def validate(self, request: PaymentRequest) -> list[ValidationError]:
        """
        Check a request against all rules.

        Args:
            request: The submitted payment

        Returns:
            List of ValidationError; empty when the request is valid.
        """
        errors: list[ValidationError] = []
        errors.extend(self._check_card_number(request.card_number))
        errors.extend(self._check_expiry_month(request.expiry_month))
        errors.extend(self._check_expiry_year(request.expiry_month, request.expiry_year))
        errors.extend(self._check_currency(request.currency))
        errors.extend(self._check_amount(request.amount))
        errors.extend(self._check_cvv(request.cvv))
        return errors

    def _check_card_number(self, card_number: str | None) -> list[ValidationError]:
        return _check_digit_string(
            "card_number",
            card_number,
            min_length=14,
            max_length=19,
            required_message="Card number is required.",
            length_message="Card number must be between 14 and 19 characters long.",
            digits_message="Card number must contain only numeric characters.",
        )

    def _check_expiry_month(self, month: int | None) -> list[ValidationError]:
        errors = []
        month = month or 0
        if month == 0:
            errors.append(ValidationError("expiry_month", "Expiry month is required."))
        if not 1 <= month <= 12:
            errors.append(
                ValidationError("expiry_month", "Expiry month must be between 1 and 12.")
            )
        return errors

    def _check_expiry_year(
        self, month: int | None, year: int | None
    ) -> list[ValidationError]:
        errors = []
        year = year or 0
        if year == 0:
            errors.append(ValidationError("expiry_year", "Expiry year is required."))
        if year < self.min_expiry_year:
            errors.append(
                ValidationError(
                    "expiry_year",
                    f"Expiry year must be greater than or equal {self.min_expiry_year}.",
                )
            )
        if not self._expires_in_future(month or 0, year):
            errors.append(
                ValidationError("expiry_year", "Expiry date must be in the future.")
            )
        return errors

    def _expires_in_future(self, month: int, year: int) -> bool:
        # A card is usable through the last day of its expiry month. Years past
        # datetime.MAXYEAR raise OverflowError or ValueError and never pass.
        try:
            last_day = calendar.monthrange(year, month)[1]
            expires_on = datetime(year, month, last_day, tzinfo=timezone.utc)
        except (ValueError, OverflowError):
            return False
        return expires_on > self.clock()

    def _check_currency(self, currency: Currency | str | None) -> list[ValidationError]:
        try:
            Currency(currency)
        except ValueError:
            return [
                ValidationError("currency", "Currency must be a valid ISO currency code.")
            ]
        return []

    def _check_amount(self, amount: int | None) -> list[ValidationError]:
        errors = []
        if not amount:
            errors.append(ValidationError("amount", "Amount is required."))
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            errors.append(
                ValidationError(
                    "amount", "Amount must be an integer and greater than zero."
                )
            )
        return errors

    def _check_cvv(self, cvv: str | None) -> list[ValidationError]:
        return _check_digit_string(
            "cvv",
            cvv,
            min_length=3,
            max_length=4,
            required_message="CVV is required.",
            length_message="CVV must be 3 or 4 characters long.",
            digits_message="CVV must contain only numeric characters.",
        )


def _check_digit_string(
    field: str,
    value: str | None,
    *,
    min_length: int,
    max_length: int,
    required_message: str,
    length_message: str,
    digits_message: str,
) -> list[ValidationError]:
    errors = []
    if value is None or not value.strip():
        errors.append(ValidationError(field, required_message))
    # Length and charset rules only apply to a value that was supplied.
    if value is not None:
        if not min_length <= len(value) <= max_length:
            errors.append(ValidationError(field, length_message))
        if not _DIGITS.fullmatch(value):
            errors.append(ValidationError(field, digits_message))
    return errors
