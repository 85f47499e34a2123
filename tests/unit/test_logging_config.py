"""Unit tests for logging configuration."""

from payment_gateway.logging_config import configure_logging, get_logger, redact_card_data


def test_card_number_is_masked_to_last_four():
    event = redact_card_data(None, "info", {"event": "x", "card_number": "2222405343248877"})

    assert event["card_number"] == "************8877"


def test_cvv_is_dropped():
    event = redact_card_data(None, "info", {"event": "x", "cvv": "123"})

    assert event["cvv"] == "***"


def test_other_fields_are_untouched():
    event = redact_card_data(None, "info", {"event": "x", "card_last_four": "8877", "amount": 100})

    assert event == {"event": "x", "card_last_four": "8877", "amount": 100}


def test_configure_logging_console_and_json():
    configure_logging(log_level="DEBUG", format_as_json=False)
    get_logger(__name__).info("console_configured", card_number="2222405343248877")

    configure_logging(log_level="INFO", format_as_json=True)
    get_logger(__name__).info("json_configured")
