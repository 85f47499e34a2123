"""Payment Gateway: card payment processing with an external acquiring bank."""

__version__ = "0.1.0"
