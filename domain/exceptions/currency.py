from enum import Enum


class CurrencyException(Exception):
    pass


class FetchError(CurrencyException):
    """Upstream could not be reached or answered with an unusable response."""


class ParseError(CurrencyException):
    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


class ConversionErrorReason(str, Enum):
    UNKNOWN_CURRENCY = "unknown_currency"
    INVALID_AMOUNT = "invalid_amount"


class ConversionError(CurrencyException):
    def __init__(self, reason: ConversionErrorReason, message: str):
        self.reason = reason
        super().__init__(message)


class RatesUnavailableError(CurrencyException):
    """No snapshot has ever been obtained, so there is nothing to serve."""
