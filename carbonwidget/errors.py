"""Forecast failure taxonomy."""

from enum import StrEnum


class FailureKind(StrEnum):
    TRANSPORT = "transport"
    DECODE = "decode"
    PRECONDITION = "precondition"
    VALIDATION = "validation"
    CANCELLED = "cancelled"


class ForecastError(Exception):
    """Base class for errors raised while producing a forecast."""

    kind: FailureKind = FailureKind.TRANSPORT

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransportFailure(ForecastError):
    """Network, DNS, TLS, HTTP status or empty-body failure."""

    kind = FailureKind.TRANSPORT


class DecodeFailure(ForecastError):
    """Body is not valid JSON or does not match the envelope schema."""

    kind = FailureKind.DECODE


class PreconditionFailure(ForecastError):
    """Response is well-formed but too short to build a forecast window."""

    kind = FailureKind.PRECONDITION


class ValidationFailure(ForecastError):
    """Envelope rejected by a configured validation hook."""

    kind = FailureKind.VALIDATION


class CancelledFailure(ForecastError):
    """The consumer stopped listening before the request completed."""

    kind = FailureKind.CANCELLED
