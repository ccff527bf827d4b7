"""Envelope validation hooks.

The API sends ``status`` and ``version`` fields; by default nothing is
checked. Hooks raise ValidationFailure to reject an envelope.
"""

from collections.abc import Callable, Sequence

from carbonwidget.errors import ValidationFailure
from carbonwidget.models.forecast import ForecastEnvelope

EnvelopeValidator = Callable[[ForecastEnvelope], None]


def accept_all(envelope: ForecastEnvelope) -> None:
    return None


def require_status(expected: str) -> EnvelopeValidator:
    def _check(envelope: ForecastEnvelope) -> None:
        if envelope.status != expected:
            raise ValidationFailure(
                f"Unexpected status {envelope.status!r}, wanted {expected!r}"
            )

    return _check


def require_version(expected: str) -> EnvelopeValidator:
    def _check(envelope: ForecastEnvelope) -> None:
        if envelope.version != expected:
            raise ValidationFailure(
                f"Unexpected version {envelope.version!r}, wanted {expected!r}"
            )

    return _check


def chain(validators: Sequence[EnvelopeValidator]) -> EnvelopeValidator:
    def _check(envelope: ForecastEnvelope) -> None:
        for validator in validators:
            validator(envelope)

    return _check
