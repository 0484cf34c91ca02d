"""Polarity algebra for (source direction, destination direction) pairs."""

from __future__ import annotations

from typing import NamedTuple

from sigwire.model.signals import SignalDirection

_IN = SignalDirection.INPUT
_OUT = SignalDirection.OUTPUT
_BI = SignalDirection.BIDIRECTIONAL


class PolarityError(ValueError):
    """A direction pair outside the three-valued direction algebra."""


class PolarityResult(NamedTuple):
    is_legal: bool
    error: str | None = None
    warning: str | None = None


_LEGAL = PolarityResult(True)

_TABLE: dict[tuple[SignalDirection, SignalDirection], PolarityResult] = {
    (_OUT, _IN): _LEGAL,
    (_BI, _IN): _LEGAL,
    (_OUT, _BI): _LEGAL,
    (_BI, _BI): PolarityResult(
        True,
        warning="Bidirectional connection - verify protocol compatibility",
    ),
    (_IN, _OUT): PolarityResult(
        False,
        error="Reverse polarity: INPUT cannot connect to OUTPUT. Swap connection direction.",
    ),
    (_IN, _IN): PolarityResult(
        False, error="Cannot connect two ports of the same polarity (INPUT)",
    ),
    (_OUT, _OUT): PolarityResult(
        False, error="Cannot connect two ports of the same polarity (OUTPUT)",
    ),
    # INPUT -> BIDIRECTIONAL and BIDIRECTIONAL -> OUTPUT: the input or output
    # end sits on the wrong side of the edge.
    (_IN, _BI): PolarityResult(
        False,
        error="Reverse polarity: INPUT cannot source a connection. Swap connection direction.",
    ),
    (_BI, _OUT): PolarityResult(
        False,
        error="Reverse polarity: OUTPUT cannot terminate a connection. Swap connection direction.",
    ),
}


def classify_polarity(
    source: SignalDirection, destination: SignalDirection,
) -> PolarityResult:
    """Classify a direction pair as legal (possibly with an advisory) or illegal."""
    try:
        return _TABLE[(SignalDirection(source), SignalDirection(destination))]
    except (KeyError, ValueError):
        raise PolarityError(
            f"Unsupported direction pair: {source!r} -> {destination!r}"
        ) from None
