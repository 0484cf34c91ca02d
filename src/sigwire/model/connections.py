"""Connections (edges) between signal points and their validation verdicts."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class WireType(str, Enum):
    """Cabling technology of a connection."""

    HARDWIRED = "HARDWIRED"
    FIELDBUS = "FIELDBUS"
    ETHERNET = "ETHERNET"
    SERIAL = "SERIAL"
    FIBER = "FIBER"


class ConnectionStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    WARNING = "WARNING"
    PENDING = "PENDING"


def derive_status(errors: Sequence[str], warnings: Sequence[str]) -> ConnectionStatus:
    """INVALID if any error fired, else WARNING if any warning, else VALID."""
    if errors:
        return ConnectionStatus.INVALID
    if warnings:
        return ConnectionStatus.WARNING
    return ConnectionStatus.VALID


class ValidationResult(BaseModel):
    """Immutable verdict for one connection.

    ``errors`` and ``warnings`` keep rule-evaluation order; each message
    starts with its stable code (``ERR001``, ``WARN002``, ...). ``info``
    is reserved and currently always empty.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    status: ConnectionStatus
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    info: tuple[str, ...] = ()
    suggested_wire_type: WireType | None = None

    @model_validator(mode="after")
    def _check_consistency(self):
        if self.is_valid != (not self.errors):
            raise ValueError("is_valid must be True exactly when there are no errors")
        if self.status != ConnectionStatus.PENDING:
            expected = derive_status(self.errors, self.warnings)
            if self.status != expected:
                raise ValueError(
                    f"status {self.status.value} does not match diagnostics "
                    f"(expected {expected.value})"
                )
        return self

    @classmethod
    def from_diagnostics(
        cls,
        errors: Sequence[str],
        warnings: Sequence[str],
        suggested_wire_type: WireType | None = None,
    ) -> ValidationResult:
        return cls(
            is_valid=not errors,
            status=derive_status(errors, warnings),
            errors=tuple(errors),
            warnings=tuple(warnings),
            suggested_wire_type=suggested_wire_type,
        )

    def has_code(self, code: str) -> bool:
        """True if any error or warning message starts with ``code``."""
        return any(msg.startswith(code) for msg in self.errors + self.warnings)


class Connection(BaseModel):
    """A directed edge from a source signal point to a destination one."""

    id: str
    source_device_id: str
    source_signal_id: str
    destination_device_id: str
    destination_signal_id: str
    wire_type: WireType = WireType.HARDWIRED
    cable_tag: str | None = None
    cable_type: str = ""
    wire_number: str | None = None
    status: ConnectionStatus = ConnectionStatus.PENDING
    validation_errors: list[str] = []

    @model_validator(mode="after")
    def _check_endpoints(self):
        if not self.source_signal_id:
            raise ValueError("source_signal_id must not be empty")
        if not self.destination_signal_id:
            raise ValueError("destination_signal_id must not be empty")
        return self

    def touches_signal(self, signal_id: str) -> bool:
        return signal_id in (self.source_signal_id, self.destination_signal_id)

    def touches_device(self, instance_id: str) -> bool:
        return instance_id in (self.source_device_id, self.destination_device_id)
