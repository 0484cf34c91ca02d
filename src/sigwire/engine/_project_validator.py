"""Project-wide re-validation of every stored connection."""

from __future__ import annotations

import logging
from typing import NamedTuple

from sigwire.model.connections import (
    Connection,
    ConnectionStatus,
    ValidationResult,
)
from sigwire.model.project import Project
from sigwire.model.signals import SignalPoint

from ._validator import (
    ERR_DEVICE_REFERENCE,
    ERR_SIGNAL_REFERENCE,
    validate_connection,
)

logger = logging.getLogger(__name__)


class ValidationSummary(NamedTuple):
    total: int
    valid: int
    warnings: int
    invalid: int


def _broken(message: str) -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        status=ConnectionStatus.INVALID,
        errors=(message,),
    )


def _occupancy_snapshot(signal: SignalPoint, others: list[Connection]) -> SignalPoint:
    """Copy of ``signal`` whose connected flag ignores the edge being checked."""
    connected = any(c.touches_signal(signal.id) for c in others)
    if connected == signal.is_connected:
        return signal
    return signal.model_copy(update={"is_connected": connected})


def validate_project(project: Project) -> dict[str, ValidationResult]:
    """Re-validate every stored connection of ``project``.

    Edges whose device or signal ids no longer resolve get a dedicated
    ERR008/ERR009 verdict and skip rule evaluation. Every other edge goes
    through ``validate_connection`` with the remaining edges as context.
    """
    results: dict[str, ValidationResult] = {}
    connections = list(project.connections.values())

    for connection in connections:
        source_device = project.devices.get(connection.source_device_id)
        destination_device = project.devices.get(connection.destination_device_id)
        if source_device is None or destination_device is None:
            logger.warning(
                "Connection %s references a missing device (%s -> %s)",
                connection.id,
                connection.source_device_id,
                connection.destination_device_id,
            )
            results[connection.id] = _broken(
                f"{ERR_DEVICE_REFERENCE}: Device reference broken"
            )
            continue

        source = source_device.get_signal(connection.source_signal_id)
        destination = destination_device.get_signal(connection.destination_signal_id)
        if source is None or destination is None:
            logger.warning(
                "Connection %s references a missing signal (%s -> %s)",
                connection.id,
                connection.source_signal_id,
                connection.destination_signal_id,
            )
            results[connection.id] = _broken(
                f"{ERR_SIGNAL_REFERENCE}: Signal reference broken"
            )
            continue

        others = [c for c in connections if c.id != connection.id]
        results[connection.id] = validate_connection(
            _occupancy_snapshot(source, others),
            _occupancy_snapshot(destination, others),
            source_device,
            destination_device,
            others,
            project.settings,
        )

    logger.debug("Validated project %r: %s", project.name, summarize(results))
    return results


def summarize(results: dict[str, ValidationResult]) -> ValidationSummary:
    """Count verdicts by status. Anything not VALID or WARNING counts as invalid."""
    valid = warnings = invalid = 0
    for result in results.values():
        if result.status == ConnectionStatus.VALID:
            valid += 1
        elif result.status == ConnectionStatus.WARNING:
            warnings += 1
        else:
            invalid += 1
    return ValidationSummary(
        total=len(results), valid=valid, warnings=warnings, invalid=invalid,
    )
