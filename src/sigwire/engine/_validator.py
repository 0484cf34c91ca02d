"""Single-edge connection validation.

Every rule runs against the candidate edge; diagnostics accumulate in
rule order and the overall status is folded from them at the end. The
validator never mutates its inputs.

Diagnostic codes are stable and keyed on by callers:

    ERR001  self-connection              WARN001  same device
    ERR002  input used as source         WARN002  parallel source created
    ERR003  output used as destination   WARN003  engineering-unit mismatch
    ERR004  same direction on both ends
    ERR005  type mismatch
    ERR006  duplicate connection
    ERR007  destination already connected
    ERR008  device reference broken      (project-wide validation)
    ERR009  signal reference broken      (project-wide validation)
    ERR010  safety isolation             (category isolation policy)
    ERR011  power isolation              (category isolation policy)
    ERR012  protocol family mismatch     (category isolation policy)
"""

from __future__ import annotations

from collections.abc import Iterable

from sigwire.model.connections import Connection, ValidationResult
from sigwire.model.devices import DeviceInstance
from sigwire.model.project import ProjectSettings
from sigwire.model.signals import SignalDirection, SignalPoint

from ._compatibility import compatible_destinations
from ._polarity import classify_polarity
from ._taxonomy import PROTOCOL_CATEGORIES, SignalCategory, category_label, category_of
from ._wiring import infer_wire_type

ERR_SELF_CONNECTION = "ERR001"
ERR_INPUT_AS_SOURCE = "ERR002"
ERR_OUTPUT_AS_DESTINATION = "ERR003"
ERR_SAME_DIRECTION = "ERR004"
ERR_TYPE_MISMATCH = "ERR005"
ERR_DUPLICATE = "ERR006"
ERR_ALREADY_CONNECTED = "ERR007"
ERR_DEVICE_REFERENCE = "ERR008"
ERR_SIGNAL_REFERENCE = "ERR009"
ERR_SAFETY_ISOLATION = "ERR010"
ERR_POWER_ISOLATION = "ERR011"
ERR_PROTOCOL_FAMILY = "ERR012"

WARN_SAME_DEVICE = "WARN001"
WARN_PARALLEL_SOURCE = "WARN002"
WARN_UNIT_MISMATCH = "WARN003"


def can_be_source(signal: SignalPoint) -> bool:
    return signal.direction in (SignalDirection.OUTPUT, SignalDirection.BIDIRECTIONAL)


def can_be_destination(signal: SignalPoint) -> bool:
    return signal.direction in (SignalDirection.INPUT, SignalDirection.BIDIRECTIONAL)


def is_legal_target(
    source: SignalPoint,
    destination: SignalPoint,
    settings: ProjectSettings | None = None,
) -> bool:
    """Quick check for highlighting a drop target while dragging from ``source``.

    Considers polarity, type compatibility and, when ``settings`` enforce
    it, category isolation. Graph state (duplicates, occupied inputs) is
    left to ``validate_connection``.
    """
    if source.id == destination.id:
        return False
    if not classify_polarity(source.direction, destination.direction).is_legal:
        return False
    if destination.type not in compatible_destinations(source.type):
        return False
    if settings is not None and settings.enforce_category_isolation:
        return not _isolation_errors(source, destination)
    return True


def validate_connection(
    source: SignalPoint,
    destination: SignalPoint,
    source_device: DeviceInstance,
    destination_device: DeviceInstance,
    existing_connections: Iterable[Connection],
    settings: ProjectSettings,
) -> ValidationResult:
    """Validate one proposed or stored edge ``source -> destination``.

    Parameters
    ----------
    source, destination
        The two signal points; each must belong to the device passed
        alongside it.
    source_device, destination_device
        Owning devices. Only their ids are compared.
    existing_connections
        Other edges in the graph. When re-validating a stored edge the
        caller must leave that edge out, or it is reported as a duplicate.
    settings
        Project policy.

    Returns
    -------
    ValidationResult
        INVALID if any error fired, else WARNING if any warning fired,
        else VALID. ``suggested_wire_type`` is inferred from the source type.
    """
    errors: list[str] = []
    warnings: list[str] = []

    # 1. Self-connection
    if source.id == destination.id:
        errors.append(f"{ERR_SELF_CONNECTION}: Signal cannot connect to itself")

    # 2. Same device
    if source_device.instance_id == destination_device.instance_id:
        warnings.append(f"{WARN_SAME_DEVICE}: Connecting signals within the same device")

    # 3. Source polarity
    if source.direction == SignalDirection.INPUT:
        errors.append(
            f'{ERR_INPUT_AS_SOURCE}: Source "{source.tag_name}" is an INPUT signal. '
            f"Only OUTPUT or BIDIRECTIONAL signals can be connection sources."
        )

    # 4. Destination polarity
    if destination.direction == SignalDirection.OUTPUT:
        errors.append(
            f'{ERR_OUTPUT_AS_DESTINATION}: Destination "{destination.tag_name}" is an '
            f"OUTPUT signal. Only INPUT or BIDIRECTIONAL signals can be connection "
            f"destinations."
        )

    # 5. Same direction, independent of 3 and 4
    if (
        source.direction == destination.direction
        and source.direction != SignalDirection.BIDIRECTIONAL
    ):
        errors.append(
            f"{ERR_SAME_DIRECTION}: Cannot connect {source.direction.value} to "
            f"{destination.direction.value}. Connections must follow OUTPUT -> INPUT "
            f"polarity."
        )

    # 6. Type compatibility
    compatible = compatible_destinations(source.type)
    if destination.type not in compatible:
        listed = ", ".join(sorted(t.value for t in compatible)) or "None"
        errors.append(
            f"{ERR_TYPE_MISMATCH}: Type mismatch - {source.type.value} cannot connect "
            f"to {destination.type.value}. Compatible types: {listed}"
        )

    # 7. Duplicate edge
    if any(
        c.source_signal_id == source.id and c.destination_signal_id == destination.id
        for c in existing_connections
    ):
        errors.append(f"{ERR_DUPLICATE}: This connection already exists")

    # 8. Destination already connected
    if destination.is_connected:
        if settings.allow_multiple_sources_per_input:
            warnings.append(
                f'{WARN_PARALLEL_SOURCE}: "{destination.tag_name}" already connected - '
                f"creating parallel source"
            )
        else:
            errors.append(
                f'{ERR_ALREADY_CONNECTED}: "{destination.tag_name}" already has an '
                f"incoming connection."
            )

    # 9. Engineering units
    if (
        source.engineering_unit
        and destination.engineering_unit
        and source.engineering_unit != destination.engineering_unit
    ):
        warnings.append(
            f"{WARN_UNIT_MISMATCH}: Unit mismatch "
            f"({source.engineering_unit} -> {destination.engineering_unit})"
        )

    if settings.enforce_category_isolation:
        errors.extend(_isolation_errors(source, destination))

    return ValidationResult.from_diagnostics(
        errors, warnings, suggested_wire_type=infer_wire_type(source.type),
    )


def _isolation_errors(source: SignalPoint, destination: SignalPoint) -> list[str]:
    """Cross-category bans applied when category isolation is enforced."""
    src_cat = category_of(source.type)
    dst_cat = category_of(destination.type)
    if src_cat == dst_cat:
        return []

    errors: list[str] = []
    if SignalCategory.SAFETY in (src_cat, dst_cat):
        if src_cat == SignalCategory.SAFETY:
            detail = "Safety signal cannot connect to non-safety signal"
        else:
            detail = "Non-safety signal cannot connect to safety input"
        errors.append(f"{ERR_SAFETY_ISOLATION}: {detail}. SIL integrity violation.")
    if SignalCategory.POWER in (src_cat, dst_cat):
        errors.append(
            f"{ERR_POWER_ISOLATION}: Power signals can only connect to power terminals"
        )
    if src_cat in PROTOCOL_CATEGORIES and dst_cat in PROTOCOL_CATEGORIES:
        errors.append(
            f"{ERR_PROTOCOL_FAMILY}: Protocol mismatch: {category_label(src_cat)} "
            f"cannot connect to {category_label(dst_cat)}"
        )
    return errors
