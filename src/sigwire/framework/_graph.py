"""Graph mutation helpers on a Project.

The engine only judges edges; these helpers own the mutations that
follow an accepted verdict: materializing the edge, flipping the
endpoints' connected flags and back-references, and cascading device
deletion.
"""

from __future__ import annotations

import logging

from sigwire.engine import infer_wire_type, validate_connection, validate_project
from sigwire.model.connections import Connection, ValidationResult, WireType
from sigwire.model.devices import DeviceInstance, DeviceTemplate, Position
from sigwire.model.project import Project
from sigwire.model.signals import SignalPoint

from ._signals import new_id
from ._templates import instantiate

logger = logging.getLogger(__name__)


class ProjectGraphError(KeyError):
    """An id passed to a graph helper does not resolve in the project."""


def _device(project: Project, instance_id: str) -> DeviceInstance:
    device = project.devices.get(instance_id)
    if device is None:
        raise ProjectGraphError(f"Unknown device: {instance_id}")
    return device


def _signal(device: DeviceInstance, signal_id: str) -> SignalPoint:
    signal = device.get_signal(signal_id)
    if signal is None:
        raise ProjectGraphError(
            f"Device {device.tag_name!r} has no signal {signal_id}"
        )
    return signal


def add_device(project: Project, device: DeviceInstance) -> DeviceInstance:
    if device.instance_id in project.devices:
        raise ValueError(f"Device {device.instance_id} is already in the project")
    project.devices[device.instance_id] = device
    project.templates.setdefault(device.template_id, device.template)
    return device


def place_device(
    project: Project,
    template: DeviceTemplate,
    tag_name: str,
    *,
    position: Position | tuple[float, float] | None = None,
) -> DeviceInstance:
    """Instantiate ``template`` using the project's tag delimiter and add it."""
    device = instantiate(
        template,
        tag_name,
        position=position,
        delimiter=project.settings.tag_delimiter,
    )
    return add_device(project, device)


def connect(
    project: Project,
    source_device_id: str,
    source_signal_id: str,
    destination_device_id: str,
    destination_signal_id: str,
    *,
    wire_type: WireType | None = None,
    cable_tag: str | None = None,
) -> tuple[Connection | None, ValidationResult]:
    """Validate and, if the verdict is VALID or WARNING, materialize an edge.

    Returns the new connection (None when rejected) and the verdict.
    """
    source_device = _device(project, source_device_id)
    destination_device = _device(project, destination_device_id)
    source = _signal(source_device, source_signal_id)
    destination = _signal(destination_device, destination_signal_id)

    verdict = validate_connection(
        source,
        destination,
        source_device,
        destination_device,
        project.connections.values(),
        project.settings,
    )
    if not verdict.is_valid:
        logger.debug(
            "Rejected %s -> %s: %s",
            source.tag_name, destination.tag_name, "; ".join(verdict.errors),
        )
        return None, verdict

    connection = Connection(
        id=new_id(),
        source_device_id=source_device.instance_id,
        source_signal_id=source.id,
        destination_device_id=destination_device.instance_id,
        destination_signal_id=destination.id,
        wire_type=wire_type or verdict.suggested_wire_type or infer_wire_type(source.type),
        cable_tag=cable_tag,
        cable_type=project.settings.default_cable_type,
        status=verdict.status,
        validation_errors=list(verdict.errors) + list(verdict.warnings),
    )
    project.connections[connection.id] = connection

    source.is_connected = True
    source.connected_to_signal_id = destination.id
    source.connected_to_device_id = destination_device.instance_id
    destination.is_connected = True
    destination.connected_to_signal_id = source.id
    destination.connected_to_device_id = source_device.instance_id

    source_device.connection_ids.append(connection.id)
    if destination_device is not source_device:
        destination_device.connection_ids.append(connection.id)

    logger.debug(
        "Connected %s -> %s (%s, %s)",
        source.tag_name, destination.tag_name,
        connection.wire_type.value, connection.status.value,
    )
    return connection, verdict


def _release(project: Project, device_id: str, signal_id: str) -> None:
    """Clear a signal's connected state if no remaining edge touches it."""
    device = project.devices.get(device_id)
    if device is None:
        return
    signal = device.get_signal(signal_id)
    if signal is None:
        return
    remaining = [c for c in project.connections.values() if c.touches_signal(signal_id)]
    if remaining:
        # Point the back-reference at a surviving edge.
        other = remaining[0]
        if other.source_signal_id == signal_id:
            signal.connected_to_signal_id = other.destination_signal_id
            signal.connected_to_device_id = other.destination_device_id
        else:
            signal.connected_to_signal_id = other.source_signal_id
            signal.connected_to_device_id = other.source_device_id
        return
    signal.is_connected = False
    signal.connected_to_signal_id = None
    signal.connected_to_device_id = None


def disconnect(project: Project, connection_id: str) -> Connection:
    """Remove a stored connection and release its endpoints."""
    connection = project.connections.pop(connection_id, None)
    if connection is None:
        raise ProjectGraphError(f"Unknown connection: {connection_id}")

    for device_id in (connection.source_device_id, connection.destination_device_id):
        device = project.devices.get(device_id)
        if device is not None and connection_id in device.connection_ids:
            device.connection_ids.remove(connection_id)

    _release(project, connection.source_device_id, connection.source_signal_id)
    _release(project, connection.destination_device_id, connection.destination_signal_id)
    return connection


def remove_device(project: Project, instance_id: str) -> list[str]:
    """Delete a device and every connection touching it.

    Returns the ids of the removed connections.
    """
    _device(project, instance_id)
    removed = [
        c.id for c in list(project.connections.values()) if c.touches_device(instance_id)
    ]
    for connection_id in removed:
        disconnect(project, connection_id)
    del project.devices[instance_id]
    logger.info(
        "Removed device %s with %d connection(s)", instance_id, len(removed),
    )
    return removed


def revalidate(project: Project) -> dict[str, ValidationResult]:
    """Run project-wide validation and store each verdict on its connection."""
    results = validate_project(project)
    for connection_id, verdict in results.items():
        connection = project.connections[connection_id]
        connection.status = verdict.status
        connection.validation_errors = list(verdict.errors) + list(verdict.warnings)
    return results
