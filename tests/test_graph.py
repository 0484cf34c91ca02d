"""Tests for templates, device instantiation and project graph helpers."""

import pytest

from sigwire.framework import (
    ProjectGraphError,
    TemplateInfo,
    available_templates,
    connect,
    create_custom_template,
    create_signal,
    create_signal_set,
    create_template,
    disconnect,
    instantiate,
    place_device,
    remove_device,
    revalidate,
    template_info,
)
from sigwire.model.connections import ConnectionStatus, WireType
from sigwire.model.devices import DeviceCategory
from sigwire.model.project import Project, ProjectSettings
from sigwire.model.signals import SignalDirection, SignalType


def by_suffix(device, suffix):
    return next(s for s in device.signals if s.tag_name.endswith(suffix))


@pytest.fixture
def plant():
    """A project with a VFD and a motor placed."""
    project = Project(name="Plant", settings=ProjectSettings(default_cable_type="2x1.5mm2"))
    vfd = place_device(project, create_template("VFD", "Drive 1"), "VFD101")
    motor = place_device(project, create_template("MOTOR", "Pump Motor"), "M101")
    return project, vfd, motor


# ===========================================================================
# Signals and templates
# ===========================================================================


class TestCreateSignal:
    def test_canonical_direction(self):
        assert create_signal("X", SignalType.AI).direction == SignalDirection.INPUT

    def test_direction_override(self):
        signal = create_signal("X", SignalType.COMM, direction=SignalDirection.OUTPUT)
        assert signal.direction == SignalDirection.OUTPUT

    def test_fresh_ids(self):
        assert create_signal("A", SignalType.DI).id != create_signal("A", SignalType.DI).id

    def test_unconnected(self):
        signal = create_signal("A", SignalType.DI)
        assert not signal.is_connected
        assert signal.connected_to_signal_id is None


class TestSignalSets:
    def test_tags_and_suffix(self):
        signals = create_signal_set("meter", "PM1", delimiter="-")
        assert signals[0].tag_name == "PM1-V_L1"
        assert signals[0].engineering_unit == "V"
        assert signals[0].metadata["tag_suffix"] == "V_L1"

    def test_unknown_set(self):
        with pytest.raises(ValueError, match="Unknown signal set: PUMPJACK"):
            create_signal_set("PUMPJACK", "X")


class TestTemplates:
    def test_available(self):
        assert available_templates() == ["TRANSFORMER", "MOTOR", "VFD", "SKID", "BREAKER", "METER"]

    def test_template_info(self):
        info = template_info("vfd")
        assert info == TemplateInfo(DeviceCategory.VFD, "Variable Frequency Drive")
        assert info.category == DeviceCategory.VFD

    def test_template_info_unknown(self):
        assert template_info("PUMPJACK") is None

    def test_template_info_matches_created_template(self):
        template = create_template("BREAKER", "CB")
        info = template_info("BREAKER")
        assert (template.category, template.description) == (info.category, info.description)

    def test_custom_template_with_signals(self):
        signal = create_signal("DI_00", SignalType.DI)
        template = create_custom_template("IO Rack", DeviceCategory.PLC, signals=[signal])
        assert template.signals[0].tag_name == "DI_00"

    def test_create_motor(self):
        template = create_template("motor", "Pump Motor")
        assert template.category == DeviceCategory.MOTOR
        assert template.manufacturer == "Generic"
        assert template.id.startswith("MOTOR_")
        assert [s.tag_name for s in template.signals] == [
            "PUMP_MOTOR_RUN_FB", "PUMP_MOTOR_FLT", "PUMP_MOTOR_I",
            "PUMP_MOTOR_START", "PUMP_MOTOR_STOP",
        ]

    def test_prefix_truncated(self):
        template = create_template("BREAKER", "Main Incomer Breaker")
        assert template.signals[0].tag_name == "MAIN_INCOM_CLS"

    def test_unknown_template(self):
        with pytest.raises(ValueError, match="Unknown template: PUMPJACK. Available: TRANSFORMER"):
            create_template("PUMPJACK", "x")

    def test_template_is_frozen(self):
        template = create_template("METER", "M")
        with pytest.raises(Exception):
            template.name = "other"

    def test_custom_template(self):
        template = create_custom_template("Marshalling", DeviceCategory.GENERIC)
        assert template.signals == []
        assert template.id.startswith("CUSTOM_")
        assert template.tags == ["custom"]


class TestInstantiate:
    def test_clones_with_fresh_ids(self):
        template = create_template("VFD", "Drive")
        device = instantiate(template, "VFD201")
        template_ids = {s.id for s in template.signals}
        assert len(device.signals) == len(template.signals)
        assert not template_ids & {s.id for s in device.signals}

    def test_retags_with_device_tag(self):
        device = instantiate(create_template("VFD", "Drive"), "VFD201", delimiter="-")
        assert device.signals[0].tag_name == "VFD201-RDY"

    def test_custom_signals_keep_tag(self):
        template = create_custom_template(
            "PLC", DeviceCategory.PLC, signals=[create_signal("DI_00", SignalType.DI)],
        )
        device = instantiate(template, "PLC1", position=(10, 20))
        assert device.signals[0].tag_name == "DI_00"
        assert device.position.x == 10
        assert device.position.y == 20

    def test_instances_independent(self):
        template = create_template("MOTOR", "M")
        first, second = instantiate(template, "M1"), instantiate(template, "M2")
        first.signals[0].is_connected = True
        assert not second.signals[0].is_connected
        assert not template.signals[0].is_connected


# ===========================================================================
# Graph helpers
# ===========================================================================


class TestConnect:
    def test_valid_edge_materialized(self, plant):
        project, vfd, motor = plant
        source = by_suffix(vfd, "RUN_CMD")
        dest = by_suffix(motor, "RUN_FB")
        connection, verdict = connect(
            project, vfd.instance_id, source.id, motor.instance_id, dest.id,
        )
        assert verdict.status == ConnectionStatus.VALID
        assert connection is not None
        assert project.connections[connection.id] is connection
        assert connection.wire_type == WireType.HARDWIRED
        assert connection.cable_type == "2x1.5mm2"
        assert connection.status == ConnectionStatus.VALID
        assert source.is_connected and dest.is_connected
        assert dest.connected_to_signal_id == source.id
        assert dest.connected_to_device_id == vfd.instance_id
        assert source.connected_to_signal_id == dest.id
        assert connection.id in vfd.connection_ids
        assert connection.id in motor.connection_ids

    def test_rejected_edge_not_stored(self, plant):
        project, vfd, motor = plant
        source = by_suffix(vfd, "SPD_REF")  # AO
        dest = by_suffix(motor, "RUN_FB")  # DI
        connection, verdict = connect(
            project, vfd.instance_id, source.id, motor.instance_id, dest.id,
        )
        assert connection is None
        assert verdict.has_code("ERR005")
        assert project.connections == {}
        assert not source.is_connected

    def test_second_source_rejected(self, plant):
        project, vfd, motor = plant
        dest = by_suffix(motor, "RUN_FB")
        connect(project, vfd.instance_id, by_suffix(vfd, "RUN_CMD").id, motor.instance_id, dest.id)
        connection, verdict = connect(
            project, vfd.instance_id, by_suffix(vfd, "ENA").id, motor.instance_id, dest.id,
        )
        assert connection is None
        assert verdict.has_code("ERR007")

    def test_second_source_with_parallel_policy(self, plant):
        project, vfd, motor = plant
        project.settings = ProjectSettings(allow_multiple_sources_per_input=True)
        dest = by_suffix(motor, "RUN_FB")
        connect(project, vfd.instance_id, by_suffix(vfd, "RUN_CMD").id, motor.instance_id, dest.id)
        connection, verdict = connect(
            project, vfd.instance_id, by_suffix(vfd, "ENA").id, motor.instance_id, dest.id,
        )
        assert connection is not None
        assert connection.status == ConnectionStatus.WARNING
        assert connection.validation_errors[0].startswith("WARN002")

    def test_explicit_wire_type(self, plant):
        project, vfd, motor = plant
        connection, _ = connect(
            project,
            vfd.instance_id, by_suffix(vfd, "RUN_CMD").id,
            motor.instance_id, by_suffix(motor, "RUN_FB").id,
            wire_type=WireType.FIBER,
        )
        assert connection.wire_type == WireType.FIBER

    def test_comm_edge_is_ethernet(self):
        project = Project(name="Net")
        a = place_device(project, create_template("VFD", "A"), "VFD1")
        b = place_device(project, create_template("METER", "B"), "MTR1")
        connection, verdict = connect(
            project, a.instance_id, by_suffix(a, "COMM").id, b.instance_id, by_suffix(b, "COMM").id,
        )
        assert verdict.is_valid
        assert connection.wire_type == WireType.ETHERNET

    def test_unknown_device(self, plant):
        project, vfd, _ = plant
        with pytest.raises(ProjectGraphError, match="Unknown device"):
            connect(project, vfd.instance_id, vfd.signals[0].id, "nope", "nope")

    def test_unknown_signal(self, plant):
        project, vfd, motor = plant
        with pytest.raises(ProjectGraphError, match="has no signal"):
            connect(project, vfd.instance_id, "nope", motor.instance_id, motor.signals[0].id)


class TestDisconnect:
    def test_releases_endpoints(self, plant):
        project, vfd, motor = plant
        source, dest = by_suffix(vfd, "RUN_CMD"), by_suffix(motor, "RUN_FB")
        connection, _ = connect(project, vfd.instance_id, source.id, motor.instance_id, dest.id)
        disconnect(project, connection.id)
        assert project.connections == {}
        assert not source.is_connected
        assert not dest.is_connected
        assert dest.connected_to_signal_id is None
        assert vfd.connection_ids == []
        assert motor.connection_ids == []

    def test_keeps_flag_while_other_edge_remains(self, plant):
        project, vfd, motor = plant
        source = by_suffix(vfd, "RUN_CMD")
        first, _ = connect(
            project, vfd.instance_id, source.id, motor.instance_id, by_suffix(motor, "RUN_FB").id,
        )
        second, _ = connect(
            project, vfd.instance_id, source.id, motor.instance_id, by_suffix(motor, "FLT").id,
        )
        assert second is not None
        disconnect(project, second.id)
        assert source.is_connected
        assert source.connected_to_signal_id == first.destination_signal_id

    def test_unknown_connection(self):
        with pytest.raises(ProjectGraphError):
            disconnect(Project(name="P"), "missing")


class TestRemoveDevice:
    def test_cascade(self, plant):
        project, vfd, motor = plant
        connect(project, vfd.instance_id, by_suffix(vfd, "RUN_CMD").id,
                motor.instance_id, by_suffix(motor, "RUN_FB").id)
        connect(project, motor.instance_id, by_suffix(motor, "START").id,
                vfd.instance_id, by_suffix(vfd, "RUN").id)
        removed = remove_device(project, motor.instance_id)
        assert len(removed) == 2
        assert project.connections == {}
        assert motor.instance_id not in project.devices
        assert not by_suffix(vfd, "RUN_CMD").is_connected
        assert vfd.connection_ids == []

    def test_unknown_device(self):
        with pytest.raises(ProjectGraphError):
            remove_device(Project(name="P"), "missing")


class TestRevalidate:
    def test_writes_back_status(self, plant):
        project, vfd, motor = plant
        connection, _ = connect(project, vfd.instance_id, by_suffix(vfd, "RUN_CMD").id,
                                motor.instance_id, by_suffix(motor, "RUN_FB").id)
        results = revalidate(project)
        assert results[connection.id].status == ConnectionStatus.VALID
        assert connection.status == ConnectionStatus.VALID

    def test_flags_broken_reference(self, plant):
        project, vfd, motor = plant
        connection, _ = connect(project, vfd.instance_id, by_suffix(vfd, "RUN_CMD").id,
                                motor.instance_id, by_suffix(motor, "RUN_FB").id)
        del project.devices[motor.instance_id]
        revalidate(project)
        assert connection.status == ConnectionStatus.INVALID
        assert connection.validation_errors == ["ERR008: Device reference broken"]
