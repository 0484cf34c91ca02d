"""Pump station: drive, motor, breaker and meter wired to each other.

Places four generic devices, wires the obvious hardwired and network
signals, tries a few illegal connections, then re-validates the whole
project and prints the summary.
"""

from sigwire.engine import summarize
from sigwire.framework import connect, create_template, place_device, revalidate
from sigwire.model.project import Project, ProjectSettings


def signal(device, suffix):
    return next(s for s in device.signals if s.tag_name.endswith(suffix))


proj = Project(
    name="PumpStation",
    settings=ProjectSettings(default_cable_type="CY 4x1.5mm2"),
)

vfd = place_device(proj, create_template("VFD", "Pump Drive"), "VFD101", position=(100, 100))
motor = place_device(proj, create_template("MOTOR", "Pump Motor"), "M101", position=(400, 100))
breaker = place_device(proj, create_template("BREAKER", "Feeder"), "CB101", position=(100, 400))
meter = place_device(proj, create_template("METER", "Feeder Meter"), "PM101", position=(400, 400))

# (source device, source suffix, destination device, destination suffix)
WIRING = [
    (vfd, "RUN_CMD", motor, "RUN_FB"),
    (motor, "START", vfd, "RUN"),
    (breaker, "CLOSE_CMD", vfd, "RDY"),
    (vfd, "COMM", meter, "COMM"),
    # Illegal: analog output into a digital input
    (vfd, "SPD_REF", motor, "FLT"),
    # Illegal: input used as a source
    (motor, "FLT", breaker, "TRIP"),
    # Illegal: second source into an occupied input
    (vfd, "ENA", motor, "RUN_FB"),
]


if __name__ == "__main__":
    for src_dev, src_suffix, dst_dev, dst_suffix in WIRING:
        src, dst = signal(src_dev, src_suffix), signal(dst_dev, dst_suffix)
        connection, verdict = connect(
            proj, src_dev.instance_id, src.id, dst_dev.instance_id, dst.id,
        )
        print(f"{src.tag_name:>16s} -> {dst.tag_name:<16s} {verdict.status.value}")
        for message in verdict.errors + verdict.warnings:
            print(f"{'':>20s}{message}")
        if connection is not None:
            print(f"{'':>20s}wire: {connection.wire_type.value}")

    print()
    print(summarize(revalidate(proj)))
