"""Signal point construction and standard signal sets for generic devices."""

from __future__ import annotations

import uuid

from sigwire.engine import default_direction
from sigwire.model.signals import SignalDirection, SignalPoint, SignalType

# Metadata key holding the tag suffix of a template signal, used to retag
# the clone when a device is instantiated.
TAG_SUFFIX_KEY = "tag_suffix"


def new_id() -> str:
    return str(uuid.uuid4())


def create_signal(
    tag_name: str,
    signal_type: SignalType,
    *,
    description: str = "",
    direction: SignalDirection | None = None,
    engineering_unit: str | None = None,
    range_min: float | None = None,
    range_max: float | None = None,
    iec_address: str | None = None,
    modbus_address: int | None = None,
    plc_address: str | None = None,
) -> SignalPoint:
    """Create an unconnected signal point with a fresh id.

    ``direction`` defaults to the canonical direction of ``signal_type``.
    """
    signal_type = SignalType(signal_type)
    return SignalPoint(
        id=new_id(),
        tag_name=tag_name,
        description=description,
        type=signal_type,
        direction=direction if direction is not None else default_direction(signal_type),
        engineering_unit=engineering_unit,
        range_min=range_min,
        range_max=range_max,
        iec_address=iec_address,
        modbus_address=modbus_address,
        plc_address=plc_address,
    )


# ---------------------------------------------------------------------------
# Standard signal sets
#
# Each entry is (suffix, type, description, engineering unit).
# ---------------------------------------------------------------------------

_SignalSpec = tuple[str, SignalType, str, str | None]

_T = SignalType

SIGNAL_SETS: dict[str, list[_SignalSpec]] = {
    "TRANSFORMER": [
        ("HV_V", _T.AI, "HV Voltage", "kV"),
        ("LV_V", _T.AI, "LV Voltage", "kV"),
        ("OIL_TEMP", _T.AI, "Oil Temperature", "°C"),
        ("TAP_POS", _T.AI, "Tap Position", None),
        ("BUCHHOLZ_ALM", _T.DI, "Buchholz Alarm", None),
        ("BUCHHOLZ_TRP", _T.DI, "Buchholz Trip", None),
        ("OIL_LVL_LO", _T.DI, "Oil Level Low", None),
        ("COOL_RUN", _T.DI, "Cooling Running", None),
        ("COOL_START", _T.DO, "Start Cooling", None),
        ("TAP_RAISE", _T.DO, "Tap Raise", None),
        ("TAP_LOWER", _T.DO, "Tap Lower", None),
    ],
    "MOTOR": [
        ("RUN_FB", _T.DI, "Running Feedback", None),
        ("FLT", _T.DI, "Fault", None),
        ("I", _T.AI, "Current", "A"),
        ("START", _T.DO, "Start Command", None),
        ("STOP", _T.DO, "Stop Command", None),
    ],
    "VFD": [
        ("RDY", _T.DI, "Ready", None),
        ("RUN", _T.DI, "Running", None),
        ("FLT", _T.DI, "Fault", None),
        ("SPD_FB", _T.AI, "Speed Feedback", "Hz"),
        ("I", _T.AI, "Current", "A"),
        ("ENA", _T.DO, "Enable", None),
        ("RUN_CMD", _T.DO, "Run Command", None),
        ("SPD_REF", _T.AO, "Speed Reference", "Hz"),
        ("COMM", _T.COMM, "Communication", None),
    ],
    "SKID": [
        ("RUN", _T.DI, "Running", None),
        ("FLT", _T.DI, "Fault", None),
        ("RDY", _T.DI, "Ready", None),
        ("FLOW", _T.AI, "Flow Rate", "m³/h"),
        ("PRESS", _T.AI, "Pressure", "bar"),
        ("TEMP", _T.AI, "Temperature", "°C"),
        ("START_CMD", _T.DO, "Start Command", None),
        ("STOP_CMD", _T.DO, "Stop Command", None),
        ("SPD_SP", _T.AO, "Speed Setpoint", "%"),
    ],
    "BREAKER": [
        ("CLS", _T.DI, "Closed", None),
        ("OPN", _T.DI, "Open", None),
        ("RDY", _T.DI, "Ready", None),
        ("TRIP", _T.DI, "Tripped", None),
        ("CLOSE_CMD", _T.DO, "Close Command", None),
        ("OPEN_CMD", _T.DO, "Open Command", None),
    ],
    "METER": [
        ("V_L1", _T.AI, "Voltage L1", "V"),
        ("V_L2", _T.AI, "Voltage L2", "V"),
        ("V_L3", _T.AI, "Voltage L3", "V"),
        ("I_L1", _T.AI, "Current L1", "A"),
        ("P", _T.AI, "Active Power", "kW"),
        ("PF", _T.AI, "Power Factor", None),
        ("COMM", _T.COMM, "Communication", None),
    ],
}


def create_signal_set(kind: str, prefix: str, delimiter: str = "_") -> list[SignalPoint]:
    """Build the standard signal set for ``kind``, tagged ``<prefix><delimiter><suffix>``."""
    try:
        specs = SIGNAL_SETS[kind.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown signal set: {kind}. Available: {', '.join(SIGNAL_SETS)}"
        ) from None
    signals = []
    for suffix, sig_type, description, unit in specs:
        signal = create_signal(
            f"{prefix}{delimiter}{suffix}",
            sig_type,
            description=description,
            engineering_unit=unit,
        )
        signal.metadata[TAG_SUFFIX_KEY] = suffix
        signals.append(signal)
    return signals
