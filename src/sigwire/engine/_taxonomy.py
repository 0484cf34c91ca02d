"""Signal taxonomy: category, canonical direction and display labels.

Every SignalType belongs to exactly one of ten categories. The tables
below are module-level constants checked for totality at import time;
nothing mutates them afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from types import MappingProxyType

from sigwire.model.signals import SignalDirection, SignalPoint, SignalType


class TaxonomyError(KeyError):
    """A signal-type value has no taxonomy entry."""


class SignalCategory(str, Enum):
    DISCRETE_IO = "DISCRETE_IO"
    ANALOG_IO = "ANALOG_IO"
    PROTOCOL_ETHERNET = "PROTOCOL_ETHERNET"
    PROTOCOL_FIELDBUS = "PROTOCOL_FIELDBUS"
    PROTOCOL_SUBSTATION = "PROTOCOL_SUBSTATION"
    PROTOCOL_TELECONTROL = "PROTOCOL_TELECONTROL"
    SAFETY = "SAFETY"
    PHYSICAL_LAYER = "PHYSICAL_LAYER"
    POWER = "POWER"
    MOTION = "MOTION"


PROTOCOL_CATEGORIES: frozenset[SignalCategory] = frozenset({
    SignalCategory.PROTOCOL_ETHERNET,
    SignalCategory.PROTOCOL_FIELDBUS,
    SignalCategory.PROTOCOL_SUBSTATION,
    SignalCategory.PROTOCOL_TELECONTROL,
})


# ---------------------------------------------------------------------------
# Type -> category
# ---------------------------------------------------------------------------

_T = SignalType
_C = SignalCategory

_CATEGORY_MEMBERS: dict[SignalCategory, tuple[SignalType, ...]] = {
    _C.DISCRETE_IO: (_T.DI, _T.DO, _T.PI, _T.PO, _T.RELAY, _T.SOE),
    _C.ANALOG_IO: (_T.AI, _T.AO, _T.RTD, _T.TC),
    _C.PROTOCOL_ETHERNET: (
        _T.COMM, _T.PROFINET, _T.ETHERNET_IP, _T.MODBUS_TCP, _T.OPC_UA,
    ),
    _C.PROTOCOL_FIELDBUS: (
        _T.PROFIBUS_DP, _T.PROFIBUS_PA, _T.DEVICENET, _T.CANOPEN,
        _T.MODBUS_RTU, _T.HART, _T.FOUNDATION_FF, _T.AS_INTERFACE,
    ),
    _C.PROTOCOL_SUBSTATION: (
        _T.IEC61850_GOOSE, _T.IEC61850_MMS, _T.IEC61850_SV,
    ),
    _C.PROTOCOL_TELECONTROL: (
        _T.IEC60870_101, _T.IEC60870_104, _T.DNP3, _T.DNP3_TCP, _T.DNP3_SERIAL,
    ),
    _C.SAFETY: (
        _T.SAFETY_DI, _T.SAFETY_DO, _T.SAFETY_AI, _T.SAFETY_RELAY,
        _T.PROFISAFE, _T.CIP_SAFETY,
    ),
    _C.PHYSICAL_LAYER: (_T.FIBER_SM, _T.FIBER_MM),
    _C.POWER: (_T.POWER_AC, _T.POWER_DC, _T.POWER_3PH),
    _C.MOTION: (_T.ENCODER, _T.RESOLVER, _T.SERVO_CMD, _T.SERVO_FB),
}

SIGNAL_CATEGORY_MAP: MappingProxyType[SignalType, SignalCategory] = MappingProxyType({
    sig_type: category
    for category, members in _CATEGORY_MEMBERS.items()
    for sig_type in members
})


# ---------------------------------------------------------------------------
# Type -> canonical direction
# ---------------------------------------------------------------------------

_INPUT_TYPES = frozenset({
    _T.DI, _T.AI, _T.PI, _T.RTD, _T.TC, _T.SOE,
    _T.IEC61850_SV,
    _T.SAFETY_DI, _T.SAFETY_AI,
    _T.ENCODER, _T.RESOLVER, _T.SERVO_FB,
})

_OUTPUT_TYPES = frozenset({
    _T.DO, _T.AO, _T.PO, _T.RELAY,
    _T.SAFETY_DO, _T.SAFETY_RELAY,
    _T.POWER_AC, _T.POWER_DC, _T.POWER_3PH,
    _T.SERVO_CMD,
})


def _direction_for(sig_type: SignalType) -> SignalDirection:
    if sig_type in _INPUT_TYPES:
        return SignalDirection.INPUT
    if sig_type in _OUTPUT_TYPES:
        return SignalDirection.OUTPUT
    return SignalDirection.BIDIRECTIONAL


SIGNAL_DIRECTION_MAP: MappingProxyType[SignalType, SignalDirection] = MappingProxyType({
    sig_type: _direction_for(sig_type) for sig_type in SignalType
})


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

_CATEGORY_LABELS: dict[SignalCategory, str] = {
    _C.DISCRETE_IO: "Discrete I/O",
    _C.ANALOG_IO: "Analog I/O",
    _C.PROTOCOL_ETHERNET: "Industrial Ethernet",
    _C.PROTOCOL_FIELDBUS: "Fieldbus",
    _C.PROTOCOL_SUBSTATION: "IEC 61850 Substation",
    _C.PROTOCOL_TELECONTROL: "Telecontrol",
    _C.SAFETY: "Functional Safety",
    _C.PHYSICAL_LAYER: "Physical Layer",
    _C.POWER: "Power",
    _C.MOTION: "Motion Control",
}

_TYPE_LABELS: dict[SignalType, str] = {
    _T.DI: "Digital Input",
    _T.DO: "Digital Output",
    _T.AI: "Analog Input",
    _T.AO: "Analog Output",
    _T.PI: "Pulse Input",
    _T.PO: "Pulse Output",
    _T.RTD: "RTD Input",
    _T.TC: "Thermocouple",
    _T.RELAY: "Relay Output",
    _T.SOE: "Sequence of Events",
    _T.COMM: "Communication",
    _T.PROFINET: "PROFINET IO",
    _T.ETHERNET_IP: "EtherNet/IP",
    _T.MODBUS_TCP: "Modbus TCP",
    _T.OPC_UA: "OPC UA",
    _T.PROFIBUS_DP: "PROFIBUS DP",
    _T.PROFIBUS_PA: "PROFIBUS PA",
    _T.DEVICENET: "DeviceNet",
    _T.CANOPEN: "CANopen",
    _T.MODBUS_RTU: "Modbus RTU",
    _T.HART: "HART Protocol",
    _T.FOUNDATION_FF: "Foundation Fieldbus",
    _T.AS_INTERFACE: "AS-Interface",
    _T.IEC61850_GOOSE: "IEC 61850 GOOSE",
    _T.IEC61850_MMS: "IEC 61850 MMS",
    _T.IEC61850_SV: "IEC 61850 Sampled Values",
    _T.IEC60870_101: "IEC 60870-5-101",
    _T.IEC60870_104: "IEC 60870-5-104",
    _T.DNP3: "DNP3",
    _T.DNP3_TCP: "DNP3 over TCP",
    _T.DNP3_SERIAL: "DNP3 Serial",
    _T.SAFETY_DI: "Safety Digital Input",
    _T.SAFETY_DO: "Safety Digital Output",
    _T.SAFETY_AI: "Safety Analog Input",
    _T.SAFETY_RELAY: "Safety Relay",
    _T.PROFISAFE: "PROFIsafe",
    _T.CIP_SAFETY: "CIP Safety",
    _T.FIBER_SM: "Single-Mode Fiber",
    _T.FIBER_MM: "Multi-Mode Fiber",
    _T.POWER_AC: "AC Power",
    _T.POWER_DC: "DC Power",
    _T.POWER_3PH: "3-Phase Power",
    _T.ENCODER: "Encoder Feedback",
    _T.RESOLVER: "Resolver Feedback",
    _T.SERVO_CMD: "Servo Command",
    _T.SERVO_FB: "Servo Feedback",
}


def _check_totality() -> None:
    missing = [t.value for t in SignalType if t not in SIGNAL_CATEGORY_MAP]
    if missing:
        raise TaxonomyError(f"Signal types without a category: {', '.join(missing)}")
    if len(SIGNAL_CATEGORY_MAP) != sum(len(m) for m in _CATEGORY_MEMBERS.values()):
        raise TaxonomyError("A signal type is listed under more than one category")
    unlabelled = [t.value for t in SignalType if t not in _TYPE_LABELS]
    if unlabelled:
        raise TaxonomyError(f"Signal types without a label: {', '.join(unlabelled)}")


_check_totality()


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def category_of(sig_type: SignalType) -> SignalCategory:
    """Return the category of a signal type.

    Raises TaxonomyError for any value outside the SignalType universe.
    """
    try:
        return SIGNAL_CATEGORY_MAP[sig_type]
    except (KeyError, TypeError):
        raise TaxonomyError(f"Unknown signal type: {sig_type!r}") from None


def default_direction(sig_type: SignalType) -> SignalDirection:
    """Canonical direction assigned to new signal points of this type."""
    try:
        return SIGNAL_DIRECTION_MAP[sig_type]
    except (KeyError, TypeError):
        raise TaxonomyError(f"Unknown signal type: {sig_type!r}") from None


def is_in_category(sig_type: SignalType, category: SignalCategory) -> bool:
    return SIGNAL_CATEGORY_MAP.get(sig_type) == category


def types_in_category(category: SignalCategory) -> list[SignalType]:
    """All signal types of ``category``, in declaration order."""
    return list(_CATEGORY_MEMBERS[SignalCategory(category)])


def category_counts() -> dict[SignalCategory, int]:
    counts = {category: 0 for category in SignalCategory}
    for category in SIGNAL_CATEGORY_MAP.values():
        counts[category] += 1
    return counts


def requires_analog_range(sig_type: SignalType) -> bool:
    """Analog I/O types carry engineering unit and range configuration."""
    return category_of(sig_type) == SignalCategory.ANALOG_IO


def requires_protocol_address(sig_type: SignalType) -> bool:
    return category_of(sig_type) in PROTOCOL_CATEGORIES


def is_safety(sig_type: SignalType) -> bool:
    return category_of(sig_type) == SignalCategory.SAFETY


def category_label(category: SignalCategory) -> str:
    return _CATEGORY_LABELS[SignalCategory(category)]


def signal_type_label(sig_type: SignalType) -> str:
    try:
        return _TYPE_LABELS[sig_type]
    except (KeyError, TypeError):
        raise TaxonomyError(f"Unknown signal type: {sig_type!r}") from None


# ---------------------------------------------------------------------------
# Display ordering
# ---------------------------------------------------------------------------

_DIRECTION_ORDER = {
    SignalDirection.INPUT: 0,
    SignalDirection.OUTPUT: 1,
    SignalDirection.BIDIRECTIONAL: 2,
}


def sort_signals_for_display(signals: Iterable[SignalPoint]) -> list[SignalPoint]:
    """Order by direction (inputs first), then category, then tag name."""
    return sorted(
        signals,
        key=lambda s: (
            _DIRECTION_ORDER[s.direction],
            category_of(s.type).value,
            s.tag_name,
        ),
    )


def group_signals_by_direction(
    signals: Iterable[SignalPoint],
) -> dict[SignalDirection, list[SignalPoint]]:
    groups: dict[SignalDirection, list[SignalPoint]] = {d: [] for d in SignalDirection}
    for signal in signals:
        groups[signal.direction].append(signal)
    return groups
