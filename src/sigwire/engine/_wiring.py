"""Default cabling technology for a signal type."""

from __future__ import annotations

from sigwire.model.connections import WireType
from sigwire.model.signals import SignalType

from ._taxonomy import SignalCategory, category_of

_SERIAL_FIELDBUS = frozenset({
    SignalType.MODBUS_RTU,
    SignalType.PROFIBUS_DP,
    SignalType.PROFIBUS_PA,
})

_SERIAL_TELECONTROL = frozenset({
    SignalType.IEC60870_101,
    SignalType.DNP3_SERIAL,
})

_CATEGORY_WIRE: dict[SignalCategory, WireType] = {
    SignalCategory.PROTOCOL_ETHERNET: WireType.ETHERNET,
    SignalCategory.PROTOCOL_SUBSTATION: WireType.ETHERNET,
    SignalCategory.PROTOCOL_FIELDBUS: WireType.FIELDBUS,
    SignalCategory.PROTOCOL_TELECONTROL: WireType.ETHERNET,
    SignalCategory.PHYSICAL_LAYER: WireType.FIBER,
}


def infer_wire_type(sig_type: SignalType) -> WireType:
    """Cabling technology implied by ``sig_type``.

    HART is superimposed on a 4-20 mA loop and stays hardwired. Discrete,
    analog, safety, power and motion signals default to hardwired.
    """
    category = category_of(sig_type)
    if sig_type == SignalType.HART:
        return WireType.HARDWIRED
    if sig_type in _SERIAL_FIELDBUS or sig_type in _SERIAL_TELECONTROL:
        return WireType.SERIAL
    return _CATEGORY_WIRE.get(category, WireType.HARDWIRED)
