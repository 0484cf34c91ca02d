"""Type compatibility matrix: which destination types a source may drive.

Rows are keyed by the *source* type only; the relation is not symmetric.
Types whose canonical direction is INPUT have an empty row.
"""

from __future__ import annotations

from types import MappingProxyType

from sigwire.model.signals import SignalDirection, SignalType

from ._taxonomy import SIGNAL_DIRECTION_MAP, TaxonomyError

_T = SignalType


def _self_only(*types: SignalType) -> dict[SignalType, frozenset[SignalType]]:
    return {t: frozenset({t}) for t in types}


_ROWS: dict[SignalType, frozenset[SignalType]] = {
    # Discrete
    _T.DO: frozenset({_T.DI, _T.SOE, _T.SAFETY_DI}),
    _T.RELAY: frozenset({_T.DI, _T.SOE, _T.SAFETY_DI}),
    _T.PO: frozenset({_T.PI}),

    # Analog
    _T.AO: frozenset({_T.AI, _T.SAFETY_AI}),

    # Ethernet and fieldbus protocols talk only to themselves, except HART
    # which rides on a 4-20 mA loop.
    **_self_only(
        _T.COMM, _T.PROFINET, _T.ETHERNET_IP, _T.MODBUS_TCP, _T.OPC_UA,
        _T.PROFIBUS_DP, _T.PROFIBUS_PA, _T.DEVICENET, _T.CANOPEN,
        _T.MODBUS_RTU, _T.FOUNDATION_FF, _T.AS_INTERFACE,
    ),
    _T.HART: frozenset({_T.HART, _T.AI}),

    # IEC 61850
    **_self_only(_T.IEC61850_GOOSE, _T.IEC61850_MMS),

    # Telecontrol
    **_self_only(_T.IEC60870_101, _T.IEC60870_104),
    _T.DNP3: frozenset({_T.DNP3, _T.DNP3_TCP, _T.DNP3_SERIAL}),
    _T.DNP3_TCP: frozenset({_T.DNP3_TCP, _T.DNP3}),
    _T.DNP3_SERIAL: frozenset({_T.DNP3_SERIAL, _T.DNP3}),

    # Safety may drive safety or the plain equivalent
    _T.SAFETY_DO: frozenset({_T.SAFETY_DI, _T.DI}),
    _T.SAFETY_RELAY: frozenset({_T.SAFETY_DI, _T.DI}),
    **_self_only(_T.PROFISAFE, _T.CIP_SAFETY),

    # Fiber, power
    **_self_only(_T.FIBER_SM, _T.FIBER_MM),
    **_self_only(_T.POWER_AC, _T.POWER_DC, _T.POWER_3PH),

    # Motion
    _T.SERVO_CMD: frozenset({_T.SERVO_FB}),
}


def _build_matrix() -> MappingProxyType[SignalType, frozenset[SignalType]]:
    matrix: dict[SignalType, frozenset[SignalType]] = {}
    for sig_type in SignalType:
        row = _ROWS.get(sig_type, frozenset())
        if row and SIGNAL_DIRECTION_MAP[sig_type] == SignalDirection.INPUT:
            raise TaxonomyError(
                f"{sig_type.value} is an input type and cannot have a compatibility row"
            )
        matrix[sig_type] = row
    return MappingProxyType(matrix)


TYPE_COMPATIBILITY = _build_matrix()


def compatible_destinations(source_type: SignalType) -> frozenset[SignalType]:
    """Destination types that ``source_type`` may legally drive."""
    try:
        return TYPE_COMPATIBILITY[source_type]
    except (KeyError, TypeError):
        raise TaxonomyError(f"Unknown signal type: {source_type!r}") from None


get_compatible_types = compatible_destinations


def is_compatible(source_type: SignalType, destination_type: SignalType) -> bool:
    return destination_type in compatible_destinations(source_type)
