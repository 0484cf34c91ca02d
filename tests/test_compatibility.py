"""Tests for the type compatibility matrix, polarity algebra and wire inference."""

import pytest

from sigwire.engine import (
    SIGNAL_DIRECTION_MAP,
    TYPE_COMPATIBILITY,
    PolarityError,
    TaxonomyError,
    classify_polarity,
    compatible_destinations,
    get_compatible_types,
    infer_wire_type,
    is_compatible,
)
from sigwire.model.connections import WireType
from sigwire.model.signals import SignalDirection, SignalType

IN = SignalDirection.INPUT
OUT = SignalDirection.OUTPUT
BI = SignalDirection.BIDIRECTIONAL


# ===========================================================================
# Compatibility matrix
# ===========================================================================


class TestCompatibility:
    def test_row_for_every_type(self):
        assert set(TYPE_COMPATIBILITY) == set(SignalType)

    def test_input_types_have_empty_rows(self):
        """Inputs cannot originate a connection."""
        for sig_type, direction in SIGNAL_DIRECTION_MAP.items():
            if direction == IN:
                assert compatible_destinations(sig_type) == frozenset()

    def test_do_row(self):
        compatible = get_compatible_types(SignalType.DO)
        assert SignalType.DI in compatible
        assert SignalType.SOE in compatible
        assert SignalType.SAFETY_DI in compatible
        assert SignalType.AI not in compatible

    def test_di_row_empty(self):
        assert len(get_compatible_types(SignalType.DI)) == 0

    def test_relay_drives_di(self):
        assert is_compatible(SignalType.RELAY, SignalType.DI)

    def test_hart_drives_ai(self):
        assert get_compatible_types(SignalType.HART) == {SignalType.HART, SignalType.AI}

    def test_dnp3_family(self):
        assert get_compatible_types(SignalType.DNP3) == {
            SignalType.DNP3, SignalType.DNP3_TCP, SignalType.DNP3_SERIAL,
        }
        assert get_compatible_types(SignalType.DNP3_TCP) == {SignalType.DNP3_TCP, SignalType.DNP3}
        assert not is_compatible(SignalType.DNP3_TCP, SignalType.DNP3_SERIAL)

    def test_not_symmetric(self):
        assert is_compatible(SignalType.AO, SignalType.AI)
        assert not is_compatible(SignalType.AI, SignalType.AO)

    def test_servo(self):
        assert get_compatible_types(SignalType.SERVO_CMD) == {SignalType.SERVO_FB}

    def test_idempotent(self):
        """Repeated queries return the same set."""
        first = get_compatible_types(SignalType.SAFETY_DO)
        second = get_compatible_types(SignalType.SAFETY_DO)
        assert first == second == {SignalType.SAFETY_DI, SignalType.DI}

    def test_rows_are_immutable(self):
        assert isinstance(get_compatible_types(SignalType.DO), frozenset)

    def test_unknown_type_raises(self):
        with pytest.raises(TaxonomyError):
            compatible_destinations("NOPE")


# ===========================================================================
# Polarity
# ===========================================================================


class TestPolarity:
    def test_output_to_input(self):
        result = classify_polarity(OUT, IN)
        assert result.is_legal
        assert result.error is None
        assert result.warning is None

    def test_bidirectional_pair_has_advisory(self):
        result = classify_polarity(BI, BI)
        assert result.is_legal
        assert "verify protocol compatibility" in result.warning

    @pytest.mark.parametrize("pair", [(BI, IN), (OUT, BI)])
    def test_legal_without_diagnostic(self, pair):
        result = classify_polarity(*pair)
        assert result.is_legal
        assert result.warning is None

    def test_reverse_polarity(self):
        result = classify_polarity(IN, OUT)
        assert not result.is_legal
        assert "Reverse polarity" in result.error

    @pytest.mark.parametrize("direction", [IN, OUT])
    def test_same_polarity(self, direction):
        result = classify_polarity(direction, direction)
        assert not result.is_legal
        assert "same polarity" in result.error

    @pytest.mark.parametrize("pair", [(IN, BI), (BI, OUT)])
    def test_wrong_side_is_illegal(self, pair):
        assert not classify_polarity(*pair).is_legal

    def test_unknown_direction_raises(self):
        with pytest.raises(PolarityError, match="Unsupported direction pair"):
            classify_polarity("SIDEWAYS", IN)


# ===========================================================================
# Wire inference
# ===========================================================================


class TestWireInference:
    @pytest.mark.parametrize(
        "sig_type, expected",
        [
            (SignalType.DI, WireType.HARDWIRED),
            (SignalType.AO, WireType.HARDWIRED),
            (SignalType.SAFETY_DO, WireType.HARDWIRED),
            (SignalType.POWER_AC, WireType.HARDWIRED),
            (SignalType.ENCODER, WireType.HARDWIRED),
            (SignalType.PROFINET, WireType.ETHERNET),
            (SignalType.IEC61850_SV, WireType.ETHERNET),
            (SignalType.HART, WireType.HARDWIRED),
            (SignalType.MODBUS_RTU, WireType.SERIAL),
            (SignalType.PROFIBUS_DP, WireType.SERIAL),
            (SignalType.PROFIBUS_PA, WireType.SERIAL),
            (SignalType.CANOPEN, WireType.FIELDBUS),
            (SignalType.AS_INTERFACE, WireType.FIELDBUS),
            (SignalType.IEC60870_101, WireType.SERIAL),
            (SignalType.DNP3_SERIAL, WireType.SERIAL),
            (SignalType.IEC60870_104, WireType.ETHERNET),
            (SignalType.DNP3, WireType.ETHERNET),
            (SignalType.FIBER_SM, WireType.FIBER),
        ],
    )
    def test_mapping(self, sig_type, expected):
        assert infer_wire_type(sig_type) == expected

    def test_total(self):
        for sig_type in SignalType:
            assert isinstance(infer_wire_type(sig_type), WireType)
