"""Signal points for the wiring model.

A SignalPoint is one terminal on a device. Its ``type`` is drawn from a
closed vocabulary (SignalType); the category and canonical direction of
each type live in the engine's taxonomy tables, not here.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

class SignalType(str, Enum):
    """Every signal type a terminal can carry (46 members)."""

    # Digital
    DI = "DI"
    DO = "DO"

    # Analog
    AI = "AI"
    AO = "AO"

    # Pulse
    PI = "PI"
    PO = "PO"

    # Temperature
    RTD = "RTD"
    TC = "TC"

    # Relay & SOE
    RELAY = "RELAY"
    SOE = "SOE"

    # Generic communication
    COMM = "COMM"

    # Industrial Ethernet
    PROFINET = "PROFINET"
    ETHERNET_IP = "ETHERNET_IP"
    MODBUS_TCP = "MODBUS_TCP"
    OPC_UA = "OPC_UA"

    # Fieldbus
    PROFIBUS_DP = "PROFIBUS_DP"
    PROFIBUS_PA = "PROFIBUS_PA"
    DEVICENET = "DEVICENET"
    CANOPEN = "CANOPEN"
    MODBUS_RTU = "MODBUS_RTU"
    HART = "HART"
    FOUNDATION_FF = "FOUNDATION_FF"
    AS_INTERFACE = "AS_INTERFACE"

    # IEC 61850 substation
    IEC61850_GOOSE = "IEC61850_GOOSE"
    IEC61850_MMS = "IEC61850_MMS"
    IEC61850_SV = "IEC61850_SV"

    # Telecontrol
    IEC60870_101 = "IEC60870_101"
    IEC60870_104 = "IEC60870_104"
    DNP3 = "DNP3"
    DNP3_TCP = "DNP3_TCP"
    DNP3_SERIAL = "DNP3_SERIAL"

    # Functional safety (IEC 61508 / SIL)
    SAFETY_DI = "SAFETY_DI"
    SAFETY_DO = "SAFETY_DO"
    SAFETY_AI = "SAFETY_AI"
    SAFETY_RELAY = "SAFETY_RELAY"
    PROFISAFE = "PROFISAFE"
    CIP_SAFETY = "CIP_SAFETY"

    # Fiber optic
    FIBER_SM = "FIBER_SM"
    FIBER_MM = "FIBER_MM"

    # Power
    POWER_AC = "POWER_AC"
    POWER_DC = "POWER_DC"
    POWER_3PH = "POWER_3PH"

    # Motion control
    ENCODER = "ENCODER"
    RESOLVER = "RESOLVER"
    SERVO_CMD = "SERVO_CMD"
    SERVO_FB = "SERVO_FB"


class SignalDirection(str, Enum):
    INPUT = "INPUT"
    OUTPUT = "OUTPUT"
    BIDIRECTIONAL = "BIDIRECTIONAL"


# ---------------------------------------------------------------------------
# Signal point
# ---------------------------------------------------------------------------

class SignalPoint(BaseModel):
    """A single named terminal on a device.

    ``direction`` normally equals the canonical direction of ``type`` but
    may be overridden when the point is created. ``is_connected`` and the
    ``connected_to_*`` back-references are flipped by whoever materializes
    or removes a connection; the validator only reads them.
    """

    id: str
    tag_name: str
    description: str = ""
    type: SignalType
    direction: SignalDirection

    # Analog configuration
    engineering_unit: str | None = None
    range_min: float | None = None
    range_max: float | None = None

    # Protocol addressing
    iec_address: str | None = None
    modbus_address: int | None = None
    plc_address: str | None = None

    is_connected: bool = False
    connected_to_signal_id: str | None = None
    connected_to_device_id: str | None = None

    metadata: dict[str, Any] = {}

    @model_validator(mode="after")
    def _check_range(self):
        if (
            self.range_min is not None
            and self.range_max is not None
            and self.range_min > self.range_max
        ):
            raise ValueError(
                f"range_min ({self.range_min}) must be <= range_max ({self.range_max})"
            )
        if self.modbus_address is not None and self.modbus_address < 0:
            raise ValueError(
                f"modbus_address must be non-negative, got {self.modbus_address}"
            )
        return self
