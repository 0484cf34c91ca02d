"""Device templates and placed device instances."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .signals import SignalPoint


class DeviceCategory(str, Enum):
    IED = "IED"
    PLC = "PLC"
    RTU = "RTU"
    DCS = "DCS"
    HMI = "HMI"
    SCADA = "SCADA"
    RELAY = "RELAY"
    METER = "METER"
    TRANSFORMER = "TRANSFORMER"
    MOTOR = "MOTOR"
    VFD = "VFD"
    PUMP = "PUMP"
    VALVE = "VALVE"
    SKID = "SKID"
    BREAKER = "BREAKER"
    SWITCHGEAR = "SWITCHGEAR"
    GENERATOR = "GENERATOR"
    GENERIC = "GENERIC"


class DeviceTemplate(BaseModel):
    """Immutable device blueprint (UDT).

    Instances clone ``signals`` with fresh identities; the template's own
    signal points are never wired.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    manufacturer: str = ""
    model_number: str = ""
    category: DeviceCategory = DeviceCategory.GENERIC
    is_generic: bool = True
    icon: str = "generic"
    description: str = ""
    signals: list[SignalPoint] = []
    protocols: list[str] = []
    version: str = "1.0.0"
    tags: list[str] = []


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class DeviceInstance(BaseModel):
    """A placed device owning an ordered list of signal points."""

    instance_id: str
    template_id: str
    template: DeviceTemplate
    tag_name: str
    description: str = ""
    location: str = ""
    position: Position = Position()
    rotation: float = 0.0
    signals: list[SignalPoint] = []
    connection_ids: list[str] = []

    def get_signal(self, signal_id: str) -> SignalPoint | None:
        for signal in self.signals:
            if signal.id == signal_id:
                return signal
        return None
