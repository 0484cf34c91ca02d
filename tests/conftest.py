"""Shared test helpers for the sigwire test suite."""

from sigwire.framework import create_custom_template, create_signal, instantiate
from sigwire.model.devices import DeviceCategory, DeviceInstance
from sigwire.model.project import ProjectSettings
from sigwire.model.signals import SignalPoint, SignalType

DEFAULT_SETTINGS = ProjectSettings()
PARALLEL_SETTINGS = ProjectSettings(allow_multiple_sources_per_input=True)
ISOLATION_SETTINGS = ProjectSettings(enforce_category_isolation=True)


def sig(sig_type: SignalType, tag: str | None = None, **kwargs) -> SignalPoint:
    """Shorthand for create_signal with a tag derived from the type."""
    return create_signal(tag or f"{SignalType(sig_type).value}_TEST", sig_type, **kwargs)


def make_device(*signals: SignalPoint, tag: str = "TEST_DEVICE") -> DeviceInstance:
    """Build a device that owns exactly ``signals`` (ids preserved)."""
    template = create_custom_template("Test Device", DeviceCategory.GENERIC)
    device = instantiate(template, tag)
    device.signals = list(signals)
    return device
