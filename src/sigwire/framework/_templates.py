"""Device templates (UDTs) and device instantiation."""

from __future__ import annotations

import re
from typing import NamedTuple

from sigwire.model.devices import DeviceCategory, DeviceInstance, DeviceTemplate, Position
from sigwire.model.signals import SignalPoint

from ._signals import TAG_SUFFIX_KEY, create_signal_set, new_id


class TemplateInfo(NamedTuple):
    category: DeviceCategory
    description: str


_TEMPLATES: dict[str, TemplateInfo] = {
    "TRANSFORMER": TemplateInfo(DeviceCategory.TRANSFORMER, "Power Transformer with OLTC"),
    "MOTOR": TemplateInfo(DeviceCategory.MOTOR, "Electric Motor"),
    "VFD": TemplateInfo(DeviceCategory.VFD, "Variable Frequency Drive"),
    "SKID": TemplateInfo(DeviceCategory.SKID, "Process Skid Package"),
    "BREAKER": TemplateInfo(DeviceCategory.BREAKER, "Circuit Breaker"),
    "METER": TemplateInfo(DeviceCategory.METER, "Power Meter"),
}

_WHITESPACE_RE = re.compile(r"\s+")


def available_templates() -> list[str]:
    return list(_TEMPLATES)


def template_info(kind: str) -> TemplateInfo | None:
    """Category and description of a standard template, or None if unknown."""
    return _TEMPLATES.get(kind.upper())


def _tag_prefix(name: str) -> str:
    return _WHITESPACE_RE.sub("_", name.upper())[:10]


def create_template(kind: str, name: str) -> DeviceTemplate:
    """Create a generic template of ``kind`` (TRANSFORMER, MOTOR, VFD, ...).

    Signal tags are prefixed with the upper-cased ``name`` (whitespace
    replaced by ``_``, truncated to 10 characters).
    """
    key = kind.upper()
    config = template_info(key)
    if config is None:
        raise ValueError(
            f"Unknown template: {kind}. Available: {', '.join(_TEMPLATES)}"
        )
    return DeviceTemplate(
        id=f"{key}_{new_id()}",
        name=name,
        manufacturer="Generic",
        model_number=key,
        category=config.category,
        is_generic=True,
        icon=key.lower(),
        description=config.description,
        signals=create_signal_set(key, _tag_prefix(name)),
        protocols=["Hardwired"],
        tags=[key.lower(), "generic"],
    )


def create_custom_template(
    name: str,
    category: DeviceCategory,
    *,
    description: str = "",
    signals: list[SignalPoint] | None = None,
) -> DeviceTemplate:
    """Create a user-defined template, empty unless ``signals`` are given."""
    return DeviceTemplate(
        id=f"CUSTOM_{new_id()}",
        name=name,
        manufacturer="User-Defined",
        model_number="Custom",
        category=DeviceCategory(category),
        description=description,
        signals=list(signals) if signals else [],
        tags=["custom"],
    )


def instantiate(
    template: DeviceTemplate,
    tag_name: str,
    *,
    position: Position | tuple[float, float] | None = None,
    delimiter: str = "_",
    description: str = "",
    location: str = "",
) -> DeviceInstance:
    """Place a new device built from ``template``.

    Every template signal is cloned with a fresh id and unconnected state.
    Signals from a standard set are retagged ``<tag_name><delimiter><suffix>``;
    others keep their template tag.
    """
    if isinstance(position, tuple):
        position = Position(x=position[0], y=position[1])

    signals = []
    for template_signal in template.signals:
        suffix = template_signal.metadata.get(TAG_SUFFIX_KEY)
        tag = f"{tag_name}{delimiter}{suffix}" if suffix else template_signal.tag_name
        signals.append(
            template_signal.model_copy(
                update={
                    "id": new_id(),
                    "tag_name": tag,
                    "is_connected": False,
                    "connected_to_signal_id": None,
                    "connected_to_device_id": None,
                    "metadata": dict(template_signal.metadata),
                },
                deep=True,
            )
        )

    return DeviceInstance(
        instance_id=new_id(),
        template_id=template.id,
        template=template,
        tag_name=tag_name,
        description=description or template.description,
        location=location,
        position=position or Position(),
        signals=signals,
    )
