"""Top-level Project container and project policy settings."""

from __future__ import annotations

from pydantic import BaseModel

from .connections import Connection
from .devices import DeviceInstance, DeviceTemplate


class ProjectSettings(BaseModel):
    """Project-wide policy consulted by the connection validator.

    Load from a plain mapping with ``ProjectSettings.model_validate``.
    """

    allow_multiple_sources_per_input: bool = False
    enforce_category_isolation: bool = False
    tag_delimiter: str = "_"
    default_cable_type: str = ""


class Project(BaseModel):
    name: str
    description: str = ""
    settings: ProjectSettings = ProjectSettings()
    templates: dict[str, DeviceTemplate] = {}
    devices: dict[str, DeviceInstance] = {}
    connections: dict[str, Connection] = {}
