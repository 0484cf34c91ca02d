"""sigwire framework: builders and project graph helpers.

Users import everything from this single flat namespace::

    from sigwire.framework import create_template, place_device, connect
"""

from ._graph import (
    ProjectGraphError,
    add_device,
    connect,
    disconnect,
    place_device,
    remove_device,
    revalidate,
)
from ._signals import (
    SIGNAL_SETS,
    TAG_SUFFIX_KEY,
    create_signal,
    create_signal_set,
    new_id,
)
from ._templates import (
    TemplateInfo,
    available_templates,
    create_custom_template,
    create_template,
    instantiate,
    template_info,
)

__all__ = [
    # Signals
    "create_signal",
    "create_signal_set",
    "new_id",
    "SIGNAL_SETS",
    "TAG_SUFFIX_KEY",
    # Templates
    "TemplateInfo",
    "available_templates",
    "template_info",
    "create_template",
    "create_custom_template",
    "instantiate",
    # Graph
    "ProjectGraphError",
    "add_device",
    "place_device",
    "connect",
    "disconnect",
    "remove_device",
    "revalidate",
]
