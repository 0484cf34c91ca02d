"""sigwire connection legality engine.

Entry points::

    from sigwire.engine import validate_connection, validate_project, summarize

    verdict = validate_connection(src, dst, src_dev, dst_dev, [], settings)
    if verdict.is_valid:
        ...
    counts = summarize(validate_project(project))

All functions are pure and synchronous; the lookup tables are immutable
module constants.
"""

from ._compatibility import (
    TYPE_COMPATIBILITY,
    compatible_destinations,
    get_compatible_types,
    is_compatible,
)
from ._polarity import PolarityError, PolarityResult, classify_polarity
from ._project_validator import ValidationSummary, summarize, validate_project
from ._taxonomy import (
    PROTOCOL_CATEGORIES,
    SIGNAL_CATEGORY_MAP,
    SIGNAL_DIRECTION_MAP,
    SignalCategory,
    TaxonomyError,
    category_counts,
    category_label,
    category_of,
    default_direction,
    group_signals_by_direction,
    is_in_category,
    is_safety,
    requires_analog_range,
    requires_protocol_address,
    signal_type_label,
    sort_signals_for_display,
    types_in_category,
)
from ._validator import (
    ERR_ALREADY_CONNECTED,
    ERR_DEVICE_REFERENCE,
    ERR_DUPLICATE,
    ERR_INPUT_AS_SOURCE,
    ERR_OUTPUT_AS_DESTINATION,
    ERR_POWER_ISOLATION,
    ERR_PROTOCOL_FAMILY,
    ERR_SAFETY_ISOLATION,
    ERR_SAME_DIRECTION,
    ERR_SELF_CONNECTION,
    ERR_SIGNAL_REFERENCE,
    ERR_TYPE_MISMATCH,
    WARN_PARALLEL_SOURCE,
    WARN_SAME_DEVICE,
    WARN_UNIT_MISMATCH,
    can_be_destination,
    can_be_source,
    is_legal_target,
    validate_connection,
)
from ._wiring import infer_wire_type

__all__ = [
    # Taxonomy
    "SignalCategory",
    "TaxonomyError",
    "SIGNAL_CATEGORY_MAP",
    "SIGNAL_DIRECTION_MAP",
    "PROTOCOL_CATEGORIES",
    "category_of",
    "default_direction",
    "is_in_category",
    "types_in_category",
    "category_counts",
    "requires_analog_range",
    "requires_protocol_address",
    "is_safety",
    "category_label",
    "signal_type_label",
    "sort_signals_for_display",
    "group_signals_by_direction",
    # Compatibility
    "TYPE_COMPATIBILITY",
    "compatible_destinations",
    "get_compatible_types",
    "is_compatible",
    # Polarity
    "PolarityError",
    "PolarityResult",
    "classify_polarity",
    # Wiring
    "infer_wire_type",
    # Single edge
    "validate_connection",
    "can_be_source",
    "can_be_destination",
    "is_legal_target",
    "ERR_SELF_CONNECTION",
    "ERR_INPUT_AS_SOURCE",
    "ERR_OUTPUT_AS_DESTINATION",
    "ERR_SAME_DIRECTION",
    "ERR_TYPE_MISMATCH",
    "ERR_DUPLICATE",
    "ERR_ALREADY_CONNECTED",
    "ERR_DEVICE_REFERENCE",
    "ERR_SIGNAL_REFERENCE",
    "ERR_SAFETY_ISOLATION",
    "ERR_POWER_ISOLATION",
    "ERR_PROTOCOL_FAMILY",
    "WARN_SAME_DEVICE",
    "WARN_PARALLEL_SOURCE",
    "WARN_UNIT_MISMATCH",
    # Project-wide
    "validate_project",
    "summarize",
    "ValidationSummary",
]
