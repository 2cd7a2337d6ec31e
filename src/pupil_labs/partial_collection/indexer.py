from collections.abc import Mapping
from typing import Any

import numpy as np

from pupil_labs.partial_collection._types import FieldOrMapper, Mapper
from pupil_labs.partial_collection.errors import ConfigurationError


def identity(item: Any) -> Any:
    return item


def field_getter(field: str) -> Mapper:
    """Return a mapper reading `field` as a key of mappings or an attribute otherwise"""

    def get_field(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item[field]
        return getattr(item, field)

    get_field.__name__ = f"get_{field}"
    return get_field


def resolve_mapper(
    value: FieldOrMapper | None, name: str, default: Mapper | None = None
) -> Mapper:
    """Resolve a field name or callable into a single mapper function.

    This happens once, when the collection is constructed, so the hot paths never
    need to check which form was configured.

    Args:
    ----
        value: Field name or callable, eg. `"row_number"` or `lambda p: p.row`.
        name: Option name used in error messages.
        default: Used when `value` is None. If not provided the option is required.

    """
    if value is None:
        if default is None:
            raise ConfigurationError(f"{name} is required")
        return default
    if isinstance(value, str):
        return field_getter(value)
    if callable(value):
        return value
    raise ConfigurationError(
        f"{name} must be a field name or a callable, not {type(value)}"
    )


def can_be_integer(value: Any) -> bool:
    """Tell whether `value` is integer valued.

    Strings have to round trip exactly through integer parsing, so `"3"` passes
    while `"03"`, `"+3"` or `"3.5"` do not.
    """
    if isinstance(value, bool | np.bool_):
        return False
    if isinstance(value, int | np.integer):
        return True
    if isinstance(value, float | np.floating):
        return float(value).is_integer()
    if isinstance(value, str):
        try:
            return str(int(value, 10)) == value
        except ValueError:
            return False
    return False


def as_index(value: Any) -> int | None:
    if not can_be_integer(value):
        return None
    if isinstance(value, str):
        return int(value, 10)
    return int(value)
