"""
Field validation shared by the Order and Customer builders.
"""

from __future__ import annotations

from copy import deepcopy
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from core.exceptions import ValidationError

AttributeValue = Union[str, int, float, bool, List[Any], Dict[str, Any]]
"""Allowed attribute values. None is not a member."""

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def items_must_be_strings(items: Sequence[Any], field_name: str) -> List[str]:
    """
    Check every item of an array field is a string.

    Returns:
        A list copy of the items

    Raises:
        ValidationError: If any item is not a string
    """
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(
                f"All {field_name} array items must be strings", field=field_name
            )
    return list(items)


def validate_attributes(attributes: Mapping[Any, Any]) -> Dict[str, AttributeValue]:
    """
    Check attribute keys are strings and no value is None.

    Returns:
        A deep copy of the attributes

    Raises:
        ValidationError: Citing the offending key
    """
    for key, value in attributes.items():
        if not isinstance(key, str):
            raise ValidationError(
                f"Attribute keys must be strings, received: {key}", field="attributes"
            )
        if value is None:
            raise ValidationError(
                f'Received a null value for attribute "{key}"', field="attributes"
            )
    return deepcopy(dict(attributes))


def check_required_fields(model: Any, required_fields: Sequence[str]) -> None:
    """
    Raise for the first required field (in declared order) that is unset.

    Raises:
        ValidationError: Naming the missing field
    """
    for field_name in required_fields:
        if getattr(model, field_name) is None:
            raise ValidationError(
                f'Required field "{field_name}" must be set', field=field_name
            )


def format_datetime(value: date) -> str:
    """Render a date/datetime as YYYY-MM-DD HH:MM:SS, without timezone conversion."""
    return value.strftime(DATETIME_FORMAT)


def include_if_not_empty(output: Dict[str, Any], key: str, value: Optional[Any]) -> None:
    """Add value to output under key unless it is None or empty."""
    if value:
        output[key] = value
