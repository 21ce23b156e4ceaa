"""Custom fields of the selected projects, and parsing of --field options."""
from typing import Dict, List, Optional, Sequence, Tuple

from .data_models import CustomField, FieldValue, Project

# Form inputs may namespace a field gid as "field-<gid>".
FIELD_INPUT_PREFIX = "field-"
SUPPORTED_SUBTYPES = ("enum", "text", "number")


class FieldValueError(ValueError):
    pass


def collect_custom_fields(projects: Sequence[Project]) -> List[CustomField]:
    """Custom fields attached to any of the projects, first occurrence wins."""
    seen = set()
    fields = []
    for project in projects:
        for setting in project.custom_field_settings:
            field = setting.custom_field
            if field.gid not in seen:
                seen.add(field.gid)
                fields.append(field)
    return fields


def parse_field_option(option: str) -> Tuple[str, str]:
    """Split ``KEY=VALUE``; the key loses any ``field-`` prefix."""
    key, sep, value = option.partition("=")
    key = key.strip()
    if not sep or not key:
        raise FieldValueError(f"Custom field option '{option}' must look like FIELD=VALUE")
    if key.startswith(FIELD_INPUT_PREFIX):
        key = key[len(FIELD_INPUT_PREFIX):]
    return key, value.strip()


def _find_field(fields: Sequence[CustomField], key: str) -> Optional[CustomField]:
    for field in fields:
        if field.gid == key:
            return field
    for field in fields:
        if field.name and field.name.lower() == key.lower():
            return field
    return None


def _parse_number(field: CustomField, value: str) -> FieldValue:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        raise FieldValueError(f"Custom field '{field.name}' expects a number, got '{value}'")


def _enum_option_gid(field: CustomField, value: str) -> str:
    for option in field.enum_options:
        if option.gid == value:
            return option.gid
    for option in field.enum_options:
        if option.enabled and option.name and option.name.lower() == value.lower():
            return option.gid
    choices = ", ".join(o.name for o in field.enum_options if o.enabled and o.name)
    raise FieldValueError(f"'{value}' is not an option of '{field.name}' (choose from: {choices})")


def resolve_field_values(fields: Sequence[CustomField], options: Sequence[str]) -> Dict[str, FieldValue]:
    """
    Turn ``--field`` options into a mapping of custom field gid to value.

    Keys may be a field gid or name. Enum values may be an option gid or name.
    Empty values are kept as "" so the submission drops them.
    """
    values: Dict[str, FieldValue] = {}
    for option in options:
        key, raw = parse_field_option(option)
        field = _find_field(fields, key)
        if field is None:
            raise FieldValueError(f"Unknown custom field '{key}' for the selected projects")
        if raw == "":
            values[field.gid] = ""
        elif field.resource_subtype == "enum":
            values[field.gid] = _enum_option_gid(field, raw)
        elif field.resource_subtype == "number":
            values[field.gid] = _parse_number(field, raw)
        elif field.resource_subtype == "text":
            values[field.gid] = raw
        else:
            raise FieldValueError(
                f"Custom field '{field.name}' has unsupported type '{field.resource_subtype}'"
            )
    return values
