"""Section layout of the settings file.

``OutputSettings`` is flat; on disk its fields are grouped into one TOML table
per output format, under shorter names (``[utm] precision`` for
``utm_precision``). Fields no table claims are written to ``[common]``.
"""

from __future__ import annotations

COMMON_SECTION = 'common'

# {section_name: {flat_field_name: short_name_in_toml}}
SECTION_MAP: dict[str, dict[str, str]] = {
    'decimal': {
        'decimal_precision': 'precision',
        'decimal_separator': 'separator',
    },
    'dms': {
        'dms_seconds_precision': 'seconds_precision',
        'angle_separator': 'separator',
    },
    'dm': {
        'dm_minutes_precision': 'minutes_precision',
    },
    'utm': {
        'utm_precision': 'precision',
    },
    'distance': {
        'distance_unit': 'unit',
    },
}

# flat_field -> (section, short_name)
_FIELD_LOCATION: dict[str, tuple[str, str]] = {
    flat: (section, short)
    for section, fields in SECTION_MAP.items()
    for flat, short in fields.items()
}

# section -> {short_name: flat_field}; short names repeat across sections
_SECTION_FIELDS: dict[str, dict[str, str]] = {
    section: {short: flat for flat, short in fields.items()}
    for section, fields in SECTION_MAP.items()
}

def flat_to_sectioned(flat: dict) -> dict:
    """Convert flat OutputSettings dict to sectioned dict for TOML output.

    Fields without a section land in ``common``.
    """
    result: dict = {}
    for key, value in flat.items():
        section, short_name = _FIELD_LOCATION.get(key, (COMMON_SECTION, key))
        result.setdefault(section, {})[short_name] = value
    return result

def _expand_section(section: str, values: dict) -> dict:
    fields = _SECTION_FIELDS.get(section, {})
    return {fields.get(name, name): value for name, value in values.items()}

def sectioned_to_flat(data: dict) -> dict:
    """Convert sectioned TOML dict to flat dict for OutputSettings validation.

    Tables other than the mapped ones (``common`` included) keep their keys
    as they are; bare top-level keys are read as flat field names.
    """
    flat: dict = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(_expand_section(key, value))
        else:
            flat[key] = value
    return flat
