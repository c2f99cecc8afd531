"""
Calendar configuration loader (``fiscal_config.loader``).

Responsibility
--------------
Reads a calendar definition from a YAML file or an in-memory mapping and
turns it into the kernel's frozen ``CalendarConfig``.  Callers go through
``fiscal_config.load_calendar_config`` / ``fiscal_config.parse_calendar_config``;
this module is internal to the package.

Architecture position
---------------------
**Config layer**.  Sits above ``fiscal_kernel`` (it produces kernel input)
and below ``scripts``.  The kernel never imports this package.

Invariants enforced
-------------------
* Required keys are never defaulted: a missing month or year is a
  ``ConfigurationError`` naming the field.
* The start year must be an integer (booleans rejected).
* Month and frequency are passed through as given; ``generate_calendar``
  validates their values.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing/invalid keys  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from fiscal_kernel.domain.calendar import CalendarConfig
from fiscal_kernel.domain.values import Frequency
from fiscal_kernel.exceptions import ConfigurationError

# Accepted spellings per field; the first is canonical.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "start_month": ("start_month", "startMonth"),
    "start_year": ("start_year", "startYear"),
    "frequency": ("frequency", "periodFrequency", "period_frequency"),
}

_SECTION_KEY = "calendar"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("document", str(path), "YAML root must be a mapping")
    return data


def _lookup(data: Mapping[str, Any], field: str) -> tuple[bool, Any]:
    for key in _FIELD_ALIASES[field]:
        if key in data:
            return True, data[key]
    return False, None


def parse_calendar_config(data: Mapping[str, Any]) -> CalendarConfig:
    """
    Parse ``{startMonth, startYear, frequency}`` (or the snake_case keys).

    A top-level ``calendar:`` section is unwrapped first.  ``frequency``
    defaults to Monthly when absent.

    Raises:
        ConfigurationError: missing month or year, or a non-integer year.
    """
    if _SECTION_KEY in data and isinstance(data[_SECTION_KEY], Mapping):
        data = data[_SECTION_KEY]

    found, start_month = _lookup(data, "start_month")
    if not found or start_month is None:
        raise ConfigurationError("start_month", None, "required")

    found, start_year = _lookup(data, "start_year")
    if not found or start_year is None:
        raise ConfigurationError("start_year", None, "required")
    if isinstance(start_year, bool) or not isinstance(start_year, int):
        raise ConfigurationError("start_year", start_year, "must be an integer")

    found, frequency = _lookup(data, "frequency")
    if not found or frequency is None:
        frequency = Frequency.MONTHLY

    return CalendarConfig(
        start_month=str(start_month),
        start_year=start_year,
        frequency=frequency,
    )


def config_to_dict(config: CalendarConfig) -> dict[str, Any]:
    frequency = config.frequency
    return {
        "start_month": config.start_month,
        "start_year": config.start_year,
        "frequency": frequency.value if isinstance(frequency, Frequency) else frequency,
    }


def compute_checksum(data: dict[str, Any]) -> str:
    """
    SHA-256 of the canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
