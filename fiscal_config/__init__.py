"""
fiscal_config -- public entrypoint for fiscal calendar configuration.

Responsibility:
    Turns calendar definitions (YAML files shipped in ``sets/`` or supplied
    by the operator, or plain mappings from a collaborator) into the
    kernel's ``CalendarConfig``.  No other package reads configuration
    files.

Architecture position:
    Configuration -- sits above ``fiscal_kernel`` and below ``scripts``.
    The kernel MUST NEVER import from ``fiscal_config``.

Audit relevance:
    Every successful load emits a ``FISCAL_CONFIG_TRACE`` log entry with
    the source and a checksum of the parsed configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from fiscal_config.loader import (
    compute_checksum,
    config_to_dict,
    load_yaml_file,
    parse_calendar_config,
)
from fiscal_kernel.domain.calendar import CalendarConfig

_logger = logging.getLogger("fiscal_kernel.config")

_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"
DEFAULT_CONFIG_PATH = _DEFAULT_CONFIG_DIR / "default.yaml"


def load_calendar_config(path: Path | str | None = None) -> CalendarConfig:
    """
    Load a calendar definition from YAML.

    Args:
        path: YAML file to read.  Defaults to the packaged
            ``sets/default.yaml`` (January 2025, Monthly).

    Raises:
        FileNotFoundError: the file does not exist.
        yaml.YAMLError: the file is not valid YAML.
        ConfigurationError: required keys missing or invalid.
    """
    source = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = parse_calendar_config(load_yaml_file(source))
    _trace(config, str(source))
    return config


def calendar_config_from_mapping(data: Mapping[str, Any]) -> CalendarConfig:
    """Parse a collaborator-supplied ``{startMonth, startYear, frequency}``."""
    config = parse_calendar_config(data)
    _trace(config, "mapping")
    return config


def _trace(config: CalendarConfig, source: str) -> None:
    _logger.info(
        "FISCAL_CONFIG_TRACE",
        extra={
            "trace_type": "FISCAL_CONFIG_TRACE",
            "source": source,
            "checksum": compute_checksum(config_to_dict(config)),
            **config_to_dict(config),
        },
    )


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "calendar_config_from_mapping",
    "load_calendar_config",
]
