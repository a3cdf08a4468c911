"""Configuration schema and loading for sheet layout jobs.

Public API:
    - LayoutConfiguration: Root configuration model
    - SheetConfigSchema: Sheet, packing and material settings
    - CaseConfigSchema: One book case job
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - ConfigIssue: One located problem inside a ConfigError
    - config_to_globals: Convert the sheet section to SheetGlobals
    - config_to_cases: Convert the case jobs to CaseSpec objects

Example:
    >>> from pathlib import Path
    >>> from booklight.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("cases.json"))
    ...     print(f"{len(config.cases)} cases")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from .adapter import config_to_case, config_to_cases, config_to_globals
from .loader import ConfigError, ConfigIssue, issue_path, load_config, load_config_from_dict
from .schema import (
    SUPPORTED_VERSIONS,
    CaseConfigSchema,
    LayoutConfiguration,
    SheetConfigSchema,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "CaseConfigSchema",
    "LayoutConfiguration",
    "SheetConfigSchema",
    "ConfigError",
    "ConfigIssue",
    "issue_path",
    "load_config",
    "load_config_from_dict",
    "config_to_case",
    "config_to_cases",
    "config_to_globals",
]
