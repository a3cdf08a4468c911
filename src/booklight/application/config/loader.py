"""Reading layout configuration files into validated models.

Every problem found on the way from a file to domain objects, whether the
file cannot be read, the JSON is malformed, the schema rejects a field or
the domain rejects a case, surfaces as one ConfigError listing ConfigIssue
entries located by JSON path (``cases[0].mag_count``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from .schema import LayoutConfiguration


def issue_path(*loc: str | int) -> str:
    """JSON path of a location in the configuration.

    Examples:
        >>> issue_path("cases", 0, "mag_count")
        'cases[0].mag_count'
    """
    path = ""
    for key in loc:
        if isinstance(key, int):
            path += f"[{key}]"
        else:
            path += f".{key}" if path else key
    return path


@dataclass(frozen=True)
class ConfigIssue:
    """One problem in a configuration.

    Attributes:
        path: JSON path of the offending entry; empty for the whole document.
        message: What is wrong.
        value: The offending scalar value, if any.
        line: Source line, for JSON syntax errors.
        column: Source column, for JSON syntax errors.
    """

    path: str
    message: str
    value: Any = None
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}, column {self.column}: {self.message}"
        text = f"{self.path or '(root)'}: {self.message}"
        if self.value is not None:
            text += f" (got: {self.value!r})"
        return text


class ConfigError(Exception):
    """A configuration that cannot be turned into a layout job.

    Attributes:
        message: Summary shown to the user.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: Configuration file, when loading from disk.
        issues: Located problems; empty for file errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "validation",
        path: Path | None = None,
        issues: Iterable[ConfigIssue] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.issues = tuple(issues)

    @classmethod
    def invalid(cls, issues: Iterable[ConfigIssue], path: Path | None = None) -> ConfigError:
        """Validation error whose message lists every issue."""
        issues = tuple(issues)
        lines = ["Configuration validation failed:"] + [f"  - {issue}" for issue in issues]
        return cls("\n".join(lines), "validation", path, issues)

    def __str__(self) -> str:
        return self.message


def schema_issues(error: ValidationError) -> list[ConfigIssue]:
    """Convert pydantic errors to issues; container inputs are not echoed."""
    issues = []
    for err in error.errors():
        value = err.get("input")
        if isinstance(value, (dict, list)):
            value = None
        issues.append(ConfigIssue(issue_path(*err["loc"]), err["msg"], value))
    return issues


def _read_json(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path)
    except PermissionError:
        raise ConfigError(f"Permission denied reading config file: {path}", "permission_denied", path)
    except OSError as e:
        raise ConfigError(f"Error reading config file: {path}: {e}", "file_read_error", path)

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        issue = ConfigIssue("", e.msg, line=e.lineno, column=e.colno)
        raise ConfigError(f"Invalid JSON in config file: {path} ({issue})", "json_parse", path, [issue])


def load_config_from_dict(data: dict[str, Any], path: Path | None = None) -> LayoutConfiguration:
    """Validate an already parsed configuration.

    Args:
        data: Parsed JSON document.
        path: File the data came from, for error reporting.

    Raises:
        ConfigError: If the schema rejects the data.
    """
    try:
        return LayoutConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigError.invalid(schema_issues(e), path) from e


def load_config(path: Path) -> LayoutConfiguration:
    """Load and validate a layout configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated; the
            error_type attribute tells which.
    """
    return load_config_from_dict(_read_json(path), path)
