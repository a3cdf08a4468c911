"""CLI command implementations for the booklight application."""

from booklight.cli.commands.validate import display_config_error, validate_command

__all__ = ["display_config_error", "validate_command"]
