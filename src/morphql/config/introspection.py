"""Configuration introspection utilities for debugging and validation.

Usage:
    python -m morphql.config
    python -m morphql.config --check
    python -m morphql.config --json
"""

import argparse
import json
import sys
from typing import Any

from .api import check_environment, resolve_config
from .audit import summarize_origins
from .types import FIELD_ORDER, SENSITIVE_FIELDS, ResolvedConfig
from .validation import config_warnings, validate_resolved_config

# ruff: noqa: T201


def get_config_info(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Get structured configuration information for programmatic use.

    Returns:
        Dictionary with values (secrets replaced by a flag), origins,
        validation errors and warnings.
    """
    resolved = resolve_config(overrides)
    errors = validate_resolved_config(resolved)

    config: dict[str, Any] = {}
    for field in FIELD_ORDER:
        value = getattr(resolved, field)
        if field in SENSITIVE_FIELDS:
            config[f"has_{field}"] = value is not None
        else:
            config[field] = getattr(value, "value", value)

    return {
        "status": "invalid" if errors else "valid",
        "config": config,
        "sources": dict(resolved.origin),
        "source_counts": summarize_origins(resolved.origin),
        "environment": check_environment(),
        "validation": {
            "errors": errors,
            "warnings": config_warnings(resolved),
        },
    }


def check_config_validation(overrides: dict[str, Any] | None = None) -> bool:
    """Return True when the effective configuration passes validation."""
    return not validate_resolved_config(resolve_config(overrides))


def print_config_debug(*, show_sources: bool = True) -> None:
    """Print the effective configuration, its sources and validation results."""
    resolved = resolve_config()

    print("=== Effective Configuration ===")
    _print_config_values(resolved)

    if show_sources:
        print("\n=== Configuration Sources ===")
        print(resolved.audit())

    print("\n=== Validation Results ===")
    errors = validate_resolved_config(resolved)
    if errors:
        for error in errors:
            print(f"  error: {error}")
    else:
        print("  Configuration is valid")

    for warning in config_warnings(resolved):
        print(f"  warning: {warning}")


def _print_config_values(resolved: ResolvedConfig) -> None:
    frozen = resolved.to_frozen()
    for field in FIELD_ORDER:
        value = getattr(frozen, field)
        if field in SENSITIVE_FIELDS:
            print(f"  {field}: {'[SET]' if value else '[NOT SET]'}")
        else:
            print(f"  {field}: {getattr(value, 'value', value)}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for configuration introspection."""
    parser = argparse.ArgumentParser(
        description="Inspect morphql client configuration",
        prog="python -m morphql.config",
    )
    parser.add_argument(
        "--no-sources", action="store_true", help="Don't show configuration sources"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Just check if configuration is valid (exit code 0=valid, 1=invalid)",
    )

    args = parser.parse_args(argv)

    if args.check:
        sys.exit(0 if check_config_validation() else 1)

    if args.json:
        print(json.dumps(get_config_info(), indent=2))
    else:
        print_config_debug(show_sources=not args.no_sources)


if __name__ == "__main__":
    main()
