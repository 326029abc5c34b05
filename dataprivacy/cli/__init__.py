"""CLI module for dataprivacy.

This module provides the command-line interface for building the privacy
metadata registry. It supports both CLI arguments and environment variables
for configuration.
"""

from .main import (
    Config,
    build_config,
    cli,
    evaluate_boolean,
    initialize_sentry,
    main,
    run_registry,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run_registry",
    "evaluate_boolean",
    "initialize_sentry",
]
