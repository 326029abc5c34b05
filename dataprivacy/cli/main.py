import os
import sys
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import click
import sentry_sdk

from .. import __version__
from .._registry import summarize_tree
from ..console import print_banner, print_error, print_registry_summary, print_registry_tree
from ..exceptions import (
    ConfigurationError,
    DataPrivacyError,
    InvalidTranslationError,
    MissingTranslationError,
    SnapshotValidationError,
)
from ..logging_config import logger, set_log_level
from ..metadata import load_registry
from ..serialization import serialize_tree, write_tree
from ..validation import validate_snapshot_file

OUTPUT_FORMATS = ("json", "yaml", "tree")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOCALHOST_PATTERNS = ("localhost", "127.0.0.1", "[::1]")

# Errors caused by user input; never reported to Sentry
USER_ERRORS = (ConfigurationError, SnapshotValidationError, MissingTranslationError, InvalidTranslationError)


@dataclass
class Config:
    """Configuration settings for building the registry."""

    snapshot_file: Optional[str] = None
    strings_file: Optional[str] = None
    api_base_url: Optional[str] = None
    token: Optional[str] = None
    output_file: Optional[str] = None
    output_format: str = "json"
    log_level: str = "INFO"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.snapshot_file and self.api_base_url:
            raise ConfigurationError("Please provide only one of: SNAPSHOT_FILE or API_BASE_URL")
        if not self.snapshot_file and not self.api_base_url:
            raise ConfigurationError("Please provide one of: SNAPSHOT_FILE or API_BASE_URL")

        self.output_format = self.output_format.lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid OUTPUT_FORMAT: '{self.output_format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )
        if self.output_format == "tree" and self.output_file:
            raise ConfigurationError("The tree format can only be printed to the terminal, not written to a file")

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid LOG_LEVEL: '{self.log_level}'. Expected one of: {', '.join(LOG_LEVELS)}")

        if self.api_base_url:
            self._validate_api_url()

    def _validate_api_url(self) -> None:
        """
        Validate and normalize the API base URL.

        Raises:
            ConfigurationError: If URL format is invalid
        """
        parsed = urlparse(self.api_base_url)

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("API base URL must start with http:// or https://")

        if not parsed.netloc:
            raise ConfigurationError("API base URL must include a valid hostname")

        if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
            logger.warning("Using HTTP (not HTTPS) for API communication - consider using HTTPS in production")

        self.api_base_url = self.api_base_url.rstrip("/")


def build_config(
    snapshot_file: Optional[str] = None,
    strings_file: Optional[str] = None,
    api_base_url: Optional[str] = None,
    token: Optional[str] = None,
    output_file: Optional[str] = None,
    output_format: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Config:
    """
    Build configuration from CLI arguments, falling back to environment variables.

    Returns:
        Config (not yet validated)
    """
    return Config(
        snapshot_file=snapshot_file or os.getenv("SNAPSHOT_FILE") or None,
        strings_file=strings_file or os.getenv("STRINGS_FILE") or None,
        api_base_url=api_base_url or os.getenv("API_BASE_URL") or None,
        token=token or os.getenv("TOKEN") or None,
        output_file=output_file or os.getenv("OUTPUT_FILE") or None,
        output_format=output_format or os.getenv("OUTPUT_FORMAT") or "json",
        log_level=log_level or os.getenv("LOG_LEVEL") or "INFO",
    )


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def before_send(event, hint):
    """
    Filter events before sending to Sentry.

    User input errors are expected and not reported.
    """
    if "exc_info" in hint:
        exc_type, exc_value, tb = hint["exc_info"]
        if isinstance(exc_value, USER_ERRORS):
            return None
    return event


def initialize_sentry() -> None:
    """Initialize Sentry for error tracking when SENTRY_DSN is set and TELEMETRY is not disabled."""
    if not evaluate_boolean(os.getenv("TELEMETRY", "true")):
        logger.debug("Telemetry disabled")
        return

    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.debug("SENTRY_DSN not set, error tracking disabled")
        return

    sentry_sdk.init(
        dsn=sentry_dsn,
        release=f"dataprivacy-tool@{__version__}",
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=before_send,
    )


def run_registry(config: Config) -> None:
    """
    Build the registry tree and emit it.

    JSON and YAML go to the output file, or to stdout when none is set.
    The tree format is rendered on the terminal.
    """
    registry = load_registry(
        snapshot_file=config.snapshot_file,
        strings_file=config.strings_file,
        api_base_url=config.api_base_url,
        token=config.token,
    )
    tree = registry.build_registry_tree()

    if config.output_format == "tree":
        print_registry_tree(tree)
        print_registry_summary(summarize_tree(tree))
    elif config.output_file:
        write_tree(tree, config.output_file, config.output_format)
        print_registry_summary(summarize_tree(tree))
    else:
        click.echo(serialize_tree(tree, config.output_format))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", prog_name="dataprivacy", message="%(prog)s %(version)s")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Build and inspect the privacy metadata registry of an LMS installation."""
    if verbose:
        set_log_level("DEBUG")


@cli.command("registry")
@click.option("--snapshot-file", "-s", default=None, help="Catalog snapshot (JSON or YAML). Env: SNAPSHOT_FILE")
@click.option("--strings-file", default=None, help="Language string table (JSON or YAML). Env: STRINGS_FILE")
@click.option("--api-base-url", default=None, help="Fetch the snapshot from this platform URL. Env: API_BASE_URL")
@click.option("--token", default=None, help="Bearer token for the platform API. Env: TOKEN")
@click.option("--output-file", "-o", default=None, help="Write the tree to this file. Env: OUTPUT_FILE")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format (default: json). Env: OUTPUT_FORMAT",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: INFO). Env: LOG_LEVEL",
)
@click.pass_context
def registry_command(
    ctx: click.Context,
    snapshot_file: Optional[str],
    strings_file: Optional[str],
    api_base_url: Optional[str],
    token: Optional[str],
    output_file: Optional[str],
    output_format: Optional[str],
    log_level: Optional[str],
) -> None:
    """Build the privacy metadata tree for every plugin and core subsystem."""
    config = build_config(
        snapshot_file=snapshot_file,
        strings_file=strings_file,
        api_base_url=api_base_url,
        token=token,
        output_file=output_file,
        output_format=output_format,
        log_level=log_level,
    )

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    # --verbose wins over the configured level
    if not ctx.find_root().params.get("verbose"):
        set_log_level(config.log_level)

    initialize_sentry()

    if config.output_format == "tree" or config.output_file:
        print_banner(__version__)

    try:
        run_registry(config)
    except DataPrivacyError as e:
        logger.error(f"Failed to build the privacy registry: {e}")
        print_error(str(e), title="Registry build failed")
        sys.exit(1)


@cli.command("validate")
@click.argument("snapshot_file", type=click.Path(dir_okay=False))
def validate_command(snapshot_file: str) -> None:
    """Validate a catalog snapshot against the snapshot schema."""
    result = validate_snapshot_file(snapshot_file)
    if not result.valid:
        location = f" at {result.error_path}" if result.error_path else ""
        logger.error(f"Snapshot {snapshot_file} is invalid{location}: {result.error_message}")
        print_error(f"{snapshot_file} is invalid{location}: {result.error_message}", title="Snapshot validation")
        sys.exit(1)

    logger.info(f"Snapshot {snapshot_file} is valid")
    click.echo(f"{snapshot_file}: valid")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
