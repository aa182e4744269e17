"""
Configuration Validation Module

Validates critical configuration values at startup to fail-fast
with clear error messages instead of runtime failures.
"""

import sys
from typing import Optional
from urllib.parse import urlparse


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def validate_backend_url(backend_url: Optional[str]) -> None:
    """
    Validate the payment backend base URL.

    Args:
        backend_url: The PAYMENT_BACKEND_URL value from config

    Raises:
        ConfigValidationError: If the URL is missing or not http(s)
    """
    if not backend_url:
        raise ConfigValidationError(
            "PAYMENT_BACKEND_URL is required for payment status checks!\n"
            "Add to .env: PAYMENT_BACKEND_URL=https://api.example.com"
        )

    parsed = urlparse(backend_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigValidationError(
            f"PAYMENT_BACKEND_URL must be an absolute http(s) URL (got: {backend_url})"
        )


def validate_session_timing(config_module) -> None:
    """
    Validate payment session timing values against each other.

    The countdown must tick more than once per second or the displayed
    remaining time skips, and polling slower than the payment window
    would never run.

    Raises:
        ConfigValidationError: If the values are inconsistent
    """
    if config_module.COUNTDOWN_TICK_MS >= 1000:
        raise ConfigValidationError(
            f"COUNTDOWN_TICK_MS must be below 1000 (got: {config_module.COUNTDOWN_TICK_MS})"
        )

    window_ms = config_module.PAYMENT_TIMEOUT_MINUTES * 60 * 1000
    if config_module.POLL_INITIAL_DELAY_MS >= window_ms or config_module.POLL_INTERVAL_MS >= window_ms:
        raise ConfigValidationError(
            "POLL_INITIAL_DELAY_MS and POLL_INTERVAL_MS must be shorter than "
            f"the payment window ({config_module.PAYMENT_TIMEOUT_MINUTES} minutes)"
        )


def validate_admin_notifications(config_module) -> None:
    """
    Admin notifications need a bot token once admins are listed.

    Raises:
        ConfigValidationError: If ADMIN_ID_LIST is set without TOKEN
    """
    if config_module.NOTIFY_ADMINS_MANUAL_PAYMENT and config_module.ADMIN_ID_LIST and not config_module.TOKEN:
        raise ConfigValidationError(
            "ADMIN_ID_LIST is set but TOKEN is missing!\n"
            "Add to .env: TOKEN=<your-telegram-bot-token>, or set NOTIFY_ADMINS_MANUAL_PAYMENT=false"
        )


def validate_startup_config(config_module) -> None:
    """
    Validate all critical configuration at startup.

    Args:
        config_module: The config module to validate

    Raises:
        ConfigValidationError: If any validation fails
    """
    validate_backend_url(getattr(config_module, 'PAYMENT_BACKEND_URL', None))
    validate_session_timing(config_module)
    validate_admin_notifications(config_module)


def validate_or_exit(config_module) -> None:
    """
    Validate configuration and exit with error code 1 if validation fails.

    This is the main entry point for startup validation.

    Args:
        config_module: The config module to validate
    """
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print(f"\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nService startup aborted. Please fix configuration and try again.\n", file=sys.stderr)
        sys.exit(1)
