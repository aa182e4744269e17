import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)


def _exit_with_config_error(name: str, reason: Exception, expected: str):
    print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(name, '(not set)')}\n", file=sys.stderr)
    sys.exit(1)


def _positive_int(name: str, default: str) -> int:
    try:
        value = int(os.environ.get(name, default))
        if value <= 0:
            raise ValueError(f"{name} must be positive (got: {value})")
        return value
    except ValueError as e:
        _exit_with_config_error(name, e, f"Positive integer (default: {default})")


# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT", "DEV")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    _exit_with_config_error("RUNTIME_ENVIRONMENT", e, f"One of {', '.join(valid_values)}")

WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT")) if os.environ.get("WEBAPP_PORT") else 8000
BOT_LANGUAGE = os.environ.get("BOT_LANGUAGE", "en")  # Default to English

# Storage
DB_NAME = os.environ.get("DB_NAME", "payments.db")
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = int(os.environ.get("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD")

# Payment backend (serves POST /payment/check-status)
PAYMENT_BACKEND_URL = os.environ.get("PAYMENT_BACKEND_URL", "").rstrip("/")
PAYMENT_CHECK_TIMEOUT_SECONDS = _positive_int("PAYMENT_CHECK_TIMEOUT_SECONDS", "10")

# Payment session timing
# The countdown tick is kept slightly under one second so the displayed
# seconds never skip against the wall clock.
PAYMENT_TIMEOUT_MINUTES = _positive_int("PAYMENT_TIMEOUT_MINUTES", "10")
POLL_INTERVAL_MS = _positive_int("POLL_INTERVAL_MS", "4000")
POLL_INITIAL_DELAY_MS = _positive_int("POLL_INITIAL_DELAY_MS", "4000")
COUNTDOWN_TICK_MS = _positive_int("COUNTDOWN_TICK_MS", "900")
SUCCESS_REDIRECT_DELAY_MS = _positive_int("SUCCESS_REDIRECT_DELAY_MS", "2600")
NOT_FOUND_REDIRECT_DELAY_MS = _positive_int("NOT_FOUND_REDIRECT_DELAY_MS", "3000")
MISSING_ORDER_REDIRECT_DELAY_MS = _positive_int("MISSING_ORDER_REDIRECT_DELAY_MS", "1800")
CANCEL_REDIRECT_DELAY_MS = _positive_int("CANCEL_REDIRECT_DELAY_MS", "1000")
RESUBSCRIBE_DELAY_MS = _positive_int("RESUBSCRIBE_DELAY_MS", "3000")

# Admin notifications (Telegram). Both TOKEN and ADMIN_ID_LIST must be set
# for manual queue payments to be announced to admins.
TOKEN = os.environ.get("TOKEN")
try:
    _admin_id_list_str = os.environ.get("ADMIN_ID_LIST", "")
    ADMIN_ID_LIST = [int(admin_id.strip()) for admin_id in _admin_id_list_str.split(',') if admin_id.strip()]
except ValueError as e:
    _exit_with_config_error("ADMIN_ID_LIST", e, "Comma-separated list of Telegram user IDs, e.g. 123456789,987654321")
NOTIFY_ADMINS_MANUAL_PAYMENT = os.environ.get("NOTIFY_ADMINS_MANUAL_PAYMENT", "true") == "true"

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs

# Log Retention: Environment-specific defaults
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))

# CORS allowed origins for the storefront
WEBHOOK_CORS_ALLOWED_ORIGINS = os.environ.get("WEBHOOK_CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("WEBHOOK_CORS_ALLOWED_ORIGINS") else []
