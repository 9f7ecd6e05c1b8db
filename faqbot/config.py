"""
Configuration and environment variable validation.
"""
import os
import sys

from faqbot.constants import DEFAULT_MONGO_DB_NAME
from faqbot.logger import logger


def validate_environment_variables() -> None:
    """
    Validate all required environment variables at startup.
    Exits the application with a clear error message if any are missing.
    """
    required_vars = {
        "SLACK_BOT_TOKEN": "Slack bot token for authentication",
        "SLACK_SIGNING_SECRET": "Slack signing secret for request verification",
        "MONGO_URL": "MongoDB connection URL",
    }

    optional_vars = {
        "MONGO_DB_NAME": f"MongoDB database name (defaults to {DEFAULT_MONGO_DB_NAME})",
        "FEEDBACK_FOLLOWUP_TTL_SECONDS": "Expiry for pending feedback follow-ups (0 or unset = never)",
        "ADD_FEEDBACK_REACTIONS": "Add thumbs up/down reactions to answers (defaults to true)",
        "PORT": "Server port (defaults to 3000 if not set)",
        "ENV": "Environment (prod/dev, defaults to dev if not set)",
    }

    missing_vars = []

    for var_name, description in required_vars.items():
        value = os.getenv(var_name)
        if not value or not value.strip():
            missing_vars.append(f"  - {var_name}: {description}")
            logger.error(f"Missing required environment variable: {var_name}")

    if missing_vars:
        error_message = (
            "Missing required environment variables:\n"
            + "\n".join(missing_vars)
            + "\n\nPlease set these variables before starting the application."
        )
        logger.critical(error_message)
        print(error_message, file=sys.stderr)
        sys.exit(1)

    # Log optional variables status
    for var_name, description in optional_vars.items():
        value = os.getenv(var_name)
        if not value or not value.strip():
            logger.info(f"Optional environment variable not set: {var_name} - {description}")
        else:
            logger.debug(f"Environment variable set: {var_name}")

    logger.info("Environment variable validation completed successfully")


def get_followup_ttl_seconds() -> float | None:
    """Expiry window for pending follow-ups; None means they never expire."""
    raw = os.getenv("FEEDBACK_FOLLOWUP_TTL_SECONDS", "").strip()
    if not raw:
        return None
    try:
        ttl = float(raw)
    except ValueError:
        logger.warning("Invalid FEEDBACK_FOLLOWUP_TTL_SECONDS=%r, follow-ups will not expire", raw)
        return None
    return ttl if ttl > 0 else None


def get_add_feedback_reactions() -> bool:
    raw = os.getenv("ADD_FEEDBACK_REACTIONS", "true").strip().lower()
    return raw not in ("0", "false", "no", "off")


def get_mongo_db_name() -> str:
    return os.getenv("MONGO_DB_NAME") or DEFAULT_MONGO_DB_NAME
