# core/config_validator.py

from typing import List, Optional
from core.config import Settings, settings as default_settings
from core.logging_config import logger


ADMIN_CREDENTIAL_VARS = (
    "ADMIN1_EMAIL",
    "ADMIN1_PASSWORD",
    "ADMIN2_EMAIL",
    "ADMIN2_PASSWORD",
)


def validate_required_config(settings: Optional[Settings] = None) -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    settings = settings or default_settings
    missing = []

    # Required to talk to Supabase with admin rights
    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def missing_admin_credentials(settings: Optional[Settings] = None) -> List[str]:
    """
    Admin credential variables that are unset or empty.
    Any missing entry switches the setup to interactive prompts.
    """
    settings = settings or default_settings
    return [name for name in ADMIN_CREDENTIAL_VARS if not getattr(settings, name)]


def validate_config_on_startup(settings: Optional[Settings] = None):
    """
    Validate configuration before any remote call is made.
    Raises RuntimeError if critical config is missing.
    Logs which admin credentials will be prompted for.
    """
    missing_required = validate_required_config(settings)
    missing_credentials = missing_admin_credentials(settings)

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if missing_credentials:
        logger.info(
            f"Admin credentials not configured ({', '.join(missing_credentials)}); "
            "falling back to interactive prompts"
        )

    logger.info("Configuration validation passed")
